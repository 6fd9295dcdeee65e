"""ChatRunner tests: turn parameters, cancellation and streamed events."""
from __future__ import annotations

import asyncio

import pytest

from relay_providers.base.cancellation import CancellationToken, CancelledError
from relay_providers.base.errors import TransportError
from relay_providers.base.models import Message
from relay_providers.base.streaming import StreamEventKind, accumulate_events
from relay_providers.service import ChatRunner, ModelListCache, ProviderManager, TurnOptions
from relay_providers.tests.fakes import RecordingTransport, make_credential, ok, secret_store_with, sse

REPLY = ok({"choices": [{"message": {"content": "hi there"}}]})
MESSAGES = [Message("user", "hello")]


def _runner(transport, options=None):
    manager = ProviderManager(
        transport=transport,
        secret_store=secret_store_with("openai", "sk-1"),
        cache=ModelListCache(),
    )
    return ChatRunner(manager, options)


def _frame(text):
    return sse({"choices": [{"delta": {"content": text}}]})


async def _collect(agen):
    return [event async for event in agen]


@pytest.mark.asyncio
async def test_send_turn_applies_default_sampling():
    transport = RecordingTransport(REPLY)
    result = await _runner(transport).send_turn(make_credential(default_model="gpt-4o-mini"), MESSAGES)

    body = transport.requests[0].body
    assert result.text == "hi there"  # nosec B101
    assert body["model"] == "gpt-4o-mini"  # nosec B101
    assert (body["max_tokens"], body["temperature"], body["top_p"]) == (1024, 0.7, 1.0)  # nosec B101
    assert body["stream"] is False  # nosec B101


@pytest.mark.asyncio
async def test_send_turn_with_delta_handler_streams_and_honours_overrides():
    transport = RecordingTransport(([_frame("a"), _frame("b")], ok("")))
    deltas = []
    result = await _runner(transport, TurnOptions(max_tokens=None, temperature=0.1)).send_turn(
        make_credential(default_model="gpt-4o-mini"),
        MESSAGES,
        system="be nice",
        model="gpt-4o",
        on_delta=deltas.append,
    )

    body = transport.requests[0].body
    assert deltas == ["a", "b"] and result.text == "ab"  # nosec B101
    assert body["model"] == "gpt-4o" and body["stream"] is True  # nosec B101
    assert "max_tokens" not in body and body["temperature"] == 0.1  # nosec B101
    assert body["messages"][0] == {"role": "system", "content": "be nice"}  # nosec B101


@pytest.mark.asyncio
async def test_model_is_resolved_from_listing_when_unset():
    transport = RecordingTransport(ok({"data": [{"id": "listed-model"}]}), REPLY)
    await _runner(transport).send_turn(make_credential(), MESSAGES)
    assert [r.method for r in transport.requests] == ["GET", "POST"]  # nosec B101
    assert transport.requests[1].body["model"] == "listed-model"  # nosec B101


@pytest.mark.asyncio
async def test_already_cancelled_turn_makes_no_network_call():
    token = CancellationToken()
    token.cancel("user stop")
    transport = RecordingTransport()
    with pytest.raises(CancelledError):
        await _runner(transport).send_turn(make_credential(), MESSAGES, cancel_token=token)
    assert transport.calls == 0  # nosec B101


@pytest.mark.asyncio
async def test_send_turn_propagates_errors():
    transport = RecordingTransport(TransportError.from_body(429, "slow down"))
    with pytest.raises(TransportError) as info:
        await _runner(transport).send_turn(make_credential(default_model="m"), MESSAGES)
    assert info.value.code.value == "rate_limit"  # nosec B101


@pytest.mark.asyncio
async def test_stream_turn_splits_reasoning_from_text():
    chunks = [_frame("<thi"), _frame("nk>plan</think>Hel"), _frame("lo")]
    transport = RecordingTransport((chunks, ok("".join(chunks))))
    events = await _collect(
        _runner(transport).stream_turn(make_credential(default_model="gpt-4o-mini"), MESSAGES)
    )

    kinds = [e.kind for e in events]
    assert kinds == [  # nosec B101
        StreamEventKind.REASONING,
        StreamEventKind.TEXT,
        StreamEventKind.TEXT,
        StreamEventKind.DONE,
    ]
    done = events[-1]
    assert done.result.text == "Hello" and done.reasoning == "plan"  # nosec B101
    assert {e.model for e in events} == {"gpt-4o-mini"}  # nosec B101

    outcome = accumulate_events(events)
    assert outcome.ok and outcome.text == "Hello" and outcome.reasoning == "plan"  # nosec B101


@pytest.mark.asyncio
async def test_stream_turn_reports_provider_errors_as_event():
    transport = RecordingTransport(TransportError.from_body(500, "boom"))
    events = await _collect(_runner(transport).stream_turn(make_credential(default_model="m"), MESSAGES))
    assert len(events) == 1  # nosec B101
    assert events[0].kind is StreamEventKind.ERROR  # nosec B101
    assert events[0].error == "HTTP 500: boom" and events[0].error_code == "server_error"  # nosec B101


@pytest.mark.asyncio
async def test_stream_turn_unknown_provider_is_error_event():
    events = await _collect(_runner(RecordingTransport()).stream_turn(make_credential("mystery"), MESSAGES))
    assert [e.kind for e in events] == [StreamEventKind.ERROR]  # nosec B101
    assert events[0].error_code == "config"  # nosec B101


class StallingTransport:
    """Emits one frame, then waits until cancelled."""

    def __init__(self) -> None:
        self.token = None

    async def request(self, req, on_stream_chunk=None, cancel_token=None):
        self.token = cancel_token
        on_stream_chunk(_frame("first"))
        await asyncio.Event().wait()


@pytest.mark.asyncio
async def test_closing_stream_early_cancels_the_turn():
    transport = StallingTransport()
    caller_token = CancellationToken()
    agen = _runner(transport).stream_turn(
        make_credential(default_model="m"), MESSAGES, cancel_token=caller_token
    )

    first = await agen.__anext__()
    await agen.aclose()

    assert first.kind is StreamEventKind.TEXT and first.text == "first"  # nosec B101
    assert transport.token.cancelled and transport.token.reason == "stream closed"  # nosec B101
    assert not caller_token.cancelled  # nosec B101


@pytest.mark.asyncio
async def test_configured_default_model_skips_listing(monkeypatch):
    monkeypatch.setenv("OPENAI_MODEL", "env-model")
    transport = RecordingTransport(REPLY)
    await _runner(transport).send_turn(make_credential(), MESSAGES)
    assert transport.calls == 1  # nosec B101
    assert transport.requests[0].body["model"] == "env-model"  # nosec B101


@pytest.mark.asyncio
async def test_finished_turns_do_not_accumulate_on_caller_token():
    session = CancellationToken()
    for _ in range(3):
        transport = RecordingTransport(REPLY)
        await _collect(
            _runner(transport).stream_turn(make_credential(default_model="m"), MESSAGES, cancel_token=session)
        )
    assert session._state.children == []  # nosec B101


@pytest.mark.asyncio
async def test_closed_stream_releases_its_token_from_the_caller():
    session = CancellationToken()
    agen = _runner(StallingTransport()).stream_turn(make_credential(default_model="m"), MESSAGES, cancel_token=session)
    await agen.__anext__()
    await agen.aclose()
    assert session._state.children == []  # nosec B101
