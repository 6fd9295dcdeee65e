"""DelegatedTransport tests with a scripted host bridge.

The per-request channel subscription must be released on success, on error
and on cancellation.
"""
from __future__ import annotations

import asyncio

import pytest

from relay_providers.base.cancellation import CancellationToken, CancelledError
from relay_providers.base.errors import TransportError
from relay_providers.base.models import HttpRequest
from relay_providers.base.transport import DelegatedTransport, select_transport, stream_channel
from relay_providers.base.transport import DirectTransport
from relay_providers.tests.fakes import FakeHostBridge

STREAM_REQ = HttpRequest(url="https://api.example.com/v1/chat/completions", body={"x": 1}, stream=True)


def _ids():
    return "req-1"


@pytest.mark.asyncio
async def test_chunks_forwarded_in_order_and_subscription_released():
    async def on_request(bridge, command, payload):
        assert bridge.listeners.get(stream_channel("req-1"))  # nosec B101
        for chunk in ("da", "ta: 1\n", "data: 2\n"):
            bridge.push(stream_channel(payload["requestId"]), chunk)
        return {"status": 200, "ok": True, "headers": {}, "data": "data: 1\ndata: 2\n"}

    bridge = FakeHostBridge(on_request)
    chunks = []
    resp = await DelegatedTransport(bridge, id_factory=_ids).request(STREAM_REQ, chunks.append)

    assert chunks == ["da", "ta: 1\n", "data: 2\n"]  # nosec B101
    assert resp.status == 200 and resp.data == "data: 1\ndata: 2\n"  # nosec B101
    assert bridge.listen_calls == 1 and bridge.unlisten_calls == 1  # nosec B101
    assert bridge.listeners == {}  # nosec B101
    command, payload = bridge.invocations[0]
    assert command == "api_request"  # nosec B101
    assert payload["requestId"] == "req-1" and payload["stream"] is True  # nosec B101
    assert payload["body"] == {"x": 1} and payload["url"] == STREAM_REQ.url  # nosec B101


@pytest.mark.asyncio
async def test_non_ok_response_raises_and_releases_subscription():
    async def on_request(bridge, command, payload):
        return {"status": 401, "ok": False, "data": {"error": "bad key"}}

    bridge = FakeHostBridge(on_request)
    with pytest.raises(TransportError) as info:
        await DelegatedTransport(bridge, id_factory=_ids).request(STREAM_REQ, lambda c: None)
    assert info.value.status == 401  # nosec B101
    assert info.value.message == 'HTTP 401: {"error": "bad key"}'  # nosec B101
    assert bridge.unlisten_calls == 1 and bridge.listeners == {}  # nosec B101


@pytest.mark.asyncio
async def test_host_failure_becomes_status_zero_and_releases_subscription():
    async def on_request(bridge, command, payload):
        raise RuntimeError("host crashed")

    bridge = FakeHostBridge(on_request)
    with pytest.raises(TransportError) as info:
        await DelegatedTransport(bridge, id_factory=_ids).request(STREAM_REQ, lambda c: None)
    assert info.value.status == 0  # nosec B101
    assert info.value.message == "Request failed: host crashed"  # nosec B101
    assert bridge.unlisten_calls == 1  # nosec B101


@pytest.mark.asyncio
async def test_cancellation_after_dispatch_sends_abort_and_stops_chunks():
    token = CancellationToken()
    release = asyncio.Event()

    async def on_request(bridge, command, payload):
        bridge.push(stream_channel("req-1"), "data: early\n")
        token.cancel("user stop")
        bridge.push(stream_channel("req-1"), "data: late\n")
        await release.wait()
        return {"status": 200, "ok": True, "data": ""}

    bridge = FakeHostBridge(on_request)
    chunks = []
    with pytest.raises(CancelledError):
        await DelegatedTransport(bridge, id_factory=_ids).request(STREAM_REQ, chunks.append, token)
    assert chunks == ["data: early\n"]  # nosec B101
    assert bridge.commands() == ["api_request", "abort_request"]  # nosec B101
    assert bridge.invocations[1][1] == {"requestId": "req-1"}  # nosec B101
    assert bridge.unlisten_calls == 1 and bridge.listeners == {}  # nosec B101


@pytest.mark.asyncio
async def test_cancelled_before_dispatch_never_invokes_host():
    bridge = FakeHostBridge()
    token = CancellationToken()
    token.cancel()
    with pytest.raises(CancelledError):
        await DelegatedTransport(bridge).request(STREAM_REQ, lambda c: None, token)
    assert bridge.invocations == [] and bridge.listen_calls == 0  # nosec B101


@pytest.mark.asyncio
async def test_non_streaming_request_does_not_subscribe():
    async def on_request(bridge, command, payload):
        return {"status": 200, "data": '{"choices": []}'}

    bridge = FakeHostBridge(on_request)
    resp = await DelegatedTransport(bridge).request(HttpRequest(url="https://x.test/"))
    assert resp.ok and resp.data == {"choices": []}  # nosec B101
    assert bridge.listen_calls == 0  # nosec B101
    assert bridge.invocations[0][1]["requestId"] is None  # nosec B101


def test_select_transport(monkeypatch):
    bridge = FakeHostBridge()
    assert isinstance(select_transport(), DirectTransport)  # nosec B101
    assert isinstance(select_transport(bridge), DelegatedTransport)  # nosec B101
    monkeypatch.setenv("RELAY_TRANSPORT", "direct")
    assert isinstance(select_transport(bridge), DirectTransport)  # nosec B101
