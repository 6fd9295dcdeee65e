"""Unit tests for cooperative cancellation primitives.

Covers idempotent cancel, cascade to children, late link of child after
parent cancel, raise_if_cancelled behavior and the awaitable ``wait``.
"""
from __future__ import annotations

import asyncio

import pytest

from relay_providers.base.cancellation import CancellationToken, CancelledError
from relay_providers.base.errors import ErrorCode, TransportError
from relay_providers.base.transport._cancel import run_cancellable


def test_cancel_cascades_to_children_and_is_idempotent():
    parent = CancellationToken()
    child1 = parent.child()
    child2 = parent.child()

    parent.cancel(reason="stop")
    parent.cancel(reason="ignored")

    assert parent.cancelled is True and parent.reason == "stop"  # nosec B101
    assert child1.cancelled is True and child1.reason == "stop"  # nosec B101
    assert child2.cancelled is True and child2.reason == "stop"  # nosec B101


def test_link_child_after_parent_cancel_immediately_cancels_child():
    parent = CancellationToken()
    parent.cancel("done")
    late_child = CancellationToken(parent=parent)
    assert late_child.cancelled is True and late_child.reason == "done"  # nosec B101


def test_raise_if_cancelled_raises_transport_flavoured_error():
    token = CancellationToken()
    token.cancel("terminate")
    with pytest.raises(TransportError) as info:
        token.raise_if_cancelled()
    assert isinstance(info.value, CancelledError)  # nosec B101
    assert info.value.status == 0 and info.value.code is ErrorCode.CANCELLED  # nosec B101


@pytest.mark.asyncio
async def test_wait_resolves_after_cancel():
    token = CancellationToken()
    waiter = asyncio.ensure_future(token.wait())
    await asyncio.sleep(0)
    assert not waiter.done()  # nosec B101
    token.cancel("later")
    await asyncio.wait_for(waiter, timeout=1)


@pytest.mark.asyncio
async def test_wait_returns_immediately_when_already_cancelled():
    token = CancellationToken()
    token.cancel()
    await asyncio.wait_for(token.wait(), timeout=1)


@pytest.mark.asyncio
async def test_run_cancellable_cancels_inflight_call():
    token = CancellationToken()
    started = asyncio.Event()
    finished = []

    async def slow():
        started.set()
        try:
            await asyncio.sleep(10)
        finally:
            finished.append(True)

    task = asyncio.ensure_future(run_cancellable(slow(), token))
    await started.wait()
    token.cancel("abort")
    with pytest.raises(CancelledError):
        await task
    assert finished == [True]  # nosec B101


@pytest.mark.asyncio
async def test_run_cancellable_returns_result_without_token():
    async def value():
        return 42

    assert await run_cancellable(value(), None) == 42  # nosec B101
    assert await run_cancellable(value(), CancellationToken()) == 42  # nosec B101


def test_detached_children_are_released_and_no_longer_cascade():
    parent = CancellationToken()
    children = [parent.child() for _ in range(50)]
    for child in children:
        child.detach()
    assert parent._state.children == []  # nosec B101

    parent.cancel("late")
    assert not any(c.cancelled for c in children)  # nosec B101


def test_unlink_child_is_a_noop_for_foreign_tokens():
    parent = CancellationToken()
    other = CancellationToken()
    kept = parent.child()
    parent.unlink_child(other)
    other.detach()
    assert parent._state.children == [kept]  # nosec B101
