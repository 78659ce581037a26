"""Deferred-call queue."""

from __future__ import annotations

from backend.engine.gameplay import DeferredQueue


def test_runs_only_when_due(queue: DeferredQueue, clock) -> None:
    calls: list[str] = []
    queue.call_later(1.5, lambda: calls.append("a"))

    assert queue.run_due() == 0
    clock.advance(1.4)
    assert queue.run_due() == 0
    clock.advance(0.1)
    assert queue.run_due() == 1
    assert calls == ["a"]
    assert queue.pending == 0


def test_runs_in_due_order(queue: DeferredQueue, clock) -> None:
    calls: list[str] = []
    queue.call_later(2.0, lambda: calls.append("late"))
    queue.call_later(1.0, lambda: calls.append("early"))
    queue.call_later(1.0, lambda: calls.append("early-2"))

    clock.advance(5)
    queue.run_due()
    assert calls == ["early", "early-2", "late"]


def test_cancel_all(queue: DeferredQueue, clock) -> None:
    calls: list[str] = []
    queue.call_later(0.5, lambda: calls.append("x"))
    queue.cancel_all()
    clock.advance(1)
    assert queue.run_due() == 0
    assert calls == []


def test_time_until_next(queue: DeferredQueue, clock) -> None:
    assert queue.time_until_next() is None
    queue.call_later(1.5, lambda: None)
    clock.advance(1.0)
    assert queue.time_until_next() == 0.5
    clock.advance(3.0)
    assert queue.time_until_next() == 0.0
