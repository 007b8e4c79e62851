"""Tests for the event hooks."""

import threading
from typing import Any

import pytest

from launchpad.events import EventHook, EventType


@pytest.fixture
def hook() -> EventHook:
    """Create a fresh hook for each test."""
    return EventHook(EventType.CHANGELOG_DOWNLOAD_FINISHED)


def test_callback_receives_sender_and_args(hook: EventHook) -> None:
    """Test that callbacks get the sender and payload unchanged."""
    received: list[tuple[Any, Any]] = []
    sender = object()
    payload = {"html": "<p>notes</p>"}

    hook.add_callback(lambda s, a: received.append((s, a)))
    hook.emit(sender, payload)

    assert received == [(sender, payload)]
    assert received[0][1] is payload


def test_multiple_subscribers_in_order(hook: EventHook) -> None:
    """Test that every subscriber is called, in subscription order."""
    calls: list[str] = []

    hook.add_callback(lambda s, a: calls.append("first"))
    hook.add_callback(lambda s, a: calls.append("second"))
    hook.add_callback(lambda s, a: calls.append("third"))

    assert hook.subscriber_count == 3

    hook.emit(None, None)

    assert calls == ["first", "second", "third"]


def test_remove_callback(hook: EventHook) -> None:
    """Test that removed callbacks are no longer called."""
    calls: list[Any] = []

    def callback(sender: Any, args: Any) -> None:
        calls.append(args)

    hook.add_callback(callback)
    hook.emit(None, 1)
    hook.remove_callback(callback)
    hook.emit(None, 2)

    assert calls == [1]
    assert hook.subscriber_count == 0


def test_remove_unknown_callback_is_ignored(hook: EventHook) -> None:
    """Test that removing a callback that was never added does nothing."""
    hook.remove_callback(lambda s, a: None)

    assert hook.subscriber_count == 0


def test_operator_subscription(hook: EventHook) -> None:
    """Test += and -= as shorthand for add/remove."""
    calls: list[Any] = []

    def callback(sender: Any, args: Any) -> None:
        calls.append(args)

    hook += callback
    hook.emit(None, "a")
    hook -= callback
    hook.emit(None, "b")

    assert calls == ["a"]


def test_failing_callback_does_not_stop_others(hook: EventHook) -> None:
    """Test that one failing subscriber does not block the rest."""
    calls: list[str] = []

    def broken(sender: Any, args: Any) -> None:
        raise ValueError("subscriber bug")

    hook.add_callback(broken)
    hook.add_callback(lambda s, a: calls.append("after"))

    hook.emit(None, None)

    assert calls == ["after"]


def test_emit_runs_on_calling_thread(hook: EventHook) -> None:
    """Test that callbacks run synchronously on the emitting thread."""
    thread_names: list[str] = []
    hook.add_callback(lambda s, a: thread_names.append(threading.current_thread().name))

    worker = threading.Thread(target=hook.emit, args=(None, None), name="EmitterThread")
    worker.start()
    worker.join()

    assert thread_names == ["EmitterThread"]


def test_event_type_values() -> None:
    """Test that EventType enum has expected values."""
    assert EventType.LAUNCHER_DOWNLOAD_PROGRESS_CHANGED.value == "launcher.download_progress_changed"
    assert EventType.LAUNCHER_DOWNLOAD_FINISHED.value == "launcher.download_finished"
    assert EventType.CHANGELOG_DOWNLOAD_FINISHED.value == "changelog.download_finished"


def test_subscriber_count_waits_for_lock(hook: EventHook) -> None:
    """Test that subscriber_count reads under the same lock as add/remove."""
    hook.add_callback(lambda s, a: None)
    counts: list[int] = []

    with hook._lock:
        reader = threading.Thread(target=lambda: counts.append(hook.subscriber_count))
        reader.start()
        reader.join(0.1)
        assert reader.is_alive()
        assert counts == []

    reader.join(5.0)
    assert counts == [1]


def test_subscriber_count_with_concurrent_subscribers(hook: EventHook) -> None:
    """Test that callbacks added from many threads are all counted."""
    callbacks = [lambda s, a: None for _ in range(50)]
    workers = [threading.Thread(target=hook.add_callback, args=(cb,)) for cb in callbacks]

    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    assert hook.subscriber_count == 50
