"""Tests for the single-value Watcher."""

import pytest

from watchermap import Watcher, watcher


def test_watcher_returns_initial_value():
    """Test that a Watcher exposes its initial value."""
    flag = watcher(True)
    assert flag.get_state() is True
    assert isinstance(flag, Watcher)


def test_watcher_subscription_callback_receives_new_value():
    """Test that subscribers are called with the value passed to set_state."""
    count = watcher(0)
    received_value = None

    def callback(value):
        nonlocal received_value
        received_value = value

    count.subscribe(callback)
    count.set_state(5)

    assert received_value == 5
    assert count.get_state() == 5


def test_watcher_notifies_every_subscriber_on_every_set():
    """Test that a Watcher has no change detection of its own."""
    count = watcher(0)
    call_count = 0

    def callback1(value):
        nonlocal call_count
        call_count += 1

    def callback2(value):
        nonlocal call_count
        call_count += 10

    count.subscribe(callback1)
    count.subscribe(callback2)

    count.set_state(0)
    assert call_count == 11


def test_watcher_unsubscribe_removes_callback():
    """Test that the function returned by subscribe detaches the callback."""
    name = watcher("a")
    calls = []

    unsubscribe = name.subscribe(calls.append)
    name.set_state("b")
    unsubscribe()
    name.set_state("c")

    assert calls == ["b"]
    assert name.subscriber_count == 0


def test_watcher_ignores_duplicate_subscription():
    """Test that subscribing the same callback twice registers it once."""
    value = watcher(None)
    calls = []

    value.add_subscriber(calls.append)
    value.add_subscriber(calls.append)
    value.set_state(1)

    assert calls == [1]


def test_watcher_remove_nonexistent_subscriber():
    """Test that removing an unknown callback doesn't cause errors."""
    value = watcher(None)
    value.remove_subscriber(lambda v: None)
