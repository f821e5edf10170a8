"""
Watcher - a reactive container for a single value.

The path-free sibling of WatcherMap, for flags and other primitives:

    is_submitting = watcher(False)
    unsubscribe = is_submitting.subscribe(print)
    is_submitting.set_state(True)  # prints True
"""

from typing import Any, Callable, Generic, TypeVar

from .container import StateContainer
from .subscribers import SubscriptionRegistry

T = TypeVar("T")


class Watcher(Generic[T]):
    """Holds one value; every set_state() notifies every subscriber."""

    def __init__(self, default_value: T):
        self._state: StateContainer[T] = StateContainer(default_value)
        self._registry = SubscriptionRegistry()

    def get_state(self) -> T:
        return self._state.read()

    def set_state(self, value: T) -> None:
        self._state.replace(value)
        for subscriber in self._registry.snapshot():
            subscriber.callback(value)

    def subscribe(self, callback: Callable[[T], Any]) -> Callable[[], None]:
        self.add_subscriber(callback)

        def unsubscribe() -> None:
            self.remove_subscriber(callback)

        return unsubscribe

    def add_subscriber(self, callback: Callable[[T], Any]) -> None:
        self._registry.add(callback)

    def remove_subscriber(self, callback: Callable[[T], Any]) -> None:
        self._registry.remove(callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._registry)

    def __repr__(self) -> str:
        return f"Watcher({self._state.read()!r})"


def watcher(default_value: T) -> Watcher[T]:
    """Create a Watcher with the given initial value."""
    return Watcher(default_value)
