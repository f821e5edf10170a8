"""
Subscription Registry
=====================

Keeps the ordered list of subscribers of a watcher. A subscriber is its
callback plus an optional watched path; without a path it watches the whole
state.

The registry reports when it goes from empty to non-empty (MOUNT) and back
(UNMOUNT) so that the store variant can run its lifecycle hooks.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional

from .paths import Segments


class RegistryTransition(Enum):
    """Occupancy transitions reported by add() and remove()."""

    NONE = "none"
    MOUNT = "mount"
    UNMOUNT = "unmount"


@dataclass
class Subscriber:
    """
    A registered observer.

    Attributes:
        callback: Called with the watched value; also the subscriber's identity
        path: Dotted path being watched, None for the whole state
        segments: ``path`` split into segments, empty for the whole state
    """

    callback: Callable[[Any], Any]
    path: Optional[str] = None
    segments: Segments = field(default=())

    @property
    def watches_path(self) -> bool:
        return self.path is not None

    def __repr__(self):
        name = getattr(self.callback, "__name__", repr(self.callback))
        if self.path is None:
            return f"Subscriber({name})"
        return f"Subscriber({name} @ {self.path!r})"


class SubscriptionRegistry:
    """
    Ordered, identity-deduplicated collection of subscribers.

    Identity is callback equality, so two bound methods of the same object
    and function count as one subscriber.
    """

    def __init__(self):
        self._subscribers: List[Subscriber] = []

    def add(
        self,
        callback: Callable[[Any], Any],
        path: Optional[str] = None,
        segments: Segments = (),
    ) -> RegistryTransition:
        """
        Register a callback, optionally scoped to a path.

        Adding a callback that is already registered changes nothing.

        Returns:
            MOUNT if the registry was empty before this call, otherwise NONE
        """
        was_empty = not self._subscribers
        if self.contains(callback):
            return RegistryTransition.NONE

        self._subscribers.append(Subscriber(callback, path, segments))
        return RegistryTransition.MOUNT if was_empty else RegistryTransition.NONE

    def remove(self, callback: Callable[[Any], Any]) -> RegistryTransition:
        """
        Unregister a callback. Unknown callbacks are ignored.

        Returns:
            UNMOUNT if this call removed the last subscriber, otherwise NONE
        """
        before = len(self._subscribers)
        self._subscribers = [
            sub for sub in self._subscribers if sub.callback != callback
        ]
        if before > 0 and not self._subscribers:
            return RegistryTransition.UNMOUNT
        return RegistryTransition.NONE

    def contains(self, callback: Callable[[Any], Any]) -> bool:
        return any(sub.callback == callback for sub in self._subscribers)

    def snapshot(self) -> List[Subscriber]:
        """Copy of the current subscribers, safe to iterate while callbacks unsubscribe."""
        return list(self._subscribers)

    def __len__(self) -> int:
        return len(self._subscribers)

    def __iter__(self):
        return iter(self.snapshot())

    def __bool__(self) -> bool:
        return bool(self._subscribers)
