"""
Notification Engine
===================

Decides which subscribers a write concerns and calls them.

Each written path must be a complete path ("todos.0.completed"), not the list
of its prefixes ("todos", "todos.0", ...). For a path-scoped subscriber a
written path is relevant when:

- the subscriber watches that path or something inside it: the watched value
  was replaced along with the written subtree, or
- the written path lies inside the watched path: something under the watched
  subtree changed.

Siblings are left alone. Relationships are decided on segments, so a write to
``todos.10`` does not concern a subscriber of ``todos.1``.

Callbacks run synchronously in registration order. Calling a mutating method
of the same watcher from inside a callback re-enters this engine and can
recurse without bound; it is not supported.
"""

import logging
from typing import Any, Dict, Iterable, List

from .paths import PathCache, Segments, get_deep_path, is_path_within
from .subscribers import Subscriber, SubscriptionRegistry

logger = logging.getLogger(__name__)


class NotificationEngine:
    """Dispatches one notification round per call to notify()."""

    def __init__(self, registry: SubscriptionRegistry, path_cache: PathCache):
        self._registry = registry
        self._path_cache = path_cache
        self._stats = {"rounds": 0, "callbacks": 0}

    def notify(self, snapshot: Any, paths: Iterable[str]) -> int:
        """
        Notify every subscriber concerned by ``paths`` exactly once.

        Args:
            snapshot: The new state
            paths: Complete dotted paths written to produce ``snapshot``

        Returns:
            Number of callbacks invoked
        """
        written = [self._path_cache.split(path) for path in paths]
        self._stats["rounds"] += 1

        invoked = 0
        for subscriber in self._registry.snapshot():
            if not subscriber.watches_path:
                subscriber.callback(snapshot)
                invoked += 1
            elif self._is_concerned(subscriber, written):
                subscriber.callback(get_deep_path(snapshot, subscriber.segments))
                invoked += 1

        self._stats["callbacks"] += invoked
        logger.debug(
            "notified %d of %d subscribers for %d written path(s)",
            invoked,
            len(self._registry),
            len(written),
        )
        return invoked

    @staticmethod
    def _is_concerned(subscriber: Subscriber, written: List[Segments]) -> bool:
        watched = subscriber.segments
        for path in written:
            # written subtree contains the watched path (exact match included)
            if is_path_within(watched, path):
                return True
            # write happened inside the watched subtree
            if is_path_within(path, watched):
                return True
        return False

    def get_stats(self) -> Dict[str, Any]:
        return self._stats.copy()
