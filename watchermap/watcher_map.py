"""
WatcherMap - Path-Aware Reactive State Container
================================================

A WatcherMap holds one nested value (dicts and lists down to primitives) and
lets observers subscribe either to the whole value or to a single dotted path
inside it. Writes are copy-on-write, so a subscriber's value keeps its
identity until something at, above or below its path is written.

Basic Usage
-----------

```python
from watchermap import watcher_map

todos = watcher_map({
    "todos": [{"text": "Learn Python", "completed": False}],
    "filter": "all",
})

unsubscribe = todos.subscribe("todos.0.completed", print)

todos.set_path("todos.0.completed", True)  # prints True
todos.set_path("filter", "done")           # unrelated, prints nothing

unsubscribe()
```

Binding Contract
----------------

A UI binding subscribes with ``subscribe()``, calls the returned function
exactly once on teardown, reads with ``get_state()``/``get_path()`` (or the
zero-argument getters from ``get_snapshot``/``path_getter()``) and treats a
change of identity between two reads as the only "changed" signal; never
compare snapshots by equality.

Callbacks must not write to the watcher that is notifying them: doing so
re-enters notification and can recurse forever.
"""

import copy
from typing import Any, Callable, Dict, Generic, Optional, TypeVar, Union

from .batch import BatchContext, TransactionCoordinator
from .container import StateContainer, top_level_paths
from .notify import NotificationEngine
from .paths import (
    DEFAULT_PATH_CACHE_SIZE,
    PathCache,
    PathLike,
    delete_deep_path_clone,
    get_deep_path,
    join_path,
    set_deep_path_clone,
)
from .subscribers import RegistryTransition, SubscriptionRegistry

T = TypeVar("T")

Callback = Callable[[Any], Any]
Unsubscribe = Callable[[], None]


class WatcherMap(Generic[T]):
    """
    Reactive container for a nested value with path-scoped subscriptions.

    Args:
        default_value: The initial state
        path_cache_size: How many distinct path strings to keep split in the
            LRU path cache
    """

    def __init__(self, default_value: T, path_cache_size: int = DEFAULT_PATH_CACHE_SIZE):
        self._state: StateContainer[T] = StateContainer(default_value)
        self._path_cache = PathCache(maxsize=path_cache_size)
        self._registry = SubscriptionRegistry()
        self._engine = NotificationEngine(self._registry, self._path_cache)
        self._transactions = TransactionCoordinator(self._engine)

    # --- reads ---

    def get_state(self) -> T:
        """The current state, by reference."""
        return self._state.read()

    def get_snapshot(self) -> T:
        return self._state.read()

    def get_path(self, path: PathLike, default: Any = None) -> Any:
        """Value at ``path``, or ``default`` if nothing is there."""
        value = get_deep_path(self._state.read(), self._path_cache.split(path))
        return default if value is None else value

    def path_getter(self, path: PathLike) -> Callable[[], Any]:
        """A zero-argument snapshot function always reading ``path``."""
        segments = self._path_cache.split(path)
        return lambda: get_deep_path(self._state.read(), segments)

    # --- writes ---

    def set_state(self, value: T) -> None:
        """
        Replace the entire state.

        Subscribers of every top-level key are notified, changed or not.
        """
        paths = self._state.replace_all(value)
        self._transactions.dispatch(value, paths)

    def set_path(self, path: PathLike, value: Any) -> None:
        """
        Write ``value`` at ``path``, creating missing containers on the way.

        Raises:
            TypeError: If a non-numeric segment addresses an existing list
        """
        segments = self._path_cache.split(path)
        if not segments:
            return

        state = self._state.read()
        new_state = set_deep_path_clone({} if state is None else state, segments, value)
        self._state.replace(new_state)
        self._transactions.dispatch(new_state, [join_path(*segments)])

    def clear_path(self, path: PathLike, remove_empty_ancestors: bool = False) -> None:
        """
        Delete whatever is at ``path``.

        Nothing is notified when the path did not exist. With
        ``remove_empty_ancestors`` containers emptied by the deletion are
        removed too.
        """
        state = self._state.read()
        if state is None:
            return

        segments = self._path_cache.split(path)
        new_state = delete_deep_path_clone(state, segments, remove_empty_ancestors)
        if new_state is state:
            return

        self._state.replace(new_state)
        self._transactions.dispatch(new_state, [join_path(*segments)])

    def merge_paths(self, values: Dict[str, Any]) -> None:
        """
        Shallow-merge ``values`` into the top level of the state.

        Nested dicts are replaced, not merged recursively:

            store.set_state({"a": {"b": "example"}})
            store.merge_paths({"a": {"c": "new value"}})
            store.get_path("a")  # {"c": "new value"}
        """
        state = self._state.read()
        new_state = copy.copy(state) if isinstance(state, dict) else {}
        new_state.update(values)
        self._state.replace(new_state)
        self._transactions.dispatch(new_state, top_level_paths(values))

    # --- batching ---

    def batch(self, fn: Callable[[], Any]) -> None:
        """
        Run ``fn``, deferring notifications until it returns.

        Repeated writes to the same path inside ``fn`` produce one
        notification carrying the final value.

        Raises:
            NestedBatchError: If called while a batch is already open
        """
        self._transactions.batch(fn)

    def batching(self) -> BatchContext:
        """``with store.batching(): ...`` form of batch()."""
        return self._transactions.batching()

    @property
    def is_batching(self) -> bool:
        return self._transactions.is_batching

    # --- subscriptions ---

    def subscribe(
        self, path_or_callback: Union[PathLike, Callback], callback: Optional[Callback] = None
    ) -> Unsubscribe:
        """
        Subscribe to the whole state or to one path.

            unsubscribe = store.subscribe(on_state)
            unsubscribe = store.subscribe("todos.0.tags", on_tags)

        Returns:
            A function removing the subscription
        """
        if callback is None:
            if not callable(path_or_callback):
                raise TypeError("subscribe() needs a callback")
            callback, path = path_or_callback, None
        else:
            path = path_or_callback

        self.add_subscriber(callback, path)

        def unsubscribe() -> None:
            self.remove_subscriber(callback)

        return unsubscribe

    def add_subscriber(self, callback: Callback, path: Optional[PathLike] = None) -> None:
        """Register ``callback``; a callback already registered is left as is."""
        if path is not None and not isinstance(path, str):
            path = join_path(*path)
        if not path:
            path = None

        segments = self._path_cache.split(path) if path is not None else ()
        self._on_transition(self._registry.add(callback, path, segments))

    def remove_subscriber(self, callback: Callback) -> None:
        self._on_transition(self._registry.remove(callback))

    def _on_transition(self, transition: RegistryTransition) -> None:
        """Hook for subclasses reacting to the first/last subscriber."""
        pass

    @property
    def subscriber_count(self) -> int:
        return len(self._registry)

    def get_stats(self) -> Dict[str, Any]:
        """Counters describing subscriptions, notifications and the path cache."""
        engine_stats = self._engine.get_stats()
        cache_stats = self._path_cache.get_stats()
        return {
            "subscribers": len(self._registry),
            "notification_rounds": engine_stats["rounds"],
            "callbacks_invoked": engine_stats["callbacks"],
            "batches": self._transactions.batch_count,
            "path_cache_size": cache_stats["cache_size"],
            "path_cache_hit_rate": cache_stats["cache_hit_rate"],
        }

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(state={self._state.read()!r}, "
            f"subscribers={len(self._registry)})"
        )


def watcher_map(
    default_value: T, path_cache_size: int = DEFAULT_PATH_CACHE_SIZE
) -> WatcherMap[T]:
    """
    Create a WatcherMap.

    Args:
        default_value: The initial state
        path_cache_size: Size of the LRU cache of split paths

    Returns:
        Configured WatcherMap instance
    """
    return WatcherMap(default_value, path_cache_size=path_cache_size)
