"""
WatcherMap - Path-Scoped Reactive State
=======================================

Reactive containers for nested values. Observers subscribe to the whole value
or to a dotted path inside it and are called only when a write touches that
path, one of its ancestors or one of its descendants. Writes are
copy-on-write, so unchanged parts of the state keep their identity.
"""

__version__ = "0.1.0"

from .batch import BatchContext, PendingEntry, TransactionCoordinator, collapse_entries
from .container import StateContainer
from .exceptions import NestedBatchError, WatcherError
from .lifecycle import LifecycleHooks
from .notify import NotificationEngine
from .paths import (
    DEFAULT_PATH_CACHE_SIZE,
    PathCache,
    delete_deep_path_clone,
    get_deep_path,
    is_path_within,
    join_path,
    set_deep_path_clone,
    split_path,
)
from .store import WatcherStore, watcher_store
from .subscribers import RegistryTransition, Subscriber, SubscriptionRegistry
from .watcher import Watcher, watcher
from .watcher_map import WatcherMap, watcher_map

__all__ = [
    # Containers
    "WatcherMap",
    "WatcherStore",
    "Watcher",
    # Factory functions
    "watcher_map",
    "watcher_store",
    "watcher",
    # Path codec
    "get_deep_path",
    "set_deep_path_clone",
    "delete_deep_path_clone",
    "split_path",
    "join_path",
    "is_path_within",
    "PathCache",
    "DEFAULT_PATH_CACHE_SIZE",
    # Engine components
    "StateContainer",
    "SubscriptionRegistry",
    "Subscriber",
    "RegistryTransition",
    "NotificationEngine",
    "TransactionCoordinator",
    "BatchContext",
    "PendingEntry",
    "collapse_entries",
    "LifecycleHooks",
    # Exceptions
    "WatcherError",
    "NestedBatchError",
]
