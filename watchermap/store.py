"""
WatcherStore - WatcherMap with Lifecycle Hooks
==============================================

A store is a WatcherMap meant to live for the whole application, typically
at module level, and to do work only while somebody is watching it. Register
an ``on_mount`` hook to start that work when the first subscriber arrives; if
the hook returns a function, it is called when the last subscriber leaves.

```python
from watchermap import watcher_store

clock = watcher_store({"now": None})

def start_ticking():
    timer = start_timer(lambda t: clock.set_path("now", t))
    return timer.cancel

clock.on_mount(start_ticking)

unsubscribe = clock.subscribe("now", render)  # start_ticking() runs
unsubscribe()                                 # timer.cancel() runs
```
"""

from typing import Any, Callable, TypeVar

from .lifecycle import LifecycleHooks
from .paths import DEFAULT_PATH_CACHE_SIZE
from .subscribers import RegistryTransition
from .watcher_map import WatcherMap

T = TypeVar("T")


class WatcherStore(WatcherMap[T]):
    """WatcherMap that runs mount/unmount hooks as subscribers come and go."""

    def __init__(self, default_value: T, path_cache_size: int = DEFAULT_PATH_CACHE_SIZE):
        super().__init__(default_value, path_cache_size=path_cache_size)
        self._lifecycle = LifecycleHooks()

    def on_mount(self, fn: Callable[[], Any]) -> None:
        """
        Call ``fn`` whenever the store goes from no subscribers to one.

        Only one hook is kept; calling on_mount again replaces it. A callable
        returned by ``fn`` becomes the unmount hook, run once when the store
        goes back to no subscribers.
        """
        self._lifecycle.set_mount_hook(fn)

    def _on_transition(self, transition: RegistryTransition) -> None:
        self._lifecycle.handle(transition)


def watcher_store(
    default_value: T, path_cache_size: int = DEFAULT_PATH_CACHE_SIZE
) -> WatcherStore[T]:
    """Create a WatcherStore with the given initial state."""
    return WatcherStore(default_value, path_cache_size=path_cache_size)
