"""
Mount/unmount hooks for the store variant.
"""

import logging
from typing import Any, Callable, Optional

from .subscribers import RegistryTransition

logger = logging.getLogger(__name__)


class LifecycleHooks:
    """
    Runs the mount hook when the first subscriber arrives and the unmount hook
    it returned when the last one leaves.

    Only one mount hook is kept; registering another replaces it.
    """

    __slots__ = ("_on_mount", "_on_unmount")

    def __init__(self):
        self._on_mount: Optional[Callable[[], Any]] = None
        self._on_unmount: Optional[Callable[[], Any]] = None

    def set_mount_hook(self, fn: Callable[[], Any]) -> None:
        self._on_mount = fn

    def handle(self, transition: RegistryTransition) -> None:
        if transition is RegistryTransition.MOUNT:
            self.mount()
        elif transition is RegistryTransition.UNMOUNT:
            self.unmount()

    def mount(self) -> None:
        if not callable(self._on_mount):
            return
        logger.debug("mounting")
        result = self._on_mount()
        if callable(result):
            self._on_unmount = result

    def unmount(self) -> None:
        on_unmount, self._on_unmount = self._on_unmount, None
        if on_unmount is not None:
            logger.debug("unmounting")
            on_unmount()
