"""
Transaction Coordinator
=======================

Batches writes so that subscribers hear about them once, at the end.

While a batch is open every mutation records a pending entry (the snapshot it
produced and the paths it wrote) instead of notifying. When the batch closes
the entries are collapsed, keeping only the most recent entry for each path
list, and the survivors are dispatched in the order they were produced.

Usage:
    def update():
        store.set_path("filter", "u1")
        store.set_path("filter", "u2")

    store.batch(update)  # "filter" subscribers called once, with "u2"

    with store.batching():
        store.set_path("filter", "u3")
        store.set_path("nextId", 4)
    # notifications sent here

Batches do not nest.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .exceptions import NestedBatchError
from .notify import NotificationEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingEntry:
    """A mutation recorded during a batch."""

    snapshot: Any
    paths: Tuple[str, ...]


def collapse_entries(entries: Sequence[PendingEntry]) -> List[PendingEntry]:
    """
    Keep the last entry for each path list, preserving production order.

    Path lists are compared as given, not reordered: ``("a", "b")`` and
    ``("b", "a")`` are different writes.
    """
    seen = set()
    survivors = []
    for entry in reversed(entries):
        if entry.paths in seen:
            continue
        seen.add(entry.paths)
        survivors.append(entry)
    survivors.reverse()
    return survivors


class TransactionCoordinator:
    """Routes notifications either straight to the engine or into the open batch."""

    def __init__(self, engine: NotificationEngine):
        self._engine = engine
        self._pending: Optional[List[PendingEntry]] = None
        self._batch_count = 0

    @property
    def is_batching(self) -> bool:
        return self._pending is not None

    @property
    def batch_count(self) -> int:
        return self._batch_count

    def dispatch(self, snapshot: Any, paths: Sequence[str]) -> None:
        """Notify now, or defer until the open batch closes."""
        if self._pending is not None:
            self._pending.append(PendingEntry(snapshot, tuple(paths)))
            return
        self._engine.notify(snapshot, paths)

    def batch(self, fn: Callable[[], Any]) -> None:
        """
        Run ``fn`` with notifications deferred and coalesced.

        Raises:
            NestedBatchError: If a batch is already open
        """
        with self.batching():
            fn()

    def batching(self) -> "BatchContext":
        """Context manager form of batch()."""
        return BatchContext(self)

    def _open(self) -> None:
        if self._pending is not None:
            raise NestedBatchError("Cannot batch updates inside a batch")
        self._pending = []
        self._batch_count += 1
        logger.debug("batch opened")

    def _close(self) -> None:
        entries = self._pending or []
        self._pending = None

        survivors = collapse_entries(entries)
        logger.debug(
            "batch closed: %d write(s) collapsed to %d notification round(s)",
            len(entries),
            len(survivors),
        )
        for entry in survivors:
            self._engine.notify(entry.snapshot, entry.paths)


class BatchContext:
    """Context manager for batch updates."""

    def __init__(self, coordinator: TransactionCoordinator):
        self.coordinator = coordinator

    def __enter__(self):
        self.coordinator._open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # flushes even when the batch body raised
        self.coordinator._close()
        return False
