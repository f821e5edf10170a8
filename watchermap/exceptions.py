"""
WatcherMap exceptions.
"""


class WatcherError(Exception):
    """Base exception for watchermap errors."""

    pass


class NestedBatchError(WatcherError, RuntimeError):
    """Raised when batch() is called while a batch is already open."""

    pass
