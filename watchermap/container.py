"""
State container holding the single current snapshot of a watcher.
"""

from typing import Any, Generic, List, TypeVar

T = TypeVar("T")


def top_level_paths(value: Any) -> List[str]:
    """Every top-level key of ``value`` as a path; list indices for a list."""
    if isinstance(value, dict):
        return [str(key) for key in value.keys()]
    if isinstance(value, list):
        return [str(index) for index in range(len(value))]
    return []


class StateContainer(Generic[T]):
    """
    Owns exactly one snapshot reference.

    Reads return the reference itself, never a copy; snapshots are replaced,
    not mutated, so handing them out is safe.
    """

    __slots__ = ("_value",)

    def __init__(self, initial_value: T):
        self._value = initial_value

    def read(self) -> T:
        return self._value

    def replace(self, value: T) -> None:
        self._value = value

    def replace_all(self, value: T) -> List[str]:
        """
        Replace the snapshot and report what may have changed.

        Whole-state replacement is treated conservatively: every top-level key
        of the new value is reported, whether or not it differs from before.
        """
        self._value = value
        return top_level_paths(value)

    def __repr__(self) -> str:
        return f"StateContainer({self._value!r})"
