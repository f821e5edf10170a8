"""
Path Codec
==========

Functions for reading and editing deeply nested values addressed by a path.

Paths are sequences of string segments, written externally as dot-joined
strings (``"todos.0.tags"``). A segment made of ASCII digits addresses a list
element; anything else is a mapping key.

Every edit is copy-on-write: the root and every container on the way to the
edited location are shallow-cloned, while untouched sibling subtrees keep
their identity. Observers rely on this to detect changes with ``is`` alone.

Example:
    initial = {
        "key1": {"fruit": "apples", "color": "red"},
        "key2": {"fruit": "bananas", "color": "yellow"},
    }
    result = set_deep_path_clone(initial, ["key1", "fruit"], "oranges")

    result["key1"]["fruit"]               # 'oranges'
    result["key1"] is initial["key1"]     # False, cloned on the way down
    result["key2"] is initial["key2"]     # True, untouched sibling
"""

import copy
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple, Union

from cachetools import LRUCache

PathLike = Union[str, Sequence[Any]]
Segments = Tuple[str, ...]

DEFAULT_PATH_CACHE_SIZE = 1024

# Sentinel object for "segment not found"
_MISSING = object()


def _is_container(value: Any) -> bool:
    return isinstance(value, (dict, list))


def _as_index(segment: Any) -> Optional[int]:
    """Return the list index a segment addresses, or None if it is a key."""
    if isinstance(segment, int) and not isinstance(segment, bool):
        return segment if segment >= 0 else None
    if isinstance(segment, str) and segment.isascii() and segment.isdigit():
        return int(segment)
    return None


def _dict_key(node: Dict[Any, Any], segment: Any) -> Any:
    """
    Resolve the key a segment refers to in a mapping.

    The string form wins; a numeric segment falls back to the integer key so
    that ``"data.0"`` reaches ``{"data": {0: ...}}``.
    """
    if segment in node:
        return segment
    index = _as_index(segment)
    if index is not None:
        if index in node:
            return index
        if str(index) in node:
            return str(index)
    return segment


def _lookup(node: Any, segment: Any) -> Any:
    if isinstance(node, list):
        index = _as_index(segment)
        if index is None or index >= len(node):
            return _MISSING
        return node[index]
    if isinstance(node, dict):
        return node.get(_dict_key(node, segment), _MISSING)
    return _MISSING


def _assign(clone: Any, segment: Any, value: Any) -> None:
    if isinstance(clone, list):
        index = _as_index(segment)
        if index is None:
            raise TypeError(f"List segment must be a non-negative index, got {segment!r}")
        if index >= len(clone):
            clone.extend([None] * (index - len(clone)))
            clone.append(value)
        else:
            clone[index] = value
    else:
        clone[_dict_key(clone, segment)] = value


def _remove(clone: Any, segment: Any) -> None:
    if isinstance(clone, list):
        # leave a hole so later indices keep addressing the same elements
        clone[_as_index(segment)] = None
    else:
        del clone[_dict_key(clone, segment)]


def split_path(path: PathLike) -> Segments:
    """
    Split a dotted path into its segments.

    Sequences are accepted as already split; their items are stringified. The
    empty string is the empty path.
    """
    if isinstance(path, str):
        if path == "":
            return ()
        return tuple(path.split("."))
    return tuple(str(segment) for segment in path)


def join_path(*segments: Any) -> str:
    """Build a dotted path, e.g. ``join_path("todos", 0, "tags") == "todos.0.tags"``."""
    return ".".join(str(segment) for segment in segments)


def is_path_within(path: Segments, prefix: Segments) -> bool:
    """
    True if ``path`` equals ``prefix`` or lies underneath it.

    Compared segment by segment, so ``todos.10`` is not within ``todos.1``.
    """
    return len(path) >= len(prefix) and path[: len(prefix)] == prefix


def get_deep_path(obj: Any, segments: Iterable[Any]) -> Any:
    """
    Get the value at a deep path.

    Returns None as soon as the walk meets None, a missing key, an index out of
    range or a non-container value. The empty path also yields None.
    """
    segments = tuple(segments)
    if obj is None or not segments:
        return None

    node = obj
    for segment in segments:
        if node is None:
            return None
        node = _lookup(node, segment)
        if node is _MISSING:
            return None
    return node


def set_deep_path_clone(obj: Any, segments: Iterable[Any], value: Any) -> Any:
    """
    Set a value at a deep path, cloning every container which changes.

    Missing or non-container intermediates are replaced by empty dicts. The
    empty path returns ``obj`` itself.
    """
    segments = tuple(segments)
    if not segments:
        return obj
    return _set(obj, segments, value)


def _set(node: Any, segments: Segments, value: Any) -> Any:
    first, rest = segments[0], segments[1:]
    result = copy.copy(node) if _is_container(node) else {}

    if not rest:
        _assign(result, first, value)
        return result

    existing = _lookup(node, first) if _is_container(node) else _MISSING
    if not _is_container(existing):
        existing = {}
    _assign(result, first, _set(existing, rest, value))
    return result


def delete_deep_path_clone(
    obj: Any, segments: Iterable[Any], remove_empty_ancestors: bool = False
) -> Any:
    """
    Delete the value at a deep path, cloning every container which changes.

    If nothing exists at the path the original reference is returned, at every
    level. With ``remove_empty_ancestors`` a container left empty by the
    deletion is removed from its parent as well.

    Deleting a list element leaves None in its slot; the list keeps its length
    and later indices keep addressing the same elements.
    """
    segments = tuple(segments)
    if not segments or not _is_container(obj):
        return obj

    first, rest = segments[0], segments[1:]
    nested = _lookup(obj, first)
    if nested is _MISSING:
        return obj

    if not rest:
        result = copy.copy(obj)
        _remove(result, first)
        return result

    if not _is_container(nested):
        return obj

    new_nested = delete_deep_path_clone(nested, rest, remove_empty_ancestors)
    if new_nested is nested:
        return obj

    result = copy.copy(obj)
    if remove_empty_ancestors and len(new_nested) == 0:
        _remove(result, first)
    else:
        _assign(result, first, new_nested)
    return result


class PathCache:
    """
    LRU memo for splitting dotted paths.

    Subscribers are matched against every write, so the same handful of path
    strings are split over and over; caching keeps the segment tuples shared.
    """

    def __init__(self, maxsize: int = DEFAULT_PATH_CACHE_SIZE):
        self._cache = LRUCache(maxsize=maxsize)
        self._stats = {"splits": 0, "cache_hits": 0}

    def split(self, path: PathLike) -> Segments:
        if not isinstance(path, str):
            return split_path(path)

        self._stats["splits"] += 1
        cached = self._cache.get(path, _MISSING)
        if cached is not _MISSING:
            self._stats["cache_hits"] += 1
            return cached

        segments = split_path(path)
        self._cache[path] = segments
        return segments

    def clear(self) -> None:
        self._cache.clear()

    def get_stats(self) -> Dict[str, Any]:
        stats = self._stats.copy()
        stats["cache_size"] = len(self._cache)
        stats["cache_hit_rate"] = (
            stats["cache_hits"] / stats["splits"] if stats["splits"] > 0 else 0
        )
        return stats

    def __len__(self) -> int:
        return len(self._cache)
