"""
subtree.reader — Path lookup over mixed containers.

    locate(["list", ("key", "3"), "value"], tree)   → VAtom(3)
    locate(["missing"], tree)                       → NotFound

One recursive descent, one segment consumed per level.  Object
wrappers are looked through without consuming a segment.  Any
(segment, container) combination without a rule is simply not found;
reads never raise for a missing path.
"""

from typing import Any, Union

from .core import (
    Filter, NotFound, Segment, Val, VArray, VMap, VObject, VPairs,
    _NotFound, as_path, map_lookup, matches, pair_lookup, path_list,
)
from .errors import KeyNotFound


def locate(path: Any, tree: Val) -> Union[Val, _NotFound]:
    """Value at `path`, or the NotFound marker."""
    return _search(tree, as_path(path))


def locate_or_fail(path: Any, tree: Val) -> Val:
    """
    Value at `path`.

    Raises KeyNotFound carrying the caller's full path when any segment
    cannot be resolved.
    """
    found = locate(path, tree)
    if found is NotFound:
        raise KeyNotFound(path_list(path))
    return found


def locate_with_default(path: Any, tree: Val, default: Any) -> Any:
    """Value at `path`, or `default` where locate_or_fail would raise."""
    found = locate(path, tree)
    if found is NotFound:
        return default
    return found


def _search(node: Val, path: tuple[Segment, ...]) -> Union[Val, _NotFound]:
    if not path:
        return node

    if isinstance(node, VObject):
        return _search(node.pairs, path)

    segment, rest = path[0], path[1:]

    if isinstance(segment, Filter):
        if isinstance(node, VArray):
            for item in node.items:
                if matches(item, segment):
                    return _search(item, rest)
        return NotFound

    if isinstance(node, (VMap, VPairs)):
        if isinstance(node, VMap):
            found = map_lookup(node, segment)
        else:
            found = pair_lookup(node, segment)
        if found is NotFound:
            return NotFound
        return _search(found, rest)

    # Plain key against an Array or a scalar
    return NotFound
