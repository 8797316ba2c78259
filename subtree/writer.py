"""
subtree.writer — Copy-on-write store and delete.

Both operations walk the spine from the root to the addressed target
and rebuild every container on it.  Siblings that are not on the path
are carried over untouched, in their original order, and every
container keeps its own kind.

AUTO-CREATION differs per container kind:

    VMap     missing key on write → insert it; a missing intermediate
             key starts again from an empty VMap, so a whole chain of
             maps is created in one call
    VPairs   no pair matched → append exactly one pair, built from an
             empty VPairs for the remaining path
    VArray   never; an unmatched filter cannot be written through

Inputs are never mutated.  A failure raises before anything is
returned, so a failed call has no observable effect.
"""

import logging
from enum import Enum, auto
from typing import Any, Optional

from .core import (
    Filter, Segment, Val, VArray, VMap, VObject, VPairs,
    as_path, hashable, matches, path_list, through_object,
)
from .errors import IncompatiblePath, KeyNotFound

logger = logging.getLogger(__name__)


class Action(Enum):
    """Terminal action applied at the end of the path."""
    STORE = auto()
    REMOVE = auto()


class _Missing(Exception):
    """The addressed key or record is absent and cannot be created."""


class _Blocked(Exception):
    """The current value cannot take the next segment."""


def write(path: Any, new_value: Val, tree: Val) -> Val:
    """
    Store `new_value` at `path`, returning the rebuilt tree.

    An empty path replaces the whole tree.  Raises KeyNotFound or
    IncompatiblePath carrying the caller's full path.
    """
    return _rebuild(tree, path, Action.STORE, new_value)


def delete(path: Any, tree: Val) -> Val:
    """
    Remove the Map key, pair or Array record at `path`.

    Raises KeyNotFound when it is absent and IncompatiblePath when the
    path cannot be followed.  The root itself cannot be deleted.
    """
    return _rebuild(tree, path, Action.REMOVE)


def _rebuild(tree: Val, path: Any, action: Action,
             value: Optional[Val] = None) -> Val:
    try:
        return _rec(tree, as_path(path), action, value)
    except _Missing:
        logger.debug("%s refused, key not found: %r", action.name.lower(), path)
        raise KeyNotFound(path_list(path)) from None
    except _Blocked:
        logger.debug("%s refused, incompatible path: %r", action.name.lower(), path)
        raise IncompatiblePath(path_list(path)) from None


def _rec(node: Val, path: tuple[Segment, ...], action: Action,
         value: Optional[Val]) -> Val:
    if not path:
        if action is Action.STORE:
            return value
        raise _Blocked

    if isinstance(node, VObject):
        return through_object(node, lambda pairs: _rec(pairs, path, action, value))

    if isinstance(node, VMap):
        return _rec_map(node, path, action, value)

    if isinstance(node, VPairs):
        return _rec_pairs(node, path, action, value)

    if isinstance(node, VArray):
        return _rec_array(node, path, action, value)

    # Scalars have nothing to walk into
    raise _Blocked


def _rec_map(node: VMap, path: tuple[Segment, ...], action: Action,
             value: Optional[Val]) -> VMap:
    segment, rest = path[0], path[1:]
    # Filters and unhashable keys never name a map entry
    if isinstance(segment, Filter) or not hashable(segment):
        if action is Action.REMOVE:
            raise _Missing
        raise _Blocked

    entries = dict(node.entries)
    present = segment in entries

    if not rest:
        if action is Action.REMOVE:
            if not present:
                raise _Missing
            del entries[segment]
        else:
            entries[segment] = value
        return VMap(entries)

    if present:
        entries[segment] = _rec(entries[segment], rest, action, value)
    elif action is Action.STORE:
        entries[segment] = _rec(VMap({}), rest, action, value)
    else:
        raise _Missing
    return VMap(entries)


def _rec_pairs(node: VPairs, path: tuple[Segment, ...], action: Action,
               value: Optional[Val]) -> VPairs:
    segment, rest = path[0], path[1:]
    pairs = list(node.pairs)

    # A filter never matches a (key, value) pair, so it always falls
    # through to the append below.
    if not isinstance(segment, Filter):
        for i, (key, current) in enumerate(pairs):
            if key != segment:
                continue
            if rest:
                pairs[i] = (key, _rec(current, rest, action, value))
            elif action is Action.STORE:
                pairs[i] = (key, value)
            else:
                del pairs[i]
            return VPairs(pairs)

    if action is Action.REMOVE:
        raise _Missing
    pairs.append((segment, _rec(VPairs(), rest, action, value)))
    return VPairs(pairs)


def _rec_array(node: VArray, path: tuple[Segment, ...], action: Action,
               value: Optional[Val]) -> VArray:
    segment, rest = path[0], path[1:]
    if not isinstance(segment, Filter):
        if action is Action.REMOVE:
            raise _Missing
        raise _Blocked

    items = list(node.items)
    for i, item in enumerate(items):
        if not matches(item, segment):
            continue
        if rest:
            items[i] = _rec(item, rest, action, value)
        elif action is Action.STORE:
            items[i] = value
        else:
            del items[i]
        return VArray(items)

    if action is Action.REMOVE:
        raise _Missing
    raise _Blocked
