"""
subtree.merge — Recursive merge of mappings.

Folds a list of VMaps left to right into one accumulator.  For every
key of the incoming map:

    accumulator     incoming      result
    ───────────     ────────      ──────
    (absent)        anything      insert incoming
    VMap            VMap          merge recursively
    VMap            non-VMap      keep accumulator, drop incoming
    non-VMap        anything      overwrite with incoming

Maps win over scalars: once a key holds a VMap, later sources can
only merge into it, never collapse it back to a scalar.
"""

import logging
from typing import Iterable, Union

from .core import VMap, format_path

logger = logging.getLogger(__name__)


def deep_merge(mappings: Iterable[VMap]) -> VMap:
    """
    Merge `mappings` left to right; the first one seeds the result.

    Raises ValueError for an empty input.
    """
    mappings = list(mappings)
    if not mappings:
        raise ValueError("deep_merge needs at least one mapping")
    first, rest = mappings[0], mappings[1:]
    return merge_into(_checked(first), rest)


def merge_into(target: VMap, source: Union[VMap, Iterable[VMap]]) -> VMap:
    """Merge one mapping, or each of an iterable of mappings, into `target`."""
    if isinstance(source, VMap):
        return _merge_maps(_checked(target), source, ())
    result = _checked(target)
    for mapping in source:
        result = _merge_maps(result, _checked(mapping), ())
    return result


def _checked(mapping) -> VMap:
    if not isinstance(mapping, VMap):
        raise TypeError(f"can only merge VMap values, got {type(mapping).__name__}")
    return mapping


def _merge_maps(target: VMap, incoming: VMap, path: tuple) -> VMap:
    entries = dict(target.entries)

    for key, value in incoming.entries.items():
        if key not in entries:
            entries[key] = value
            continue

        current = entries[key]
        if isinstance(current, VMap) and isinstance(value, VMap):
            entries[key] = _merge_maps(current, value, path + (key,))
        elif isinstance(current, VMap):
            logger.debug("merge kept mapping at %s, dropped %r",
                         format_path(list(path + (key,))), value)
        else:
            entries[key] = value

    return VMap(entries)
