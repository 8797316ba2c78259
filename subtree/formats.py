"""
subtree.formats — Convert between plain Python objects and tree values.

Shape conventions:
    • dict                         ↔ VMap
    • ([(k, v), ...],)             ↔ VObject   (1-tuple around a pair list)
    • [(k, v), ...]  (non-empty)   ↔ VPairs
    • any other list / tuple       ↔ VArray
    • everything else              ↔ VAtom

Keys are kept as they are.  An empty pair list has no distinct shape,
so VPairs(()) converts to [] and comes back as an empty VArray.
"""

from typing import Any

from .core import VArray, VAtom, VMap, VObject, VPairs, Val


# ═══════════════════════════════════════════════════════════════════
#  PYTHON OBJECTS ↔ TREE VALUES
# ═══════════════════════════════════════════════════════════════════

def _is_pair(obj: Any) -> bool:
    return isinstance(obj, tuple) and len(obj) == 2


def _pairs_from_python(items) -> VPairs:
    return VPairs((k, from_python(v)) for k, v in items)


def from_python(obj: Any) -> Val:
    """
    Convert a Python object to a tree value.

    Tree values pass through unchanged, so partly converted inputs
    are fine.  Nested structures are converted recursively.
    """
    if isinstance(obj, Val):
        return obj
    if isinstance(obj, dict):
        return VMap({k: from_python(v) for k, v in obj.items()})
    if isinstance(obj, tuple) and len(obj) == 1 and isinstance(obj[0], list):
        return VObject(_pairs_from_python(obj[0]))
    if isinstance(obj, list) and obj and all(_is_pair(item) for item in obj):
        return _pairs_from_python(obj)
    if isinstance(obj, (list, tuple)):
        return VArray(from_python(item) for item in obj)
    return VAtom(obj)


def to_python(val: Val) -> Any:
    """
    Convert a tree value back to a plain Python object.

    Inverse of from_python:
        to_python(from_python(obj)) == obj
    for objects built from the shapes above.
    """
    if isinstance(val, VAtom):
        return val.val
    if isinstance(val, VMap):
        return {k: to_python(v) for k, v in val.entries.items()}
    if isinstance(val, VPairs):
        return [(k, to_python(v)) for k, v in val.pairs]
    if isinstance(val, VObject):
        return (to_python(val.pairs),)
    if isinstance(val, VArray):
        return [to_python(item) for item in val.items]
    raise TypeError(f"Unknown tree value type: {type(val)}")
