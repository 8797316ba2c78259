"""
subtree.core — Value model for mixed-container trees
=====================================================

§1  THE CONTAINER GRAMMAR
─────────────────────────

A tree value is the smallest set satisfying:

    (1)  Atom(v)                          for any scalar v
    (2)  Map({k₁:v₁, ..., kₙ:vₙ})         keys unique, order irrelevant
    (3)  Pairs((k₁,v₁), ..., (kₙ,vₙ))     ordered, keys may repeat
    (4)  Object(Pairs(...))               "this pair list is an object"
    (5)  Array(v₁, ..., vₙ)               ordered records

The same tree may mix all five at different levels, e.g. a Map whose
"list" entry is an Array of Objects and Maps.

§2  PATHS
─────────

A path is a Python list of segments.  A segment is either

    • a plain key       — addresses Map / Pairs / Object entries
    • a Filter(f, v)    — addresses the Array record whose field f == v

A bare 2-tuple inside a path is read as a Filter.  Anything that is not
a list is shorthand for a one-segment path:

    "a"            ≡  ["a"]
    ("key", "3")   ≡  [Filter("key", "3")]

Arrays are never addressed by position.
"""

from dataclasses import dataclass
from typing import Any, Callable, Union


# ═══════════════════════════════════════════════════════════════════
#  TREE VALUES
# ═══════════════════════════════════════════════════════════════════

class Val:
    """Base class for tree values.  Not instantiated directly."""
    __slots__ = ()

    kind = "value"


@dataclass(frozen=True, slots=True)
class VAtom(Val):
    """
    A scalar leaf: string, number, bool, None, bytes, ...

    Examples:
        VAtom("hello")
        VAtom(42)
    """
    val: Any

    kind = "scalar"

    def __repr__(self) -> str:
        return f"VAtom({self.val!r})"


@dataclass(frozen=True, slots=True)
class VMap(Val):
    """
    An UNORDERED mapping with unique keys.

    Examples:
        VMap({"name": VAtom("Alice"), "age": VAtom(30)})
    """
    entries: dict[Any, Val]

    kind = "mapping"

    def __init__(self, entries: dict[Any, Val]):
        object.__setattr__(self, 'entries', dict(entries))

    def __hash__(self):
        return hash(frozenset(self.entries.items()))

    def __repr__(self) -> str:
        if len(self.entries) <= 3:
            return f"VMap({self.entries})"
        return f"VMap({{...}} len={len(self.entries)})"


@dataclass(frozen=True, slots=True)
class VPairs(Val):
    """
    An ORDERED sequence of (key, value) pairs.  Keys may repeat; lookups
    see the first match.

    Examples:
        VPairs((("host", VAtom("db")), ("port", VAtom(5432))))
    """
    pairs: tuple[tuple[Any, Val], ...]

    kind = "pair-list"

    def __init__(self, pairs=()):
        object.__setattr__(self, 'pairs', tuple((k, v) for k, v in pairs))

    def __len__(self) -> int:
        return len(self.pairs)

    def __repr__(self) -> str:
        if len(self.pairs) <= 3:
            return f"VPairs({list(self.pairs)})"
        return f"VPairs([...] len={len(self.pairs)})"


@dataclass(frozen=True, slots=True)
class VObject(Val):
    """
    A pair list tagged as an object.  Transparent to addressing: a path
    walks into the wrapped VPairs exactly as it would a bare one.
    """
    pairs: VPairs

    kind = "object"

    def __post_init__(self):
        if not isinstance(self.pairs, VPairs):
            raise TypeError(
                f"VObject wraps a VPairs, got {type(self.pairs).__name__}"
            )

    def __repr__(self) -> str:
        return f"VObject({self.pairs!r})"


@dataclass(frozen=True, slots=True)
class VArray(Val):
    """
    An ordered sequence of records, addressed only through Filter
    segments.

    Examples:
        VArray((VMap({"id": VAtom(1)}), VMap({"id": VAtom(2)})))
    """
    items: tuple[Val, ...]

    kind = "array"

    def __init__(self, items=()):
        object.__setattr__(self, 'items', tuple(items))

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        if len(self.items) <= 5:
            return f"VArray({list(self.items)})"
        return f"VArray([{self.items[0]!r}, ..., {self.items[-1]!r}] len={len(self.items)})"


# ═══════════════════════════════════════════════════════════════════
#  PATH SEGMENTS
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Filter:
    """
    Select the Array record whose `field` equals `value`.

    Raw scalars are wrapped, so Filter("key", "3") matches a record
    holding VAtom("3").
    """
    field: Any
    value: Val

    def __post_init__(self):
        if not isinstance(self.value, Val):
            object.__setattr__(self, 'value', VAtom(self.value))

    def __str__(self) -> str:
        value = self.value.val if isinstance(self.value, VAtom) else self.value
        return f"{self.field}={value}"


Segment = Union[Filter, Any]


class _NotFound:
    """Singleton marking an unresolved path."""

    _instance: "_NotFound | None" = None

    def __new__(cls) -> "_NotFound":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NotFound"

    def __bool__(self) -> bool:
        return False


NotFound = _NotFound()


def _segment(item: Any) -> Segment:
    if isinstance(item, tuple) and len(item) == 2:
        return Filter(*item)
    return item


def path_list(path: Any) -> list:
    """The caller's path as a list (a bare key becomes a one-item list)."""
    if isinstance(path, list):
        return list(path)
    return [path]


def as_path(path: Any) -> tuple[Segment, ...]:
    """Normalise a caller path into a tuple of segments."""
    return tuple(_segment(item) for item in path_list(path))


def format_path(path: Any) -> str:
    """Render a path for messages: a/b/key=3, or (root) when empty."""
    return "/".join(str(_segment(p)) for p in path_list(path)) or "(root)"


# ═══════════════════════════════════════════════════════════════════
#  RECORD ACCESS (shared by reader and writer)
# ═══════════════════════════════════════════════════════════════════

def hashable(key: Any) -> bool:
    """True when `key` can be used as a VMap key at all."""
    try:
        hash(key)
    except TypeError:
        return False
    return True


def map_lookup(node: VMap, key: Any) -> Union[Val, _NotFound]:
    """Value stored under `key`; an unhashable key is never present."""
    if not hashable(key):
        return NotFound
    return node.entries.get(key, NotFound)


def pair_lookup(pairs: VPairs, key: Any) -> Union[Val, _NotFound]:
    """Value of the first pair whose key equals `key`."""
    for k, v in pairs.pairs:
        if k == key:
            return v
    return NotFound


def field_value(item: Val, field: Any) -> Union[Val, _NotFound]:
    """
    Read `field` from an Array record.

    Only VMap and VObject records have fields; the object wrapper is
    looked through.  Anything else has no fields at all.
    """
    if isinstance(item, VMap):
        return map_lookup(item, field)
    if isinstance(item, VObject):
        return pair_lookup(item.pairs, field)
    return NotFound


def _same_value(found: Val, expected: Val) -> bool:
    # 1, 1.0 and True compare equal in Python but are distinct values here
    if isinstance(found, VAtom) and isinstance(expected, VAtom):
        return type(found.val) is type(expected.val) and found.val == expected.val
    return found == expected


def matches(item: Val, segment: Filter) -> bool:
    """True when `item` is a record whose filtered field equals the value."""
    found = field_value(item, segment.field)
    return found is not NotFound and _same_value(found, segment.value)


def through_object(node: Val, operate: Callable[[Val], Val]) -> Val:
    """
    Apply `operate` to the pair list inside a VObject and re-wrap the
    result.  Any other node is handed to `operate` as-is.
    """
    if isinstance(node, VObject):
        return VObject(operate(node.pairs))
    return operate(node)
