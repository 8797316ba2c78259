"""
Stress tests / adversarial evaluation of subtree.

This script attempts to BREAK the claimed properties on random trees:
  1. write → read round trip
  2. delete → read reports KeyNotFound with the caller's path
  3. locate / locate_or_fail / locate_with_default agree
  4. Inputs are never mutated
  5. Map auto-creation through missing chains
  6. Merge: maps win over scalars
"""

import sys, os, random
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from subtree.core import VAtom, VMap, VPairs, VObject, VArray, Filter, NotFound
from subtree.errors import KeyNotFound, IncompatiblePath
from subtree.reader import locate, locate_or_fail, locate_with_default
from subtree.writer import write, delete
from subtree.merge import deep_merge
from subtree.formats import to_python


def test(name, condition, detail=""):
    status = "PASS" if condition else "FAIL"
    print(f"  [{status}] {name}" + (f"  ({detail})" if detail else ""))
    return condition


KEYS = ["a", "b", "c", "d", "e"]


def random_tree(depth=0, max_depth=3):
    """Generate a random tree mixing every container kind."""
    if depth >= max_depth:
        return VAtom(random.choice([1, 2, "x", "y", None, True]))

    kind = random.choice(["atom", "map", "pairs", "object", "array"])
    if kind == "atom":
        return VAtom(random.choice([0, 42, "hello", 3.14, None, False]))
    if kind == "map":
        keys = random.sample(KEYS, random.randint(0, 3))
        return VMap({k: random_tree(depth + 1, max_depth) for k in keys})
    if kind == "pairs":
        return VPairs((random.choice(KEYS), random_tree(depth + 1, max_depth))
                      for _ in range(random.randint(0, 3)))
    if kind == "object":
        return VObject(random_tree_pairs(depth + 1, max_depth))
    records = []
    for ident in range(random.randint(0, 3)):
        record = {"id": VAtom(ident)}
        for k in random.sample(KEYS, random.randint(0, 2)):
            record[k] = random_tree(depth + 1, max_depth)
        if random.random() < 0.5:
            records.append(VMap(record))
        else:
            records.append(VObject(VPairs(record.items())))
    return VArray(records)


def random_tree_pairs(depth, max_depth):
    return VPairs((random.choice(KEYS), random_tree(depth, max_depth))
                  for _ in range(random.randint(0, 3)))


def existing_paths(node, prefix=()):
    """Every path that resolves in `node`, as caller-style lists."""
    yield list(prefix)
    if isinstance(node, VObject):
        node = node.pairs
    if isinstance(node, VMap):
        for k, v in node.entries.items():
            yield from existing_paths(v, prefix + (k,))
    elif isinstance(node, VPairs):
        seen = set()
        for k, v in node.pairs:
            if k not in seen:
                seen.add(k)
                yield from existing_paths(v, prefix + (k,))
    elif isinstance(node, VArray):
        for item in node.items:
            record = item.pairs if isinstance(item, VObject) else item
            ident = record.entries["id"] if isinstance(record, VMap) else dict(record.pairs)["id"]
            yield from existing_paths(item, prefix + (("id", ident.val),))


random.seed(42)
trees = [VMap({"root": random_tree()}) for _ in range(200)]


# ═══════════════════════════════════════════════════════════════
#  §1  WRITE → READ ROUND TRIP
# ═══════════════════════════════════════════════════════════════

print("=" * 70)
print("  §1  WRITE → READ ROUND TRIP")
print("=" * 70)

marker = VAtom("written")
checks = failures = refused = 0
for tree in trees:
    for path in existing_paths(tree):
        if not path:
            continue
        try:
            result = write(path, marker, tree)
        except IncompatiblePath:
            refused += 1
            continue
        checks += 1
        # Replacing a whole record, or its id field, erases the filter
        if any(isinstance(seg, tuple) and (i == len(path) - 1 or path[i + 1] == "id")
               for i, seg in enumerate(path)):
            continue
        if locate(path, result) != marker:
            failures += 1
            if failures <= 3:
                print(f"    ROUND TRIP FAILED at {path}")

test(f"write/read round trip ({checks} writes)", failures == 0,
     f"{failures} failures, {refused} refused")


# ═══════════════════════════════════════════════════════════════
#  §2  DELETE → KEY NOT FOUND
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §2  DELETE → KEY NOT FOUND")
print("=" * 70)

checks = failures = 0
for tree in trees:
    for path in existing_paths(tree):
        if not path:
            continue
        result = delete(path, tree)
        checks += 1
        try:
            locate_or_fail(path, result)
        except KeyNotFound as exc:
            if exc.path != path:
                failures += 1
        else:
            # Duplicate keys in a pair list expose the next pair
            parent = locate(path[:-1], tree)
            if isinstance(parent, VObject):
                parent = parent.pairs
            if not (isinstance(parent, VPairs)
                    and sum(1 for k, _ in parent.pairs if k == path[-1]) > 1):
                failures += 1

test(f"delete then locate_or_fail ({checks} deletes)", failures == 0,
     f"{failures} failures")


# ═══════════════════════════════════════════════════════════════
#  §3  READER AGREEMENT
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §3  READER AGREEMENT")
print("=" * 70)

default = object()
disagreements = 0
for tree in trees:
    for path in list(existing_paths(tree)) + [["root", "zz"], ["root", ("id", 99)]]:
        found = locate(path, tree)
        fallback = locate_with_default(path, tree, default)
        try:
            strict = locate_or_fail(path, tree)
        except KeyNotFound:
            strict = NotFound
        if found is NotFound:
            ok = fallback is default and strict is NotFound
        else:
            ok = fallback == found == strict
        if not ok:
            disagreements += 1

test("locate / locate_or_fail / locate_with_default agree",
     disagreements == 0, f"{disagreements} disagreements")


# ═══════════════════════════════════════════════════════════════
#  §4  IMMUTABILITY
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §4  IMMUTABILITY")
print("=" * 70)

mutated = 0
for tree in trees[:50]:
    before = repr(to_python(tree))
    for path in existing_paths(tree):
        for op in (lambda p: write(p, marker, tree), lambda p: delete(p, tree)):
            try:
                op(path)
            except (KeyNotFound, IncompatiblePath):
                pass
    if repr(to_python(tree)) != before:
        mutated += 1

test("inputs unchanged after every write and delete", mutated == 0,
     f"{mutated} trees mutated")


# ═══════════════════════════════════════════════════════════════
#  §5  AUTO-CREATION
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §5  AUTO-CREATION")
print("=" * 70)

ok = True
for depth in range(1, 30):
    path = [f"k{i}" for i in range(depth)]
    result = write(path, VAtom(7), VMap({}))
    ok = ok and locate_or_fail(path, result) == VAtom(7)
test("map chains of depth 1..29 auto-created", ok)

result = write(["p", "q"], VAtom(1), VPairs())
test("pair list grows by exactly one pair", len(result) == 1
     and result.pairs[0] == ("p", VPairs((("q", VAtom(1)),))))

try:
    write([Filter("id", 5)], VAtom(1), VArray())
    refused = False
except IncompatiblePath:
    refused = True
test("arrays never auto-create", refused)


# ═══════════════════════════════════════════════════════════════
#  §6  MERGE
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §6  MERGE")
print("=" * 70)

violations = 0
for _ in range(300):
    maps = [VMap({k: random_tree(2) for k in random.sample(KEYS, 3)}) for _ in range(4)]
    merged = deep_merge(maps)
    for key, value in merged.entries.items():
        held_map = any(isinstance(m.entries.get(key), VMap) for m in maps)
        if held_map and not isinstance(value, VMap):
            violations += 1
test("a key that ever held a map still holds one", violations == 0,
     f"{violations} violations")


# ═══════════════════════════════════════════════════════════════
#  SUMMARY
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  STRESS TEST SUMMARY")
print("=" * 70)
print("  If you see FAIL above, there's a bug.")
print("  If everything is PASS, the implementation is correct")
print("  for the tested cases (not a proof, but high confidence).")
