"""
subtree
=======

Read and rewrite trees whose containers mix several kinds at once.

    tree = from_python({"list": [([("key", "3"), ("value", 3)],)]})

    locate(["list", ("key", "3"), "value"], tree)        → VAtom(3)
    write(["list", ("key", "3"), "value"], VAtom(4), tree)
    delete(["list", ("key", "3")], tree)
    deep_merge([VMap(...), VMap(...)])

A path is a list of plain keys and (field, value) filters.  Mappings,
pair lists, tagged objects and arrays may appear at any level:

  • Reads never raise unless asked to (locate_or_fail)
  • Writes rebuild the spine and never touch the input
  • Errors always report the full path the caller asked for
"""

import logging

from subtree.core import (
    # Types
    Val,
    VAtom,
    VMap,
    VPairs,
    VObject,
    VArray,
    # Paths
    Filter,
    NotFound,
)
from subtree.errors import SubtreeError, KeyNotFound, IncompatiblePath
from subtree.reader import locate, locate_or_fail, locate_with_default
from subtree.writer import write, delete
from subtree.merge import deep_merge, merge_into
from subtree.formats import from_python, to_python

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "Val", "VAtom", "VMap", "VPairs", "VObject", "VArray",
    "Filter", "NotFound",
    "SubtreeError", "KeyNotFound", "IncompatiblePath",
    "locate", "locate_or_fail", "locate_with_default",
    "write", "delete",
    "deep_merge", "merge_into",
    "from_python", "to_python",
]
