"""Error types for subtree."""

from __future__ import annotations

from typing import Any

from .core import format_path


class SubtreeError(Exception):
    """Base error for path-addressed operations.

    `path` is always the full path the caller supplied (a bare key is
    reported as a one-item list), never the remainder at the failure
    point.
    """

    reason = "subtree_error"

    def __init__(self, path: list[Any]):
        self.path = path
        super().__init__(f"{self.reason}: {format_path(path)}")


class KeyNotFound(SubtreeError, LookupError):
    """A key or Array record along the path does not exist."""

    reason = "key_not_found"


class IncompatiblePath(SubtreeError, TypeError):
    """The path runs through a value that cannot take the next segment."""

    reason = "incompatible_path"
