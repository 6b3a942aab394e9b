"""Exceptions raised by the LvZJ parser.

Malformed markup never raises: it degrades to literal text. The only errors
are the limits that protect the embedding application from pathological
input.
"""

from __future__ import annotations


class LvzjError(Exception):
    """Base class for all LvZJ errors."""


class InputTooLarge(LvzjError):
    """The input text is longer than the configured limit."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"input has {size} characters, limit is {limit}")
        self.size = size
        self.limit = limit


class InputTooComplex(LvzjError):
    """Nested constructs exceed the configured recursion depth."""

    def __init__(self, depth: int, limit: int) -> None:
        super().__init__(f"nesting depth {depth} exceeds limit {limit}")
        self.depth = depth
        self.limit = limit
