"""Exception hierarchy for jsdu.

User-facing failures derive from ``JsduError``:

- ``MalformedInputError``: the size parser met text that is not well-formed
  JSON.  Also a ``ValueError``, so callers that treat bad input generically
  keep working.
- ``NestingDepthError``: a ``MalformedInputError`` raised when
  ``ParserConfig.max_depth`` is exceeded.
- ``PointerError``: a JSON Pointer did not resolve against a size tree.
  Also a ``LookupError``.

``InvariantViolationError`` is deliberately *not* a ``JsduError``: it signals
an engine defect (bytes attributed twice or not at all), never bad input.
"""

from __future__ import annotations

__all__ = [
    "InvariantViolationError",
    "JsduError",
    "MalformedInputError",
    "NestingDepthError",
    "PointerError",
]


class JsduError(Exception):
    """Base class for all user-facing jsdu errors."""


class MalformedInputError(JsduError, ValueError):
    """The input is not well-formed JSON.

    Attributes:
        reason: Short description of what was expected or found.
        offset: UTF-8 byte offset in the document where parsing stopped.
    """

    def __init__(self, reason: str, offset: int) -> None:
        self.reason = reason
        self.offset = offset
        super().__init__(f"{reason} at byte {offset}")


class NestingDepthError(MalformedInputError):
    """Container nesting exceeded ``ParserConfig.max_depth``."""

    def __init__(self, max_depth: int, offset: int) -> None:
        self.max_depth = max_depth
        super().__init__(f"nesting deeper than max_depth={max_depth}", offset)


class PointerError(JsduError, LookupError):
    """A JSON Pointer could not be resolved against a size tree.

    Attributes:
        pointer: The full pointer that was being resolved.
        token:   The reference token that failed, or None for a syntax error.
    """

    def __init__(self, pointer: str, token: str | None, reason: str) -> None:
        self.pointer = pointer
        self.token = token
        super().__init__(f"{reason} (pointer {pointer!r})")


class InvariantViolationError(AssertionError):
    """Byte accounting of a size tree does not add up to the document length."""
