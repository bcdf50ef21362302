"""Prettifier: re-indent JSON text in one pass.

Whitespace outside strings is dropped and re-synthesized around structural
characters:

- ``{`` / ``[``: indent grows by ``indent_width``; the bracket is followed by
  a newline and the new indent.
- ``}`` / ``]``: indent shrinks (never below zero); a newline and the new
  indent come *before* the bracket.
- ``,``: followed by a newline and the current indent.
- ``:``: followed by a single space.

Each input character therefore produces a small ordered group of output
pieces, yielded before the next input character is read.  Characters inside
strings, escapes included, pass through unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jsdu.scanner import WHITESPACE, JsonScanner

if TYPE_CHECKING:
    from collections.abc import Iterator

__all__ = ["iter_prettified", "prettify"]


def _newline(indent: int) -> str:
    return "\n" + " " * indent


def _prettify(text: str, indent_width: int) -> Iterator[str]:
    scanner = JsonScanner(text)
    indent = 0
    for _, ch in scanner:
        if scanner.in_string or ch == '"':
            yield ch
        elif ch == "{" or ch == "[":
            indent += indent_width
            yield ch
            yield _newline(indent)
        elif ch == "}" or ch == "]":
            if indent >= indent_width:
                indent -= indent_width
            yield _newline(indent)
            yield ch
        elif ch == ",":
            yield ch
            yield _newline(indent)
        elif ch == ":":
            yield ": "
        elif ch not in WHITESPACE:
            yield ch


def iter_prettified(text: str, indent_width: int = 4) -> Iterator[str]:
    """Yield pieces of the prettified form of ``text``.

    Args:
        text:         JSON text.  Not validated; malformed nesting gives
            unspecified (but finite) output.
        indent_width: Spaces per nesting level.  0 puts every token on its
            own line without indentation.

    Raises:
        ValueError: If ``indent_width`` is negative.
    """
    if indent_width < 0:
        msg = f"indent_width must be >= 0, got {indent_width}"
        raise ValueError(msg)
    return _prettify(text, indent_width)


def prettify(text: str, indent_width: int = 4) -> str:
    """Return ``text`` re-indented with ``indent_width`` spaces per level."""
    return "".join(iter_prettified(text, indent_width))
