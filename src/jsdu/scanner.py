"""Escape-aware scanning shared by every jsdu consumer.

JSON gives a handful of ASCII characters structural meaning, but only outside
string literals.  Whether a character is inside a string depends on every
quote and backslash before it, so the size parser, the minifier, the
prettifier and the key resolver all need the same two bits of state:

- ``in_string``: toggled on each unescaped ``"``.
- ``escape_pending``: set by a ``\\`` inside a string; the next character is
  then literal whatever it is, and the flag clears.

``EscapeState`` is that automaton, defined once.  ``JsonScanner`` composes it
with a lookahead-1 character stream that reports UTF-8 byte offsets, and
``find_string_end`` runs it over raw bytes to locate the end of a string
whose start was recorded earlier.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jsdu.errors import MalformedInputError

if TYPE_CHECKING:
    from collections.abc import Iterator

__all__ = ["WHITESPACE", "EscapeState", "JsonScanner", "find_string_end"]

# The only insignificant whitespace JSON allows between tokens.
WHITESPACE = frozenset(" \t\n\r")

_QUOTE = '"'
_BACKSLASH = "\\"


def _utf8_width(ch: str) -> int:
    """Return the number of bytes ``ch`` occupies when encoded as UTF-8."""
    cp = ord(ch)
    if cp < 0x80:
        return 1
    if cp < 0x800:
        return 2
    if cp < 0x10000:
        return 3
    return 4


class EscapeState:
    """The in-string / escape-pending automaton.

    Feed it every character of a document, in order; after each ``feed`` the
    flags describe the character just consumed:

    - an opening quote leaves ``in_string`` True, a closing quote False;
    - an escaped character (including an escaped quote) leaves ``in_string``
      True, because the string has not ended.

    So a consumer can ask "was that character structural?" simply by
    checking ``in_string`` after feeding a non-quote character.
    """

    __slots__ = ("escape_pending", "in_string")

    def __init__(self, *, in_string: bool = False) -> None:
        self.in_string = in_string
        self.escape_pending = False

    def feed(self, ch: str) -> None:
        """Advance the automaton over one character."""
        if self.escape_pending:
            self.escape_pending = False
        elif ch == _QUOTE:
            self.in_string = not self.in_string
        elif ch == _BACKSLASH and self.in_string:
            self.escape_pending = True

    def __repr__(self) -> str:
        return (
            f"EscapeState(in_string={self.in_string}, "
            f"escape_pending={self.escape_pending})"
        )


class JsonScanner:
    """Lookahead-1 stream of ``(byte_offset, char)`` pairs over a JSON text.

    Every character returned by ``advance`` (or by iteration) has already been
    fed to the scanner's ``EscapeState``, so ``in_string`` answers whether that
    character was part of a string literal.  ``peek`` never changes state.

    Offsets are UTF-8 byte offsets into the document, matching how sizes are
    reported.

    Example::

        scanner = JsonScanner('{"a": 1}')
        scanner.peek()      # (0, '{')
        scanner.advance()   # (0, '{')
        scanner.offset      # 1
    """

    __slots__ = ("_index", "_offset", "_state", "_text")

    def __init__(self, text: str) -> None:
        self._text = text
        self._index = 0
        self._offset = 0
        self._state = EscapeState()

    @property
    def offset(self) -> int:
        """UTF-8 byte offset of the next character (document length at end)."""
        return self._offset

    @property
    def in_string(self) -> bool:
        return self._state.in_string

    @property
    def escape_pending(self) -> bool:
        return self._state.escape_pending

    def peek(self) -> tuple[int, str] | None:
        """Return the next pair without consuming it, or None at end of text."""
        if self._index >= len(self._text):
            return None
        return self._offset, self._text[self._index]

    def advance(self) -> tuple[int, str] | None:
        """Consume and return the next pair, or None at end of text."""
        if self._index >= len(self._text):
            return None
        ch = self._text[self._index]
        offset = self._offset
        self._index += 1
        self._offset += _utf8_width(ch)
        self._state.feed(ch)
        return offset, ch

    def __iter__(self) -> Iterator[tuple[int, str]]:
        return self

    def __next__(self) -> tuple[int, str]:
        item = self.advance()
        if item is None:
            raise StopIteration
        return item


def find_string_end(data: bytes, start: int) -> int:
    """Return the offset of the unescaped ``"`` closing the string at ``start``.

    ``start`` is the offset just after the opening quote.  The scan is
    O(string length).  Bytes are fed to the automaton one by one; UTF-8
    continuation and lead bytes are all >= 0x80, so they can never be
    mistaken for a quote or a backslash.

    Raises:
        MalformedInputError: If the data ends before the string does.
    """
    state = EscapeState(in_string=True)
    for pos in range(start, len(data)):
        state.feed(chr(data[pos]))
        if not state.in_string:
            return pos
    raise MalformedInputError("unterminated string", start)
