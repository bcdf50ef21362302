"""SizeParser: builds a size tree by walking JSON text once.

The parser is a descent over the character stream of a ``JsonScanner``,
dispatching on the next non-whitespace character.  It never decodes values:
it only counts how many bytes each node spends on whitespace, on JSON syntax
and on payload.

Nesting is handled with an explicit stack of ``_Frame`` objects instead of
Python recursion.  Each frame is an open container waiting for its next
member; the current "slot" is the node that receives the next value and the
whitespace around it.  The resulting tree has the same shape as a recursive
formulation would build, but depth is limited only by memory.

Attribution rules:

- Whitespace inside a slot (before or after its value) belongs to the slot's
  node; whitespace around an object key belongs to the object.
- A string's two quotes are control bytes; everything between them,
  including each backslash and the character it escapes, is data.
- Numbers and ``true``/``false``/``null`` are all data.
- A container owns its brackets, commas and (objects) colons and keys:
  ``2 + max(0, n - 1)`` control bytes for an array of n members,
  ``2 + n + max(0, n - 1)`` for an object, plus the key strings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from jsdu.config import ParserConfig
from jsdu.errors import InvariantViolationError, MalformedInputError, NestingDepthError
from jsdu.scanner import WHITESPACE, JsonScanner
from jsdu.tree.nodes import JsonKey, JsonSize, Span, ValueKind

__all__ = ["SizeParser", "verify_byte_conservation"]

logger = logging.getLogger(__name__)

_KEYWORDS = {"t": "true", "f": "false", "n": "null"}
_DIGITS = frozenset("0123456789")
_NUMBER_START = _DIGITS | {"-"}
_TERMINATORS = frozenset(",]}")


@dataclass(slots=True)
class _Frame:
    """An open container on the parser's work stack."""

    node: JsonSize
    closer: str
    commas: int = 0


class SizeParser:
    """Builds a ``JsonSize`` tree from JSON text.

    Assumes the text is JSON; any deviation the grammar dispatch notices
    raises ``MalformedInputError`` and no partial tree is returned.  Each
    ``parse`` call owns its scanner and tree, so one parser may be reused.

    Example::

        parser = SizeParser()
        tree = parser.parse('[-234.67e9, 0]')
        tree.control_bytes   # 3  (brackets + one comma)
        tree.whitespace      # 1
        tree.data_bytes      # 10
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self._config = config if config is not None else ParserConfig()

    @property
    def config(self) -> ParserConfig:
        return self._config

    def parse(self, text: str) -> JsonSize:
        """Parse ``text`` and return the root of its size tree.

        Raises:
            MalformedInputError: If the text is not well-formed JSON.
            NestingDepthError:   If nesting exceeds ``config.max_depth``.
            InvariantViolationError: If ``config.check_invariant`` is set and
                the byte accounting does not add up (an engine defect).
        """
        scanner = JsonScanner(text)
        max_depth = self._config.max_depth
        stack: list[_Frame] = []
        deepest = 0

        root = JsonSize()
        slot = root
        filled = False

        while True:
            item = scanner.peek()
            if item is None:
                if stack:
                    raise MalformedInputError(
                        f"unexpected end of input, expected {stack[-1].closer!r}",
                        scanner.offset,
                    )
                if not filled:
                    raise MalformedInputError("empty document", scanner.offset)
                break

            offset, ch = item

            if ch in WHITESPACE:
                slot.whitespace += 1
                scanner.advance()
                continue

            if ch in _TERMINATORS:
                if not stack:
                    raise MalformedInputError(f"unexpected {ch!r}", offset)
                frame = stack[-1]
                frame.node.add_counts(slot)
                if filled:
                    frame.node.children.append(slot)
                elif ch == "," or frame.commas or frame.closer == "}":
                    raise MalformedInputError("expected a value", offset)
                scanner.advance()

                if ch == ",":
                    frame.commas += 1
                    slot = self._open_slot(scanner, frame)
                    filled = False
                    continue
                if ch != frame.closer:
                    raise MalformedInputError(
                        f"expected {frame.closer!r}, found {ch!r}", offset
                    )
                slot = self._close_container(stack.pop())
                filled = True
                continue

            if filled:
                raise MalformedInputError(f"unexpected {ch!r} after value", offset)

            if ch == '"':
                slot.value_kind = ValueKind.STRING
                self._parse_string(scanner, slot)
            elif ch in _KEYWORDS:
                self._parse_keyword(scanner, slot, _KEYWORDS[ch])
            elif ch in _NUMBER_START:
                slot.value_kind = ValueKind.NUMBER
                self._parse_number(scanner, slot)
            elif ch == "[" or ch == "{":
                if max_depth is not None and len(stack) >= max_depth:
                    raise NestingDepthError(max_depth, offset)
                scanner.advance()
                if ch == "[":
                    slot.value_kind = ValueKind.ARRAY
                    frame = _Frame(node=slot, closer="]")
                else:
                    slot.value_kind = ValueKind.OBJECT
                    frame = _Frame(node=slot, closer="}")
                stack.append(frame)
                deepest = max(deepest, len(stack))
                if ch == "{" and self._object_is_empty(scanner, frame):
                    scanner.advance()
                    slot = self._close_container(stack.pop())
                    filled = True
                    continue
                slot = self._open_slot(scanner, frame)
                filled = False
                continue
            else:
                raise MalformedInputError(f"unexpected {ch!r}", offset)
            filled = True

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Parsed %d bytes into %d nodes (max depth %d)",
                scanner.offset,
                root.node_count(),
                deepest,
            )

        if self._config.check_invariant:
            verify_byte_conservation(text, root)
        return root

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def _open_slot(self, scanner: JsonScanner, frame: _Frame) -> JsonSize:
        """Start the node for the container's next member.

        For objects this consumes the member's key and colon first, charging
        their bytes (and the whitespace around them) to the object.
        """
        index = len(frame.node.children)
        if frame.closer == "]":
            return JsonSize(key=JsonKey(index=index))

        obj = frame.node
        self._skip_whitespace(scanner, obj)
        item = scanner.peek()
        if item is None or item[1] != '"':
            raise MalformedInputError("expected object key", scanner.offset)
        key_start = item[0] + 1
        self._parse_string(scanner, obj)

        self._skip_whitespace(scanner, obj)
        item = scanner.advance()
        if item is None or item[1] != ":":
            raise MalformedInputError("expected ':' after object key", scanner.offset)
        return JsonSize(key=JsonKey(index=index, span=Span(key_start)))

    def _object_is_empty(self, scanner: JsonScanner, frame: _Frame) -> bool:
        """Consume whitespace after ``{`` and report whether ``}`` follows."""
        self._skip_whitespace(scanner, frame.node)
        item = scanner.peek()
        return item is not None and item[1] == "}"

    @staticmethod
    def _close_container(frame: _Frame) -> JsonSize:
        node = frame.node
        members = len(node.children)
        commas = max(0, members - 1)
        if frame.closer == "}":
            node.control_bytes += 2 + members + commas
        else:
            node.control_bytes += 2 + commas
        return node

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    @staticmethod
    def _skip_whitespace(scanner: JsonScanner, node: JsonSize) -> None:
        while (item := scanner.peek()) is not None and item[1] in WHITESPACE:
            node.whitespace += 1
            scanner.advance()

    @staticmethod
    def _parse_string(scanner: JsonScanner, node: JsonSize) -> None:
        """Consume a string literal; quotes are control, the rest is data.

        The scanner's escape state decides where the string ends, and every
        consumed character is counted once, by its UTF-8 width.
        """
        start = scanner.offset
        scanner.advance()  # opening quote
        length = 0
        while True:
            item = scanner.advance()
            if item is None:
                raise MalformedInputError("unterminated string", start)
            if not scanner.in_string:
                break
            length += scanner.offset - item[0]
        node.data_bytes += length
        node.control_bytes += 2

    @staticmethod
    def _parse_keyword(scanner: JsonScanner, node: JsonSize, keyword: str) -> None:
        start = scanner.offset
        for expected in keyword:
            item = scanner.advance()
            if item is None or item[1] != expected:
                raise MalformedInputError(f"invalid literal, expected {keyword!r}", start)
        node.value_kind = ValueKind.NULL if keyword == "null" else ValueKind.BOOLEAN
        node.data_bytes += len(keyword)

    @staticmethod
    def _consume_digits(scanner: JsonScanner) -> int:
        count = 0
        while (item := scanner.peek()) is not None and item[1] in _DIGITS:
            scanner.advance()
            count += 1
        return count

    def _parse_number(self, scanner: JsonScanner, node: JsonSize) -> None:
        """Consume ``-? digits (. digits)? ([eE] [+-]? digits)?`` greedily."""
        start = scanner.offset
        item = scanner.peek()
        if item is not None and item[1] == "-":
            scanner.advance()
        if not self._consume_digits(scanner):
            raise MalformedInputError("expected digit", scanner.offset)

        item = scanner.peek()
        if item is not None and item[1] == ".":
            scanner.advance()
            if not self._consume_digits(scanner):
                raise MalformedInputError("expected digit after '.'", scanner.offset)

        item = scanner.peek()
        if item is not None and item[1] in "eE":
            scanner.advance()
            item = scanner.peek()
            if item is not None and item[1] in "+-":
                scanner.advance()
            if not self._consume_digits(scanner):
                raise MalformedInputError("expected exponent digit", scanner.offset)

        node.data_bytes += scanner.offset - start


def verify_byte_conservation(text: str, root: JsonSize) -> None:
    """Check that ``root`` accounts for every byte of ``text`` exactly once.

    The root's counters must add up to the UTF-8 length of the text, and no
    node may have a negative share of its own once its children's totals are
    subtracted.

    Raises:
        InvariantViolationError: On any mismatch.
    """
    expected = len(text.encode("utf-8"))
    counted = root.total_size()
    if counted != expected:
        logger.error("Byte accounting mismatch: counted=%d expected=%d", counted, expected)
        msg = (
            f"bytes not conserved: counted={counted} expected={expected} "
            f"(whitespace={root.whitespace}, control={root.control_bytes}, "
            f"data={root.data_bytes})"
        )
        raise InvariantViolationError(msg)

    for node in root.walk():
        own = node.own_counts()
        if own.whitespace < 0 or own.control_bytes < 0 or own.data_bytes < 0:
            logger.error("Negative own byte share on %s node: %s", node.value_kind, own)
            msg = f"children of a {node.value_kind} node outweigh it: own share {own}"
            raise InvariantViolationError(msg)
