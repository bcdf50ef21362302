"""Size tree data types: JsonSize, JsonKey, Span, ValueKind and ByteCounts.

A size tree mirrors the object/array nesting of a JSON document.  Each node
counts the bytes of its subtree in three buckets (whitespace, control, data).
Object keys are never copied out of the document: a node only remembers the
byte offset where its key starts, and ``KeyResolver`` turns that into text on
demand.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

__all__ = ["ByteCounts", "JsonKey", "JsonSize", "Span", "ValueKind"]


class ValueKind(StrEnum):
    """Kind of JSON value a size tree node stands for.

    StrEnum values are the lowercased member names.
    """

    NULL = auto()
    BOOLEAN = auto()
    NUMBER = auto()
    STRING = auto()
    OBJECT = auto()
    ARRAY = auto()


@dataclass(frozen=True, slots=True)
class Span:
    """UTF-8 byte offset of the first byte after an object key's opening quote."""

    start: int


@dataclass(frozen=True, slots=True)
class JsonKey:
    """Position of a node inside its parent.

    Attributes:
        index: Position among the parent's children.  This is the whole key
            for array members.
        span:  For object members, where the key text starts in the document;
            None for array members and for the root.
    """

    index: int = 0
    span: Span | None = None

    @property
    def is_member(self) -> bool:
        """True when this key names an object member."""
        return self.span is not None


@dataclass(frozen=True, slots=True)
class ByteCounts:
    """Byte totals in the three accounting buckets."""

    whitespace: int = 0
    control_bytes: int = 0
    data_bytes: int = 0

    @property
    def total(self) -> int:
        return self.whitespace + self.control_bytes + self.data_bytes


@dataclass(slots=True)
class JsonSize:
    """A node of the size tree.

    The three counters are subtree aggregates: they cover the node's own bytes
    (the punctuation and whitespace immediately around its value, plus, for
    objects, the key strings of its members) and every descendant's bytes.
    Each byte of the document belongs to exactly one node, so the root's
    counters add up to the document length.

    Attributes:
        whitespace:    Insignificant whitespace outside string literals.
        control_bytes: Quotes, braces, brackets, colons and commas.
        data_bytes:    String contents (escapes included), numbers, keywords.
        value_kind:    Which kind of JSON value this node is.
        children:      Member values in source order (objects and arrays only).
        key:           Position of this node in its parent.
    """

    whitespace: int = 0
    control_bytes: int = 0
    data_bytes: int = 0
    value_kind: ValueKind = ValueKind.NULL
    children: list[JsonSize] = field(default_factory=list)
    key: JsonKey = field(default_factory=JsonKey)

    def total_size(self) -> int:
        return self.whitespace + self.control_bytes + self.data_bytes

    def counts(self) -> ByteCounts:
        """Return this node's subtree totals."""
        return ByteCounts(self.whitespace, self.control_bytes, self.data_bytes)

    def own_counts(self) -> ByteCounts:
        """Return the bytes attributed to this node alone, excluding children."""
        whitespace = self.whitespace
        control = self.control_bytes
        data = self.data_bytes
        for child in self.children:
            whitespace -= child.whitespace
            control -= child.control_bytes
            data -= child.data_bytes
        return ByteCounts(whitespace, control, data)

    def add_counts(self, other: JsonSize) -> None:
        """Fold another node's counters into this one's."""
        self.whitespace += other.whitespace
        self.control_bytes += other.control_bytes
        self.data_bytes += other.data_bytes

    def walk(self) -> Iterator[JsonSize]:
        """Yield this node and all descendants in pre-order.

        Iterative, so arbitrarily deep trees do not hit the recursion limit.
        """
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def node_count(self) -> int:
        return sum(1 for _ in self.walk())
