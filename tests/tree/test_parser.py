"""Tests for SizeParser.

Covers the per-kind byte accounting (strings, keywords, numbers, arrays,
objects), whitespace attribution, empty containers, escapes and non-ASCII
text, key spans, deep nesting, max_depth, malformed input, and the
byte-conservation check.
"""

from __future__ import annotations

import json

import pytest

from jsdu.config import ParserConfig
from jsdu.errors import (
    InvariantViolationError,
    MalformedInputError,
    NestingDepthError,
)
from jsdu.tree.nodes import ByteCounts, JsonSize, Span, ValueKind
from jsdu.tree.parser import SizeParser, verify_byte_conservation

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def parser() -> SizeParser:
    """A fresh SizeParser with default config."""
    return SizeParser()


def _utf8_len(text: str) -> int:
    return len(text.encode("utf-8"))


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


class TestStrings:
    def test_single_string(self, parser: SizeParser) -> None:
        js = parser.parse('"19 character string"')
        assert js.control_bytes == 2
        # Only counts whitespace outside of strings
        assert js.whitespace == 0
        assert js.data_bytes == 19
        assert js.value_kind == ValueKind.STRING
        assert js.children == []

    def test_empty_string(self, parser: SizeParser) -> None:
        js = parser.parse('""')
        assert js.counts() == ByteCounts(0, 2, 0)
        assert js.value_kind == ValueKind.STRING

    def test_whitespace_inside_string_is_data(self, parser: SizeParser) -> None:
        js = parser.parse('"  a  "')
        assert js.whitespace == 0
        assert js.data_bytes == 5

    @pytest.mark.parametrize(
        ("text", "data"),
        [
            (r'"a\"b"', 4),
            (r'"\\"', 2),
            (r'"\u00e9"', 6),
            (r'"\/\b\f\n\r\t"', 12),
            (r'"end\\"', 5),
            (r'"\\\""', 4),
        ],
    )
    def test_escapes_counted_once(
        self, parser: SizeParser, text: str, data: int
    ) -> None:
        js = parser.parse(text)
        assert js.control_bytes == 2
        assert js.data_bytes == data
        assert js.total_size() == _utf8_len(text)

    @pytest.mark.parametrize(
        ("text", "data"),
        [('"é"', 2), ('"日本"', 6), ('"😀"', 4), ('"aé日😀"', 10)],
    )
    def test_non_ascii_counts_utf8_bytes(
        self, parser: SizeParser, text: str, data: int
    ) -> None:
        js = parser.parse(text)
        assert js.data_bytes == data
        assert js.total_size() == _utf8_len(text)


class TestKeywords:
    @pytest.mark.parametrize(
        ("text", "kind"),
        [
            ("true", ValueKind.BOOLEAN),
            ("false", ValueKind.BOOLEAN),
            ("null", ValueKind.NULL),
        ],
    )
    def test_keyword_is_all_data(
        self, parser: SizeParser, text: str, kind: ValueKind
    ) -> None:
        js = parser.parse(text)
        assert js.control_bytes == 0
        assert js.whitespace == 0
        assert js.data_bytes == len(text)
        assert js.value_kind == kind
        assert js.children == []


class TestNumbers:
    @pytest.mark.parametrize(
        ("text", "size"),
        [
            ("1", 1),
            ("12", 2),
            ("123", 3),
            ("1234", 4),
            ("1234.6", 6),
            ("1234.67", 7),
            ("1234.67e9", 9),
            ("1234.67E9", 9),
            ("1234567E9", 9),
            ("1234567e9", 9),
            ("1234567e+11", 11),
            ("1234567e-11", 11),
            ("-2", 2),
            ("-234.67e9", 9),
            ("0", 1),
        ],
    )
    def test_number_size(self, parser: SizeParser, text: str, size: int) -> None:
        js = parser.parse(text)
        assert js.control_bytes == 0
        assert js.whitespace == 0
        assert js.data_bytes == size
        assert js.value_kind == ValueKind.NUMBER
        assert js.children == []


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------


class TestArrays:
    def test_single_member(self, parser: SizeParser) -> None:
        js = parser.parse('["19 character string"]')
        assert js.control_bytes == 4
        assert js.whitespace == 0
        assert js.data_bytes == 19
        assert js.value_kind == ValueKind.ARRAY
        assert len(js.children) == 1

    def test_three_members(self, parser: SizeParser) -> None:
        js = parser.parse('["19 character string", -234.67e9, null]')
        assert js.control_bytes == 6
        assert js.whitespace == 2
        assert js.data_bytes == 19 + 9 + 4
        assert len(js.children) == 3
        assert [c.value_kind for c in js.children] == [
            ValueKind.STRING,
            ValueKind.NUMBER,
            ValueKind.NULL,
        ]

    def test_numbers(self, parser: SizeParser) -> None:
        js = parser.parse("[-234.67e9, 0]")
        assert js.value_kind == ValueKind.ARRAY
        assert len(js.children) == 2
        assert js.control_bytes == 3
        assert js.whitespace == 1
        assert js.data_bytes == 9 + 1

    def test_empty(self, parser: SizeParser) -> None:
        js = parser.parse("[]")
        assert js.counts() == ByteCounts(0, 2, 0)
        assert js.value_kind == ValueKind.ARRAY
        assert js.children == []

    def test_empty_with_whitespace(self, parser: SizeParser) -> None:
        js = parser.parse("  [   ]    ")
        assert js.control_bytes == 2
        assert js.whitespace == 2 + 3 + 4
        assert js.data_bytes == 0
        assert js.children == []

    def test_indices_follow_source_order(self, parser: SizeParser) -> None:
        js = parser.parse("[10, 20, 30]")
        assert [c.key.index for c in js.children] == [0, 1, 2]
        assert all(c.key.span is None for c in js.children)

    def test_whitespace_around_member_belongs_to_member(
        self, parser: SizeParser
    ) -> None:
        js = parser.parse("[ 1 ]")
        assert js.own_counts() == ByteCounts(0, 2, 0)
        assert js.children[0].counts() == ByteCounts(2, 0, 1)

    def test_nested_empty_arrays(self, parser: SizeParser) -> None:
        js = parser.parse("[[], [[]]]")
        assert len(js.children) == 2
        assert js.children[0].children == []
        assert len(js.children[1].children) == 1
        assert js.total_size() == 10


# ---------------------------------------------------------------------------
# Objects
# ---------------------------------------------------------------------------


class TestObjects:
    def test_single_member(self, parser: SizeParser) -> None:
        js = parser.parse('{"s": "19 character string"}')
        assert js.control_bytes == 2 + 2 + 2 + 1
        assert js.whitespace == 1
        assert js.data_bytes == 19 + 1
        assert js.value_kind == ValueKind.OBJECT
        assert len(js.children) == 1

    def test_three_members(self, parser: SizeParser) -> None:
        js = parser.parse(
            '{"s": "19 character string", "n": -234.67e9, "boolean": true}'
        )
        assert len(js.children) == 3
        assert js.whitespace == 5
        assert js.data_bytes == 19 + 9 + 4 + 1 + 1 + 7
        # braces + 3 colons + 2 commas, key quotes, the value string's quotes
        assert js.control_bytes == (2 + 3 + 2) + 3 * 2 + 2

    def test_empty(self, parser: SizeParser) -> None:
        js = parser.parse("{}")
        assert js.counts() == ByteCounts(0, 2, 0)
        assert js.value_kind == ValueKind.OBJECT
        assert js.children == []

    def test_empty_with_whitespace(self, parser: SizeParser) -> None:
        js = parser.parse("{ \n\t}")
        assert js.counts() == ByteCounts(3, 2, 0)
        assert js.children == []

    def test_key_bytes_belong_to_object(self, parser: SizeParser) -> None:
        js = parser.parse('{ "ab" : 1 }')
        # object: braces, key quotes, colon; whitespace around the key
        assert js.own_counts() == ByteCounts(2, 5, 2)
        # member: whitespace after the colon and before the brace
        assert js.children[0].counts() == ByteCounts(2, 0, 1)

    def test_key_spans_point_after_opening_quote(self, parser: SizeParser) -> None:
        text = '{"s": 1, "long": 2}'
        js = parser.parse(text)
        assert [c.key.span for c in js.children] == [Span(2), Span(10)]
        assert [c.key.index for c in js.children] == [0, 1]
        assert text[2] == "s"
        assert text[10:14] == "long"

    def test_key_span_is_byte_offset(self, parser: SizeParser) -> None:
        text = '{"é": 1, "k": 2}'
        js = parser.parse(text)
        # "é" is two bytes, so "k" starts one byte later than its char index
        assert text.index("k") == 10
        assert js.children[1].key.span == Span(11)
        assert text.encode("utf-8")[11:12] == b"k"

    def test_duplicate_keys_are_kept(self, parser: SizeParser) -> None:
        js = parser.parse('{"a": 1, "a": 2}')
        assert len(js.children) == 2

    def test_nested(self, parser: SizeParser) -> None:
        text = '{"a": {"b": [1, {"c": null}]}}'
        js = parser.parse(text)
        inner = js.children[0]
        assert inner.value_kind == ValueKind.OBJECT
        array = inner.children[0]
        assert array.value_kind == ValueKind.ARRAY
        assert array.children[1].children[0].value_kind == ValueKind.NULL
        assert js.total_size() == len(text)


# ---------------------------------------------------------------------------
# Byte conservation
# ---------------------------------------------------------------------------


class TestByteConservation:
    def test_corpus_conserves_bytes(self, parser: SizeParser, document: str) -> None:
        js = parser.parse(document)
        assert js.total_size() == _utf8_len(document)

    def test_corpus_own_shares_non_negative(
        self, parser: SizeParser, document: str
    ) -> None:
        js = parser.parse(document)
        for node in js.walk():
            own = node.own_counts()
            assert own.whitespace >= 0
            assert own.control_bytes >= 0
            assert own.data_bytes >= 0

    def test_own_shares_sum_to_document(
        self, parser: SizeParser, document: str
    ) -> None:
        js = parser.parse(document)
        assert sum(n.own_counts().total for n in js.walk()) == _utf8_len(document)

    def test_children_match_json_module(
        self, parser: SizeParser, document: str
    ) -> None:
        value = json.loads(document)
        js = parser.parse(document)
        expected = len(value) if isinstance(value, (list, dict)) else 0
        assert len(js.children) == expected

    def test_verify_detects_total_mismatch(self, parser: SizeParser) -> None:
        js = parser.parse("[1, 2]")
        js.data_bytes += 1
        with pytest.raises(InvariantViolationError, match=r"counted=7 expected=6"):
            verify_byte_conservation("[1, 2]", js)

    def test_verify_detects_negative_own_share(self) -> None:
        root = JsonSize(data_bytes=1, children=[JsonSize(data_bytes=2)])
        with pytest.raises(InvariantViolationError, match=r"outweigh"):
            verify_byte_conservation("1", root)

    def test_invariant_violation_is_assertion(self) -> None:
        assert issubclass(InvariantViolationError, AssertionError)

    def test_check_can_be_disabled(self) -> None:
        js = SizeParser(ParserConfig(check_invariant=False)).parse("[1]")
        assert js.total_size() == 3


# ---------------------------------------------------------------------------
# Deep nesting
# ---------------------------------------------------------------------------


class TestDeepNesting:
    @pytest.mark.parametrize("depth", [1000, 100_000])
    def test_deep_arrays_parse(self, parser: SizeParser, depth: int) -> None:
        text = "[" * depth + "]" * depth
        js = parser.parse(text)
        assert js.total_size() == 2 * depth
        assert js.node_count() == depth

    def test_deep_arrays_with_leaf(self, parser: SizeParser) -> None:
        depth = 5000
        text = "[" * depth + '"x"' + "]" * depth
        js = parser.parse(text)
        assert js.control_bytes == 2 * depth + 2
        assert js.data_bytes == 1
        node = js
        for _ in range(depth):
            assert len(node.children) == 1
            node = node.children[0]
        assert node.value_kind == ValueKind.STRING

    def test_deep_objects(self, parser: SizeParser) -> None:
        depth = 3000
        text = '{"k":' * depth + "0" + "}" * depth
        js = parser.parse(text)
        assert js.total_size() == len(text)

    def test_max_depth_allows_limit(self) -> None:
        parser = SizeParser(ParserConfig(max_depth=3))
        js = parser.parse("[[[]]]")
        assert js.node_count() == 3

    def test_max_depth_exceeded(self) -> None:
        parser = SizeParser(ParserConfig(max_depth=3))
        with pytest.raises(NestingDepthError) as exc_info:
            parser.parse("[[[[]]]]")
        assert exc_info.value.max_depth == 3
        assert exc_info.value.offset == 3

    def test_nesting_depth_error_is_malformed_input(self) -> None:
        with pytest.raises(MalformedInputError):
            SizeParser(ParserConfig(max_depth=1)).parse('{"a": {}}')


# ---------------------------------------------------------------------------
# Malformed input
# ---------------------------------------------------------------------------


class TestMalformedInput:
    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            "[1,]",
            "[,1]",
            "[,]",
            '{"a" 1}',
            '{"a":}',
            '{"a":1,}',
            "{1:2}",
            "tru",
            "nul",
            "fals3",
            "1 2",
            "]",
            "[1]]",
            "[1}",
            '{"a": 1]',
            '"abc',
            "[1",
            '{"a": 1',
            "-",
            "1.",
            "1e",
            "1e+",
            "@",
            "[1 2]",
            '{"a":1 "b":2}',
            "'single'",
        ],
    )
    def test_raises(self, parser: SizeParser, text: str) -> None:
        with pytest.raises(MalformedInputError):
            parser.parse(text)

    def test_error_reports_offset(self, parser: SizeParser) -> None:
        with pytest.raises(MalformedInputError) as exc_info:
            parser.parse("[1,]")
        assert exc_info.value.offset == 3
        assert "at byte 3" in str(exc_info.value)

    def test_error_is_value_error(self, parser: SizeParser) -> None:
        with pytest.raises(ValueError):
            parser.parse("nope")

    def test_parser_reusable_after_error(self, parser: SizeParser) -> None:
        with pytest.raises(MalformedInputError):
            parser.parse("[")
        assert parser.parse("[]").control_bytes == 2
