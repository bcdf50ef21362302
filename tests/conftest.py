"""Shared JSON documents for the jsdu test suite.

The corpus mixes every value kind, every whitespace character JSON allows,
escapes, non-ASCII text, and strings full of structural characters that a
scanner must not mistake for structure.
"""

from __future__ import annotations

import pytest

CORPUS: list[str] = [
    "null",
    "true",
    "false",
    "0",
    "-0.5e-10",
    "1234567E+11",
    '"plain"',
    '""',
    r'"esc \"quoted\" \\ back \/ \u00e9 \n tab\t"',
    '"unicode é 日本 😀"',
    "[]",
    "{}",
    "[ ]",
    "{ }",
    "[1,2,3]",
    "  [ 1 , 2 , 3 ]  ",
    '{"a": {"b": {"c": [null, true, false]}}}',
    '{"key with spaces": "value, with: structural {chars} [inside]"}',
    '{\n  "nested": [\n    {"x": 1},\n    {"y": [2, 3.5, -4e2]}\n  ],\n'
    '  "empty": {},\n  "list": []\n}',
    '\t{"a"\r\n:\t1}\n',
    r'{"tricky\\": "a\\\"b", "k\"ey": [" ] } , : "]}',
    '[[[[[[[[[{"a":"b","c":["d"]}]]]]]]]]]',
    '{"s": "19 character string", "n": -234.67e9, "boolean": true}',
]


@pytest.fixture(params=CORPUS, ids=lambda doc: repr(doc)[:40])
def document(request: pytest.FixtureRequest) -> str:
    """Each corpus document in turn."""
    doc: str = request.param
    return doc
