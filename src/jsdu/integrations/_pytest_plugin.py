"""pytest plugin for jsdu.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

import json
from typing import Any

import pytest

from jsdu import ParserConfig, build_size_tree, minify, prettify
from jsdu.tree.parser import verify_byte_conservation


@pytest.fixture(scope="session")
def assert_bytes_conserved() -> Any:
    """Fixture that returns a callable byte-accounting asserter.

    The fixture is session-scoped because the returned callable is stateless
    (each call builds its own size tree).

    Usage in tests::

        def test_payload(assert_bytes_conserved):
            tree = assert_bytes_conserved('{"a": [1, 2, 3]}')
            assert tree.data_bytes == 4

    Returns:
        A callable ``_assert(text, check_transforms=True, indent_width=4)``
        returning the size tree, or raising ``AssertionError``.
    """

    def _assert(
        text: str,
        check_transforms: bool = True,
        indent_width: int = 4,
    ) -> Any:
        """Assert that ``text`` parses and every byte is attributed once.

        Args:
            text:             The JSON document under test.
            check_transforms: Also assert that ``minify`` and ``prettify``
                preserve the document's logical value.  Default True.
            indent_width:     Indent width passed to ``prettify``.

        Raises:
            AssertionError: When the accounting does not add up (message
                contains ``counted=`` and ``expected=``) or a transform
                changed the document's value.
        """
        tree = build_size_tree(text, ParserConfig(check_invariant=False))
        verify_byte_conservation(text, tree)

        if check_transforms:
            value = json.loads(text)
            outputs = {
                "minify": minify(text),
                "prettify": prettify(text, indent_width),
            }
            for name, output in outputs.items():
                if json.loads(output) != value:
                    raise AssertionError(
                        f"{name} changed the document value\n"
                        f"  input:  {text!r}\n"
                        f"  output: {output!r}"
                    )
        return tree

    return _assert
