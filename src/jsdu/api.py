"""Public API functions for jsdu.

This module provides the five user-facing functions: build_size_tree, render,
navigate, minify and prettify.  Each call owns all of its state (scanner,
tree, resolver), so calls never interfere with each other.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jsdu.render import render as _render
from jsdu.transform.minify import minify
from jsdu.transform.prettify import prettify
from jsdu.tree.parser import SizeParser
from jsdu.tree.pointer import navigate as _navigate

if TYPE_CHECKING:
    from jsdu.config import ParserConfig, RenderConfig
    from jsdu.tree.nodes import JsonSize

__all__ = ["build_size_tree", "minify", "navigate", "prettify", "render"]


def build_size_tree(text: str, config: ParserConfig | None = None) -> JsonSize:
    """Parse a JSON document into its size tree.

    Args:
        text:   The JSON document.
        config: Parser options.  Defaults to ``ParserConfig()``.

    Returns:
        The root ``JsonSize`` node.  Its counters add up to the UTF-8 byte
        length of ``text``.

    Raises:
        MalformedInputError: If ``text`` is not well-formed JSON.
    """
    return SizeParser(config=config).parse(text)


def render(
    node: JsonSize,
    text: str,
    config: RenderConfig | None = None,
) -> list[str]:
    """Render ``node`` (a tree or subtree of ``text``) as ncdu-style lines.

    Args:
        node:   Node returned by ``build_size_tree`` or ``navigate``.
        text:   The document the tree was built from.
        config: Layout options.  Defaults to ``RenderConfig()``.

    Returns:
        A header line for ``node`` followed by one line per direct child.
    """
    return _render(node, text, config=config)


def navigate(node: JsonSize, pointer: str, text: str) -> JsonSize:
    """Return the subtree of ``node`` selected by a JSON Pointer.

    Sizes in the returned subtree are those of the original full parse.

    Raises:
        PointerError: If the pointer is malformed or selects nothing.
    """
    return _navigate(node, pointer, text)
