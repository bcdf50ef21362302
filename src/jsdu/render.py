"""Renderer: ncdu-style listing of a size tree node and its direct children.

Output looks like::

              61 [##########] Total
              22 [####      ] "s"
              10 [##        ] "n"
               5 [#         ] "boolean"

The first line is the node itself; each following line is one child, in
source order, with a bar showing its share of the node's total.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jsdu.config import RenderConfig
from jsdu.tree.keys import KeyResolver

if TYPE_CHECKING:
    from jsdu.tree.nodes import JsonSize

__all__ = ["render", "usage_bar"]


def usage_bar(
    part: int,
    whole: int,
    width: int = 10,
    fill: str = "#",
    empty: str = " ",
) -> str:
    """Return a ``width``-cell bar showing ``part`` as a share of ``whole``.

    Cell ``i`` is filled iff ``part * width > whole * i``, so any non-zero
    part fills at least the first cell and only the whole fills every cell.
    Integer arithmetic only; Python ints do not overflow on large documents.
    """
    return "".join(fill if part * width > whole * i else empty for i in range(width))


def _line(size: int, bar: str, label: str, config: RenderConfig) -> str:
    return f"{size:>{config.size_width}} [{bar}] {label}"


def render(
    node: JsonSize,
    text: str,
    config: RenderConfig | None = None,
    resolver: KeyResolver | None = None,
) -> list[str]:
    """Render ``node`` and its direct children as display lines.

    Args:
        node:     Size tree node (root or a navigated subtree).
        text:     The document the tree was built from, for key labels.
        config:   Layout options.  Defaults to ``RenderConfig()``.
        resolver: Optional ``KeyResolver`` to reuse across calls; a fresh one
            is created when None.

    Returns:
        A header line for ``node`` followed by one line per child.  Leaf
        nodes produce only the header line.
    """
    config = config if config is not None else RenderConfig()
    if resolver is None:
        resolver = KeyResolver(text, max_size=config.key_cache_size)

    total = node.total_size()
    full_bar = config.fill_char * config.bar_width
    lines = [_line(total, full_bar, config.header_label, config)]

    for child in node.children:
        size = child.total_size()
        bar = usage_bar(
            size, total, config.bar_width, config.fill_char, config.empty_char
        )
        lines.append(_line(size, bar, resolver.display(child.key), config))
    return lines
