"""SizeAnalyzer: one document, parsed once, browsed many times.

This is the wiring layer between the size parser, navigation and the
renderer.  The tree is built once in ``__init__``; every later ``render`` or
``navigate`` call reuses it together with a single ``KeyResolver``, so keys
that have been displayed once are served from the resolver's LRU cache on
subsequent listings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jsdu.config import ParserConfig, RenderConfig
from jsdu.render import render
from jsdu.tree.keys import KeyResolver
from jsdu.tree.parser import SizeParser
from jsdu.tree.pointer import navigate

if TYPE_CHECKING:
    from jsdu.tree.nodes import ByteCounts, JsonSize

__all__ = ["SizeAnalyzer"]

logger = logging.getLogger(__name__)


class SizeAnalyzer:
    """Size tree of one JSON document with pointer-based browsing.

    Two ``SizeAnalyzer`` instances never share state; each owns its tree and
    its resolver cache.

    Example::

        analyzer = SizeAnalyzer('{"users": [{"name": "Ann"}, {"name": "Bo"}]}')
        analyzer.render("/users")
        analyzer.summary("/users/0").data_bytes   # 7
    """

    def __init__(
        self,
        text: str,
        parser_config: ParserConfig | None = None,
        render_config: RenderConfig | None = None,
    ) -> None:
        """Parse ``text`` and prepare it for browsing.

        Args:
            text:          The JSON document.
            parser_config: Parser options.  Defaults to ``ParserConfig()``.
            render_config: Layout options, including the resolver cache size.
                Defaults to ``RenderConfig()``.

        Raises:
            MalformedInputError: If ``text`` is not well-formed JSON.
        """
        self._text = text
        self._render_config = (
            render_config if render_config is not None else RenderConfig()
        )
        self._tree = SizeParser(config=parser_config).parse(text)
        self._resolver = KeyResolver(text, max_size=self._render_config.key_cache_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def tree(self) -> JsonSize:
        """Root of the size tree."""
        return self._tree

    @property
    def resolver(self) -> KeyResolver:
        return self._resolver

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def navigate(self, pointer: str = "") -> JsonSize:
        """Return the subtree at ``pointer`` (JSON Pointer, RFC 6901).

        Raises:
            PointerError: If the pointer is malformed or selects nothing.
        """
        node = navigate(self._tree, pointer, self._text, resolver=self._resolver)
        logger.debug(
            "Navigated to %r (%s, %d bytes)",
            pointer,
            node.value_kind,
            node.total_size(),
        )
        return node

    def render(self, pointer: str = "") -> list[str]:
        """Render the listing for the subtree at ``pointer``."""
        return render(
            self.navigate(pointer),
            self._text,
            config=self._render_config,
            resolver=self._resolver,
        )

    def summary(self, pointer: str = "") -> ByteCounts:
        """Return whitespace / control / data totals for the subtree at ``pointer``."""
        return self.navigate(pointer).counts()
