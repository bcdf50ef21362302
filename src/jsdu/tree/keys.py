"""KeyResolver: turns stored key spans back into text, only when needed.

The size parser records where each object key starts instead of copying it.
A resolver holds the document and rescans from that offset to the closing
quote when a key is actually displayed, so a tree that is never rendered
never pays for key strings.

Each resolver keeps its own ``LRUCache`` of display labels: browsing a tree
re-renders the same listings again and again, and cached labels skip the
rescan.  The UTF-8 encoding of the document is computed once, on first use.
"""

from __future__ import annotations

import json

from cachetools import LRUCache

from jsdu.scanner import find_string_end
from jsdu.tree.nodes import JsonKey, Span

__all__ = ["KeyResolver", "resolve"]


class KeyResolver:
    """Resolves ``JsonKey`` values against the document they were parsed from.

    A resolver must only be used with keys from a tree built over the same
    text; spans are plain byte offsets and are meaningless elsewhere.

    Args:
        text:     The original JSON document.
        max_size: Maximum number of display labels to memoize.  Defaults to
            512.  The least-recently-used label is silently evicted.

    Example::

        text = '{"user name": 1}'
        tree = SizeParser().parse(text)
        KeyResolver(text).display(tree.children[0].key)   # '"user name"'
    """

    def __init__(self, text: str, max_size: int = 512) -> None:
        self._text = text
        self._data: bytes | None = None
        self._cache: LRUCache[Span, str] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def max_size(self) -> int:
        """The maximum number of labels this resolver can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of labels held."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def raw(self, span: Span) -> str:
        """Return the key text at ``span`` exactly as written (escapes intact)."""
        if self._data is None:
            self._data = self._text.encode("utf-8")
        end = find_string_end(self._data, span.start)
        return self._data[span.start : end].decode("utf-8")

    def display(self, key: JsonKey) -> str:
        """Return the label for ``key``: its index, or the quoted raw key."""
        if key.span is None:
            return str(key.index)
        label = self._cache.get(key.span)
        if label is None:
            label = f'"{self.raw(key.span)}"'
            self._cache[key.span] = label
        return label

    def decode(self, key: JsonKey) -> str:
        """Return the key's unescaped text, as a JSON parser would see it.

        Array keys decode to their index as a string.
        """
        if key.span is None:
            return str(key.index)
        decoded: str = json.loads(f'"{self.raw(key.span)}"')
        return decoded


def resolve(key: JsonKey, text: str) -> str:
    """One-off ``KeyResolver(text).display(key)`` without keeping a cache."""
    if key.span is None:
        return str(key.index)
    return f'"{KeyResolver(text, max_size=1).raw(key.span)}"'
