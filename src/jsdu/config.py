"""ParserConfig and RenderConfig for jsdu.

Both are frozen (immutable) dataclasses validated on construction.
ParserConfig governs how the size tree is built; RenderConfig governs how a
node of that tree is turned into display lines.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["ParserConfig", "RenderConfig"]


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Immutable configuration for the size parser.

    Attributes:
        max_depth: Maximum container nesting depth.  ``None`` (the default)
            means unbounded: the parser keeps its own work stack, so depth is
            limited only by memory, never by the interpreter recursion limit.
        check_invariant: When True, verify the byte-conservation invariant
            after every parse.  Default True.
    """

    max_depth: int | None = None
    check_invariant: bool = True

    def __post_init__(self) -> None:
        if self.max_depth is not None and self.max_depth < 1:
            msg = f"max_depth must be >= 1 or None, got {self.max_depth}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable configuration for the ncdu-style renderer.

    Attributes:
        bar_width: Number of cells in each usage bar.  Default 10.
        size_width: Minimum width of the right-aligned size column.
        fill_char: Character for a filled bar cell.
        empty_char: Character for an empty bar cell.
        header_label: Label printed on the header line of a listing.
        key_cache_size: Maximum number of resolved keys memoized by the
            ``KeyResolver`` a ``SizeAnalyzer`` owns.
    """

    bar_width: int = 10
    size_width: int = 12
    fill_char: str = "#"
    empty_char: str = " "
    header_label: str = "Total"
    key_cache_size: int = 512

    def __post_init__(self) -> None:
        if self.bar_width < 1:
            msg = f"bar_width must be >= 1, got {self.bar_width}"
            raise ValueError(msg)
        if self.size_width < 0:
            msg = f"size_width must be >= 0, got {self.size_width}"
            raise ValueError(msg)
        if len(self.fill_char) != 1:
            msg = f"fill_char must be a single character, got {self.fill_char!r}"
            raise ValueError(msg)
        if len(self.empty_char) != 1:
            msg = f"empty_char must be a single character, got {self.empty_char!r}"
            raise ValueError(msg)
        if self.key_cache_size < 1:
            msg = f"key_cache_size must be >= 1, got {self.key_cache_size}"
            raise ValueError(msg)
