"""Minifier: drop insignificant whitespace from JSON text in one pass."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jsdu.scanner import WHITESPACE, JsonScanner

if TYPE_CHECKING:
    from collections.abc import Iterator

__all__ = ["iter_minified", "minify"]


def iter_minified(text: str) -> Iterator[str]:
    """Yield the characters of ``text`` minus whitespace outside strings.

    Quotes and escape sequences pass through verbatim; the scanner's escape
    state keeps ``\\"`` from being mistaken for the end of a string.  The
    input is not validated.
    """
    scanner = JsonScanner(text)
    for _, ch in scanner:
        if ch in WHITESPACE and not scanner.in_string:
            continue
        yield ch


def minify(text: str) -> str:
    """Return ``text`` with all whitespace outside strings removed.

    Idempotent: ``minify(minify(text)) == minify(text)``.
    """
    return "".join(iter_minified(text))
