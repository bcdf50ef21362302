"""JSON Pointer (RFC 6901) navigation over a size tree.

Navigation works purely on the tree's structure: array members are selected
by index, object members by comparing the pointer token with the member's
decoded key.  Values are never re-parsed, and the returned subtree keeps the
sizes computed for the full document.

Pointer syntax:
- ``""`` is the whole document.
- Each ``/token`` descends one level; ``~1`` stands for ``/`` and ``~0`` for
  ``~`` inside a token.
"""

from __future__ import annotations

import re

from jsdu.errors import PointerError
from jsdu.tree.keys import KeyResolver
from jsdu.tree.nodes import JsonSize, ValueKind

__all__ = ["navigate", "parse_pointer"]

# Array index per RFC 6901: "0" or a digit string without a leading zero.
_ARRAY_INDEX = re.compile(r"0|[1-9][0-9]*")

# "~" must be followed by "0" or "1".
_BAD_TILDE = re.compile(r"~(?![01])")


def parse_pointer(pointer: str) -> list[str]:
    """Split a JSON Pointer into unescaped reference tokens.

    Raises:
        PointerError: If the pointer is neither empty nor starts with ``/``,
            or a token contains a ``~`` escape other than ``~0``/``~1``.
    """
    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise PointerError(pointer, None, "JSON Pointer must be empty or start with '/'")

    tokens = []
    for token in pointer[1:].split("/"):
        if _BAD_TILDE.search(token):
            raise PointerError(pointer, token, f"invalid '~' escape in token {token!r}")
        # Order matters: "~01" is the literal "~1", not "/".
        tokens.append(token.replace("~1", "/").replace("~0", "~"))
    return tokens


def navigate(
    node: JsonSize,
    pointer: str,
    text: str,
    resolver: KeyResolver | None = None,
) -> JsonSize:
    """Return the subtree of ``node`` that ``pointer`` refers to.

    Args:
        node:     Tree (or subtree) to navigate from.
        pointer:  JSON Pointer, relative to ``node``.
        text:     The document ``node`` was built from; needed to decode keys.
        resolver: Optional resolver to reuse; one is created when None.

    Returns:
        The selected node.  Object members with duplicate keys resolve to the
        first occurrence.

    Raises:
        PointerError: If the pointer is malformed or selects nothing.
    """
    tokens = parse_pointer(pointer)
    if not tokens:
        return node
    if resolver is None:
        resolver = KeyResolver(text)

    current = node
    for token in tokens:
        if current.value_kind == ValueKind.ARRAY:
            if not _ARRAY_INDEX.fullmatch(token):
                raise PointerError(pointer, token, f"invalid array index {token!r}")
            index = int(token)
            if index >= len(current.children):
                raise PointerError(
                    pointer,
                    token,
                    f"index {index} out of range for array of {len(current.children)}",
                )
            current = current.children[index]
        elif current.value_kind == ValueKind.OBJECT:
            for child in current.children:
                if resolver.decode(child.key) == token:
                    current = child
                    break
            else:
                raise PointerError(pointer, token, f"no member named {token!r}")
        else:
            raise PointerError(
                pointer, token, f"cannot descend into a {current.value_kind} value"
            )
    return current
