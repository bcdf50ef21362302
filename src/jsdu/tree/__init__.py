"""Tree subpackage: size tree types, the size parser, keys and navigation.

Re-exports the public API for the tree module:
- JsonSize: dataclass for a node of the size tree
- ValueKind: StrEnum of the six JSON value kinds
- JsonKey / Span: a node's position in its parent, object keys kept as offsets
- ByteCounts: whitespace / control / data totals
- SizeParser: builds a JsonSize tree from JSON text
- KeyResolver: turns key spans back into display text on demand
- navigate: JSON Pointer navigation over a built tree
"""

from jsdu.tree.keys import KeyResolver
from jsdu.tree.nodes import ByteCounts, JsonKey, JsonSize, Span, ValueKind
from jsdu.tree.parser import SizeParser
from jsdu.tree.pointer import navigate

__all__ = [
    "ByteCounts",
    "JsonKey",
    "JsonSize",
    "KeyResolver",
    "SizeParser",
    "Span",
    "ValueKind",
    "navigate",
]
