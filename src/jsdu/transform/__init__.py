"""Transform subpackage: single-pass minify and prettify.

Both transforms run the shared escape-aware scanner over the raw text, so a
structural character inside a string literal is never treated as structure.
Neither validates its input.
"""

from jsdu.transform.minify import iter_minified, minify
from jsdu.transform.prettify import iter_prettified, prettify

__all__ = ["iter_minified", "iter_prettified", "minify", "prettify"]
