"""jsdu - where the bytes of a JSON document go, ncdu style."""

from __future__ import annotations

import logging

from jsdu.analyzer import SizeAnalyzer
from jsdu.api import build_size_tree, minify, navigate, prettify, render
from jsdu.config import ParserConfig, RenderConfig
from jsdu.errors import (
    InvariantViolationError,
    JsduError,
    MalformedInputError,
    NestingDepthError,
    PointerError,
)
from jsdu.tree.nodes import ByteCounts, JsonKey, JsonSize, ValueKind

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "ByteCounts",
    "InvariantViolationError",
    "JsduError",
    "JsonKey",
    "JsonSize",
    "MalformedInputError",
    "NestingDepthError",
    "ParserConfig",
    "PointerError",
    "RenderConfig",
    "SizeAnalyzer",
    "ValueKind",
    "build_size_tree",
    "minify",
    "navigate",
    "prettify",
    "render",
]
