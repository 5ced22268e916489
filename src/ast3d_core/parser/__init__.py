# src/ast3d_core/parser/__init__.py
from .raw_data import (
    ParsedConnection,
    ParsedEndpoint,
    ParsedGraph,
    ParsedNode,
)
from .cursor import LineCursor
from .lexer import LineJudgment, LineKind, classify_line
from .properties import coerce_value, parse_inline_properties, parse_property_block
from .parser import DiagramParser
from .exceptions import ParsingError, PropertyCoercionError

__all__ = [
    # IR Data Structures
    "ParsedNode",
    "ParsedConnection",
    "ParsedEndpoint",
    "ParsedGraph",
    # Classification and Properties
    "LineCursor",
    "LineJudgment",
    "LineKind",
    "classify_line",
    "coerce_value",
    "parse_inline_properties",
    "parse_property_block",
    # Parser and Exceptions
    "DiagramParser",
    "ParsingError",
    "PropertyCoercionError",
]
