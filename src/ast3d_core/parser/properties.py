# src/ast3d_core/parser/properties.py
"""
Property blocks attached to node declarations.

Two forms are accepted:

    A[Function: f] {color: "#ff0000", position: [10, 0, 5]}

    A[Function: f]
    {
      color: "#ff0000"
      position: [10, 0, 5]
    }

Values from both forms go through `coerce_value`: surrounding quotes are removed,
numeric literals become int/float, bracketed JSON arrays become lists, anything
else stays a string.
"""
import json
import logging
import re
from typing import Any, Dict, List

from .cursor import LineCursor

logger = logging.getLogger(__name__)

_NUMERIC_REGEX = re.compile(r"^[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?$")
_INTEGER_REGEX = re.compile(r"^[-+]?\d+$")

BLOCK_OPEN = "{"
BLOCK_CLOSE = "}"


def unquote(value: str) -> str:
    """Trims whitespace and any surrounding quote characters."""
    return value.strip().strip("\"'")


def coerce_value(raw: str) -> Any:
    value = unquote(raw)
    if _NUMERIC_REGEX.match(value):
        return int(value) if _INTEGER_REGEX.match(value) else float(value)
    if value.startswith("[") and value.endswith("]"):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            logger.debug(f"Bracketed value '{value}' is not a JSON array; keeping it as text.")
            return value
        if isinstance(parsed, list):
            return parsed
    return value


def split_top_level(text: str, separator: str = ",") -> List[str]:
    """Splits on `separator` except inside brackets or quotes."""
    parts, current = [], []
    depth = 0
    quote = None
    for char in text:
        if quote:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char in "[(":
            depth += 1
        elif char in "])":
            depth = max(depth - 1, 0)
        elif char == separator and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return [p.strip() for p in parts if p.strip()]


def parse_property_pair(text: str):
    """Returns (key, value) for a `key: value` fragment, or None if either side is empty."""
    if ":" not in text:
        return None
    key, value = text.split(":", 1)
    key, value = key.strip(), value.strip()
    if not key or not value:
        return None
    return key, coerce_value(value)


def parse_inline_properties(body: str) -> Dict[str, Any]:
    """
    Parses the inside of an inline `{...}` block.

    A fragment without a colon continues the previous value, so unquoted comma
    triples such as `scale: 2, 1, 1` stay whole.
    """
    pairs: List[List[str]] = []
    for fragment in split_top_level(body):
        if ":" in fragment:
            key, raw = fragment.split(":", 1)
            pairs.append([key.strip(), raw.strip()])
        elif pairs:
            pairs[-1][1] = f"{pairs[-1][1]}, {fragment}"
        else:
            logger.debug(f"Ignoring inline property fragment without a key: {fragment!r}")

    properties: Dict[str, Any] = {}
    for key, raw in pairs:
        if key and raw:
            properties[key] = coerce_value(raw)
    return properties


def extract_inline_block(remainder: str):
    """Returns the body of a `{...}` that makes up the whole remainder of a node line, else None."""
    if remainder.startswith(BLOCK_OPEN) and remainder.endswith(BLOCK_CLOSE) and len(remainder) >= 2:
        return remainder[1:-1]
    return None


def parse_property_block(cursor: LineCursor) -> Dict[str, Any]:
    """
    Reads a multi-line block if the line after the cursor is exactly `{`.

    On entry the cursor points at the node declaration. On exit it points at the
    closing `}` (or past the last line if the block is never closed), so the
    statement loop's normal advance moves beyond the block. Without a block the
    cursor is left untouched and an empty dict is returned.
    """
    if cursor.peek() != BLOCK_OPEN:
        return {}

    properties: Dict[str, Any] = {}
    cursor.advance(2)
    while cursor.has_current():
        line = cursor.current
        if line == BLOCK_CLOSE:
            return properties
        pair = parse_property_pair(line)
        if pair:
            properties[pair[0]] = pair[1]
        cursor.advance()

    logger.debug("Property block was not closed before the end of input.")
    return properties
