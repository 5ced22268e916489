# src/ast3d_core/model/placement.py
"""
Interpretation of the placement properties of a node declaration.

`scale` accepts a single number (uniform), a comma-separated triple or a
three-element list. `position` accepts a three-element list or a comma-separated
triple. Both return None for anything they cannot read; callers decide on the
fallback.
"""
import math
from typing import Any, List, Optional

from ..geometry import Vector3


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _components(value: Any) -> Optional[List[float]]:
    if isinstance(value, (list, tuple)):
        if not all(_is_number(v) for v in value):
            return None
        return [float(v) for v in value]
    if isinstance(value, str):
        try:
            return [float(part) for part in value.split(",")]
        except ValueError:
            return None
    if _is_number(value):
        return [float(value)]
    return None


def parse_scale(value: Any) -> Optional[Vector3]:
    """A usable scale vector, or None when the value is malformed or not strictly positive."""
    components = _components(value)
    if components is None or len(components) not in (1, 3):
        return None
    if not all(math.isfinite(c) and c > 0 for c in components):
        return None
    if len(components) == 1:
        return Vector3(components[0], components[0], components[0])
    return Vector3(*components)


def parse_position(value: Any) -> Optional[Vector3]:
    components = _components(value)
    if components is None or len(components) != 3:
        return None
    if not all(math.isfinite(c) for c in components):
        return None
    return Vector3(*components)
