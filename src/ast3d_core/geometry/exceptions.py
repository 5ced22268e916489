# src/ast3d_core/geometry/exceptions.py
"""
Diagnosable errors raised by the geometry layer.

A node's transform is the only geometric input a user controls, so the only
error here concerns it: a scale component that is zero, negative or not finite
would produce degenerate faces and bounding boxes.
"""
from dataclasses import dataclass
from typing import Tuple

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass(frozen=True)
class InvalidTransformError(DiagnosableError):
    """Raised when a Transform is constructed with an unusable scale."""
    scale: Tuple[float, float, float]
    details: str

    def __str__(self):
        return f"Invalid transform scale {self.scale}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Transform",
            details=self.details,
            suggestion="Scale components must be positive, finite numbers (e.g. 'scale: 2' or 'scale: 1, 2, 1').",
            context={'user_input': ", ".join(str(c) for c in self.scale)}
        )
