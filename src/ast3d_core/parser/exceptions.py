# src/ast3d_core/parser/exceptions.py
"""
Diagnosable exceptions for the parsing stage.

The parser is deliberately permissive: a line it cannot interpret is skipped, not
reported. These exceptions therefore cover only the cases where continuing would
be meaningless: input that is not text at all, and a property value that a later
stage must coerce but cannot.
"""
from typing import Any, Optional

from ..errors import DiagnosableError, format_diagnostic_report


class BaseParsingError(DiagnosableError):
    """
    Local base class for all diagram parsing errors.
    """
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parsing Error",
            details=str(self),
            suggestion="Please check the format and content of the diagram text.",
            context={}
        )


class ParsingError(BaseParsingError):
    """
    Raised when the parser is handed something it cannot read as diagram text.
    """
    def __init__(self, details: str):
        self.details = details
        super().__init__(str(self))

    def __str__(self):
        return f"Parsing error: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Diagram Parsing Error",
            details=self.details,
            suggestion="Pass the diagram source as a single string of newline-separated statements.",
            context={}
        )


class PropertyCoercionError(BaseParsingError):
    """
    Raised when a property that must be numeric (e.g. 'opacity') holds a value
    that cannot be converted.
    """
    def __init__(self, key: str, value: Any, details: str, node_id: Optional[str] = None):
        self.key = key
        self.value = value
        self.details = details
        self.node_id = node_id
        super().__init__(str(self))

    def __str__(self):
        owner = f" of node '{self.node_id}'" if self.node_id else ""
        return f"Cannot coerce property '{self.key}'{owner} (value {self.value!r}): {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Property Coercion Error",
            details=str(self),
            suggestion=f"Give '{self.key}' a plain numeric value, e.g. '{self.key}: 0.5'.",
            context={'node_id': self.node_id, 'user_input': f"{self.key}: {self.value}"}
        )
