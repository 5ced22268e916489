# src/ast3d_core/errors.py
import logging
from typing import Any, Dict, Protocol, abstractmethod
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class AST3DError(Exception):
    """Base class for all custom, user-facing errors in ast3d-core."""
    pass

class GraphBuildError(AST3DError):
    """
    Raised when building a Graph from parsed statements fails for any reason.
    The message is a pre-formatted, user-friendly diagnostic report.
    """
    pass

class DiagramValidationFailure(AST3DError):
    """
    Raised by the generator facade when pre-build validation of a diagram finds
    error-level issues and the caller asked for validation to be enforced.
    The message is a pre-formatted, user-friendly diagnostic report.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own diagnostic report.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    Common concrete base class for every internal exception that can describe itself.

    Subsystem errors (parser, geometry, model, validation, config) derive from this
    class so the builder and the generator can catch one type and turn it into a
    user-facing report.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        """
        Generates the diagnostic report. Subclasses MUST implement this.
        """
        raise NotImplementedError


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    Formats the final multi-line report string shared by all diagnostics.

    Args:
        error_type: The high-level category of the error (e.g., "Property Coercion Error").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: Optional context: 'node_id', 'line_number', 'user_input', 'source_file'.

    Returns:
        A formatted diagnostic report string ready for display.
    """
    lines = [
        "\n",
        "================ ast3d-core: Diagnostic Report ================",
        f"Error Type:     {error_type}",
    ]
    if node_id := context.get('node_id'):
        lines.append(f"Node:           {node_id}")
    if line_number := context.get('line_number'):
        lines.append(f"Line:           {line_number}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("===============================================================")
    return "\n".join(lines)
