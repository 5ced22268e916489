# src/ast3d_core/validation/exceptions.py
"""
The diagnosable exception raised when pre-build validation of a diagram finds
error-level issues.
"""
from typing import List

from .issues import ValidationIssue, ValidationIssueLevel
from ..errors import DiagnosableError, format_diagnostic_report


class DiagramValidationError(DiagnosableError):
    """
    Container for every error-level `ValidationIssue` of one validation pass,
    formatted into a single diagnostic report.
    """
    def __init__(self, issues: List[ValidationIssue]):
        self.issues: List[ValidationIssue] = [
            issue for issue in issues if issue.level == ValidationIssueLevel.ERROR
        ]
        if not self.issues:
            summary_message = "DiagramValidationError was raised with no error-level issues."
        else:
            summary_message = (
                f"Diagram validation failed with {len(self.issues)} error(s):\n"
                + "\n".join(f"  - {issue}" for issue in self.issues)
            )
        super().__init__(summary_message)

    @property
    def messages(self) -> List[str]:
        return [issue.message for issue in self.issues]

    def get_diagnostic_report(self) -> str:
        details = (
            f"The diagram declares nodes or connections that cannot be built consistently.\n"
            f"Found {len(self.issues)} error(s). See details below:\n\n"
            + "\n".join(f"  - {issue}" for issue in self.issues)
        )

        first_issue = self.issues[0] if self.issues else None
        context = {}
        if first_issue:
            context['node_id'] = first_issue.node_id
            context['line_number'] = first_issue.line_number

        return format_diagnostic_report(
            error_type="Diagram Validation Error",
            details=details,
            suggestion="Declare every node a connection refers to, and give each node a unique ID.",
            context=context
        )
