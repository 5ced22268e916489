# src/ast3d_core/validation/issues.py
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class ValidationIssueLevel(Enum):
    """Severity level of a validation issue."""
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"

    def __str__(self):
        return self.value


@dataclass
class ValidationIssue:
    """
    A single problem found in a diagram, either by the statement validator before
    a build or by the graph builder during one.
    """
    level: ValidationIssueLevel
    code: str
    message: str
    node_id: Optional[str] = None
    line_number: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return self.level == ValidationIssueLevel.ERROR

    def __str__(self) -> str:
        parts = [f"[{self.level.name} - {self.code}]"]
        if self.line_number:
            parts.append(f"Line: {self.line_number}")
        if self.node_id:
            parts.append(f"Node: {self.node_id}")
        parts.append(f"Message: {self.message}")

        if self.details:
            filtered_details = {
                k: v for k, v in self.details.items()
                if k not in ['node_id', 'line_number']
            }
            if filtered_details:
                details_str = ", ".join(f"{k}={v}" for k, v in sorted(filtered_details.items()))
                parts.append(f"Details: ({details_str})")

        return " ".join(parts)
