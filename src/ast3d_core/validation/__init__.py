# src/ast3d_core/validation/__init__.py
import logging
logger = logging.getLogger(__name__)

from .issues import ValidationIssue, ValidationIssueLevel
from .issue_codes import DiagramIssueCode
from .statement_validator import StatementValidator, is_valid_color
from .exceptions import DiagramValidationError

__all__ = [
    "ValidationIssue",
    "ValidationIssueLevel",
    "DiagramIssueCode",
    "StatementValidator",
    "is_valid_color",
    "DiagramValidationError",
]
