# src/ast3d_core/generator.py
"""
The DiagramGenerator facade: one object that parses, validates and builds.

    generator = DiagramGenerator({"layout": {"algorithm": "grid"}})
    result = generator.validate(text)
    if result.valid:
        graph = generator.generate(text)
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .config import BuilderConfig, load_config, merge_config
from .errors import DiagramValidationFailure
from .graph_builder import GraphBuilder
from .model import Graph
from .parser import DiagramParser, ParsedGraph
from .validation import DiagramValidationError, StatementValidator, ValidationIssue, ValidationIssueLevel

logger = logging.getLogger(__name__)

EXAMPLE_SYNTAX = '''graph3d "Sample Application Architecture"

%% Node definitions
A[Function: processData]
B{Component: UserInterface}
C((Module: Database))
D<Datapath: eventStream>
E[[Class: UserModel]]

%% Connections
A --> B : "processed data"
B -.-> D : "user events"
C --> A : "raw data"
D --> C : "queries"
E --- C : "model mapping"

%% Face-specific connections
A@front --> B@face_0 : "direct connection"
E@top == C@face_3 : "inheritance"'''


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of `DiagramGenerator.validate`. `errors` and `warnings` are human-readable messages."""
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def from_issues(cls, issues: List[ValidationIssue]) -> "ValidationResult":
        errors = [i.message for i in issues if i.level == ValidationIssueLevel.ERROR]
        warnings = [i.message for i in issues if i.level == ValidationIssueLevel.WARNING]
        return cls(valid=not errors, errors=errors, warnings=warnings)

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "errors": list(self.errors), "warnings": list(self.warnings)}


class DiagramGenerator:
    def __init__(self, config: Optional[Union[BuilderConfig, Dict[str, Any]]] = None):
        self._config: BuilderConfig = config if isinstance(config, BuilderConfig) else load_config(config)
        self._parser = DiagramParser()
        self._builder = GraphBuilder(self._config)

    @property
    def config(self) -> BuilderConfig:
        return self._config

    @property
    def build_issues(self) -> List[ValidationIssue]:
        """Issues the builder recovered from during the most recent build."""
        return list(self._builder.issues)

    def update_config(self, config: Union[BuilderConfig, Dict[str, Any]]) -> None:
        """Replaces the configuration, or merges a partial raw mapping into it."""
        if isinstance(config, BuilderConfig):
            self._config = config
        else:
            self._config = merge_config(self._config, config)
        self._builder = GraphBuilder(self._config)
        logger.debug(f"Generator configuration updated: layout={self._config.layout.algorithm}")

    def parse_only(self, text: str) -> ParsedGraph:
        return self._parser.parse(text)

    def generate(self, text: str, validate: bool = False) -> Graph:
        """
        Parses and builds `text`.

        With `validate=True` the parsed statements are validated first and any
        error-level issue raises DiagramValidationFailure instead of building.
        Without it, duplicate ids and dangling connections are resolved the way
        the builder always does: last declaration wins, dangling connections drop.
        """
        parsed = self._parser.parse(text)
        if validate:
            issues = StatementValidator(parsed).validate()
            if any(issue.is_error for issue in issues):
                error = DiagramValidationError(issues)
                raise DiagramValidationFailure(error.get_diagnostic_report()) from error
        return self._builder.build(parsed)

    def generate_dict(self, text: str) -> Dict[str, Any]:
        return self.generate(text).to_dict()

    def generate_json(self, text: str, indent: Optional[int] = 2) -> str:
        return self.generate(text).to_json(indent=indent)

    def validate(self, text: str) -> ValidationResult:
        """
        Validates `text` without building it. Failures while parsing are not
        raised; they become the single error of an invalid result.
        """
        try:
            parsed = self._parser.parse(text)
        except Exception as e:
            logger.debug(f"Parsing failed during validation: {e}")
            return ValidationResult(valid=False, errors=[str(e) or "Unknown parsing error"])
        return ValidationResult.from_issues(StatementValidator(parsed).validate())

    @staticmethod
    def example_syntax() -> str:
        return EXAMPLE_SYNTAX
