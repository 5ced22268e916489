# src/ast3d_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("ast3d-core package initialized.")

from .categories import ConnectionType, NodeType
from .geometry import BoundingBox, Face, GeometryClass, Transform, Vector3
from .config import BuilderConfig, LayoutAlgorithm, load_config, load_config_file
from .parser import DiagramParser, ParsedGraph
from .model import Connection, Graph, Node
from .graph_builder import GraphBuilder
from .validation import StatementValidator, ValidationIssue
from .generator import DiagramGenerator, ValidationResult
from .errors import AST3DError, GraphBuildError, DiagramValidationFailure

__all__ = [
    # Categories
    "NodeType", "ConnectionType",
    # Geometry
    "Vector3", "Transform", "BoundingBox", "Face", "GeometryClass",
    # Configuration
    "BuilderConfig", "LayoutAlgorithm", "load_config", "load_config_file",
    # Parser
    "DiagramParser", "ParsedGraph",
    # Model
    "Graph", "Node", "Connection",
    # Builder & Validation
    "GraphBuilder", "StatementValidator", "ValidationIssue",
    # Facade
    "DiagramGenerator", "ValidationResult",
    # Top-Level Errors (Actionable Diagnostics)
    "AST3DError", "GraphBuildError", "DiagramValidationFailure",
]
