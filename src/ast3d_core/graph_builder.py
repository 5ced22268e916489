# src/ast3d_core/graph_builder.py

"""
Defines the GraphBuilder, which turns the flat statement list produced by the
DiagramParser into a positioned `Graph`.

A build runs in five steps:

1.  **Graph shell:** name, description and metadata come from the parsed header
    ("Untitled Graph" when no title was given).
2.  **Nodes:** every parsed node becomes a `Node` with a default transform and the
    face set of its geometry class; `color`, `opacity`, `scale` and `position`
    properties override the defaults. A node given a non-origin position is
    *pinned* and no layout will move it. A later declaration with the same id
    replaces the earlier one.
3.  **Connections:** a connection whose endpoints are not both declared is dropped.
    The rest are registered, which links parent/child adjacency and gives each
    endpoint a provisional anchor.
4.  **Layout:** the configured algorithm positions every un-pinned node.
5.  **Anchors:** every connection anchor is recomputed from the final node
    transforms; the provisional anchors of step 3 are stale after layout.

Any `DiagnosableError` raised on the way is re-raised as a `GraphBuildError`
carrying its diagnostic report, and anything unexpected as a `GraphBuildError`
with a generic report.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional, Set, Tuple, Union

from .config import BuilderConfig, load_config
from .errors import DiagnosableError, GraphBuildError, format_diagnostic_report
from .geometry import face_ids_for
from .layout import LayoutContext, apply_layout
from .model import (
    Connection,
    ConnectionEndpoint,
    ConnectionLabel,
    Graph,
    Node,
    parse_position,
    parse_scale,
)
from .parser.exceptions import PropertyCoercionError
from .parser.raw_data import ParsedConnection, ParsedGraph, ParsedNode
from .validation.issue_codes import DiagramIssueCode
from .validation.issues import ValidationIssue, ValidationIssueLevel

logger = logging.getLogger(__name__)

DEFAULT_GRAPH_NAME = "Untitled Graph"

_TRUE_STRINGS = ("true", "yes", "1")


class GraphBuilder:
    """
    Builds a `Graph` from a `ParsedGraph`.

    Problems the builder recovers from (an unreadable scale, a face that does not
    exist, a cycle, a dropped connection) are logged and collected in `issues`
    for the most recent build.
    """

    def __init__(self, config: Optional[Union[BuilderConfig, Dict[str, Any]]] = None):
        self.config: BuilderConfig = config if isinstance(config, BuilderConfig) else load_config(config)
        self.issues: List[ValidationIssue] = []

    def build(self, parsed_graph: ParsedGraph) -> Graph:
        """
        The build entry point. Returns the positioned graph or raises GraphBuildError.
        """
        self.issues = []
        try:
            logger.info(f"--- Building graph '{parsed_graph.title or DEFAULT_GRAPH_NAME}' ---")
            graph = Graph(
                id=f"graph_{uuid.uuid4().hex[:12]}",
                name=parsed_graph.title or DEFAULT_GRAPH_NAME,
                description=parsed_graph.description,
            )
            graph.metadata = dict(parsed_graph.metadata)

            pinned: Set[str] = set()
            for parsed_node in parsed_graph.nodes:
                node, is_pinned = self._build_node(parsed_node)
                graph.add_node(node)
                if is_pinned:
                    pinned.add(node.id)
                else:
                    pinned.discard(node.id)
            logger.debug(f"Created {len(graph.nodes)} node(s); pinned: {sorted(pinned)}")

            for parsed_connection in parsed_graph.connections:
                connection = self._build_connection(parsed_connection, graph)
                if connection is not None:
                    graph.add_connection(connection)
                    self._check_faces(connection, graph)

            self._check_cycles(graph)

            context = LayoutContext(
                graph=graph,
                pinned=frozenset(pinned),
                spacing=self.config.layout.node_spacing,
            )
            apply_layout(self.config.layout.algorithm, context)
            graph.refresh_anchors()

            logger.info(
                f"--- Graph '{graph.name}' built: {len(graph.nodes)} node(s), "
                f"{len(graph.connections)} connection(s), {len(self.issues)} issue(s). ---"
            )
            return graph

        except DiagnosableError as e:
            diagnostic_report = e.get_diagnostic_report()
            raise GraphBuildError(diagnostic_report) from e

        except Exception as e:
            report = format_diagnostic_report(
                error_type=f"An Unexpected Error Occurred ({type(e).__name__})",
                details=f"The graph builder encountered an unexpected internal error: {str(e)}",
                suggestion="This may indicate a bug in ast3d-core. Please review the traceback.",
                context={}
            )
            raise GraphBuildError(report) from e

    def _add_issue(self, level: ValidationIssueLevel, code_enum: DiagramIssueCode, line_number=None, **kwargs):
        message = code_enum.format_message(**kwargs)
        self.issues.append(ValidationIssue(
            level=level, code=code_enum.code, message=message,
            node_id=kwargs.get('node_id'), line_number=line_number, details=kwargs
        ))

    # --- Nodes ---

    def _build_node(self, parsed: ParsedNode) -> Tuple[Node, bool]:
        """Returns the node and whether its position was given explicitly (and is not the origin)."""
        node = Node(
            id=parsed.id,
            type=parsed.type_tag,
            name=parsed.display_name,
            geometry=parsed.geometry_class,
        )
        node.description = parsed.description
        node.metadata = dict(parsed.raw_properties)
        properties = parsed.raw_properties

        color = properties.get("color")
        node.visual.color = str(color) if color is not None else self.config.visual.color_for(parsed.type_tag.value)
        node.visual.opacity = self.config.visual.material.opacity
        if "opacity" in properties:
            node.visual.opacity = self._coerce_opacity(parsed)
        if "wireframe" in properties:
            node.visual.wireframe = str(properties["wireframe"]).strip().lower() in _TRUE_STRINGS

        if "scale" in properties:
            scale = parse_scale(properties["scale"])
            if scale is None:
                logger.warning(f"Node '{parsed.id}': unusable scale {properties['scale']!r}, using unit scale.")
                self._add_issue(
                    ValidationIssueLevel.WARNING, DiagramIssueCode.INVALID_SCALE,
                    line_number=parsed.line_number, node_id=parsed.id, value=properties["scale"]
                )
            else:
                node.set_scale(scale)

        if "position" not in properties:
            return node, False
        position = parse_position(properties["position"])
        if position is None:
            logger.warning(f"Node '{parsed.id}': unusable position {properties['position']!r}, leaving it to the layout.")
            self._add_issue(
                ValidationIssueLevel.WARNING, DiagramIssueCode.INVALID_POSITION,
                line_number=parsed.line_number, node_id=parsed.id, value=properties["position"]
            )
            return node, False
        node.set_position(position)
        return node, not position.is_zero()

    def _coerce_opacity(self, parsed: ParsedNode) -> float:
        value = parsed.raw_properties["opacity"]
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise PropertyCoercionError(
                key="opacity", value=value, details="Opacity must be a number.", node_id=parsed.id
            ) from e

    # --- Connections ---

    def _build_connection(self, parsed: ParsedConnection, graph: Graph) -> Optional[Connection]:
        for endpoint in (parsed.source, parsed.target):
            if endpoint.node_id not in graph.nodes:
                logger.debug(f"Dropping connection '{parsed.id}': node '{endpoint.node_id}' is not declared.")
                self._add_issue(
                    ValidationIssueLevel.INFO, DiagramIssueCode.CONNECTION_DROPPED,
                    line_number=parsed.line_number, connection_id=parsed.id, node_id=endpoint.node_id
                )
                return None

        connection = Connection(
            id=parsed.id,
            type=parsed.arrow_kind,
            source=ConnectionEndpoint(node_id=parsed.source.node_id, face_id=parsed.source.face_id),
            target=ConnectionEndpoint(node_id=parsed.target.node_id, face_id=parsed.target.face_id),
        )
        if parsed.label:
            connection.visual.label = ConnectionLabel(text=parsed.label)
        connection.metadata = dict(parsed.raw_properties)
        return connection

    def _check_faces(self, connection: Connection, graph: Graph) -> None:
        for endpoint in (connection.source, connection.target):
            if endpoint.face_id is None or graph.face_resolves(endpoint):
                continue
            node = graph.nodes[endpoint.node_id]
            logger.warning(
                f"Connection '{connection.id}': node '{node.id}' has no face '{endpoint.face_id}', "
                f"anchoring to the node centre."
            )
            self._add_issue(
                ValidationIssueLevel.WARNING, DiagramIssueCode.UNKNOWN_FACE,
                connection_id=connection.id, face_id=endpoint.face_id, node_id=node.id,
                geometry=node.geometry.value, available_faces=", ".join(face_ids_for(node.geometry))
            )

    def _check_cycles(self, graph: Graph) -> None:
        cycle = graph.find_cycle()
        if not cycle:
            return
        logger.warning(f"Graph '{graph.name}' contains a cycle: {' -> '.join(cycle)}")
        self._add_issue(
            ValidationIssueLevel.WARNING, DiagramIssueCode.CYCLE_DETECTED,
            node_id=cycle[0], cycle=" -> ".join(cycle)
        )
