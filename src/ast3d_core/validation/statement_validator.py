# src/ast3d_core/validation/statement_validator.py
import logging
import re
from collections import Counter
from typing import Any, Dict, List

import networkx as nx

from ..geometry import face_ids_for
from ..model.placement import parse_position, parse_scale
from ..parser.raw_data import ParsedConnection, ParsedEndpoint, ParsedGraph, ParsedNode
from .issues import ValidationIssue, ValidationIssueLevel
from .issue_codes import DiagramIssueCode

logger = logging.getLogger(__name__)

_HEX_COLOR_REGEX = re.compile(r"^#(?:[A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")
_RGB_COLOR_REGEX = re.compile(r"^rgba?\(\s*\d+\s*,\s*\d+\s*,\s*\d+\s*(?:,\s*[\d.]+)?\s*\)$")

NAMED_COLORS = frozenset({
    "red", "green", "blue", "yellow", "orange", "purple", "pink", "brown",
    "black", "white", "gray", "grey", "cyan", "magenta", "lime", "navy",
    "maroon", "olive", "aqua", "teal", "silver", "fuchsia",
})


def is_valid_color(value: Any) -> bool:
    """Hex (#rgb / #rrggbb), rgb()/rgba() or a basic named colour."""
    if not isinstance(value, str):
        return False
    return bool(
        _HEX_COLOR_REGEX.match(value)
        or _RGB_COLOR_REGEX.match(value)
        or value.lower() in NAMED_COLORS
    )


class StatementValidator:
    """
    Cross-checks the statements of a parsed diagram before it is built.

    The parser accepts repeated node ids and connections to undeclared nodes; the
    builder overwrites the former and drops the latter without complaint. This
    pass is where both become visible: they are ERROR-level issues. Everything
    else it finds (unknown faces, implausible properties, cycles) is a WARNING,
    because the builder can still produce a graph.
    """

    def __init__(self, parsed_graph: ParsedGraph):
        if not isinstance(parsed_graph, ParsedGraph):
            raise TypeError("StatementValidator requires a ParsedGraph.")
        self.parsed_graph = parsed_graph
        self.issues: List[ValidationIssue] = []

    def validate(self) -> List[ValidationIssue]:
        """
        Runs every check and returns all issues found, grouped by check.
        """
        self.issues = []
        nodes_by_id: Dict[str, ParsedNode] = {node.id: node for node in self.parsed_graph.nodes}

        self._check_duplicate_ids()
        for connection in self.parsed_graph.connections:
            self._check_connection(connection, nodes_by_id)
        for node in self.parsed_graph.nodes:
            self._check_properties(node)
        self._check_cycles(nodes_by_id)

        if self.issues:
            errors = sum(1 for i in self.issues if i.level == ValidationIssueLevel.ERROR)
            warnings = sum(1 for i in self.issues if i.level == ValidationIssueLevel.WARNING)
            logger.info(f"Validation complete. Found: {errors} errors, {warnings} warnings.")
        else:
            logger.info("Validation complete with no issues found.")
        return self.issues

    def _add_issue(self, level: ValidationIssueLevel, code_enum: DiagramIssueCode, line_number=None, **kwargs):
        message = code_enum.format_message(**kwargs)
        self.issues.append(ValidationIssue(
            level=level, code=code_enum.code, message=message,
            node_id=kwargs.get('node_id'), line_number=line_number, details=kwargs
        ))

    def _check_duplicate_ids(self):
        seen = Counter()
        for node in self.parsed_graph.nodes:
            seen[node.id] += 1
            if seen[node.id] > 1:
                self._add_issue(
                    ValidationIssueLevel.ERROR, DiagramIssueCode.DUPLICATE_NODE_ID,
                    line_number=node.line_number, node_id=node.id
                )

    def _check_connection(self, connection: ParsedConnection, nodes_by_id: Dict[str, ParsedNode]):
        endpoints = (
            (connection.source, DiagramIssueCode.UNKNOWN_SOURCE_NODE),
            (connection.target, DiagramIssueCode.UNKNOWN_TARGET_NODE),
        )
        for endpoint, missing_code in endpoints:
            node = nodes_by_id.get(endpoint.node_id)
            if node is None:
                self._add_issue(
                    ValidationIssueLevel.ERROR, missing_code,
                    line_number=connection.line_number, node_id=endpoint.node_id
                )
            elif endpoint.face_id is not None:
                self._check_face(connection, endpoint, node)

    def _check_face(self, connection: ParsedConnection, endpoint: ParsedEndpoint, node: ParsedNode):
        available = face_ids_for(node.geometry_class)
        if endpoint.face_id not in available:
            self._add_issue(
                ValidationIssueLevel.WARNING, DiagramIssueCode.UNKNOWN_FACE,
                line_number=connection.line_number,
                connection_id=connection.id, face_id=endpoint.face_id, node_id=node.id,
                geometry=node.geometry_class.value, available_faces=", ".join(available)
            )

    def _check_properties(self, node: ParsedNode):
        properties = node.raw_properties
        if "color" in properties and not is_valid_color(properties["color"]):
            self._add_issue(
                ValidationIssueLevel.WARNING, DiagramIssueCode.INVALID_COLOR,
                line_number=node.line_number, node_id=node.id, value=properties["color"]
            )
        if "opacity" in properties:
            value = properties["opacity"]
            try:
                in_range = 0.0 <= float(value) <= 1.0
            except (TypeError, ValueError):
                in_range = False
            if not in_range:
                self._add_issue(
                    ValidationIssueLevel.WARNING, DiagramIssueCode.OPACITY_RANGE,
                    line_number=node.line_number, node_id=node.id, value=value
                )
        if "scale" in properties and parse_scale(properties["scale"]) is None:
            self._add_issue(
                ValidationIssueLevel.WARNING, DiagramIssueCode.INVALID_SCALE,
                line_number=node.line_number, node_id=node.id, value=properties["scale"]
            )
        if "position" in properties and parse_position(properties["position"]) is None:
            self._add_issue(
                ValidationIssueLevel.WARNING, DiagramIssueCode.INVALID_POSITION,
                line_number=node.line_number, node_id=node.id, value=properties["position"]
            )

    def _check_cycles(self, nodes_by_id: Dict[str, ParsedNode]):
        digraph = nx.DiGraph()
        digraph.add_nodes_from(nodes_by_id)
        for connection in self.parsed_graph.connections:
            source_id, target_id = connection.source.node_id, connection.target.node_id
            if source_id in nodes_by_id and target_id in nodes_by_id:
                digraph.add_edge(source_id, target_id)
        try:
            edges = nx.find_cycle(digraph, orientation="original")
        except nx.NetworkXNoCycle:
            return
        cycle = [edge[0] for edge in edges] + [edges[-1][1]]
        self._add_issue(
            ValidationIssueLevel.WARNING, DiagramIssueCode.CYCLE_DETECTED,
            node_id=cycle[0], cycle=" -> ".join(cycle)
        )
