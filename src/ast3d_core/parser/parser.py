# src/ast3d_core/parser/parser.py
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from ..categories import connection_type_from_arrow, node_type_from_label
from .cursor import LineCursor
from .exceptions import ParsingError
from .lexer import (
    ConnectionMatch,
    DeclarationMatch,
    LineKind,
    MetadataMatch,
    NodeMatch,
    classify_line,
)
from .properties import extract_inline_block, parse_inline_properties, parse_property_block
from .raw_data import ParsedConnection, ParsedEndpoint, ParsedGraph, ParsedNode

logger = logging.getLogger(__name__)


@dataclass
class _ParseSession:
    """Mutable state of a single `parse` call. Nothing here outlives the call."""
    cursor: LineCursor
    node_ids: Iterator[int] = field(default_factory=itertools.count)
    connection_ids: Iterator[int] = field(default_factory=itertools.count)
    title: Optional[str] = None
    description: Optional[str] = None
    nodes: List[ParsedNode] = field(default_factory=list)
    connections: List[ParsedConnection] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)


class DiagramParser:
    """
    Turns diagram text into a flat ParsedGraph.

    The parser performs no cross-referential checks: connections may name nodes
    that were never declared, and node ids may repeat. Lines that match no
    statement form are skipped without a diagnostic.
    """

    def parse(self, text: str) -> ParsedGraph:
        if not isinstance(text, str):
            raise ParsingError(details=f"Diagram source must be a string, got {type(text).__name__}.")

        session = _ParseSession(cursor=LineCursor.from_text(text))
        cursor = session.cursor
        logger.debug(f"Parsing diagram with {len(cursor.lines)} non-blank line(s).")

        while cursor.has_current():
            self._parse_statement(session)
            cursor.advance()

        logger.info(
            f"Parsed diagram '{session.title or 'Untitled'}': "
            f"{len(session.nodes)} node(s), {len(session.connections)} connection(s)."
        )
        return ParsedGraph(
            title=session.title,
            description=session.description,
            nodes=session.nodes,
            connections=session.connections,
            metadata=session.metadata,
        )

    def _parse_statement(self, session: _ParseSession) -> None:
        line = session.cursor.current
        judgment = classify_line(line)

        if not judgment.is_usable:
            if judgment.kind is not LineKind.COMMENT:
                logger.debug(f"Skipping line {session.cursor.current_line_number} ({judgment.kind.name}): {line!r}")
            return

        match = judgment.match
        if isinstance(match, DeclarationMatch):
            if match.value is not None:
                setattr(session, match.field, match.value)
        elif isinstance(match, NodeMatch):
            session.nodes.append(self._build_node(match, session))
        elif isinstance(match, ConnectionMatch):
            session.connections.append(self._build_connection(match, session))
        elif isinstance(match, MetadataMatch):
            session.metadata[match.key] = match.value

    def _build_node(self, match: NodeMatch, session: _ParseSession) -> ParsedNode:
        line_number = session.cursor.current_line_number
        inline_body = extract_inline_block(match.remainder)
        if inline_body is not None:
            properties = parse_inline_properties(inline_body)
        else:
            properties = parse_property_block(session.cursor)

        return ParsedNode(
            id=match.id or f"node_{next(session.node_ids)}",
            type_tag=node_type_from_label(match.category),
            display_name=match.name,
            geometry_class=match.geometry_class,
            delimiter=match.delimiter,
            raw_properties=properties,
            line_number=line_number,
        )

    def _build_connection(self, match: ConnectionMatch, session: _ParseSession) -> ParsedConnection:
        return ParsedConnection(
            id=f"conn_{next(session.connection_ids)}",
            arrow_kind=connection_type_from_arrow(match.arrow),
            source=ParsedEndpoint(node_id=match.source, face_id=match.source_face),
            target=ParsedEndpoint(node_id=match.target, face_id=match.target_face),
            label=match.label,
            line_number=session.cursor.current_line_number,
        )
