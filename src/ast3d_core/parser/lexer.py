# src/ast3d_core/parser/lexer.py
"""
Line classification for the diagram notation.

`classify_line` looks at one trimmed, non-empty line and decides what kind of
statement it is, extracting the fields the statement parser needs. The checks run
in a fixed order because the patterns overlap: a comment may contain arrows, a
node declaration contains a colon, and `[[` starts with `[`.

A line that has the shape of a node or a connection but fails the full pattern
is still classified as that kind, with no match attached. The parser skips such
lines instead of reinterpreting them as metadata.
"""
import logging
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Pattern, Tuple, Union

from ..categories import ARROW_CONNECTION_TYPES
from ..geometry import GeometryClass
from .properties import unquote

logger = logging.getLogger(__name__)

# --- Token Definitions ---

ID_REGEX_FRAGMENT = r"[A-Za-z0-9_]+"

COMMENT_MARKERS = ("%%", "//")
GRAPH_KEYWORDS = ("graph3d", "ast3d")
ARROW_LITERALS = tuple(ARROW_CONNECTION_TYPES)

_GRAPH_DECLARATION_REGEX = re.compile(rf"^(?:{'|'.join(GRAPH_KEYWORDS)})\b\s*(?P<title>.*)$")

# Any identifier directly followed by an opening delimiter looks like a node.
_NODE_SHAPE_REGEX = re.compile(rf"^{ID_REGEX_FRAGMENT}[\[{{(<]")


@dataclass(frozen=True)
class NodeDelimiter:
    """One bracket pair of the node grammar and the geometry class it selects."""
    opener: str
    pattern: Pattern
    geometry_class: GeometryClass


def _node_pattern(opener: str, closer: str) -> Pattern:
    forbidden = re.escape("".join(sorted(set(opener + closer))))
    return re.compile(
        rf"^(?P<id>{ID_REGEX_FRAGMENT}){re.escape(opener)}"
        rf"(?P<category>[^:{forbidden}]+):\s*(?P<name>[^{forbidden}]+?)\s*{re.escape(closer)}"
    )


# Priority order matters: the double delimiters must be tried before the single
# ones that share their first character.
NODE_DELIMITERS: Tuple[NodeDelimiter, ...] = (
    NodeDelimiter("[[", _node_pattern("[[", "]]"), GeometryClass.BOX),
    NodeDelimiter("((", _node_pattern("((", "))"), GeometryClass.MANY_FACED),
    NodeDelimiter("[", _node_pattern("[", "]"), GeometryClass.BOX),
    NodeDelimiter("{", _node_pattern("{", "}"), GeometryClass.MANY_FACED),
    NodeDelimiter("<", _node_pattern("<", ">"), GeometryClass.PLATE),
)

_ARROW_FRAGMENT = "(?P<arrow>" + "|".join(re.escape(a) for a in ARROW_LITERALS) + ")"
_SOURCE_FRAGMENT = rf"(?P<source>{ID_REGEX_FRAGMENT})(?:@(?P<source_face>{ID_REGEX_FRAGMENT}))?"
_TARGET_FRAGMENT = rf"(?P<target>{ID_REGEX_FRAGMENT})(?:@(?P<target_face>{ID_REGEX_FRAGMENT}))?"

# A -->|"label"| B
PIPE_LABEL_CONNECTION_REGEX = re.compile(
    rf"^{_SOURCE_FRAGMENT}\s*{_ARROW_FRAGMENT}\s*\|\s*(?P<label>[^|]*?)\s*\|\s*{_TARGET_FRAGMENT}"
)
# A --> B : "label"
COLON_LABEL_CONNECTION_REGEX = re.compile(
    rf"^{_SOURCE_FRAGMENT}\s*{_ARROW_FRAGMENT}\s*{_TARGET_FRAGMENT}(?:\s*:\s*(?P<label>.*))?"
)
# Pipe style first: the colon pattern would otherwise stop at the pipe and miss the label.
CONNECTION_PATTERNS = (PIPE_LABEL_CONNECTION_REGEX, COLON_LABEL_CONNECTION_REGEX)


# --- Classification Results ---

class LineKind(Enum):
    COMMENT = auto()
    DECLARATION = auto()
    NODE = auto()
    CONNECTION = auto()
    METADATA = auto()
    UNRECOGNIZED = auto()


@dataclass(frozen=True)
class DeclarationMatch:
    """A graph-level field: 'title' or 'description'. `value` is None for a bare `graph3d`."""
    field: str
    value: Optional[str]


@dataclass(frozen=True)
class NodeMatch:
    id: str
    category: str
    name: str
    delimiter: str
    geometry_class: GeometryClass
    remainder: str  # text after the closing delimiter, checked for inline properties


@dataclass(frozen=True)
class ConnectionMatch:
    source: str
    source_face: Optional[str]
    arrow: str
    target: str
    target_face: Optional[str]
    label: Optional[str]


@dataclass(frozen=True)
class MetadataMatch:
    key: str
    value: str


StatementMatch = Union[DeclarationMatch, NodeMatch, ConnectionMatch, MetadataMatch]


@dataclass(frozen=True)
class LineJudgment:
    kind: LineKind
    match: Optional[StatementMatch] = None

    @property
    def is_usable(self) -> bool:
        return self.match is not None


# --- Matchers ---

def is_comment(line: str) -> bool:
    return line.startswith(COMMENT_MARKERS)


def match_declaration(line: str) -> Optional[DeclarationMatch]:
    graph_match = _GRAPH_DECLARATION_REGEX.match(line)
    if graph_match:
        return DeclarationMatch("title", unquote(graph_match.group("title")) or None)
    if line.startswith("title:"):
        return DeclarationMatch("title", unquote(line[len("title:"):]))
    if line.startswith("description:"):
        return DeclarationMatch("description", unquote(line[len("description:"):]))
    return None


def looks_like_node(line: str) -> bool:
    return _NODE_SHAPE_REGEX.match(line) is not None


def match_node(line: str) -> Optional[NodeMatch]:
    """
    Tries the delimiter patterns in priority order. The first delimiter whose
    opener follows the identifier decides the outcome: if its full pattern does not
    match, the line is not a valid node.
    """
    id_match = re.match(ID_REGEX_FRAGMENT, line)
    if not id_match:
        return None
    after_id = line[id_match.end():]
    for delimiter in NODE_DELIMITERS:
        if not after_id.startswith(delimiter.opener):
            continue
        node_match = delimiter.pattern.match(line)
        if not node_match:
            return None
        return NodeMatch(
            id=node_match.group("id"),
            category=node_match.group("category").strip(),
            name=node_match.group("name").strip(),
            delimiter=delimiter.opener,
            geometry_class=delimiter.geometry_class,
            remainder=line[node_match.end():].strip(),
        )
    return None


def contains_arrow(line: str) -> bool:
    return any(arrow in line for arrow in ARROW_LITERALS)


def match_connection(line: str) -> Optional[ConnectionMatch]:
    for pattern in CONNECTION_PATTERNS:
        conn_match = pattern.match(line)
        if conn_match:
            label = conn_match.group("label")
            label = unquote(label) if label is not None else None
            return ConnectionMatch(
                source=conn_match.group("source"),
                source_face=conn_match.group("source_face"),
                arrow=conn_match.group("arrow"),
                target=conn_match.group("target"),
                target_face=conn_match.group("target_face"),
                label=label or None,
            )
    return None


def match_metadata(line: str) -> Optional[MetadataMatch]:
    if ":" not in line:
        return None
    key, value = line.split(":", 1)
    key = key.strip()
    if not key:
        return None
    return MetadataMatch(key=key, value=unquote(value))


def classify_line(line: str) -> LineJudgment:
    """Classifies one trimmed, non-empty line. See the module docstring for the decision order."""
    if is_comment(line):
        return LineJudgment(LineKind.COMMENT)

    declaration = match_declaration(line)
    if declaration is not None:
        return LineJudgment(LineKind.DECLARATION, declaration)

    if looks_like_node(line):
        return LineJudgment(LineKind.NODE, match_node(line))

    if contains_arrow(line):
        return LineJudgment(LineKind.CONNECTION, match_connection(line))

    metadata = match_metadata(line)
    if metadata is not None:
        return LineJudgment(LineKind.METADATA, metadata)

    return LineJudgment(LineKind.UNRECOGNIZED)
