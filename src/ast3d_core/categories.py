# src/ast3d_core/categories.py
from enum import Enum
import logging

logger = logging.getLogger(__name__)


class NodeType(Enum):
    """Semantic category of a node, inferred from the label text of its declaration."""
    FUNCTION = "function"
    COMPONENT = "component"
    DATAPATH = "datapath"
    MODULE = "module"
    CLASS = "class"
    INTERFACE = "interface"
    VARIABLE = "variable"
    CONSTANT = "constant"

    def __str__(self):
        return self.value


class ConnectionType(Enum):
    """
    Semantic category of a connection. Only the first four are produced by arrow
    literals; COMPOSITION and DEPENDENCY exist for graphs assembled through the
    model API or loaded from serialized output.
    """
    DATA_FLOW = "dataflow"
    CONTROL_FLOW = "controlflow"
    ASSOCIATION = "association"
    INHERITANCE = "inheritance"  # strong dependency, drawn with '=='
    COMPOSITION = "composition"
    DEPENDENCY = "dependency"

    def __str__(self):
        return self.value


DEFAULT_NODE_TYPE = NodeType.COMPONENT

_NODE_TYPE_ALIASES = {
    "function": NodeType.FUNCTION,
    "func": NodeType.FUNCTION,
    "component": NodeType.COMPONENT,
    "comp": NodeType.COMPONENT,
    "datapath": NodeType.DATAPATH,
    "data": NodeType.DATAPATH,
    "module": NodeType.MODULE,
    "mod": NodeType.MODULE,
    "class": NodeType.CLASS,
    "interface": NodeType.INTERFACE,
    "iface": NodeType.INTERFACE,
    "variable": NodeType.VARIABLE,
    "var": NodeType.VARIABLE,
    "constant": NodeType.CONSTANT,
    "const": NodeType.CONSTANT,
}

ARROW_CONNECTION_TYPES = {
    "-->": ConnectionType.DATA_FLOW,
    "-.->": ConnectionType.CONTROL_FLOW,
    "---": ConnectionType.ASSOCIATION,
    "==": ConnectionType.INHERITANCE,
}


def node_type_from_label(label: str) -> NodeType:
    """Case-insensitive lookup of a category label; unknown labels fall back to COMPONENT."""
    node_type = _NODE_TYPE_ALIASES.get(label.strip().lower())
    if node_type is None:
        logger.debug(f"Unknown node category '{label}', using '{DEFAULT_NODE_TYPE}'.")
        return DEFAULT_NODE_TYPE
    return node_type


def connection_type_from_arrow(arrow: str) -> ConnectionType:
    return ARROW_CONNECTION_TYPES.get(arrow, ConnectionType.ASSOCIATION)
