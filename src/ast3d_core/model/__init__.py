# src/ast3d_core/model/__init__.py
from .node import Node, NodeVisual
from .connection import Connection, ConnectionEndpoint, ConnectionLabel, ConnectionVisual
from .graph import Graph
from .exceptions import UnknownNodeError
from .placement import parse_position, parse_scale

__all__ = [
    "Node",
    "NodeVisual",
    "Connection",
    "ConnectionEndpoint",
    "ConnectionLabel",
    "ConnectionVisual",
    "Graph",
    "UnknownNodeError",
    "parse_position",
    "parse_scale",
]
