# tests/conftest.py
import pytest

from ast3d_core import DiagramGenerator, DiagramParser, GraphBuilder, Graph, LayoutAlgorithm
from ast3d_core.config import BuilderConfig, LayoutConfig


SIMPLE_DIAGRAM = 'A[Function: f]\nB{Component: g}\nA --> B : "x"'

ARCHITECTURE_DIAGRAM = """
graph3d "Service Architecture"
description: "Request path of the API"
owner: platform-team

%% Nodes
API[Interface: HttpApi]
SVC{Component: OrderService}
DB((Module: Storage))
BUS<Datapath: events>
MODEL[[Class: Order]]

%% Connections
API --> SVC : "requests"
SVC -.-> BUS : "order events"
SVC --- DB
MODEL == SVC
API@front --> SVC@face_0 : "direct"
"""


@pytest.fixture
def parser():
    return DiagramParser()


@pytest.fixture
def builder():
    return GraphBuilder()


@pytest.fixture
def generator():
    return DiagramGenerator()


def layout_config(algorithm: LayoutAlgorithm, spacing: float = 2.0) -> BuilderConfig:
    return BuilderConfig(layout=LayoutConfig(algorithm=algorithm, node_spacing=spacing))


def build_text(text: str, config=None) -> Graph:
    """Parses and builds a diagram in one step."""
    return GraphBuilder(config).build(DiagramParser().parse(text))


def positions_of(graph: Graph):
    return {node_id: node.position.as_tuple() for node_id, node in graph.nodes.items()}
