# tests/test_graph_model.py
import json

import networkx as nx
import pytest

from ast3d_core.categories import ConnectionType, NodeType
from ast3d_core.geometry import GeometryClass, Vector3
from ast3d_core.model import (
    Connection,
    ConnectionEndpoint,
    ConnectionLabel,
    Graph,
    Node,
    UnknownNodeError,
    parse_position,
    parse_scale,
)


def make_graph(*edges, node_ids=None) -> Graph:
    graph = Graph("g", "Test")
    ids = node_ids or sorted({n for edge in edges for n in edge})
    for node_id in ids:
        graph.add_node(Node(node_id, NodeType.COMPONENT, node_id))
    for i, (source, target) in enumerate(edges):
        graph.add_connection(Connection(
            f"c{i}", ConnectionType.DATA_FLOW, ConnectionEndpoint(source), ConnectionEndpoint(target)
        ))
    return graph


class TestGraphMutation:

    def test_add_connection_links_adjacency_without_duplicates(self):
        graph = make_graph(("A", "B"), ("A", "B"))
        assert graph.nodes["A"].children == ["B"]
        assert graph.nodes["B"].parents == ["A"]
        assert len(graph.connections) == 2

    def test_add_connection_to_unknown_node_raises(self):
        graph = make_graph(node_ids=["A"])
        connection = Connection("c", ConnectionType.DATA_FLOW, ConnectionEndpoint("A"), ConnectionEndpoint("Z"))

        with pytest.raises(UnknownNodeError) as excinfo:
            graph.add_connection(connection)

        assert excinfo.value.missing_node_ids == ["Z"]
        assert "Z" in excinfo.value.get_diagnostic_report()
        assert graph.nodes["A"].children == []

    def test_add_connection_assigns_initial_anchors(self):
        graph = make_graph(node_ids=["A", "B"])
        graph.nodes["B"].set_position(Vector3(5.0, 0.0, 0.0))
        connection = Connection(
            "c", ConnectionType.DATA_FLOW, ConnectionEndpoint("A", "top"), ConnectionEndpoint("B")
        )
        graph.add_connection(connection)
        assert connection.source.anchor == Vector3(0.0, 0.5, 0.0)
        assert connection.target.anchor == Vector3(5.0, 0.0, 0.0)

    def test_anchor_of_unknown_face_falls_back_to_centre(self):
        graph = make_graph(node_ids=["A"])
        endpoint = ConnectionEndpoint("A", "face_7")
        assert not graph.face_resolves(endpoint)
        assert graph.resolve_anchor(endpoint) == Vector3.zero()

    def test_remove_node_cascades(self):
        graph = make_graph(("A", "B"), ("B", "C"), ("C", "A"))
        graph.remove_node("B")

        assert set(graph.nodes) == {"A", "C"}
        assert [c.id for c in graph.connections.values()] == ["c2"]
        assert graph.nodes["A"].children == []
        assert graph.nodes["C"].parents == []
        assert graph.nodes["C"].children == ["A"]

    def test_remove_connection_keeps_adjacency_of_parallel_connection(self):
        graph = make_graph(("A", "B"), ("A", "B"))
        graph.remove_connection("c0")
        assert graph.nodes["A"].children == ["B"]
        graph.remove_connection("c1")
        assert graph.nodes["A"].children == []
        assert graph.nodes["B"].parents == []

    def test_replacing_a_node_keeps_its_adjacency(self):
        graph = make_graph(("A", "B"))
        graph.add_node(Node("B", NodeType.CLASS, "replacement", GeometryClass.PLATE))
        assert graph.nodes["B"].type is NodeType.CLASS
        assert graph.nodes["B"].parents == ["A"]


class TestGraphQueries:

    def test_roots_leaves_and_types(self):
        graph = make_graph(("A", "B"), ("A", "C"))
        graph.add_node(Node("F", NodeType.FUNCTION, "f"))
        assert [n.id for n in graph.root_nodes()] == ["A", "F"]
        assert [n.id for n in graph.leaf_nodes()] == ["B", "C", "F"]
        assert [n.id for n in graph.nodes_by_type(NodeType.FUNCTION)] == ["F"]
        assert [n.id for n in graph.nodes_by_type("component")] == ["A", "B", "C"]
        assert len(graph.connections_by_type(ConnectionType.DATA_FLOW)) == 2
        assert [c.id for c in graph.node_connections("C")] == ["c1"]

    def test_cycles(self):
        acyclic = make_graph(("A", "B"), ("B", "C"))
        assert not acyclic.has_cycles()
        assert acyclic.find_cycle() == []

        cyclic = make_graph(("A", "B"), ("B", "C"), ("C", "A"))
        assert cyclic.has_cycles()
        cycle = cyclic.find_cycle()
        assert cycle[0] == cycle[-1]
        assert set(cycle) == {"A", "B", "C"}

    def test_depth(self):
        assert Graph("g", "empty").depth() == 0
        assert make_graph(node_ids=["A"]).depth() == 1
        assert make_graph(("A", "B"), ("B", "C"), ("A", "C")).depth() == 3
        # A cycle collapses to one level.
        assert make_graph(("R", "A"), ("A", "B"), ("B", "A"), ("B", "Z")).depth() == 3

    def test_to_networkx(self):
        digraph = make_graph(("A", "B")).to_networkx()
        assert isinstance(digraph, nx.DiGraph)
        assert list(digraph.edges) == [("A", "B")]

    def test_bounds(self):
        graph = make_graph(node_ids=["A", "B"])
        graph.nodes["B"].set_position(Vector3(10.0, 0.0, 0.0))
        bounds = graph.bounds()
        assert bounds.min == Vector3(-0.5, -0.5, -0.5)
        assert bounds.max == Vector3(10.5, 0.5, 0.5)


class TestConnectionPath:

    def test_path_length_and_waypoints(self):
        connection = Connection("c", ConnectionType.DATA_FLOW, ConnectionEndpoint("A"), ConnectionEndpoint("B"))
        assert connection.path_length() == 0.0

        connection.update_anchors(Vector3.zero(), Vector3(3.0, 4.0, 0.0))
        assert connection.path_length() == 5.0

        connection.add_waypoint(Vector3(3.0, 0.0, 0.0))
        assert connection.path_length() == 7.0
        connection.clear_waypoints()
        assert connection.path_points() == [Vector3.zero(), Vector3(3.0, 4.0, 0.0)]

    def test_intersects_with(self):
        first = Connection("a", ConnectionType.DATA_FLOW, ConnectionEndpoint("A"), ConnectionEndpoint("B"))
        second = Connection("b", ConnectionType.DATA_FLOW, ConnectionEndpoint("C"), ConnectionEndpoint("D"))
        assert not first.intersects_with(second)

        first.update_anchors(Vector3(0.0, 0.0, 0.0), Vector3(10.0, 10.0, 0.0))
        second.update_anchors(Vector3(10.0, 0.0, 0.0), Vector3(0.0, 10.0, 0.0))
        assert first.intersects_with(second)

        second.update_anchors(Vector3(20.0, 0.0, 0.0), Vector3(30.0, 10.0, 0.0))
        assert not first.intersects_with(second)


class TestPlacementValues:

    @pytest.mark.parametrize("value, expected", [
        (2, Vector3(2.0, 2.0, 2.0)),
        (0.5, Vector3(0.5, 0.5, 0.5)),
        ("1, 2, 3", Vector3(1.0, 2.0, 3.0)),
        ([1, 2, 3], Vector3(1.0, 2.0, 3.0)),
        ("3", Vector3(3.0, 3.0, 3.0)),
    ])
    def test_scale(self, value, expected):
        assert parse_scale(value) == expected

    @pytest.mark.parametrize("value", [0, -1, "1, 2", "a, b, c", [1, 0, 1], [1, "x", 1], True, None, "inf"])
    def test_unusable_scale(self, value):
        assert parse_scale(value) is None

    @pytest.mark.parametrize("value, expected", [
        ([10, 0, 5], Vector3(10.0, 0.0, 5.0)),
        ("1.5, -2, 0", Vector3(1.5, -2.0, 0.0)),
    ])
    def test_position(self, value, expected):
        assert parse_position(value) == expected

    @pytest.mark.parametrize("value", [[1, 2], "1, 2", 5, "somewhere", None])
    def test_unusable_position(self, value):
        assert parse_position(value) is None


class TestSerialization:

    def test_output_shape(self):
        graph = make_graph(("A", "B"))
        graph.description = "desc"
        graph.connections["c0"].visual.label = ConnectionLabel("hello")
        data = graph.to_dict()

        assert set(data) == {"id", "name", "description", "nodes", "connections", "metadata", "bounds"}
        node = data["nodes"][0]
        assert set(node) == {
            "id", "type", "name", "geometry", "transform", "boundingBox",
            "faces", "visual", "metadata", "children", "parents",
        }
        assert node["geometry"] == "cube"
        connection = data["connections"][0]
        assert set(connection) == {"id", "type", "source", "target", "visual", "metadata", "waypoints"}
        assert connection["source"]["nodeId"] == "A"
        assert connection["visual"]["label"] == {
            "text": "hello", "size": 12, "color": "#FFFFFF", "position": {"x": 0.0, "y": 0.0, "z": 0.0},
        }
        json.dumps(data)

    def test_json_round_trip(self):
        graph = make_graph(("A", "B"), ("B", "C"))
        graph.nodes["C"].set_position(Vector3(1.25, -3.5, 7.0))
        graph.nodes["C"].metadata = {"owner": "x"}
        graph.connections["c1"].add_waypoint(Vector3(0.5, 0.5, 0.5))
        graph.refresh_anchors()

        restored = Graph.from_json(graph.to_json())

        assert restored.to_dict() == graph.to_dict()
        assert restored.connections["c1"].target.anchor == Vector3(1.25, -3.5, 7.0)
        assert restored.nodes["C"].get_face("front").center == Vector3(1.25, -3.5, 7.5)
