# tests/test_parser.py
import pytest

from ast3d_core.categories import ConnectionType, NodeType
from ast3d_core.geometry import GeometryClass
from ast3d_core.parser import (
    DiagramParser,
    LineCursor,
    ParsedEndpoint,
    ParsingError,
    coerce_value,
    parse_inline_properties,
    parse_property_block,
)
from ast3d_core.parser.properties import split_top_level

from conftest import ARCHITECTURE_DIAGRAM, SIMPLE_DIAGRAM


class TestPropertyCoercion:

    @pytest.mark.parametrize("raw, expected", [
        ("42", 42),
        ("-3", -3),
        ("0.5", 0.5),
        ("1e3", 1000.0),
        ('"7"', 7),
        ("[1, 2, 3]", [1, 2, 3]),
        ('"#ff0000"', "#ff0000"),
        ("'hello world'", "hello world"),
        ("[not json", "[not json"),
        ("[1, 2", "[1, 2"),
    ])
    def test_coerce_value(self, raw, expected):
        assert coerce_value(raw) == expected

    def test_split_respects_brackets_and_quotes(self):
        parts = split_top_level('a: 1, b: [1, 2, 3], c: "x, y"')
        assert parts == ["a: 1", "b: [1, 2, 3]", 'c: "x, y"']

    def test_inline_properties(self):
        properties = parse_inline_properties('color: "#00ff00", opacity: 0.5, position: [10, 0, 5]')
        assert properties == {"color": "#00ff00", "opacity": 0.5, "position": [10, 0, 5]}

    def test_inline_comma_triples_stay_whole(self):
        properties = parse_inline_properties("scale: 2, 1, 1, color: red, position: 10, 0, 5")
        assert properties == {"scale": "2, 1, 1", "color": "red", "position": "10, 0, 5"}

    def test_leading_fragment_without_key_is_ignored(self):
        assert parse_inline_properties("dangling, color: red") == {"color": "red"}


class TestPropertyBlockCursor:

    def test_block_is_consumed_and_cursor_left_on_closing_brace(self):
        cursor = LineCursor.from_text("A[Function: f]\n{\n  color: blue\n  scale: 2\n}\nB[Function: g]")
        properties = parse_property_block(cursor)
        assert properties == {"color": "blue", "scale": 2}
        assert cursor.current == "}"
        cursor.advance()
        assert cursor.current == "B[Function: g]"

    def test_no_block_leaves_cursor_untouched(self):
        cursor = LineCursor.from_text("A[Function: f]\nB[Function: g]")
        assert parse_property_block(cursor) == {}
        assert cursor.index == 0

    def test_unclosed_block_runs_to_end_of_input(self):
        cursor = LineCursor.from_text("A[Function: f]\n{\ncolor: blue\nnot a pair")
        assert parse_property_block(cursor) == {"color": "blue"}
        assert not cursor.has_current()

    def test_cursor_tracks_source_line_numbers(self):
        cursor = LineCursor.from_text("\n\nA[Function: f]\n\nB[Function: g]")
        assert cursor.lines == ["A[Function: f]", "B[Function: g]"]
        assert cursor.current_line_number == 3
        cursor.advance()
        assert cursor.current_line_number == 5


class TestDiagramParser:
    """Statement parsing into the ParsedGraph IR."""

    def test_simple_scenario(self, parser):
        parsed = parser.parse(SIMPLE_DIAGRAM)

        assert len(parsed.nodes) == 2
        assert len(parsed.connections) == 1
        a, b = parsed.nodes
        assert a.geometry_class is GeometryClass.BOX
        assert b.geometry_class is GeometryClass.MANY_FACED
        assert parsed.connections[0].label == "x"

    def test_header_and_metadata(self, parser):
        parsed = parser.parse(ARCHITECTURE_DIAGRAM)

        assert parsed.title == "Service Architecture"
        assert parsed.description == "Request path of the API"
        assert parsed.metadata == {"owner": "platform-team"}
        assert parsed.node_ids == ["API", "SVC", "DB", "BUS", "MODEL"]
        assert [c.arrow_kind for c in parsed.connections] == [
            ConnectionType.DATA_FLOW,
            ConnectionType.CONTROL_FLOW,
            ConnectionType.ASSOCIATION,
            ConnectionType.INHERITANCE,
            ConnectionType.DATA_FLOW,
        ]

    @pytest.mark.parametrize("label", ["Function", "Class", "Nonsense"])
    def test_geometry_depends_only_on_delimiter(self, parser, label):
        text = "\n".join([
            f"A[{label}: a]", f"B[[{label}: b]]", f"C{{{label}: c}}", f"D(({label}: d))", f"E<{label}: e>",
        ])
        geometry = {n.id: n.geometry_class for n in parser.parse(text).nodes}
        assert geometry == {
            "A": GeometryClass.BOX,
            "B": GeometryClass.BOX,
            "C": GeometryClass.MANY_FACED,
            "D": GeometryClass.MANY_FACED,
            "E": GeometryClass.PLATE,
        }

    @pytest.mark.parametrize("label, expected", [
        ("Function", NodeType.FUNCTION),
        ("func", NodeType.FUNCTION),
        ("INTERFACE", NodeType.INTERFACE),
        ("var", NodeType.VARIABLE),
        ("Widget", NodeType.COMPONENT),
    ])
    def test_category_labels(self, parser, label, expected):
        assert parser.parse(f"A[{label}: a]").nodes[0].type_tag is expected

    def test_pipe_and_colon_labels_agree(self, parser):
        piped = parser.parse('A[Function: a]\nB[Function: b]\nA -->|"payload"| B').connections[0]
        colon = parser.parse('A[Function: a]\nB[Function: b]\nA --> B : "payload"').connections[0]
        assert piped.label == colon.label == "payload"

    def test_faces_are_recorded_on_endpoints(self, parser):
        connection = parser.parse("A@top --> B").connections[0]
        assert connection.source == ParsedEndpoint("A", "top")
        assert connection.target == ParsedEndpoint("B", None)

    def test_inline_and_block_properties(self, parser):
        text = (
            'A[Function: a] {color: "#123456", position: [1, 2, 3]}\n'
            "B[Function: b]\n"
            "{\n"
            "  description: \"The b node\"\n"
            "  scale: 1, 2, 3\n"
            "}\n"
            "A --> B"
        )
        parsed = parser.parse(text)
        a, b = parsed.nodes
        assert a.raw_properties == {"color": "#123456", "position": [1, 2, 3]}
        assert b.raw_properties == {"description": "The b node", "scale": "1, 2, 3"}
        assert b.description == "The b node"
        assert len(parsed.connections) == 1

    def test_connection_ids_are_per_parse(self, parser):
        text = "A --> B\nB --> C"
        first = [c.id for c in parser.parse(text).connections]
        second = [c.id for c in parser.parse(text).connections]
        assert first == second == ["conn_0", "conn_1"]
        assert [c.id for c in DiagramParser().parse(text).connections] == first

    def test_no_cross_reference_checks(self, parser):
        parsed = parser.parse("A[Function: a]\nA[Class: again]\nA --> Missing")
        assert parsed.node_ids == ["A", "A"]
        assert parsed.connections[0].target.node_id == "Missing"

    def test_malformed_lines_are_skipped(self, parser):
        parsed = parser.parse("A[NoColon]\n--> B\nrandom words\nB[Function: b]")
        assert parsed.node_ids == ["B"]
        assert parsed.connections == []
        assert parsed.metadata == {}

    def test_line_numbers(self, parser):
        parsed = parser.parse("\n%% comment\nA[Function: a]\n\nA --> A")
        assert parsed.nodes[0].line_number == 3
        assert parsed.connections[0].line_number == 5

    def test_empty_input(self, parser):
        parsed = parser.parse("")
        assert parsed.title is None
        assert parsed.nodes == [] and parsed.connections == []

    def test_non_string_input_raises(self, parser):
        with pytest.raises(ParsingError) as excinfo:
            parser.parse(None)

        assert str(excinfo.value) == "Parsing error: Diagram source must be a string, got NoneType."
        report = excinfo.value.get_diagnostic_report()
        assert "Diagram Parsing Error" in report
        assert "must be a string" in report
        assert "Line:" not in report
