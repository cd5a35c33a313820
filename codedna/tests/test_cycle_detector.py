import pytest

from codedna.analytics.cycle_detector import (
    classify_severity,
    detect_cycles,
    strongly_connected_components,
)
from codedna.types import Graph, GraphEdge, GraphNode, Severity


def _ring(make_record, names):
    return [
        make_record(f"{name}.js", [(names[(i + 1) % len(names)], True)])
        for i, name in enumerate(names)
    ]


class TestCycleDetector:
    """Test Tarjan-based cycle detection."""

    def test_linear_chain_has_no_cycles(self, build, chain_records):
        assert detect_cycles(build(chain_records)) == []

    def test_two_cycle(self, build, two_cycle_records):
        cycles = detect_cycles(build(two_cycle_records))

        assert len(cycles) == 1
        cycle = cycles[0]
        assert cycle.id == "cycle-1"
        assert cycle.size == 2
        assert cycle.severity is Severity.LOW
        assert set(cycle.nodes) == {"src/a.js", "src/b.js"}
        # Members are listed in stack-pop order
        assert cycle.nodes == ["src/b.js", "src/a.js"]
        assert cycle.node_labels == ["b.js", "a.js"]

    def test_severity_by_size(self, build, make_record):
        three = detect_cycles(build(_ring(make_record, ["a", "b", "c"])))
        four = detect_cycles(build(_ring(make_record, ["a", "b", "c", "d"])))

        assert three[0].severity is Severity.MEDIUM
        assert four[0].severity is Severity.HIGH
        assert four[0].to_dict()["severity"] == "high"

    def test_multiple_disjoint_cycles(self, build, make_record):
        records = (
            _ring(make_record, ["a", "b"])
            + _ring(make_record, ["x", "y", "z"])
            + [make_record("lone.js", [("a", True), ("x", True)])]
        )
        cycles = detect_cycles(build(records))

        assert [c.id for c in cycles] == ["cycle-1", "cycle-2"]
        assert [set(c.nodes) for c in cycles] == [{"a.js", "b.js"}, {"x.js", "y.js", "z.js"}]

    def test_nested_cycles_form_one_component(self, build, make_record):
        records = [
            make_record("a.js", [("b", True)]),
            make_record("b.js", [("a", True), ("c", True)]),
            make_record("c.js", [("b", True)]),
        ]
        cycles = detect_cycles(build(records))

        assert len(cycles) == 1
        assert set(cycles[0].nodes) == {"a.js", "b.js", "c.js"}

    def test_self_loop_is_single_member_cycle(self, build, make_record):
        cycles = detect_cycles(build([make_record("a.js", [("a", True)]), make_record("b.js")]))

        assert len(cycles) == 1
        assert cycles[0].nodes == ["a.js"]
        assert cycles[0].size == 1
        assert cycles[0].severity is Severity.LOW

    def test_cycle_members_are_confined(self, build, make_record):
        records = [
            make_record("a.js", [("b", True), ("d", True)]),
            make_record("b.js", [("c", True)]),
            make_record("c.js", [("a", True), ("e", True)]),
            make_record("d.js", [("e", True)]),
            make_record("e.js", [("d", True)]),
            make_record("f.js", [("a", True)]),
        ]
        graph = build(records)

        cycles = detect_cycles(graph)

        assert len(cycles) == 2
        for cycle in cycles:
            members = set(cycle.nodes)
            assert cycle.size >= 2
            for node_id in members:
                assert any(e.source == node_id and e.target in members for e in graph.edges)
                assert any(e.target == node_id and e.source in members for e in graph.edges)

    def test_long_chain_does_not_recurse(self, build, make_record):
        """A ring far deeper than the interpreter recursion limit."""
        count = 3000
        records = [
            make_record(f"m{i}.js", [(f"m{(i + 1) % count}", True)])
            for i in range(count)
        ]

        cycles = detect_cycles(build(records))

        assert len(cycles) == 1
        assert cycles[0].size == count
        assert cycles[0].severity is Severity.HIGH

    def test_dense_fan_out_terminates(self, build, make_record):
        names = [f"n{i}" for i in range(30)]
        records = [
            make_record(f"{name}.js", [(other, True) for other in names])
            for name in names
        ]

        cycles = detect_cycles(build(records))

        assert len(cycles) == 1
        assert cycles[0].size == 30

    def test_detection_is_deterministic(self, build, make_record):
        records = _ring(make_record, ["a", "b", "c"]) + _ring(make_record, ["x", "y"])

        first = [c.to_dict() for c in detect_cycles(build(records))]
        second = [c.to_dict() for c in detect_cycles(build(records))]

        assert first == second

    def test_empty_graph(self):
        assert detect_cycles(Graph()) == []

    def test_edges_to_unknown_nodes_are_ignored(self):
        graph = Graph(
            nodes=(GraphNode("a", "a", "javascript", 1, 1, "root"),),
            edges=(GraphEdge("a", "ghost"),),
        )

        assert detect_cycles(graph) == []


def test_strongly_connected_components_covers_every_node():
    adjacency = {"a": ["b"], "b": ["a"], "c": ["a"], "d": []}

    components = strongly_connected_components(adjacency, ["a", "b", "c", "d"])

    assert sorted(sorted(c) for c in components) == [["a", "b"], ["c"], ["d"]]


@pytest.mark.parametrize("size,expected", [
    (1, Severity.LOW),
    (2, Severity.LOW),
    (3, Severity.MEDIUM),
    (4, Severity.HIGH),
    (10, Severity.HIGH),
])
def test_classify_severity(size, expected):
    assert classify_severity(size) is expected
