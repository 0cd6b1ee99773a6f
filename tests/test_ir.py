import graphviz  # type: ignore
import pytest

from graph_grouper.core import ControlFlowGraph
from graph_grouper.schemas import GraphSnapshot


def test_from_edges_keeps_edge_order():
    graph = ControlFlowGraph.from_edges(4, [(0, 2), (0, 1), (1, 3), (2, 3)])

    assert graph.node_count() == 4
    assert graph.successors(0) == (2, 1)
    assert graph.predecessors(3) == (1, 2)
    assert graph.predecessors(0) == ()
    assert list(graph.edges()) == [(0, 2), (0, 1), (1, 3), (2, 3)]


def test_isolated_nodes_have_empty_adjacency():
    graph = ControlFlowGraph.from_edges(3, [(0, 1)])
    assert graph.successors(2) == ()
    assert graph.predecessors(2) == ()


def test_membership():
    graph = ControlFlowGraph.from_edges(2, [(0, 1)])
    assert 0 in graph
    assert 1 in graph
    assert 2 not in graph
    assert -1 not in graph
    assert "0" not in graph


def test_names():
    graph = ControlFlowGraph.from_edges(2, [(0, 1)], names={0: "entry"})
    assert graph.name_of(0) == "entry"
    assert graph.name_of(1) == "node_1"


@pytest.mark.parametrize("edges", [[(0, 2)], [(-1, 0)], [(1, 5)]])
def test_out_of_range_edges(edges):
    with pytest.raises(ValueError):
        ControlFlowGraph.from_edges(2, edges)


def test_empty_graph():
    with pytest.raises(ValueError):
        ControlFlowGraph.from_edges(0, [])


def test_from_snapshot():
    snapshot = GraphSnapshot.model_validate(
        {
            "entry": 1,
            "nodes": [{"id": 1, "name": "start"}, {"id": 0, "name": "tail"}],
            "edges": [[1, 0]],
        }
    )
    graph = ControlFlowGraph.from_snapshot(snapshot)

    assert graph.entry == 1
    assert graph.successors(1) == (0,)
    assert graph.name_of(0) == "tail"


def test_render_graph_marks_entry():
    graph = ControlFlowGraph.from_edges(2, [(0, 1)])
    dot = graphviz.Digraph()
    graph.render_graph(dot, highlight=[1])

    assert "fillcolor=lightgreen" in dot.source
    assert "fillcolor=lightgrey" in dot.source
    assert "0 -> 1" in dot.source
