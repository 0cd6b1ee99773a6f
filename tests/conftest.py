import random

import pytest

from graph_grouper.core import ControlFlowGraph


def make_graph(node_count, edges, entry=0, names=None):
    return ControlFlowGraph.from_edges(node_count, edges, entry=entry, names=names)


def random_graph(seed, node_count=12, edge_count=20):
    """Every node reachable from 0 through a random spanning tree, plus random extra edges (cycles allowed)."""
    rng = random.Random(seed)
    order = list(range(1, node_count))
    rng.shuffle(order)

    edges = []
    placed = [0]
    for node in order:
        edges.append((rng.choice(placed), node))
        placed.append(node)
    for _ in range(edge_count):
        edges.append((rng.randrange(node_count), rng.randrange(node_count)))

    return make_graph(node_count, edges)


@pytest.fixture
def chain():
    # linear chain: 0 -> 1 -> 2 -> 3
    return make_graph(4, [(0, 1), (1, 2), (2, 3)])


@pytest.fixture
def skip_merge():
    # merge that bypasses 1: 0 -> 1 -> 2 and 0 -> 2
    return make_graph(3, [(0, 1), (1, 2), (0, 2)])


@pytest.fixture
def back_edge():
    # loop through a back edge: 0 -> 1 -> 2 -> 1
    return make_graph(3, [(0, 1), (1, 2), (2, 1)])


@pytest.fixture
def loop_with_exit():
    #   0 -> 1 -> 2 -> 1
    #             2 -> 3 -> 4
    #   0 -> 5 -> 4
    return make_graph(6, [(0, 1), (1, 2), (2, 1), (2, 3), (3, 4), (0, 5), (5, 4)])
