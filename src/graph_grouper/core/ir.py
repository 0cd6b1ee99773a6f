"""Immutable control-flow graph view consumed by the dominance and region analyses."""

from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

import graphviz  # type: ignore
from frozendict import frozendict

import graph_grouper.logging as logging
from graph_grouper.schemas import GraphSnapshot

logger = logging.get_logger(__name__)

NodeId = int


@dataclass(frozen=True)
class ControlFlowGraph:
    entry: NodeId
    """the single node every path starts from; validated by DominanceInformation"""

    successor_map: frozendict[NodeId, tuple[NodeId, ...]]
    """ordered successors of every node, in edge insertion order"""

    predecessor_map: frozendict[NodeId, tuple[NodeId, ...]]
    """inverse of successor_map, also in edge insertion order"""

    names: frozendict[NodeId, str]
    """optional display names; nodes without one are rendered as node_<id>"""

    @staticmethod
    def from_edges(
        node_count: int,
        edges: Iterable[tuple[NodeId, NodeId]],
        entry: NodeId = 0,
        names: Mapping[NodeId, str] | None = None,
    ) -> "ControlFlowGraph":
        """Build a graph over nodes 0..node_count-1 from (source, destination) pairs."""
        if node_count < 1:
            raise ValueError(f"graph must have at least one node, got {node_count}")

        successors: defaultdict[NodeId, list[NodeId]] = defaultdict(list)
        predecessors: defaultdict[NodeId, list[NodeId]] = defaultdict(list)

        edge_count = 0
        for src, dst in edges:
            if not (0 <= src < node_count and 0 <= dst < node_count):
                raise ValueError(f"edge {src} -> {dst} references a node outside [0, {node_count})")
            successors[src].append(dst)
            predecessors[dst].append(src)
            edge_count += 1

        logger.debug("[dim]graph built: %d nodes, %d edges, entry %d[/]", node_count, edge_count, entry)

        return ControlFlowGraph(
            entry=entry,
            successor_map=frozendict({n: tuple(successors[n]) for n in range(node_count)}),
            predecessor_map=frozendict({n: tuple(predecessors[n]) for n in range(node_count)}),
            names=frozendict(names or {}),
        )

    @staticmethod
    def from_snapshot(snapshot: GraphSnapshot) -> "ControlFlowGraph":
        names = {node.id: node.name for node in snapshot.nodes if node.name is not None}
        return ControlFlowGraph.from_edges(
            len(snapshot.nodes),
            (tuple(edge) for edge in snapshot.edges),
            entry=snapshot.entry,
            names=names,
        )

    def node_count(self) -> int:
        return len(self.successor_map)

    def nodes(self) -> range:
        return range(self.node_count())

    def __contains__(self, node: object) -> bool:
        return isinstance(node, int) and 0 <= node < self.node_count()

    def successors(self, node: NodeId) -> tuple[NodeId, ...]:
        """Get the successor nodes of a given node, in edge order."""
        return self.successor_map[node]

    def predecessors(self, node: NodeId) -> tuple[NodeId, ...]:
        """Get the predecessor nodes of a given node, in edge order."""
        return self.predecessor_map[node]

    def name_of(self, node: NodeId) -> str:
        return self.names.get(node, f"node_{node}")

    def edges(self) -> Iterable[tuple[NodeId, NodeId]]:
        for src, dests in self.successor_map.items():
            for dest in dests:
                yield src, dest

    def render_graph(self, graph: graphviz.Digraph, highlight: Iterable[NodeId] = ()):
        """Render the graph using graphviz"""
        highlighted = frozenset(highlight)

        for node in self.nodes():
            fillcolor = "lightgrey" if node in highlighted else "white"
            fillcolor = "lightgreen" if node == self.entry else fillcolor
            graph.node(str(node), label=self.name_of(node), shape="box", style="filled", fillcolor=fillcolor)

        for src, dest in self.edges():
            graph.edge(str(src), str(dest))
