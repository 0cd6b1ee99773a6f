from collections import deque
from collections.abc import Iterator

import graphviz  # type: ignore

import graph_grouper.logging as logging
from graph_grouper.core.ir import ControlFlowGraph, NodeId

logger = logging.get_logger(__name__)

BitSet = int
"""bit u is set when node u is a member"""


class InvalidEntryError(ValueError):
    """The graph's entry node is not one of its nodes."""


class InvalidQueryError(ValueError):
    """A node id passed to a query is not one of the graph's nodes."""


class DominanceInformation:
    """Full dominator sets for every node of a single-entry graph.

    The sets are computed once at construction and never change afterwards, so
    one instance can back any number of region collections over the same graph.
    Nodes unreachable from the entry end up dominated by every node; use
    `is_reachable` to tell that case apart.
    """

    def __init__(self, graph: ControlFlowGraph):
        if graph.entry not in graph:
            raise InvalidEntryError(f"entry node {graph.entry} is outside [0, {graph.node_count()})")

        self.graph = graph
        self.passes = 0
        self._dom: tuple[BitSet, ...] = self._solve()
        self._reachable = frozenset(reachable_from(graph, graph.entry))

    # ---------- Public API ----------

    def dominates(self, node: NodeId, other: NodeId) -> bool:
        """Return True when every path from the entry to `other` passes through `node`."""
        self._check(node)
        self._check(other)
        return bool(self._dom[other] >> node & 1)

    def dominators(self, node: NodeId) -> frozenset[NodeId]:
        """Return the set of nodes that dominate `node`."""
        self._check(node)
        return frozenset(members(self._dom[node]))

    def is_reachable(self, node: NodeId) -> bool:
        self._check(node)
        return node in self._reachable

    def nodes(self) -> range:
        return self.graph.nodes()

    # ---------- Dominance ----------

    @staticmethod
    def dominance_passes(graph: ControlFlowGraph) -> Iterator[tuple[BitSet, ...]]:
        """
        Iterative dataflow: Dom(n) = {n} ∪ ⋂_{p ∈ preds(n)} Dom(p), with Dom(entry) = {entry}.
        Yields every node's set after each pass; the last snapshot is the fixpoint.
        """
        count = graph.node_count()
        entry = graph.entry

        dom = [universe(count)] * count
        dom[entry] = 1 << entry

        changed = True
        while changed:
            changed = False

            for n in graph.nodes():
                if n == entry:
                    continue

                prev = dom[n]
                current = prev
                for p in graph.predecessors(n):
                    current &= dom[p]
                current |= 1 << n

                if current != prev:
                    dom[n] = current
                    changed = True

            yield tuple(dom)

    @logging.timer(name="Dominance computation")
    def _solve(self) -> tuple[BitSet, ...]:
        dom: tuple[BitSet, ...] = ()
        for dom in self.dominance_passes(self.graph):
            self.passes += 1

        total = sum(d.bit_count() for d in dom)
        logger.debug("[dim]dominance: avg %.1f dominators per node[/]", total / len(dom))
        logger.info("[bold blue]dominance computation complete[/] [dim](%d passes)[/]", self.passes)

        return dom

    def _check(self, node: NodeId) -> None:
        if node not in self.graph:
            raise InvalidQueryError(f"node {node} is outside [0, {self.graph.node_count()})")

    # ---------- Rendering ----------

    def render_graph(self, graph: graphviz.Digraph) -> None:
        """Render every reachable node with a dashed edge from each of its strict dominators."""
        graph.attr(rankdir="LR")
        for node in self.nodes():
            graph.node(str(node), label=self.graph.name_of(node))

        for node in self.nodes():
            if not self.is_reachable(node):
                continue
            for dominator in sorted(self.dominators(node) - {node}):
                graph.edge(str(dominator), str(node), style="dashed")


def universe(count: int) -> BitSet:
    return (1 << count) - 1


def members(bits: BitSet) -> Iterator[NodeId]:
    node = 0
    while bits:
        if bits & 1:
            yield node
        bits >>= 1
        node += 1


def reachable_from(graph: ControlFlowGraph, start: NodeId) -> set[NodeId]:
    """Forward reachability over successor edges, including `start` itself."""
    reachable: set[NodeId] = set()
    queue = deque([start])

    while queue:
        node = queue.popleft()
        if node not in reachable:
            reachable.add(node)
            queue.extend(graph.successors(node))

    return reachable
