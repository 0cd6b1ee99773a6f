"""Dominance-gated region collection.

A region grows from a start node along successor edges. A successor joins the
region only when the start node dominates it, so every member can be reached
from the graph's entry only by going through the start node first. Growth stops
at boundary nodes, which are neither added nor expanded.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass

import graph_grouper.logging as logging
from graph_grouper.core.dominance import DominanceInformation, InvalidQueryError
from graph_grouper.core.ir import ControlFlowGraph, NodeId

logger = logging.get_logger(__name__)

BoundaryPredicate = Callable[[NodeId], bool]


def no_boundary(node: NodeId) -> bool:
    return False


@dataclass(frozen=True)
class Region:
    start: NodeId
    """the node the region was grown from"""

    nodes: tuple[NodeId, ...]
    """members in discovery order, without duplicates"""

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[NodeId]:
        return iter(self.nodes)

    def __contains__(self, node: object) -> bool:
        return node in self.nodes

    @property
    def is_empty(self) -> bool:
        return not self.nodes


class RegionCollector:
    def __init__(
        self,
        graph: ControlFlowGraph,
        dominance: DominanceInformation,
        boundary: BoundaryPredicate = no_boundary,
    ):
        if dominance.graph is not graph:
            raise ValueError("dominance information was computed for a different graph")

        self.graph = graph
        self.dominance = dominance
        self.boundary = boundary

    def collect(self, start: NodeId) -> Region:
        """Collect the region grown from `start`; empty when `start` is itself a boundary node."""
        if start not in self.graph:
            raise InvalidQueryError(f"start node {start} is outside [0, {self.graph.node_count()})")

        # the predicate is asked at most once per node
        stops: dict[NodeId, bool] = {}

        def is_boundary(node: NodeId) -> bool:
            if node not in stops:
                stops[node] = bool(self.boundary(node))
            return stops[node]

        if is_boundary(start):
            logger.warning(
                "[yellow]start node %s is a boundary node; nothing to collect[/]",
                self.graph.name_of(start),
            )
            return Region(start, ())

        order = [start]
        visited = {start}
        # explicit stack of successor iterators, same discovery order as the recursive walk
        stack = [iter(self.graph.successors(start))]

        while stack:
            successor = next(stack[-1], None)
            if successor is None:
                stack.pop()
                continue

            if successor in visited or not self.dominance.dominates(start, successor):
                continue
            if is_boundary(successor):
                continue

            visited.add(successor)
            order.append(successor)
            stack.append(iter(self.graph.successors(successor)))

        logger.debug(
            "[dim]region from %s: %d nodes, %d boundary checks[/]",
            self.graph.name_of(start),
            len(order),
            len(stops),
        )
        return Region(start, tuple(order))


def collect(
    graph: ControlFlowGraph,
    dominators: DominanceInformation,
    boundary: BoundaryPredicate,
    start: NodeId,
) -> Region:
    return RegionCollector(graph, dominators, boundary).collect(start)
