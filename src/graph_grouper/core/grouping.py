from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import graphviz  # type: ignore

import graph_grouper.logging as logging
from graph_grouper.core.dominance import DominanceInformation
from graph_grouper.core.ir import ControlFlowGraph, NodeId
from graph_grouper.core.region import BoundaryPredicate, Region, RegionCollector, no_boundary

logger = logging.get_logger(__name__)

GROUP_COLORS = ("lightblue", "lightyellow", "lightpink", "palegreen", "lavender", "peachpuff")


class GroupingError(ValueError):
    """A grouping request that cannot produce a group."""


class NoSelectionError(GroupingError):
    pass


class EmptyLabelError(GroupingError):
    pass


class EmptyRegionError(GroupingError):
    pass


@dataclass(frozen=True)
class Group:
    """A labelled region, ready to be collapsed into one visual node by the host."""

    label: str
    region: Region

    @property
    def start(self) -> NodeId:
        return self.region.start

    @property
    def nodes(self) -> tuple[NodeId, ...]:
        return self.region.nodes


class GroupProvider:
    """
    Turns grouping requests into groups for one graph snapshot.
    Responsibilities:
      - build dominance info once per graph
      - collect dominance-gated regions bounded by the boundary predicate
      - reject requests that would produce an invalid group
      - render the graph with its groups
    """

    def __init__(self, graph: ControlFlowGraph, boundary: BoundaryPredicate = no_boundary):
        self._dominance = DominanceInformation(graph)
        self._collector = RegionCollector(graph, self._dominance, boundary)

    @property
    def graph(self) -> ControlFlowGraph:
        return self._dominance.graph

    @property
    def dominance(self) -> DominanceInformation:
        return self._dominance

    def region(self, start: NodeId) -> Region:
        return self._collector.collect(start)

    def group(self, start: NodeId | None, label: str | None) -> Group:
        """Validate the request and collect the group rooted at `start`.

        Raises:
            NoSelectionError: no start node (None or negative)
            EmptyLabelError: missing or blank label
            EmptyRegionError: `start` is a boundary node, so the region would be empty
            InvalidQueryError: `start` is not a node of the graph
        """
        if start is None or start < 0:
            raise NoSelectionError("Please select a node to start grouping from.")

        if label is None or not label.strip():
            raise EmptyLabelError("no group text was entered")

        region = self.region(start)
        if region.is_empty:
            raise EmptyRegionError(f"node {self.graph.name_of(start)} is a boundary node and cannot start a group")

        logger.info(
            "[bold blue]group[/] [cyan]%s[/] from %s [dim](%d nodes)[/]",
            label,
            self.graph.name_of(start),
            len(region),
        )
        return Group(label, region)

    # -----------------------------
    # Visualization
    # -----------------------------

    def build_group_graph(self, groups: Iterable[Group]) -> graphviz.Digraph:
        """A digraph with one cluster per group; ungrouped nodes stay at the top level."""
        dot = graphviz.Digraph(name="Grouped Graph")
        dot.attr(nodesep="0.1", ranksep="0.3")

        grouped: set[NodeId] = set()
        for index, group in enumerate(groups):
            color = GROUP_COLORS[index % len(GROUP_COLORS)]
            with dot.subgraph(name=f"cluster_{index}") as cluster:
                cluster.attr("graph", label=group.label, style="rounded,filled", fillcolor=color)
                for node in group.nodes:
                    if node in grouped:
                        logger.warning("[yellow]node %s is already part of another group[/]", self.graph.name_of(node))
                        continue
                    cluster.node(str(node), label=self.graph.name_of(node), shape="box")
                    grouped.add(node)

        for node in self.graph.nodes():
            if node not in grouped:
                fillcolor = "lightgreen" if node == self.graph.entry else "white"
                dot.node(str(node), label=self.graph.name_of(node), shape="box", style="filled", fillcolor=fillcolor)

        for src, dest in self.graph.edges():
            dot.edge(str(src), str(dest))

        return dot

    def visualize_groups(self, groups: Iterable[Group], export_path: Path) -> Path:
        """export the grouped graph as a pdf"""
        export_path.absolute().mkdir(parents=True, exist_ok=True)
        dot = self.build_group_graph(groups)
        return Path(dot.render(export_path / "grouped_graph", format="pdf"))

    def visualize_dominance(self, export_path: Path) -> Path:
        """export the dominator sets as a pdf"""
        export_path.absolute().mkdir(parents=True, exist_ok=True)
        dom_gv = graphviz.Digraph(name="Dominance Set")
        dom_gv.attr(nodesep="0.1", ranksep="0.3")
        self._dominance.render_graph(dom_gv)
        return Path(dom_gv.render(export_path / "dominance_set", format="pdf"))
