from abc import ABC, abstractmethod
from collections.abc import Sequence

import graph_grouper.logging as logging
from graph_grouper.annotations import CommentBoundary, NodeAnnotations, suggest_label
from graph_grouper.config import GrouperConfig
from graph_grouper.core import (
    ControlFlowGraph,
    Group,
    GroupingError,
    GroupProvider,
    InvalidQueryError,
    NodeId,
    NoSelectionError,
)

logger = logging.get_logger(__name__)


class GroupingClient(ABC):
    """The host a grouping runs against; it owns the graph being viewed and receives the groups."""

    def __init__(self):
        super().__init__()

    @abstractmethod
    def get_graph(self) -> ControlFlowGraph:
        """Return a snapshot of the graph currently shown."""
        raise NotImplementedError("GroupingClient.get_graph is not implemented")

    @abstractmethod
    def get_annotations(self) -> NodeAnnotations:
        """Return the comments attached to the graph's nodes."""
        raise NotImplementedError("GroupingClient.get_annotations is not implemented")

    @abstractmethod
    def get_current_node(self) -> NodeId | None:
        """Return the selected node, or None when nothing is selected."""
        raise NotImplementedError("GroupingClient.get_current_node is not implemented")

    @abstractmethod
    def ask_text(self, default: str, prompt: str) -> str | None:
        """Ask for a line of text; None when the user cancels."""
        raise NotImplementedError("GroupingClient.ask_text is not implemented")

    @abstractmethod
    def create_groups(self, groups: Sequence[Group]) -> None:
        """Materialize the groups in the host's graph."""
        raise NotImplementedError("GroupingClient.create_groups is not implemented")


def ask_group_label(client: GroupingClient, annotations: NodeAnnotations, node: NodeId, config: GrouperConfig) -> str:
    """Prompt for the group label, suggesting the start node's comment. Empty when cancelled."""
    default = suggest_label(annotations, node)
    answer = client.ask_text(default if default is not None else config.default_label, config.prompt)
    if answer is None:
        return ""

    if len(answer) > config.max_label_length:
        logger.warning("[yellow]group text truncated to %d characters[/]", config.max_label_length)
        answer = answer[: config.max_label_length]
    return answer


def run(client: GroupingClient, config: GrouperConfig | None = None) -> Group | None:
    """Group the nodes dominated by the client's selected node.

    Returns the created group, or None when the request was refused (nothing
    selected or no usable region); the reason is logged.
    """
    config = config or GrouperConfig()

    graph = client.get_graph()
    annotations = client.get_annotations()

    with logging.timed_execution("grouping", logger):
        provider = GroupProvider(graph, CommentBoundary(annotations, config.stop_marker))

        start = client.get_current_node()
        logger.info("graph size = %d cur_node = %s", graph.node_count(), start)

        try:
            if start is None or start < 0:
                raise NoSelectionError("Please select a node to start grouping from.")
            if start not in graph:
                raise InvalidQueryError(f"start node {start} is outside [0, {graph.node_count()})")
            label = ask_group_label(client, annotations, start, config)
            group = provider.group(start, label)
        except GroupingError as e:
            logger.warning("[yellow]%s[/]", e)
            return None

    client.create_groups([group])
    return group
