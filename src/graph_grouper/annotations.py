import enum
from collections.abc import Mapping
from dataclasses import dataclass

from frozendict import frozendict

import graph_grouper.logging as logging
from graph_grouper.core.ir import NodeId
from graph_grouper.schemas import GraphSnapshot

logger = logging.get_logger(__name__)

STOP_MARKER = "GG:stop"


class CommentKind(enum.Enum):
    REGULAR = "comment"
    """Shown only at the node it is attached to."""

    REPEATABLE = "repeatable_comment"
    """Also shown wherever the node is referenced."""


@dataclass(frozen=True)
class Comment:
    regular: str | None = None
    repeatable: str | None = None

    def get(self, kind: CommentKind) -> str | None:
        match kind:
            case CommentKind.REGULAR:
                return self.regular
            case CommentKind.REPEATABLE:
                return self.repeatable
            case _:
                raise ValueError(f"Unknown comment kind: {kind}")


class NodeAnnotations:
    """Read-only comments attached to graph nodes."""

    def __init__(self, comments: Mapping[NodeId, Comment] | None = None):
        self._comments = frozendict(comments or {})

    @staticmethod
    def from_snapshot(snapshot: GraphSnapshot) -> "NodeAnnotations":
        return NodeAnnotations(
            {
                node.id: Comment(node.comment, node.repeatable_comment)
                for node in snapshot.nodes
                if node.comment is not None or node.repeatable_comment is not None
            }
        )

    def comment(self, node: NodeId, kind: CommentKind = CommentKind.REGULAR) -> str | None:
        if entry := self._comments.get(node):
            return entry.get(kind)
        return None

    def __len__(self) -> int:
        return len(self._comments)


class CommentBoundary:
    """Boundary predicate: a node stops region growth when its regular comment contains the marker."""

    def __init__(self, annotations: NodeAnnotations, marker: str = STOP_MARKER):
        if not marker:
            raise ValueError("boundary marker must not be empty")
        self.annotations = annotations
        self.marker = marker

    def __call__(self, node: NodeId) -> bool:
        text = self.annotations.comment(node, CommentKind.REGULAR)
        if text is None:
            return False

        found = self.marker in text
        if found:
            logger.debug("[dim]node %d carries boundary marker %r[/]", node, self.marker)
        return found


def suggest_label(annotations: NodeAnnotations, node: NodeId) -> str | None:
    """The node's regular comment, falling back to its repeatable one; None when it has neither."""
    for kind in (CommentKind.REGULAR, CommentKind.REPEATABLE):
        if (text := annotations.comment(node, kind)) is not None:
            return text
    return None
