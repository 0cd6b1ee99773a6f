import pytest

from graph_grouper.annotations import (
    STOP_MARKER,
    Comment,
    CommentBoundary,
    CommentKind,
    NodeAnnotations,
    suggest_label,
)
from graph_grouper.schemas import GraphSnapshot


@pytest.fixture
def annotations():
    return NodeAnnotations(
        {
            0: Comment(regular="function prologue"),
            1: Comment(regular="cleanup GG:stop here"),
            2: Comment(repeatable="GG:stop"),
            3: Comment(regular="retry loop", repeatable="shared"),
            4: Comment(repeatable="error path"),
        }
    )


def test_comment_lookup(annotations):
    assert annotations.comment(0) == "function prologue"
    assert annotations.comment(0, CommentKind.REPEATABLE) is None
    assert annotations.comment(3, CommentKind.REPEATABLE) == "shared"
    assert annotations.comment(9) is None
    assert len(annotations) == 5


def test_marker_anywhere_in_regular_comment(annotations):
    boundary = CommentBoundary(annotations)
    assert boundary(1)
    assert not boundary(0)
    assert not boundary(9)


def test_repeatable_comment_does_not_mark_boundary(annotations):
    assert not CommentBoundary(annotations)(2)


def test_custom_marker(annotations):
    boundary = CommentBoundary(annotations, marker="retry")
    assert boundary(3)
    assert not boundary(1)


def test_empty_marker_is_rejected(annotations):
    with pytest.raises(ValueError):
        CommentBoundary(annotations, marker="")


def test_default_marker():
    assert STOP_MARKER == "GG:stop"


def test_suggest_label_prefers_regular_comment(annotations):
    assert suggest_label(annotations, 3) == "retry loop"
    assert suggest_label(annotations, 4) == "error path"
    assert suggest_label(annotations, 7) is None


def test_from_snapshot():
    snapshot = GraphSnapshot.model_validate(
        {
            "nodes": [
                {"id": 0},
                {"id": 1, "comment": "GG:stop"},
                {"id": 2, "repeatable_comment": "shared"},
            ],
            "edges": [[0, 1], [0, 2]],
        }
    )
    annotations = NodeAnnotations.from_snapshot(snapshot)

    assert len(annotations) == 2
    assert CommentBoundary(annotations)(1)
    assert suggest_label(annotations, 2) == "shared"
    assert suggest_label(annotations, 0) is None
