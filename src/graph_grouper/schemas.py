"""On-disk formats: graph snapshots read by the CLI and the group listings it writes."""

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class NodeRecord(BaseModel):
    id: int = Field(ge=0)
    name: Optional[str] = None
    comment: Optional[str] = None
    repeatable_comment: Optional[str] = None


class GraphSnapshot(BaseModel):
    """A graph as exported by a host viewer, including node comments and the current selection."""

    entry: int = 0
    nodes: List[NodeRecord]
    edges: List[tuple[int, int]] = Field(default_factory=list)
    selected: Optional[int] = None
    """the host's selected node; None or a negative value means nothing is selected"""

    @model_validator(mode="after")
    def check_ids(self) -> "GraphSnapshot":
        ids = sorted(node.id for node in self.nodes)
        if not ids:
            raise ValueError("snapshot has no nodes")
        if ids != list(range(len(ids))):
            raise ValueError("node ids must be exactly 0..n-1 without duplicates")

        count = len(ids)
        if not 0 <= self.entry < count:
            raise ValueError(f"entry {self.entry} is not a node of the snapshot")
        for src, dst in self.edges:
            if not (0 <= src < count and 0 <= dst < count):
                raise ValueError(f"edge [{src}, {dst}] references an unknown node")

        return self


class GroupRecord(BaseModel):
    label: str
    start: int
    nodes: List[int]


class GroupListing(BaseModel):
    graph_hash: str
    groups: List[GroupRecord] = Field(default_factory=list)
