import hashlib
import json
from collections.abc import Iterable
from pathlib import Path

from graph_grouper.core import ControlFlowGraph, Group
from graph_grouper.schemas import GraphSnapshot, GroupListing, GroupRecord


def read_snapshot(path: Path) -> GraphSnapshot:
    """
    Read and validate a graph snapshot file.

    Raises:
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If the contents do not describe a valid graph.
    """
    with open(path, "r") as f:
        return GraphSnapshot.model_validate_json(f.read())


def hash_graph_structure(graph: ControlFlowGraph) -> str:
    """Generate a hash of the graph's nodes, entry and ordered edges. Names are not part of it."""
    structure = {
        "entry": graph.entry,
        "nodes": graph.node_count(),
        "successors": [list(graph.successors(n)) for n in graph.nodes()],
    }
    arch_str = json.dumps(structure, sort_keys=True)
    return hashlib.sha256(arch_str.encode()).hexdigest()


def groups_to_listing(graph: ControlFlowGraph, groups: Iterable[Group]) -> GroupListing:
    return GroupListing(
        graph_hash=hash_graph_structure(graph),
        groups=[GroupRecord(label=g.label, start=g.start, nodes=list(g.nodes)) for g in groups],
    )


def write_groups(path: Path, graph: ControlFlowGraph, groups: Iterable[Group]) -> None:
    """Write the groups created for `graph` as JSON, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        f.write(groups_to_listing(graph, groups).model_dump_json(indent=2))
