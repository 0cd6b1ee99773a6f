#!/usr/bin/env python3
import argparse
import logging as std_logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

import graph_grouper.logging as logging
from graph_grouper import utils
from graph_grouper.annotations import NodeAnnotations
from graph_grouper.client import GroupingClient, run
from graph_grouper.config import GrouperConfig
from graph_grouper.core import ControlFlowGraph, DominanceInformation, Group, GroupProvider, InvalidQueryError
from graph_grouper.schemas import GraphSnapshot

logger = logging.get_logger(__name__)


class SnapshotClient(GroupingClient):
    """A host backed by a snapshot file; groups are kept in memory until written out."""

    def __init__(
        self,
        snapshot: GraphSnapshot,
        start: int | None = None,
        label: str | None = None,
        interactive: bool = False,
    ):
        super().__init__()
        self._snapshot = snapshot
        self._graph = ControlFlowGraph.from_snapshot(snapshot)
        self._annotations = NodeAnnotations.from_snapshot(snapshot)
        self._start = start if start is not None else snapshot.selected
        self._label = label
        self._interactive = interactive
        self.groups: list[Group] = []

    def get_graph(self) -> ControlFlowGraph:
        return self._graph

    def get_annotations(self) -> NodeAnnotations:
        return self._annotations

    def get_current_node(self) -> int | None:
        return self._start

    def ask_text(self, default: str, prompt: str) -> str | None:
        if self._label is not None:
            return self._label
        if self._interactive:
            return Prompt.ask(prompt, default=default)
        return default

    def create_groups(self, groups: Sequence[Group]) -> None:
        self.groups.extend(groups)


def _load_snapshot(path: str) -> GraphSnapshot:
    try:
        return utils.read_snapshot(Path(path))
    except (OSError, ValidationError) as e:
        logger.error("[red]cannot read snapshot '%s'[/]: %s", path, e)
        sys.exit(2)


def group_fun(program_args: argparse.Namespace):
    config = GrouperConfig(
        stop_marker=program_args.marker,
        max_label_length=program_args.max_label_length,
    )
    snapshot = _load_snapshot(program_args.snapshot)
    client = SnapshotClient(snapshot, program_args.start, program_args.label, program_args.interactive)

    try:
        group = run(client, config)
    except InvalidQueryError as e:
        logger.error("[red]%s[/]", e)
        sys.exit(1)

    if group is None:
        sys.exit(1)

    graph = client.get_graph()
    output = Path(program_args.output or Path(program_args.snapshot).with_suffix(".groups.json"))
    utils.write_groups(output, graph, client.groups)
    logger.info("wrote %d group(s) to %s", len(client.groups), str(output))

    if program_args.render:
        provider = GroupProvider(graph)
        rendered = provider.visualize_groups(client.groups, Path(program_args.render))
        logger.info("rendered grouped graph to %s", str(rendered))


def group_parser(parser: argparse.ArgumentParser):
    parser.add_argument(
        "-s",
        "--start",
        type=int,
        default=None,
        help="node to group from (default: the snapshot's selected node)",
    )
    parser.add_argument(
        "-l",
        "--label",
        type=str,
        default=None,
        help="group label (default: the start node's comment)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="output path for the groups (default: <snapshot>.groups.json)",
    )
    parser.add_argument(
        "--marker",
        type=str,
        default=GrouperConfig.stop_marker,
        help=f"comment text marking boundary nodes (default={GrouperConfig.stop_marker})",
    )
    parser.add_argument(
        "--max-label-length",
        type=int,
        default=GrouperConfig.max_label_length,
        help=f"truncate longer labels (default={GrouperConfig.max_label_length})",
    )
    parser.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="prompt for the group label",
    )
    parser.add_argument(
        "--render",
        type=str,
        default=None,
        metavar="DIR",
        help="render the grouped graph as a pdf into DIR",
    )
    parser.add_argument("snapshot", type=str, help="graph snapshot (JSON)")
    parser.set_defaults(func=group_fun)


def dominators_fun(program_args: argparse.Namespace):
    snapshot = _load_snapshot(program_args.snapshot)
    graph = ControlFlowGraph.from_snapshot(snapshot)
    dominance = DominanceInformation(graph)

    table = Table(title=f"Dominators ({dominance.passes} passes)")
    table.add_column("node", style="cyan")
    table.add_column("dominated by")
    for node in graph.nodes():
        if dominance.is_reachable(node):
            dominators = ", ".join(graph.name_of(d) for d in sorted(dominance.dominators(node)))
        else:
            dominators = "[dim]unreachable[/]"
        table.add_row(graph.name_of(node), dominators)

    Console().print(table)

    if program_args.render:
        provider = GroupProvider(graph)
        rendered = provider.visualize_dominance(Path(program_args.render))
        logger.info("rendered dominator sets to %s", str(rendered))


def dominators_parser(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--render",
        type=str,
        default=None,
        metavar="DIR",
        help="render the dominator sets as a pdf into DIR",
    )
    parser.add_argument("snapshot", type=str, help="graph snapshot (JSON)")
    parser.set_defaults(func=dominators_fun)


def main(argv: Sequence[str] | None = None):
    parser = argparse.ArgumentParser(description="graph grouper cli")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    subparser = parser.add_subparsers(dest="command", required=True)
    group_parser(subparser.add_parser("group", help="group the nodes dominated by a start node"))
    dominators_parser(subparser.add_parser("dominators", help="list the dominators of every node"))

    program_args = parser.parse_args(argv)
    if program_args.verbose:
        logging.set_level(std_logging.DEBUG)

    try:
        program_args.func(program_args)
    except Exception as e:
        logging.log_exception(e)
        sys.exit(1)


if __name__ == "__main__":
    main()
