"""Functional entry points used by the command-line driver."""

from slotsort._graph import Digraph, NodeHandle
from slotsort._parser import DigraphParser


def new_parser() -> DigraphParser:
    """Create an empty parser."""
    return DigraphParser()


def parse_line(parser: DigraphParser, text: str) -> None:
    """Feed one line of adjacency text to a parser."""
    parser.parse_line(text)


def finish(parser: DigraphParser) -> Digraph[str]:
    """Return the graph a parser has built."""
    return parser.graph()


def sort(graph: Digraph[str]) -> list[NodeHandle]:
    """Sort a graph topologically.

    Raises:
        MissingNodeError: If an edge points at a removed node.
        CycleError: If the graph contains a cycle.

    """
    return graph.tsort()


def node_payload(graph: Digraph[str], handle: NodeHandle) -> str | None:
    """Return the name held by a node, or None if the handle is not live."""
    node = graph.node(handle)
    return None if node is None else node.data
