"""Topological sorting of adjacency text on a generational slot arena."""

__all__ = [
    "Arena",
    "CycleError",
    "Digraph",
    "DigraphParser",
    "GraphParseError",
    "MissingNodeError",
    "Node",
    "NodeHandle",
    "SlotHandle",
    "TopologicalSortError",
    "finish",
    "new_parser",
    "node_payload",
    "parse_line",
    "sort",
    "topological_sort",
]

from ._api import finish, new_parser, node_payload, parse_line, sort
from ._arena import Arena, SlotHandle
from ._graph import CycleError, Digraph, MissingNodeError, Node, NodeHandle, TopologicalSortError, topological_sort
from ._parser import DigraphParser, GraphParseError
