"""Graph module providing the directed graph and its topological sort.

This module contains:
- Digraph[T]: A directed graph whose nodes live in a slot arena
- topological_sort: Depth-first ordering with cycle detection
"""

from ._algorithms import CycleError, MissingNodeError, TopologicalSortError, topological_sort
from ._digraph import Digraph, Node, NodeHandle

__all__ = [
    "CycleError",
    "Digraph",
    "MissingNodeError",
    "Node",
    "NodeHandle",
    "TopologicalSortError",
    "topological_sort",
]
