"""Directed graph stored in a slot arena."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from slotsort._arena import Arena, SlotHandle

from ._algorithms import topological_sort

logger = logging.getLogger(__name__)

NodeHandle = SlotHandle

T = TypeVar("T")


@dataclass(slots=True)
class Node(Generic[T]):
    """A graph node: its payload and the handles of its successors.

    Edges are weak references into the owning graph's arena. They are kept in
    insertion order and may contain duplicates.
    """

    data: T
    edges: list[NodeHandle] = field(default_factory=list)


class Digraph(Generic[T]):
    """A directed, unweighted graph with arena-backed nodes.

    Removing a node leaves edges that point at it in place; such dangling
    edges are only reported when :meth:`tsort` traverses them.

    Example:
        >>> graph = Digraph[int]()
        >>> h1 = graph.add_node(1)
        >>> h2 = graph.add_node(2)
        >>> graph.add_edge(h1, h2)
        >>> [graph.node(h).data for h in graph.tsort()]
        [1, 2]

    """

    def __init__(self) -> None:
        self._nodes: Arena[Node[T]] = Arena()

    def node_count(self) -> int:
        """Return the number of live nodes."""
        return self._nodes.count()

    def add_node(self, data: T) -> NodeHandle:
        """Add a node holding ``data`` and return its handle."""
        return self._nodes.add(Node(data))

    def node(self, handle: NodeHandle) -> Node[T] | None:
        """Return the node behind a handle, or None if it is not live."""
        return self._nodes.get(handle)

    def remove_node(self, handle: NodeHandle) -> None:
        """Remove a node. Edges pointing at it from other nodes are kept."""
        self._nodes.remove(handle)

    def add_edge(self, source: NodeHandle, target: NodeHandle) -> None:
        """Add a directed edge from ``source`` to ``target``.

        The edge is dropped if ``source`` is not a live node. ``target`` is
        not checked here; a dead target is reported by :meth:`tsort`.
        """
        node = self._nodes.get_mut(source)
        if node is None:
            logger.debug(f"Dropping edge {source} -> {target}: source is not a live node")
            return
        node.edges.append(target)

    def successors(self, handle: NodeHandle) -> list[NodeHandle]:
        """Return the edge targets of a node in insertion order.

        Returns an empty list if the handle is not live.
        """
        node = self._nodes.get(handle)
        return [] if node is None else list(node.edges)

    def handles(self) -> Iterator[NodeHandle]:
        """Iterate over handles of all live nodes, in arena order."""
        return self._nodes.handles()

    def edge_count(self) -> int:
        """Return the total number of edges held by live nodes."""
        return sum(len(node.edges) for h in self._nodes.handles() if (node := self._nodes.get(h)) is not None)

    def tsort(self) -> list[NodeHandle]:
        """Return node handles in topological order.

        Raises:
            MissingNodeError: If a traversed edge points at a removed node.
            CycleError: If the graph contains a cycle.

        """
        return topological_sort(self._nodes)

    def __len__(self) -> int:
        """Return the number of live nodes."""
        return self._nodes.count()

    def __contains__(self, handle: object) -> bool:
        """Check if a handle refers to a live node."""
        return handle in self._nodes
