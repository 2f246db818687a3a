"""Graph algorithms for topological ordering."""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterator

    from slotsort._arena import Arena, SlotHandle

    from ._digraph import Node

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TopologicalSortError(Exception):
    """Raised when a graph cannot be ordered topologically."""

    def __init__(self, handle: SlotHandle, message: str) -> None:
        self.handle = handle
        super().__init__(message)


class MissingNodeError(TopologicalSortError):
    """Raised when an edge points at a handle that is no longer a live node."""

    def __init__(self, handle: SlotHandle) -> None:
        super().__init__(handle, f"Edge target {handle} is not a live node")


class CycleError(TopologicalSortError):
    """Raised when a node is reachable from itself."""

    def __init__(self, handle: SlotHandle) -> None:
        super().__init__(handle, f"Cycle detected in graph at node {handle}")


class _SortStatus(Enum):
    SEEN = auto()
    PROCESSED = auto()


def topological_sort(nodes: Arena[Node[T]]) -> list[SlotHandle]:
    """Order the nodes of an arena so that each node precedes its successors.

    Runs a depth-first search from every live node in arena order, exploring
    edges in insertion order, and returns the reversed post-order. Nodes
    absent from the status map are unseen; SEEN nodes are on the current
    path; PROCESSED nodes have already been emitted.

    Args:
        nodes: Arena holding the graph's nodes.

    Returns:
        Handles of every live node in topological order.

    Raises:
        MissingNodeError: If a traversed edge points at a dead handle.
        CycleError: If a node is reached again while still on the path.

    Example:
        >>> # a -> b, a -> c
        >>> [nodes.get(h).data for h in topological_sort(nodes)]
        ['a', 'c', 'b']

    """
    status: dict[SlotHandle, _SortStatus] = {}
    order: list[SlotHandle] = []

    for root in nodes.handles():
        if root in status:
            continue
        root_node = nodes.get(root)
        if root_node is None:
            raise MissingNodeError(root)

        # Each frame is a node on the current path and its pending edges
        status[root] = _SortStatus.SEEN
        stack: list[tuple[SlotHandle, Iterator[SlotHandle]]] = [(root, iter(root_node.edges))]
        while stack:
            handle, edges = stack[-1]
            successor = next(edges, None)
            if successor is None:
                stack.pop()
                order.append(handle)
                status[handle] = _SortStatus.PROCESSED
                continue

            node = nodes.get(successor)
            if node is None:
                raise MissingNodeError(successor)
            match status.get(successor):
                case _SortStatus.SEEN:
                    raise CycleError(successor)
                case _SortStatus.PROCESSED:
                    continue
                case None:
                    status[successor] = _SortStatus.SEEN
                    stack.append((successor, iter(node.edges)))

    order.reverse()
    logger.debug(f"Sorted {len(order)} nodes")
    return order
