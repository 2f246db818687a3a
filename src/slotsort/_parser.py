"""Line-oriented parser turning adjacency text into a digraph.

Each non-blank line is ``<source> <target>*``: names separated by single
spaces. The first name gets an edge to every other name on the line, and a
name always resolves to the same node for the lifetime of the parser.
"""

import logging

from slotsort._graph import Digraph, NodeHandle

logger = logging.getLogger(__name__)


class GraphParseError(Exception):
    """Error in adjacency text.

    Reserved: the current line format accepts every input.
    """


class DigraphParser:
    """Incrementally build a ``Digraph[str]`` from adjacency lines.

    Example:
        >>> parser = DigraphParser()
        >>> parser.parse_line("a b")
        >>> parser.parse_line("a c")
        >>> graph = parser.graph()
        >>> graph.node_count()
        3

    """

    def __init__(self) -> None:
        self._graph: Digraph[str] = Digraph()
        self._seen: dict[str, NodeHandle] = {}

    def _node_for(self, name: str) -> NodeHandle:
        handle = self._seen.get(name)
        if handle is None:
            handle = self._graph.add_node(name)
            self._seen[name] = handle
            logger.debug(f"New node {name!r} at {handle}")
        return handle

    def parse_line(self, line: str) -> None:
        """Add the nodes and edges described by one line.

        Surrounding whitespace is stripped and blank lines are ignored.
        Names are split on single spaces, so two consecutive spaces yield an
        empty-string name.

        Args:
            line: One line of adjacency text.

        """
        line = line.strip()
        if not line:
            return

        source, *targets = (self._node_for(name) for name in line.split(" "))
        for target in targets:
            self._graph.add_edge(source, target)

    def parse(self, text: str) -> Digraph[str]:
        """Parse a whole text, line by line, and return the graph.

        Equivalent to calling :meth:`parse_line` on every ``\\n``-separated
        line of ``text``.
        """
        for line in text.split("\n"):
            self.parse_line(line)
        return self._graph

    def handle(self, name: str) -> NodeHandle | None:
        """Return the handle allocated for a name, or None if not seen yet."""
        return self._seen.get(name)

    def graph(self) -> Digraph[str]:
        """Return the graph accumulated so far."""
        return self._graph
