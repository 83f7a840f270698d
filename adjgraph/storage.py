"""Node and edge records stored inside a graph's adjacency lists."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from adjgraph.indices import (
    DEFAULT_INDEX_TYPE,
    Direction,
    EdgeIndex,
    IndexType,
    NodeIndex,
)

__all__ = ["Edge", "Node"]

N = TypeVar("N")
E = TypeVar("E")


def _end_links(index_type: IndexType = DEFAULT_INDEX_TYPE) -> list[EdgeIndex]:
    end = EdgeIndex.end(index_type)
    return [end, end]


@dataclass
class Node(Generic[N]):
    """A graph node: its weight and the heads of its edge lists.

    ``next`` holds the first edge of the outgoing list and the first edge
    of the incoming list, in that order; an end marker means the list is
    empty.
    """

    weight: N
    next: list[EdgeIndex] = field(default_factory=_end_links)

    def __post_init__(self) -> None:
        self.next = list(self.next)
        if len(self.next) != 2:
            raise ValueError("a node needs exactly two edge list heads")

    def next_edge(self, direction: Direction) -> EdgeIndex:
        """Return the first edge of the list for ``direction``."""
        return self.next[Direction(direction)]

    def __copy__(self) -> Node[N]:
        return Node(self.weight, list(self.next))


@dataclass
class Edge(Generic[E]):
    """A graph edge: its weight, endpoints and links to the next edges.

    ``node`` holds the source and target node indices. ``next`` holds the
    next edge in the source's outgoing list and the next edge in the
    target's incoming list.
    """

    weight: E
    node: list[NodeIndex]
    next: list[EdgeIndex] = field(default_factory=_end_links)

    def __post_init__(self) -> None:
        self.node = list(self.node)
        self.next = list(self.next)
        if len(self.node) != 2:
            raise ValueError("an edge needs exactly two endpoints")
        if len(self.next) != 2:
            raise ValueError("an edge needs exactly two list links")

    def next_edge(self, direction: Direction) -> EdgeIndex:
        """Return the next edge in the list for ``direction``."""
        return self.next[Direction(direction)]

    def source(self) -> NodeIndex:
        """Return the source node index."""
        return self.node[0]

    def target(self) -> NodeIndex:
        """Return the target node index."""
        return self.node[1]

    def __copy__(self) -> Edge[E]:
        return Edge(self.weight, list(self.node), list(self.next))