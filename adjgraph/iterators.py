"""Iterators and walkers over a graph's node and edge lists."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterator, Optional, Protocol, Sequence, TypeVar

from adjgraph.indices import Direction, EdgeIndex, NodeIndex
from adjgraph.storage import Edge

__all__ = ["EdgeReference", "Edges", "Neighbors", "WalkNeighbors"]

E = TypeVar("E")


class _HasRawEdges(Protocol):
    def raw_edges(self) -> Sequence[Edge[Any]]: ...


def _lookup(edges: Sequence[Edge[E]], index: EdgeIndex) -> Optional[Edge[E]]:
    """Return the edge at ``index``, or None for the end marker or a stale index."""
    i = index.index
    if i < len(edges):
        return edges[i]
    return None


@dataclass(frozen=True, eq=False)
class EdgeReference(Generic[E]):
    """A view of one edge: its index, its endpoints as seen from the walk, and its weight."""

    index: EdgeIndex
    node: tuple[NodeIndex, NodeIndex]
    weight: E

    def source(self) -> NodeIndex:
        """Return the source node of the reference."""
        return self.node[0]

    def target(self) -> NodeIndex:
        """Return the target node of the reference."""
        return self.node[1]

    def id(self) -> EdgeIndex:
        """Return the edge index."""
        return self.index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EdgeReference):
            return NotImplemented
        return self.index == other.index and self.weight == other.weight

    def __hash__(self) -> int:
        return hash(self.index)


class WalkNeighbors:
    """A walker over a node's edge lists that holds no reference to the graph.

    Each step takes the graph explicitly, so weights may be changed between
    steps.
    """

    __slots__ = ("skip_start", "links")

    def __init__(self, skip_start: NodeIndex, next_links: Sequence[EdgeIndex]) -> None:
        self.skip_start = skip_start
        self.links = list(next_links)

    def __copy__(self) -> WalkNeighbors:
        return WalkNeighbors(self.skip_start, self.links)

    def next(self, graph: _HasRawEdges) -> Optional[tuple[EdgeIndex, NodeIndex]]:
        """Step to the next edge; return ``(edge, other endpoint)`` or None when done."""
        edges = graph.raw_edges()
        edge = _lookup(edges, self.links[0])
        if edge is not None:
            current = self.links[0]
            self.links[0] = edge.next[0]
            return current, edge.node[1]
        while (edge := _lookup(edges, self.links[1])) is not None:
            current = self.links[1]
            self.links[1] = edge.next[1]
            if edge.node[0] != self.skip_start:
                return current, edge.node[0]
        return None

    def next_node(self, graph: _HasRawEdges) -> Optional[NodeIndex]:
        """Step and return only the neighbouring node, or None when done."""
        step = self.next(graph)
        return None if step is None else step[1]

    def next_edge(self, graph: _HasRawEdges) -> Optional[EdgeIndex]:
        """Step and return only the edge index, or None when done."""
        step = self.next(graph)
        return None if step is None else step[0]


class Neighbors(Iterator[NodeIndex]):
    """Iterator over the neighbouring nodes of a node.

    Outgoing edges are followed first, then incoming ones; self loops met
    in the incoming list are skipped when they start at ``skip_start`` so
    that an undirected walk counts them once.
    """

    def __init__(
        self,
        skip_start: NodeIndex,
        edges: Sequence[Edge[Any]],
        next_links: Sequence[EdgeIndex],
    ) -> None:
        self.skip_start = skip_start
        self._edges = edges
        self.links = list(next_links)

    def __iter__(self) -> Neighbors:
        return self

    def __next__(self) -> NodeIndex:
        edge = _lookup(self._edges, self.links[0])
        if edge is not None:
            self.links[0] = edge.next[0]
            return edge.node[1]
        while (edge := _lookup(self._edges, self.links[1])) is not None:
            self.links[1] = edge.next[1]
            if edge.node[0] != self.skip_start:
                return edge.node[0]
        raise StopIteration

    def __copy__(self) -> Neighbors:
        return Neighbors(self.skip_start, self._edges, self.links)

    def detach(self) -> WalkNeighbors:
        """Return a walker that continues from the current position."""
        return WalkNeighbors(self.skip_start, self.links)


class Edges(Iterator[EdgeReference[Any]]):
    """Iterator over the edges connected to a node.

    With ``direction`` None both lists are walked and edges from the
    incoming list are reported with swapped endpoints, so that the source
    is always the starting node. With a direction only ``next_links[0]``
    is followed, along the list for that direction.
    """

    def __init__(
        self,
        skip_start: NodeIndex,
        edges: Sequence[Edge[Any]],
        next_links: Sequence[EdgeIndex],
        direction: Optional[Direction] = None,
    ) -> None:
        self.skip_start = skip_start
        self._edges = edges
        self.links = list(next_links)
        self.direction = None if direction is None else Direction(direction)

    def __iter__(self) -> Edges:
        return self

    def __next__(self) -> EdgeReference[Any]:
        k = Direction.OUTGOING if self.direction is None else self.direction
        current = self.links[0]
        edge = _lookup(self._edges, current)
        if edge is not None:
            self.links[0] = edge.next[k]
            return EdgeReference(current, (edge.node[0], edge.node[1]), edge.weight)
        if self.direction is not None:
            raise StopIteration
        while (edge := _lookup(self._edges, self.links[1])) is not None:
            current = self.links[1]
            self.links[1] = edge.next[1]
            if edge.node[0] != self.skip_start:
                return EdgeReference(current, (edge.node[1], edge.node[0]), edge.weight)
        raise StopIteration

    def __copy__(self) -> Edges:
        return Edges(self.skip_start, self._edges, self.links, self.direction)