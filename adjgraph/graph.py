"""Adjacency-list graph with compact node and edge indices."""

from __future__ import annotations

from typing import (
    Any,
    Callable,
    Generic,
    Iterable,
    Iterator,
    Optional,
    TypeVar,
    Union,
)

from adjgraph.indices import (
    DEFAULT_INDEX_TYPE,
    DIRECTIONS,
    Direction,
    EdgeIndex,
    IndexType,
    NodeIndex,
)
from adjgraph.iterators import EdgeReference, Edges, Neighbors
from adjgraph.storage import Edge, Node

__all__ = ["Graph"]

N = TypeVar("N")
E = TypeVar("E")

NodeLike = Union[NodeIndex, int]
EdgeLike = Union[EdgeIndex, int]


def _as_node(a: NodeLike) -> NodeIndex:
    if isinstance(a, NodeIndex):
        return a
    if isinstance(a, EdgeIndex):
        raise TypeError(f"expected a node index, got {a!r}")
    return NodeIndex(a)


def _as_edge(e: EdgeLike) -> EdgeIndex:
    if isinstance(e, EdgeIndex):
        return e
    if isinstance(e, NodeIndex):
        raise TypeError(f"expected an edge index, got {e!r}")
    return EdgeIndex(e)


def _swap_remove(items: list, i: int):
    """Remove ``items[i]`` by moving the last element into its place."""
    last = items.pop()
    if i < len(items):
        removed, items[i] = items[i], last
        return removed
    return last


class Graph(Generic[N, E]):
    """A graph stored as adjacency lists with compact indices.

    Node indices run from 0 to ``node_count() - 1`` and edge indices from
    0 to ``edge_count() - 1``. Adding nodes or edges keeps indices stable;
    removing a node or edge moves the last one into the freed index.
    Parallel edges and self loops are allowed.
    """

    def __init__(
        self,
        directed: bool = True,
        index_type: IndexType = DEFAULT_INDEX_TYPE,
    ) -> None:
        self._directed = bool(directed)
        self._index_type = IndexType(index_type)
        self._end_edge = EdgeIndex.end(self._index_type)
        self._end_node = NodeIndex.end(self._index_type)
        self._nodes: list[Node[N]] = []
        self._edges: list[Edge[E]] = []

    # construction

    @classmethod
    def new_undirected(cls, index_type: IndexType = DEFAULT_INDEX_TYPE) -> Graph:
        """Create an empty graph with undirected edges."""
        return cls(directed=False, index_type=index_type)

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple],
        directed: bool = True,
        index_type: IndexType = DEFAULT_INDEX_TYPE,
        node_default: Optional[Callable[[], Any]] = None,
    ) -> Graph:
        """Create a graph from ``(a, b)`` or ``(a, b, weight)`` items.

        Nodes are added as needed; their weights come from
        ``node_default()`` or are None.
        """
        g = cls(directed=directed, index_type=index_type)
        g.extend_with_edges(edges, node_default)
        return g

    def extend_with_edges(
        self,
        edges: Iterable[tuple],
        node_default: Optional[Callable[[], Any]] = None,
    ) -> None:
        """Add ``(a, b)`` or ``(a, b, weight)`` edges, adding missing nodes."""
        for item in edges:
            item = tuple(item)
            if len(item) == 2:
                source, target = item
                weight = None
            elif len(item) == 3:
                source, target, weight = item
            else:
                raise ValueError(f"edge must have 2 or 3 elements, got {item!r}")
            source, target = _as_node(source), _as_node(target)
            highest = max(source.index, target.index)
            while highest >= len(self._nodes):
                self.add_node(node_default() if node_default is not None else None)
            self.add_edge(source, target, weight)

    # sizes and flags

    @property
    def index_type(self) -> IndexType:
        """The index type that bounds the size of this graph."""
        return self._index_type

    def node_count(self) -> int:
        """Return the number of nodes."""
        return len(self._nodes)

    def edge_count(self) -> int:
        """Return the number of edges."""
        return len(self._edges)

    def is_directed(self) -> bool:
        """Return whether the edges are directed."""
        return self._directed

    # nodes and edges

    def _node_at(self, a: NodeIndex) -> Optional[Node[N]]:
        return self._nodes[a.index] if a.index < len(self._nodes) else None

    def _edge_at(self, e: EdgeIndex) -> Optional[Edge[E]]:
        return self._edges[e.index] if e.index < len(self._edges) else None

    def add_node(self, weight: N) -> NodeIndex:
        """Add a node with ``weight`` and return its index.

        Raises OverflowError if the index type can hold no more nodes.
        """
        idx = NodeIndex(len(self._nodes))
        if idx == self._end_node:
            raise OverflowError("graph is at the maximum number of nodes for its index type")
        self._nodes.append(Node(weight, [self._end_edge, self._end_edge]))
        return idx

    def node_weight(self, a: NodeLike) -> Optional[N]:
        """Return the weight of node ``a``, or None if it does not exist."""
        node = self._node_at(_as_node(a))
        return None if node is None else node.weight

    def add_edge(self, a: NodeLike, b: NodeLike, weight: E) -> EdgeIndex:
        """Add an edge from ``a`` to ``b`` and return its index.

        Raises IndexError if either node does not exist and OverflowError
        if the index type can hold no more edges.
        """
        a, b = _as_node(a), _as_node(b)
        idx = EdgeIndex(len(self._edges))
        if idx == self._end_edge:
            raise OverflowError("graph is at the maximum number of edges for its index type")
        if max(a.index, b.index) >= len(self._nodes):
            raise IndexError("Graph.add_edge: node indices out of bounds")
        edge = Edge(weight, [a, b])
        an = self._nodes[a.index]
        if a == b:
            edge.next = list(an.next)
            an.next[0] = idx
            an.next[1] = idx
        else:
            bn = self._nodes[b.index]
            edge.next = [an.next[0], bn.next[1]]
            an.next[0] = idx
            bn.next[1] = idx
        self._edges.append(edge)
        return idx

    def update_edge(self, a: NodeLike, b: NodeLike, weight: E) -> EdgeIndex:
        """Set the weight of the edge from ``a`` to ``b``, adding it if absent."""
        found = self.find_edge(a, b)
        if found is not None:
            self._edges[found.index].weight = weight
            return found
        return self.add_edge(a, b, weight)

    def edge_weight(self, e: EdgeLike) -> Optional[E]:
        """Return the weight of edge ``e``, or None if it does not exist."""
        edge = self._edge_at(_as_edge(e))
        return None if edge is None else edge.weight

    def edge_endpoints(self, e: EdgeLike) -> Optional[tuple[NodeIndex, NodeIndex]]:
        """Return the source and target of edge ``e``, or None."""
        edge = self._edge_at(_as_edge(e))
        return None if edge is None else (edge.source(), edge.target())

    # removal

    def _walk(self, start: EdgeIndex, k: Direction) -> Iterator[Edge[E]]:
        idx = start
        while idx.index < len(self._edges):
            edge = self._edges[idx.index]
            idx = edge.next[k]
            yield edge

    def remove_node(self, a: NodeLike) -> Optional[N]:
        """Remove node ``a`` and its edges; return its weight or None.

        The last node takes over the index of the removed one.
        """
        a = _as_node(a)
        if a.index >= len(self._nodes):
            return None
        for k in DIRECTIONS:
            while True:
                nxt = self._nodes[a.index].next[k]
                if nxt == self._end_edge:
                    break
                self.remove_edge(nxt)
        node = _swap_remove(self._nodes, a.index)
        if a.index >= len(self._nodes):
            return node.weight
        swap_edges = list(self._nodes[a.index].next)
        for k in DIRECTIONS:
            for edge in self._walk(swap_edges[k], k):
                edge.node[k] = a
        return node.weight

    def _change_edge_links(
        self,
        edge_node: list[NodeIndex],
        e: EdgeIndex,
        edge_next: list[EdgeIndex],
    ) -> None:
        """Replace links to ``e`` in its endpoints' lists by ``edge_next``."""
        for k in DIRECTIONS:
            node = self._node_at(edge_node[k])
            if node is None:
                return
            if node.next[k] == e:
                node.next[k] = edge_next[k]
            else:
                for cur in self._walk(node.next[k], k):
                    if cur.next[k] == e:
                        cur.next[k] = edge_next[k]
                        break

    def remove_edge(self, e: EdgeLike) -> Optional[E]:
        """Remove edge ``e`` and return its weight, or None if absent.

        The last edge takes over the index of the removed one.
        """
        e = _as_edge(e)
        edge = self._edge_at(e)
        if edge is None:
            return None
        self._change_edge_links(list(edge.node), e, list(edge.next))
        removed = _swap_remove(self._edges, e.index)
        if e.index >= len(self._edges):
            return removed.weight
        swap = list(self._edges[e.index].node)
        swapped_e = EdgeIndex(len(self._edges))
        self._change_edge_links(swap, swapped_e, [e, e])
        return removed.weight

    # traversal

    def _heads(self, a: NodeIndex) -> list[EdgeIndex]:
        node = self._node_at(a)
        if node is None:
            return [self._end_edge, self._end_edge]
        return list(node.next)

    def neighbors(self, a: NodeLike) -> Neighbors:
        """Iterate the neighbours of ``a``: outgoing ones if directed, all if not."""
        return self.neighbors_directed(a, Direction.OUTGOING)

    def neighbors_directed(self, a: NodeLike, direction: Direction) -> Neighbors:
        """Iterate the neighbours of ``a`` in ``direction`` (all if undirected).

        In a directed graph the most recently added edge comes first.
        """
        a = _as_node(a)
        links = self._heads(a)
        skip_start = a
        if self._directed:
            k = Direction(direction)
            links[1 - k] = self._end_edge
            skip_start = self._end_node
        return Neighbors(skip_start, self._edges, links)

    def neighbors_undirected(self, a: NodeLike) -> Neighbors:
        """Iterate the neighbours of ``a`` along edges of either direction."""
        a = _as_node(a)
        return Neighbors(a, self._edges, self._heads(a))

    def edges(self, a: NodeLike) -> Edges:
        """Iterate the edges of ``a``: outgoing ones if directed, all if not."""
        return self.edges_directed(a, Direction.OUTGOING)

    def edges_directed(self, a: NodeLike, direction: Direction) -> Edges:
        """Iterate the edges of ``a`` in ``direction`` (all if undirected)."""
        a = _as_node(a)
        links = self._heads(a)
        if not self._directed:
            return Edges(a, self._edges, links, None)
        direction = Direction(direction)
        if direction is Direction.INCOMING:
            links.reverse()
        return Edges(a, self._edges, links, direction)

    def contains_edge(self, a: NodeLike, b: NodeLike) -> bool:
        """Return whether there is an edge from ``a`` to ``b``."""
        return self.find_edge(a, b) is not None

    def find_edge(self, a: NodeLike, b: NodeLike) -> Optional[EdgeIndex]:
        """Return an edge from ``a`` to ``b`` (either way if undirected), or None."""
        a, b = _as_node(a), _as_node(b)
        if not self._directed:
            found = self.find_edge_undirected(a, b)
            return None if found is None else found[0]
        node = self._node_at(a)
        if node is None:
            return None
        edix = node.next[0]
        while (edge := self._edge_at(edix)) is not None:
            if edge.node[1] == b:
                return edix
            edix = edge.next[0]
        return None

    def find_edge_undirected(
        self, a: NodeLike, b: NodeLike
    ) -> Optional[tuple[EdgeIndex, Direction]]:
        """Find an edge between ``a`` and ``b`` in either direction.

        Return the edge and OUTGOING if it goes from ``a`` to ``b``,
        INCOMING if the reverse, or None.
        """
        a, b = _as_node(a), _as_node(b)
        node = self._node_at(a)
        if node is None:
            return None
        for k in DIRECTIONS:
            edix = node.next[k]
            while (edge := self._edge_at(edix)) is not None:
                if edge.node[1 - k] == b:
                    return edix, k
                edix = edge.next[k]
        return None

    def externals(self, direction: Direction) -> Iterator[NodeIndex]:
        """Yield nodes without edges in ``direction``.

        In an undirected graph these are the nodes without any edges.
        """
        k = Direction(direction)
        end = self._end_edge
        for i, node in enumerate(self._nodes):
            if node.next[k] == end and (self._directed or node.next[1 - k] == end):
                yield NodeIndex(i)

    def node_indices(self) -> Iterator[NodeIndex]:
        """Yield the node indices in order."""
        return (NodeIndex(i) for i in range(len(self._nodes)))

    def edge_indices(self) -> Iterator[EdgeIndex]:
        """Yield the edge indices in order."""
        return (EdgeIndex(i) for i in range(len(self._edges)))

    def node_references(self) -> Iterator[tuple[NodeIndex, N]]:
        """Yield ``(index, weight)`` for every node in order."""
        for i, node in enumerate(self._nodes):
            yield NodeIndex(i), node.weight

    def edge_references(self) -> Iterator[EdgeReference[E]]:
        """Yield a reference for every edge in index order."""
        for i, edge in enumerate(self._edges):
            yield EdgeReference(EdgeIndex(i), (edge.node[0], edge.node[1]), edge.weight)

    def raw_nodes(self) -> list[Node[N]]:
        """Return the internal node list; do not change its structure."""
        return self._nodes

    def raw_edges(self) -> list[Edge[E]]:
        """Return the internal edge list; do not change its structure."""
        return self._edges

    def first_edge(self, a: NodeLike, direction: Direction) -> Optional[EdgeIndex]:
        """Return the first edge of ``a`` in ``direction``, or None."""
        node = self._node_at(_as_node(a))
        if node is None:
            return None
        edix = node.next[Direction(direction)]
        return None if edix == self._end_edge else edix

    def next_edge(self, e: EdgeLike, direction: Direction) -> Optional[EdgeIndex]:
        """Return the edge after ``e`` in the list for ``direction``, or None."""
        edge = self._edge_at(_as_edge(e))
        if edge is None:
            return None
        edix = edge.next[Direction(direction)]
        return None if edix == self._end_edge else edix

    # bulk changes

    def reverse(self) -> None:
        """Reverse the direction of every edge."""
        for edge in self._edges:
            edge.node.reverse()
            edge.next.reverse()
        for node in self._nodes:
            node.next.reverse()

    def clear(self) -> None:
        """Remove all nodes and edges."""
        self._nodes.clear()
        self._edges.clear()

    def clear_edges(self) -> None:
        """Remove all edges, keeping the nodes."""
        self._edges.clear()
        for node in self._nodes:
            node.next = [self._end_edge, self._end_edge]

    def retain_nodes(self, visit: Callable[[Graph, NodeIndex], bool]) -> None:
        """Keep the nodes for which ``visit(graph, index)`` is true."""
        for i in reversed(range(len(self._nodes))):
            if not visit(self, NodeIndex(i)):
                self.remove_node(NodeIndex(i))

    def retain_edges(self, visit: Callable[[Graph, EdgeIndex], bool]) -> None:
        """Keep the edges for which ``visit(graph, index)`` is true."""
        for i in reversed(range(len(self._edges))):
            if not visit(self, EdgeIndex(i)):
                self.remove_edge(EdgeIndex(i))

    def map(
        self,
        node_map: Callable[[NodeIndex, N], Any],
        edge_map: Callable[[EdgeIndex, E], Any],
    ) -> Graph:
        """Return a graph of the same structure and indices with mapped weights."""
        g = Graph(self._directed, self._index_type)
        g._nodes = [
            Node(node_map(NodeIndex(i), n.weight), list(n.next))
            for i, n in enumerate(self._nodes)
        ]
        g._edges = [
            Edge(edge_map(EdgeIndex(i), e.weight), list(e.node), list(e.next))
            for i, e in enumerate(self._edges)
        ]
        return g

    def filter_map(
        self,
        node_map: Callable[[NodeIndex, N], Any],
        edge_map: Callable[[EdgeIndex, E], Any],
    ) -> Graph:
        """Return a subgraph with mapped weights.

        A node or edge mapped to None is left out; edges whose endpoints
        were left out are skipped without calling ``edge_map``.
        """
        g = Graph(self._directed, self._index_type)
        index_map: list[Optional[NodeIndex]] = [None] * len(self._nodes)
        for i, node in enumerate(self._nodes):
            weight = node_map(NodeIndex(i), node.weight)
            if weight is not None:
                index_map[i] = g.add_node(weight)
        for i, edge in enumerate(self._edges):
            source = index_map[edge.source().index]
            target = index_map[edge.target().index]
            if source is None or target is None:
                continue
            weight = edge_map(EdgeIndex(i), edge.weight)
            if weight is not None:
                g.add_edge(source, target, weight)
        return g

    def into_edge_type(self, directed: bool) -> Graph:
        """Return a copy treating the edges as directed or undirected."""
        g = self.copy()
        g._directed = bool(directed)
        return g

    def copy(self) -> Graph:
        """Return a copy with the same indices; weights are shared."""
        g = Graph(self._directed, self._index_type)
        g._nodes = [Node(n.weight, list(n.next)) for n in self._nodes]
        g._edges = [Edge(e.weight, list(e.node), list(e.next)) for e in self._edges]
        return g

    __copy__ = copy

    # indexing

    def __getitem__(self, index: Union[NodeIndex, EdgeIndex]) -> Any:
        if isinstance(index, NodeIndex):
            return self._nodes[index.index].weight
        if isinstance(index, EdgeIndex):
            return self._edges[index.index].weight
        raise TypeError(f"graph indices must be NodeIndex or EdgeIndex, not {type(index).__name__}")

    def __setitem__(self, index: Union[NodeIndex, EdgeIndex], value: Any) -> None:
        if isinstance(index, NodeIndex):
            self._nodes[index.index].weight = value
        elif isinstance(index, EdgeIndex):
            self._edges[index.index].weight = value
        else:
            raise TypeError(
                f"graph indices must be NodeIndex or EdgeIndex, not {type(index).__name__}"
            )

    def __repr__(self) -> str:
        parts = [
            f"Ty={'Directed' if self._directed else 'Undirected'!r}",
            f"node_count={self.node_count()}",
            f"edge_count={self.edge_count()}",
        ]
        if self._edges:
            pairs = ", ".join(f"({e.source().index}, {e.target().index})" for e in self._edges)
            parts.append(f"edges=[{pairs}]")
        parts.append(f"node_weights={ {i: n.weight for i, n in enumerate(self._nodes)} !r}")
        parts.append(f"edge_weights={ {i: e.weight for i, e in enumerate(self._edges)} !r}")
        return f"Graph({', '.join(parts)})"