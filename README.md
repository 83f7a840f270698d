# adjgraph

A graph data structure built on adjacency lists. Nodes and edges carry weights, and a weight can be any Python object. A graph is either directed or undirected. Node indices always run from `0` to `node_count() - 1`, and edge indices from `0` to `edge_count() - 1`. Parallel edges and self loops are allowed.

## Installation

```
pip install adjgraph
```

## Modules

- `adjgraph.indices` defines `IndexType` (`U8`, `U16`, `U32`, `USIZE`), `Direction` (`OUTGOING`, `INCOMING`), `NodeIndex`, `EdgeIndex` and the shorthands `node_index` and `edge_index`.
- `adjgraph.storage` defines `Node` and `Edge`, the records the graph keeps internally. These records hold the weights and the linked-list heads and links.
- `adjgraph.iterators` defines `Neighbors`, `Edges`, `EdgeReference` and `WalkNeighbors`.
- `adjgraph.graph` defines `Graph`.
- `adjgraph.serialization` converts graphs to and from plain data and JSON.

## Building a graph

```python
from adjgraph.graph import Graph
from adjgraph.indices import Direction

deps = Graph(directed=True)
pg = deps.add_node("adjgraph")
fb = deps.add_node("fixedbitset")
qc = deps.add_node("quickcheck")
rand = deps.add_node("rand")
libc = deps.add_node("libc")
deps.extend_with_edges([(pg, fb), (pg, qc), (qc, rand), (rand, libc), (qc, libc)])

print(deps.node_count(), deps.edge_count())   # 5 5
print(list(deps.neighbors(qc)))               # most recently added edge first
print(list(deps.neighbors_directed(libc, Direction.INCOMING)))
```

Index a graph with a `NodeIndex` to read or write a node weight. Index it with an `EdgeIndex` to read or write an edge weight:

```python
e = deps.find_edge(pg, fb)
deps[e] = "build-dependency"
deps[pg] = "adjgraph (root)"
```

Methods that take an index also accept a plain `int` in its place.

`Graph.from_edges` and `extend_with_edges` take `(a, b)` pairs or `(a, b, weight)` triples. They add nodes as the edges need them. Each new node gets its weight from `node_default()`, or `None` when no `node_default` is given. A pair gives its edge the weight `None`.

```python
g = Graph.from_edges([(0, 1), (0, 2), (1, 2, 5)])
u = Graph.new_undirected()
```

`update_edge(a, b, weight)` sets the weight of an existing edge from `a` to `b`. If there is no such edge, it adds one. `add_edge` raises `IndexError` when a node does not exist. `add_node` and `add_edge` raise `OverflowError` when the graph's `IndexType` can hold no more nodes or edges. The maximum value of the type is kept back as an end marker.

## Looking things up

- `neighbors`, `neighbors_directed` and `neighbors_undirected` return node iterators.
- `edges` and `edges_directed` return `EdgeReference` iterators. Each reference has `source()`, `target()`, `id()` and `weight`.
- `find_edge` and `contains_edge` look up an edge. `find_edge_undirected` also returns the `Direction` of the edge it found.
- `externals(direction)` yields the nodes that have no edges in that direction. In an undirected graph it yields the nodes that have no edges at all.
- `node_indices`, `edge_indices`, `node_references` and `edge_references` walk all nodes or all edges in index order.
- `first_edge` and `next_edge` step through the raw linked lists. `raw_nodes` and `raw_edges` expose the internal lists.

## Indices and removal

Adding nodes or edges never changes the indices you already hold. Removing works like a `swap_remove`:

- `remove_node(a)` removes the node's edges, then moves the last node into the freed index.
- `remove_edge(e)` moves the last edge into the freed index.

Both return the removed weight, or `None` if the index did not exist.

Other ways to change many elements at once:

- `retain_nodes(visit)` and `retain_edges(visit)` keep only the elements for which `visit(graph, index)` is true.
- `clear` removes everything. `clear_edges` removes only the edges.
- `reverse` flips every edge.

## Deriving new graphs

- `map(node_map, edge_map)` returns a graph with the same structure and indices, with every weight mapped.
- `filter_map(node_map, edge_map)` builds a subgraph. A node or edge that maps to `None` is left out, and so is every edge whose endpoint was left out.
- `copy()` returns a graph with the same indices that shares the weight objects.
- `into_edge_type(directed)` returns such a copy marked as directed or undirected. It does not add or remove any edges.

## Walking while mutating

`neighbors(a).detach()` returns a `WalkNeighbors`, which holds no reference to the graph. Pass the graph to each step with `next(graph)`, `next_node(graph)` or `next_edge(graph)`. Between steps you can change weights:

```python
walk = deps.neighbors_directed(libc, Direction.INCOMING).detach()
while (edge := walk.next_edge(deps)) is not None:
    deps[edge] = "links-libc"
```

## Serialization

```python
from adjgraph.serialization import dumps, loads, to_serializable, from_serializable

text = dumps(deps)
again = loads(text, directed=True)
```

The representation is a mapping with these keys:

- `nodes`: the node weights, in index order.
- `node_holes`: always empty.
- `edge_property`: `"directed"` or `"undirected"`. The same values are available as `EdgeProperty`.
- `edges`: one `[source, target, weight]` entry per edge, in index order.

`to_serializable` and `from_serializable` work on this mapping. `dumps` and `loads` wrap them with JSON, so the weights must be values that JSON can hold.

`from_serializable` and `loads` take the expected `directed` flag and `index_type`. Either one raises `GraphSerializationError`, a subclass of `ValueError`, in these cases:

- the data is not valid;
- a field is missing;
- `node_holes` is not empty, or an edge is `null`;
- an index is not an integer of the index type;
- the edge property does not match `directed`;
- an edge names a node that does not exist;
- the node or edge count reaches the maximum of the index type.

## What it does not do

This package provides the graph structure only. It has no graph algorithms: no searches, shortest paths, components or isomorphism tests. It has no graph type whose indices stay stable across removals. Serialization covers only the plain mapping and JSON forms above, and there is no binary encoding.