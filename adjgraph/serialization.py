"""Conversion of graphs to and from a plain, JSON-friendly representation.

The representation is a mapping with these keys:

``nodes``
    the node weights, in node index order
``node_holes``
    always empty for a compact graph; any entry is rejected on load
``edge_property``
    ``"directed"`` or ``"undirected"``
``edges``
    one ``[source, target, weight]`` triple per edge, in edge index order
"""

from __future__ import annotations

import enum
import json
from typing import Any, Mapping

from adjgraph.graph import Graph
from adjgraph.indices import DEFAULT_INDEX_TYPE, IndexType

__all__ = [
    "EdgeProperty",
    "GraphSerializationError",
    "dumps",
    "from_serializable",
    "loads",
    "to_serializable",
]


class GraphSerializationError(ValueError):
    """Raised when serialized data does not describe a valid graph."""


class EdgeProperty(enum.Enum):
    """Whether a serialized graph's edges are directed."""

    UNDIRECTED = "undirected"
    DIRECTED = "directed"

    def is_directed(self) -> bool:
        """Return whether this property denotes directed edges."""
        return self is EdgeProperty.DIRECTED

    @classmethod
    def for_graph(cls, graph: Graph) -> EdgeProperty:
        """Return the edge property of ``graph``."""
        return cls.DIRECTED if graph.is_directed() else cls.UNDIRECTED

    @classmethod
    def _from_flag(cls, directed: bool) -> EdgeProperty:
        return cls.DIRECTED if directed else cls.UNDIRECTED

    def _label(self) -> str:
        return self.name.capitalize()


def _type_name(index_type: IndexType) -> str:
    return index_type.name.lower()


def to_serializable(graph: Graph) -> dict[str, Any]:
    """Return the plain representation of ``graph``."""
    return {
        "nodes": [node.weight for node in graph.raw_nodes()],
        "node_holes": [],
        "edge_property": EdgeProperty.for_graph(graph).value,
        "edges": [
            [edge.source().index, edge.target().index, edge.weight]
            for edge in graph.raw_edges()
        ],
    }


def _require(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise GraphSerializationError(f"missing field `{key}`") from None


def _parse_sequence(value: Any, what: str) -> list:
    if not isinstance(value, (list, tuple)):
        raise GraphSerializationError(f"invalid type: expected a sequence for `{what}`")
    return list(value)


def _parse_edge_property(value: Any) -> EdgeProperty:
    try:
        return EdgeProperty(value)
    except ValueError:
        raise GraphSerializationError(
            f"unknown variant `{value}`, expected `undirected` or `directed`"
        ) from None


def _parse_index(value: Any, index_type: IndexType) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise GraphSerializationError(
            f"invalid type: {value!r}, expected {_type_name(index_type)}"
        )
    if not index_type.fits(value):
        raise GraphSerializationError(
            f"invalid value: integer `{value}`, expected {_type_name(index_type)}"
        )
    return value


def _invalid_length(what: str, count: int, index_type: IndexType) -> GraphSerializationError:
    return GraphSerializationError(
        f"invalid size: graph {what} count {count} exceeds index type maximum "
        f"{index_type.max()}"
    )


def from_serializable(
    data: Mapping[str, Any],
    directed: bool = True,
    index_type: IndexType = DEFAULT_INDEX_TYPE,
) -> Graph:
    """Build a graph from its plain representation.

    ``directed`` and ``index_type`` describe the graph expected; data that
    does not match them, or that does not describe a valid graph, raises
    GraphSerializationError.
    """
    if not isinstance(data, Mapping):
        raise GraphSerializationError("invalid type: expected a map")
    index_type = IndexType(index_type)

    nodes = _parse_sequence(_require(data, "nodes"), "nodes")
    holes = _parse_sequence(data.get("node_holes", []), "node_holes")
    if holes:
        raise GraphSerializationError(
            "Graph can not have holes in the node set, found non-empty node_holes"
        )
    prop = _parse_edge_property(_require(data, "edge_property"))
    raw_edges = _parse_sequence(_require(data, "edges"), "edges")

    edges: list[tuple[int, int, Any]] = []
    for item in raw_edges:
        if item is None:
            raise GraphSerializationError(
                "Graph can not have holes in the edge set, found None, expected edge"
            )
        if not isinstance(item, (list, tuple)) or len(item) != 3:
            raise GraphSerializationError(
                f"invalid edge {item!r}, expected a tuple of size 3"
            )
        source, target, weight = item
        edges.append(
            (_parse_index(source, index_type), _parse_index(target, index_type), weight)
        )

    expected = EdgeProperty._from_flag(directed)
    if prop is not expected:
        raise GraphSerializationError(
            f"graph edge property mismatch, expected {expected._label()}, "
            f"found {prop._label()}"
        )
    limit = index_type.max()
    if len(nodes) >= limit:
        raise _invalid_length("node", len(nodes), index_type)
    if len(edges) >= limit:
        raise _invalid_length("edge", len(edges), index_type)

    graph = Graph(directed=expected.is_directed(), index_type=index_type)
    for weight in nodes:
        graph.add_node(weight)
    node_bound = graph.node_count()
    for source, target, weight in edges:
        if max(source, target) >= node_bound:
            raise GraphSerializationError(
                f"invalid value: node index `{max(source, target)}` does not exist in "
                f"graph with node bound {node_bound}"
            )
        graph.add_edge(source, target, weight)
    return graph


def dumps(graph: Graph) -> str:
    """Serialize ``graph`` to a JSON string."""
    return json.dumps(to_serializable(graph))


def loads(
    text: str,
    directed: bool = True,
    index_type: IndexType = DEFAULT_INDEX_TYPE,
) -> Graph:
    """Build a graph from a JSON string produced by :func:`dumps`."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise GraphSerializationError(f"invalid JSON: {exc}") from exc
    return from_serializable(data, directed=directed, index_type=index_type)