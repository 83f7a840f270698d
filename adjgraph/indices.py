"""Index types, edge directions and node/edge identifiers for graphs."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar

__all__ = [
    "DEFAULT_INDEX_TYPE",
    "DIRECTIONS",
    "Direction",
    "EdgeIndex",
    "IndexType",
    "NodeIndex",
    "edge_index",
    "node_index",
]


class IndexType(enum.Enum):
    """Unsigned integer width used for node and edge indices.

    The width bounds how many nodes and edges a graph may hold: the
    maximum value of the type is reserved as the "end" marker.
    """

    U8 = 8
    U16 = 16
    U32 = 32
    USIZE = 64

    def max(self) -> int:
        """Return the largest value representable by this index type."""
        return (1 << self.value) - 1

    def fits(self, value: int) -> bool:
        """Return whether ``value`` is representable by this index type."""
        return 0 <= value <= self.max()


DEFAULT_INDEX_TYPE = IndexType.U32


class Direction(enum.IntEnum):
    """Edge direction relative to a node."""

    OUTGOING = 0
    INCOMING = 1

    def opposite(self) -> Direction:
        """Return the reverse direction."""
        return Direction.INCOMING if self is Direction.OUTGOING else Direction.OUTGOING


DIRECTIONS: tuple[Direction, Direction] = (Direction.OUTGOING, Direction.INCOMING)


@dataclass(frozen=True, order=True)
class _GraphIndex:
    index: int
    is_node_index: ClassVar[bool] = False

    def __post_init__(self) -> None:
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            raise TypeError(f"{type(self).__name__} requires an int, got {self.index!r}")
        if self.index < 0:
            raise ValueError(f"{type(self).__name__} must be non-negative, got {self.index}")

    def __index__(self) -> int:
        return self.index

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.index})"


@dataclass(frozen=True, order=True, repr=False)
class NodeIndex(_GraphIndex):
    """Node identifier."""

    is_node_index: ClassVar[bool] = True

    @classmethod
    def end(cls, index_type: IndexType = DEFAULT_INDEX_TYPE) -> NodeIndex:
        """Return the invalid node index used to mark absence for ``index_type``."""
        return cls(index_type.max())

    def is_end(self, index_type: IndexType = DEFAULT_INDEX_TYPE) -> bool:
        """Return whether this is the end marker for ``index_type``."""
        return self.index == index_type.max()


@dataclass(frozen=True, order=True, repr=False)
class EdgeIndex(_GraphIndex):
    """Edge identifier."""

    is_node_index: ClassVar[bool] = False

    @classmethod
    def end(cls, index_type: IndexType = DEFAULT_INDEX_TYPE) -> EdgeIndex:
        """Return the invalid edge index used to end an edge list for ``index_type``."""
        return cls(index_type.max())

    def is_end(self, index_type: IndexType = DEFAULT_INDEX_TYPE) -> bool:
        """Return whether this is the end marker for ``index_type``."""
        return self.index == index_type.max()


def node_index(index: int) -> NodeIndex:
    """Shorthand for ``NodeIndex(index)``."""
    return NodeIndex(index)


def edge_index(index: int) -> EdgeIndex:
    """Shorthand for ``EdgeIndex(index)``."""
    return EdgeIndex(index)