"""Adjacency-list graphs with compact node and edge indices, and their JSON serialization."""

__version__ = "0.1.0"
__all__ = ["indices", "storage", "iterators", "graph", "serialization"]