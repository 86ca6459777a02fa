"""Weighted undirected graphs that hold reconstructed and generated trees."""

from __future__ import annotations

import math
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Sequence


class GraphError(ValueError):
    """Raised when a graph operation cannot be carried out."""


def _round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    magnitude = math.floor(abs(value) + 0.5)
    return int(magnitude if value >= 0 else -magnitude)


@dataclass(frozen=True)
class Edge:
    """An undirected weighted edge between two nodes."""

    node1: int
    node2: int
    weight: float = 0.0

    def same_as(self, other: Edge) -> bool:
        """True if both edges join the same pair of nodes, in either direction."""
        return (self.node1 == other.node1 and self.node2 == other.node2) or (
            self.node1 == other.node2 and self.node2 == other.node1
        )

    def other_end(self, node: int) -> int:
        """The endpoint of this edge that is not ``node``."""
        return self.node2 if self.node1 == node else self.node1


def index_of_edge(edges: Sequence[Edge], start: int, end: int) -> int | None:
    """Position of the edge joining ``start`` and ``end``, or None if absent."""
    probe = Edge(start, end)
    return next((i for i, edge in enumerate(edges) if edge.same_as(probe)), None)


def _pop_edge(edges: list[Edge] | None, start: int, end: int) -> bool:
    if edges is None:
        return False
    index = index_of_edge(edges, start, end)
    if index is None:
        return False
    del edges[index]
    return True


@dataclass
class Graph:
    """An undirected graph with an adjacency list per node and a global edge list."""

    nodes: set[int] = field(default_factory=set)
    edges: dict[int, list[Edge]] = field(default_factory=dict)
    all_edges: list[Edge] = field(default_factory=list)
    max_node: int = -1

    def add_node(self, node: int) -> bool:
        """Add ``node``; return False if it was already present."""
        if node in self.nodes:
            return False
        self.nodes.add(node)
        self.edges[node] = []
        self.max_node = max(self.max_node, node)
        return True

    def add_new_node(self) -> int:
        """Add a node numbered one above the highest so far and return it."""
        node = self.max_node + 1
        self.add_node(node)
        self.max_node = node
        return node

    def add_edge(self, node1: int, node2: int, weight: float) -> None:
        """Join two existing nodes with a non-negative weighted edge."""
        node1, node2 = sorted((node1, node2))
        for node in (node1, node2):
            if node not in self.nodes:
                raise GraphError(f"node {node} does not exist in the graph")
        if node1 == node2:
            raise GraphError(f"node {node1} cannot be connected to itself")
        if weight < 0:
            raise GraphError(
                f"weight must be non-negative (got {weight:f} for edge {node1}-{node2})"
            )
        if index_of_edge(self.all_edges, node1, node2) is not None:
            raise GraphError(f"edge {node1}-{node2} already exists")

        edge = Edge(node1, node2, weight)
        self.all_edges.append(edge)
        self.edges[node1].append(edge)
        self.edges[node2].append(edge)

    def remove_edge(self, node1: int, node2: int) -> bool:
        """Remove the edge between two nodes; return whether it existed."""
        node1, node2 = sorted((node1, node2))
        in_first = _pop_edge(self.edges.get(node1), node1, node2)
        in_second = _pop_edge(self.edges.get(node2), node1, node2)
        in_all = _pop_edge(self.all_edges, node1, node2)

        found = (in_first, in_second, in_all)
        if any(found) and not all(found):
            first, second, everywhere = (str(flag).lower() for flag in found)
            raise GraphError(
                f"edge {node1}-{node2} found in only some lists: "
                f"(from {node1}: {first}, from {node2}: {second}, "
                f"from all: {everywhere})"
            )
        return any(found)

    def merge_nodes(self, node1: int, node2: int) -> None:
        """Contract the edge between two connected nodes, keeping ``node1``."""
        for node in (node1, node2):
            if node not in self.nodes:
                raise GraphError(f"node {node} does not exist in the graph")

        if not self.remove_edge(node1, node2):
            raise GraphError(
                f"edge {node1}-{node2} not found in the graph: merged nodes must be connected"
            )

        to_change = [e for e in self.all_edges if node2 in (e.node1, e.node2)]
        for edge in to_change:
            with suppress(GraphError):
                self.remove_edge(edge.node1, edge.node2)
            with suppress(GraphError):
                self.add_edge(node1, edge.other_end(node2), edge.weight)

        self.nodes.discard(node2)
        self.edges.pop(node2, None)

    def merge_zero_edges(self, epsilon: float) -> None:
        """Contract every edge whose weight is at most ``epsilon``."""
        zero_edges = [e for e in self.all_edges if e.weight <= epsilon]

        merged: dict[int, int] = {}
        for edge in zero_edges:
            merged[edge.node1] = edge.node1
            merged[edge.node2] = edge.node2

        for edge in zero_edges:
            self.merge_nodes(merged[edge.node1], merged[edge.node2])
            self.validate_tree()
            merged[edge.node2] = merged[edge.node1]

    def split_edge(self, edge: Edge, epsilon: float) -> None:
        """Replace an integer-weighted edge with a chain of unit edges."""
        if not self.remove_edge(edge.node1, edge.node2):
            raise GraphError(f"edge {edge.node1}-{edge.node2} not found in the graph")

        rounded = _round_half_away(edge.weight)
        if abs(edge.weight - rounded) > epsilon:
            raise GraphError(
                f"edge {edge.node1}-{edge.node2} has non-integer weight ({edge.weight:f})"
            )

        previous = edge.node1
        for _ in range(rounded - 1):
            new_node = self.add_new_node()
            self.add_edge(previous, new_node, 1.0)
            previous = new_node
        self.add_edge(previous, edge.node2, 1.0)

    def split_edges(self, epsilon: float) -> None:
        """Split every edge whose weight is not 1 into unit edges."""
        to_split = [e for e in self.all_edges if abs(e.weight - 1) > epsilon]
        for edge in to_split:
            self.split_edge(edge, epsilon)

    def is_integer_weighted(self, epsilon: float) -> bool:
        """True if every edge weight is within ``epsilon`` of an integer."""
        return all(
            abs(e.weight - _round_half_away(e.weight)) <= epsilon for e in self.all_edges
        )

    def validate_tree(self) -> None:
        """Check weights are non-negative and adjacency lists match the edge list."""
        for edge in self.all_edges:
            if edge.weight < 0:
                raise GraphError(f"edge {edge.node1}-{edge.node2} has negative weight")

        for edge in self.all_edges:
            for end in (edge.node1, edge.node2):
                if index_of_edge(self.edges.get(end, []), edge.node1, edge.node2) is None:
                    raise GraphError(
                        f"edge {edge.node1}-{edge.node2} not found in edges of node {end}: "
                        f"{self.all_edges}"
                    )

    def leaf_nodes(self) -> list[int]:
        """The nodes of degree one, in ascending order."""
        return sorted(n for n in self.nodes if len(self.edges.get(n, ())) == 1)