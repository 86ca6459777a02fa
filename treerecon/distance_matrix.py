"""Leaf-to-leaf distance matrices of trees."""

from __future__ import annotations

from collections import deque
from typing import Sequence

from treerecon.graph import Graph, GraphError


def _bfs_distances(graph: Graph, start: int) -> dict[int, int]:
    """Path lengths from ``start`` to every reachable node, found breadth first."""
    distances = {start: 0}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for edge in graph.edges.get(current, ()):
            neighbor = edge.other_end(current)
            if neighbor not in distances:
                distances[neighbor] = distances[current] + int(edge.weight)
                queue.append(neighbor)
    return distances


def calculate_distance_matrix(graph: Graph) -> list[list[int]]:
    """Distances between all leaves, rows and columns in ascending leaf order."""
    leaves = graph.leaf_nodes()
    if not leaves:
        raise GraphError("no leaf nodes found in the graph")

    matrix = []
    for leaf1 in leaves:
        distances = _bfs_distances(graph, leaf1)
        row = []
        for leaf2 in leaves:
            if leaf2 not in distances:
                raise GraphError(f"no path found between leaves {leaf1} and {leaf2}")
            row.append(distances[leaf2])
        matrix.append(row)
    return matrix


def format_distance_matrix(matrix: Sequence[Sequence[int]]) -> str:
    """Render a matrix as comma-separated rows joined by newlines."""
    return "\n".join(",".join(str(value) for value in row) for row in matrix)