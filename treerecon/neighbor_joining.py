"""Neighbor joining tree reconstruction from distance matrices."""

from __future__ import annotations

from itertools import combinations
from typing import Iterable, Sequence

from treerecon.graph import Graph, GraphError


def matrix_to_dict(matrix: Sequence[Sequence[float]]) -> dict[int, dict[int, float]]:
    """Turn a square matrix into nested dictionaries keyed by row and column."""
    return {i: dict(enumerate(row)) for i, row in enumerate(matrix)}


def make_r_values(
    distances: dict[int, dict[int, float]], joinable: Iterable[int]
) -> dict[int, float]:
    """Sum of distances from each joinable node to all joinable nodes."""
    members = list(joinable)
    return {i: sum(distances[i][j] for j in members) for i in members}


def neighbor_joining(matrix: Sequence[Sequence[float]]) -> Graph:
    """Build an unrooted tree whose leaves 0..n-1 are the rows of ``matrix``."""
    if len(matrix) < 2:
        raise GraphError("matrix must have at least 2 rows")

    joinable = set(range(len(matrix)))
    next_free = len(matrix)
    distances = matrix_to_dict(matrix)
    tree = Graph()

    while len(joinable) > 2:
        r = make_r_values(distances, joinable)
        size = len(joinable)
        _, node_i, node_j = min(
            (
                ((size - 2) * distances[i][j] - r[i] - r[j], i, j)
                for i, j in combinations(sorted(joinable), 2)
            ),
            key=lambda item: item[0],
        )

        joined = next_free
        next_free += 1

        d_ij = distances[node_i][node_j]
        to_i = (d_ij + (r[node_i] - r[node_j]) / (size - 2)) / 2
        to_j = d_ij - to_i

        for node in (joined, node_i, node_j):
            tree.add_node(node)
        tree.add_edge(node_i, joined, to_i)
        tree.add_edge(node_j, joined, to_j)

        joinable -= {node_i, node_j}
        joinable.add(joined)

        joined_row = {joined: 0.0}
        for k in joinable - {joined}:
            joined_row[k] = (distances[node_i][k] + distances[node_j][k] - d_ij) / 2
            distances[k][joined] = joined_row[k]
        distances[joined] = joined_row

        del distances[node_i]
        del distances[node_j]
        for row in distances.values():
            row.pop(node_i, None)
            row.pop(node_j, None)

    first, second = sorted(joinable)
    tree.add_node(first)
    tree.add_node(second)
    tree.add_edge(first, second, distances[first][second])

    tree.validate_tree()
    return tree


def reconstruct_int_tree(matrix: Sequence[Sequence[int]], epsilon: float) -> Graph:
    """Reconstruct a tree from an integer matrix, contracting zero-length edges."""
    tree = neighbor_joining([[float(value) for value in row] for row in matrix])
    tree.merge_zero_edges(epsilon)
    return tree