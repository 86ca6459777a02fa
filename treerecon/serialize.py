"""Text forms of trees: nested brackets and per-node neighbour lists."""

from __future__ import annotations

import math
from collections import Counter
from enum import Enum

from treerecon.graph import Graph, GraphError


class SerializationType(Enum):
    """The text forms a tree can be written in."""

    BRACKETS = "brackets"
    BRACKETS_SHORTENED = "brackets-shortened"
    NEIGHBOR_LISTS = "neighbor-lists"


def _round_weight(weight: float) -> int:
    """Round a non-negative weight to the nearest integer, halves upwards."""
    return int(math.floor(weight + 0.5))


def make_prefix_suffix(incoming_edge_length: int, use_shortened_syntax: bool) -> tuple[str, str]:
    """Opening and closing text around a node reached over an edge of the given length."""
    if not use_shortened_syntax or incoming_edge_length == 1:
        return "(" * incoming_edge_length, ")" * incoming_edge_length
    return f"[{incoming_edge_length}](", ")"


def serialize_brackets(graph: Graph, root: int, use_shortened_syntax: bool) -> str:
    """Write the tree hanging from ``root`` as nested brackets.

    Each edge of integer length ``n`` becomes ``n`` bracket pairs, or ``[n](...)``
    in the shortened form when ``n`` is not 1.
    """
    seen = {root}
    prefix, suffix = make_prefix_suffix(1, use_shortened_syntax)
    stack = [(root, iter(graph.edges.get(root, ())), [prefix], suffix)]
    while True:
        node, edges, parts, node_suffix = stack[-1]
        for edge in edges:
            other = edge.other_end(node)
            if other in seen:
                continue
            seen.add(other)
            child_prefix, child_suffix = make_prefix_suffix(
                _round_weight(edge.weight), use_shortened_syntax
            )
            stack.append(
                (other, iter(graph.edges.get(other, ())), [child_prefix], child_suffix)
            )
            break
        else:
            stack.pop()
            text = "".join(parts) + node_suffix
            if not stack:
                return text
            stack[-1][2].append(text)


def serialize_neighbor_lists(graph: Graph) -> str:
    """Write one ``node:n1,n2,...;`` line per node, nodes and neighbours ascending."""
    lines = []
    for node in sorted(graph.nodes):
        neighbors = sorted(edge.other_end(node) for edge in graph.edges.get(node, ()))
        if not neighbors:
            raise GraphError(f"node {node} has no neighbors")
        lines.append(f"{node}:{','.join(str(n) for n in neighbors)};\n")
    return "".join(lines)


def serialize_graph(graph: Graph, serialization_type: SerializationType) -> str:
    """Write a tree in the chosen form.

    The neighbour-list form first splits every edge into unit edges, which
    changes ``graph`` in place.
    """
    if serialization_type is SerializationType.BRACKETS:
        return serialize_brackets(graph, 0, False)
    if serialization_type is SerializationType.BRACKETS_SHORTENED:
        return serialize_brackets(graph, 0, True)
    if serialization_type is SerializationType.NEIGHBOR_LISTS:
        graph.split_edges(1e-6)
        return serialize_neighbor_lists(graph)
    raise ValueError(f"invalid serialization type: {serialization_type!r}")


def tree_summary(graph: Graph) -> list[str]:
    """Three lines describing node, leaf and edge counts and the degree distribution."""
    degrees = Counter(len(graph.edges.get(node, ())) for node in graph.nodes)
    distribution = ", ".join(
        f"{count}x{degree}" for degree, count in sorted(degrees.items())
    )
    return [
        f"Nodes: {len(graph.nodes)} total, {degrees[1]} leaves",
        f"Edges: {len(graph.all_edges)}",
        f"Degrees: {distribution}",
    ]