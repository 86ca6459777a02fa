"""Random tree generation with unit-weighted edges."""

from __future__ import annotations

import random

from treerecon.graph import Graph, GraphError


def generate_random_tree(
    num_leaves: int,
    seed: int,
    chain_extension_prob: float,
    connect_to_existing_prob: float,
) -> Graph:
    """Grow a random unit-weighted tree from a single edge until it has ``num_leaves`` leaves.

    ``chain_extension_prob`` is the chance of lengthening a new leaf's chain by one
    more node; ``connect_to_existing_prob`` is the chance of hanging a new leaf on an
    existing inner node instead of splitting an edge.
    """
    if num_leaves < 2:
        raise GraphError(f"number of leaves must be at least 2, got {num_leaves}")
    if not 0 <= chain_extension_prob < 1:
        raise GraphError(
            f"chainExtensionProb must be in range [0, 1), got {chain_extension_prob:f}"
        )
    if not 0 <= connect_to_existing_prob < 1:
        raise GraphError(
            f"connectToExistingProb must be in range [0, 1), got {connect_to_existing_prob:f}"
        )

    rng = random.Random(seed)
    graph = Graph()
    graph.add_node(0)
    graph.add_node(1)
    graph.add_edge(0, 1, 1.0)

    while len(graph.leaf_nodes()) < num_leaves:
        _add_random_leaf(graph, rng, chain_extension_prob, connect_to_existing_prob)

    return graph


def _add_random_leaf(
    graph: Graph, rng: random.Random, chain_prob: float, connect_prob: float
) -> None:
    if not graph.all_edges:
        raise GraphError("cannot add leaf to empty graph")
    if rng.random() < connect_prob:
        _add_leaf_by_connecting(graph, rng, chain_prob)
    else:
        _add_leaf_by_splitting(graph, rng, chain_prob)


def _attach_chain(graph: Graph, start: int, chain: list[int]) -> None:
    for previous, node in zip([start, *chain], chain):
        graph.add_edge(previous, node, 1.0)


def _new_chain(graph: Graph, rng: random.Random, chain_prob: float) -> list[int]:
    return [graph.add_new_node() for _ in range(_chain_length(rng, chain_prob))]


def _add_leaf_by_connecting(graph: Graph, rng: random.Random, chain_prob: float) -> None:
    inner = sorted(n for n in graph.nodes if len(graph.edges.get(n, ())) > 1)
    if not inner:
        _add_leaf_by_splitting(graph, rng, chain_prob)
        return
    selected = inner[rng.randrange(len(inner))]
    chain = _new_chain(graph, rng, chain_prob)
    _attach_chain(graph, selected, chain)


def _add_leaf_by_splitting(graph: Graph, rng: random.Random, chain_prob: float) -> None:
    selected = graph.all_edges[rng.randrange(len(graph.all_edges))]
    graph.remove_edge(selected.node1, selected.node2)

    middle = graph.add_new_node()
    chain = _new_chain(graph, rng, chain_prob)

    graph.add_edge(selected.node1, middle, 1.0)
    graph.add_edge(selected.node2, middle, 1.0)
    _attach_chain(graph, middle, chain)


def _chain_length(rng: random.Random, chain_prob: float) -> int:
    """At least 1, extended with probability ``chain_prob`` up to 50 * ``chain_prob``."""
    if chain_prob <= 0:
        return 1
    max_length = max(int(50 * chain_prob), 1)
    length = 1
    while length < max_length and rng.random() < chain_prob:
        length += 1
    return length