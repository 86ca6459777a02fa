import pytest

from treerecon.graph import Edge, Graph, GraphError, index_of_edge


def _graph(*edges):
    graph = Graph()
    for node1, node2, weight in edges:
        graph.add_node(node1)
        graph.add_node(node2)
        graph.add_edge(node1, node2, weight)
    return graph


def _pairs(graph):
    return sorted((e.node1, e.node2) for e in graph.all_edges)


def test_same_as_ignores_direction_and_weight():
    assert Edge(1, 2, 3.0).same_as(Edge(2, 1, 0.0))
    assert not Edge(1, 2).same_as(Edge(1, 3))


def test_other_end():
    edge = Edge(4, 7, 1.0)
    assert edge.other_end(4) == 7
    assert edge.other_end(7) == 4


def test_index_of_edge():
    edges = [Edge(0, 1, 1.0), Edge(1, 2, 1.0)]
    assert index_of_edge(edges, 2, 1) == 1
    assert index_of_edge(edges, 0, 2) is None


def test_add_node_reports_duplicates_and_tracks_max():
    graph = Graph()
    assert graph.add_node(5) is True
    assert graph.add_node(5) is False
    assert graph.max_node == 5
    new = graph.add_new_node()
    assert new > 5
    assert graph.max_node == new
    assert new in graph.nodes
    assert graph.edges[new] == []


def test_add_edge_normalises_order():
    graph = Graph()
    graph.add_node(3)
    graph.add_node(1)
    graph.add_edge(3, 1, 2.0)
    assert graph.all_edges == [Edge(1, 3, 2.0)]
    assert graph.edges[1] == [Edge(1, 3, 2.0)]
    assert graph.edges[3] == [Edge(1, 3, 2.0)]


@pytest.mark.parametrize(
    "node1, node2, weight, message",
    [
        (0, 9, 1.0, "node 9 does not exist in the graph"),
        (0, 0, 1.0, "node 0 cannot be connected to itself"),
        (0, 2, -1.0, "weight must be non-negative"),
        (1, 0, 1.0, "edge 0-1 already exists"),
    ],
)
def test_add_edge_errors(node1, node2, weight, message):
    graph = _graph((0, 1, 1.0))
    graph.add_node(2)
    with pytest.raises(GraphError, match=message):
        graph.add_edge(node1, node2, weight)


def test_remove_edge():
    graph = _graph((0, 1, 1.0), (1, 2, 1.0))
    assert graph.remove_edge(1, 0) is True
    assert graph.remove_edge(0, 1) is False
    assert _pairs(graph) == [(1, 2)]
    assert graph.edges[0] == []
    assert graph.edges[1] == [Edge(1, 2, 1.0)]


def test_remove_edge_inconsistent_lists():
    graph = _graph((0, 1, 1.0))
    graph.edges[0].clear()
    with pytest.raises(GraphError, match="found in only some lists"):
        graph.remove_edge(0, 1)


def test_merge_nodes_moves_edges():
    graph = _graph((0, 1, 1.0), (1, 2, 0.0), (2, 3, 2.0))
    graph.merge_nodes(1, 2)
    assert graph.nodes == {0, 1, 3}
    assert _pairs(graph) == [(0, 1), (1, 3)]
    assert graph.edges[1][-1] == Edge(1, 3, 2.0)
    assert 2 not in graph.edges
    graph.validate_tree()


def test_merge_nodes_requires_connection():
    graph = _graph((0, 1, 1.0), (1, 2, 1.0))
    with pytest.raises(GraphError, match="merged nodes must be connected"):
        graph.merge_nodes(0, 2)


def test_merge_nodes_requires_existing_nodes():
    graph = _graph((0, 1, 1.0))
    with pytest.raises(GraphError, match="node 5 does not exist"):
        graph.merge_nodes(0, 5)


def test_merge_zero_edges_single():
    graph = _graph((0, 1, 0.0), (1, 2, 1.0), (1, 3, 1.0), (0, 4, 1.0))
    graph.merge_zero_edges(1e-10)
    assert graph.nodes == {0, 2, 3, 4}
    assert _pairs(graph) == [(0, 2), (0, 3), (0, 4)]
    assert all(e.weight == 1.0 for e in graph.all_edges)


def test_merge_zero_edges_chain():
    graph = _graph((0, 1, 0.0), (1, 2, 0.0), (2, 3, 1.0))
    graph.merge_zero_edges(1e-10)
    assert graph.nodes == {0, 3}
    assert _pairs(graph) == [(0, 3)]


def test_split_edge_makes_unit_chain():
    graph = _graph((0, 1, 3.0))
    graph.split_edge(Edge(0, 1, 3.0), 1e-6)
    assert len(graph.all_edges) == 3
    assert all(e.weight == 1.0 for e in graph.all_edges)
    assert graph.leaf_nodes() == [0, 1]
    assert all(len(graph.edges[n]) == 2 for n in graph.nodes - {0, 1})
    graph.validate_tree()


def test_split_edge_rejects_non_integer_weight():
    graph = _graph((0, 1, 2.5))
    with pytest.raises(GraphError, match="non-integer weight"):
        graph.split_edge(Edge(0, 1, 2.5), 1e-6)


def test_split_edge_missing_edge():
    graph = _graph((0, 1, 2.0))
    graph.add_node(2)
    with pytest.raises(GraphError, match="not found in the graph"):
        graph.split_edge(Edge(1, 2, 2.0), 1e-6)


def test_split_edges_leaves_only_unit_edges():
    graph = _graph((0, 1, 2.0), (1, 2, 1.0))
    graph.split_edges(1e-6)
    assert all(e.weight == 1.0 for e in graph.all_edges)
    assert graph.leaf_nodes() == [0, 2]
    assert all(n > 2 for n in graph.nodes - {0, 1, 2})
    assert all(len(graph.edges[n]) <= 2 for n in graph.nodes)


def test_is_integer_weighted():
    assert _graph((0, 1, 2.0), (1, 2, 3.0)).is_integer_weighted(1e-10)
    assert not _graph((0, 1, 2.5)).is_integer_weighted(1e-10)


def test_validate_tree_detects_missing_adjacency():
    graph = _graph((0, 1, 1.0))
    graph.edges[1].clear()
    with pytest.raises(GraphError, match="not found in edges of node 1"):
        graph.validate_tree()


def test_validate_tree_detects_negative_weight():
    graph = _graph((0, 1, 1.0))
    graph.all_edges.append(Edge(0, 1, -1.0))
    with pytest.raises(GraphError, match="has negative weight"):
        graph.validate_tree()


def test_leaf_nodes_of_star():
    graph = _graph((0, 3, 1.0), (0, 1, 1.0), (0, 2, 1.0))
    assert graph.leaf_nodes() == [1, 2, 3]