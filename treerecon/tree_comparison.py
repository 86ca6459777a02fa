"""Topology comparison of trees, independent of node numbering."""

from __future__ import annotations

from treerecon.graph import Graph, GraphError


def _degree(tree: Graph, node: int) -> int:
    return len(tree.edges.get(node, ()))


def _degree_sequence(tree: Graph) -> list[int]:
    return sorted(_degree(tree, node) for node in tree.nodes)


def compare_tree_topology(tree1: Graph, tree2: Graph) -> bool:
    """True if both trees have the same shape, ignoring node identifiers."""
    if len(tree1.nodes) != len(tree2.nodes):
        return False
    if len(tree1.all_edges) != len(tree2.all_edges):
        return False
    if _degree_sequence(tree1) != _degree_sequence(tree2):
        return False
    return canonical_representation(tree1) == canonical_representation(tree2)


def find_tree_centers(tree: Graph) -> list[int]:
    """The one or two central nodes of a tree, in ascending order."""
    if len(tree.nodes) == 1:
        return list(tree.nodes)

    remaining = set(tree.nodes)
    degrees = {node: _degree(tree, node) for node in tree.nodes}

    while len(remaining) > 2:
        leaves = [node for node in remaining if degrees[node] == 1]
        if not leaves:
            raise GraphError("graph is not a tree: no leaves left to remove")
        for leaf in leaves:
            remaining.discard(leaf)
            for edge in tree.edges.get(leaf, ()):
                neighbor = edge.other_end(leaf)
                if neighbor in remaining:
                    degrees[neighbor] -= 1

    return sorted(remaining)


def _representation_from_root(tree: Graph, root: int) -> str:
    """Nested-bracket form of the tree hanging from ``root``, children sorted."""
    visited = {root}
    stack: list[tuple[int, object, list[str]]] = [
        (root, iter(tree.edges.get(root, ())), [])
    ]
    while True:
        node, edges, children = stack[-1]
        for edge in edges:
            neighbor = edge.other_end(node)
            if neighbor not in visited:
                visited.add(neighbor)
                stack.append((neighbor, iter(tree.edges.get(neighbor, ())), []))
                break
        else:
            stack.pop()
            representation = "(" + "".join(sorted(children)) + ")"
            if not stack:
                return representation
            stack[-1][2].append(representation)


def canonical_representation(tree: Graph) -> str:
    """A string that is equal for two trees exactly when their shapes match."""
    if not tree.nodes:
        return ""
    return min(_representation_from_root(tree, center) for center in find_tree_centers(tree))