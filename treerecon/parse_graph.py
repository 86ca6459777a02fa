"""Parsing of trees written as per-node neighbour lists."""

from __future__ import annotations

import re

from treerecon.graph import Graph, GraphError

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_int(text: str, what: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise GraphError(f"invalid {what} ID: {text}")
    return int(text)


def parse_neighbor_list(content: str) -> Graph:
    """Parse lines of the form ``node:n1,n2,...;`` into a unit-weighted graph."""
    graph = Graph()
    lines = [line.strip() for line in content.strip().split("\n")]
    entries: list[tuple[int, str]] = []

    for line in lines:
        if not line:
            continue
        if ":" not in line or not line.endswith(";"):
            raise GraphError(f"invalid format: line must be 'node:neighbors;', got: {line}")
        body = line[:-1]
        parts = body.split(":")
        if len(parts) != 2:
            raise GraphError(f"invalid format: expected 'node:neighbors', got: {body}")
        node = _parse_int(parts[0].strip(), "node")
        graph.add_node(node)
        entries.append((node, parts[1].strip()))

    added: set[tuple[int, int]] = set()
    for node, neighbor_text in entries:
        if not neighbor_text:
            raise GraphError(f"node {node} has no neighbors")
        for field in neighbor_text.split(","):
            neighbor = _parse_int(field.strip(), "neighbor")
            key = (min(node, neighbor), max(node, neighbor))
            if key in added:
                continue
            try:
                graph.add_edge(node, neighbor, 1.0)
            except GraphError as error:
                raise GraphError(f"error adding edge {node}-{neighbor}: {error}") from error
            added.add(key)

    return graph