"""Reconstruction of trees from matrix files and comparison of tree files."""

from __future__ import annotations

from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path

from treerecon.neighbor_joining import reconstruct_int_tree
from treerecon.graph import Graph
from treerecon.matrix_input import parse_matrix
from treerecon.parse_graph import parse_neighbor_list
from treerecon.serialize import SerializationType, serialize_graph, tree_summary
from treerecon.tree_comparison import compare_tree_topology

_EPSILON = 1e-10


class CommandError(Exception):
    """Raised when a command cannot complete; the message is meant for the user."""


@dataclass(frozen=True)
class CompareResult:
    """Outcome of comparing two tree files."""

    topologies_match: bool
    tree1_summary: list[str]
    tree2_summary: list[str]


def _read(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as error:
        raise CommandError(f"error reading file {path}: {error}") from error


def _load_tree(path: str | Path) -> Graph:
    content = _read(path)
    try:
        tree = parse_neighbor_list(content)
    except ValueError as error:
        raise CommandError(f"error parsing tree from {path}: {error}") from error
    try:
        tree.validate_tree()
    except ValueError as error:
        raise CommandError(f"tree from {path} is invalid: {error}") from error
    return tree


def run_compare(file1: str | Path, file2: str | Path) -> CompareResult:
    """Compare the topologies of two trees stored as neighbour lists."""
    tree1 = _load_tree(file1)
    tree2 = _load_tree(file2)
    return CompareResult(
        topologies_match=compare_tree_topology(tree1, tree2),
        tree1_summary=tree_summary(tree1),
        tree2_summary=tree_summary(tree2),
    )


def run_reconstruct(
    input_path: str | Path,
    output_path: str | Path | None = None,
    serialization_type: SerializationType = SerializationType.NEIGHBOR_LISTS,
) -> str:
    """Reconstruct a tree from a distance matrix file and return its text form.

    When ``output_path`` is given the text is also written there, replacing any
    existing file and creating missing directories.
    """
    try:
        content = Path(input_path).read_text(encoding="utf-8")
    except OSError as error:
        raise CommandError(f"error reading file: {error}") from error

    try:
        matrix = parse_matrix(content)
    except ValueError as error:
        raise CommandError(f"error parsing matrix: {error}") from error

    try:
        tree = reconstruct_int_tree(matrix, _EPSILON)
    except ValueError as error:
        raise CommandError(f"error reconstructing tree: {error}") from error

    if not tree.is_integer_weighted(_EPSILON):
        raise CommandError("tree is not integer weighted")

    try:
        serialized = serialize_graph(tree, serialization_type)
    except ValueError as error:
        raise CommandError(f"error serializing tree: {error}") from error

    if output_path:
        target = Path(output_path)
        with suppress(OSError):
            target.unlink()
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise CommandError(f"error creating output directory: {error}") from error
        try:
            target.write_text(serialized, encoding="utf-8")
        except OSError as error:
            raise CommandError(f"error writing output file: {error}") from error

    return serialized