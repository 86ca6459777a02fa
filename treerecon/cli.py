"""Command-line entry point: reconstruct, compare, generate, test and version."""

from __future__ import annotations

import argparse
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from treerecon.batch import (
    find_input_files,
    format_test_result,
    format_test_summary,
    run_single_test,
)
from treerecon.commands import CommandError, run_compare, run_reconstruct
from treerecon.distance_matrix import calculate_distance_matrix, format_distance_matrix
from treerecon.serialize import SerializationType, serialize_graph, tree_summary
from treerecon.tree_generation import generate_random_tree

VERSION = "dev"
COMMIT = "none"
BUILD_DATE = "unknown"

_ROOT_MESSAGE = (
    "Run `tree-reconstruction reconstruct` to reconstruct a tree, "
    "or `tree-reconstruction help` for a list of available commands."
)


@dataclass(frozen=True)
class _GeneratedFiles:
    input_file: Path
    output_file: Path
    seed: int
    summary: list[str]


def generate_files(
    prefix: str,
    num_leaves: int = 4,
    seed: int = 0,
    chain_extension_prob: float = 0.0,
    connect_to_existing_prob: float = 0.25,
) -> _GeneratedFiles:
    """Write a random tree's distance matrix and neighbour lists to ``<prefix>-<n>.*.txt``.

    A seed of 0 is replaced by the current time. Existing files are never overwritten.
    """
    if num_leaves < 2:
        raise CommandError(f"Number of leaves must be at least 2, got {num_leaves}")
    if seed == 0:
        seed = time.time_ns()

    input_file = Path(f"{prefix}-{num_leaves}.input.txt")
    if input_file.exists():
        raise CommandError(f"Error: input file {input_file} already exists")
    output_file = Path(f"{prefix}-{num_leaves}.output.txt")
    if output_file.exists():
        raise CommandError(f"Error: output file {output_file} already exists")

    try:
        tree = generate_random_tree(
            num_leaves, seed, chain_extension_prob, connect_to_existing_prob
        )
    except ValueError as error:
        raise CommandError(f"Error generating tree: {error}") from error

    try:
        tree.validate_tree()
    except ValueError as error:
        raise CommandError(f"Error: generated tree is invalid: {error}") from error

    actual_leaves = len(tree.leaf_nodes())
    if actual_leaves != num_leaves:
        raise CommandError(
            f"Error: generated tree has {actual_leaves} leaves, expected {num_leaves}"
        )

    try:
        matrix_csv = format_distance_matrix(calculate_distance_matrix(tree))
    except ValueError as error:
        raise CommandError(f"Error calculating distance matrix: {error}") from error

    try:
        serialized = serialize_graph(tree, SerializationType.NEIGHBOR_LISTS)
    except ValueError as error:
        raise CommandError(f"Error serializing tree: {error}") from error

    for path, kind in ((input_file, "input"), (output_file, "output")):
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise CommandError(f"Error creating {kind} directory: {error}") from error

    for path, text, kind in ((input_file, matrix_csv, "input"), (output_file, serialized, "output")):
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as error:
            raise CommandError(f"Error writing {kind} file: {error}") from error

    return _GeneratedFiles(input_file, output_file, seed, tree_summary(tree))


def _cmd_reconstruct(args: argparse.Namespace) -> None:
    try:
        serialization = SerializationType(args.serialization)
    except ValueError:
        raise CommandError(f"Invalid serialization type: {args.serialization}") from None

    serialized = run_reconstruct(args.input, args.output or None, serialization)
    if serialization is SerializationType.NEIGHBOR_LISTS:
        print(f"Tree:\n{serialized}")
    else:
        print(f"Tree: {serialized}")


def _cmd_compare(args: argparse.Namespace) -> None:
    result = run_compare(args.file1, args.file2)
    if result.topologies_match:
        print("✓ Trees have the same topology")
        for line in result.tree1_summary:
            print(f"  {line}")
        return

    print("✗ Trees have different topologies")
    for name, summary in ((args.file1, result.tree1_summary), (args.file2, result.tree2_summary)):
        print(f"  {name}:")
        for line in summary:
            print(f"    {line}")


def _cmd_generate(args: argparse.Namespace) -> None:
    generated = generate_files(
        args.prefix, args.leaves, args.seed, args.chain_prob, args.connect_prob
    )
    n = args.leaves
    print("Successfully generated:")
    print(f"  Input file:  {generated.input_file} ({n}x{n} distance matrix)")
    print(f"  Output file: {generated.output_file} (neighbor lists format)")
    print(f"  Random seed: {generated.seed}")
    print("  Tree summary:")
    for line in generated.summary:
        print(f"    {line}")


def _cmd_test(args: argparse.Namespace) -> None:
    directory = Path(args.directory)
    if not directory.exists():
        raise CommandError(f"Error: directory {args.directory} does not exist")

    try:
        input_files = find_input_files(directory)
    except OSError as error:
        raise CommandError(f"Error finding input files: {error}") from error

    if not input_files:
        print(f"No '*.input.txt' files found in directory {args.directory}")
        return

    print(f"Running tests on {len(input_files)} input files in {args.directory}...\n")
    results = []
    for input_file in input_files:
        result = run_single_test(input_file)
        results.append(result)
        print(format_test_result(result))
    print(format_test_summary(results))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tree-reconstruction",
        description="CLI application that reconstructs a tree from a distance matrix.",
    )
    sub = parser.add_subparsers(dest="command")

    reconstruct = sub.add_parser(
        "reconstruct", help="Reconstruct a tree", description="Reconstruct a tree from distance matrix"
    )
    reconstruct.add_argument("-i", "--input", required=True, help="Input file path")
    reconstruct.add_argument("-o", "--output", default="", help="Output file path")
    reconstruct.add_argument(
        "-s",
        "--serialization",
        default="neighbor-lists",
        help="Serialization type (brackets, brackets-shortened, neighbor-lists)",
    )
    reconstruct.set_defaults(handler=_cmd_reconstruct)

    compare = sub.add_parser(
        "compare",
        help="Compare two tree output files",
        description="Compare two tree output files to check if they represent the same "
        "topology (structure), ignoring node names/indexes.",
    )
    compare.add_argument("file1")
    compare.add_argument("file2")
    compare.set_defaults(handler=_cmd_compare)

    generate = sub.add_parser(
        "generate",
        help="Generate example inputs and outputs",
        description="Generate a random tree with specified number of leaves and create "
        "corresponding distance matrix input and tree output files.",
    )
    generate.add_argument("-l", "--leaves", type=int, default=4, help="Number of leaves in the generated tree")
    generate.add_argument("-p", "--prefix", required=True, help="Output file prefix")
    generate.add_argument("-s", "--seed", type=int, default=0, help="Random seed (0 for current time)")
    generate.add_argument(
        "-c", "--chain-prob", type=float, default=0.0, help="Probability of extending leaf chains"
    )
    generate.add_argument(
        "-x",
        "--connect-prob",
        type=float,
        default=0.25,
        help="Probability of connecting new leaves to existing nodes instead of splitting edges",
    )
    generate.set_defaults(handler=_cmd_generate)

    batch = sub.add_parser(
        "test",
        help="Run batch tests on all '*.input.txt' files in a directory",
        description="Run the reconstruct command on all '*.input.txt' files in the specified "
        "directory and compare results with corresponding '*.output.txt' files.",
    )
    batch.add_argument("directory")
    batch.set_defaults(handler=_cmd_test)

    sub.add_parser("version", help="Print the version number")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the process exit status."""
    args = _build_parser().parse_args(argv)
    if args.command is None:
        print(_ROOT_MESSAGE)
        return 0
    if args.command == "version":
        print(f"TreeReconstruction version {VERSION} (commit: {COMMIT}, built: {BUILD_DATE})")
        return 0
    try:
        args.handler(args)
    except CommandError as error:
        print(error)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())