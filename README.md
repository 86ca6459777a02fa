# treerecon

Reconstruct a tree from the pairwise distances between its leaves.

Given a square matrix of non-negative integer distances between leaves,
`treerecon` runs neighbor joining, contracts zero-length edges and writes the
resulting integer-weighted tree. It can also generate random trees together
with their distance matrices, compare two trees by shape, and run a whole
directory of reconstruction cases. It has no dependencies beyond the
standard library.

## Installation

```
pip install .
pip install .[test]   # with pytest, to run the test suite
```

## File formats

A distance matrix is comma-separated, one row per line. Every entry must be
an unsigned integer that fits in 32 bits, and the matrix must be square with
at least two rows. Blank lines are not allowed, including a trailing one:

```
0,3,4
3,0,5
4,5,0
```

A tree is written as neighbor lists, one `node:neighbor,neighbor,...;` line
per node. Every edge has length one; longer edges are written as chains of
extra nodes. Nodes and neighbors are listed in ascending order:

```
0:3;
1:3;
2:3;
3:0,1,2;
```

Leaves of a reconstructed tree are numbered `0..n-1` in the order of the
matrix rows.

## Command line

```
tree-reconstruction reconstruct -i matrix.txt -o tree.txt
tree-reconstruction reconstruct -i matrix.txt -s brackets-shortened
tree-reconstruction generate -p examples/case -l 6 -s 42
tree-reconstruction compare tree-a.txt tree-b.txt
tree-reconstruction test examples
tree-reconstruction version
```

Running `tree-reconstruction` with no command prints a short hint;
`tree-reconstruction -h` and `tree-reconstruction <command> -h` list the
options.

- `reconstruct` reads a distance matrix (`-i`/`--input`, required) and prints
  the tree. `-o`/`--output` also writes it to a file, replacing an existing
  file and creating missing directories. `-s`/`--serialization` selects
  `neighbor-lists` (default), `brackets` or `brackets-shortened`. In the
  bracket forms the tree hangs from node 0 and an edge of length `n` becomes
  `n` nested bracket pairs, or `[n](...)` in the shortened form when `n` is
  not 1. Reconstruction fails if the resulting edge lengths are not whole
  numbers.
- `generate` builds a random tree with `-l`/`--leaves` leaves (default 4) and
  writes `<prefix>-<leaves>.input.txt` (the distance matrix) and
  `<prefix>-<leaves>.output.txt` (the tree in neighbor lists).
  `-p`/`--prefix` is required. `-s`/`--seed` sets the seed (0, the default,
  means the current time), `-c`/`--chain-prob` the probability of lengthening
  a new leaf's chain (default 0, must be below 1) and `-x`/`--connect-prob`
  the probability of attaching a new leaf to an existing inner node instead
  of splitting an edge (default 0.25, must be below 1). Existing files are
  never overwritten.
- `compare` reads two neighbor-list files and reports whether they describe
  the same tree shape, ignoring node numbering, with a summary of node, leaf
  and edge counts and the degree distribution.
- `test` reconstructs every `*.input.txt` file under a directory, compares
  each result with the matching `*.output.txt` file and prints a line per
  case (PASS, FAIL, SKIP when the expected file is missing, ERROR) followed
  by a summary and success rate.
- `version` prints the version string.

When a command cannot complete, it prints the reason and exits with status 1.
A failed comparison or failing test cases are reported, not signalled through
the exit status.

## Library use

```python
from treerecon.matrix_input import parse_matrix
from treerecon.neighbor_joining import reconstruct_int_tree
from treerecon.serialize import SerializationType, serialize_graph

matrix = parse_matrix("0,3,4\n3,0,5\n4,5,0")
tree = reconstruct_int_tree(matrix, 1e-10)
print(serialize_graph(tree, SerializationType.NEIGHBOR_LISTS))
```

`serialize_graph` with `NEIGHBOR_LISTS` splits every edge into unit edges,
changing the graph in place.

The modules:

- `treerecon.graph` – `Graph`, `Edge` and `GraphError` (a `ValueError`);
  graphs support adding and removing nodes and edges, contracting edges
  (`merge_nodes`, `merge_zero_edges`), splitting edges into unit chains
  (`split_edge`, `split_edges`), `is_integer_weighted`, `validate_tree` and
  `leaf_nodes`.
- `treerecon.neighbor_joining` – `neighbor_joining(matrix)` and
  `reconstruct_int_tree(matrix, epsilon)`.
- `treerecon.matrix_input` – `parse_matrix(text)`.
- `treerecon.parse_graph` – `parse_neighbor_list(text)`.
- `treerecon.serialize` – `SerializationType`, `serialize_graph`,
  `serialize_brackets`, `serialize_neighbor_lists`, `tree_summary`.
- `treerecon.distance_matrix` – `calculate_distance_matrix(graph)` and
  `format_distance_matrix(matrix)`.
- `treerecon.tree_generation` – `generate_random_tree(num_leaves, seed,
  chain_extension_prob, connect_to_existing_prob)`.
- `treerecon.tree_comparison` – `compare_tree_topology`,
  `canonical_representation`, `find_tree_centers`.
- `treerecon.commands` – `run_reconstruct` and `run_compare`, raising
  `CommandError` with a user-facing message.
- `treerecon.batch` – `find_input_files`, `run_single_test`,
  `format_test_result`, `format_test_summary`.
- `treerecon.cli` – `main(argv=None)` and `generate_files(prefix, ...)`.

## What it does not do

Only the two text forms above are read and written: matrices as
comma-separated integers and trees as neighbor lists or brackets. Trees
cannot be read back from the bracket forms, and fractional distances are not
accepted.