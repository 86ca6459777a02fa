import pytest

from treerecon.commands import CommandError, CompareResult, run_compare, run_reconstruct
from treerecon.distance_matrix import calculate_distance_matrix, format_distance_matrix
from treerecon.parse_graph import parse_neighbor_list
from treerecon.serialize import SerializationType, serialize_neighbor_lists, tree_summary
from treerecon.tree_comparison import compare_tree_topology
from treerecon.tree_generation import generate_random_tree

STAR_CENTER_ZERO = "0:1,2,3;\n1:0;\n2:0;\n3:0;\n"
STAR_CENTER_THREE = "0:3;\n1:3;\n2:3;\n3:0,1,2;\n"
PATH_FOUR = "0:1;\n1:0,2;\n2:1,3;\n3:2;\n"


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


def test_reconstruct_star(tmp_path):
    source = _write(tmp_path / "star.input.txt", "0,2,2\n2,0,2\n2,2,0")
    text = run_reconstruct(source)
    tree = parse_neighbor_list(text)
    assert compare_tree_topology(tree, parse_neighbor_list(STAR_CENTER_ZERO))


def test_reconstruct_generated_tree(tmp_path):
    original = generate_random_tree(5, 7, 0.0, 0.0)
    matrix = format_distance_matrix(calculate_distance_matrix(original))
    source = _write(tmp_path / "gen.input.txt", matrix)
    tree = parse_neighbor_list(run_reconstruct(source))
    assert compare_tree_topology(tree, parse_neighbor_list(serialize_neighbor_lists(original)))


def test_reconstruct_writes_output_in_new_directory(tmp_path):
    source = _write(tmp_path / "star.input.txt", "0,2,2\n2,0,2\n2,2,0")
    target = tmp_path / "nested" / "deeper" / "out.txt"
    text = run_reconstruct(source, target, SerializationType.NEIGHBOR_LISTS)
    assert target.read_text(encoding="utf-8") == text


def test_reconstruct_replaces_existing_output(tmp_path):
    source = _write(tmp_path / "star.input.txt", "0,2,2\n2,0,2\n2,2,0")
    target = _write(tmp_path / "out.txt", "stale content that is much longer than the tree")
    text = run_reconstruct(source, target)
    assert target.read_text(encoding="utf-8") == text


def test_reconstruct_brackets_balanced(tmp_path):
    source = _write(tmp_path / "star.input.txt", "0,2,2\n2,0,2\n2,2,0")
    text = run_reconstruct(source, None, SerializationType.BRACKETS)
    assert text.count("(") == text.count(")")
    assert text.startswith("(") and text.endswith(")")


def test_reconstruct_missing_input(tmp_path):
    with pytest.raises(CommandError, match="error reading file"):
        run_reconstruct(tmp_path / "absent.txt")


def test_reconstruct_bad_matrix(tmp_path):
    source = _write(tmp_path / "bad.txt", "1,2,3\n2,2,3\n3,2")
    with pytest.raises(CommandError, match="error parsing matrix"):
        run_reconstruct(source)


def test_reconstruct_too_small_matrix(tmp_path):
    source = _write(tmp_path / "one.txt", "0")
    with pytest.raises(CommandError, match="error reconstructing tree"):
        run_reconstruct(source)


def test_reconstruct_half_weights_rejected(tmp_path):
    source = _write(tmp_path / "half.txt", "0,1,1\n1,0,1\n1,1,0")
    with pytest.raises(CommandError, match="tree is not integer weighted"):
        run_reconstruct(source)


def test_compare_same_topology_different_labels(tmp_path):
    first = _write(tmp_path / "a.txt", STAR_CENTER_ZERO)
    second = _write(tmp_path / "b.txt", STAR_CENTER_THREE)
    result = run_compare(first, second)
    assert result.topologies_match is True
    assert result.tree1_summary == result.tree2_summary
    assert result.tree1_summary == tree_summary(parse_neighbor_list(STAR_CENTER_ZERO))


def test_compare_different_topologies(tmp_path):
    first = _write(tmp_path / "a.txt", STAR_CENTER_ZERO)
    second = _write(tmp_path / "b.txt", PATH_FOUR)
    result = run_compare(first, second)
    assert result == CompareResult(
        topologies_match=False,
        tree1_summary=tree_summary(parse_neighbor_list(STAR_CENTER_ZERO)),
        tree2_summary=tree_summary(parse_neighbor_list(PATH_FOUR)),
    )


def test_compare_reconstructed_with_expected(tmp_path):
    source = _write(tmp_path / "star.input.txt", "0,2,2\n2,0,2\n2,2,0")
    output = tmp_path / "out.txt"
    run_reconstruct(source, output)
    expected = _write(tmp_path / "star.output.txt", STAR_CENTER_THREE)
    assert run_compare(output, expected).topologies_match is True


def test_compare_missing_file(tmp_path):
    first = _write(tmp_path / "a.txt", STAR_CENTER_ZERO)
    with pytest.raises(CommandError, match="error reading file"):
        run_compare(first, tmp_path / "absent.txt")


def test_compare_unparsable_tree(tmp_path):
    first = _write(tmp_path / "a.txt", "0:1\n")
    second = _write(tmp_path / "b.txt", STAR_CENTER_ZERO)
    with pytest.raises(CommandError, match="error parsing tree from"):
        run_compare(first, second)