"""Batch checking of reconstructions against expected tree files."""

from __future__ import annotations

import tempfile
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, Sequence

from treerecon.commands import CommandError, CompareResult, run_compare, run_reconstruct
from treerecon.serialize import SerializationType

INPUT_SUFFIX = ".input.txt"
OUTPUT_SUFFIX = ".output.txt"


class CaseStatus(Enum):
    """Outcome of one batch case; the value is the label shown to the user."""

    PASSED = "PASS"
    FAILED = "FAIL"
    SKIPPED = "SKIP"
    ERROR = "ERROR"


@dataclass
class CaseResult:
    """What happened when one input file was reconstructed and compared."""

    input_file: Path
    expected_file: Path
    status: CaseStatus
    error: str = ""
    duration: float = 0.0
    output_file: Path | None = None
    comparison: CompareResult | None = None


def _walk(path: Path) -> Iterator[Path]:
    for entry in sorted(path.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            yield from _walk(entry)
        elif entry.name.endswith(INPUT_SUFFIX):
            yield entry


def find_input_files(directory: str | Path) -> list[Path]:
    """All files under ``directory`` whose names end in ``.input.txt``, in lexical walk order."""
    root = Path(directory)
    if root.is_file():
        return [root] if root.name.endswith(INPUT_SUFFIX) else []
    return list(_walk(root))


def _expected_path(input_file: Path) -> Path:
    text = str(input_file)
    if text.endswith(INPUT_SUFFIX):
        text = text[: -len(INPUT_SUFFIX)]
    return Path(text + OUTPUT_SUFFIX)


def run_single_test(input_file: str | Path) -> CaseResult:
    """Reconstruct ``input_file`` and compare it with the matching ``.output.txt`` file."""
    start = time.perf_counter()
    input_path = Path(input_file)
    expected = _expected_path(input_path)
    result = CaseResult(input_file=input_path, expected_file=expected, status=CaseStatus.SKIPPED)

    if not expected.exists():
        result.error = "Expected output file not found"
        result.duration = time.perf_counter() - start
        return result

    with tempfile.TemporaryDirectory() as tmp:
        output = Path(tmp) / f"test_output_{time.time_ns()}.txt"
        result.output_file = output
        try:
            run_reconstruct(input_path, output, SerializationType.NEIGHBOR_LISTS)
        except CommandError as error:
            result.status = CaseStatus.ERROR
            result.error = f"Reconstruction failed: {error}"
        else:
            try:
                comparison = run_compare(output, expected)
            except CommandError as error:
                result.status = CaseStatus.ERROR
                result.error = f"Comparison failed: {error}"
            else:
                if comparison.topologies_match:
                    result.status = CaseStatus.PASSED
                else:
                    result.status = CaseStatus.FAILED
                    result.error = "Tree topologies differ"
                    result.comparison = comparison

    result.duration = time.perf_counter() - start
    return result


def format_test_result(result: CaseResult) -> str:
    """One report line for a case, followed by tree summaries when topologies differ."""
    label = result.status.value
    name = Path(result.input_file).name
    timing = f"({result.duration:.2f}s)"

    if result.status is CaseStatus.PASSED:
        return f"✓ [{label}] {name} {timing}"
    if result.status is CaseStatus.SKIPPED:
        return f"- [{label}] {name} - {result.error}"
    if result.status is CaseStatus.ERROR:
        return f"! [{label}] {name} {timing} - {result.error}"

    lines = [f"✗ [{label}] {name} {timing} - {result.error}"]
    if result.comparison is not None:
        lines.append("  Generated output:")
        lines.extend(f"    {line}" for line in result.comparison.tree1_summary)
        lines.append("  Expected output:")
        lines.extend(f"    {line}" for line in result.comparison.tree2_summary)
    return "\n".join(lines)


def format_test_summary(results: Sequence[CaseResult]) -> str:
    """Totals per status, failure details and the success rate of a batch run."""
    counts = {status: 0 for status in CaseStatus}
    for result in results:
        counts[result.status] += 1
    total_duration = sum(result.duration for result in results)

    passed = counts[CaseStatus.PASSED]
    failed = counts[CaseStatus.FAILED]
    errors = counts[CaseStatus.ERROR]
    rule = "=" * 50

    lines = [
        "",
        rule,
        "TEST SUMMARY",
        rule,
        f"Total tests: {len(results)}",
        f"Passed:      {passed}",
        f"Failed:      {failed}",
        f"Skipped:     {counts[CaseStatus.SKIPPED]}",
        f"Errors:      {errors}",
        f"Duration:    {total_duration:.2f}s",
    ]

    if failed or errors:
        lines += ["", "FAILED/ERROR DETAILS:"]
        lines.extend(
            f"  {Path(result.input_file).name}: {result.error}"
            for result in results
            if result.status in (CaseStatus.FAILED, CaseStatus.ERROR)
        )

    decided = passed + failed
    if decided:
        rate = passed / decided * 100
        lines += ["", f"Success rate: {rate:.1f}% ({passed}/{decided})"]

    return "\n".join(lines)