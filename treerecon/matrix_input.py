"""Parsing of comma-separated distance matrices."""

from __future__ import annotations

import re

_UNSIGNED = re.compile(r"[0-9]+")
_UINT32_MAX = 2**32 - 1


def _parse_unsigned(field: str) -> int:
    if not _UNSIGNED.fullmatch(field):
        raise ValueError(f"invalid number {field!r}: expected an unsigned integer")
    value = int(field)
    if value > _UINT32_MAX:
        raise ValueError(f"value {field!r} out of range for a 32-bit unsigned integer")
    return value


def parse_matrix(file_content: str) -> list[list[int]]:
    """Parse newline-separated rows of comma-separated unsigned integers into a square matrix."""
    matrix = [
        [_parse_unsigned(field.strip()) for field in line.split(",")]
        for line in file_content.split("\n")
    ]

    if not matrix or not matrix[0]:
        raise ValueError("empty matrix")
    if len(matrix) != len(matrix[0]):
        raise ValueError("matrix is not square")
    for index, row in enumerate(matrix):
        if len(row) != len(matrix):
            raise ValueError(
                f"row {index} has {len(row)} elements, but row 0 has {len(matrix[0])}"
            )
    return matrix