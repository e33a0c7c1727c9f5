"""Sparse cell map -> dense grid materialization"""

import re
from typing import Any, Mapping, Optional

from loguru import logger

from core.models import MaterializedGrid


_KEY_PATTERN = re.compile(r"^\s*\(?\s*(\d+)\s*,\s*(\d+)\s*\)?\s*$")


def parse_cell_key(key: Any) -> Optional[tuple[int, int]]:
    """
    Parse a cell map key into a 1-based (row, col) pair.

    Accepts "r,c" strings (optionally parenthesised) and 2-item int
    sequences. Returns None when the key is not exactly two positive integers.
    """
    if isinstance(key, str):
        match = _KEY_PATTERN.match(key)
        if not match:
            return None
        row, col = int(match.group(1)), int(match.group(2))
    elif isinstance(key, (tuple, list)) and len(key) == 2:
        row, col = key
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in (row, col)):
            return None
    else:
        return None

    if row < 1 or col < 1:
        return None
    return row, col


def parse_header_labels(cols: Any) -> list[str]:
    """Normalise a header declaration: a list, or the "[A, B, C]" string form"""
    if cols is None:
        return []
    if isinstance(cols, (list, tuple)):
        return [str(col) for col in cols]

    text = re.sub(r"[\[\]]", "", str(cols))
    if not text.strip():
        return []
    return [label.strip() for label in text.split(",")]


def normalize_cell_value(value: Any) -> Any:
    """Numbers and booleans keep their type, None is empty, the rest is text"""
    if value is None:
        return ""
    if isinstance(value, (bool, int, float)):
        return value
    return str(value)


def parse_cell_map(data: Mapping[Any, Any]) -> dict[tuple[int, int], Any]:
    """Coordinate-keyed copy of a cell map; malformed keys are skipped"""
    cells: dict[tuple[int, int], Any] = {}
    for key, value in (data or {}).items():
        coord = parse_cell_key(key)
        if coord is None:
            logger.warning(f"Skipping malformed cell key: {key!r}")
            continue
        cells[coord] = normalize_cell_value(value)
    return cells


def materialize_grid(data: Optional[Mapping[Any, Any]], cols: Any = None) -> MaterializedGrid:
    """
    Rebuild a dense, rectangular grid from a sparse cell map.

    Extent comes only from populated coordinates: row_count and col_count are
    the maxima over valid keys, and an empty map gives a 0x0 grid. Absent
    cells are "". Headers are carried separately and may be longer or shorter
    than col_count.

    Args:
        data: Mapping of "r,c" (or (r, c)) keys to scalar values
        cols: Optional header labels

    Returns:
        MaterializedGrid
    """
    headers = parse_header_labels(cols)
    cells = parse_cell_map(data)

    if not cells:
        return MaterializedGrid(headers=headers)

    row_count = max(row for row, _ in cells)
    col_count = max(col for _, col in cells)

    rows = [
        [cells.get((r, c), "") for c in range(1, col_count + 1)]
        for r in range(1, row_count + 1)
    ]

    return MaterializedGrid(
        headers=headers,
        rows=rows,
        row_count=row_count,
        col_count=col_count,
    )
