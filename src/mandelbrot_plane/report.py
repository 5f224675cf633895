"""Structured results of an escape-time grid computation."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import numpy as np

from .computation import NO_ESCAPE, escape_grid
from .config import RenderConfig


@dataclass(frozen=True)
class GridReport:
    """Container for outputs produced by ``compute_report``."""

    grid: Optional[np.ndarray]
    timing: Dict[str, Any]
    columns: Optional[List[Dict[str, Any]]]

    def copy_columns(self) -> Optional[List[Dict[str, Any]]]:
        if self.columns is None:
            return None
        return [record.copy() for record in self.columns]


def compute_report(config: RenderConfig) -> GridReport:
    """Run ``escape_grid`` for ``config`` and summarise the result."""
    start = time.perf_counter()
    grid = escape_grid(config)
    wall_time = time.perf_counter() - start

    escaped_mask = grid != NO_ESCAPE
    escaped = int(escaped_mask.sum())
    timing = {
        "wall_time": wall_time,
        "escaped": escaped,
        "members": int(grid.size - escaped),
        "max_escape": int(grid[escaped_mask].max()) if escaped else NO_ESCAPE,
    }
    return GridReport(grid=grid, timing=timing, columns=_column_records(grid))


def _column_records(grid: np.ndarray) -> List[Dict[str, Any]]:
    records = []
    for column, values in enumerate(grid):
        hits = values[values != NO_ESCAPE]
        records.append(
            {
                "column": column,
                "escaped": int(hits.size),
                "members": int(values.size - hits.size),
                "mean_escape": float(hits.mean()) if hits.size else float("nan"),
            }
        )
    return records
