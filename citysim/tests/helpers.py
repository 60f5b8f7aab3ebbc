"""
Shared grid builders for tests.

Rows are strings of layout symbols, one character per cell, e.g.
make_grid(["PR-", "R--"]) builds a 3x2 grid.
"""

from pathlib import Path
from typing import List, Optional

import numpy as np

from citysim.grid import Grid
from citysim.data_types import ZoneType


DATA_ROOT = Path(__file__).parent.parent.parent / "data"


def make_grid(
    rows: List[str],
    population: Optional[List[List[int]]] = None,
    workers: int = 0,
    goods: int = 0
) -> Grid:
    """
    Build a grid from symbol rows.

    Args:
        rows: One string per grid row (all the same length)
        population: Optional per-cell populations, same shape as rows
        workers: Initial available workers
        goods: Initial available goods
    """
    height = len(rows)
    width = len(rows[0])
    grid = Grid(width, height)

    for y, row in enumerate(rows):
        assert len(row) == width, f"Row {y} has {len(row)} cells, expected {width}"
        for x, symbol in enumerate(row):
            grid.set_zone(x, y, ZoneType.from_symbol(symbol))

    if population is not None:
        grid.population[:, :] = np.array(population, dtype=np.int64)

    grid.available_workers = workers
    grid.available_goods = goods
    return grid


def make_plant_scenario() -> Grid:
    """
    8x9 region: plant in the corner with three residential neighbours,
    industry and commerce far away without power.
    """
    return make_grid([
        "PR------",
        "RR------",
        "--------",
        "--------",
        "--------",
        "-----II-",
        "--------",
        "-----CC-",
        "--------",
    ])
