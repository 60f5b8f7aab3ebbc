"""
Neighbourhood queries over the 8-cell Moore ring.

Per-cell queries clip the ring to the grid (no wraparound) and exclude the
centre cell. Whole-grid variants compute the same values for every cell at
once with scipy.ndimage.convolve, using zero padding as the bounds clip.
"""

import numpy as np
from scipy.ndimage import convolve

from .grid import Grid, BoundsError
from .constants import POWER_SOURCE_SYMBOLS


# 3x3 ring: the eight neighbours count, the centre does not
RING_KERNEL = np.array([
    [1, 1, 1],
    [1, 0, 1],
    [1, 1, 1],
], dtype=np.int64)


def iter_neighbors(grid: Grid, x: int, y: int):
    """
    Yield (nx, ny) for every in-bounds Moore neighbour of (x, y).

    Raises:
        BoundsError: If (x, y) itself is outside the grid
    """
    if not grid.in_bounds(x, y):
        raise BoundsError(f"Cell ({x}, {y}) outside grid of {grid.width}x{grid.height}")

    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            nx, ny = x + dx, y + dy
            if 0 <= nx < grid.width and 0 <= ny < grid.height:
                yield nx, ny


def is_power_adjacent(grid: Grid, x: int, y: int) -> bool:
    """
    Check if any neighbour of (x, y) is a power line or plant.

    The centre cell is not consulted: a cell never powers itself.
    """
    for nx, ny in iter_neighbors(grid, x, y):
        if grid.zones[ny, nx] in POWER_SOURCE_SYMBOLS:
            return True
    return False


def get_total_adjacent_population(grid: Grid, x: int, y: int) -> int:
    """Sum of population over the in-bounds neighbours of (x, y)"""
    total = 0
    for nx, ny in iter_neighbors(grid, x, y):
        total += int(grid.population[ny, nx])
    return total


def power_adjacency_map(grid: Grid) -> np.ndarray:
    """
    Power adjacency for every cell.

    Returns:
        (height, width) bool array, True where a neighbour is T or P
    """
    sources = np.isin(grid.zones, POWER_SOURCE_SYMBOLS).astype(np.int64)
    counts = convolve(sources, RING_KERNEL, mode='constant', cval=0)
    return counts > 0


def adjacent_population_map(grid: Grid) -> np.ndarray:
    """
    Total neighbour population for every cell.

    Returns:
        (height, width) int64 array
    """
    return convolve(grid.population, RING_KERNEL, mode='constant', cval=0)
