"""
Pollution diffusion from industrial sources.

The field is rebuilt from scratch every step from the post-growth grid:
each active industrial cell adds its population to itself and
population - 1 (floored at 0) to each in-bounds neighbour. Contributions
from several sources add up.
"""

import numpy as np
from scipy.ndimage import convolve

from .grid import Grid
from .data_types import ZoneType
from .adjacency import RING_KERNEL
from .constants import POLLUTION_DECAY_PER_RING


def pollution_sources(grid: Grid) -> np.ndarray:
    """
    Source strength per cell.

    Returns:
        (height, width) int64 array: population of active industrial cells, else 0
    """
    industrial = grid.zone_mask(ZoneType.INDUSTRIAL) & (grid.population > 0)
    return np.where(industrial, grid.population, 0).astype(np.int64)


def compute_pollution_field(grid: Grid) -> np.ndarray:
    """
    Compute this step's pollution field without touching the grid.

    Returns:
        (height, width) int64 array
    """
    sources = pollution_sources(grid)
    ring_amount = np.maximum(sources - POLLUTION_DECAY_PER_RING, 0)

    # Zero padding drops contributions that would fall outside the grid
    spread = convolve(ring_amount, RING_KERNEL, mode='constant', cval=0)
    return sources + spread


def spread_pollution(grid: Grid) -> bool:
    """
    Replace the grid's pollution field with a freshly computed one.

    Returns:
        True if at least one industrial source was active, whether or not
        any value actually changed
    """
    field = compute_pollution_field(grid)
    grid.set_pollution_field(field)
    return bool(np.any(pollution_sources(grid) > 0))
