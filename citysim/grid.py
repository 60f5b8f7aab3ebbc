"""
City grid storage.

The grid owns three (height, width) arrays (zone symbols, population,
pollution) indexed [y, x], plus the shared worker and goods counters.
Out-of-range access is a caller error and raises BoundsError; clamping
belongs to the neighbourhood queries in adjacency.py.
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict, Any

from .data_types import Cell, ZoneType, AreaAnalysis
from .constants import SYMBOL_EMPTY


class BoundsError(IndexError):
    """Raised when a cell or rectangle lies outside the grid"""
    pass


@dataclass(frozen=True, eq=False)
class GridSnapshot:
    """
    Immutable copy of grid state taken at one point in time.

    Arrays are copies with the writeable flag cleared, so a snapshot can be
    handed to display code without exposing the live grid.
    """
    width: int
    height: int
    zones: np.ndarray
    population: np.ndarray
    pollution: np.ndarray
    available_workers: int
    available_goods: int

    def same_cells(self, other: 'GridSnapshot') -> bool:
        """True if every cell has the same zone, population and pollution"""
        return (
            np.array_equal(self.zones, other.zones)
            and np.array_equal(self.population, other.population)
            and np.array_equal(self.pollution, other.pollution)
        )

    def get_cell(self, x: int, y: int) -> Cell:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise BoundsError(f"Cell ({x}, {y}) outside {self.width}x{self.height} snapshot")
        return Cell(
            zone_type=ZoneType(str(self.zones[y, x])),
            population=int(self.population[y, x]),
            pollution=int(self.pollution[y, x]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'width': self.width,
            'height': self.height,
            'zones': self.zones.tolist(),
            'population': self.population.tolist(),
            'pollution': self.pollution.tolist(),
            'available_workers': self.available_workers,
            'available_goods': self.available_goods,
        }


class Grid:
    """
    Fixed-size 2D region of zoned cells with global resource counters.

    Attributes:
        width: Number of columns (x)
        height: Number of rows (y)
        zones: (height, width) array of zone symbols
        population: (height, width) int64 array
        pollution: (height, width) int64 array, recomputed every step
        available_workers: Shared worker pool (mutated by growth only)
        available_goods: Shared goods pool (mutated by growth only)
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")

        self.width: int = width
        self.height: int = height

        self.zones: np.ndarray = np.full((height, width), SYMBOL_EMPTY, dtype='<U1')
        self.population: np.ndarray = np.zeros((height, width), dtype=np.int64)
        self.pollution: np.ndarray = np.zeros((height, width), dtype=np.int64)

        self.available_workers: int = 0
        self.available_goods: int = 0

    @property
    def shape(self) -> tuple:
        return (self.height, self.width)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check_bounds(self, x: int, y: int):
        if not self.in_bounds(x, y):
            raise BoundsError(
                f"Cell ({x}, {y}) outside grid of {self.width}x{self.height}"
            )

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def get_cell(self, x: int, y: int) -> Cell:
        self._check_bounds(x, y)
        return Cell(
            zone_type=ZoneType(str(self.zones[y, x])),
            population=int(self.population[y, x]),
            pollution=int(self.pollution[y, x]),
        )

    def zone_at(self, x: int, y: int) -> ZoneType:
        self._check_bounds(x, y)
        return ZoneType(str(self.zones[y, x]))

    def population_at(self, x: int, y: int) -> int:
        self._check_bounds(x, y)
        return int(self.population[y, x])

    def set_zone(self, x: int, y: int, zone: ZoneType):
        self._check_bounds(x, y)
        self.zones[y, x] = zone.symbol

    def set_population(self, x: int, y: int, population: int):
        self._check_bounds(x, y)
        if population < 0:
            raise ValueError(f"Population must be >= 0, got {population}")
        self.population[y, x] = population

    def set_pollution_field(self, field: np.ndarray):
        """
        Replace the whole pollution field.

        Args:
            field: (height, width) integer array
        """
        if field.shape != self.shape:
            raise ValueError(f"Pollution field shape {field.shape} != grid shape {self.shape}")
        self.pollution[:, :] = field

    # ------------------------------------------------------------------
    # Snapshots and aggregates
    # ------------------------------------------------------------------

    def snapshot(self) -> GridSnapshot:
        zones = self.zones.copy()
        population = self.population.copy()
        pollution = self.pollution.copy()
        for arr in (zones, population, pollution):
            arr.flags.writeable = False

        return GridSnapshot(
            width=self.width,
            height=self.height,
            zones=zones,
            population=population,
            pollution=pollution,
            available_workers=self.available_workers,
            available_goods=self.available_goods,
        )

    def copy(self) -> 'Grid':
        clone = Grid(self.width, self.height)
        clone.zones[:, :] = self.zones
        clone.population[:, :] = self.population
        clone.pollution[:, :] = self.pollution
        clone.available_workers = self.available_workers
        clone.available_goods = self.available_goods
        return clone

    def analyze_area(self, x1: int, y1: int, x2: int, y2: int) -> AreaAnalysis:
        """
        Sum population and pollution over an inclusive rectangle.

        Args:
            x1, y1: Top-left corner
            x2, y2: Bottom-right corner (inclusive)

        Returns:
            AreaAnalysis with both totals

        Raises:
            BoundsError: If a corner is outside the grid or the rectangle is inverted
        """
        if not (self.in_bounds(x1, y1) and self.in_bounds(x2, y2)):
            raise BoundsError(
                f"Area ({x1}, {y1})-({x2}, {y2}) outside grid of {self.width}x{self.height}"
            )
        if x1 > x2 or y1 > y2:
            raise BoundsError(f"Area ({x1}, {y1})-({x2}, {y2}) is inverted")

        return AreaAnalysis(
            x1=x1, y1=y1, x2=x2, y2=y2,
            population=int(self.population[y1:y2 + 1, x1:x2 + 1].sum()),
            pollution=int(self.pollution[y1:y2 + 1, x1:x2 + 1].sum()),
        )

    def total_population(self) -> int:
        return int(self.population.sum())

    def total_pollution(self) -> int:
        return int(self.pollution.sum())

    def zone_mask(self, zone: ZoneType) -> np.ndarray:
        """Boolean (height, width) mask of cells with the given zone"""
        return self.zones == zone.symbol

    def __repr__(self) -> str:
        return (f"Grid({self.width}x{self.height}, workers={self.available_workers}, "
                f"goods={self.available_goods})")
