"""
Growth resolution for one simulation step.

Three phases, mirroring the two-phase tick contract of the kernel:

Phase A: Collection (Read-Only)
    Every cell is tested against its zone's eligibility predicate using the
    grid and resource counters as they stand at the start of the step.
    Adjacent population is captured here, so ordering never sees growth
    applied later in the same step.

Phase B: Ordering
    Candidates are sorted by a total order (zone priority, population,
    adjacent population, y, x), so the outcome is reproducible.

Phase C: Application (Write)
    Candidates are applied in order. Each re-checks its predicate against
    the current state, because earlier growth has already moved the worker
    and goods counters.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from .grid import Grid
from .data_types import ZoneType
from .adjacency import is_power_adjacent, power_adjacency_map, adjacent_population_map
from .constants import (
    RESIDENTIAL_MAX_POPULATION,
    INDUSTRIAL_WORKER_COST,
    COMMERCIAL_WORKER_COST,
    COMMERCIAL_GOODS_COST,
    RESIDENTIAL_WORKER_YIELD,
    ZONE_GROWTH_PRIORITY,
)


@dataclass(frozen=True)
class GrowthCandidate:
    """
    A cell eligible to grow at the start of a step.

    Attributes:
        x, y: Cell coordinates
        zone_type: RESIDENTIAL, INDUSTRIAL or COMMERCIAL
        population: Population at collection time
        adjacent_population: Neighbour population at collection time
    """
    x: int
    y: int
    zone_type: ZoneType
    population: int
    adjacent_population: int

    def sort_key(self) -> Tuple[int, int, int, int, int]:
        """Ascending key; the first candidate in sorted order grows first"""
        return (
            -ZONE_GROWTH_PRIORITY[self.zone_type.symbol],
            -self.population,
            -self.adjacent_population,
            self.y,
            self.x,
        )


@dataclass
class GrowthReport:
    """Result of resolving growth for one step"""
    candidates: List[GrowthCandidate] = field(default_factory=list)
    applied: List[GrowthCandidate] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return len(self.applied) > 0


def _zone_predicate(zone: ZoneType, population: int, workers: int, goods: int) -> bool:
    """Zone/population/resource part of eligibility (power checked separately)"""
    if zone is ZoneType.RESIDENTIAL:
        return population < RESIDENTIAL_MAX_POPULATION
    if zone is ZoneType.INDUSTRIAL:
        return population == 0 and workers >= INDUSTRIAL_WORKER_COST
    if zone is ZoneType.COMMERCIAL:
        return (population == 0
                and workers >= COMMERCIAL_WORKER_COST
                and goods >= COMMERCIAL_GOODS_COST)
    return False


def is_eligible(grid: Grid, x: int, y: int) -> bool:
    """
    Check whether cell (x, y) may grow given the grid's current state.

    Raises:
        BoundsError: If (x, y) is outside the grid
    """
    cell = grid.get_cell(x, y)
    if not _zone_predicate(cell.zone_type, cell.population,
                           grid.available_workers, grid.available_goods):
        return False
    return is_power_adjacent(grid, x, y)


def collect_candidates(grid: Grid) -> List[GrowthCandidate]:
    """
    Phase A: gather every eligible cell from the pre-step grid.

    Returns:
        Candidates in row-major scan order (unsorted)
    """
    powered = power_adjacency_map(grid)
    adjacent_pop = adjacent_population_map(grid)
    workers = grid.available_workers
    goods = grid.available_goods

    candidates = []
    for y in range(grid.height):
        for x in range(grid.width):
            if not powered[y, x]:
                continue

            zone = ZoneType(str(grid.zones[y, x]))
            if zone.symbol not in ZONE_GROWTH_PRIORITY:
                continue

            population = int(grid.population[y, x])
            if not _zone_predicate(zone, population, workers, goods):
                continue

            candidates.append(GrowthCandidate(
                x=x,
                y=y,
                zone_type=zone,
                population=population,
                adjacent_population=int(adjacent_pop[y, x]),
            ))

    return candidates


def order_candidates(candidates: List[GrowthCandidate]) -> List[GrowthCandidate]:
    """Phase B: sort candidates into application order"""
    return sorted(candidates, key=GrowthCandidate.sort_key)


def apply_growth(grid: Grid, candidate: GrowthCandidate) -> bool:
    """
    Phase C: grow one candidate if it is still eligible.

    Returns:
        True if the cell grew
    """
    x, y = candidate.x, candidate.y
    if not is_eligible(grid, x, y):
        return False

    zone = candidate.zone_type
    new_population = int(grid.population[y, x]) + 1
    grid.population[y, x] = new_population

    if zone is ZoneType.RESIDENTIAL:
        grid.available_workers += RESIDENTIAL_WORKER_YIELD
    elif zone is ZoneType.INDUSTRIAL:
        grid.available_workers -= INDUSTRIAL_WORKER_COST
        grid.available_goods += new_population
    elif zone is ZoneType.COMMERCIAL:
        grid.available_workers -= COMMERCIAL_WORKER_COST
        grid.available_goods -= COMMERCIAL_GOODS_COST

    assert grid.available_workers >= 0 and grid.available_goods >= 0, \
        f"Resources went negative: workers={grid.available_workers}, goods={grid.available_goods}"

    return True


def resolve_growth_report(grid: Grid) -> GrowthReport:
    """
    Run collection, ordering and application for one step.

    Mutates grid population and resource counters in place.
    """
    ordered = order_candidates(collect_candidates(grid))
    report = GrowthReport(candidates=ordered)

    for candidate in ordered:
        if apply_growth(grid, candidate):
            report.applied.append(candidate)

    return report


def resolve_growth(grid: Grid) -> bool:
    """Resolve growth for one step. Returns True if any cell grew."""
    return resolve_growth_report(grid).changed
