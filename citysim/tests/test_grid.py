"""
Tests for grid storage, bounds checking, snapshots and area analysis.
"""

import numpy as np
import pytest

from citysim.grid import Grid, BoundsError
from citysim.data_types import ZoneType, Cell
from citysim.tests.helpers import make_grid


def test_new_grid_is_empty():
    grid = Grid(4, 3)

    assert grid.shape == (3, 4)
    assert grid.available_workers == 0
    assert grid.available_goods == 0
    for y in range(3):
        for x in range(4):
            assert grid.get_cell(x, y) == Cell(ZoneType.EMPTY, 0, 0)


def test_invalid_dimensions():
    with pytest.raises(ValueError):
        Grid(0, 5)
    with pytest.raises(ValueError):
        Grid(5, -1)


def test_cell_access_is_indexed_x_then_y():
    grid = Grid(3, 2)
    grid.set_zone(2, 1, ZoneType.INDUSTRIAL)
    grid.set_population(2, 1, 1)

    assert grid.get_cell(2, 1).zone_type is ZoneType.INDUSTRIAL
    assert grid.zones[1, 2] == 'I'
    assert grid.population[1, 2] == 1
    assert grid.population_at(2, 1) == 1
    assert grid.zone_at(1, 1) is ZoneType.EMPTY


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (4, 0), (0, 3), (10, 10)])
def test_out_of_range_access_raises(x, y):
    grid = Grid(4, 3)

    with pytest.raises(BoundsError):
        grid.get_cell(x, y)
    with pytest.raises(BoundsError):
        grid.set_zone(x, y, ZoneType.RESIDENTIAL)
    with pytest.raises(BoundsError):
        grid.set_population(x, y, 1)


def test_bounds_error_is_index_error():
    assert issubclass(BoundsError, IndexError)


def test_negative_population_rejected():
    grid = Grid(2, 2)
    with pytest.raises(ValueError):
        grid.set_population(0, 0, -1)


def test_pollution_field_shape_checked():
    grid = Grid(3, 2)
    with pytest.raises(ValueError):
        grid.set_pollution_field(np.zeros((3, 2), dtype=np.int64))

    grid.set_pollution_field(np.full((2, 3), 4, dtype=np.int64))
    assert grid.total_pollution() == 24


def test_snapshot_is_detached_and_read_only():
    grid = make_grid(["RT", "--"], population=[[2, 0], [0, 0]], workers=3, goods=1)
    snap = grid.snapshot()

    grid.set_population(0, 0, 4)
    grid.available_workers = 10

    assert snap.get_cell(0, 0).population == 2
    assert snap.available_workers == 3
    assert snap.available_goods == 1
    assert not snap.population.flags.writeable
    with pytest.raises(ValueError):
        snap.population[0, 0] = 1
    with pytest.raises(BoundsError):
        snap.get_cell(2, 0)


def test_snapshot_same_cells():
    grid = make_grid(["RT", "I-"])
    first = grid.snapshot()
    assert first.same_cells(grid.snapshot())

    grid.pollution[1, 0] = 1
    assert not first.same_cells(grid.snapshot())

    # Resource counters are not part of cell equality
    other = make_grid(["RT", "I-"], workers=5)
    assert first.same_cells(other.snapshot())


def test_copy_is_independent():
    grid = make_grid(["RT"], population=[[1, 0]], workers=2, goods=1)
    clone = grid.copy()
    clone.set_population(0, 0, 3)
    clone.available_goods = 0

    assert grid.population_at(0, 0) == 1
    assert grid.available_goods == 1
    assert clone.snapshot().to_dict()['zones'] == [['R', 'T']]


def test_analyze_area_powered_residential_block():
    grid = make_grid(
        [
            "TTTTT",
            "TRRRT",
            "TRRRT",
            "TRRRT",
            "TTTTT",
        ],
        population=[
            [0, 0, 0, 0, 0],
            [0, 1, 1, 1, 0],
            [0, 1, 1, 1, 0],
            [0, 1, 1, 1, 0],
            [0, 0, 0, 0, 0],
        ],
    )

    area = grid.analyze_area(1, 1, 3, 3)
    assert area.population == 9
    assert area.pollution == 0
    assert (area.x1, area.y1, area.x2, area.y2) == (1, 1, 3, 3)

    single = grid.analyze_area(2, 2, 2, 2)
    assert single.population == 1

    with pytest.raises(BoundsError):
        grid.analyze_area(1, 1, 5, 3)


def test_analyze_area_counts_pollution():
    grid = Grid(3, 3)
    grid.pollution[:, :] = np.arange(9).reshape(3, 3)

    assert grid.analyze_area(0, 0, 2, 2).pollution == 36
    assert grid.analyze_area(1, 0, 2, 1).pollution == 1 + 2 + 4 + 5


@pytest.mark.parametrize("rect", [
    (2, 0, 1, 1),   # inverted x
    (0, 2, 1, 1),   # inverted y
    (-1, 0, 1, 1),
    (0, 0, 1, 3),
])
def test_analyze_area_rejects_bad_rectangles(rect):
    grid = Grid(3, 3)
    with pytest.raises(BoundsError):
        grid.analyze_area(*rect)
