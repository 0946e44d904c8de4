import math

import numpy as np
import pytest

from world.catalog import IconCatalog, Item
from world.errors import OutOfBounds
from world.grid import WorldGrid
from world.icons import PALETTES


@pytest.fixture
def pool() -> list[Item]:
    return list(IconCatalog(rng=np.random.default_rng(0)).select_weighted({"friends": 4, "inventory": 4}))


@pytest.mark.parametrize("coord", [(-1, 0), (50, 0), (0, 50), (0, -1), (1, 2, 3), (1,)])
def test_get_at_out_of_bounds(coord) -> None:
    grid = WorldGrid((50, 50))
    with pytest.raises(OutOfBounds):
        grid.get_at(coord)


def test_out_of_bounds_is_an_index_error() -> None:
    with pytest.raises(IndexError):
        WorldGrid((5, 5, 2)).get_at((0, 0, 2))


def test_edges_are_readable() -> None:
    grid = WorldGrid((50, 50))
    assert grid.get_at((0, 0)).empty
    assert grid.get_at((49, 49)).empty


def test_set_at_only_during_setup() -> None:
    grid = WorldGrid((10, 10))
    star = Item("Star")
    assert grid.set_at((3, 4), star, "text-red-500", "bg-red-900")
    cell = grid.get_at((3, 4))
    assert cell.content == star
    assert cell.active
    assert cell.color_tag == "text-red-500"
    assert cell.background_tag == "bg-red-900"

    grid.close_setup()
    assert not grid.set_at((3, 4), None)
    assert not grid.set_at((5, 5), star, "text-blue-500")
    assert grid.get_at((3, 4)).content == star
    assert grid.get_at((5, 5)).empty


def test_clearing_a_cell_drops_its_tags() -> None:
    grid = WorldGrid((10, 10))
    assert grid.set_at((3, 4), Item("Star"), "text-red-500", "bg-red-900")
    assert grid.set_at((3, 4), None, "text-red-500", "bg-red-900")
    cell = grid.get_at((3, 4))
    assert cell.empty
    assert not cell.active
    assert cell.color_tag is None
    assert cell.background_tag is None


def test_set_at_defaults_background_to_palette() -> None:
    grid = WorldGrid((10, 10))
    assert grid.set_at((1, 1), Item("Star"), "text-red-500")
    assert grid.get_at((1, 1)).background_tag == grid.palette.background_colors[0]


def test_set_at_out_of_bounds_during_setup_raises() -> None:
    with pytest.raises(OutOfBounds):
        WorldGrid((10, 10)).set_at((10, 0), Item("Star"))


def test_initialize_extremes(pool) -> None:
    grid = WorldGrid((8, 6))
    assert grid.initialize(0.0, np.random.default_rng(1), pool) == 0
    assert grid.active_count() == 0
    assert grid.initialize(1.0, np.random.default_rng(1), pool) == 48
    assert grid.active_count() == 48


def test_initialize_density_is_independent_per_cell(pool) -> None:
    grid = WorldGrid((50, 50))
    n = grid.initialize(0.33, np.random.default_rng(1234), pool)
    mean = 2500 * 0.33
    std = math.sqrt(2500 * 0.33 * 0.67)
    assert abs(n - mean) <= 3 * std
    assert grid.active_count() == n


def test_active_iff_content(pool) -> None:
    grid = WorldGrid((20, 20))
    grid.initialize(0.5, np.random.default_rng(3), pool)
    has_content = np.vectorize(lambda c: c is not None, otypes=[bool])(grid.content)
    assert np.array_equal(has_content, grid.active)
    for x, y in np.argwhere(grid.active)[:10]:
        cell = grid.get_at((x, y))
        assert cell.content in pool
        assert cell.color_tag in PALETTES["explore"].icon_colors
        assert cell.opacity == 1.0


def test_same_seed_same_layout(pool) -> None:
    a, b = WorldGrid((30, 30)), WorldGrid((30, 30))
    a.initialize(0.4, np.random.default_rng(9), pool)
    b.initialize(0.4, np.random.default_rng(9), pool)
    assert np.array_equal(a.active, b.active)
    assert list(a.content.ravel()) == list(b.content.ravel())


def test_deeper_layers_are_sparser(pool) -> None:
    grid = WorldGrid((20, 20, 10))
    prob = grid.occupancy_probability(1.0)
    assert prob[0, 0, 0] == pytest.approx(1.0)
    assert prob[0, 0, 5] == pytest.approx(0.5)
    assert prob[0, 0, 9] == pytest.approx(0.1)
    grid.initialize(1.0, np.random.default_rng(5), pool)
    per_layer = grid.active.sum(axis=(0, 1))
    assert per_layer[0] == 400
    assert per_layer[9] < 120


def test_depth_floor_applies_to_deep_layers() -> None:
    prob = WorldGrid((2, 2, 20)).occupancy_probability(0.5)
    assert prob[0, 0, 19] == pytest.approx(0.05)


def test_invalid_arguments(pool) -> None:
    with pytest.raises(ValueError):
        WorldGrid((0, 5))
    with pytest.raises(ValueError):
        WorldGrid((5,))
    with pytest.raises(ValueError):
        WorldGrid((5, 5)).initialize(1.5, np.random.default_rng(0), pool)
    with pytest.raises(ValueError):
        WorldGrid((5, 5)).initialize(0.5, np.random.default_rng(0), [])
