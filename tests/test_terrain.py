"""Unit tests for terrain generators."""

import random

import numpy as np
import pytest

from wildfire.cell import FuelType
from wildfire.terrain import Terrain


def test_uniform_terrain_shape():
    terrain = Terrain.uniform(6, 4, FuelType.Shrub, 0.7, 0.2)
    assert terrain.get_dimensions() == (4, 6)
    record = terrain.get_grid()[3, 5]
    assert record == {"fuel_type": FuelType.Shrub, "density": 0.7, "moisture": 0.2}


def test_random_terrain_ranges():
    grid = Terrain.random(30, 30, random.Random(0)).get_grid()
    kinds = set()
    for record in grid.flat:
        kinds.add(record["fuel_type"])
        assert 0.3 <= record["density"] <= 1.0
        assert 0.1 <= record["moisture"] <= 0.6
    # 900 draws are plenty to see every kind
    assert kinds == set(FuelType)


def test_random_terrain_is_reproducible():
    a = Terrain.random(8, 8, random.Random(42)).get_grid()
    b = Terrain.random(8, 8, random.Random(42)).get_grid()
    assert list(a.flat) == list(b.flat)


def test_patterned_river_follows_diagonal():
    grid = Terrain.patterned(20, 20).get_grid()
    for i in range(20):
        assert grid[i, i]["fuel_type"] == FuelType.Water


def test_terrain_must_be_2d():
    with pytest.raises(ValueError):
        Terrain(np.empty((2, 2, 2), dtype=object))
