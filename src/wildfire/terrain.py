"""Terrain generators producing fuel layouts for the lattice."""

import random

import numpy as np

from .cell import FuelType


class Terrain:
    """A (rows, cols) grid of per-cell terrain records.

    Each record is a dict with ``fuel_type``, ``density`` and ``moisture``;
    row ``r`` of the grid is lattice row ``y = r``.
    """

    WATER_CHANCE = 0.05
    ROCK_CHANCE = 0.08
    DENSITY_RANGE = (0.3, 1.0)
    MOISTURE_RANGE = (0.1, 0.6)
    RANDOM_FUELS = (FuelType.Grass, FuelType.Shrub, FuelType.Tree)

    def __init__(self, grid_data: np.ndarray):
        if grid_data.ndim != 2:
            raise ValueError(f"Terrain grid must be 2D. Got shape={grid_data.shape}.")
        self.grid_data = grid_data

    @staticmethod
    def _record(fuel_type: FuelType, density: float, moisture: float) -> dict:
        return {"fuel_type": fuel_type, "density": density, "moisture": moisture}

    @classmethod
    def uniform(
        cls, width: int, height: int, fuel_type: FuelType, density: float, moisture: float
    ) -> "Terrain":
        grid = np.empty((height, width), dtype=object)
        for r in range(height):
            for c in range(width):
                grid[r, c] = cls._record(fuel_type, density, moisture)
        return cls(grid)

    @classmethod
    def random(cls, width: int, height: int, rng: random.Random) -> "Terrain":
        """Mixed grass/shrub/tree cover with scattered water and rock obstacles."""
        grid = np.empty((height, width), dtype=object)
        for r in range(height):
            for c in range(width):
                if rng.random() < cls.WATER_CHANCE:
                    fuel_type = FuelType.Water
                elif rng.random() < cls.ROCK_CHANCE:
                    fuel_type = FuelType.Rock
                else:
                    fuel_type = cls.RANDOM_FUELS[rng.randint(0, 2)]
                density = rng.uniform(*cls.DENSITY_RANGE)
                moisture = rng.uniform(*cls.MOISTURE_RANGE)
                grid[r, c] = cls._record(fuel_type, density, moisture)
        return cls(grid)

    @classmethod
    def patterned(cls, width: int, height: int) -> "Terrain":
        """Grassland crossed by a diagonal river, a forest patch to the
        north-east and shrubland to the south-west."""
        grid = np.empty((height, width), dtype=object)
        for y in range(height):
            for x in range(width):
                if abs(x - y) < 2:
                    record = cls._record(FuelType.Water, 0.7, 0.3)
                elif x > width // 2 and y < height // 2:
                    record = cls._record(FuelType.Tree, 0.9, 0.2)
                elif x < width // 3 and y > 2 * height // 3:
                    record = cls._record(FuelType.Shrub, 0.8, 0.4)
                else:
                    record = cls._record(FuelType.Grass, 0.7, 0.3)
                grid[y, x] = record
        return cls(grid)

    def get_grid(self) -> np.ndarray:
        return self.grid_data

    def get_dimensions(self) -> tuple[int, int]:
        """Keep in mind, that np.array.shape is (rows, cols)
        and the lattice is (width, height)"""
        return self.grid_data.shape
