"""Unit tests for the Pygame grid renderer."""

import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
pygame = pytest.importorskip("pygame")

from visualization import (  # noqa: E402
    BURNED_COLOR,
    FIREBREAK_COLOR,
    GRASS_COLOR,
    RETARDANT_COLOR,
    WATER_COLOR,
    WATER_DROP_COLOR,
    GridRenderer,
)
from wildfire.cell import FuelType  # noqa: E402
from wildfire.crews import CrewType, HumanFactorManager  # noqa: E402
from wildfire.lattice import Lattice  # noqa: E402


@pytest.fixture
def lattice():
    lattice = Lattice(6, 4, seed=0)
    lattice.fill(FuelType.Grass, 1.0, 0.0)
    return lattice


class TestGridRenderer:

    def test_fuel_colors(self, lattice):
        renderer = GridRenderer(cell_size=4)
        assert renderer.get_cell_color(lattice, 0, 0) == GRASS_COLOR
        lattice.fill(FuelType.Water, 1.0, 0.0)
        assert renderer.get_cell_color(lattice, 0, 0) == WATER_COLOR

    def test_overlay_colors(self, lattice):
        renderer = GridRenderer(cell_size=4)
        lattice.apply_water_drop(1, 1, 0, 1.0, 100.0)
        lattice.apply_retardant(2, 2, 0, 1.0, 100.0)
        lattice.draw_firebreak((5, 0), (5, 3))
        assert renderer.get_cell_color(lattice, 1, 1) == WATER_DROP_COLOR
        assert renderer.get_cell_color(lattice, 2, 2) == RETARDANT_COLOR
        assert renderer.get_cell_color(lattice, 5, 2) == FIREBREAK_COLOR

    def test_fire_colors(self, lattice):
        renderer = GridRenderer(cell_size=4)
        lattice.ignite_at(3, 1)
        red, green, blue = renderer.get_cell_color(lattice, 3, 1)
        assert red > 200 and green == 0 and blue == 0

        for _ in range(40):
            lattice.tick(1.0)
        assert renderer.get_cell_color(lattice, 3, 1) == BURNED_COLOR

    def test_draw_layers(self, lattice):
        pygame.font.init()
        renderer = GridRenderer(cell_size=4)
        manager = HumanFactorManager()
        manager.add_crew("Alpha", CrewType.GroundCrew, 2, 2)
        screen = pygame.Surface((6 * 4, 4 * 4 + 40))

        renderer.draw_base(screen, lattice)
        assert tuple(screen.get_at((1, 1)))[:3] == GRASS_COLOR

        renderer.draw_crews(screen, manager)
        renderer.draw_status(screen, ["t=0.0s"], top=16)
        pygame.font.quit()
