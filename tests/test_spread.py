"""Unit tests for the directional spread model."""

import math

import pytest
from mesa import Model

from wildfire.cell import FuelType, ForestCell
from wildfire.lattice import Lattice
from wildfire.spread import SpreadModel, Weather, bearing
from wildfire.suppression import SuppressionEffect


@pytest.fixture
def windy_lattice():
    """3x3 dry grass, 10 m/s wind blowing east, centre burning."""
    lattice = Lattice(3, 3, weather=Weather(wind_speed=10.0, wind_direction=90.0), seed=1)
    lattice.fill(FuelType.Grass, 1.0, 0.0)
    lattice.ignite_at(1, 1)
    return lattice


def burning_pair(target_pos=(1, 0)):
    model = Model()
    source = ForestCell(model, (0, 0), FuelType.Grass, 1.0, 0.0)
    target = ForestCell(model, target_pos, FuelType.Grass, 1.0, 0.0)
    source.ignite()
    return source, target


class TestBearing:

    @pytest.mark.parametrize(
        "dx, dy, expected",
        [(0, -1, 0.0), (1, 0, 90.0), (0, 1, 180.0), (-1, 0, 270.0), (1, -1, 45.0)],
    )
    def test_compass_bearing(self, dx, dy, expected):
        assert bearing(dx, dy) == pytest.approx(expected)


class TestWindFactor:

    def test_tailwind_and_headwind(self):
        model = SpreadModel()
        weather = Weather(wind_speed=10.0, wind_direction=90.0)
        assert model.wind_factor(1, 0, weather) == pytest.approx(2.0)
        assert model.wind_factor(-1, 0, weather) == 1.0
        # Crosswind neither helps nor hinders
        assert model.wind_factor(0, 1, weather) == pytest.approx(1.0)

    def test_calm(self):
        assert SpreadModel().wind_factor(1, 0, Weather(wind_speed=0.0)) == 1.0


class TestSpreadProbability:

    def test_wind_doubles_downwind_spread(self, windy_lattice):
        east = windy_lattice.spread_probability((1, 1), (2, 1))
        west = windy_lattice.spread_probability((1, 1), (0, 1))
        assert east == pytest.approx(0.31)
        assert west == pytest.approx(0.155)
        assert east / west == pytest.approx(2.0)

    def test_diagonal_is_weaker(self, windy_lattice):
        windy_lattice.wind_speed = 0.0
        orthogonal = windy_lattice.spread_probability((1, 1), (1, 0))
        diagonal = windy_lattice.spread_probability((1, 1), (0, 0))
        assert diagonal == pytest.approx(orthogonal / math.sqrt(2))

    def test_no_spread_from_unburning_source(self, windy_lattice):
        assert windy_lattice.spread_probability((0, 0), (1, 0)) == 0.0

    def test_no_spread_into_unburnable_target(self, windy_lattice):
        windy_lattice.draw_firebreak((2, 0), (2, 2))
        assert windy_lattice.spread_probability((1, 1), (2, 1)) == 0.0
        # Burning cells cannot be re-ignited either
        assert windy_lattice.spread_probability((0, 1), (1, 1)) == 0.0

    def test_off_grid_is_zero(self, windy_lattice):
        assert windy_lattice.spread_probability((1, 1), (3, 1)) == 0.0

    def test_firebreak_blocks_regardless_of_other_factors(self):
        source, target = burning_pair()
        weather = Weather(wind_speed=20.0, wind_direction=90.0)
        assert SpreadModel(base_rate=10.0).spread_probability(
            source, target, weather, SuppressionEffect(is_firebreak=True)
        ) == 0.0

    def test_suppression_dampens_spread(self):
        source, target = burning_pair()
        model = SpreadModel()
        weather = Weather(wind_speed=0.0)
        bare = model.spread_probability(source, target, weather, SuppressionEffect())
        wet = model.spread_probability(source, target, weather, SuppressionEffect(water_level=1.0))
        assert wet == pytest.approx(bare * 0.2)

    def test_full_suppression_stops_spread(self):
        source, target = burning_pair()
        effect = SuppressionEffect(water_level=1.0, retardant_level=1.0)
        assert SpreadModel().spread_probability(source, target, Weather(), effect) == 0.0

    def test_probability_is_clamped(self):
        source, target = burning_pair()
        p = SpreadModel(base_rate=50.0).spread_probability(source, target, Weather(), SuppressionEffect())
        assert p == 1.0
