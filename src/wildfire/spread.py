"""Directional fire spread between neighbouring cells."""

import math
from dataclasses import dataclass

from .cell import CellState, ForestCell
from .suppression import SuppressionEffect


@dataclass
class Weather:
    """Ambient conditions shared by every cell of one lattice.

    ``wind_direction`` is a compass bearing in degrees (0 = north, i.e.
    decreasing y; 90 = east, increasing x) giving the direction the fire is
    pushed towards.
    """

    wind_speed: float = 5.0
    wind_direction: float = 90.0
    ambient_temp: float = 25.0
    humidity: float = 0.4


def bearing(dx: float, dy: float) -> float:
    """Compass bearing in degrees of a lattice displacement (y grows southward)."""
    return math.degrees(math.atan2(dx, -dy)) % 360.0


class SpreadModel:
    """Computes the per-unit-time spread rate from a burning cell to a neighbour.

    The rate composes five multiplicative factors (fuel, wind, distance,
    source temperature, suppression) and is clamped to [0, 1]. It is a rate,
    not a per-tick probability: callers sample against ``p * dt``.
    """

    def __init__(
        self,
        base_rate: float = 0.1,
        wind_gain: float = 0.1,
        temperature_coupling: float = 0.2,
    ):
        self.base_rate = base_rate
        self.wind_gain = wind_gain
        self.temperature_coupling = temperature_coupling

    def wind_factor(self, dx: int, dy: int, weather: Weather) -> float:
        '''Wind only accelerates spread along its own direction.'''
        angle = bearing(dx, dy)
        wind_effect = math.cos(math.radians(angle - weather.wind_direction))
        if wind_effect <= 0:
            return 1.0
        return 1.0 + weather.wind_speed * wind_effect * self.wind_gain

    def spread_probability(
        self,
        source: ForestCell,
        target: ForestCell,
        weather: Weather,
        suppression: SuppressionEffect,
    ) -> float:
        if source.state != CellState.Burning or not target.can_burn():
            return 0.0
        # Firebreaks block spread whatever the other factors say
        if suppression.is_firebreak:
            return 0.0

        dx = target.pos[0] - source.pos[0]
        dy = target.pos[1] - source.pos[1]

        p = target.ignition_probability() * self.base_rate
        p *= self.wind_factor(dx, dy, weather)
        p /= math.hypot(dx, dy)

        temp_effect = (source.temperature - weather.ambient_temp) / 100.0
        p *= 1.0 + temp_effect * self.temperature_coupling

        p *= 1.0 - suppression.modifier
        return min(1.0, max(0.0, p))
