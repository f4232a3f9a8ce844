"""Scenario configuration and the built-in scenario presets."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Literal

from .crews import CrewType

logger = logging.getLogger(__name__)

TerrainKind = Literal["grassland", "forest", "mixed", "patterned"]

MIN_SIZE = 10
MAX_SIZE = 100
MAX_WIND_SPEED = 20.0
MAX_AMBIENT_TEMP = 50.0

DEFAULT_TIME_STEP = 0.1
DEFAULT_BUDGET = 100000.0
DEFAULT_DURATION = 300.0


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass
class WeatherConfig:
    """Ambient conditions; values are clamped into their supported ranges."""

    wind_speed: float = 5.0
    wind_direction: float = 90.0
    ambient_temp: float = 25.0
    humidity: float = 0.4

    def __post_init__(self) -> None:
        self.wind_speed = _clamp(self.wind_speed, 0.0, MAX_WIND_SPEED)
        self.wind_direction = self.wind_direction % 360.0
        self.ambient_temp = _clamp(self.ambient_temp, 0.0, MAX_AMBIENT_TEMP)
        self.humidity = _clamp(self.humidity, 0.0, 1.0)


@dataclass
class CrewConfig:
    name: str
    type: CrewType
    x: int
    y: int


@dataclass
class ZoneConfig:
    name: str
    x: int
    y: int
    radius: int
    population: int


@dataclass
class SuppressionOrder:
    """Order issued at the start of a run, relative to the ignition point."""

    crew_index: int
    kind: str
    dx: int
    dy: int
    radius: int


@dataclass
class ScenarioConfig:
    """Everything needed to build a :class:`~wildfire.simulation.FireSimulation`."""

    name: str
    width: int = 40
    height: int = 20
    terrain: TerrainKind = "grassland"
    weather: WeatherConfig = field(default_factory=WeatherConfig)
    crews: list[CrewConfig] = field(default_factory=list)
    zones: list[ZoneConfig] = field(default_factory=list)
    orders: list[SuppressionOrder] = field(default_factory=list)
    ignitions: list[tuple[int, int]] | None = None  # None = lattice centre
    evacuate: bool = True
    time_step: float = DEFAULT_TIME_STEP
    budget: float = DEFAULT_BUDGET
    duration: float = DEFAULT_DURATION

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            logger.error(f"Invalid lattice size {self.width}x{self.height} for scenario {self.name}")
            raise ValueError(f"Lattice size must be positive, got {self.width}x{self.height}")
        if self.time_step <= 0:
            raise ValueError(f"time_step must be positive, got {self.time_step}")
        if self.terrain not in ("grassland", "forest", "mixed", "patterned"):
            raise ValueError(f"Unknown terrain kind: {self.terrain}")

    @classmethod
    def custom(
        cls,
        width: int,
        height: int,
        terrain: TerrainKind = "mixed",
        weather: WeatherConfig | None = None,
        ignitions: list[tuple[int, int]] | None = None,
    ) -> ScenarioConfig:
        """User-defined scenario: size clamped to 10-100, at most 5 ignition
        points, each clamped onto the lattice."""
        width = int(_clamp(width, MIN_SIZE, MAX_SIZE))
        height = int(_clamp(height, MIN_SIZE, MAX_SIZE))
        points = None
        if ignitions:
            points = [
                (int(_clamp(x, 0, width - 1)), int(_clamp(y, 0, height - 1)))
                for x, y in ignitions[:5]
            ]
        return cls(
            name="custom",
            width=width,
            height=height,
            terrain=terrain,
            weather=weather or WeatherConfig(),
            ignitions=points,
            evacuate=False,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScenarioConfig:
        data = dict(data)
        if "weather" in data and isinstance(data["weather"], dict):
            data["weather"] = WeatherConfig(**data["weather"])
        if "crews" in data:
            data["crews"] = [
                CrewConfig(c["name"], CrewType(c["type"]), c["x"], c["y"]) for c in data["crews"]
            ]
        if "zones" in data:
            data["zones"] = [ZoneConfig(**z) for z in data["zones"]]
        if "orders" in data:
            data["orders"] = [SuppressionOrder(**o) for o in data["orders"]]
        if data.get("ignitions") is not None:
            data["ignitions"] = [tuple(p) for p in data["ignitions"]]
        return cls(**data)


# Default suppression plan: water drop up-left of the fire, retardant down-right
_DEFAULT_ORDERS = [
    SuppressionOrder(crew_index=0, kind="water", dx=-3, dy=-3, radius=2),
    SuppressionOrder(crew_index=1, kind="retardant", dx=5, dy=5, radius=3),
]

SCENARIOS: dict[str, ScenarioConfig] = {
    "grassland": ScenarioConfig(
        name="grassland",
        width=40,
        height=20,
        terrain="grassland",
        weather=WeatherConfig(wind_speed=8.0, wind_direction=45.0),
        crews=[
            CrewConfig("Alpha", CrewType.GroundCrew, 5, 5),
            CrewConfig("Bravo", CrewType.WaterTanker, 35, 15),
        ],
        orders=list(_DEFAULT_ORDERS),
    ),
    "forest": ScenarioConfig(
        name="forest",
        width=40,
        height=20,
        terrain="forest",
        weather=WeatherConfig(wind_speed=3.0, wind_direction=90.0, humidity=0.6),
        crews=[
            CrewConfig("Charlie", CrewType.GroundCrew, 5, 5),
            CrewConfig("Delta", CrewType.AirTanker, 35, 15),
            CrewConfig("Echo", CrewType.Helicopter, 20, 2),
        ],
        orders=list(_DEFAULT_ORDERS),
    ),
    "mixed": ScenarioConfig(
        name="mixed",
        width=50,
        height=25,
        terrain="mixed",
        weather=WeatherConfig(wind_speed=12.0, wind_direction=135.0),
        crews=[
            CrewConfig("Foxtrot", CrewType.GroundCrew, 3, 3),
            CrewConfig("Golf", CrewType.WaterTanker, 25, 12),
            CrewConfig("Hotel", CrewType.AirTanker, 45, 20),
        ],
        zones=[
            ZoneConfig("Residential Area", 10, 10, 5, 250),
            ZoneConfig("Camp Ground", 40, 15, 3, 80),
        ],
        orders=list(_DEFAULT_ORDERS),
    ),
    "demo": ScenarioConfig(
        name="demo",
        width=40,
        height=25,
        terrain="mixed",
        weather=WeatherConfig(wind_speed=10.0, wind_direction=45.0, humidity=0.3),
        crews=[
            CrewConfig("Alpha Team", CrewType.GroundCrew, 10, 5),
            CrewConfig("Water-1", CrewType.WaterTanker, 30, 5),
            CrewConfig("Air-1", CrewType.AirTanker, 15, 2),
            CrewConfig("Rescue-1", CrewType.Helicopter, 5, 15),
        ],
        zones=[
            ZoneConfig("Town Center", 20, 10, 4, 500),
            ZoneConfig("School", 35, 15, 2, 120),
        ],
        orders=list(_DEFAULT_ORDERS),
    ),
}


def get_scenario(name: str) -> ScenarioConfig:
    try:
        return copy.deepcopy(SCENARIOS[name])
    except KeyError:
        raise ValueError(f"Unknown scenario '{name}'. Available: {', '.join(sorted(SCENARIOS))}") from None
