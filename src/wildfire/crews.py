"""Firefighting crews, evacuation zones and the budget that pays for them.

Crews never touch the lattice directly: they produce :class:`SuppressionAction`
requests which the simulation driver executes between ticks.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .cell import CellState

if TYPE_CHECKING:
    from .lattice import Lattice

logger = logging.getLogger(__name__)


class CrewType(Enum):
    """Kinds of firefighting units."""
    GroundCrew = "ground"
    WaterTanker = "water"
    AirTanker = "air"
    Helicopter = "heli"


class SuppressionType(Enum):
    """Kinds of orders a crew can carry out."""
    Water = "water"
    Retardant = "retardant"
    Firebreak = "firebreak"
    Evacuation = "evacuation"


@dataclass(frozen=True)
class CrewProfile:
    water_capacity: float
    retardant_capacity: float
    effectiveness: float
    speed: float
    marker: str


CREW_PROFILES = {
    CrewType.GroundCrew: CrewProfile(500.0, 0.0, 0.6, 2.0, "G"),
    CrewType.WaterTanker: CrewProfile(3000.0, 0.0, 0.8, 4.0, "W"),
    CrewType.AirTanker: CrewProfile(1000.0, 2000.0, 0.9, 8.0, "A"),
    CrewType.Helicopter: CrewProfile(1500.0, 500.0, 0.7, 6.0, "H"),
}

WATER_DURATION = 300.0
RETARDANT_DURATION = 1800.0
WATER_COST = 500.0
RETARDANT_COST = 2000.0
FIREBREAK_COST = 1000.0


@dataclass(frozen=True)
class SuppressionAction:
    """A suppression request produced by a crew.

    ``duration`` is None for permanent effects (firebreaks); ``end`` is only
    set for firebreaks.
    """

    type: SuppressionType
    x: int
    y: int
    radius: int
    effectiveness: float
    duration: Optional[float]
    cost: float
    end: Optional[tuple[int, int]] = None


class FirefightingCrew:
    """A single crew with its tanks, fatigue and availability."""

    def __init__(self, crew_id: int, name: str, crew_type: CrewType, x: int, y: int):
        profile = CREW_PROFILES[crew_type]
        self.id = crew_id
        self.name = name
        self.type = crew_type
        self.x = x
        self.y = y
        self.water_capacity = profile.water_capacity
        self.retardant_capacity = profile.retardant_capacity
        self.base_effectiveness = profile.effectiveness
        self.speed = profile.speed
        self.current_water = self.water_capacity
        self.current_retardant = self.retardant_capacity
        self.fatigue = 0.0
        self.available = True

    @property
    def marker(self) -> str:
        return CREW_PROFILES[self.type].marker

    @property
    def effectiveness(self) -> float:
        return self.base_effectiveness * (1.0 - self.fatigue)

    def _tire(self, amount: float) -> None:
        self.fatigue = min(1.0, self.fatigue + amount)

    def move_to(self, x: int, y: int) -> bool:
        if not self.available:
            return False
        self.x = x
        self.y = y
        self._tire(0.05)
        return True

    def deploy_water(self, x: int, y: int, radius: int) -> SuppressionAction:
        action = SuppressionAction(
            type=SuppressionType.Water,
            x=x,
            y=y,
            radius=radius,
            effectiveness=self.effectiveness * 0.8,
            duration=WATER_DURATION,
            cost=WATER_COST,
        )
        self.current_water -= min(self.current_water, self.water_capacity * 0.3)
        self._tire(0.1)
        return action

    def deploy_retardant(self, x: int, y: int, radius: int) -> SuppressionAction:
        action = SuppressionAction(
            type=SuppressionType.Retardant,
            x=x,
            y=y,
            radius=radius,
            effectiveness=self.effectiveness * 0.9,
            duration=RETARDANT_DURATION,
            cost=RETARDANT_COST,
        )
        self.current_retardant -= min(self.current_retardant, self.retardant_capacity * 0.4)
        self._tire(0.15)
        return action

    def create_firebreak(self, start_x: int, start_y: int, end_x: int, end_y: int) -> SuppressionAction:
        action = SuppressionAction(
            type=SuppressionType.Firebreak,
            x=start_x,
            y=start_y,
            radius=abs(end_x - start_x) + abs(end_y - start_y),
            effectiveness=self.effectiveness * 0.7,
            duration=None,
            cost=FIREBREAK_COST,
            end=(end_x, end_y),
        )
        self._tire(0.2)
        return action

    def refill(self) -> None:
        self.current_water = self.water_capacity
        self.current_retardant = self.retardant_capacity

    def rest(self, time: float) -> None:
        self.fatigue = max(0.0, self.fatigue - time * 0.1)

    def update(self, dt: float) -> None:
        """Accumulate fatigue; exhausted crews stand down until rested."""
        self._tire(dt * 0.01)
        if self.fatigue > 0.8:
            self.available = False
        elif self.fatigue < 0.3:
            self.available = True

    def resource_level(self, kind: SuppressionType) -> float:
        if kind == SuppressionType.Water:
            return self.current_water / self.water_capacity if self.water_capacity else 0.0
        if kind == SuppressionType.Retardant:
            return self.current_retardant / self.retardant_capacity if self.retardant_capacity else 0.0
        return 1.0 - self.fatigue

    def can_deploy(self, kind: SuppressionType) -> bool:
        if not self.available:
            return False
        if kind == SuppressionType.Water:
            return self.current_water > self.water_capacity * 0.1
        if kind == SuppressionType.Retardant:
            # Crews without a retardant tank can never drop it
            return self.retardant_capacity > 0 and self.current_retardant > self.retardant_capacity * 0.1
        if kind == SuppressionType.Firebreak:
            return self.fatigue < 0.7
        return self.fatigue < 0.5

    def status_string(self) -> str:
        parts = [f"{self.name} ({self.id}) - {self.type.name} [{self.x},{self.y}]"]
        parts.append(f"Water: {int(self.resource_level(SuppressionType.Water) * 100)}%")
        if self.retardant_capacity > 0:
            parts.append(f"Retardant: {int(self.resource_level(SuppressionType.Retardant) * 100)}%")
        parts.append(f"Fatigue: {int(self.fatigue * 100)}%")
        status = " ".join(parts)
        return status if self.available else f"{status} (RESTING)"


@dataclass
class EvacuationZone:
    name: str
    x: int
    y: int
    radius: int
    population: int
    evacuated: int = 0
    evacuation_ordered: bool = False
    danger_level: float = 0.0

    def contains(self, x: int, y: int) -> bool:
        return (x - self.x) ** 2 + (y - self.y) ** 2 <= self.radius ** 2


class HumanFactorManager:
    """Owns the crews, evacuation zones and the suppression budget."""

    def __init__(self, budget: float = 100000.0):
        self.total_budget = budget
        self.spent_budget = 0.0
        self.crews: list[FirefightingCrew] = []
        self.evacuation_zones: list[EvacuationZone] = []
        self._next_crew_id = 1

    @property
    def remaining_budget(self) -> float:
        return self.total_budget - self.spent_budget

    def can_afford(self, cost: float) -> bool:
        return self.spent_budget + cost <= self.total_budget

    def spend(self, amount: float) -> None:
        self.spent_budget += amount

    def add_crew(self, name: str, crew_type: CrewType, x: int, y: int) -> FirefightingCrew:
        crew = FirefightingCrew(self._next_crew_id, name, crew_type, x, y)
        self._next_crew_id += 1
        self.crews.append(crew)
        return crew

    def get_crew(self, crew_id: int) -> Optional[FirefightingCrew]:
        return next((crew for crew in self.crews if crew.id == crew_id), None)

    def deploy_crew_to(self, crew_id: int, x: int, y: int) -> bool:
        crew = self.get_crew(crew_id)
        return crew is not None and crew.move_to(x, y)

    def order_suppression(
        self, crew_id: int, kind: SuppressionType, x: int, y: int, radius: int
    ) -> Optional[SuppressionAction]:
        """
        Ask a crew to carry out an order and pay for it.

        Returns:
            The resulting action, or None if the crew cannot deploy or the
            budget does not cover it
        """
        crew = self.get_crew(crew_id)
        if crew is None or not crew.can_deploy(kind):
            logger.warning(f"Crew {crew_id} cannot carry out {kind.value} order")
            return None

        cost = {
            SuppressionType.Water: WATER_COST,
            SuppressionType.Retardant: RETARDANT_COST,
            SuppressionType.Firebreak: FIREBREAK_COST,
        }.get(kind)
        if cost is None:
            logger.warning(f"{kind.value} is not a suppression order")
            return None
        if not self.can_afford(cost):
            logger.warning(
                f"Budget exhausted: {kind.value} costs {cost:.0f}, remaining {self.remaining_budget:.0f}"
            )
            return None

        if kind == SuppressionType.Water:
            action = crew.deploy_water(x, y, radius)
        elif kind == SuppressionType.Retardant:
            action = crew.deploy_retardant(x, y, radius)
        else:
            action = crew.create_firebreak(x, y, x + radius, y)

        self.spend(action.cost)
        return action

    def update_crews(self, dt: float) -> None:
        for crew in self.crews:
            crew.update(dt)

    def add_evacuation_zone(self, name: str, x: int, y: int, radius: int, population: int) -> EvacuationZone:
        zone = EvacuationZone(name=name, x=x, y=y, radius=radius, population=population)
        self.evacuation_zones.append(zone)
        return zone

    def order_evacuation(self, zone_index: int) -> bool:
        if not 0 <= zone_index < len(self.evacuation_zones):
            return False
        self.evacuation_zones[zone_index].evacuation_ordered = True
        return True

    def update_evacuations(self, dt: float, lattice: Optional["Lattice"] = None) -> None:
        """Move 1% of each ordered zone's population out per update.

        When a lattice is given, each zone's danger level is refreshed to
        the share of its cells that are burning or burned.
        """
        for zone in self.evacuation_zones:
            if zone.evacuation_ordered and zone.evacuated < zone.population:
                rate = max(1, zone.population // 100)
                zone.evacuated = min(zone.population, zone.evacuated + rate)
            if lattice is not None:
                zone.danger_level = self._zone_danger(zone, lattice)

    @staticmethod
    def _zone_danger(zone: EvacuationZone, lattice: "Lattice") -> float:
        total = 0
        on_fire = 0
        for y in range(zone.y - zone.radius, zone.y + zone.radius + 1):
            for x in range(zone.x - zone.radius, zone.x + zone.radius + 1):
                if not zone.contains(x, y):
                    continue
                snapshot = lattice.cell_at(x, y)
                if snapshot is None:
                    continue
                total += 1
                if snapshot.state in (CellState.Burning, CellState.Burned):
                    on_fire += 1
        return on_fire / total if total else 0.0

    def crew_marker(self, x: int, y: int) -> str:
        for crew in self.crews:
            if crew.x == x and crew.y == y:
                return crew.marker
        return " "

    def status_lines(self) -> list[str]:
        lines = [
            "=== Human Factors Status ===",
            f"Budget: ${int(self.remaining_budget)} / ${int(self.total_budget)}",
            "",
            f"Firefighting Crews ({len(self.crews)}):",
        ]
        lines.extend(f"  {crew.status_string()}" for crew in self.crews)
        if self.evacuation_zones:
            lines.append("")
            lines.append(f"Evacuation Zones ({len(self.evacuation_zones)}):")
            for zone in self.evacuation_zones:
                line = f"  {zone.name} [{zone.x},{zone.y}] Pop: {zone.evacuated}/{zone.population}"
                if zone.evacuation_ordered:
                    line += " (EVACUATING)"
                lines.append(line)
        return lines
