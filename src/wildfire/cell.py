"""Forest cell agent implementation for the wildfire lattice."""

from dataclasses import dataclass
from enum import Enum

from mesa import Agent


AMBIENT_CELL_TEMPERATURE = 20.0
IGNITION_TEMPERATURE = 300.0
MIN_BURNABLE_DENSITY = 0.1


class CellState(Enum):
    """Possible states of a forest cell."""
    Empty = 0
    Fuel = 1
    Burning = 2
    Burned = 3


class FuelType(Enum):
    """Material category of a lattice position."""
    Grass = "grass"
    Shrub = "shrub"
    Tree = "tree"
    Water = "water"
    Rock = "rock"

    @property
    def flammable(self) -> bool:
        return self not in (FuelType.Water, FuelType.Rock)

    @property
    def burn_time(self) -> float:
        """Base burn duration in seconds for a full-density, dry cell."""
        return BASE_BURN_DURATION.get(self, 30.0)

    @property
    def ignition_factor(self) -> float:
        return IGNITION_FACTOR.get(self, 1.0)

    def __str__(self) -> str:
        return f"Fuel type: {self.value}, burn time: {self.burn_time:g}"


BASE_BURN_DURATION = {
    FuelType.Grass: 30.0,
    FuelType.Shrub: 120.0,
    FuelType.Tree: 300.0,
}

IGNITION_FACTOR = {
    FuelType.Grass: 1.2,
    FuelType.Shrub: 1.0,
    FuelType.Tree: 0.8,
}

FUEL_CHARS = {
    FuelType.Grass: ".",
    FuelType.Shrub: "o",
    FuelType.Tree: "T",
}


def display_char(state: CellState, fuel_type: FuelType) -> str:
    """Single-character classification of a cell, used by text snapshots."""
    if state == CellState.Empty:
        if fuel_type == FuelType.Water:
            return "~"
        if fuel_type == FuelType.Rock:
            return "#"
        return " "
    if state == CellState.Fuel:
        return FUEL_CHARS.get(fuel_type, ".")
    if state == CellState.Burning:
        return "*"
    return "x"


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


@dataclass(frozen=True)
class CellSnapshot:
    """Read-only view of a cell handed out to collaborators."""

    state: CellState
    fuel_type: FuelType
    fuel_density: float
    moisture: float
    temperature: float
    burn_time: float

    @property
    def display_char(self) -> str:
        return display_char(self.state, self.fuel_type)


class ForestCell(Agent):
    """Agent representing a single cell of the lattice.

    The combustion lifecycle is ``Fuel -> Burning -> Burned``; non-flammable
    fuel types start (and stay) ``Empty``. Transitions only happen through
    :meth:`ignite`, :meth:`update` and :meth:`extinguish`.
    """

    def __init__(
        self,
        model,
        pos: tuple[int, int],
        fuel_type: FuelType = FuelType.Grass,
        density: float = 0.8,
        moisture: float = 0.3,
    ):
        """
        Initialize a forest cell.

        Args:
            model: The Mesa model this cell belongs to
            pos: (x, y) coordinates of the cell
            fuel_type: Material of the cell
            density: Fraction of combustible mass, clamped to [0, 1]
            moisture: Moisture content, clamped to [0, 1]
        """
        super().__init__(model)
        self.pos = pos
        self.reset(fuel_type, density, moisture)

    def reset(self, fuel_type: FuelType, density: float, moisture: float) -> None:
        """Re-create the cell in place with new terrain properties."""
        self.fuel_type = fuel_type
        self.fuel_density = _clamp(density)
        self.moisture = _clamp(moisture)
        self.temperature = AMBIENT_CELL_TEMPERATURE
        self.burn_time = 0.0
        self.state = CellState.Fuel

        # Water and rock never burn
        if not fuel_type.flammable:
            self.state = CellState.Empty
            self.fuel_density = 0.0

    def can_burn(self) -> bool:
        """
        Check if the cell can catch fire.

        Returns:
            True if the cell holds enough flammable fuel and is unburned
        """
        return (
            self.state == CellState.Fuel
            and self.fuel_type.flammable
            and self.fuel_density > MIN_BURNABLE_DENSITY
        )

    @property
    def burn_duration(self) -> float:
        return self.fuel_type.burn_time * self.fuel_density * (1.0 + self.moisture)

    def ignite(self) -> bool:
        """Start burning if the cell can burn. Returns True on ignition."""
        if not self.can_burn():
            return False
        self.state = CellState.Burning
        self.burn_time = 0.0
        self.temperature = IGNITION_TEMPERATURE
        return True

    def update(self, dt: float) -> None:
        """Advance combustion by ``dt`` seconds."""
        if self.state != CellState.Burning:
            return

        self.burn_time += dt
        duration = self.burn_duration

        progress = self.burn_time / duration
        self.temperature = IGNITION_TEMPERATURE * (1.0 - progress) + AMBIENT_CELL_TEMPERATURE

        if self.burn_time >= duration:
            self.state = CellState.Burned
            self.temperature = AMBIENT_CELL_TEMPERATURE
            self.fuel_density = 0.0

    def extinguish(self) -> bool:
        """Put out an active fire, leaving the cell burned."""
        if self.state != CellState.Burning:
            return False
        self.state = CellState.Burned
        self.temperature = AMBIENT_CELL_TEMPERATURE
        return True

    def ignition_probability(self) -> float:
        """Intrinsic likelihood of catching fire, independent of neighbours."""
        if not self.can_burn():
            return 0.0

        p = self.fuel_density * self.fuel_type.ignition_factor
        p *= 1.0 - self.moisture * 0.8
        p *= 1.0 + max(0.0, self.temperature - 50.0) / 100.0
        return _clamp(p)

    @property
    def display_char(self) -> str:
        return display_char(self.state, self.fuel_type)

    def snapshot(self) -> CellSnapshot:
        return CellSnapshot(
            state=self.state,
            fuel_type=self.fuel_type,
            fuel_density=self.fuel_density,
            moisture=self.moisture,
            temperature=self.temperature,
            burn_time=self.burn_time,
        )
