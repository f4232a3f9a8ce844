"""Lattice model: owns cells and suppression entries and runs the fire tick."""

import logging
import random
from collections import Counter

import numpy as np
from mesa import Model

from .cell import CellSnapshot, CellState, ForestCell, FuelType
from .spread import SpreadModel, Weather
from .suppression import SuppressionField, SuppressionKind, SuppressionSnapshot
from .terrain import Terrain

logger = logging.getLogger(__name__)

Position = tuple[int, int]


def firebreak_line(p1: Position, p2: Position) -> list[Position]:
    """Cells visited walking from ``p1`` to ``p2`` one axis step at a time.

    The walk never moves diagonally, so consecutive cells share an edge and
    the line cannot be crossed by 8-connected spread.
    """
    x1, y1 = p1
    x2, y2 = p2
    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    x_inc = 1 if x1 < x2 else -1
    y_inc = 1 if y1 < y2 else -1
    error = dx - dy

    x, y = x1, y1
    cells = [(x, y)]
    while (x, y) != (x2, y2):
        if y == y2 or (x != x2 and error > 0):
            x += x_inc
            error -= 2 * dy
        else:
            y += y_inc
            error += 2 * dx
        cells.append((x, y))
    return cells


class Lattice(Model):
    """Wildfire cellular automaton over a fixed ``width x height`` lattice.

    Cells and suppression entries live in flat arrays indexed by
    ``y * width + x``; callers only ever address them by coordinates and get
    read-only snapshots back.

    Every random draw comes from ``self.random``: one draw per
    (burning cell, flammable neighbour) pair during the read phase, then one
    draw per strongly suppressed burning cell during the write phase, both
    in scan order. A fixed ``seed`` (or an injected ``rng``) therefore makes
    a run fully reproducible.
    """

    EXTINGUISH_THRESHOLD = 0.5
    EXTINGUISH_RATE = 2.0

    def __init__(
        self,
        width: int,
        height: int,
        weather: Weather | None = None,
        spread_model: SpreadModel | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
        time_step: float = 0.1,
    ):
        """
        Initialize the lattice with default grass cover.

        Args:
            width: Number of cells along x
            height: Number of cells along y
            weather: Ambient conditions (defaults to 5 m/s east wind, 25 C, 40% humidity)
            spread_model: Spread rate model (defaults to the standard coefficients)
            seed: Seed for the lattice's random generator
            rng: Pre-built generator to use instead of seeding a new one
            time_step: Duration in seconds used by step()
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Lattice dimensions must be positive, got {width}x{height}")

        super().__init__(seed=seed)
        if rng is not None:
            self.random = rng

        self.width = width
        self.height = height
        self.weather = weather if weather is not None else Weather()
        self.spread_model = spread_model if spread_model is not None else SpreadModel()
        self.time_step = time_step
        self.elapsed = 0.0

        self._cells = [ForestCell(self, (x, y)) for y in range(height) for x in range(width)]
        self._suppression = SuppressionField(width, height)
        self._arrival = np.full(width * height, np.nan)

    # ------------------------------------------------------------------
    # Ambient parameters
    # ------------------------------------------------------------------

    @property
    def wind_speed(self) -> float:
        return self.weather.wind_speed

    @wind_speed.setter
    def wind_speed(self, value: float) -> None:
        self.weather.wind_speed = max(0.0, value)

    @property
    def wind_direction(self) -> float:
        return self.weather.wind_direction

    @wind_direction.setter
    def wind_direction(self, value: float) -> None:
        self.weather.wind_direction = value % 360.0

    @property
    def ambient_temp(self) -> float:
        return self.weather.ambient_temp

    @ambient_temp.setter
    def ambient_temp(self, value: float) -> None:
        self.weather.ambient_temp = value

    @property
    def humidity(self) -> float:
        return self.weather.humidity

    @humidity.setter
    def humidity(self, value: float) -> None:
        self.weather.humidity = min(1.0, max(0.0, value))

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    def dimensions(self) -> tuple[int, int]:
        return self.width, self.height

    def is_valid_position(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _cell(self, x: int, y: int) -> ForestCell | None:
        if not self.is_valid_position(x, y):
            return None
        return self._cells[y * self.width + x]

    def cell_at(self, x: int, y: int) -> CellSnapshot | None:
        cell = self._cell(x, y)
        return None if cell is None else cell.snapshot()

    def suppression_at(self, x: int, y: int) -> SuppressionSnapshot | None:
        return self._suppression.snapshot((x, y))

    def display_char(self, x: int, y: int) -> str:
        cell = self._cell(x, y)
        return " " if cell is None else cell.display_char

    def neighbors8(self, pos: Position) -> list[Position]:
        x, y = pos
        neighbors = []
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                if self.is_valid_position(x + dx, y + dy):
                    neighbors.append((x + dx, y + dy))
        return neighbors

    def spread_probability(self, from_pos: Position, to_pos: Position) -> float:
        source = self._cell(*from_pos)
        target = self._cell(*to_pos)
        if source is None or target is None:
            return 0.0
        effect = self._suppression.entry(to_pos[1] * self.width + to_pos[0])
        return self.spread_model.spread_probability(source, target, self.weather, effect)

    def suppression_modifier(self, x: int, y: int) -> float:
        return self._suppression.modifier((x, y))

    def has_suppression_effect(self, x: int, y: int) -> bool:
        return self._suppression.has_effect((x, y))

    def count_states(self) -> Counter:
        return Counter(cell.state for cell in self._cells)

    def burning_positions(self) -> list[Position]:
        return [cell.pos for cell in self._cells if cell.state == CellState.Burning]

    def can_burn_at(self, x: int, y: int) -> bool:
        cell = self._cell(x, y)
        return cell is not None and cell.can_burn()

    def time_of_arrival(self) -> np.ndarray:
        """Simulated time each cell first caught fire, NaN where it never did.

        Returned as a (height, width) array.
        """
        return self._arrival.reshape(self.height, self.width).copy()

    # ------------------------------------------------------------------
    # Terrain editing
    # ------------------------------------------------------------------

    def ignite_at(self, x: int, y: int) -> bool:
        cell = self._cell(x, y)
        if cell is None or not cell.ignite():
            return False
        self._arrival[y * self.width + x] = self.elapsed
        logger.debug(f"Ignited cell at ({x}, {y}) at t={self.elapsed:.1f}s")
        return True

    def apply_suppression(
        self,
        center: Position,
        radius: int,
        kind: SuppressionKind,
        effectiveness: float,
        duration: float,
    ) -> int:
        return self._suppression.apply(center, radius, kind, effectiveness, duration)

    def apply_water_drop(self, x: int, y: int, radius: int, effectiveness: float, duration: float) -> int:
        return self.apply_suppression((x, y), radius, SuppressionKind.Water, effectiveness, duration)

    def apply_retardant(self, x: int, y: int, radius: int, effectiveness: float, duration: float) -> int:
        return self.apply_suppression((x, y), radius, SuppressionKind.Retardant, effectiveness, duration)

    def draw_firebreak(self, p1: Position, p2: Position) -> list[Position]:
        """Turn every in-bounds cell on the line into a permanent rock firebreak.

        Whatever fuel, fire or suppression deposit was there is destroyed.

        Returns:
            The in-bounds positions that were converted
        """
        converted = []
        for x, y in firebreak_line(p1, p2):
            cell = self._cell(x, y)
            if cell is None:
                continue
            self._suppression.mark_firebreak((x, y))
            cell.reset(FuelType.Rock, 0.0, 0.0)
            converted.append((x, y))
        logger.debug(f"Firebreak {p1} -> {p2} covers {len(converted)} cells")
        return converted

    def load_terrain(self, terrain: Terrain) -> None:
        grid = terrain.get_grid()
        if grid.shape != (self.height, self.width):
            raise ValueError(
                f"Terrain shape {grid.shape} does not match lattice (height, width)="
                f"{(self.height, self.width)}"
            )
        for index, cell in enumerate(self._cells):
            x, y = cell.pos
            record = grid[y, x]
            cell.reset(record["fuel_type"], record["density"], record["moisture"])
            self._arrival[index] = np.nan

    def fill(self, fuel_type: FuelType, density: float, moisture: float) -> None:
        self.load_terrain(Terrain.uniform(self.width, self.height, fuel_type, density, moisture))

    def initialize_random(self, rng: random.Random | None = None) -> None:
        """Random mixed cover; draws from the lattice generator unless ``rng`` is given."""
        self.load_terrain(Terrain.random(self.width, self.height, rng or self.random))

    def initialize_patterned(self) -> None:
        self.load_terrain(Terrain.patterned(self.width, self.height))

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def tick(self, dt: float) -> list[Position]:
        """
        Advance the fire by ``dt`` seconds.

        Uses a two-phase update: first every burning cell rolls against its
        flammable neighbours without changing anything, then all ignitions,
        burn progress, suppression decay and extinguishing are applied. This
        keeps the result independent of scan order.

        Returns:
            Positions ignited during this tick
        """
        width = self.width
        will_ignite = [False] * len(self._cells)

        # Phase 1: decide ignitions
        for cell in self._cells:
            if cell.state != CellState.Burning:
                continue
            for nx, ny in self.neighbors8(cell.pos):
                index = ny * width + nx
                neighbour = self._cells[index]
                if not neighbour.can_burn():
                    continue
                p = self.spread_model.spread_probability(
                    cell, neighbour, self.weather, self._suppression.entry(index)
                )
                if self.random.random() < p * dt:
                    will_ignite[index] = True

        # Phase 2: apply
        arrival_time = self.elapsed + dt
        ignited = []
        for index, cell in enumerate(self._cells):
            if will_ignite[index] and cell.ignite():
                self._arrival[index] = arrival_time
                ignited.append(cell.pos)

            cell.update(dt)

            effect = self._suppression.entry(index)
            effect.decay(dt)

            # Strong suppression can put out an active fire
            if cell.state == CellState.Burning:
                suppression = effect.modifier
                if suppression > self.EXTINGUISH_THRESHOLD:
                    if self.random.random() < suppression * dt * self.EXTINGUISH_RATE:
                        cell.extinguish()

        self.elapsed = arrival_time
        if ignited:
            logger.debug(f"t={self.elapsed:.1f}s: {len(ignited)} new ignitions")
        return ignited

    def step(self) -> None:
        """Execute one tick of ``time_step`` seconds."""
        self.tick(self.time_step)
