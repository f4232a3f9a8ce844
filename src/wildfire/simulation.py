"""Simulation driver tying the lattice to crews, statistics and export."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .cell import CellState, FuelType
from .config import ScenarioConfig
from .crews import HumanFactorManager, SuppressionAction, SuppressionType
from .lattice import Lattice
from .snapshot import LEGEND, render_grid
from .suppression import SuppressionKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationStats:
    """Cell counts gathered after each step."""

    cells_burning: int
    cells_burned: int
    total_fuel_cells: int

    @property
    def burn_percentage(self) -> float:
        if self.total_fuel_cells == 0:
            return 0.0
        return (self.cells_burned + self.cells_burning) / self.total_fuel_cells * 100.0


class FireSimulation:
    """Runs a lattice step by step together with its human-factor manager.

    Attributes:
        lattice: The wildfire lattice being simulated.
        human_manager: Crews, evacuation zones and budget.
        time_step: Seconds simulated per step.
        total_time: Seconds simulated so far.
        running: Whether step() advances the simulation.
    """

    def __init__(
        self,
        width: int,
        height: int,
        dt: float = 0.1,
        seed: Optional[int] = None,
        budget: float = 100000.0,
    ):
        if dt <= 0:
            raise ValueError(f"Time step must be positive, got {dt}")
        self.lattice = Lattice(width, height, seed=seed, time_step=dt)
        self.human_manager = HumanFactorManager(budget)
        self.time_step = dt
        self.total_time = 0.0
        self.running = False
        self.stats = SimulationStats(0, 0, 0)

    @classmethod
    def from_config(cls, config: ScenarioConfig, seed: Optional[int] = None) -> "FireSimulation":
        """Build a simulation from a scenario: terrain, weather, crews, zones,
        ignitions and the opening suppression orders."""
        sim = cls(config.width, config.height, dt=config.time_step, seed=seed, budget=config.budget)

        setup = {
            "grassland": sim.setup_grassland,
            "forest": sim.setup_forest,
            "mixed": sim.setup_mixed,
            "patterned": sim.setup_patterned,
        }[config.terrain]
        setup()

        lattice = sim.lattice
        lattice.wind_speed = config.weather.wind_speed
        lattice.wind_direction = config.weather.wind_direction
        lattice.ambient_temp = config.weather.ambient_temp
        lattice.humidity = config.weather.humidity

        for crew in config.crews:
            sim.human_manager.add_crew(crew.name, crew.type, crew.x, crew.y)
        for zone in config.zones:
            sim.human_manager.add_evacuation_zone(zone.name, zone.x, zone.y, zone.radius, zone.population)

        ignitions = config.ignitions or [(config.width // 2, config.height // 2)]
        for x, y in ignitions:
            sim.add_ignition_point(x, y)

        # Opening orders are placed relative to the first ignition point
        fx, fy = ignitions[0]
        crews = sim.human_manager.crews
        for order in config.orders:
            if order.crew_index >= len(crews):
                continue
            action = sim.human_manager.order_suppression(
                crews[order.crew_index].id,
                SuppressionType(order.kind),
                fx + order.dx,
                fy + order.dy,
                order.radius,
            )
            if action is not None:
                sim.execute(action)

        if config.evacuate:
            for index in range(len(sim.human_manager.evacuation_zones)):
                sim.human_manager.order_evacuation(index)

        logger.info(
            f"Scenario '{config.name}' ready: {config.width}x{config.height}, "
            f"wind {lattice.wind_speed} m/s at {lattice.wind_direction} deg"
        )
        return sim

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def start(self) -> None:
        self.running = True
        self.update_statistics()
        logger.info("Simulation started")

    def stop(self) -> None:
        if self.running:
            logger.info(f"Simulation stopped at t={self.total_time:.1f}s")
        self.running = False

    def reset(self) -> None:
        """Stop and clear the clock and counters; the lattice is left as is."""
        self.stop()
        self.total_time = 0.0
        self.stats = SimulationStats(0, 0, 0)

    def step(self) -> None:
        if not self.running:
            return
        self.lattice.tick(self.time_step)
        self.human_manager.update_crews(self.time_step)
        self.human_manager.update_evacuations(self.time_step, self.lattice)
        self.total_time += self.time_step
        self.update_statistics()

    def run(
        self,
        duration: Optional[float] = None,
        max_steps: Optional[int] = None,
        report_every: int = 10,
        reporter: Optional[Callable[["FireSimulation"], None]] = None,
    ) -> int:
        """
        Step until the fire burns out or a limit is hit.

        Args:
            duration: Simulated seconds to run for (None for no limit)
            max_steps: Maximum number of steps (None for no limit)
            report_every: Call ``reporter`` every this many steps
            reporter: Callback receiving the simulation, e.g. to print status

        Returns:
            Number of steps executed
        """
        self.start()
        steps = 0
        while self.running:
            if duration is not None and self.total_time >= duration:
                break
            if max_steps is not None and steps >= max_steps:
                break

            self.step()
            steps += 1

            if self.stats.cells_burning == 0:
                logger.info(f"Fire has burned out after {self.total_time:.1f} seconds")
                break
            if reporter is not None and report_every > 0 and steps % report_every == 0:
                reporter(self)

        self.stop()
        return steps

    def execute(self, action: SuppressionAction) -> int:
        """Apply a crew action to the lattice. Returns the number of cells affected."""
        if action.type == SuppressionType.Water:
            return self.lattice.apply_suppression(
                (action.x, action.y), action.radius, SuppressionKind.Water, action.effectiveness, action.duration
            )
        if action.type == SuppressionType.Retardant:
            return self.lattice.apply_suppression(
                (action.x, action.y), action.radius, SuppressionKind.Retardant, action.effectiveness, action.duration
            )
        if action.type == SuppressionType.Firebreak:
            end = action.end if action.end is not None else (action.x + action.radius, action.y)
            return len(self.lattice.draw_firebreak((action.x, action.y), end))
        return 0

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def update_statistics(self) -> SimulationStats:
        counts = self.lattice.count_states()
        burning = counts[CellState.Burning]
        burned = counts[CellState.Burned]

        width, height = self.lattice.dimensions()
        fuel = sum(
            1 for y in range(height) for x in range(width) if self.lattice.can_burn_at(x, y)
        )
        self.stats = SimulationStats(burning, burned, fuel + burning + burned)
        return self.stats

    @property
    def cells_burning(self) -> int:
        return self.stats.cells_burning

    @property
    def cells_burned(self) -> int:
        return self.stats.cells_burned

    @property
    def total_fuel_cells(self) -> int:
        return self.stats.total_fuel_cells

    @property
    def burn_percentage(self) -> float:
        return self.stats.burn_percentage

    # ------------------------------------------------------------------
    # Scenario setup
    # ------------------------------------------------------------------

    def setup_grassland(self) -> None:
        self.lattice.fill(FuelType.Grass, 0.8, 0.2)

    def setup_forest(self) -> None:
        self.lattice.fill(FuelType.Tree, 0.9, 0.3)

    def setup_mixed(self) -> None:
        self.lattice.initialize_random()

    def setup_patterned(self) -> None:
        self.lattice.initialize_patterned()

    def add_firebreak(self, x1: int, y1: int, x2: int, y2: int) -> None:
        self.lattice.draw_firebreak((x1, y1), (x2, y2))

    def add_ignition_point(self, x: int, y: int) -> bool:
        return self.lattice.ignite_at(x, y)

    # ------------------------------------------------------------------
    # Display and output
    # ------------------------------------------------------------------

    def status_lines(self) -> list[str]:
        lattice = self.lattice
        return [
            "=== Wildfire Simulation Status ===",
            f"Time: {self.total_time:g}s",
            f"Cells burning: {self.cells_burning}",
            f"Cells burned: {self.cells_burned}",
            f"Burn percentage: {self.burn_percentage:.2f}%",
            f"Wind: {lattice.wind_speed:g} m/s at {lattice.wind_direction:g} deg",
            f"Temperature: {lattice.ambient_temp:g} C",
            f"Humidity: {lattice.humidity * 100:g}%",
            "",
            LEGEND,
        ]

    def render(self) -> str:
        return render_grid(self.lattice, self.human_manager)

    def save_to_file(self, path) -> Path:
        """Write summary counters and the plain character grid to ``path``."""
        path = Path(path)
        lines = [
            f"Time,{self.total_time:g}",
            f"Burning,{self.cells_burning}",
            f"Burned,{self.cells_burned}",
            f"BurnPercentage,{self.burn_percentage:g}",
            "Grid:",
            render_grid(self.lattice, border=False, overlays=False),
        ]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        logger.info(f"Results saved to {path}")
        return path
