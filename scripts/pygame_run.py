#!/usr/bin/env python3
"""Pygame visualization launcher for the wildfire simulation.

Controls: SPACE pause/resume, R reset, ESC quit.

Usage:
    python scripts/pygame_run.py [scenario]
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import pygame

# Add the src directory to the Python path
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

from wildfire.config import ScenarioConfig, get_scenario
from wildfire.simulation import FireSimulation

from visualization import (
    GridRenderer,
    BLACK,
    DEFAULT_CELL_SIZE,
    DEFAULT_FPS,
    PANEL_HEIGHT,
)

logger = logging.getLogger(__name__)


class SimulationRunner:
    """Main loop: event handling, stepping and drawing.

    Attributes:
        scenario: Scenario the simulation is built from (and reset to).
        sim: The running simulation.
        paused: Whether stepping is suspended.
    """

    def __init__(self, scenario: ScenarioConfig, cell_size: int, seed: Optional[int] = None) -> None:
        self.scenario = scenario
        self.seed = seed
        self.cell_size = cell_size

        window_width = scenario.width * cell_size
        window_height = scenario.height * cell_size + PANEL_HEIGHT

        pygame.init()
        self.screen = pygame.display.set_mode((window_width, window_height))
        pygame.display.set_caption(f"Wildfire - {scenario.name}")
        self.clock = pygame.time.Clock()

        self.renderer = GridRenderer(cell_size)
        self.sim = self._build()
        self.paused = False

    def _build(self) -> FireSimulation:
        sim = FireSimulation.from_config(self.scenario, seed=self.seed)
        sim.start()
        return sim

    def _handle_keyboard_events(self, event: pygame.event.Event) -> bool:
        """Returns False if the simulation should quit."""
        if event.key == pygame.K_ESCAPE:
            return False
        elif event.key == pygame.K_SPACE:
            self.paused = not self.paused
        elif event.key == pygame.K_r:
            self.sim = self._build()
            self.paused = False
        return True

    def _update_simulation(self) -> None:
        if self.paused or not self.sim.running:
            return
        self.sim.step()
        if self.sim.cells_burning == 0:
            logger.info(f"Fire has burned out after {self.sim.total_time:.1f} seconds")
            self.paused = True

    def _render(self) -> None:
        self.screen.fill(BLACK)
        self.renderer.draw_base(self.screen, self.sim.lattice)
        self.renderer.draw_crews(self.screen, self.sim.human_manager)
        status = "PAUSED" if self.paused else "RUNNING"
        self.renderer.draw_status(
            self.screen,
            [
                f"{status}  t={self.sim.total_time:.1f}s  burning={self.sim.cells_burning}  "
                f"burned={self.sim.cells_burned}  ({self.sim.burn_percentage:.1f}%)",
                "SPACE = pause/resume   R = reset   ESC = quit",
            ],
            top=self.scenario.height * self.cell_size,
        )
        pygame.display.flip()

    def run(self) -> None:
        running = True
        while running:
            self._render()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and not self._handle_keyboard_events(event):
                    running = False
            self._update_simulation()
            self.clock.tick(DEFAULT_FPS)
        pygame.quit()


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    name = sys.argv[1] if len(sys.argv) > 1 else "demo"
    SimulationRunner(get_scenario(name), DEFAULT_CELL_SIZE).run()


if __name__ == "__main__":
    main()
