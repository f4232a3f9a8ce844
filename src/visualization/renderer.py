"""Grid rendering functionality for the wildfire simulation.

This module provides the GridRenderer class which handles drawing the
lattice with proper colors for each cell state, suppression deposit and
crew position.
"""

from typing import TYPE_CHECKING, Optional

import pygame

from wildfire.cell import CellState, FuelType
from .colors import (
    BLACK,
    BURNING_COLOR,
    BURNED_COLOR,
    CREW_COLOR,
    EMPTY_COLOR,
    FIREBREAK_COLOR,
    GRASS_COLOR,
    RETARDANT_COLOR,
    ROCK_COLOR,
    SHRUB_COLOR,
    TREE_COLOR,
    WATER_COLOR,
    WATER_DROP_COLOR,
    WHITE,
)

if TYPE_CHECKING:
    from wildfire.crews import HumanFactorManager
    from wildfire.lattice import Lattice

STRONG_SUPPRESSION = 0.5


class GridRenderer:
    """Renders the lattice onto a Pygame surface.

    Attributes:
        cell_size: Size of each cell in pixels.
    """

    FUEL_COLORS = {
        FuelType.Grass: GRASS_COLOR,
        FuelType.Shrub: SHRUB_COLOR,
        FuelType.Tree: TREE_COLOR,
        FuelType.Water: WATER_COLOR,
        FuelType.Rock: ROCK_COLOR,
    }

    def __init__(self, cell_size: int) -> None:
        self.cell_size = cell_size
        self._font: Optional[pygame.font.Font] = None

    def get_cell_color(self, lattice: "Lattice", x: int, y: int) -> tuple[int, int, int]:
        """Get the RGB color for a position.

        Priority: firebreak, burning, burned, strong suppression, fuel.
        """
        effect = lattice.suppression_at(x, y)
        cell = lattice.cell_at(x, y)

        if effect.is_firebreak:
            return FIREBREAK_COLOR
        if cell.state == CellState.Burning:
            # Hotter cells glow brighter
            return self._apply_glow(BURNING_COLOR, 0.6 + 0.4 * min(1.0, cell.temperature / 320.0))
        if cell.state == CellState.Burned:
            return BURNED_COLOR
        if effect.water_level > STRONG_SUPPRESSION:
            return WATER_DROP_COLOR
        if effect.retardant_level > STRONG_SUPPRESSION:
            return RETARDANT_COLOR
        if cell.state == CellState.Fuel or not cell.fuel_type.flammable:
            return self.FUEL_COLORS.get(cell.fuel_type, GRASS_COLOR)
        return EMPTY_COLOR

    def _apply_glow(self, color: tuple[int, int, int], strength: float) -> tuple[int, int, int]:
        r, g, b = color
        return (min(255, int(r * strength)), min(255, int(g * strength)), min(255, int(b * strength)))

    def draw_base(self, screen: pygame.Surface, lattice: "Lattice", offset_x: int = 0, offset_y: int = 0) -> None:
        """Layer 1 - lattice cells."""
        width, height = lattice.dimensions()
        for y in range(height):
            for x in range(width):
                pygame.draw.rect(
                    screen,
                    self.get_cell_color(lattice, x, y),
                    (
                        offset_x + x * self.cell_size,
                        offset_y + y * self.cell_size,
                        self.cell_size,
                        self.cell_size,
                    ),
                )

    def draw_crews(
        self, screen: pygame.Surface, manager: "HumanFactorManager", offset_x: int = 0, offset_y: int = 0
    ) -> None:
        """Layer 2 - crew markers."""
        if self._font is None:
            self._font = pygame.font.Font(None, max(12, self.cell_size + 4))
        for crew in manager.crews:
            center = (
                offset_x + crew.x * self.cell_size + self.cell_size // 2,
                offset_y + crew.y * self.cell_size + self.cell_size // 2,
            )
            pygame.draw.circle(screen, CREW_COLOR, center, max(3, self.cell_size // 2))
            label = self._font.render(crew.marker, True, BLACK)
            screen.blit(label, label.get_rect(center=center))

    def draw_status(self, screen: pygame.Surface, lines: list[str], top: int) -> None:
        """Layer 3 - text strip under the grid."""
        if self._font is None:
            self._font = pygame.font.Font(None, max(12, self.cell_size + 4))
        for i, line in enumerate(lines):
            screen.blit(self._font.render(line, True, WHITE), (10, top + 5 + i * 18))
