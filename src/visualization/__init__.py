"""Visualization package for the wildfire simulation using Pygame."""

from .colors import *
from .renderer import GridRenderer

__all__ = [
    'GridRenderer',

    # Fuel type colors
    'GRASS_COLOR',
    'SHRUB_COLOR',
    'TREE_COLOR',
    'WATER_COLOR',
    'ROCK_COLOR',
    'EMPTY_COLOR',

    # Cell state colors
    'BURNING_COLOR',
    'BURNED_COLOR',

    # Overlays
    'WATER_DROP_COLOR',
    'RETARDANT_COLOR',
    'FIREBREAK_COLOR',
    'CREW_COLOR',

    # UI colors
    'BLACK',
    'WHITE',

    # Default parameters
    'DEFAULT_CELL_SIZE',
    'DEFAULT_FPS',
    'PANEL_HEIGHT',
]
