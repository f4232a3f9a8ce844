"""Color definitions and constants for the wildfire visualization.

This module contains all RGB color tuples and default configuration values
used throughout the Pygame visualization.
"""

from typing import Tuple

# Type alias for RGB color tuples
Color = Tuple[int, int, int]

# ============================================================================
# FUEL TYPE COLORS
# ============================================================================

GRASS_COLOR: Color = (181, 228, 140)                # light green
SHRUB_COLOR: Color = (82, 183, 136)                 # sea green
TREE_COLOR: Color = (27, 67, 50)                    # dark green

# Non-burnable
WATER_COLOR: Color = (0, 0, 255)                    # blue
ROCK_COLOR: Color = (105, 105, 105)                 # gray
EMPTY_COLOR: Color = (0, 0, 0)

# ============================================================================
# CELL STATE COLORS (burning and burned)
# ============================================================================

BURNING_COLOR: Color = (255, 0, 0)                  # red (on fire)
BURNED_COLOR: Color = (40, 40, 40)                  # charcoal (burned out)

# ============================================================================
# SUPPRESSION AND CREW OVERLAYS
# ============================================================================

WATER_DROP_COLOR: Color = (80, 160, 255)            # strong water deposit
RETARDANT_COLOR: Color = (200, 30, 120)             # strong retardant deposit
FIREBREAK_COLOR: Color = (150, 150, 150)            # light gray
CREW_COLOR: Color = (255, 215, 0)                   # gold

# ============================================================================
# UI COLORS
# ============================================================================

BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)

# ============================================================================
# DEFAULT SIMULATION PARAMETERS
# ============================================================================

DEFAULT_CELL_SIZE: int = 12                         # Cell size in pixels
DEFAULT_FPS: int = 10                               # Default frames per second
PANEL_HEIGHT: int = 60                              # Status strip under the grid
