"""
Wildfire spread and suppression on a 2D lattice.

A stochastic cellular automaton where fire spreads between neighbouring
cells under wind, fuel, moisture and temperature, and is held back by
water, retardant and firebreaks laid down by firefighting crews.
"""

from .cell import CellSnapshot, CellState, ForestCell, FuelType
from .crews import CrewType, FirefightingCrew, HumanFactorManager, SuppressionAction, SuppressionType
from .lattice import Lattice
from .simulation import FireSimulation
from .spread import SpreadModel, Weather
from .suppression import SuppressionField, SuppressionKind, SuppressionSnapshot

__version__ = "0.1.0"

__all__ = [
    "CellSnapshot",
    "CellState",
    "ForestCell",
    "FuelType",
    "CrewType",
    "FirefightingCrew",
    "HumanFactorManager",
    "SuppressionAction",
    "SuppressionType",
    "Lattice",
    "FireSimulation",
    "SpreadModel",
    "Weather",
    "SuppressionField",
    "SuppressionKind",
    "SuppressionSnapshot",
]
