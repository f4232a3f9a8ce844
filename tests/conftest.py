import os
import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    """Ensure `src/` is on sys.path so tests can import `wildfire.*`.

    This repo uses the common `src/` layout but is not necessarily installed as a package
    in the active environment. Plots are rendered off-screen.
    """

    project_root = Path(__file__).resolve().parents[1]
    src_dir = project_root / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))
    os.environ.setdefault("MPLBACKEND", "Agg")


@pytest.fixture
def grass_lattice():
    """5x5 lattice of dense, dry grass with no wind."""
    from wildfire.cell import FuelType
    from wildfire.lattice import Lattice

    lattice = Lattice(width=5, height=5, seed=42)
    lattice.fill(FuelType.Grass, 1.0, 0.0)
    lattice.wind_speed = 0.0
    return lattice
