#!/usr/bin/env python3
"""Headless runner for the wildfire simulation.

Edit the CONFIG block to pick a scenario and run parameters, or pass the
scenario name as the first argument:

    python scripts/run_simulation.py mixed
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict

# Add the src directory to the Python path
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

from wildfire.analysis import GridVisualizer, burned_fraction
from wildfire.config import get_scenario
from wildfire.simulation import FireSimulation

logger = logging.getLogger(__name__)


# ---- User-configurable parameters ----
CONFIG: Dict[str, Any] = {
    "scenario": "grassland",   # grassland | forest | mixed | demo
    "seed": None,              # int for a reproducible run
    "max_steps": None,         # None = run for the scenario duration
    "report_every": 100,       # steps between status reports
    "save_results": True,      # write <scenario>_results.txt
    "save_toa_plot": False,    # write <scenario>_toa.png
    "output_dir": project_root / "output",
}


def print_report(sim: FireSimulation) -> None:
    for line in sim.status_lines()[:6]:
        logger.info(line)
    for line in sim.human_manager.status_lines():
        logger.info(line)


def main() -> None:
    """Run one scenario to burn-out or to its time limit."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    name = sys.argv[1] if len(sys.argv) > 1 else CONFIG["scenario"]
    scenario = get_scenario(name)

    sim = FireSimulation.from_config(scenario, seed=CONFIG["seed"])
    print("--- INITIAL STATE ---")
    print(sim.render())

    steps = sim.run(
        duration=scenario.duration,
        max_steps=CONFIG["max_steps"],
        report_every=CONFIG["report_every"],
        reporter=print_report,
    )

    print(f"\n--- FINAL STATE after {steps} steps ---")
    print("\n".join(sim.status_lines()))
    print("\n".join(sim.human_manager.status_lines()))
    print(sim.render())

    toa = sim.lattice.time_of_arrival()
    logger.info(f"Burned fraction of lattice: {burned_fraction(toa):.1%}")

    out_dir = Path(CONFIG["output_dir"])
    if CONFIG["save_results"] or CONFIG["save_toa_plot"]:
        out_dir.mkdir(parents=True, exist_ok=True)
    if CONFIG["save_results"]:
        sim.save_to_file(out_dir / f"{name}_results.txt")
    if CONFIG["save_toa_plot"]:
        viz = GridVisualizer()
        ax = viz.plot_toa(toa, title=f"{name}: time of arrival")
        viz.save(ax.figure, str(out_dir / f"{name}_toa.png"))


if __name__ == "__main__":
    main()
