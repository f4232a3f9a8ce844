"""Text projection of the lattice, with crew and suppression overlays."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .crews import HumanFactorManager
    from .lattice import Lattice

STRONG_SUPPRESSION = 0.5

LEGEND = (
    "Legend: . = grass, o = shrub, T = tree, * = fire, x = burned\n"
    "        ~ = water/suppression, # = rock/firebreak, R = retardant\n"
    "        G = ground crew, W = water tanker, A = air tanker, H = helicopter"
)


def overlay_char(lattice: "Lattice", x: int, y: int, manager: Optional["HumanFactorManager"] = None) -> str:
    """Character for one position: crew marker, then suppression marker,
    then the cell's own classification."""
    if manager is not None:
        marker = manager.crew_marker(x, y)
        if marker != " ":
            return marker

    effect = lattice.suppression_at(x, y)
    if effect is not None:
        if effect.is_firebreak:
            return "#"
        if effect.water_level > STRONG_SUPPRESSION:
            return "~"
        if effect.retardant_level > STRONG_SUPPRESSION:
            return "R"
    return lattice.display_char(x, y)


def grid_rows(lattice: "Lattice", manager: Optional["HumanFactorManager"] = None, overlays: bool = True) -> list[str]:
    width, height = lattice.dimensions()
    if not overlays:
        return ["".join(lattice.display_char(x, y) for x in range(width)) for y in range(height)]
    return ["".join(overlay_char(lattice, x, y, manager) for x in range(width)) for y in range(height)]


def render_grid(
    lattice: "Lattice",
    manager: Optional["HumanFactorManager"] = None,
    border: bool = True,
    overlays: bool = True,
) -> str:
    """Render the lattice as text, optionally framed by a ``+--+`` border."""
    rows = grid_rows(lattice, manager, overlays)
    if not border:
        return "\n".join(rows)
    width = lattice.dimensions()[0]
    edge = "+" + "-" * width + "+"
    return "\n".join([edge, *(f"|{row}|" for row in rows), edge])
