from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Literal

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import ListedColormap

from ..cell import CellState, FuelType

if TYPE_CHECKING:
    from ..lattice import Lattice


@dataclass(frozen=True)
class TOASpec:
    """Defaults for time-of-arrival heatmaps."""

    cmap: str = "plasma_r"
    vmin: float | None = None
    vmax: float | None = None


@dataclass(frozen=True)
class GridTitles:
    left: str = "Reference"
    right: str = "Candidate"


DEFAULT_TOA = TOASpec()

# Category index -> colour for plot_states
STATE_CATEGORIES: list[tuple[str, str]] = [
    ("empty", "#FFFFFF"),
    ("water", "#1F4FFF"),
    ("rock", "#7F7F7F"),
    ("grass", "#B5E48C"),
    ("shrub", "#52B788"),
    ("tree", "#1B4332"),
    ("burning", "#FF3300"),
    ("burned", "#111111"),
]


def as_2d_numpy_grid(grid: Any, *, name: str = "grid") -> np.ndarray:
    array = np.asarray(grid)
    if array.ndim != 2:
        raise ValueError(f"{name} must be a 2D array (H x W). Got shape={array.shape}.")
    return array


def state_category_grid(lattice: "Lattice") -> np.ndarray:
    """(height, width) int array of STATE_CATEGORIES indices."""

    names = [name for name, _ in STATE_CATEGORIES]
    width, height = lattice.dimensions()
    grid = np.zeros((height, width), dtype=int)
    for y in range(height):
        for x in range(width):
            cell = lattice.cell_at(x, y)
            if cell.state == CellState.Burning:
                key = "burning"
            elif cell.state == CellState.Burned:
                key = "burned"
            elif cell.fuel_type in (FuelType.Water, FuelType.Rock) or cell.state == CellState.Fuel:
                key = cell.fuel_type.value
            else:
                key = "empty"
            grid[y, x] = names.index(key)
    return grid


def _format_metrics(
    metrics: dict[str, Any] | Iterable[tuple[str, Any]] | None,
    *,
    value_format: str,
) -> str | None:
    if not metrics:
        return None

    items = list(metrics.items()) if isinstance(metrics, dict) else list(metrics)
    lines: list[str] = []
    for key, value in items:
        if isinstance(value, (int, float, np.floating, np.integer)):
            rendered = value_format.format(float(value))
        else:
            rendered = str(value)
        lines.append(f"{key}={rendered}")
    return "\n".join(lines) if lines else None


class GridVisualizer:
    """Matplotlib rendering of lattice states and time-of-arrival grids.

    Row 0 of every grid is the northern edge of the lattice, so the default
    origin is ``upper``.
    """

    def __init__(
        self,
        *,
        show_colorbar: bool = True,
        origin: Literal["upper", "lower"] = "upper",
    ) -> None:
        self.show_colorbar = show_colorbar
        self.origin = origin

    def _draw_toa(self, ax: Any, toa2d: np.ndarray, spec: TOASpec, vmin, vmax, outline: bool) -> Any:
        # NaN (never burned) stays transparent
        cmap = plt.get_cmap(spec.cmap).copy()
        cmap.set_bad(alpha=0.0)
        im = ax.imshow(toa2d, cmap=cmap, vmin=vmin, vmax=vmax, origin=self.origin)
        if outline:
            finite = np.isfinite(toa2d)
            if np.any(finite) and not np.all(finite):
                ax.contour(finite.astype(float), levels=[0.5], colors=["black"], linewidths=1.0)
        return im

    def plot_toa(
        self,
        toa: Any,
        *,
        title: str = "Time of arrival",
        spec: TOASpec = DEFAULT_TOA,
        outline: bool = True,
        cbar_label: str = "Time since ignition (s)",
        metrics: dict[str, Any] | list[tuple[str, Any]] | None = None,
        metrics_value_format: str = "{:.2f}",
        ax: Any | None = None,
    ) -> Any:
        """Plot a single time-of-arrival grid and return its axes."""

        toa2d = as_2d_numpy_grid(toa, name="toa").astype(float)
        if ax is None:
            _, ax = plt.subplots(1, 1, figsize=(7, 5))

        im = self._draw_toa(ax, toa2d, spec, spec.vmin, spec.vmax, outline)
        ax.set_title(title)

        metrics_text = _format_metrics(metrics, value_format=metrics_value_format)
        if metrics_text:
            ax.text(0.98, 0.98, metrics_text, transform=ax.transAxes, ha="right", va="top", fontsize=9)

        if self.show_colorbar:
            cbar = plt.colorbar(im, ax=ax, fraction=0.046, pad=0.04)
            if cbar_label:
                cbar.set_label(cbar_label)
        return ax

    def plot_toa_compare(
        self,
        reference_toa: Any,
        candidate_toa: Any,
        *,
        titles: GridTitles | None = None,
        spec: TOASpec = DEFAULT_TOA,
        outline: bool = True,
        cbar_label: str = "Time since ignition (s)",
        metrics: dict[str, Any] | list[tuple[str, Any]] | None = None,
        metrics_value_format: str = "{:.2f}",
    ) -> Any:
        """Plot two time-of-arrival grids side by side on a shared colour scale."""

        left2d = as_2d_numpy_grid(reference_toa, name="reference_toa").astype(float)
        right2d = as_2d_numpy_grid(candidate_toa, name="candidate_toa").astype(float)
        if left2d.shape != right2d.shape:
            raise ValueError(f"TOA shapes must match. Got {left2d.shape} vs {right2d.shape}.")

        titles = titles or GridTitles()
        fig, axes = plt.subplots(1, 2, figsize=(12, 5))

        stacked = np.stack([left2d, right2d])
        finite = np.isfinite(stacked)
        vmin, vmax = spec.vmin, spec.vmax
        if np.any(finite):
            vmin = float(np.nanmin(stacked)) if vmin is None else vmin
            vmax = float(np.nanmax(stacked)) if vmax is None else vmax

        self._draw_toa(axes[0], left2d, spec, vmin, vmax, outline)
        axes[0].set_title(titles.left)
        im = self._draw_toa(axes[1], right2d, spec, vmin, vmax, outline)
        axes[1].set_title(titles.right)

        metrics_text = _format_metrics(metrics, value_format=metrics_value_format)
        if metrics_text:
            axes[1].text(0.98, 0.98, metrics_text, transform=axes[1].transAxes, ha="right", va="top", fontsize=9)

        if self.show_colorbar:
            fig.subplots_adjust(right=0.88, wspace=0.14)
            cax = fig.add_axes([0.90, 0.15, 0.02, 0.70])
            cbar = fig.colorbar(im, cax=cax)
            if cbar_label:
                cbar.set_label(cbar_label)
        return fig

    def plot_states(self, lattice: "Lattice", *, title: str = "Lattice state", ax: Any | None = None) -> Any:
        """Categorical map of fuel, fire and burn scar."""

        grid = state_category_grid(lattice)
        if ax is None:
            _, ax = plt.subplots(1, 1, figsize=(7, 5))
        cmap = ListedColormap([color for _, color in STATE_CATEGORIES])
        ax.imshow(grid, cmap=cmap, vmin=0, vmax=len(STATE_CATEGORIES) - 1, origin=self.origin, interpolation="nearest")
        ax.set_title(title)
        ax.set_xticks([])
        ax.set_yticks([])
        return ax

    def save(self, fig: Any, path: str, *, dpi: int = 150) -> None:
        """Save a Matplotlib figure to disk."""

        fig.savefig(path, dpi=dpi, bbox_inches="tight")
