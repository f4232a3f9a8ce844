import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest

from wildfire.analysis import (
    GridVisualizer,
    burned_fraction,
    burned_mask,
    confusion_matrix,
    toa_error_metrics,
)
from wildfire.analysis.plots import STATE_CATEGORIES, state_category_grid
from wildfire.cell import FuelType
from wildfire.lattice import Lattice


def test_toa_error_metrics_perfect_match():
    reference = np.array(
        [
            [0.0, 1.0, 2.0],
            [np.nan, 3.0, np.nan],
        ]
    )
    candidate = reference.copy()

    m = toa_error_metrics(candidate, reference)
    assert m.n == 4
    assert m.bias == 0.0
    assert m.mae == 0.0
    assert m.rmse == 0.0


def test_toa_error_metrics_constant_time_shift():
    reference = np.array(
        [
            [0.0, 1.0, 2.0],
            [np.nan, 3.0, np.nan],
        ]
    )
    candidate = reference + 2.0

    m = toa_error_metrics(candidate, reference)
    assert m.n == 4
    assert np.isclose(m.bias, 2.0)
    assert np.isclose(m.mae, 2.0)
    assert np.isclose(m.rmse, 2.0)


def test_toa_error_metrics_handles_no_overlap():
    reference = np.array([[np.nan, np.nan], [np.nan, np.nan]])
    candidate = np.array([[0.0, 1.0], [2.0, 3.0]])

    m = toa_error_metrics(candidate, reference)
    assert m.n == 0
    assert m.rmse == 0.0


def test_toa_error_metrics_shape_mismatch():
    with pytest.raises(ValueError):
        toa_error_metrics(np.zeros((2, 2)), np.zeros((2, 3)))


def test_burned_mask_default():
    toa = np.array([[0.0, 5.0, np.nan]])
    assert burned_mask(toa).tolist() == [[True, True, False]]


def test_confusion_matrix_counts_whole_grid():
    # reference burns in (0,0) and (0,1); candidate burns in (0,0) and (1,1)
    reference = np.array([[0.0, 1.0], [np.nan, np.nan]])
    candidate = np.array([[0.0, np.nan], [np.nan, 2.0]])

    c = confusion_matrix(candidate, reference)
    assert (c.tp, c.fp, c.fn, c.tn) == (1, 1, 1, 1)
    assert np.isclose(c.precision, 0.5)
    assert np.isclose(c.recall, 0.5)
    assert np.isclose(c.f1, 0.5)
    assert np.isclose(c.iou, 1 / 3)


def test_confusion_matrix_with_mask():
    reference = np.array([[0.0, 1.0], [np.nan, np.nan]])
    candidate = np.array([[0.0, np.nan], [np.nan, 2.0]])
    mask = np.array([[True, True], [False, False]])

    c = confusion_matrix(candidate, reference, mask=mask)
    assert (c.tp, c.fp, c.fn, c.tn) == (1, 0, 1, 0)
    assert np.isclose(c.precision, 1.0)
    assert np.isclose(c.f1, 2 / 3)


def test_burned_fraction():
    toa = np.array([[0.0, np.nan], [3.0, np.nan]])
    assert burned_fraction(toa) == 0.5
    assert burned_fraction(toa, mask=np.array([[True, False], [False, False]])) == 1.0


def test_suppression_shrinks_burn_scar():
    """Compare a free-burning run against the same run with a firebreak."""

    def run(with_firebreak):
        lattice = Lattice(12, 8, seed=17)
        lattice.fill(FuelType.Grass, 1.0, 0.0)
        if with_firebreak:
            lattice.draw_firebreak((6, 0), (6, 7))
        lattice.ignite_at(2, 4)
        for _ in range(400):
            lattice.tick(1.0)
        return lattice.time_of_arrival()

    reference = run(False)
    candidate = run(True)

    c = confusion_matrix(candidate, reference)
    assert c.fp == 0
    assert c.fn > 0
    assert burned_fraction(candidate) < burned_fraction(reference)


def test_state_category_grid():
    lattice = Lattice(4, 2)
    lattice.fill(FuelType.Tree, 0.9, 0.2)
    lattice.draw_firebreak((0, 0), (0, 1))
    lattice.ignite_at(3, 1)

    names = [name for name, _ in STATE_CATEGORIES]
    grid = state_category_grid(lattice)
    assert grid.shape == (2, 4)
    assert grid[0, 0] == names.index("rock")
    assert grid[0, 1] == names.index("tree")
    assert grid[1, 3] == names.index("burning")


def test_plots_render():
    lattice = Lattice(6, 6, seed=1)
    lattice.fill(FuelType.Grass, 1.0, 0.0)
    lattice.ignite_at(3, 3)
    for _ in range(20):
        lattice.tick(1.0)
    toa = lattice.time_of_arrival()

    viz = GridVisualizer()
    ax = viz.plot_toa(toa, metrics={"burned": burned_fraction(toa)})
    assert ax.get_title() == "Time of arrival"

    fig = viz.plot_toa_compare(toa, toa)
    assert len(fig.axes) == 3

    ax = viz.plot_states(lattice)
    assert ax.get_title() == "Lattice state"
    plt.close("all")


def test_plot_toa_compare_shape_mismatch():
    with pytest.raises(ValueError):
        GridVisualizer().plot_toa_compare(np.zeros((2, 2)), np.zeros((3, 3)))


def test_save(tmp_path):
    viz = GridVisualizer(show_colorbar=False)
    ax = viz.plot_toa(np.array([[0.0, 1.0], [np.nan, 2.0]]))
    path = tmp_path / "toa.png"
    viz.save(ax.figure, str(path))
    assert path.exists()
    plt.close("all")
