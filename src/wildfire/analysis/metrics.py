from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np


ArrayLike = Any


@dataclass(frozen=True)
class Confusion:
    """Confusion counts for two burned/unburned maps (candidate vs reference)."""

    tp: int
    fp: int
    fn: int
    tn: int

    @property
    def precision(self) -> float:
        return _safe_div(self.tp, self.tp + self.fp)

    @property
    def recall(self) -> float:
        return _safe_div(self.tp, self.tp + self.fn)

    @property
    def f1(self) -> float:
        p = self.precision
        r = self.recall
        return 0.0 if (p + r) == 0.0 else 2.0 * p * r / (p + r)

    @property
    def iou(self) -> float:
        # Overlap of the two burn scars
        return _safe_div(self.tp, self.tp + self.fp + self.fn)


@dataclass(frozen=True)
class ToaErrorMetrics:
    """Arrival-time differences over cells that burned in both runs."""

    n: int
    bias: float
    mae: float
    rmse: float


def _as_float_array(x: ArrayLike) -> np.ndarray:
    arr = np.asarray(x, dtype=float)
    if arr.ndim != 2:
        raise ValueError(f"Expected 2D array, got shape={arr.shape}")
    return arr


def _checked_pair(candidate: ArrayLike, reference: ArrayLike) -> tuple[np.ndarray, np.ndarray]:
    cand = _as_float_array(candidate)
    ref = _as_float_array(reference)
    if cand.shape != ref.shape:
        raise ValueError(f"Shape mismatch: candidate={cand.shape} reference={ref.shape}")
    return cand, ref


def _safe_div(num: float, den: float) -> float:
    return 0.0 if den == 0 else float(num) / float(den)


def burned_mask(toa: ArrayLike) -> np.ndarray:
    """Cells that caught fire at some point (finite time of arrival)."""

    return np.isfinite(_as_float_array(toa))


def confusion_matrix(
    candidate_toa: ArrayLike,
    reference_toa: ArrayLike,
    *,
    mask: ArrayLike | None = None,
) -> Confusion:
    """Compare the burn scars of two runs, e.g. with and without suppression.

    Counts cover the whole lattice unless ``mask`` restricts them.
    """

    cand, ref = _checked_pair(candidate_toa, reference_toa)
    domain = np.ones(cand.shape, dtype=bool) if mask is None else np.asarray(mask, dtype=bool)

    cand_b = burned_mask(cand)
    ref_b = burned_mask(ref)

    return Confusion(
        tp=int(np.sum(domain & cand_b & ref_b)),
        fp=int(np.sum(domain & cand_b & ~ref_b)),
        fn=int(np.sum(domain & ~cand_b & ref_b)),
        tn=int(np.sum(domain & ~cand_b & ~ref_b)),
    )


def toa_error_metrics(
    candidate_toa: ArrayLike,
    reference_toa: ArrayLike,
    *,
    mask: ArrayLike | None = None,
) -> ToaErrorMetrics:
    """Bias/MAE/RMSE of arrival times where both runs burned.

    Returns n=0 and zeros when there are no comparable cells.
    """

    cand, ref = _checked_pair(candidate_toa, reference_toa)

    valid = np.isfinite(cand) & np.isfinite(ref)
    if mask is not None:
        valid = valid & np.asarray(mask, dtype=bool)

    if not np.any(valid):
        return ToaErrorMetrics(n=0, bias=0.0, mae=0.0, rmse=0.0)

    diff = cand[valid] - ref[valid]
    return ToaErrorMetrics(
        n=int(diff.size),
        bias=float(np.mean(diff)),
        mae=float(np.mean(np.abs(diff))),
        rmse=float(np.sqrt(np.mean(diff**2))),
    )


def burned_fraction(toa: ArrayLike, *, mask: ArrayLike | None = None) -> float:
    """Share of (masked) cells that caught fire."""

    burned = burned_mask(toa)
    if mask is not None:
        domain = np.asarray(mask, dtype=bool)
        return _safe_div(int(np.sum(burned & domain)), int(np.sum(domain)))
    return _safe_div(int(np.sum(burned)), burned.size)
