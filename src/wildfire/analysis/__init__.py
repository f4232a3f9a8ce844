"""Analysis package.

Compares time-of-arrival grids recorded by the lattice and plots them.
"""

from .metrics import Confusion, ToaErrorMetrics, burned_fraction, burned_mask, confusion_matrix, toa_error_metrics
from .plots import GridVisualizer

__all__ = [
    "Confusion",
    "ToaErrorMetrics",
    "burned_fraction",
    "burned_mask",
    "confusion_matrix",
    "toa_error_metrics",
    "GridVisualizer",
]
