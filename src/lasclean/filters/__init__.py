# src/lasclean/filters/__init__.py
from __future__ import annotations

from .hampel import hampel_filter, modified_z_score
from .hermite_gap import Gap, find_gaps, hermite_gap_fill
from .savgol import normalize_window_order, savgol_coefficients, savgol_smooth

__all__ = [
    "hampel_filter",
    "modified_z_score",
    "Gap",
    "find_gaps",
    "hermite_gap_fill",
    "normalize_window_order",
    "savgol_coefficients",
    "savgol_smooth",
]
