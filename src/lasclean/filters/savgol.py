# src/lasclean/filters/savgol.py
from __future__ import annotations

import math
from functools import lru_cache
from typing import Tuple

import numpy as np

from lasclean.numerics.linalg import invert, multiply, transpose

# Fraction of the window that must be present before a sample is smoothed.
MIN_PRESENT_FRAC = 0.7


def normalize_window_order(window: int, order: int) -> Tuple[int, int]:
    """Even windows grow by one; order is clamped below the window."""
    w = int(window)
    o = int(order)
    if w % 2 == 0:
        w += 1
    if o >= w:
        o = w - 1
    return w, o


@lru_cache(maxsize=64)
def _coefficients(window: int, order: int) -> Tuple[float, ...]:
    half = window // 2
    offsets = np.arange(-half, half + 1, dtype="float64")
    # Vandermonde: columns offset^0 .. offset^order
    a = np.vander(offsets, N=order + 1, increasing=True)
    at = transpose(a)
    pinv = multiply(invert(multiply(at, a)), at)
    return tuple(float(c) for c in pinv[0])


def savgol_coefficients(window: int, order: int) -> np.ndarray:
    """
    Least-squares smoothing kernel for a centred polynomial fit.

    Returns the first row of (A^T A)^-1 A^T for the Vandermonde matrix A over
    offsets [-half..half], i.e. the weights that reproduce the fitted value at the
    window centre. Raises NumericError if A^T A cannot be inverted.
    """
    w, o = normalize_window_order(window, order)
    return np.asarray(_coefficients(w, o), dtype="float64")


def savgol_smooth(samples: np.ndarray, window: int = 11, order: int = 3) -> np.ndarray:
    """
    Savitzky-Golay smoothing tolerant of missing (NaN) samples.

    Notes:
      - The first and last window//2 samples pass through unchanged.
      - Missing centres stay missing.
      - A centre is smoothed only when at least ceil(0.7 * window) samples of its
        neighbourhood are present. The weighted sum skips missing samples without
        renormalizing the remaining weights, so sparse windows are biased toward 0.
    """
    x = np.asarray(samples, dtype="float64").reshape(-1)
    out = x.copy()

    w, o = normalize_window_order(window, order)
    half = w // 2
    if x.size < w:
        return out

    coeffs = savgol_coefficients(w, o)
    min_present = int(math.ceil(w * MIN_PRESENT_FRAC))
    present = np.isfinite(x)

    for i in range(half, x.size - half):
        if not present[i]:
            continue
        seg = x[i - half : i + half + 1]
        m = present[i - half : i + half + 1]
        if int(np.count_nonzero(m)) < min_present:
            continue
        out[i] = float(np.dot(seg[m], coeffs[m]))

    return out
