# src/lasclean/filters/hampel.py
from __future__ import annotations

import numpy as np

# Scales MAD to the standard deviation of a normal distribution.
MAD_SCALE = 0.6745
MIN_WINDOW_PRESENT = 3


def modified_z_score(x: float, median: float, mad: float) -> float:
    """
    0.6745 * (x - median) / MAD

    With MAD == 0 any value off the median scores +/-inf and the median itself scores 0.
    """
    dev = float(x) - float(median)
    if mad == 0.0:
        if dev == 0.0:
            return 0.0
        return float("inf") if dev > 0 else float("-inf")
    return MAD_SCALE * dev / float(mad)


def hampel_filter(samples: np.ndarray, threshold: float = 3.0, window: int = 7) -> np.ndarray:
    """
    Replace outliers with their neighbourhood median.

    A present sample with a full window is flagged when |modified z| > threshold,
    using the median and MAD of the present samples in its window (at least 3 are
    required). Statistics always come from the input, not from earlier replacements.
    Edge samples (window//2 at each end) are left as they are.
    """
    x = np.asarray(samples, dtype="float64").reshape(-1)
    out = x.copy()

    w = int(window)
    if w % 2 == 0:
        w += 1
    half = w // 2
    present = np.isfinite(x)

    for i in range(half, x.size - half):
        if not present[i]:
            continue
        seg = x[i - half : i + half + 1]
        vals = seg[np.isfinite(seg)]
        if vals.size < MIN_WINDOW_PRESENT:
            continue
        med = float(np.median(vals))
        mad = float(np.median(np.abs(vals - med)))
        z = modified_z_score(x[i], med, mad)
        if abs(z) > float(threshold):
            out[i] = med

    return out
