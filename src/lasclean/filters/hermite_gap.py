# src/lasclean/filters/hermite_gap.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

DEFAULT_MAX_GAP = 50


@dataclass(frozen=True)
class Gap:
    """
    A maximal run of missing samples.

    start / end are the present samples bracketing the run. A run touching the
    start of the sequence has start == -1; one touching the end has end == n.
    """
    start: int
    end: int
    length: int

    def is_bounded(self, n: int) -> bool:
        return self.start >= 0 and self.end < int(n)


def find_gaps(samples: np.ndarray) -> List[Gap]:
    x = np.asarray(samples, dtype="float64").reshape(-1)
    missing = ~np.isfinite(x)
    gaps: List[Gap] = []
    run_start = -1
    for i, m in enumerate(missing):
        if m:
            if run_start < 0:
                run_start = i
        elif run_start >= 0:
            gaps.append(Gap(start=run_start - 1, end=i, length=i - run_start))
            run_start = -1
    if run_start >= 0:
        gaps.append(Gap(start=run_start - 1, end=int(x.size), length=int(x.size) - run_start))
    return gaps


def hermite_basis(t: np.ndarray):
    """Cubic Hermite basis (h00, h10, h01, h11) evaluated at t."""
    t2 = t * t
    t3 = t2 * t
    h00 = 2 * t3 - 3 * t2 + 1
    h10 = t3 - 2 * t2 + t
    h01 = -2 * t3 + 3 * t2
    h11 = t3 - t2
    return h00, h10, h01, h11


def _fill_gap(x: np.ndarray, gap: Gap) -> np.ndarray:
    y0 = float(x[gap.start])
    y1 = float(x[gap.end])

    # One-sided differences from the sample just outside each boundary; 0 if unavailable.
    d0 = 0.0
    if gap.start > 0 and np.isfinite(x[gap.start - 1]):
        d0 = y0 - float(x[gap.start - 1])
    d1 = 0.0
    if gap.end < x.size - 1 and np.isfinite(x[gap.end + 1]):
        d1 = float(x[gap.end + 1]) - y1

    t = np.arange(1, gap.length + 1, dtype="float64") / float(gap.length + 1)
    h00, h10, h01, h11 = hermite_basis(t)
    return h00 * y0 + h10 * d0 + h01 * y1 + h11 * d1


def hermite_gap_fill(samples: np.ndarray, max_gap: int = DEFAULT_MAX_GAP) -> np.ndarray:
    """
    Fill short interior gaps with a cubic Hermite segment.

    Only runs of at most max_gap missing samples with a present sample on both sides
    are filled; longer runs and runs at either end stay missing. Derivatives are
    plain finite differences (no Fritsch-Carlson limiting), so overshoot is possible.
    """
    x = np.asarray(samples, dtype="float64").reshape(-1)
    out = x.copy()
    for gap in find_gaps(x):
        if gap.length > int(max_gap) or not gap.is_bounded(x.size):
            continue
        out[gap.start + 1 : gap.end] = _fill_gap(x, gap)
    return out
