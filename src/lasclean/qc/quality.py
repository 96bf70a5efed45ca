# src/lasclean/qc/quality.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

# Added to the residual variance so identical curves give a large finite SNR.
NOISE_EPS = 1e-10


@dataclass(frozen=True)
class QualityReport:
    snr: float = 0.0
    correlation: float = 0.0
    rmse: float = 0.0
    n_valid: int = 0


@dataclass(frozen=True)
class QualitySummary:
    n_curves: int
    mean_snr: float
    mean_correlation: float
    mean_rmse: float


def _pearson(a: np.ndarray, b: np.ndarray) -> float:
    da = a - a.mean()
    db = b - b.mean()
    denom = float(np.sqrt(np.dot(da, da) * np.dot(db, db)))
    if denom == 0.0 or not np.isfinite(denom):
        return 0.0
    r = float(np.dot(da, db)) / denom
    return float(np.clip(r, -1.0, 1.0))


def assess_quality(original: np.ndarray, processed: np.ndarray) -> QualityReport:
    """
    Compare a processed curve to its original over positions present in both.

    snr:
      10*log10(var(original) / (var(original - processed) + 1e-10)) in dB, population
      variances. A flat original (zero variance) has no signal to measure and gets 0.
    correlation:
      Pearson r, 0 when either side is constant.
    rmse:
      sqrt(mean((original - processed)^2)).

    No overlapping samples -> all-zero report.
    """
    a = np.asarray(original, dtype="float64").reshape(-1)
    b = np.asarray(processed, dtype="float64").reshape(-1)
    if a.size != b.size:
        raise ValueError(f"original/processed length mismatch: {a.size} != {b.size}")

    both = np.isfinite(a) & np.isfinite(b)
    n = int(np.count_nonzero(both))
    if n == 0:
        return QualityReport()

    a = a[both]
    b = b[both]
    resid = a - b

    var_sig = float(np.var(a))
    var_noise = float(np.var(resid))
    if var_sig > 0.0:
        snr = float(10.0 * np.log10(var_sig / (var_noise + NOISE_EPS)))
    else:
        snr = 0.0

    rmse = float(np.sqrt(np.mean(resid * resid)))
    return QualityReport(snr=snr, correlation=_pearson(a, b), rmse=rmse, n_valid=n)


def summarize_quality(reports: Iterable[QualityReport]) -> QualitySummary:
    rs = list(reports)
    if not rs:
        return QualitySummary(n_curves=0, mean_snr=0.0, mean_correlation=0.0, mean_rmse=0.0)
    return QualitySummary(
        n_curves=len(rs),
        mean_snr=float(np.mean([r.snr for r in rs])),
        mean_correlation=float(np.mean([r.correlation for r in rs])),
        mean_rmse=float(np.mean([r.rmse for r in rs])),
    )
