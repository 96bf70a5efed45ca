from __future__ import annotations

import math

import numpy as np
import pytest

from lasclean.qc.quality import QualityReport, assess_quality, summarize_quality

nan = np.nan


def test_identical_curves() -> None:
    x = np.arange(10, dtype="float64")
    q = assess_quality(x, x.copy())
    assert q.rmse == 0.0
    assert q.correlation == pytest.approx(1.0)
    # var(x) = 8.25 over a 1e-10 noise floor
    assert q.snr == pytest.approx(10.0 * math.log10(8.25 / 1e-10))
    assert q.snr > 100.0
    assert q.n_valid == 10


def test_known_values() -> None:
    a = np.array([1.0, 2.0, 3.0, 4.0])
    b = np.array([1.0, 2.0, 3.0, 5.0])
    q = assess_quality(a, b)
    assert q.rmse == pytest.approx(0.5)
    assert q.snr == pytest.approx(10.0 * math.log10(1.25 / (0.1875 + 1e-10)))
    assert q.correlation == pytest.approx(np.corrcoef(a, b)[0, 1])


def test_only_jointly_present_positions_count() -> None:
    a = np.array([1.0, nan, 3.0, 4.0, 5.0])
    b = np.array([1.0, 2.0, nan, 4.0, 6.0])
    q = assess_quality(a, b)
    assert q.n_valid == 3
    assert q.rmse == pytest.approx(math.sqrt(1.0 / 3.0))


def test_no_overlap_gives_zero_report() -> None:
    q = assess_quality(np.array([nan, 1.0]), np.array([2.0, nan]))
    assert q == QualityReport(snr=0.0, correlation=0.0, rmse=0.0, n_valid=0)
    assert assess_quality(np.array([]), np.array([])) == QualityReport()


def test_correlation_bounds_and_degenerate_cases() -> None:
    x = np.linspace(0.0, 1.0, 25)
    assert assess_quality(x, -x).correlation == pytest.approx(-1.0)
    # constant processed side -> zero denominator -> 0
    assert assess_quality(x, np.full_like(x, 3.0)).correlation == 0.0

    rng = np.random.default_rng(11)
    for _ in range(20):
        a = rng.normal(size=30) * 1e6
        b = rng.normal(size=30)
        r = assess_quality(a, b).correlation
        assert -1.0 <= r <= 1.0


def test_flat_original_has_zero_snr() -> None:
    a = np.full(8, 2.0)
    q = assess_quality(a, a + 1.0)
    assert q.snr == 0.0
    assert q.rmse == pytest.approx(1.0)
    assert q.correlation == 0.0


def test_length_mismatch() -> None:
    with pytest.raises(ValueError):
        assess_quality(np.zeros(3), np.zeros(4))


def test_summarize_quality() -> None:
    s = summarize_quality(
        [
            QualityReport(snr=10.0, correlation=0.5, rmse=1.0, n_valid=5),
            QualityReport(snr=20.0, correlation=1.0, rmse=3.0, n_valid=5),
        ]
    )
    assert s.n_curves == 2
    assert s.mean_snr == pytest.approx(15.0)
    assert s.mean_correlation == pytest.approx(0.75)
    assert s.mean_rmse == pytest.approx(2.0)

    empty = summarize_quality([])
    assert empty.n_curves == 0 and empty.mean_snr == 0.0
