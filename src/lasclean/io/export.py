# src/lasclean/io/export.py
from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

try:
    import pandas as pd  # type: ignore
except Exception:  # pragma: no cover
    pd = None  # type: ignore

from lasclean.pipelines.clean_curves import PipelineResult
from lasclean.utils.config import as_plain_dict


def _require_pd() -> None:
    if pd is None:
        raise RuntimeError("pandas is required. Install with: pip install pandas")


def _num(v: Any) -> Optional[float]:
    """Finite float, or None (JSON has no NaN/Inf)."""
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def _samples(a: np.ndarray) -> List[Optional[float]]:
    return [_num(v) for v in np.asarray(a, dtype="float64").reshape(-1)]


def result_to_payload(result: PipelineResult) -> Dict[str, Any]:
    """
    JSON-safe mapping of a pipeline result, keyed the way the web client reads it.
    Missing samples and non-finite metrics become None.
    """
    curves: Dict[str, Any] = {}
    metrics: Dict[str, Any] = {}
    for mn, pc in result.curves.items():
        curves[mn] = {
            "original": _samples(pc.original),
            "processed": _samples(pc.processed),
            "unit": pc.unit,
            "description": pc.description,
            "status": pc.status,
            "error": pc.error,
        }
        q = result.quality[mn]
        metrics[mn] = {
            "snr": _num(q.snr),
            "correlation": _num(q.correlation),
            "rmse": _num(q.rmse),
            "n_valid": int(q.n_valid),
        }

    s = result.summary()
    req = result.request
    return {
        "success": not result.errors,
        "version": as_plain_dict(result.version),
        "wellInfo": as_plain_dict(result.well_info),
        "curves": curves,
        "qualityMetrics": metrics,
        "processingParameters": {f: as_plain_dict(getattr(req, f)) for f in result.algorithms_applied},
        "algorithmsApplied": list(result.algorithms_applied),
        "skippedRows": list(result.skipped_rows),
        "errors": dict(result.errors),
        "summary": {
            "n_curves": int(s.n_curves),
            "mean_snr": _num(s.mean_snr),
            "mean_correlation": _num(s.mean_correlation),
            "mean_rmse": _num(s.mean_rmse),
        },
    }


def write_result_json(result: PipelineResult, path: Path) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(result_to_payload(result), indent=2), encoding="utf-8")
    return p


def result_to_frame(result: PipelineResult) -> "pd.DataFrame":
    """
    One row per sample; columns <MNEM> (original) and <MNEM>_processed per curve.
    """
    _require_pd()
    cols: Dict[str, np.ndarray] = {}
    for mn, pc in result.curves.items():
        cols[mn] = np.asarray(pc.original, dtype="float64")
        cols[f"{mn}_processed"] = np.asarray(pc.processed, dtype="float64")
    df = pd.DataFrame(cols)
    df.index.name = "sample"
    return df


def write_result_csv(result: PipelineResult, path: Path) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    result_to_frame(result).to_csv(p, index=True, na_rep="")
    return p
