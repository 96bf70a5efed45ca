# src/lasclean/pipelines/clean_curves.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

from lasclean.config.defaults import default_filter_request
from lasclean.config.schema import (
    FILTER_INTERPOLATE,
    FILTER_OUTLIER,
    FILTER_SMOOTH,
    FilterRequest,
    build_filter_request,
)
from lasclean.errors import NumericError
from lasclean.filters.hampel import hampel_filter
from lasclean.filters.hermite_gap import hermite_gap_fill
from lasclean.filters.savgol import savgol_smooth
from lasclean.io.las_text import Curve, HeaderItem, LogDocument, parse_las_text
from lasclean.qc.quality import QualityReport, QualitySummary, assess_quality, summarize_quality

STATUS_OK = "OK"
STATUS_FAIL = "FAIL"

# Errors that belong to one curve; anything else is a bug and propagates.
CURVE_ERRORS = (NumericError, ValueError, FloatingPointError)


@dataclass(frozen=True)
class ProcessedCurve:
    mnemonic: str
    original: np.ndarray
    processed: np.ndarray
    unit: str
    description: str
    status: str = STATUS_OK
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK


@dataclass(frozen=True)
class PipelineResult:
    curves: Dict[str, ProcessedCurve]
    quality: Dict[str, QualityReport]
    request: FilterRequest
    well_info: Dict[str, HeaderItem] = field(default_factory=dict)
    version: Optional[HeaderItem] = None
    skipped_rows: Tuple[int, ...] = ()

    @property
    def errors(self) -> Dict[str, str]:
        return {k: c.error for k, c in self.curves.items() if not c.ok}

    @property
    def algorithms_applied(self) -> Tuple[str, ...]:
        return self.request.ordered_filters()

    def summary(self) -> QualitySummary:
        """Mean quality over the curves that processed cleanly."""
        return summarize_quality(self.quality[k] for k, c in self.curves.items() if c.ok)


FilterFn = Callable[[np.ndarray, FilterRequest], np.ndarray]

_FILTERS: Dict[str, FilterFn] = {
    FILTER_SMOOTH: lambda x, req: savgol_smooth(x, window=req.smooth.window, order=req.smooth.order),
    FILTER_OUTLIER: lambda x, req: hampel_filter(
        x, threshold=req.outlier.threshold, window=req.outlier.window
    ),
    FILTER_INTERPOLATE: lambda x, req: hermite_gap_fill(x, max_gap=req.interpolate.max_gap),
}


def apply_filters(samples: np.ndarray, req: FilterRequest) -> np.ndarray:
    """Run the requested filters in fixed order (smooth -> outlier -> interpolate)."""
    x = np.asarray(samples, dtype="float64").reshape(-1).copy()
    for name in req.ordered_filters():
        y = _FILTERS[name](x, req)
        if y.size != x.size:
            raise ValueError(f"{name} changed curve length: {x.size} -> {y.size}")
        x = y
    return x


def process_curve(curve: Curve, req: FilterRequest) -> Tuple[ProcessedCurve, QualityReport]:
    """
    Filter one curve and score it against its raw samples.

    Failures confined to this curve (singular kernel, bad values) come back as a
    FAIL curve whose processed samples equal the original, with a zeroed report.
    """
    original = np.array(curve.values, dtype="float64", copy=True).reshape(-1)
    try:
        processed = apply_filters(original, req)
        report = assess_quality(original, processed)
    except CURVE_ERRORS as e:
        pc = ProcessedCurve(
            mnemonic=curve.mnemonic,
            original=original,
            processed=original.copy(),
            unit=curve.unit,
            description=curve.description,
            status=STATUS_FAIL,
            error=f"{type(e).__name__}: {e}",
        )
        return pc, QualityReport()

    pc = ProcessedCurve(
        mnemonic=curve.mnemonic,
        original=original,
        processed=processed,
        unit=curve.unit,
        description=curve.description,
    )
    return pc, report


def run_pipeline(document: LogDocument, request: Any = None) -> PipelineResult:
    """
    Clean every curve of a parsed document.

    request:
      FilterRequest, mapping, or list of filter ids; validated once here
      (ConfigError before any curve is touched). None runs all three filters
      with default parameters.

    Curves are independent: one curve failing does not stop the others.
    The document is not modified and no returned array aliases it.
    """
    if request is None:
        request = default_filter_request()
    req = build_filter_request(request)

    curves: Dict[str, ProcessedCurve] = {}
    quality: Dict[str, QualityReport] = {}
    for mnemonic, curve in document.curves.items():
        pc, report = process_curve(curve, req)
        curves[mnemonic] = pc
        quality[mnemonic] = report

    return PipelineResult(
        curves=curves,
        quality=quality,
        request=req,
        well_info=dict(document.well_info),
        version=document.version,
        skipped_rows=tuple(document.skipped_rows),
    )


def process_las_text(text: str, request: Any = None) -> PipelineResult:
    """Parse LAS text and run the pipeline on it."""
    return run_pipeline(parse_las_text(text), request)
