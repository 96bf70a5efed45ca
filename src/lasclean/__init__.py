# src/lasclean/__init__.py
from __future__ import annotations

"""
lasclean

Clean noisy, gapped well-log curves from LAS text: parse, filter
(Savitzky-Golay / Hampel / cubic Hermite gap-fill) and score the result.

Boundary operations:
  - parse_document(raw_text) -> LogDocument      (raises ParseError)
  - run_pipeline(document, request) -> PipelineResult
"""

from lasclean.config.schema import FilterRequest, InterpolateConfig, OutlierConfig, SmoothConfig
from lasclean.errors import ConfigError, LasCleanError, NumericError, ParseError
from lasclean.io.las_text import LogDocument, parse_document, try_parse_document
from lasclean.pipelines.clean_curves import PipelineResult, ProcessedCurve, run_pipeline
from lasclean.qc.quality import QualityReport

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "FilterRequest",
    "InterpolateConfig",
    "LasCleanError",
    "LogDocument",
    "NumericError",
    "OutlierConfig",
    "ParseError",
    "PipelineResult",
    "ProcessedCurve",
    "QualityReport",
    "SmoothConfig",
    "parse_document",
    "run_pipeline",
    "try_parse_document",
]
