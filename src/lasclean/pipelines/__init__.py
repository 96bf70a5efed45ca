# src/lasclean/pipelines/__init__.py
from __future__ import annotations

from .clean_curves import (
    PipelineResult,
    ProcessedCurve,
    apply_filters,
    process_curve,
    process_las_text,
    run_pipeline,
)

__all__ = [
    "PipelineResult",
    "ProcessedCurve",
    "apply_filters",
    "process_curve",
    "process_las_text",
    "run_pipeline",
]
