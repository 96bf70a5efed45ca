# src/lasclean/qc/__init__.py
from __future__ import annotations

from .quality import QualityReport, QualitySummary, assess_quality, summarize_quality

__all__ = ["QualityReport", "QualitySummary", "assess_quality", "summarize_quality"]
