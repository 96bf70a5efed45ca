# src/lasclean/config/defaults.py
from __future__ import annotations

from .schema import FILTER_ORDER, FilterRequest, InterpolateConfig, OutlierConfig, SmoothConfig


def default_filter_request() -> FilterRequest:
    """All three filters with their documented defaults."""
    return FilterRequest(
        filters=FILTER_ORDER,
        smooth=SmoothConfig(),
        outlier=OutlierConfig(),
        interpolate=InterpolateConfig(),
    )
