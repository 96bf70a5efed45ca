# src/lasclean/config/__init__.py
from __future__ import annotations

from .defaults import default_filter_request
from .schema import (
    FILTER_INTERPOLATE,
    FILTER_ORDER,
    FILTER_OUTLIER,
    FILTER_SMOOTH,
    FilterRequest,
    InterpolateConfig,
    OutlierConfig,
    SmoothConfig,
    build_filter_request,
    canonical_filter_name,
    validate_filter_request,
)

__all__ = [
    "FILTER_INTERPOLATE",
    "FILTER_ORDER",
    "FILTER_OUTLIER",
    "FILTER_SMOOTH",
    "FilterRequest",
    "InterpolateConfig",
    "OutlierConfig",
    "SmoothConfig",
    "build_filter_request",
    "canonical_filter_name",
    "default_filter_request",
    "validate_filter_request",
]
