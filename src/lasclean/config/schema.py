# src/lasclean/config/schema.py
from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from lasclean.errors import ConfigError

FILTER_SMOOTH = "smooth"
FILTER_OUTLIER = "outlier"
FILTER_INTERPOLATE = "interpolate"

# Application order is fixed regardless of request order.
FILTER_ORDER: Tuple[str, ...] = (FILTER_SMOOTH, FILTER_OUTLIER, FILTER_INTERPOLATE)

# Identifiers used by the web client request ("algorithms": [...]).
FILTER_ALIASES: Dict[str, str] = {
    "smooth": FILTER_SMOOTH,
    "savgol": FILTER_SMOOTH,
    "savgolay": FILTER_SMOOTH,
    "outlier": FILTER_OUTLIER,
    "hampel": FILTER_OUTLIER,
    "interpolate": FILTER_INTERPOLATE,
    "pchip": FILTER_INTERPOLATE,
}

_PARAM_ALIASES: Dict[str, str] = {
    "maxGap": "max_gap",
    "maxgap": "max_gap",
}


@dataclass(frozen=True)
class SmoothConfig:
    window: int = 11
    order: int = 3


@dataclass(frozen=True)
class OutlierConfig:
    # in robust sigmas (modified z-score)
    threshold: float = 3.0
    window: int = 7


@dataclass(frozen=True)
class InterpolateConfig:
    max_gap: int = 50


@dataclass(frozen=True)
class FilterRequest:
    filters: Tuple[str, ...] = ()
    smooth: SmoothConfig = SmoothConfig()
    outlier: OutlierConfig = OutlierConfig()
    interpolate: InterpolateConfig = InterpolateConfig()

    def enabled(self, name: str) -> bool:
        return name in self.filters

    def ordered_filters(self) -> Tuple[str, ...]:
        return tuple(f for f in FILTER_ORDER if f in self.filters)


def canonical_filter_name(name: str) -> str:
    key = str(name or "").strip()
    canon = FILTER_ALIASES.get(key) or FILTER_ALIASES.get(key.lower())
    if canon is None:
        raise ConfigError(f"Unknown filter {name!r}; expected one of {list(FILTER_ORDER)}")
    return canon


def _check_int(value: Any, *, name: str, minimum: int) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer (got {value!r})")
    try:
        f = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer (got {value!r})") from e
    if not math.isfinite(f) or f != int(f):
        raise ConfigError(f"{name} must be an integer (got {value!r})")
    i = int(f)
    if i < minimum:
        raise ConfigError(f"{name} must be >= {minimum} (got {i})")
    return i


def _check_positive_float(value: Any, *, name: str) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a number (got {value!r})")
    try:
        f = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be a number (got {value!r})") from e
    if not math.isfinite(f) or f <= 0.0:
        raise ConfigError(f"{name} must be a positive finite number (got {value!r})")
    return f


def validate_filter_request(req: FilterRequest) -> FilterRequest:
    """
    Check every parameter once, at the pipeline boundary.

    Returns a FilterRequest with canonical, de-duplicated filter ids and coerced
    numeric types. Raises ConfigError on anything invalid.
    """
    seen = []
    for f in req.filters:
        c = canonical_filter_name(f)
        if c not in seen:
            seen.append(c)

    smooth = SmoothConfig(
        window=_check_int(req.smooth.window, name="smooth.window", minimum=1),
        order=_check_int(req.smooth.order, name="smooth.order", minimum=0),
    )
    outlier = OutlierConfig(
        threshold=_check_positive_float(req.outlier.threshold, name="outlier.threshold"),
        window=_check_int(req.outlier.window, name="outlier.window", minimum=1),
    )
    interpolate = InterpolateConfig(
        max_gap=_check_int(req.interpolate.max_gap, name="interpolate.max_gap", minimum=1),
    )
    return FilterRequest(
        filters=tuple(seen),
        smooth=smooth,
        outlier=outlier,
        interpolate=interpolate,
    )


def _build_section(cls: Any, d: Any, *, name: str) -> Any:
    if d is None:
        return cls()
    if isinstance(d, cls):
        return d
    if not isinstance(d, Mapping):
        raise ConfigError(f"Parameters for {name!r} must be a mapping (got {type(d).__name__})")
    known = {f.name for f in fields(cls)}
    kwargs: Dict[str, Any] = {}
    for k, v in d.items():
        key = _PARAM_ALIASES.get(str(k), str(k))
        if key not in known:
            raise ConfigError(f"Unknown parameter {name}.{k}; expected one of {sorted(known)}")
        if v is None:
            continue
        kwargs[key] = v
    return cls(**kwargs)


def _params_for(sections: Sequence[Tuple[str, Any]], canon: str) -> Optional[Any]:
    """Merge every section that names this filter (aliases included); later sections win."""
    found: Optional[Any] = None
    for k, v in sections:
        try:
            c = canonical_filter_name(k)
        except ConfigError:
            raise ConfigError(f"Parameters given for unknown filter {k!r}") from None
        if c != canon or v is None:
            continue
        if isinstance(found, Mapping) and isinstance(v, Mapping):
            found = {**found, **v}
        else:
            found = v
    return found


def build_filter_request(spec: Any) -> FilterRequest:
    """
    Build a validated FilterRequest.

    Accepts:
      - a FilterRequest (re-validated)
      - a mapping with "filters" (or "algorithms") and optional per-filter parameter
        sections, either at the top level ({"smooth": {...}}) or nested under
        "params" / "parameters" (aliases such as "savgolay" / "hampel" / "pchip"
        and "maxGap" are understood)
      - a plain iterable of filter ids (default parameters)
      - None (no filters)
    """
    if spec is None:
        return FilterRequest()
    if isinstance(spec, FilterRequest):
        return validate_filter_request(spec)
    if isinstance(spec, str):
        return validate_filter_request(FilterRequest(filters=_split_ids(spec)))
    if not isinstance(spec, Mapping):
        if isinstance(spec, Iterable):
            return validate_filter_request(FilterRequest(filters=tuple(str(s) for s in spec)))
        raise ConfigError(f"Unsupported filter request type: {type(spec).__name__}")

    ids = spec.get("filters", spec.get("algorithms", ()))
    if isinstance(ids, str):
        ids = _split_ids(ids)
    if not isinstance(ids, Iterable):
        raise ConfigError("filters must be a list of filter identifiers")

    params: List[Tuple[str, Any]] = [(k, spec[k]) for k in FILTER_ALIASES if k in spec]
    for key in ("parameters", "params"):
        nested = spec.get(key) or {}
        if not isinstance(nested, Mapping):
            raise ConfigError(f"{key} must be a mapping of filter -> parameters")
        params.extend(nested.items())

    req = FilterRequest(
        filters=tuple(str(s) for s in ids),
        smooth=_build_section(SmoothConfig, _params_for(params, FILTER_SMOOTH), name=FILTER_SMOOTH),
        outlier=_build_section(OutlierConfig, _params_for(params, FILTER_OUTLIER), name=FILTER_OUTLIER),
        interpolate=_build_section(
            InterpolateConfig, _params_for(params, FILTER_INTERPOLATE), name=FILTER_INTERPOLATE
        ),
    )
    return validate_filter_request(req)


def _split_ids(s: str) -> Tuple[str, ...]:
    return tuple(t.strip() for t in s.replace(";", ",").split(",") if t.strip())
