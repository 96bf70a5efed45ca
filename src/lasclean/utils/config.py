# src/lasclean/utils/config.py
from __future__ import annotations

from dataclasses import is_dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from lasclean.config.schema import FilterRequest, build_filter_request

try:
    import yaml  # type: ignore
except Exception:  # pragma: no cover
    yaml = None  # type: ignore


def require_yaml() -> None:
    if yaml is None:
        raise RuntimeError("PyYAML is required for --config. Install with: pip install pyyaml")


def load_yaml(path: Path) -> Dict[str, Any]:
    require_yaml()
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {p}")
    obj = yaml.safe_load(p.read_text(encoding="utf-8"))
    return obj if isinstance(obj, dict) else {}


def deep_get(d: Dict[str, Any], key: str, default: Any = None) -> Any:
    cur: Any = d
    for part in key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)  # type: ignore[arg-type]
        else:
            out[k] = v
    return out


def as_plain_dict(x: Any) -> Any:
    if is_dataclass(x):
        return {k: as_plain_dict(v) for k, v in x.__dict__.items()}
    if isinstance(x, dict):
        return {k: as_plain_dict(v) for k, v in x.items()}
    if isinstance(x, (list, tuple)):
        return [as_plain_dict(v) for v in x]
    return x


def load_filter_request(
    path: Optional[Path] = None,
    *,
    overrides: Optional[Dict[str, Any]] = None,
    default_filters: Optional[Sequence[str]] = None,
) -> FilterRequest:
    """
    Build a validated FilterRequest from an optional YAML file plus overrides.

    The YAML may hold the request at the top level or under a "request" key:

        request:
          filters: [smooth, outlier, interpolate]
          smooth: {window: 11, order: 3}
          outlier: {threshold: 3.0, window: 7}
          interpolate: {max_gap: 50}

    Overrides are deep-merged on top (CLI flags win over the file). When neither
    source names any filters, default_filters is used.
    """
    raw: Dict[str, Any] = {}
    if path is not None and str(path):
        doc = load_yaml(Path(path))
        section = deep_get(doc, "request", doc)
        if isinstance(section, dict):
            raw = deep_merge(raw, section)
    if overrides:
        raw = deep_merge(raw, overrides)
    if default_filters is not None and "filters" not in raw and "algorithms" not in raw:
        raw["filters"] = list(default_filters)
    return build_filter_request(raw)
