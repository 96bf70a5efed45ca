from __future__ import annotations

from typing import Dict, Sequence

import numpy as np
import pytest


def las_text_from_columns(columns: Dict[str, Sequence[float]], *, null: float = -999.25) -> str:
    """Minimal LAS 2.0 text for the given curves (NaN written as the null value)."""
    names = list(columns.keys())
    n = len(next(iter(columns.values()))) if columns else 0
    lines = [
        "~VERSION INFORMATION",
        " VERS.   2.0 : CWLS LOG ASCII STANDARD - VERSION 2.0",
        " WRAP.   NO  : ONE LINE PER DEPTH STEP",
        "~WELL INFORMATION",
        f" NULL.   {null} : NULL VALUE",
        "~CURVE INFORMATION",
    ]
    for name in names:
        lines.append(f" {name}.UNIT : {name} curve")
    lines.append("~A")
    for i in range(n):
        row = []
        for name in names:
            v = float(columns[name][i])
            row.append(f"{null}" if not np.isfinite(v) else repr(v))
        lines.append(" ".join(row))
    return "\n".join(lines) + "\n"


@pytest.fixture
def make_las():
    return las_text_from_columns
