# src/lasclean/viz/curve_panel.py
from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Sequence

import numpy as np

from lasclean.pipelines.clean_curves import PipelineResult


def _pyplot() -> Any:
    """Headless-safe pyplot import (Agg backend)."""
    try:
        import matplotlib  # type: ignore

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt  # type: ignore
    except ImportError as e:
        raise RuntimeError("matplotlib is required for plotting. Install with: pip install matplotlib") from e
    return plt


def _pick_mnemonics(result: PipelineResult, mnemonics: Optional[Sequence[str]]) -> List[str]:
    if mnemonics is None:
        return list(result.curves.keys())
    missing = [m for m in mnemonics if m not in result.curves]
    if missing:
        raise KeyError(f"Curves not in result: {missing}. Available: {list(result.curves.keys())}")
    return list(mnemonics)


def plot_curve_panel(
    result: PipelineResult,
    out_png: Path,
    *,
    mnemonics: Optional[Sequence[str]] = None,
    track_width: float = 2.6,
    height: float = 9.0,
    dpi: int = 150,
) -> Path:
    """
    Log-style panel: one track per curve, sample index increasing downward,
    original in thin grey under the processed curve. Track titles carry the unit
    and the SNR of the cleaning pass.
    """
    plt = _pyplot()
    names = _pick_mnemonics(result, mnemonics)
    if not names:
        raise ValueError("No curves to plot.")

    fig, axes = plt.subplots(
        1,
        len(names),
        figsize=(max(track_width * len(names), 4.0), height),
        sharey=True,
        squeeze=False,
    )
    for ax, mn in zip(axes[0], names):
        pc = result.curves[mn]
        idx = np.arange(pc.original.size)
        ax.plot(pc.original, idx, color="#94a3b8", lw=0.8, alpha=0.7, label="Original")
        ax.plot(pc.processed, idx, color="#2563eb", lw=1.2, label="Processed")

        q = result.quality[mn]
        unit = f" ({pc.unit})" if pc.unit else ""
        status = "" if pc.ok else " FAIL"
        ax.set_title(f"{mn}{unit}\nSNR {q.snr:.2f} dB{status}", fontsize=9)
        ax.grid(True, alpha=0.3)

    axes[0][0].invert_yaxis()
    axes[0][0].set_ylabel("sample")
    axes[0][-1].legend(loc="lower right", fontsize=8)

    out = Path(out_png)
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(out, dpi=int(dpi), bbox_inches="tight")
    plt.close(fig)
    return out
