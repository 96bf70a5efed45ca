# src/lasclean/cli/run_clean.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich import print
from rich.table import Table

from lasclean.config.schema import FILTER_ORDER
from lasclean.errors import ConfigError, ParseError
from lasclean.io.export import write_result_csv, write_result_json
from lasclean.io.las_text import parse_las_text, read_las_text
from lasclean.pipelines.clean_curves import PipelineResult, run_pipeline
from lasclean.utils.config import load_filter_request

app = typer.Typer(add_completion=False)


@app.callback()
def _root() -> None:
    """Clean noisy, gapped well-log curves from LAS files."""


def _param_overrides(
    *,
    filters: Optional[str],
    smooth_window: Optional[int],
    smooth_order: Optional[int],
    outlier_threshold: Optional[float],
    outlier_window: Optional[int],
    max_gap: Optional[int],
) -> Dict[str, Any]:
    params: Dict[str, Dict[str, Any]] = {"smooth": {}, "outlier": {}, "interpolate": {}}
    if smooth_window is not None:
        params["smooth"]["window"] = smooth_window
    if smooth_order is not None:
        params["smooth"]["order"] = smooth_order
    if outlier_threshold is not None:
        params["outlier"]["threshold"] = outlier_threshold
    if outlier_window is not None:
        params["outlier"]["window"] = outlier_window
    if max_gap is not None:
        params["interpolate"]["max_gap"] = max_gap

    out: Dict[str, Any] = {"params": {k: v for k, v in params.items() if v}}
    if filters is not None:
        out["filters"] = filters
    return out


def _quality_table(result: PipelineResult) -> Table:
    t = Table(title="Curve quality")
    t.add_column("Curve")
    t.add_column("Unit")
    t.add_column("Status")
    t.add_column("SNR (dB)", justify="right")
    t.add_column("Corr", justify="right")
    t.add_column("RMSE", justify="right")
    t.add_column("n", justify="right")
    for mn, pc in result.curves.items():
        q = result.quality[mn]
        status = "[green]OK[/green]" if pc.ok else f"[red]FAIL[/red] {pc.error}"
        t.add_row(
            mn,
            pc.unit,
            status,
            f"{q.snr:.2f}",
            f"{q.correlation:.4f}",
            f"{q.rmse:.4g}",
            str(q.n_valid),
        )
    return t


@app.command()
def clean(
    las_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="LAS text file"),
    filters: Optional[str] = typer.Option(
        None, help="Comma list from smooth,outlier,interpolate (default: all three)"
    ),
    config: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="YAML filter request"),
    smooth_window: Optional[int] = typer.Option(None, help="Savitzky-Golay window (default 11)"),
    smooth_order: Optional[int] = typer.Option(None, help="Savitzky-Golay polynomial order (default 3)"),
    outlier_threshold: Optional[float] = typer.Option(None, help="Hampel threshold in robust sigmas (default 3.0)"),
    outlier_window: Optional[int] = typer.Option(None, help="Hampel window (default 7)"),
    max_gap: Optional[int] = typer.Option(None, help="Longest gap to fill, in samples (default 50)"),
    out_json: Optional[Path] = typer.Option(None, help="Write the result payload as JSON"),
    out_csv: Optional[Path] = typer.Option(None, help="Write original/processed curves as CSV"),
    plot: Optional[Path] = typer.Option(None, help="Write an original-vs-processed PNG panel"),
):
    """Parse one LAS file, clean every curve, and report quality per curve."""
    try:
        req = load_filter_request(
            config,
            overrides=_param_overrides(
                filters=filters,
                smooth_window=smooth_window,
                smooth_order=smooth_order,
                outlier_threshold=outlier_threshold,
                outlier_window=outlier_window,
                max_gap=max_gap,
            ),
            default_filters=FILTER_ORDER,
        )
    except ConfigError as e:
        print(f"[red]Invalid filter request:[/red] {e}")
        raise typer.Exit(code=1)

    print(f"[bold]Parsing[/bold] {las_path} ...")
    try:
        doc = parse_las_text(read_las_text(las_path))
    except ParseError as e:
        print(f"[red]Failed to parse LAS file:[/red] {e}")
        raise typer.Exit(code=1)

    print(f"Curves: {len(doc.curves)} | Rows: {doc.n_rows} | Skipped rows: {len(doc.skipped_rows)}")
    if doc.skipped_rows:
        head = ", ".join(str(n) for n in doc.skipped_rows[:20])
        more = " ..." if len(doc.skipped_rows) > 20 else ""
        print(f"[yellow]Skipped data rows (column count mismatch) at lines:[/yellow] {head}{more}")

    print(f"[bold]Filters:[/bold] {', '.join(req.ordered_filters()) or '(none)'}")
    result = run_pipeline(doc, req)

    print(_quality_table(result))
    s = result.summary()
    print(
        f"Curves OK: {s.n_curves}/{len(result.curves)} | mean SNR {s.mean_snr:.2f} dB | "
        f"mean corr {s.mean_correlation:.4f} | mean RMSE {s.mean_rmse:.4g}"
    )

    if out_json is not None:
        print("[green]Wrote[/green]", write_result_json(result, out_json))
    if out_csv is not None:
        print("[green]Wrote[/green]", write_result_csv(result, out_csv))
    if plot is not None:
        from lasclean.viz.curve_panel import plot_curve_panel

        print("[green]Wrote[/green]", plot_curve_panel(result, plot))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
