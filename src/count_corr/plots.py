from __future__ import annotations

"""
Scatter + fitted line figure for a correlation report.

Split in two:
  - `build_plot_spec` turns a fit into plain plotting parameters (no matplotlib involved)
  - `render_plot` hands those parameters to matplotlib
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from count_corr.config import ReportConfig
from count_corr.regression import RegressionResult

logger = logging.getLogger(__name__)


def annotation_text(adj_r_squared: float) -> str:
    """Adjusted R² rounded to 4 significant digits."""
    return f"Adj R2 = {adj_r_squared:.4g}"


@dataclass(frozen=True)
class PlotSpec:
    x: tuple[float, ...]
    y: tuple[float, ...]
    title: str
    xlabel: str
    ylabel: str
    slope: float
    intercept: float
    annotation: str


def build_plot_spec(*, result: RegressionResult, x: np.ndarray, y: np.ndarray) -> PlotSpec:
    return PlotSpec(
        x=tuple(float(v) for v in x),
        y=tuple(float(v) for v in y),
        title=f"{result.response} vs {result.predictor}",
        xlabel=f"log({result.predictor} + 1)",
        ylabel=f"log({result.response} + 1)",
        slope=result.slope,
        intercept=result.intercept,
        annotation=annotation_text(result.adj_r_squared),
    )


def draw_plot(ax: plt.Axes, spec: PlotSpec, *, config: ReportConfig | None = None) -> None:
    cfg = config or ReportConfig()
    ax.scatter(spec.x, spec.y, s=30, color=cfg.point_color, alpha=0.85)
    ax.axline((0.0, spec.intercept), slope=spec.slope, color=cfg.line_color, lw=2.0)
    ax.text(
        0.03,
        0.95,
        spec.annotation,
        transform=ax.transAxes,
        ha="left",
        va="top",
        fontsize=10,
        bbox={"boxstyle": "round", "facecolor": "white", "alpha": 0.8},
    )
    ax.set_xlabel(spec.xlabel)
    ax.set_ylabel(spec.ylabel)
    ax.set_title(spec.title)
    ax.grid(True, alpha=0.3)


def render_plot(
    spec: PlotSpec,
    *,
    out_png: Path | None = None,
    ax: plt.Axes | None = None,
    config: ReportConfig | None = None,
) -> plt.Figure:
    """
    Draw `spec` onto `ax` if given, otherwise onto a new figure.

    With `out_png` the figure is saved and closed. Without it (and without `ax`) the figure stays
    open as pyplot's current figure, for interactive display.
    """
    cfg = config or ReportConfig()
    if ax is not None:
        draw_plot(ax, spec, config=cfg)
        fig = ax.figure
        if out_png is not None:
            out_png = Path(out_png)
            out_png.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(out_png, dpi=cfg.dpi)
            logger.info("wrote %s", out_png)
        return fig

    fig, ax = plt.subplots(figsize=cfg.figsize)
    draw_plot(ax, spec, config=cfg)
    fig.tight_layout()
    if out_png is not None:
        out_png = Path(out_png)
        out_png.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(out_png, dpi=cfg.dpi)
        plt.close(fig)
        logger.info("wrote %s", out_png)
    return fig
