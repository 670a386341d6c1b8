from __future__ import annotations

"""
Correlation report: log-transform two count columns, fit, plot, summarize.

`report` is the one operation that matters; the rest of this module is presentation
(`format_summary`), a sweep over every ordered column pair (`pairwise_report`) and writers.

Validation always happens before anything is drawn: a call that raises leaves no figure behind.
"""

import json
import logging
import re
from collections.abc import Mapping, Sequence
from itertools import permutations
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from tqdm import tqdm

from count_corr.config import ReportConfig
from count_corr.errors import InvalidDomain
from count_corr.plots import build_plot_spec, render_plot
from count_corr.regression import QUANTILE_LABELS, RegressionResult, fit_ols
from count_corr.table import as_frame, log_counts, require_columns

logger = logging.getLogger(__name__)

Table = pd.DataFrame | Mapping[str, Sequence[float]]

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def report(
    table: Table,
    column_a: str,
    column_b: str,
    *,
    out_png: Path | None = None,
    ax: plt.Axes | None = None,
    config: ReportConfig | None = None,
) -> RegressionResult:
    """
    Fit `log(column_a + 1) ~ log(column_b + 1)`, draw it, and return the fit summary.

    Raises:
      - MissingColumn if either name is not in `table`
      - InvalidDomain if a value is missing, non-numeric, or <= -1, or the fit is degenerate
    """
    df = as_frame(table)
    if column_a == column_b:
        raise InvalidDomain(
            f"response and predictor must be distinct columns, got {column_a!r} twice", column=column_a
        )
    require_columns(df, [column_a, column_b])
    y = log_counts(df, column_a)
    x = log_counts(df, column_b)

    result = fit_ols(x, y, response=column_a, predictor=column_b)

    spec = build_plot_spec(result=result, x=x, y=y)
    render_plot(spec, out_png=out_png, ax=ax, config=config)
    return result


def _stars(p: float) -> str:
    if not np.isfinite(p):
        return ""
    if p < 0.001:
        return "***"
    if p < 0.01:
        return "**"
    if p < 0.05:
        return "*"
    if p < 0.1:
        return "."
    return ""


def format_summary(result: RegressionResult) -> str:
    """Plain-text summary in the usual simple-linear-model layout."""
    a, b = result.response, result.predictor
    lines = ["Call:", f"lm(formula = log({a} + 1) ~ log({b} + 1))", "", "Residuals:"]

    resid = pd.DataFrame([result.residual_quantiles], columns=list(QUANTILE_LABELS))
    lines.append(resid.to_string(index=False, float_format=lambda v: f"{v:.4g}"))

    coef = pd.DataFrame(
        [
            {
                "Estimate": c.estimate,
                "Std. Error": c.std_error,
                "t value": c.t_value,
                "Pr(>|t|)": c.p_value,
                "": _stars(c.p_value),
            }
            for c in result.coefficients
        ],
        index=[c.name if c.name == "(Intercept)" else f"log({c.name} + 1)" for c in result.coefficients],
    )
    lines += ["", "Coefficients:", coef.to_string(float_format=lambda v: f"{v:.4g}")]
    lines.append("---")
    lines.append("Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1")
    lines.append("")
    lines.append(
        f"Residual standard error: {result.residual_std_error:.4g} on {result.df_residual} degrees of freedom"
    )
    lines.append(
        f"Multiple R-squared:  {result.r_squared:.4g},\tAdjusted R-squared:  {result.adj_r_squared:.4g}"
    )
    lines.append(
        f"F-statistic: {result.f_statistic:.4g} on 1 and {result.df_residual} DF,  p-value: {result.f_p_value:.4g}"
    )
    return "\n".join(lines) + "\n"


def pairwise_report(table: Table, columns: Sequence[str] | None = None) -> pd.DataFrame:
    """
    Fit every ordered pair of distinct columns (response, predictor); no figures are drawn.

    `columns=None` means every numeric column of the table.
    """
    df = as_frame(table)
    if columns is None:
        columns = [str(c) for c in df.select_dtypes(include="number").columns]
    columns = list(dict.fromkeys(columns))
    require_columns(df, columns)
    logged = {c: log_counts(df, c) for c in columns}

    rows = []
    for a, b in tqdm(list(permutations(columns, 2)), desc="pairwise regression"):
        r = fit_ols(logged[b], logged[a], response=a, predictor=b)
        rows.append(
            {
                "response": a,
                "predictor": b,
                "n_obs": r.n_obs,
                "slope": r.slope,
                "intercept": r.intercept,
                "r_squared": r.r_squared,
                "adj_r_squared": r.adj_r_squared,
            }
        )
    return pd.DataFrame(
        rows, columns=["response", "predictor", "n_obs", "slope", "intercept", "r_squared", "adj_r_squared"]
    )


def safe_name(name: str) -> str:
    """Column name made safe for use inside a single file name."""
    return _UNSAFE_CHARS.sub("_", str(name))


def output_stem(result: RegressionResult) -> str:
    return f"regression_{safe_name(result.response)}_vs_{safe_name(result.predictor)}"


def write_report_outputs(*, out_dir: Path, result: RegressionResult) -> tuple[Path, Path]:
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    stem = output_stem(result)
    out_json = out_dir / f"{stem}.json"
    out_txt = out_dir / f"{stem}.txt"
    out_json.write_text(json.dumps(result.as_dict(), indent=2, sort_keys=True) + "\n")
    out_txt.write_text(format_summary(result))
    logger.info("wrote %s, %s", out_json, out_txt)
    return out_json, out_txt
