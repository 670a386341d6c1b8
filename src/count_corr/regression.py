from __future__ import annotations

"""
Simple (one predictor) ordinary least squares on log-transformed counts.

The numbers reported mirror the usual simple-linear-model summary:
  - residual five-number summary (min, 1Q, median, 3Q, max; linear interpolation quantiles)
  - coefficient table: estimate, std. error, t value, two-sided p value
  - residual standard error on n - 2 degrees of freedom
  - multiple and adjusted R², F statistic on (1, n - 2) df

Slope, intercept, their standard errors and r come from `scipy.stats.linregress`; adjusted R²,
residual standard error and F are derived from those.
"""

import logging
import math
from dataclasses import asdict, dataclass

import numpy as np
from scipy import stats as sp_stats

from count_corr.errors import InvalidDomain

logger = logging.getLogger(__name__)

INTERCEPT_NAME = "(Intercept)"
QUANTILE_LABELS = ("min", "1Q", "median", "3Q", "max")


@dataclass(frozen=True)
class Coefficient:
    name: str
    estimate: float
    std_error: float
    t_value: float
    p_value: float


@dataclass(frozen=True)
class RegressionResult:
    """
    Read-only summary of `response ~ predictor` fitted on `log(value + 1)` of both columns.

    Statistics that need residual degrees of freedom are `nan` when `n_obs == 2`.
    """

    response: str
    predictor: str
    n_obs: int
    coefficients: tuple[Coefficient, Coefficient]
    residuals: tuple[float, ...]
    residual_quantiles: tuple[float, float, float, float, float]
    residual_std_error: float
    df_residual: int
    r_squared: float
    adj_r_squared: float
    f_statistic: float
    f_p_value: float

    @property
    def intercept(self) -> float:
        return self.coefficients[0].estimate

    @property
    def slope(self) -> float:
        return self.coefficients[1].estimate

    def as_dict(self) -> dict:
        d = asdict(self)
        d["coefficients"] = [asdict(c) for c in self.coefficients]
        d["residuals"] = list(self.residuals)
        d["residual_quantiles"] = dict(zip(QUANTILE_LABELS, self.residual_quantiles))
        d["intercept"] = self.intercept
        d["slope"] = self.slope
        return d


def _t_test(estimate: float, std_error: float, df: int) -> tuple[float, float]:
    if df <= 0 or not math.isfinite(std_error):
        return float("nan"), float("nan")
    if std_error == 0.0:
        # exact fit: the estimate is infinitely many standard errors from zero (or undefined at 0)
        if estimate == 0.0:
            return float("nan"), float("nan")
        return math.copysign(float("inf"), estimate), 0.0
    t = estimate / std_error
    return float(t), float(2.0 * sp_stats.t.sf(abs(t), df))


def fit_ols(x: np.ndarray, y: np.ndarray, *, response: str = "y", predictor: str = "x") -> RegressionResult:
    """
    Fit `y = intercept + slope * x` by least squares and summarize the fit.

    `x` and `y` are already transformed; this function knows nothing about counts.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.shape != y.shape or x.ndim != 1:
        raise InvalidDomain(f"predictor and response must be 1-d and equal length, got {x.shape} and {y.shape}")
    n = int(x.size)
    if n < 2:
        raise InvalidDomain(f"need at least 2 observations to fit a line, got {n}")

    # spread can be nonzero yet square to 0.0 (differences around 1e-200)
    dx = x - np.mean(x)
    dy = y - np.mean(y)
    if float(np.sum(dx * dx)) <= 0.0:
        raise InvalidDomain(
            f"predictor {predictor!r} has no variance after log(value + 1); slope undefined", column=predictor
        )
    if float(np.sum(dy * dy)) <= 0.0:
        raise InvalidDomain(
            f"response {response!r} has no variance after log(value + 1); R² undefined", column=response
        )

    lr = sp_stats.linregress(x, y)
    slope = float(lr.slope)
    intercept = float(lr.intercept)
    if not (math.isfinite(slope) and math.isfinite(intercept)):
        raise InvalidDomain(f"fit of {response!r} on {predictor!r} is numerically degenerate", column=predictor)
    resid = y - (intercept + slope * x)

    df = n - 2
    r2 = min(float(lr.rvalue) ** 2, 1.0)
    if df > 0:
        rss = float(np.sum(resid * resid))
        sigma = math.sqrt(rss / df)
        adj_r2 = 1.0 - (1.0 - r2) * (n - 1) / df
        se_slope = float(lr.stderr)
        se_intercept = float(lr.intercept_stderr)
        if r2 < 1.0:
            f_stat = r2 / (1.0 - r2) * df
            f_p = float(sp_stats.f.sf(f_stat, 1, df))
        else:
            f_stat, f_p = float("inf"), 0.0
    else:
        # linregress reports zero standard errors for two points; nothing is estimable
        sigma = adj_r2 = se_slope = se_intercept = f_stat = f_p = float("nan")

    t_int, p_int = _t_test(intercept, se_intercept, df)
    t_slope, p_slope = _t_test(slope, se_slope, df)
    if df > 0 and se_slope > 0.0:
        p_slope = float(lr.pvalue)
    quantiles = tuple(float(q) for q in np.quantile(resid, [0.0, 0.25, 0.5, 0.75, 1.0]))

    logger.debug(
        "fit %s ~ %s: n=%d slope=%.6g intercept=%.6g r2=%.6g adj_r2=%.6g",
        response,
        predictor,
        n,
        slope,
        intercept,
        r2,
        adj_r2,
    )

    return RegressionResult(
        response=str(response),
        predictor=str(predictor),
        n_obs=n,
        coefficients=(
            Coefficient(INTERCEPT_NAME, intercept, se_intercept, t_int, p_int),
            Coefficient(str(predictor), slope, se_slope, t_slope, p_slope),
        ),
        residuals=tuple(float(r) for r in resid),
        residual_quantiles=quantiles,  # type: ignore[arg-type]
        residual_std_error=float(sigma),
        df_residual=int(df),
        r_squared=float(r2),
        adj_r_squared=float(adj_r2),
        f_statistic=float(f_stat),
        f_p_value=float(f_p),
    )
