"""
Count-correlation report package.

Small and deliberately literal: read a table of count-like observations, log-transform two
columns with `log(value + 1)`, fit a simple OLS line of one against the other, draw the
scatter with the fitted line and its adjusted R², and hand back the fit summary.

Entry points:
  - `count_corr.report.report` (one pair of columns, plot + summary)
  - `count_corr.report.pairwise_report` (every ordered pair, no plots)
  - the `count-corr` CLI (`count_corr.cli`)
"""

from count_corr.errors import CountCorrError, InvalidDomain, MissingColumn
from count_corr.regression import Coefficient, RegressionResult
from count_corr.report import format_summary, pairwise_report, report
from count_corr.table import load_table

__all__ = [
    "Coefficient",
    "CountCorrError",
    "InvalidDomain",
    "MissingColumn",
    "RegressionResult",
    "format_summary",
    "load_table",
    "pairwise_report",
    "report",
]
