from __future__ import annotations

"""
Table loading + column validation.

A "table" here is just a `pandas.DataFrame` with named, position-aligned columns. The loader is
a thin wrapper over `pd.read_csv`; all the checks that matter for `log(value + 1)` live in
`log_counts`, so that callers who build their frame in memory get exactly the same guarantees.
"""

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

import numpy as np
import pandas as pd

from count_corr.errors import InvalidDomain, MissingColumn

logger = logging.getLogger(__name__)

# log1p(x) needs x > -1
DOMAIN_FLOOR = -1.0


def load_table(csv_path: Path, *, sep: str = ",", index_col: int | str | None = None) -> pd.DataFrame:
    """
    Read a delimited text file into a DataFrame. No column checks happen here.
    """
    p = Path(csv_path)
    if not p.exists():
        raise FileNotFoundError(f"table not found: {p}")
    df = pd.read_csv(p, sep=sep, index_col=index_col)
    logger.debug("loaded %s: %d rows x %d columns", p, len(df), len(df.columns))
    return df


def as_frame(table: pd.DataFrame | Mapping[str, Sequence[float]]) -> pd.DataFrame:
    if isinstance(table, pd.DataFrame):
        return table
    try:
        return pd.DataFrame(dict(table))
    except ValueError as e:
        # pandas refuses ragged mappings ("All arrays must be of the same length")
        lengths = {str(k): len(v) for k, v in dict(table).items()}
        raise InvalidDomain(f"columns have unequal lengths: {lengths}") from e


def require_columns(df: pd.DataFrame, columns: Sequence[str]) -> None:
    available = [str(c) for c in df.columns]
    for c in columns:
        if c not in df.columns:
            raise MissingColumn(c, available)


def log_counts(df: pd.DataFrame, column: str) -> np.ndarray:
    """
    Return `log(value + 1)` of one column as float64, after checking that every value is a finite
    number greater than -1.
    """
    require_columns(df, [column])
    raw = df[column]
    if isinstance(raw, pd.DataFrame):
        raise InvalidDomain(f"column name {column!r} is not unique in table", column=column)

    missing = raw.isna()
    if missing.any():
        pos = int(np.flatnonzero(missing.to_numpy())[0])
        raise InvalidDomain(f"column {column!r} has a missing value at row {pos}", column=column, value=None)

    if not pd.api.types.is_numeric_dtype(raw):
        # object columns are accepted only when every cell already is a number; strings are not parsed
        not_numbers = [v for v in raw if not pd.api.types.is_number(v)]
        if not_numbers:
            first = not_numbers[0]
            raise InvalidDomain(f"column {column!r} has a non-numeric value {first!r}", column=column, value=first)

    x = raw.to_numpy(dtype=float)
    out_of_domain = ~np.isfinite(x) | (x <= DOMAIN_FLOOR)
    if out_of_domain.any():
        first = float(x[out_of_domain][0])
        raise InvalidDomain(
            f"column {column!r} has value {first!r}; log(value + 1) needs finite values > {DOMAIN_FLOOR:g}",
            column=column,
            value=first,
        )
    return np.log1p(x)
