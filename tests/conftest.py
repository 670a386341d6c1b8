"""Shared test fixtures."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pandas as pd
import pytest
from pathlib import Path


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


@pytest.fixture
def small_table() -> pd.DataFrame:
    """Three-row table with a known, non-degenerate fit."""
    return pd.DataFrame({"A": [0, 1, 3], "B": [1, 1, 7]})


@pytest.fixture
def counts_table() -> pd.DataFrame:
    """Gene-count-like table with three samples."""
    return pd.DataFrame(
        {
            "gene": ["g1", "g2", "g3", "g4", "g5", "g6", "g7", "g8"],
            "sample_1": [0, 12, 150, 3, 48, 1020, 7, 260],
            "sample_2": [1, 9, 171, 5, 40, 880, 11, 301],
            "sample_3": [4, 30, 95, 0, 77, 640, 2, 198],
        }
    )


@pytest.fixture
def counts_csv(counts_table: pd.DataFrame, tmp_path: Path) -> Path:
    p = tmp_path / "counts.csv"
    counts_table.to_csv(p, index=False)
    return p
