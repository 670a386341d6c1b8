"""Tests for CLI commands."""

import json
import os
import subprocess
import sys

import pandas as pd


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "count_corr.cli", *args],
        capture_output=True,
        text=True,
    )


def test_cli_help():
    """Test CLI help command."""
    result = _run("--help")
    assert result.returncode == 0
    assert "count-corr" in result.stdout or "usage" in result.stdout.lower()


def test_cli_report_subcommand_help():
    result = _run("report", "--help")
    assert result.returncode == 0


def test_cli_report_writes_outputs(counts_csv, tmp_path):
    out = tmp_path / "out"
    result = _run("--out", str(out), "report", str(counts_csv), "sample_1", "sample_2")
    assert result.returncode == 0, result.stderr
    assert "Adjusted R-squared" in result.stdout

    png = out / "figures" / "sample_1_vs_sample_2.png"
    assert png.exists() and png.stat().st_size > 0
    summary = json.loads((out / "regression_sample_1_vs_sample_2.json").read_text())
    assert summary["response"] == "sample_1"
    assert summary["predictor"] == "sample_2"
    assert summary["n_obs"] == 8


def test_cli_report_missing_column_exits_nonzero(counts_csv, tmp_path):
    out = tmp_path / "out"
    result = _run("--out", str(out), "report", str(counts_csv), "sample_1", "nope")
    assert result.returncode == 2
    assert "nope" in result.stderr
    assert not (out / "figures").exists()


def test_cli_pairs(counts_csv, tmp_path):
    out = tmp_path / "out"
    result = _run("--out", str(out), "pairs", str(counts_csv), "--columns", "sample_1,sample_3")
    assert result.returncode == 0, result.stderr
    df = pd.read_csv(out / "pairwise_regression.csv")
    assert len(df) == 2
    assert set(df["response"]) == {"sample_1", "sample_3"}


def test_cli_report_with_slash_in_column_name(tmp_path):
    csv = tmp_path / "t.csv"
    pd.DataFrame({"WT/1": [0, 12, 150, 3], "KO": [1, 9, 171, 5]}).to_csv(csv, index=False)
    out = tmp_path / "out"
    result = _run("--out", str(out), "report", str(csv), "WT/1", "KO")
    assert result.returncode == 0, result.stderr
    assert (out / "figures" / "WT_1_vs_KO.png").exists()
    assert (out / "regression_WT_1_vs_KO.json").exists()
    assert not (out / "figures" / "WT").exists()


def test_cli_malformed_env_setting_exits_nonzero(counts_csv, tmp_path):
    result = subprocess.run(
        [
            sys.executable, "-m", "count_corr.cli",
            "--out", str(tmp_path), "report", str(counts_csv), "sample_1", "sample_2",
        ],
        capture_output=True,
        text=True,
        env={**os.environ, "COUNT_CORR_DPI": "high"},
    )
    assert result.returncode == 2
    assert "[error]" in result.stderr
    assert "COUNT_CORR_DPI" in result.stderr
    assert "Traceback" not in result.stderr
