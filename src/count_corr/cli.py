from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

from count_corr.config import ReportConfig, parse_figsize
from count_corr.report import format_summary, pairwise_report, report, safe_name, write_report_outputs
from count_corr.table import load_table


def _config_from_args(args: argparse.Namespace) -> ReportConfig:
    cfg = ReportConfig.from_env()
    if args.out is not None:
        cfg = replace(cfg, out_dir=Path(args.out))
    if args.dpi is not None:
        cfg = replace(cfg, dpi=int(args.dpi))
    if args.figsize is not None:
        cfg = replace(cfg, figsize=args.figsize)
    return cfg


def cmd_report(args: argparse.Namespace) -> None:
    cfg = _config_from_args(args)
    df = load_table(Path(args.csv), sep=str(args.sep))

    png = Path(args.png) if args.png is not None else None
    if png is None:
        png = cfg.figures_dir / f"{safe_name(args.column_a)}_vs_{safe_name(args.column_b)}.png"
    result = report(df, args.column_a, args.column_b, out_png=png, config=cfg)
    print("[info] wrote", png)

    out_json, out_txt = write_report_outputs(out_dir=cfg.out_dir, result=result)
    print("[info] wrote", out_json)
    print("[info] wrote", out_txt)
    if args.json:
        print(out_json.read_text(), end="")
    else:
        print(format_summary(result), end="")


def cmd_pairs(args: argparse.Namespace) -> None:
    cfg = _config_from_args(args)
    df = load_table(Path(args.csv), sep=str(args.sep))

    out = pairwise_report(df, columns=args.columns)
    cfg.out_dir.mkdir(parents=True, exist_ok=True)
    out_csv = cfg.out_dir / "pairwise_regression.csv"
    out.to_csv(out_csv, index=False)
    print("[info] wrote", out_csv)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        prog="count-corr", description="Log-count correlation reports: scatter + OLS fit + adjusted R²."
    )
    p.add_argument("--out", type=Path, default=None, help="Output directory (defaults to $COUNT_CORR_OUT_DIR or ./out).")
    p.add_argument("--dpi", type=int, default=None, help="Figure resolution (defaults to $COUNT_CORR_DPI or 200).")
    p.add_argument("--figsize", type=parse_figsize, default=None, help="Figure size in inches as 'W,H'.")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    sub = p.add_subparsers(dest="cmd", required=True)

    # report
    r = sub.add_parser("report", help="Fit log(A + 1) ~ log(B + 1) for two columns, plot it and write the summary.")
    r.add_argument("csv", type=Path, help="Delimited text table with a header row.")
    r.add_argument("column_a", help="Response column.")
    r.add_argument("column_b", help="Predictor column.")
    r.add_argument("--sep", default=",")
    r.add_argument("--png", type=Path, default=None, help="Figure path (defaults to <out>/figures/<a>_vs_<b>.png).")
    r.add_argument("--json", action="store_true", help="Print the JSON summary instead of the text one.")
    r.set_defaults(func=cmd_report)

    # pairs
    pr = sub.add_parser("pairs", help="Fit every ordered pair of columns and write pairwise_regression.csv.")
    pr.add_argument("csv", type=Path)
    pr.add_argument(
        "--columns",
        type=lambda s: [x.strip() for x in str(s).split(",") if x.strip()],
        default=None,
        help="Comma-separated column names (defaults to every numeric column).",
    )
    pr.add_argument("--sep", default=",")
    pr.set_defaults(func=cmd_pairs)

    args = p.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    try:
        args.func(args)
    except (ValueError, FileNotFoundError) as e:
        # CountCorrError is a ValueError; so are malformed COUNT_CORR_* settings
        print(f"[error] {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
