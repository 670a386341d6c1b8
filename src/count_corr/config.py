from __future__ import annotations

"""
Output configuration.

Environment variable overrides (CLI flags win over these):
  - COUNT_CORR_OUT_DIR   output directory (default: ./out)
  - COUNT_CORR_DPI       figure resolution (default: 200)
  - COUNT_CORR_FIGSIZE   figure size in inches, "W,H" (default: 7.5,4.2)
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path


def parse_figsize(s: str) -> tuple[float, float]:
    parts = [p for p in str(s).split(",") if p.strip()]
    if len(parts) != 2:
        raise ValueError(f"figsize must look like 'W,H', got {s!r}")
    return float(parts[0]), float(parts[1])


@dataclass(frozen=True)
class ReportConfig:
    out_dir: Path = Path("out")
    dpi: int = 200
    figsize: tuple[float, float] = (7.5, 4.2)
    point_color: str = "#2b6cb0"
    line_color: str = "#c53030"

    @property
    def figures_dir(self) -> Path:
        return self.out_dir / "figures"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> ReportConfig:
        env = os.environ if environ is None else environ
        cfg = cls()
        if "COUNT_CORR_OUT_DIR" in env:
            cfg = replace(cfg, out_dir=Path(env["COUNT_CORR_OUT_DIR"]))
        if "COUNT_CORR_DPI" in env:
            try:
                cfg = replace(cfg, dpi=int(env["COUNT_CORR_DPI"]))
            except ValueError as e:
                raise ValueError(f"COUNT_CORR_DPI must be an integer, got {env['COUNT_CORR_DPI']!r}") from e
        if "COUNT_CORR_FIGSIZE" in env:
            try:
                cfg = replace(cfg, figsize=parse_figsize(env["COUNT_CORR_FIGSIZE"]))
            except ValueError as e:
                raise ValueError(f"COUNT_CORR_FIGSIZE: {e}") from e
        return cfg
