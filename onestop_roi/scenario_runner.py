# onestop_roi/scenario_runner.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, List, Optional
from datetime import datetime
import json, csv

from loguru import logger

from .validate import (
    _mode_from_env_or_flag,
    load_params_from_file,
    validate_params_dict,
)

# Scalar columns written per scenario in directory mode.
SCENARIO_COLUMNS = (
    "scenario",
    "computed",
    "roi",
    "npv",
    "irr",
    "irr_exact_pct",
    "payback_period_months",
    "break_even_point_months",
    "net_profit",
    "profit_margin",
    "annualized_return",
    "reason",
)


@dataclass
class RunResult:
    summary: Dict[str, Any]
    summary_path: Path
    results_path: Optional[Path] = None


def _write_jsonl(path: Path, rows: List[Dict[str, Any]]) -> None:
    with path.open("w", encoding="utf-8") as f:
        for row in rows:
            f.write(json.dumps(row) + "\n")


def _write_csv(path: Path, rows: List[Dict[str, Any]], columns: Optional[List[str]] = None) -> None:
    if not rows:
        path.write_text("", encoding="utf-8")
        return
    hdr = columns or list(rows[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=hdr, extrasaction="ignore")
        w.writeheader()
        w.writerows(rows)


def _write_rows(out: Path, base: str, fmt: str, rows: List[Dict[str, Any]], columns: Optional[List[str]] = None) -> Path:
    if fmt == "jsonl":
        path = out / f"{base}.jsonl"
        _write_jsonl(path, rows)
    elif fmt == "csv":
        path = out / f"{base}.csv"
        _write_csv(path, rows, columns)
    else:
        raise SystemExit(f"unknown fmt: {fmt}")
    return path


def validate_and_run(params: Dict[str, Any], *, mode: Optional[str] = None) -> Dict[str, Any]:
    validate_params_dict(params, mode=_mode_from_env_or_flag(mode))
    from .adapters import run_projection
    return run_projection(params)


def run_dir(
    config: str | Path,
    out_dir: str | Path,
    *,
    mode: Optional[str] = None,
    fmt: str = "csv",
    save_monthly: bool = False,
) -> RunResult:
    """
    Run one scenario file, or every YAML/JSON file in a directory.

    Single file: writes summary.json and, with save_monthly, the monthly rows.
    Directory: writes summary.json (all summaries keyed by file name) and
    scenarios.<fmt> with one row per scenario.
    """
    cfg_path = Path(config)
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    summary_path = out / "summary.json"

    if cfg_path.is_dir():
        files = [f for f in sorted(cfg_path.iterdir()) if f.is_file() and f.suffix.lower() in (".yaml", ".yml", ".json")]
        if not files:
            raise SystemExit(f"{cfg_path}: no scenario files found")
        summaries: Dict[str, Any] = {}
        rows: List[Dict[str, Any]] = []
        for f in files:
            logger.info("running scenario {}", f.name)
            s = validate_and_run(load_params_from_file(f), mode=mode)
            summaries[f.name] = {k: v for k, v in s.items() if k != "monthly"}
            rows.append({"scenario": f.stem, **{k: s.get(k) for k in SCENARIO_COLUMNS if k != "scenario"}})
        summary_path.write_text(json.dumps(summaries, indent=2), encoding="utf-8")
        results_path = _write_rows(out, "scenarios", fmt, rows, list(SCENARIO_COLUMNS))
        return RunResult(summary=summaries, summary_path=summary_path, results_path=results_path)

    # Single file path
    params = load_params_from_file(cfg_path)
    summary = validate_and_run(params, mode=mode)
    monthly = summary.pop("monthly", [])
    summary_path.write_text(json.dumps(summary, indent=2), encoding="utf-8")

    results_path: Optional[Path] = None
    if save_monthly and monthly:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        results_path = _write_rows(out, f"{cfg_path.stem}_monthly_{stamp}", fmt, monthly)

    return RunResult(summary=summary, summary_path=summary_path, results_path=results_path)
