# onestop_roi/cli.py
from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from loguru import logger

from .config import load_model_config
from .finance.cashflow import project
from .finance.tax import corporate_tax, paye, vat
from .formatting import format_pct, format_ugx, render_summary
from .runtime_logging import configure_logging
from .scenario_runner import run_dir
from .templates import get_template, template_names
from .types import InvestmentParameters

MODES = ["project", "templates", "sensitivity", "montecarlo", "tax"]


def parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="onestop_roi",
        description="OneStop Centre investment ROI / cash-flow projection CLI",
    )
    p.add_argument(
        "--mode",
        default="project",
        choices=MODES,
        help="Execution mode (default: project).",
    )
    p.add_argument(
        "--config",
        default=None,
        help="Path to a scenario YAML/JSON, or a directory of scenarios.",
    )
    p.add_argument(
        "--template",
        default=None,
        help=f"Sector preset to project ({', '.join(template_names())}).",
    )
    p.add_argument(
        "--outputs-dir",
        "--out",
        dest="outputs_dir",
        default="outputs",
        help="Directory to write result files (default: outputs). Will be created if missing.",
    )
    p.add_argument(
        "--format",
        "--fmt",
        dest="fmt",
        default="text",
        choices=["text", "csv", "jsonl"],
        help="text prints a summary; csv/jsonl write result files (default: text).",
    )
    p.add_argument(
        "--save-monthly",
        action="store_true",
        help="If set, write the month-by-month rows alongside the summary.",
    )
    v = p.add_mutually_exclusive_group()
    v.add_argument("--strict", action="store_true", help="Enable strict validation (unknown keys raise).")
    v.add_argument("--relaxed", action="store_true", help="Enable relaxed validation.")

    p.add_argument("--iterations", type=int, default=1000, help="Monte Carlo iterations.")
    p.add_argument("--seed", type=int, default=None, help="Monte Carlo random seed.")
    p.add_argument("--delta", type=float, default=0.1, help="Sensitivity flex as a fraction (0.1 = ±10%%).")

    p.add_argument("--salary", type=float, default=None, help="Gross monthly salary for PAYE.")
    p.add_argument("--revenue", type=float, default=None, help="Revenue for corporate tax.")
    p.add_argument("--expenses", type=float, default=None, help="Expenses for corporate tax.")
    p.add_argument("--vat-amount", type=float, default=None, help="Amount for the VAT calculation.")
    p.add_argument("--vat-inclusive", action="store_true", help="Treat --vat-amount as VAT inclusive.")

    p.add_argument("--log-level", default=None, help="Log level (default: ONESTOP_LOG_LEVEL or WARNING).")
    p.add_argument("--log-file", default=None, help="Also log to this file (rotated at 10 MB).")
    return p.parse_args(argv)


def _apply_validation_mode(ns: argparse.Namespace) -> None:
    # Default: leave env as-is; flags override explicitly.
    if ns.strict:
        os.environ["VALIDATION_MODE"] = "strict"
    elif ns.relaxed:
        os.environ["VALIDATION_MODE"] = "relaxed"


def _base_params(ns: argparse.Namespace) -> InvestmentParameters:
    if ns.config:
        return load_model_config(ns.config)
    if ns.template:
        return get_template(ns.template)
    raise SystemExit("--config or --template is required for this mode")


def _run_project(ns: argparse.Namespace, outputs_dir: Path) -> int:
    if ns.config:
        fmt = "csv" if ns.fmt == "text" else ns.fmt
        res = run_dir(Path(ns.config).resolve(), outputs_dir, fmt=fmt, save_monthly=ns.save_monthly)
        if ns.fmt == "text":
            print(json.dumps(res.summary, indent=2))
        # Directory mode keys one summary per scenario file.
        if Path(ns.config).is_dir():
            summaries = dict(res.summary)
        else:
            summaries = {Path(ns.config).name: res.summary}
        declined = {name: s for name, s in summaries.items() if s.get("computed") is False}
        for name, s in declined.items():
            print(f"not computed: {name}: {s.get('reason')}", file=sys.stderr)
        return 1 if declined else 0

    params = _base_params(ns)
    result = project(params)
    if result is None:
        print("not computed: initial investment and monthly revenue must be > 0", file=sys.stderr)
        return 1
    print(render_summary(result, title=f"Template: {ns.template}"))
    return 0


def _run_templates() -> int:
    for name in template_names():
        t = get_template(name)
        print(
            f"{name:<14} invest {format_ugx(t.initial_investment):>16}  "
            f"revenue {format_ugx(t.monthly_revenue):>15}/mo  "
            f"{t.project_period_months} months  tax {format_pct(t.tax_rate_pct, 0)}"
        )
    return 0


def _run_sensitivity(ns: argparse.Namespace, outputs_dir: Path) -> int:
    from .sensitivity import run_one_way_sensitivity

    df, _ = run_one_way_sensitivity(_base_params(ns), delta_pct=ns.delta)
    if ns.fmt == "text":
        print(df.to_string(index=False))
        return 0
    path = outputs_dir / f"sensitivity.{ns.fmt}"
    if ns.fmt == "csv":
        df.to_csv(path, index=False)
    else:
        df.to_json(path, orient="records", lines=True)
    logger.info("wrote {}", path)
    return 0


def _run_montecarlo(ns: argparse.Namespace, outputs_dir: Path) -> int:
    from .monte_carlo import run_monte_carlo

    df = run_monte_carlo(_base_params(ns), iterations=ns.iterations, seed=ns.seed)
    if ns.fmt == "text":
        for k, val in df.attrs.items():
            print(f"{k}: {val:.4f}")
        return 0
    path = outputs_dir / f"montecarlo.{ns.fmt}"
    if ns.fmt == "csv":
        df.to_csv(path, index=False)
    else:
        df.to_json(path, orient="records", lines=True)
    logger.info("wrote {}", path)
    return 0


def _run_tax(ns: argparse.Namespace) -> int:
    did_any = False
    if ns.salary is not None:
        b = paye(ns.salary)
        print(f"PAYE: {format_ugx(b.paye_tax)}  NSSF: {format_ugx(b.nssf_contribution)}  net salary: {format_ugx(b.net_salary)}")
        did_any = True
    if ns.revenue is not None:
        b = corporate_tax(ns.revenue, ns.expenses or 0.0)
        print(f"Corporate tax: {format_ugx(b.corporate_tax)}  effective rate: {format_pct(b.effective_rate_pct, 2)}")
        did_any = True
    if ns.vat_amount is not None:
        b = vat(ns.vat_amount, inclusive=ns.vat_inclusive)
        label = "excluding VAT" if b.inclusive else "including VAT"
        print(f"VAT: {format_ugx(b.vat)}  total ({label}): {format_ugx(b.total)}")
        did_any = True
    if not did_any:
        raise SystemExit("tax mode needs --salary, --revenue or --vat-amount")
    return 0


def main(argv: list[str] | None = None) -> int:
    try:
        ns = parse_args(argv)
    except SystemExit as e:
        return int(e.code) if isinstance(e.code, int) else 2
    _apply_validation_mode(ns)

    outputs_dir = Path(ns.outputs_dir).resolve()

    try:
        configure_logging(ns.log_level, ns.log_file)
        if ns.mode == "templates":
            return _run_templates()
        if ns.mode == "tax":
            return _run_tax(ns)
        if ns.fmt != "text" or (ns.mode == "project" and ns.config):
            outputs_dir.mkdir(parents=True, exist_ok=True)
        if ns.mode == "sensitivity":
            return _run_sensitivity(ns, outputs_dir)
        if ns.mode == "montecarlo":
            return _run_montecarlo(ns, outputs_dir)
        return _run_project(ns, outputs_dir)
    except SystemExit as e:
        # Validation problems carry a message; map them to a usage error.
        if isinstance(e.code, int):
            return e.code
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        # Fail noisily with non-zero; keep traceback in the debug log.
        logger.opt(exception=e).debug("unhandled error")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


__all__ = ["main", "parse_args"]
