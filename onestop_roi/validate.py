# onestop_roi/validate.py
from __future__ import annotations
import os, sys, json, math
from pathlib import Path
from typing import Any, Dict, Iterable, List
import yaml

from .config import normalize_params
from .schema import EXTRA_KEYS, REQUIRED_KEYS, SCHEMA
from .templates import template_names


def _mode_from_env_or_flag(flag: str | None) -> str:
    if flag in ("strict", "relaxed"):
        return flag
    env = (os.environ.get("VALIDATION_MODE") or "").lower()
    return env if env in ("strict", "relaxed") else "relaxed"


def _as_number(key: str, value: Any) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise SystemExit(f"{key} must be numeric, got {value!r}") from None
    if not math.isfinite(v):
        raise SystemExit(f"{key} must be a finite number, got {value!r}")
    return v


def validate_params_dict(data: Dict[str, Any], *, mode: str = "relaxed") -> None:
    """
    Guardrails for a scenario mapping (grouped or flat, snake or camelCase):
      - relaxed: require the core investment keys unless a template is named
      - strict : also reject unknown keys and enforce SCHEMA ranges
    """
    flat = normalize_params(data)

    template = flat.get("template")
    if template is not None and str(template).strip().lower().replace("_", "-") not in template_names():
        raise SystemExit(f"unknown template '{template}'; choose one of {template_names()}")

    if template is None:
        missing = [k for k in REQUIRED_KEYS if k not in flat]
        if missing:
            raise SystemExit(f"missing required keys: {missing}")

    if mode == "strict":
        allowed = set(SCHEMA) | set(EXTRA_KEYS)
        unknown = sorted(k for k in flat if k not in allowed)
        if unknown:
            raise SystemExit(f"unknown keys (strict mode): {unknown}")

    # basic value checks (mode-agnostic)
    for key in SCHEMA:
        if key not in flat:
            continue
        v = _as_number(key, flat[key])
        if key == "project_period_months" and (v < 1 or v != int(v)):
            raise SystemExit("project_period_months must be a whole number >= 1")
        if key in ("initial_investment", "monthly_revenue", "monthly_expenses") and v < 0:
            raise SystemExit(f"{key} must be >= 0")
        if mode == "strict":
            lo = float(SCHEMA[key].get("min", float("-inf")))
            hi = float(SCHEMA[key].get("max", float("inf")))
            if not (lo <= v <= hi):
                raise SystemExit(f"{key} outside allowed range [{lo}, {hi}]: {v}")


def load_params_from_file(path: Path) -> Dict[str, Any]:
    p = Path(path)
    if p.is_dir():
        # scenario_runner handles directories; keep this function file-only
        raise SystemExit(f"{p} is a directory (expected a file)")
    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() in (".yaml", ".yml"):
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text or "{}")
    if not isinstance(data, dict):
        raise SystemExit(f"{p}: expected a mapping at top level")
    return data


def _iter_input_files(p: Path) -> Iterable[Path]:
    if p.is_file():
        yield p
    elif p.is_dir():
        for ext in ("*.yaml", "*.yml", "*.json"):
            yield from sorted(p.rglob(ext))


def _main(argv: List[str] | None = None) -> int:
    import argparse
    parser = argparse.ArgumentParser(prog="onestop_roi.validate", add_help=True)
    parser.add_argument("paths", nargs="+", help="YAML/JSON files or directories to validate")
    parser.add_argument("--mode", choices=["strict", "relaxed"], default=None, help="validation mode")
    args = parser.parse_args(argv)

    mode = _mode_from_env_or_flag(args.mode)
    had_error = False

    for raw in args.paths:
        target = Path(raw)
        any_seen = False
        for f in _iter_input_files(target):
            if not f.is_file():
                continue
            any_seen = True
            try:
                data = load_params_from_file(f)
                validate_params_dict(data, mode=mode)
                print(f"OK: {f}")
            except SystemExit as e:
                print(f"{f}: {e}", file=sys.stderr)
                had_error = True
            except (OSError, ValueError, yaml.YAMLError) as e:
                print(f"{f}: ERROR: {e}", file=sys.stderr)
                had_error = True
        if not any_seen:
            print(f"{target}: no YAML/JSON files found", file=sys.stderr)
            had_error = True

    return 1 if had_error else 0


if __name__ == "__main__":
    raise SystemExit(_main())
