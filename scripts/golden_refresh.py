from __future__ import annotations
import json, os, subprocess, sys, tempfile
from pathlib import Path

SCENARIO = Path("tests/golden/simple_case.yaml")
BASELINE = Path("tests/golden/summary.json")
FROZEN_KEYS = (
    "total_revenue",
    "net_profit",
    "roi",
    "npv",
    "profit_margin",
    "payback_period_months",
    "break_even_point_months",
)

def main() -> int:
    if not SCENARIO.exists():
        print(f"[x] Missing scenario: {SCENARIO}", file=sys.stderr)
        return 2

    env = os.environ.copy()
    env["VALIDATION_MODE"] = "relaxed"

    with tempfile.TemporaryDirectory(prefix="onestop_golden_") as tmp:
        outdir = Path(tmp)
        cmd = [
            sys.executable, "-m", "onestop_roi",
            "--config", str(SCENARIO),
            "--out", str(outdir),
            "--fmt", "csv",
        ]
        subprocess.run(cmd, check=True, env=env, stdout=subprocess.DEVNULL)

        sj = outdir / "summary.json"
        if not sj.exists():
            print("[x] summary.json not produced; check CLI/run_dir", file=sys.stderr)
            return 3
        data = json.loads(sj.read_text(encoding="utf-8"))

    # Ensure we only store known keys to keep the baseline slim & stable
    minimal = {k: float(data[k]) for k in FROZEN_KEYS if k in data}
    if set(minimal) != set(FROZEN_KEYS):
        print(f"[x] summary.json missing keys {set(FROZEN_KEYS)-set(minimal)}", file=sys.stderr)
        return 4

    BASELINE.parent.mkdir(parents=True, exist_ok=True)
    BASELINE.write_text(json.dumps(minimal, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    print(f"[ok] Wrote baseline {BASELINE}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
