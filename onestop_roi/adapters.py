# onestop_roi/adapters.py
from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Mapping

from loguru import logger

from onestop_roi.config import resolve_params
from onestop_roi.finance.cashflow import project
from onestop_roi.finance.irr import annualize_monthly_rate, irr
from onestop_roi.finance.metrics import assess
from onestop_roi.types import InvestmentParameters, ProjectionResult


def _decline_reason(p: InvestmentParameters) -> str:
    reasons = []
    if not p.initial_investment > 0:
        reasons.append("initial_investment must be > 0")
    if not p.monthly_revenue > 0:
        reasons.append("monthly_revenue must be > 0")
    if p.project_period_months < 1:
        reasons.append("project_period_months must be >= 1")
    return "; ".join(reasons) or "inputs are not finite or compound beyond float range over the horizon"


def summarize(p: InvestmentParameters, result: ProjectionResult) -> Dict[str, Any]:
    """Flatten a ProjectionResult into the mapping written to summary.json."""
    exact = annualize_monthly_rate(irr(result.cash_flows))
    return {
        "computed": True,
        "parameters": p.as_dict(),
        **result.summary(),
        "irr_exact_pct": exact * 100.0 if exact is not None else None,
        "assessment": assess(result),
        "monthly": [asdict(m) for m in result.months],
    }


# ------------------------------
# Public adapter(s)
# ------------------------------
def run_projection(params: Mapping[str, Any] | InvestmentParameters) -> Dict[str, Any]:
    """
    High-level adapter:
      1) Resolve a config mapping (template + overrides) into parameters.
      2) Run the projection engine.
      3) Add the exact IRR, the qualitative assessment and monthly rows.

    Returns {'computed': False, 'reason': ...} when the engine declines, so a
    caller never mistakes a missing result for a zero one.
    """
    p = params if isinstance(params, InvestmentParameters) else resolve_params(params)
    result = project(p)
    if result is None:
        reason = _decline_reason(p)
        logger.warning("projection not computed: {}", reason)
        return {"computed": False, "reason": reason, "parameters": p.as_dict()}

    logger.info(
        "projected {} months: roi={:.2f}% npv={:.0f} payback={}",
        p.project_period_months,
        result.roi,
        result.npv,
        result.payback_period_months,
    )
    return summarize(p, result)
