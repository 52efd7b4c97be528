"""One-way sensitivity analysis around a base projection."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import pandas as pd

from .finance.cashflow import project
from .types import InvestmentParameters, ProjectionResult


DEFAULT_SENSITIVITY_DRIVERS = [
    "initial_investment",
    "monthly_revenue",
    "monthly_expenses",
    "revenue_growth_rate_pct",
    "inflation_rate_pct",
    "discount_rate_pct",
    "tax_rate_pct",
]

TARGETS = [
    "roi",
    "npv",
    "irr",
    "net_profit",
    "payback_period_months",
]


def evaluate_outputs(result: Optional[ProjectionResult]) -> Dict[str, float]:
    if result is None:
        return {k: float("nan") for k in TARGETS}
    return {k: float(getattr(result, k)) for k in TARGETS}


def run_one_way_sensitivity(
    base: InvestmentParameters,
    delta_pct: float = 0.1,
    drivers: List[str] | None = None,
) -> Tuple[pd.DataFrame, Dict[str, float]]:
    """
    Flex each driver down and up by delta_pct (0.1 = ±10%) holding the rest.
    Returns (rows, base outputs). Declined projections show as NaN.
    """
    base_out = evaluate_outputs(project(base))
    if not drivers:
        drivers = list(DEFAULT_SENSITIVITY_DRIVERS)

    rows = []
    for driver in drivers:
        if not hasattr(base, driver) or driver == "project_period_months":
            continue
        for case, mult in [("Low", 1 - delta_pct), ("High", 1 + delta_pct)]:
            value = float(getattr(base, driver)) * mult
            if driver.endswith("_pct") and driver != "revenue_growth_rate_pct":
                value = max(value, 0.0)
            out = evaluate_outputs(project(base.replace(**{driver: value})))
            rows.append(
                {
                    "driver": driver,
                    "case": case,
                    "value": value,
                    **out,
                    **{f"delta_{k}": out[k] - base_out[k] for k in TARGETS},
                }
            )

    return pd.DataFrame(rows), base_out
