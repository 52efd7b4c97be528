from __future__ import annotations

import math
from typing import List, Optional

from loguru import logger

from onestop_roi.types import InvestmentParameters, MonthRow, ProjectionResult
from onestop_roi.finance.irr import approximate_irr, npv


def monthly_rate(annual_pct: float) -> float:
    """Annual percentage -> monthly decimal by simple division (not compounding)."""
    return float(annual_pct) / 100.0 / 12.0


def is_projectable(p: InvestmentParameters) -> bool:
    """Positive principal and revenue, a horizon of at least a month, every input finite."""
    if not all(math.isfinite(v) for v in p.as_dict().values()):
        return False
    return p.monthly_revenue > 0 and p.initial_investment > 0 and p.project_period_months >= 1


def project(p: InvestmentParameters) -> Optional[ProjectionResult]:
    """
    Month-by-month projection of an investment.

    Returns None when the inputs cannot produce a meaningful result
    (non-positive or non-finite revenue or principal, an empty horizon, or
    growth/discount compounding past float range). A zero-valued result is
    never used to signal that.
    """
    if not is_projectable(p):
        logger.debug("projection declined for {}", p)
        return None
    try:
        result = _simulate(p)
    except OverflowError:
        logger.debug("projection overflowed for {}", p)
        return None
    if not (math.isfinite(result.net_profit) and math.isfinite(result.npv)):
        logger.debug("projection left float range for {}", p)
        return None
    return result


def _simulate(p: InvestmentParameters) -> ProjectionResult:
    n = int(p.project_period_months)
    growth = monthly_rate(p.revenue_growth_rate_pct)
    inflation = monthly_rate(p.inflation_rate_pct)
    discount = monthly_rate(p.discount_rate_pct)

    cash_flows: List[float] = [-p.initial_investment]
    rows: List[MonthRow] = []
    total_revenue = 0.0
    total_expenses = 0.0
    cumulative = -p.initial_investment
    payback_month: Optional[int] = None
    break_even_month: Optional[int] = None

    for month in range(1, n + 1):
        revenue = _revenue(p, growth, month)
        expenses = _expenses(p, inflation, month)
        total_revenue += revenue
        total_expenses += expenses

        profit = revenue - expenses
        tax = max(0.0, profit * p.tax_rate_pct / 100.0)
        net = profit - tax
        cash_flows.append(net)

        cumulative += net
        if payback_month is None and cumulative > 0:
            payback_month = month
        if break_even_month is None and net > 0:
            break_even_month = month

        factor = 1.0 / ((1.0 + discount) ** month)
        rows.append(
            MonthRow(
                month=month,
                revenue=revenue,
                expenses=expenses,
                profit=profit,
                tax=tax,
                net_cash_flow=net,
                cumulative_cash_flow=cumulative,
                discount_factor=factor,
                present_value=net * factor,
            )
        )

    gross_profit = total_revenue - total_expenses
    tax_amount = max(0.0, gross_profit * p.tax_rate_pct / 100.0)
    net_profit = gross_profit - tax_amount
    roi = net_profit / p.initial_investment * 100.0
    profit_margin = net_profit / total_revenue * 100.0 if total_revenue > 0 else 0.0
    annualized_return = roi * (12.0 / n)
    estimate = approximate_irr(cash_flows)

    return ProjectionResult(
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        gross_profit=gross_profit,
        tax_amount=tax_amount,
        net_profit=net_profit,
        roi=roi,
        payback_period_months=payback_month if payback_month is not None else n,
        break_even_point_months=break_even_month if break_even_month is not None else n,
        npv=npv(discount, cash_flows),
        irr=estimate.rate_pct,
        profit_margin=profit_margin,
        annualized_return=annualized_return,
        payback_reached=payback_month is not None,
        break_even_reached=break_even_month is not None,
        irr_converged=estimate.converged,
        cash_flows=tuple(cash_flows),
        months=tuple(rows),
    )


def _revenue(p: InvestmentParameters, growth: float, month: int) -> float:
    return p.monthly_revenue * ((1.0 + growth) ** (month - 1))


def _expenses(p: InvestmentParameters, inflation: float, month: int) -> float:
    return p.monthly_expenses * ((1.0 + inflation) ** (month - 1))
