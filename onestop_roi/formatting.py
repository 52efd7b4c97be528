"""Presentation helpers: UGX amounts and percentages as display strings."""

from __future__ import annotations

import math
from typing import List

from .types import ProjectionResult


def _round_half_up(x: float) -> int:
    # Ties go toward +inf like the portal (-2.5 -> -2); built-in round() is banker's rounding.
    return int(math.floor(x + 0.5))


def format_number(x: float) -> str:
    """Whole-unit amount with thousands separators, e.g. 1234567.5 -> '1,234,568'."""
    return f"{_round_half_up(float(x)):,}"


def format_ugx(x: float) -> str:
    return f"UGX {format_number(x)}"


def format_pct(x: float, digits: int = 1) -> str:
    return f"{float(x):.{digits}f}%"


def render_summary(result: ProjectionResult, *, title: str = "Projection") -> str:
    months_note = "" if result.payback_reached else " (not reached)"
    even_note = "" if result.break_even_reached else " (not reached)"
    irr_note = "" if result.irr_converged else " (bound reached, estimate)"
    lines: List[str] = [
        title,
        f"  Total revenue:      {format_ugx(result.total_revenue)}",
        f"  Total expenses:     -{format_ugx(result.total_expenses)}",
        f"  Tax:                -{format_ugx(result.tax_amount)}",
        f"  Net profit:         {format_ugx(result.net_profit)}",
        f"  ROI:                {format_pct(result.roi)}",
        f"  Annualized return:  {format_pct(result.annualized_return)}",
        f"  Profit margin:      {format_pct(result.profit_margin)}",
        f"  NPV:                {format_ugx(result.npv)}",
        f"  IRR:                {format_pct(result.irr)}{irr_note}",
        f"  Payback:            {result.payback_period_months} months{months_note}",
        f"  Break-even:         month {result.break_even_point_months}{even_note}",
    ]
    return "\n".join(lines)
