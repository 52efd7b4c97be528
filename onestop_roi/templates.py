"""Sector presets for the projection engine (values in UGX and percent)."""

from __future__ import annotations

from typing import Dict, List

from .types import InvestmentParameters

# Blank calculator form: rates pre-filled, amounts left for the user.
DEFAULT_PARAMETERS = InvestmentParameters(
    initial_investment=0.0,
    monthly_revenue=0.0,
    monthly_expenses=0.0,
    project_period_months=36,
    tax_rate_pct=30.0,
    inflation_rate_pct=6.0,
    discount_rate_pct=12.0,
    revenue_growth_rate_pct=8.0,
)

TEMPLATES: Dict[str, InvestmentParameters] = {
    "agriculture": InvestmentParameters(
        initial_investment=50_000_000.0,
        monthly_revenue=8_000_000.0,
        monthly_expenses=4_500_000.0,
        project_period_months=36,
        tax_rate_pct=20.0,  # agriculture rate
        inflation_rate_pct=6.5,
        discount_rate_pct=10.0,
        revenue_growth_rate_pct=12.0,
    ),
    "manufacturing": InvestmentParameters(
        initial_investment=200_000_000.0,
        monthly_revenue=25_000_000.0,
        monthly_expenses=15_000_000.0,
        project_period_months=60,
        tax_rate_pct=25.0,  # manufacturing, first 5 years
        inflation_rate_pct=5.5,
        discount_rate_pct=12.0,
        revenue_growth_rate_pct=15.0,
    ),
    "technology": InvestmentParameters(
        initial_investment=25_000_000.0,
        monthly_revenue=12_000_000.0,
        monthly_expenses=6_000_000.0,
        project_period_months=24,
        tax_rate_pct=30.0,
        inflation_rate_pct=4.0,
        discount_rate_pct=15.0,
        revenue_growth_rate_pct=25.0,
    ),
    "tourism": InvestmentParameters(
        initial_investment=100_000_000.0,
        monthly_revenue=18_000_000.0,
        monthly_expenses=8_000_000.0,
        project_period_months=48,
        tax_rate_pct=30.0,
        inflation_rate_pct=7.0,
        discount_rate_pct=13.0,
        revenue_growth_rate_pct=10.0,
    ),
    "real-estate": InvestmentParameters(
        initial_investment=500_000_000.0,
        monthly_revenue=35_000_000.0,
        monthly_expenses=12_000_000.0,
        project_period_months=120,
        tax_rate_pct=30.0,
        inflation_rate_pct=8.0,
        discount_rate_pct=11.0,
        revenue_growth_rate_pct=6.0,
    ),
}


def template_names() -> List[str]:
    return list(TEMPLATES)


def get_template(name: str) -> InvestmentParameters:
    key = str(name).strip().lower().replace("_", "-")
    try:
        return TEMPLATES[key]
    except KeyError:
        raise ValueError(f"unknown template '{name}'; choose one of {template_names()}") from None
