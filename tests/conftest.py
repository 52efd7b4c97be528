from __future__ import annotations

import pytest

from onestop_roi.templates import get_template
from onestop_roi.types import InvestmentParameters


@pytest.fixture
def agriculture() -> InvestmentParameters:
    return get_template("agriculture")


@pytest.fixture
def flat_params() -> InvestmentParameters:
    # No growth, inflation, tax or discounting: every figure is hand-checkable.
    return InvestmentParameters(
        initial_investment=1000.0,
        monthly_revenue=200.0,
        monthly_expenses=100.0,
        project_period_months=12,
        tax_rate_pct=0.0,
        inflation_rate_pct=0.0,
        discount_rate_pct=0.0,
        revenue_growth_rate_pct=0.0,
    )
