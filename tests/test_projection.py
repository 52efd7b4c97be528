import math

import pytest

from onestop_roi.finance.cashflow import monthly_rate, project
from onestop_roi.finance.irr import annualize_monthly_rate, irr
from onestop_roi.templates import TEMPLATES
from onestop_roi.types import InvestmentParameters


def test_flat_scenario_matches_hand_figures(flat_params):
    r = project(flat_params)
    assert r is not None
    assert r.total_revenue == 2400.0
    assert r.total_expenses == 1200.0
    assert r.gross_profit == 1200.0
    assert r.tax_amount == 0.0
    assert r.net_profit == 1200.0
    assert r.roi == pytest.approx(120.0)
    assert r.profit_margin == pytest.approx(50.0)
    assert r.annualized_return == pytest.approx(120.0)
    assert r.npv == pytest.approx(200.0)
    # cumulative is exactly 0 after month 10; payback needs it strictly positive
    assert r.payback_period_months == 11
    assert r.break_even_point_months == 1
    assert r.payback_reached and r.break_even_reached


def test_cash_flow_series_starts_with_outlay(flat_params):
    r = project(flat_params)
    assert r.cash_flows[0] == -1000.0
    assert len(r.cash_flows) == flat_params.project_period_months + 1
    assert len(r.months) == flat_params.project_period_months
    assert [m.month for m in r.months] == list(range(1, 13))
    assert r.months[-1].cumulative_cash_flow == pytest.approx(200.0)


def test_monthly_rate_is_simple_division():
    assert monthly_rate(12.0) == pytest.approx(0.01)
    assert monthly_rate(0.0) == 0.0


def test_npv_never_increases_with_discount_rate(agriculture):
    npvs = [project(agriculture.replace(discount_rate_pct=d)).npv for d in (0, 5, 10, 15, 25, 50)]
    for lower, higher in zip(npvs, npvs[1:]):
        assert higher < lower


@pytest.mark.parametrize("name", sorted(TEMPLATES))
def test_payback_and_break_even_within_horizon(name):
    p = TEMPLATES[name]
    r = project(p)
    assert 1 <= r.payback_period_months <= p.project_period_months
    assert 1 <= r.break_even_point_months <= p.project_period_months


def test_losing_investment_defaults_to_horizon():
    p = InvestmentParameters(
        initial_investment=1000.0,
        monthly_revenue=100.0,
        monthly_expenses=200.0,
        project_period_months=6,
        tax_rate_pct=30.0,
        inflation_rate_pct=0.0,
        discount_rate_pct=10.0,
        revenue_growth_rate_pct=0.0,
    )
    r = project(p)
    assert r.payback_period_months == 6
    assert r.break_even_point_months == 6
    assert not r.payback_reached
    assert not r.break_even_reached


def test_zero_growth_and_inflation_do_not_drift():
    p = InvestmentParameters(
        initial_investment=10_000_000.0,
        monthly_revenue=1_234_567.89,
        monthly_expenses=987_654.32,
        project_period_months=120,
        tax_rate_pct=30.0,
        inflation_rate_pct=0.0,
        discount_rate_pct=12.0,
        revenue_growth_rate_pct=0.0,
    )
    r = project(p)
    assert all(m.revenue == p.monthly_revenue for m in r.months)
    assert all(m.expenses == p.monthly_expenses for m in r.months)


def test_tax_is_never_negative_on_loss_months():
    p = InvestmentParameters(
        initial_investment=500.0,
        monthly_revenue=100.0,
        monthly_expenses=200.0,
        project_period_months=24,
        tax_rate_pct=30.0,
        inflation_rate_pct=5.0,
        discount_rate_pct=10.0,
        revenue_growth_rate_pct=3.0,
    )
    r = project(p)
    loss_months = [m for m in r.months if m.profit < 0]
    assert loss_months
    assert all(m.tax == 0.0 for m in loss_months)
    assert all(m.net_cash_flow == m.profit for m in loss_months)
    assert r.tax_amount == 0.0


def test_tax_applies_to_profitable_months():
    p = InvestmentParameters(
        initial_investment=500.0,
        monthly_revenue=200.0,
        monthly_expenses=100.0,
        project_period_months=3,
        tax_rate_pct=25.0,
        inflation_rate_pct=0.0,
        discount_rate_pct=0.0,
        revenue_growth_rate_pct=0.0,
    )
    r = project(p)
    assert [m.tax for m in r.months] == [25.0, 25.0, 25.0]
    assert [m.net_cash_flow for m in r.months] == [75.0, 75.0, 75.0]
    assert r.tax_amount == pytest.approx(75.0)
    assert r.net_profit == pytest.approx(225.0)


def test_all_zero_expenses_taxes_full_revenue():
    p = InvestmentParameters(
        initial_investment=1000.0,
        monthly_revenue=100.0,
        monthly_expenses=0.0,
        project_period_months=2,
        tax_rate_pct=10.0,
        inflation_rate_pct=6.0,
        discount_rate_pct=0.0,
        revenue_growth_rate_pct=0.0,
    )
    r = project(p)
    assert [m.tax for m in r.months] == [pytest.approx(10.0), pytest.approx(10.0)]
    assert r.total_expenses == 0.0


def test_growth_compounds_monthly():
    p = InvestmentParameters(
        initial_investment=1000.0,
        monthly_revenue=100.0,
        monthly_expenses=0.0,
        project_period_months=3,
        tax_rate_pct=0.0,
        inflation_rate_pct=0.0,
        discount_rate_pct=0.0,
        revenue_growth_rate_pct=12.0,
    )
    r = project(p)
    assert [m.revenue for m in r.months] == [
        pytest.approx(100.0),
        pytest.approx(101.0),
        pytest.approx(102.01),
    ]


def test_projection_is_idempotent(agriculture):
    a = project(agriculture)
    b = project(agriculture)
    assert a == b
    assert a.summary() == b.summary()


def test_agriculture_template_scenario(agriculture):
    r = project(agriculture)
    assert r is not None
    assert r.roi > 0
    assert 1 < r.payback_period_months < 36
    assert math.isfinite(r.npv)
    assert 0 < r.profit_margin < 100
    assert r.irr_converged
    assert 0 < r.irr < 100


def test_scan_irr_tracks_exact_irr(agriculture):
    r = project(agriculture)
    exact_pct = annualize_monthly_rate(irr(r.cash_flows)) * 100.0
    # the scan stops on the first 1% step at or past the root
    assert -0.01 <= r.irr - exact_pct <= 1.01


def test_single_month_horizon_resolves_within_month():
    p = InvestmentParameters(
        initial_investment=1000.0,
        monthly_revenue=2000.0,
        monthly_expenses=500.0,
        project_period_months=1,
        tax_rate_pct=0.0,
        inflation_rate_pct=0.0,
        discount_rate_pct=0.0,
        revenue_growth_rate_pct=0.0,
    )
    r = project(p)
    assert len(r.months) == 1
    assert len(r.cash_flows) == 2
    assert r.payback_period_months == 1 and r.payback_reached
    assert r.break_even_point_months == 1 and r.break_even_reached
    assert r.annualized_return == pytest.approx(r.roi * 12)


def test_single_month_horizon_without_payback():
    p = InvestmentParameters(
        initial_investment=1000.0,
        monthly_revenue=200.0,
        monthly_expenses=100.0,
        project_period_months=1,
    )
    r = project(p)
    assert r.payback_period_months == 1
    assert not r.payback_reached
    assert r.break_even_point_months == 1
    assert r.break_even_reached


@pytest.mark.parametrize(
    "changes",
    [
        {"initial_investment": 0.0},
        {"initial_investment": -5.0},
        {"monthly_revenue": 0.0},
        {"monthly_revenue": -1.0},
        {"project_period_months": 0},
    ],
)
def test_invalid_inputs_return_none(flat_params, changes):
    assert project(flat_params.replace(**changes)) is None


def test_long_horizon_is_iterative(flat_params):
    r = project(flat_params.replace(project_period_months=1200, revenue_growth_rate_pct=2.0))
    assert len(r.months) == 1200
    assert math.isfinite(r.npv)


def test_to_frame_has_one_row_per_month(agriculture):
    df = project(agriculture).to_frame()
    assert len(df) == 36
    assert df.index.name == "month"
    assert "net_cash_flow" in df.columns
    assert df["present_value"].sum() == pytest.approx(project(agriculture).npv + 50_000_000)


@pytest.mark.parametrize(
    "changes",
    [
        {"monthly_revenue": float("nan")},
        {"initial_investment": float("nan")},
        {"monthly_expenses": float("inf")},
        {"discount_rate_pct": float("nan")},
    ],
)
def test_non_finite_inputs_return_none(agriculture, changes):
    assert project(agriculture.replace(**changes)) is None


@pytest.mark.parametrize(
    "changes",
    [
        {"revenue_growth_rate_pct": 1000.0},
        {"inflation_rate_pct": 1000.0},
        {"discount_rate_pct": 100_000.0},
    ],
)
def test_runaway_compounding_declines_instead_of_raising(agriculture, changes):
    assert project(agriculture.replace(project_period_months=1200, **changes)) is None


def test_adapter_reports_runaway_compounding(agriculture):
    from onestop_roi.adapters import run_projection

    res = run_projection(agriculture.replace(project_period_months=1200, revenue_growth_rate_pct=1000.0))
    assert res["computed"] is False
    assert "float range" in res["reason"]
