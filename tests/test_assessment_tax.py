import pytest

from onestop_roi.finance.cashflow import project
from onestop_roi.finance.metrics import (
    MARKET_INSIGHTS,
    RISK_MITIGATION,
    assess,
    liquidity_level,
    market_position,
    optimization_tips,
    risk_level,
    roi_assessment,
)
from onestop_roi.finance.tax import corporate_tax, paye, vat


@pytest.mark.parametrize(
    "roi, expected",
    [(60, "Excellent returns"), (30, "Very good returns"), (20, "Good returns"), (10, "Moderate returns"), (5, "Low returns")],
)
def test_roi_assessment_bands(roi, expected):
    assert roi_assessment(roi) == expected


def test_risk_level_combines_payback_and_roi():
    assert risk_level(12, 31) == "Low Risk"
    assert risk_level(12, 25) == "Medium Risk"
    assert risk_level(30, 15) == "Medium-High Risk"
    assert risk_level(40, 90) == "High Risk"


def test_liquidity_and_market_position():
    assert liquidity_level(18) == "High"
    assert liquidity_level(36) == "Medium"
    assert liquidity_level(37) == "Low"
    assert market_position(31) == "Market Leader"
    assert market_position(25) == "Strong Position"
    assert market_position(15) == "Competitive"
    assert market_position(10) == "Challenging"


def test_optimization_tips_grow_for_weak_projects(flat_params):
    weak = project(flat_params.replace(monthly_revenue=101.0, project_period_months=48))
    assert weak.roi < 15 and weak.payback_period_months > 36
    tips = optimization_tips(weak)
    assert "Review pricing strategy to increase revenue" in tips
    assert "Explore faster revenue generation methods" in tips
    strong = project(flat_params)
    assert len(optimization_tips(strong)) == 3


def test_assess_bundle(agriculture):
    out = assess(project(agriculture))
    assert out["npv_positive"] is True
    assert out["risk_mitigation"] == RISK_MITIGATION
    assert out["market_insights"] == MARKET_INSIGHTS
    for key in ("roi_assessment", "risk_level", "liquidity", "market_position", "optimization_tips"):
        assert key in out


def test_paye_below_threshold_is_untaxed():
    b = paye(200_000)
    assert b.paye_tax == 0.0
    assert b.nssf_contribution == pytest.approx(10_000.0)
    assert b.net_salary == pytest.approx(190_000.0)


def test_paye_spans_all_bands():
    b = paye(1_000_000)
    # 135k @10% + 130k @20% + 500k @30%
    assert b.paye_tax == pytest.approx(13_500 + 26_000 + 150_000)
    assert b.nssf_contribution == 10_000.0
    assert b.total_deductions == pytest.approx(b.paye_tax + 10_000)


def test_paye_partial_band():
    assert paye(300_000).paye_tax == pytest.approx(6_500.0)


def test_corporate_tax():
    b = corporate_tax(1_000_000, 400_000)
    assert b.taxable_profit == 600_000
    assert b.corporate_tax == pytest.approx(180_000)
    assert b.effective_rate_pct == pytest.approx(18.0)
    loss = corporate_tax(100, 400)
    assert loss.corporate_tax == 0.0
    assert corporate_tax(0, 0).effective_rate_pct == 0.0


def test_vat_exclusive_and_inclusive():
    ex = vat(100_000)
    assert ex.vat == pytest.approx(18_000)
    assert ex.total == pytest.approx(118_000)
    inc = vat(118_000, inclusive=True)
    assert inc.vat == pytest.approx(18_000)
    assert inc.total == pytest.approx(100_000)
