"""
Qualitative ratings shown alongside a projection.

Design:
- IRR/NPV implementations live only in onestop_roi.finance.irr (singleton).
- This module must not *define* irr/npv; it re-exports them for callers.
- Thresholds are in the same units as ProjectionResult (percent, months).
"""
from __future__ import annotations

from typing import Any, Dict, List

from onestop_roi.types import ProjectionResult
from .irr import npv as npv, approximate_irr as approximate_irr  # re-exports only

__all__ = [
    "npv",
    "approximate_irr",
    "roi_assessment",
    "risk_level",
    "liquidity_level",
    "market_position",
    "optimization_tips",
    "assess",
    "RISK_MITIGATION",
    "MARKET_INSIGHTS",
]

RISK_MITIGATION: List[str] = [
    "Diversify revenue streams across different markets",
    "Maintain adequate cash reserves for operations",
    "Consider comprehensive business insurance",
    "Monitor currency exchange rate fluctuations",
    "Build strong local partnerships",
]

MARKET_INSIGHTS: List[str] = [
    "Uganda GDP growth: 5.2% annually",
    "East African Community market: 177M people",
    "Business environment improving yearly",
    "Young population driving consumption growth",
    "Infrastructure development creating opportunities",
]

_BASE_TIPS = (
    "Consider Uganda Investment Authority incentives",
    "Explore tax holidays for priority sectors",
    "Optimize operational efficiency to reduce monthly expenses",
)


def roi_assessment(roi: float) -> str:
    if roi > 50:
        return "Excellent returns"
    if roi > 25:
        return "Very good returns"
    if roi > 15:
        return "Good returns"
    if roi > 5:
        return "Moderate returns"
    return "Low returns"


def risk_level(payback_months: int, roi: float) -> str:
    """Combined rating: fast payback only counts as low risk with a strong ROI."""
    if payback_months <= 12 and roi > 30:
        return "Low Risk"
    if payback_months <= 24 and roi > 20:
        return "Medium Risk"
    if payback_months <= 36 and roi > 10:
        return "Medium-High Risk"
    return "High Risk"


def liquidity_level(payback_months: int) -> str:
    if payback_months <= 18:
        return "High"
    if payback_months <= 36:
        return "Medium"
    return "Low"


def market_position(profit_margin: float) -> str:
    if profit_margin > 30:
        return "Market Leader"
    if profit_margin > 20:
        return "Strong Position"
    if profit_margin > 10:
        return "Competitive"
    return "Challenging"


def optimization_tips(result: ProjectionResult) -> List[str]:
    tips = list(_BASE_TIPS)
    if result.roi < 15:
        tips.append("Review pricing strategy to increase revenue")
        tips.append("Consider cost reduction measures")
    if result.payback_period_months > 36:
        tips.append("Explore faster revenue generation methods")
    return tips


def assess(result: ProjectionResult) -> Dict[str, Any]:
    return {
        "roi_assessment": roi_assessment(result.roi),
        "risk_level": risk_level(result.payback_period_months, result.roi),
        "liquidity": liquidity_level(result.payback_period_months),
        "market_position": market_position(result.profit_margin),
        "npv_positive": result.npv > 0,
        "optimization_tips": optimization_tips(result),
        "risk_mitigation": list(RISK_MITIGATION),
        "market_insights": list(MARKET_INSIGHTS),
    }
