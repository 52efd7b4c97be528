from __future__ import annotations
from typing import Dict, Any

# Parameter schema: units, type, min/max ranges, and description.
SCHEMA: Dict[str, Dict[str, Any]] = {
    "initial_investment":      {"unit": "UGX",     "type": "float", "min": 0.0, "max": 1e13,  "desc": "Upfront capital outlay (month 0)"},
    "monthly_revenue":         {"unit": "UGX/mo",  "type": "float", "min": 0.0, "max": 1e12,  "desc": "Month-1 revenue before growth"},
    "monthly_expenses":        {"unit": "UGX/mo",  "type": "float", "min": 0.0, "max": 1e12,  "desc": "Month-1 operating expenses before inflation"},
    "project_period_months":   {"unit": "months",  "type": "int",   "min": 1,   "max": 1200,  "desc": "Projection horizon"},
    "tax_rate_pct":            {"unit": "%",       "type": "float", "min": 0.0, "max": 100.0, "desc": "Tax on positive monthly profit"},
    "inflation_rate_pct":      {"unit": "%/yr",    "type": "float", "min": 0.0, "max": 100.0, "desc": "Expense inflation, compounded monthly"},
    "discount_rate_pct":       {"unit": "%/yr",    "type": "float", "min": 0.0, "max": 100.0, "desc": "NPV discount rate, compounded monthly"},
    "revenue_growth_rate_pct": {"unit": "%/yr",    "type": "float", "min": -100.0, "max": 500.0, "desc": "Revenue growth, compounded monthly"},
}

# Keys that must be present unless a template supplies them.
REQUIRED_KEYS = ("initial_investment", "monthly_revenue", "monthly_expenses", "project_period_months")

# Top-level keys accepted besides the parameters themselves.
EXTRA_KEYS = ("template", "name", "description")

# Portal form field names -> parameter names.
KEY_ALIASES: Dict[str, str] = {
    "initialInvestment": "initial_investment",
    "monthlyRevenue": "monthly_revenue",
    "monthlyExpenses": "monthly_expenses",
    "projectPeriod": "project_period_months",
    "projectPeriodMonths": "project_period_months",
    "taxRate": "tax_rate_pct",
    "taxRatePercent": "tax_rate_pct",
    "inflationRate": "inflation_rate_pct",
    "inflationRatePercent": "inflation_rate_pct",
    "discountRate": "discount_rate_pct",
    "discountRatePercent": "discount_rate_pct",
    "revenueGrowthRate": "revenue_growth_rate_pct",
    "revenueGrowthRatePercent": "revenue_growth_rate_pct",
}
