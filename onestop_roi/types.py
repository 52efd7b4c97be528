# onestop_roi/types.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace as _replace
from typing import Any, Dict, Mapping, Tuple

import pandas as pd

from .schema import KEY_ALIASES


@dataclass(frozen=True)
class InvestmentParameters:
    """
    Inputs of a single projection. Amounts are in UGX, rates are percentages
    (20.0 means 20%). Annual rates are converted to monthly by dividing by 12.
    """

    initial_investment: float
    monthly_revenue: float
    monthly_expenses: float
    project_period_months: int = 36
    tax_rate_pct: float = 30.0
    inflation_rate_pct: float = 6.0
    discount_rate_pct: float = 12.0
    revenue_growth_rate_pct: float = 8.0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "InvestmentParameters":
        """
        Build from snake_case keys or the portal's camelCase form keys.
        Unknown keys are ignored; missing optional keys take the defaults.
        """
        names = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for raw_key, value in data.items():
            key = KEY_ALIASES.get(raw_key, raw_key)
            if key not in names or value is None:
                continue
            if key == "project_period_months":
                kwargs[key] = int(value)
            else:
                kwargs[key] = float(value)
        return cls(**kwargs)

    def replace(self, **changes: Any) -> "InvestmentParameters":
        return _replace(self, **changes)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MonthRow:
    month: int
    revenue: float
    expenses: float
    profit: float
    tax: float
    net_cash_flow: float
    cumulative_cash_flow: float
    discount_factor: float
    present_value: float


# Scalar metrics, in the order they are reported.
SUMMARY_KEYS: Tuple[str, ...] = (
    "total_revenue",
    "total_expenses",
    "gross_profit",
    "tax_amount",
    "net_profit",
    "roi",
    "payback_period_months",
    "break_even_point_months",
    "npv",
    "irr",
    "profit_margin",
    "annualized_return",
    "payback_reached",
    "break_even_reached",
    "irr_converged",
)


@dataclass(frozen=True)
class ProjectionResult:
    total_revenue: float
    total_expenses: float
    gross_profit: float
    tax_amount: float
    net_profit: float
    roi: float
    payback_period_months: int
    break_even_point_months: int
    npv: float
    irr: float
    profit_margin: float
    annualized_return: float
    # False when the horizon was substituted for a month never reached.
    payback_reached: bool = True
    break_even_reached: bool = True
    # False when the IRR scan stopped on its 0% / 100% bound.
    irr_converged: bool = True
    cash_flows: Tuple[float, ...] = field(default=(), repr=False)
    months: Tuple[MonthRow, ...] = field(default=(), repr=False)

    def summary(self) -> Dict[str, Any]:
        return {k: getattr(self, k) for k in SUMMARY_KEYS}

    def to_frame(self) -> pd.DataFrame:
        """Monthly rows as a DataFrame indexed by month."""
        df = pd.DataFrame([asdict(m) for m in self.months])
        if not df.empty:
            df = df.set_index("month")
        return df
