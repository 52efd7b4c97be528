"""
Monte Carlo simulation around a base investment.
Varies revenue growth, expense inflation, discount rate and the month-1
revenue level, then summarises the ROI / NPV distribution.
"""
from typing import Optional, Dict
import warnings

import numpy as np
import pandas as pd
from loguru import logger

from .finance.cashflow import project
from .types import InvestmentParameters


def generate_mc_parameters(
    base: InvestmentParameters,
    n_scenarios: int,
    seed: Optional[int] = None,
) -> Dict[str, np.ndarray]:
    """
    Generate Monte Carlo parameter samples.

    Args:
        base: Parameters the draws are centred on
        n_scenarios: Number of scenarios to generate
        seed: Random seed for reproducibility

    Returns:
        Dictionary of parameter arrays
    """
    rng = np.random.default_rng(seed)
    growth = base.revenue_growth_rate_pct
    inflation = base.inflation_rate_pct
    discount = base.discount_rate_pct

    return {
        "revenue_growth_rate_pct": rng.uniform(growth * 0.5, growth * 1.5, n_scenarios),
        "inflation_rate_pct": np.clip(rng.normal(inflation, 1.5, n_scenarios), 0.0, None),
        "discount_rate_pct": np.clip(rng.normal(discount, 2.0, n_scenarios), 0.0, None),
        "revenue_multiplier": rng.uniform(0.8, 1.2, n_scenarios),
    }


def run_monte_carlo(
    base: InvestmentParameters,
    iterations: int = 1000,
    seed: Optional[int] = None,
) -> pd.DataFrame:
    """
    Run Monte Carlo simulation.

    Args:
        base: Base investment parameters
        iterations: Number of MC scenarios
        seed: Random seed for reproducibility

    Returns:
        DataFrame of scenario results, summary statistics in df.attrs
    """
    scenarios = generate_mc_parameters(base, iterations, seed)
    out_data = []

    declined = 0

    for i in range(iterations):
        growth = float(scenarios["revenue_growth_rate_pct"][i])
        inflation = float(scenarios["inflation_rate_pct"][i])
        discount = float(scenarios["discount_rate_pct"][i])
        mult = float(scenarios["revenue_multiplier"][i])

        p = base.replace(
            revenue_growth_rate_pct=growth,
            inflation_rate_pct=inflation,
            discount_rate_pct=discount,
            monthly_revenue=base.monthly_revenue * mult,
        )
        result = project(p)
        if result is None:
            declined += 1
            continue

        out_data.append({
            "iteration": i + 1,
            "revenue_growth_rate_pct": growth,
            "inflation_rate_pct": inflation,
            "discount_rate_pct": discount,
            "revenue_multiplier": mult,
            "roi": result.roi,
            "npv": result.npv,
            "irr": result.irr,
            "payback_period_months": result.payback_period_months,
        })

    if declined > 0:
        warnings.warn(f"Monte Carlo: {declined}/{iterations} scenarios could not be projected")

    df = pd.DataFrame(out_data)

    # Add summary statistics as attributes
    if len(df) > 0:
        df.attrs["mean_roi"] = float(df["roi"].mean())
        df.attrs["p10_roi"] = float(df["roi"].quantile(0.10))
        df.attrs["p90_roi"] = float(df["roi"].quantile(0.90))
        df.attrs["mean_npv"] = float(df["npv"].mean())
        df.attrs["p10_npv"] = float(df["npv"].quantile(0.10))
        df.attrs["p90_npv"] = float(df["npv"].quantile(0.90))
        df.attrs["prob_positive_npv"] = float((df["npv"] > 0).mean())
    df.attrs["success_rate"] = len(df) / iterations if iterations else 0.0

    logger.info("monte carlo: {} iterations, success rate {:.2%}", iterations, df.attrs["success_rate"])
    return df
