# onestop_roi/finance/irr.py
from __future__ import annotations

from typing import Iterable, List, NamedTuple, Optional

import numpy_financial as npf


# ---------- NPV ----------
def npv(rate: float, cashflows: Iterable[float]) -> float:
    """
    Classic discounted cash flow on a periodic rate:
        NPV(r) = sum_{t=0..N} CF[t] / (1+r)^t
    Index 0 is the upfront outlay and is not discounted.
    """
    r = float(rate)
    if r <= -1.0:
        # Avoid division by zero / negatives beyond -100%
        r = -0.999999
    total = 0.0
    for t, cf in enumerate(cashflows):
        total += float(cf) / ((1.0 + r) ** t)
    return total


# ---------- IRR (coarse scan) ----------
class IrrEstimate(NamedTuple):
    rate_pct: float
    converged: bool


def approximate_irr(
    cashflows: Iterable[float],
    *,
    start: float = 0.10,
    step: float = 0.01,
    lower: float = 0.0,
    upper: float = 1.0,
) -> IrrEstimate:
    """
    Linear scan for the annual rate where the monthly NPV crosses zero.

    Starts at 10% a year and walks in 1% steps: up while NPV > 1 (capped at
    100%), or down while NPV < -1 (floored at 0%). Precision is about one
    step. Series with several sign changes may not have a single root; the
    result is then only a best-effort estimate.

    `converged` is False when the scan stopped on a bound with |NPV| > 1.
    """
    cfs: List[float] = [float(x) for x in cashflows]
    # Count whole steps so repeated float addition cannot drift past a bound.
    steps = 0
    rate = float(start)
    value = npv(rate / 12.0, cfs)

    if value > 0:
        while value > 1 and rate < upper:
            steps += 1
            rate = min(start + steps * step, upper)
            value = npv(rate / 12.0, cfs)
    else:
        while value < -1 and rate > lower:
            steps += 1
            rate = max(start - steps * step, lower)
            value = npv(rate / 12.0, cfs)

    # On large amounts a 1% step overshoots the root; an interior stop still brackets it.
    converged = abs(value) <= 1 or lower < rate < upper
    return IrrEstimate(rate_pct=rate * 100.0, converged=converged)


# ---------- IRR (periodic, exact) ----------
def irr(cashflows: Iterable[float]) -> Optional[float]:
    """
    Periodic IRR via numpy-financial. Returns a decimal rate per period
    (monthly for the projection engine), or None when no root is bracketed.
    """
    cfs = [float(x) for x in cashflows]
    if len(cfs) < 2:
        return None
    val = float(npf.irr(cfs))
    if val != val:  # NaN check
        return None
    return val


def annualize_monthly_rate(rate: Optional[float]) -> Optional[float]:
    """Simple x12 annualization, matching the engine's rate/12 convention."""
    if rate is None:
        return None
    return float(rate) * 12.0
