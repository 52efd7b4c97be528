# onestop_roi/finance/tax.py
"""
Uganda tax helpers used by the portal's calculators:
 - paye(gross_salary)          monthly PAYE + NSSF employee contribution
 - corporate_tax(revenue, expenses)
 - vat(amount, inclusive=False)

Amounts are monthly UGX. Bands and rates are the resident-individual
schedule; keep this module self-contained.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

# (band floor, band width or None for open-ended, rate)
PAYE_BANDS: List[Tuple[float, Optional[float], float]] = [
    (235_000.0, 135_000.0, 0.10),
    (370_000.0, 130_000.0, 0.20),
    (500_000.0, None, 0.30),
]
NSSF_EMPLOYEE_RATE = 0.05
NSSF_EMPLOYEE_CAP = 10_000.0
CORPORATE_TAX_RATE = 0.30
VAT_RATE = 0.18


@dataclass(frozen=True)
class PayeBreakdown:
    gross_salary: float
    taxable_income: float
    paye_tax: float
    nssf_contribution: float
    total_deductions: float
    net_salary: float


@dataclass(frozen=True)
class CorporateTaxBreakdown:
    revenue: float
    expenses: float
    taxable_profit: float
    corporate_tax: float
    net_profit: float
    effective_rate_pct: float


@dataclass(frozen=True)
class VatBreakdown:
    amount: float
    inclusive: bool
    vat: float
    total: float


def paye(gross_salary: float) -> PayeBreakdown:
    gross = float(gross_salary)
    taxable = gross
    tax = 0.0
    for floor, width, rate in PAYE_BANDS:
        if taxable <= floor:
            break
        excess = taxable - floor
        if width is not None:
            excess = min(excess, width)
        tax += excess * rate

    nssf = min(gross * NSSF_EMPLOYEE_RATE, NSSF_EMPLOYEE_CAP)
    deductions = tax + nssf
    return PayeBreakdown(
        gross_salary=gross,
        taxable_income=taxable,
        paye_tax=tax,
        nssf_contribution=nssf,
        total_deductions=deductions,
        net_salary=gross - deductions,
    )


def corporate_tax(revenue: float, expenses: float) -> CorporateTaxBreakdown:
    rev = float(revenue)
    exp = float(expenses)
    taxable = max(0.0, rev - exp)
    tax = taxable * CORPORATE_TAX_RATE
    return CorporateTaxBreakdown(
        revenue=rev,
        expenses=exp,
        taxable_profit=taxable,
        corporate_tax=tax,
        net_profit=taxable - tax,
        effective_rate_pct=(tax / rev) * 100.0 if rev > 0 else 0.0,
    )


def vat(amount: float, inclusive: bool = False) -> VatBreakdown:
    """
    Exclusive: VAT is added on top; total includes VAT.
    Inclusive: VAT is extracted; total is the net amount without VAT.
    """
    a = float(amount)
    if inclusive:
        net = a / (1.0 + VAT_RATE)
        return VatBreakdown(amount=a, inclusive=True, vat=a - net, total=net)
    return VatBreakdown(amount=a, inclusive=False, vat=a * VAT_RATE, total=a * (1.0 + VAT_RATE))
