"""Indian income tax (old and new regime) and statutory gratuity."""

from __future__ import annotations

import math
from enum import Enum
from typing import Dict, Sequence, Tuple

from pydantic import BaseModel

CESS_RATE = 0.04

# Gratuity: 15 days' wages per completed year, on a 26-working-day month
GRATUITY_DAYS_PER_YEAR = 15
GRATUITY_WORKING_DAYS = 26


class TaxRegime(str, Enum):
    OLD = "old"
    NEW = "new"


Brackets = Sequence[Tuple[float, float]]

# (upper bound of the slab inclusive, marginal rate)
OLD_REGIME_BRACKETS: Brackets = (
    (250_000, 0.0),
    (500_000, 0.05),
    (1_000_000, 0.20),
    (math.inf, 0.30),
)
NEW_REGIME_BRACKETS: Brackets = (
    (300_000, 0.0),
    (700_000, 0.05),
    (1_000_000, 0.10),
    (1_200_000, 0.15),
    (1_500_000, 0.20),
    (math.inf, 0.30),
)

STANDARD_DEDUCTION: Dict[TaxRegime, float] = {
    TaxRegime.OLD: 50_000,
    TaxRegime.NEW: 75_000,
}
BRACKETS: Dict[TaxRegime, Brackets] = {
    TaxRegime.OLD: OLD_REGIME_BRACKETS,
    TaxRegime.NEW: NEW_REGIME_BRACKETS,
}


class RegimeTax(BaseModel):
    regime: TaxRegime
    taxable_income: float
    base_tax: float
    cess: float
    total_tax: float


class TaxComparison(BaseModel):
    old: RegimeTax
    new: RegimeTax
    recommended: TaxRegime
    savings: float


def bracket_tax(taxable_income: float, brackets: Brackets) -> float:
    """Sum each slab's marginal rate over the part of income falling in it."""
    tax = 0.0
    lower = 0.0
    for upper, rate in brackets:
        if taxable_income <= lower:
            break
        tax += (min(taxable_income, upper) - lower) * rate
        lower = upper
    return tax


def regime_tax(taxable_income: float, regime: TaxRegime) -> float:
    """Tax before cess on income that already has every deduction applied."""
    return bracket_tax(taxable_income, BRACKETS[TaxRegime(regime)])


def with_cess(tax: float) -> float:
    return tax + tax * CESS_RATE


def assess_regime(gross_income: float, regime: TaxRegime, deductions: float = 0.0) -> RegimeTax:
    """Full liability under one regime.

    ``deductions`` are the itemised exemptions on top of the regime's own
    standard deduction; the new regime accepts none, so pass 0.
    """
    regime = TaxRegime(regime)
    taxable = max(0.0, gross_income - deductions - STANDARD_DEDUCTION[regime])
    base = regime_tax(taxable, regime)
    return RegimeTax(
        regime=regime,
        taxable_income=taxable,
        base_tax=base,
        cess=base * CESS_RATE,
        total_tax=with_cess(base),
    )


def compare_regimes(
    gross_income: float,
    deduction_80c: float = 0.0,
    deduction_80d: float = 0.0,
    other_deductions: float = 0.0,
) -> TaxComparison:
    """Evaluate both regimes independently and pick the cheaper.

    The old regime is recommended only when strictly cheaper; a tie goes to
    the new regime.
    """
    old = assess_regime(
        gross_income,
        TaxRegime.OLD,
        deductions=deduction_80c + deduction_80d + other_deductions,
    )
    new = assess_regime(gross_income, TaxRegime.NEW)

    recommended = TaxRegime.OLD if old.total_tax < new.total_tax else TaxRegime.NEW
    return TaxComparison(
        old=old,
        new=new,
        recommended=recommended,
        savings=abs(old.total_tax - new.total_tax),
    )


def gratuity(last_salary: float, years_of_service: float) -> float:
    """Gratuity payable: ``salary * 15 * years / 26``."""
    return last_salary * GRATUITY_DAYS_PER_YEAR * years_of_service / GRATUITY_WORKING_DAYS
