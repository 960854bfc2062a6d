from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from fincalc.core.growth import (
    amortized_payment,
    compound_interest,
    effective_annual_rate,
    growth_factor,
    inverse_amortization,
    recurring_contribution_future_value,
    tenure_for_payment,
)

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12

# Retirement sizing assumptions
POST_RETIREMENT_RETURN = 0.07
RETIREMENT_YEARS = 25
REAL_RETURN_FLOOR = 0.001

# NPS: corpus at 60, 60% withdrawn as lump sum, 40% buys an annuity paying 6%
NPS_RETIREMENT_AGE = 60
NPS_LUMP_SUM_SHARE = 0.6
NPS_ANNUITY_SHARE = 0.4
NPS_ANNUITY_RATE = 0.06


class ScenarioStatus(str, Enum):
    OK = "ok"
    INVALID = "invalid"
    NON_AMORTIZING = "non_amortizing"


# -----------------------------
# Result bundles
# -----------------------------


class RetirementPlan(BaseModel):
    """Corpus and monthly SIP needed to retire.

    When ``status`` is not ``ok`` every amount is ``None``.
    """

    status: ScenarioStatus
    years_to_retirement: int
    future_monthly_expense: Optional[float] = None
    annual_expense_at_retirement: Optional[float] = None
    real_return: Optional[float] = None
    corpus_required: Optional[float] = None
    monthly_sip_needed: Optional[float] = None


class PrepaymentImpact(BaseModel):
    status: ScenarioStatus
    current_emi: float
    old_tenure_months: int
    new_tenure_months: Optional[int] = None
    tenure_saved_months: Optional[int] = None
    old_total_interest: float
    new_total_interest: Optional[float] = None
    interest_saved: Optional[float] = None


class LoanSummary(BaseModel):
    loan_amount: float
    emi: float
    total_payment: float
    total_interest: float
    interest_percent_of_principal: float
    effective_annual_rate: float


class LoanEligibility(BaseModel):
    max_emi: float
    available_emi: float
    eligible_amount: float
    expected_emi: float


class NpsProjection(BaseModel):
    months: int
    total_contribution: float
    corpus: float
    lump_sum: float
    annuity_corpus: float
    monthly_pension: float


class DepositMaturity(BaseModel):
    principal: float
    interest: float
    maturity: float


# -----------------------------
# Retirement
# -----------------------------


def retirement_plan(
    current_age: int,
    retirement_age: int,
    current_monthly_expense: float,
    inflation_rate: float,
    pre_retirement_return: float,
) -> RetirementPlan:
    """Size a retirement corpus and the monthly SIP that builds it.

    1) Inflate today's monthly expense to the retirement date.
    2) Corpus = present value of ``RETIREMENT_YEARS`` of that annual expense
       at the real post-retirement return ``(1.07 / (1 + inflation)) - 1``;
       a real return at or below ``REAL_RETURN_FLOOR`` falls back to
       ``annual_expense * RETIREMENT_YEARS``.
    3) Back-solve the start-of-month SIP whose future value at
       ``pre_retirement_return / 12`` equals the corpus.

    Rates are decimal fractions. ``retirement_age <= current_age`` returns an
    ``invalid`` plan.
    """
    years_to_retirement = retirement_age - current_age
    if years_to_retirement <= 0:
        logger.debug(
            "retirement age %s not after current age %s", retirement_age, current_age
        )
        return RetirementPlan(status=ScenarioStatus.INVALID, years_to_retirement=years_to_retirement)

    future_monthly_expense = current_monthly_expense * growth_factor(inflation_rate, years_to_retirement)
    annual_expense = future_monthly_expense * MONTHS_PER_YEAR

    real_return = (1 + POST_RETIREMENT_RETURN) / (1 + inflation_rate) - 1
    if real_return <= REAL_RETURN_FLOOR:
        corpus = annual_expense * RETIREMENT_YEARS
    else:
        corpus = annual_expense * ((1 - (1 + real_return) ** -RETIREMENT_YEARS) / real_return)

    monthly_rate = pre_retirement_return / MONTHS_PER_YEAR
    months = years_to_retirement * MONTHS_PER_YEAR
    if monthly_rate <= 0:
        sip = corpus / months
    else:
        fv_per_rupee = recurring_contribution_future_value(1.0, monthly_rate, months)
        sip = corpus / fv_per_rupee if fv_per_rupee > 0 else 0.0

    return RetirementPlan(
        status=ScenarioStatus.OK,
        years_to_retirement=years_to_retirement,
        future_monthly_expense=future_monthly_expense,
        annual_expense_at_retirement=annual_expense,
        real_return=real_return,
        corpus_required=max(0.0, corpus),
        monthly_sip_needed=max(0.0, sip),
    )


# -----------------------------
# Loans
# -----------------------------


def prepayment_impact(
    outstanding_principal: float,
    annual_rate: float,
    remaining_months: int,
    prepayment_amount: float,
) -> PrepaymentImpact:
    """Tenure and interest saved by a lump-sum prepayment at an unchanged EMI.

    ``annual_rate`` is a decimal fraction; the monthly rate is derived here.
    A non-positive balance or tenure is ``invalid``. If the EMI no longer
    covers the interest on the new balance the result is ``non_amortizing``.
    """
    monthly_rate = annual_rate / MONTHS_PER_YEAR
    emi = amortized_payment(outstanding_principal, monthly_rate, remaining_months)
    old_total_interest = emi * remaining_months - outstanding_principal

    if outstanding_principal <= 0 or remaining_months <= 0:
        logger.debug("prepayment requested on empty loan")
        return PrepaymentImpact(
            status=ScenarioStatus.INVALID,
            current_emi=emi,
            old_tenure_months=max(0, remaining_months),
            old_total_interest=old_total_interest,
        )

    new_principal = outstanding_principal - prepayment_amount
    new_tenure = tenure_for_payment(new_principal, monthly_rate, emi)
    if new_tenure is None:
        logger.debug("EMI %.2f does not cover interest on %.2f", emi, new_principal)
        return PrepaymentImpact(
            status=ScenarioStatus.NON_AMORTIZING,
            current_emi=emi,
            old_tenure_months=remaining_months,
            old_total_interest=old_total_interest,
        )
    if prepayment_amount >= 0:
        new_tenure = min(new_tenure, remaining_months)

    new_total_interest = max(0.0, emi * new_tenure - max(0.0, new_principal))
    return PrepaymentImpact(
        status=ScenarioStatus.OK,
        current_emi=emi,
        old_tenure_months=remaining_months,
        new_tenure_months=new_tenure,
        tenure_saved_months=remaining_months - new_tenure,
        old_total_interest=old_total_interest,
        new_total_interest=new_total_interest,
        interest_saved=max(0.0, old_total_interest - new_total_interest),
    )


def loan_summary(
    price: float,
    annual_rate: float,
    tenure_months: int,
    down_payment: float = 0.0,
) -> LoanSummary:
    """EMI and totals for a loan of ``price - down_payment``."""
    loan_amount = max(0.0, price - down_payment)
    monthly_rate = annual_rate / MONTHS_PER_YEAR
    emi = amortized_payment(loan_amount, monthly_rate, tenure_months)
    total_payment = emi * tenure_months
    total_interest = total_payment - loan_amount
    return LoanSummary(
        loan_amount=loan_amount,
        emi=emi,
        total_payment=total_payment,
        total_interest=total_interest,
        interest_percent_of_principal=(total_interest / loan_amount * 100) if loan_amount else 0.0,
        effective_annual_rate=effective_annual_rate(monthly_rate, MONTHS_PER_YEAR),
    )


def loan_eligibility(
    monthly_income: float,
    existing_emi: float,
    annual_rate: float,
    tenure_months: int,
    foir_percent: float,
) -> LoanEligibility:
    """Largest loan whose EMI fits the FOIR cap after existing obligations."""
    max_emi = monthly_income * foir_percent / 100
    available_emi = max_emi - existing_emi
    monthly_rate = annual_rate / MONTHS_PER_YEAR

    eligible = inverse_amortization(available_emi, monthly_rate, tenure_months)
    return LoanEligibility(
        max_emi=max_emi,
        available_emi=available_emi,
        eligible_amount=eligible,
        expected_emi=amortized_payment(eligible, monthly_rate, tenure_months),
    )


# -----------------------------
# Deposits and pension
# -----------------------------


def fixed_deposit(principal: float, annual_rate: float, frequency: int, years: float) -> DepositMaturity:
    maturity = compound_interest(principal, annual_rate, frequency, years)
    return DepositMaturity(principal=principal, interest=maturity - principal, maturity=maturity)


def nps_projection(current_age: int, monthly_contribution: float, annual_return: float) -> NpsProjection:
    """Corpus at age 60 and the pension bought with the annuity share."""
    months = max(0, NPS_RETIREMENT_AGE - current_age) * MONTHS_PER_YEAR
    corpus = recurring_contribution_future_value(
        monthly_contribution, annual_return / MONTHS_PER_YEAR, months
    )
    annuity_corpus = corpus * NPS_ANNUITY_SHARE
    monthly_pension = annuity_corpus * NPS_ANNUITY_RATE / MONTHS_PER_YEAR
    return NpsProjection(
        months=months,
        total_contribution=monthly_contribution * months,
        corpus=corpus,
        lump_sum=corpus * NPS_LUMP_SUM_SHARE,
        annuity_corpus=annuity_corpus,
        monthly_pension=monthly_pension,
    )
