"""Year-by-year series for the calculator charts.

Every builder returns a fresh list; index 0 is the starting point (year 0)
unless noted. ``principal`` is what the saver put in, ``total`` the value of
the position at that point.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel

from fincalc.core.growth import (
    compound_interest,
    ppf_maturity,
    recurring_contribution_future_value,
    recurring_deposit_maturity,
    simple_interest,
)
from fincalc.core.scenarios import (
    MONTHS_PER_YEAR,
    NPS_RETIREMENT_AGE,
    RetirementPlan,
    ScenarioStatus,
)


class GrowthPoint(BaseModel):
    period: int
    principal: float
    total: float


class RetirementPoint(GrowthPoint):
    # inherits period, principal, total
    target: float


class AmortizationYear(BaseModel):
    year: int
    principal_paid: float
    interest_paid: float
    closing_balance: float


def sip_series(monthly_investment: float, annual_return: float, years: int) -> List[GrowthPoint]:
    monthly_rate = annual_return / MONTHS_PER_YEAR
    points: List[GrowthPoint] = []
    for year in range(years + 1):
        months = year * MONTHS_PER_YEAR
        points.append(
            GrowthPoint(
                period=year,
                principal=monthly_investment * months,
                total=recurring_contribution_future_value(monthly_investment, monthly_rate, months),
            )
        )
    return points


def compound_series(principal: float, annual_rate: float, frequency: int, years: int) -> List[GrowthPoint]:
    """Value of a lump sum at the end of each year (fixed deposit, compound interest)."""
    return [
        GrowthPoint(
            period=year,
            principal=principal,
            total=compound_interest(principal, annual_rate, frequency, year),
        )
        for year in range(years + 1)
    ]


def simple_interest_series(principal: float, annual_rate: float, years: int) -> List[GrowthPoint]:
    return [
        GrowthPoint(
            period=year,
            principal=principal,
            total=principal + simple_interest(principal, annual_rate, year),
        )
        for year in range(years + 1)
    ]


def recurring_deposit_series(monthly_deposit: float, annual_rate: float, years: int) -> List[GrowthPoint]:
    points: List[GrowthPoint] = []
    for year in range(years + 1):
        months = year * MONTHS_PER_YEAR
        points.append(
            GrowthPoint(
                period=year,
                principal=monthly_deposit * months,
                total=recurring_deposit_maturity(monthly_deposit, annual_rate, months),
            )
        )
    return points


def ppf_series(yearly_deposit: float, annual_rate: float, years: int) -> List[GrowthPoint]:
    return [
        GrowthPoint(
            period=year,
            principal=yearly_deposit * year,
            total=ppf_maturity(yearly_deposit, annual_rate, year),
        )
        for year in range(years + 1)
    ]


def nps_series(current_age: int, monthly_contribution: float, annual_return: float) -> List[GrowthPoint]:
    """Accumulation from today until the NPS retirement age; ``period`` is years elapsed."""
    years = max(0, NPS_RETIREMENT_AGE - current_age)
    return sip_series(monthly_contribution, annual_return, years)


def retirement_series(
    plan: RetirementPlan,
    pre_retirement_return: float,
) -> List[RetirementPoint]:
    """Invested amount and SIP value against the target corpus, per year.

    An invalid plan has no series.
    """
    if plan.status != ScenarioStatus.OK:
        return []

    sip = plan.monthly_sip_needed or 0.0
    target = plan.corpus_required or 0.0
    monthly_rate = pre_retirement_return / MONTHS_PER_YEAR
    points: List[RetirementPoint] = []
    for year in range(plan.years_to_retirement + 1):
        months = year * MONTHS_PER_YEAR
        points.append(
            RetirementPoint(
                period=year,
                principal=sip * months,
                total=recurring_contribution_future_value(sip, monthly_rate, months),
                target=target,
            )
        )
    return points


def amortization_schedule(principal: float, monthly_rate: float, months: int, emi: float) -> List[AmortizationYear]:
    """Principal and interest paid per loan year (the last year may be partial).

    The running balance is reduced each month by ``emi - balance * rate``.
    """
    rows: List[AmortizationYear] = []
    balance = principal
    year_principal = 0.0
    year_interest = 0.0

    for month in range(1, months + 1):
        interest = balance * monthly_rate
        principal_part = emi - interest
        balance -= principal_part
        year_principal += principal_part
        year_interest += interest

        if month % MONTHS_PER_YEAR == 0 or month == months:
            rows.append(
                AmortizationYear(
                    year=(month + MONTHS_PER_YEAR - 1) // MONTHS_PER_YEAR,
                    principal_paid=year_principal,
                    interest_paid=year_interest,
                    # float residue on the final payment
                    closing_balance=balance if abs(balance) >= 0.005 else 0.0,
                )
            )
            year_principal = 0.0
            year_interest = 0.0

    return rows
