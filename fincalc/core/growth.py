"""Time-value-of-money primitives shared by the savings and loan calculators.

Unit contract: every ``*_rate`` argument is a decimal fraction (0.12 for 12%).
Functions taking a ``periodic_rate`` expect the rate per period already
(annual / 12 for monthly products); ``to_periodic_rate`` does that conversion.
Functions taking an ``annual_rate`` do any per-period split themselves.

None of these raise for numeric input. ``None``/``NaN`` arguments are read as
0.0, and growth that genuinely overflows a double is returned as ``math.inf``.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

logger = logging.getLogger(__name__)

# compound_interest switches to log space above this many compounding periods
LOG_SPACE_PERIOD_LIMIT = 1000
# exp() of anything above this is reported as infinity
LOG_RESULT_CEILING = 700.0

# recurring_contribution_future_value checks for overflow above this many periods
SIP_DIRECT_PERIOD_LIMIT = 600
SIP_CHUNK_PERIODS = 120
# growth factors at or above this are treated as overflowed
GROWTH_FACTOR_CEILING = math.inf

RD_QUARTERS_PER_YEAR = 4
RD_MONTHS_PER_QUARTER = 3
TENURE_SNAP_TOLERANCE = 1e-9

__all__ = [
    "to_periodic_rate",
    "growth_factor",
    "compound_interest",
    "simple_interest",
    "recurring_contribution_future_value",
    "amortized_payment",
    "inverse_amortization",
    "tenure_for_payment",
    "recurring_deposit_maturity",
    "ppf_maturity",
    "effective_annual_rate",
]


def _num(value) -> float:
    """Read a possibly-missing number, mapping ``None``/``NaN`` to 0.0."""
    if value is None:
        return 0.0
    value = float(value)
    return 0.0 if math.isnan(value) else value


def to_periodic_rate(rate_percent: float, periods_per_year: int = 12) -> float:
    """Convert an annual percentage (``12``) to a per-period decimal (``0.01``)."""
    if not periods_per_year:
        return 0.0
    return _num(rate_percent) / 100 / periods_per_year


def growth_factor(rate: float, periods: float) -> float:
    """``(1 + rate) ** periods``, with overflow reported as ``math.inf``."""
    try:
        return math.pow(1 + rate, periods)
    except OverflowError:
        return math.inf
    except ValueError:
        # negative base with a fractional exponent has no real value
        return 0.0


def compound_interest(
    principal: float,
    annual_rate: float,
    frequency: int,
    years: float,
) -> float:
    """Final amount of ``principal`` compounded ``frequency`` times a year.

    Non-positive principal, horizon or rate return the principal unchanged.
    Horizons above ``LOG_SPACE_PERIOD_LIMIT`` periods are evaluated as
    ``exp(ln P + n ln(1 + r/f))`` and return ``math.inf`` once the exponent
    passes ``LOG_RESULT_CEILING``.
    """
    principal = _num(principal)
    annual_rate = _num(annual_rate)
    frequency = _num(frequency)
    years = _num(years)

    if principal <= 0 or years <= 0:
        return principal
    if annual_rate <= 0 or frequency <= 0:
        return principal

    periods = frequency * years
    base = 1 + annual_rate / frequency

    if periods > LOG_SPACE_PERIOD_LIMIT:
        log_result = math.log(principal) + periods * math.log(base)
        if log_result > LOG_RESULT_CEILING:
            logger.debug("compound growth overflows after %s periods", periods)
            return math.inf
        logger.debug("compounding %s periods in log space", periods)
        return math.exp(log_result)

    return principal * growth_factor(annual_rate / frequency, periods)


def simple_interest(principal: float, annual_rate: float, years: float) -> float:
    """Interest earned (not the total) on ``principal`` without compounding."""
    return _num(principal) * _num(annual_rate) * _num(years)


def _annuity_due_chunked(contribution: float, rate: float, periods: int) -> float:
    total = 0.0
    for start in range(0, periods, SIP_CHUNK_PERIODS):
        block = min(SIP_CHUNK_PERIODS, periods - start)
        remaining = periods - start - block
        block_value = contribution * ((growth_factor(rate, block) - 1) / rate) * (1 + rate)
        total += block_value * growth_factor(rate, remaining)
    return total


def recurring_contribution_future_value(
    contribution: float,
    periodic_rate: float,
    periods: int,
) -> float:
    """Future value of a fixed contribution paid at the start of each period.

    ``P * ((1 + r)^n - 1) / r * (1 + r)``. A non-positive rate sums the
    contributions without growth. Above ``SIP_DIRECT_PERIOD_LIMIT`` periods an
    overflowing ``(1 + r)^n`` is avoided by compounding the series in blocks
    of ``SIP_CHUNK_PERIODS``.
    """
    contribution = _num(contribution)
    periodic_rate = _num(periodic_rate)
    periods = int(_num(periods))

    if contribution <= 0 or periods <= 0:
        return 0.0
    if periodic_rate <= 0:
        return contribution * periods

    factor = growth_factor(periodic_rate, periods)
    if factor == 1:
        return contribution * periods
    if periods > SIP_DIRECT_PERIOD_LIMIT and factor >= GROWTH_FACTOR_CEILING:
        logger.debug("annuity over %s periods computed in %s-period blocks", periods, SIP_CHUNK_PERIODS)
        return _annuity_due_chunked(contribution, periodic_rate, periods)

    return contribution * ((factor - 1) / periodic_rate) * (1 + periodic_rate)


def amortized_payment(principal: float, periodic_rate: float, periods: int) -> float:
    """Equated periodic payment that clears ``principal`` over ``periods``.

    ``P * r * (1 + r)^n / ((1 + r)^n - 1)``; a zero rate is straight-line
    ``P / n``. A non-positive ``periods`` gives 0.0.
    """
    principal = _num(principal)
    periodic_rate = _num(periodic_rate)
    periods = _num(periods)

    if periods <= 0:
        return 0.0
    if periodic_rate == 0:
        return principal / periods

    factor = growth_factor(periodic_rate, periods)
    if factor == 1:
        return principal / periods
    if math.isinf(factor):
        # limit of the formula as n grows: interest-only
        return principal * periodic_rate
    return principal * periodic_rate * factor / (factor - 1)


def inverse_amortization(payment: float, periodic_rate: float, periods: int) -> float:
    """Principal that ``payment`` per period can service (reverse EMI).

    ``payment * ((1 + r)^n - 1) / (r * (1 + r)^n)``; 0.0 when the payment,
    the rate or the tenure is not positive.
    """
    payment = _num(payment)
    periodic_rate = _num(periodic_rate)
    periods = _num(periods)

    if payment <= 0 or periodic_rate <= 0 or periods <= 0:
        return 0.0

    factor = growth_factor(periodic_rate, periods)
    if factor == 1:
        return payment * periods
    if math.isinf(factor):
        return payment / periodic_rate
    return payment * (factor - 1) / (periodic_rate * factor)


def tenure_for_payment(principal: float, periodic_rate: float, payment: float) -> Optional[int]:
    """Whole periods needed to clear ``principal`` at a fixed ``payment``.

    ``ceil(-ln(1 - P*r/EMI) / ln(1 + r))``. Returns 0 for nothing owed and
    ``None`` when the payment does not cover the interest, i.e. the loan
    never amortizes.
    """
    principal = _num(principal)
    periodic_rate = _num(periodic_rate)
    payment = _num(payment)

    if principal <= 0:
        return 0
    if payment <= principal * periodic_rate or payment <= 0:
        return None
    if periodic_rate <= 0:
        return math.ceil(principal / payment - TENURE_SNAP_TOLERANCE)

    periods = -math.log(1 - principal * periodic_rate / payment) / math.log(1 + periodic_rate)
    # a whole tenure computed through logs lands a hair above the integer
    return math.ceil(periods - TENURE_SNAP_TOLERANCE)


def recurring_deposit_maturity(deposit: float, annual_rate: float, months: int) -> float:
    """Maturity of a monthly recurring deposit with quarterly compounding.

    Deposit ``i`` (1-based) accrues ``(1 + rate/4) ** ((months - i + 1) / 3)``.
    The fractional-quarter exponent approximates bank practice.
    """
    deposit = _num(deposit)
    annual_rate = _num(annual_rate)
    months = int(_num(months))

    if deposit <= 0 or months <= 0:
        return 0.0

    quarterly_rate = annual_rate / RD_QUARTERS_PER_YEAR
    maturity = 0.0
    for installment in range(1, months + 1):
        quarters = (months - installment + 1) / RD_MONTHS_PER_QUARTER
        maturity += deposit * growth_factor(quarterly_rate, quarters)
    return maturity


def ppf_maturity(yearly_deposit: float, annual_rate: float, years: int) -> float:
    """Maturity of a yearly deposit made at the start of each year, compounded annually."""
    yearly_deposit = _num(yearly_deposit)
    annual_rate = _num(annual_rate)
    maturity = 0.0
    for _ in range(int(_num(years))):
        maturity = (maturity + yearly_deposit) * (1 + annual_rate)
    return maturity


def effective_annual_rate(periodic_rate: float, periods_per_year: int = 12) -> float:
    """Annualised rate implied by compounding ``periodic_rate`` through a year."""
    return growth_factor(_num(periodic_rate), periods_per_year) - 1
