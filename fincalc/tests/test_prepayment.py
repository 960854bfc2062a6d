from __future__ import annotations

from math import isclose

import pytest

from fincalc.core.scenarios import ScenarioStatus, prepayment_impact


def test_prepayment_shortens_tenure_at_same_emi():
    impact = prepayment_impact(1_000_000, 0.10, 60, 200_000)

    assert impact.status == ScenarioStatus.OK
    assert isclose(impact.current_emi, 21_247.04, abs_tol=0.05)
    assert impact.new_tenure_months == 46
    assert impact.tenure_saved_months == 14
    assert impact.interest_saved > 0
    assert isclose(
        impact.interest_saved,
        impact.old_total_interest - impact.new_total_interest,
    )


def test_prepaying_whole_balance_saves_all_interest():
    impact = prepayment_impact(500_000, 0.09, 36, 500_000)
    assert impact.status == ScenarioStatus.OK
    assert impact.new_tenure_months == 0
    assert impact.new_total_interest == 0
    assert isclose(impact.interest_saved, impact.old_total_interest)


def test_emi_not_covering_interest_is_non_amortizing():
    # a negative prepayment grows the balance past what the EMI can service
    impact = prepayment_impact(1_000_000, 0.12, 360, -50_000)
    assert impact.status == ScenarioStatus.NON_AMORTIZING
    assert impact.new_tenure_months is None
    assert impact.interest_saved is None


def test_empty_loan_is_invalid():
    impact = prepayment_impact(0, 0.10, 60, 10_000)
    assert impact.status == ScenarioStatus.INVALID
    assert impact.current_emi == 0.0

    assert prepayment_impact(100_000, 0.10, 0, 10_000).status == ScenarioStatus.INVALID


@pytest.mark.parametrize(
    "outstanding, annual_rate, months",
    [
        (100_000, 0.10, 12),
        (500_000, 0.07, 120),
        (100_000, 0.12, 60),
        (2_500_000, 0.09, 360),
        (1_000_000, 0.11, 240),
    ],
)
def test_zero_prepayment_keeps_tenure_and_interest(outstanding, annual_rate, months):
    impact = prepayment_impact(outstanding, annual_rate, months, 0)

    assert impact.status == ScenarioStatus.OK
    assert impact.new_tenure_months == months
    assert impact.tenure_saved_months == 0
    assert impact.interest_saved == 0
    assert isclose(impact.new_total_interest, impact.old_total_interest)


def test_prepayment_never_lengthens_the_loan():
    for rate in (0.07, 0.08, 0.09, 0.10, 0.11, 0.12):
        for months in (12, 60, 120, 240, 360):
            impact = prepayment_impact(750_000, rate, months, 1)
            assert impact.new_tenure_months <= months
            assert impact.tenure_saved_months >= 0
