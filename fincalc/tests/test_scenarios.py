from __future__ import annotations

from math import isclose

from fincalc.core.growth import inverse_amortization, recurring_contribution_future_value
from fincalc.core.scenarios import fixed_deposit, loan_eligibility, loan_summary, nps_projection


def test_loan_summary_totals():
    summary = loan_summary(1_000_000, 0.10, 60)
    assert summary.loan_amount == 1_000_000
    assert isclose(summary.total_payment, summary.emi * 60)
    assert isclose(summary.total_interest, 274_822.4, abs_tol=5)
    assert isclose(summary.interest_percent_of_principal, summary.total_interest / 10_000)
    assert isclose(summary.effective_annual_rate, (1 + 0.10 / 12) ** 12 - 1)


def test_loan_summary_subtracts_down_payment():
    summary = loan_summary(500_000, 0.10, 60, down_payment=100_000)
    assert summary.loan_amount == 400_000


def test_loan_summary_of_nothing():
    summary = loan_summary(100_000, 0.10, 60, down_payment=100_000)
    assert summary.emi == 0.0
    assert summary.interest_percent_of_principal == 0.0


def test_loan_eligibility_caps_emi_by_foir():
    eligibility = loan_eligibility(100_000, 10_000, 0.12, 240, 50)
    assert eligibility.max_emi == 50_000
    assert eligibility.available_emi == 40_000
    assert isclose(eligibility.eligible_amount, inverse_amortization(40_000, 0.01, 240))
    assert isclose(eligibility.expected_emi, 40_000, rel_tol=1e-9)


def test_loan_eligibility_with_no_headroom():
    eligibility = loan_eligibility(50_000, 30_000, 0.12, 240, 50)
    assert eligibility.available_emi == -5_000
    assert eligibility.eligible_amount == 0.0


def test_nps_projection_splits_corpus():
    projection = nps_projection(30, 5_000, 0.10)
    assert projection.months == 360
    assert projection.total_contribution == 1_800_000
    assert isclose(projection.corpus, recurring_contribution_future_value(5_000, 0.10 / 12, 360))
    assert isclose(projection.lump_sum, projection.corpus * 0.6)
    assert isclose(projection.annuity_corpus, projection.corpus * 0.4)
    assert isclose(projection.monthly_pension, projection.annuity_corpus * 0.06 / 12)


def test_nps_after_sixty_has_nothing_to_accumulate():
    projection = nps_projection(65, 5_000, 0.10)
    assert projection.months == 0
    assert projection.corpus == 0.0


def test_fixed_deposit_interest():
    deposit = fixed_deposit(100_000, 0.08, 4, 5)
    assert isclose(deposit.maturity, 100_000 * 1.02**20)
    assert isclose(deposit.interest, deposit.maturity - 100_000)
