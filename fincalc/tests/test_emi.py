from __future__ import annotations

from math import isclose

from fincalc.core.growth import amortized_payment, inverse_amortization, tenure_for_payment


def test_emi_ten_lakh_at_ten_percent_for_five_years():
    emi = amortized_payment(1_000_000, 0.10 / 12, 60)
    assert isclose(emi, 21_247.04, abs_tol=0.05)


def test_zero_rate_is_straight_line():
    assert amortized_payment(120_000, 0.0, 12) == 10_000


def test_no_periods_means_no_payment():
    assert amortized_payment(120_000, 0.01, 0) == 0.0


def test_reverse_emi_recovers_principal():
    rate = 0.12 / 12
    emi = amortized_payment(2_500_000, rate, 240)
    assert isclose(inverse_amortization(emi, rate, 240), 2_500_000, rel_tol=1e-9)


def test_reverse_emi_non_positive_inputs():
    assert inverse_amortization(0, 0.01, 120) == 0.0
    assert inverse_amortization(10_000, 0.0, 120) == 0.0
    assert inverse_amortization(10_000, 0.01, 0) == 0.0


def test_tenure_for_payment():
    assert tenure_for_payment(800_000, 0.10 / 12, 21_247.04) == 46
    assert tenure_for_payment(1_000, 0.0, 300) == 4
    assert tenure_for_payment(0, 0.01, 100) == 0


def test_tenure_is_none_when_payment_only_covers_interest():
    assert tenure_for_payment(1_000, 0.01, 10) is None
    assert tenure_for_payment(1_000, 0.01, 5) is None


def test_tenure_for_exact_emi_is_the_original_tenure():
    for principal, rate, months in [(100_000, 0.10 / 12, 12), (500_000, 0.07 / 12, 120), (100_000, 0.01, 60)]:
        emi = amortized_payment(principal, rate, months)
        assert tenure_for_payment(principal, rate, emi) == months


def test_zero_rate_tenure_for_exact_payment():
    assert tenure_for_payment(100_000, 0.0, amortized_payment(100_000, 0.0, 7)) == 7
