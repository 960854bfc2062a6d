from __future__ import annotations

from math import isclose

from fincalc.core.growth import recurring_contribution_future_value
from fincalc.core.scenarios import ScenarioStatus, retirement_plan


def test_retirement_plan_sizes_corpus_and_sip():
    plan = retirement_plan(30, 60, 50_000, 0.06, 0.12)

    assert plan.status == ScenarioStatus.OK
    assert plan.years_to_retirement == 30
    assert isclose(plan.future_monthly_expense, 50_000 * 1.06**30, rel_tol=1e-12)
    assert isclose(plan.annual_expense_at_retirement, plan.future_monthly_expense * 12)

    real_return = 1.07 / 1.06 - 1
    expected_corpus = plan.annual_expense_at_retirement * (1 - (1 + real_return) ** -25) / real_return
    assert isclose(plan.real_return, real_return)
    assert isclose(plan.corpus_required, expected_corpus, rel_tol=1e-9)

    # the SIP grows into the corpus
    grown = recurring_contribution_future_value(plan.monthly_sip_needed, 0.01, 360)
    assert isclose(grown, plan.corpus_required, rel_tol=1e-9)


def test_inflation_matching_post_retirement_return_uses_flat_corpus():
    plan = retirement_plan(30, 60, 50_000, 0.07, 0.12)
    assert plan.real_return == 0.0
    assert isclose(plan.corpus_required, plan.annual_expense_at_retirement * 25)


def test_zero_pre_retirement_return_divides_corpus_evenly():
    plan = retirement_plan(50, 60, 10_000, 0.05, 0.0)
    assert isclose(plan.monthly_sip_needed, plan.corpus_required / 120)


def test_retirement_age_not_after_current_age_is_invalid():
    plan = retirement_plan(40, 35, 50_000, 0.06, 0.12)
    assert plan.status == ScenarioStatus.INVALID
    assert plan.years_to_retirement == -5
    assert plan.corpus_required is None
    assert plan.monthly_sip_needed is None

    assert retirement_plan(40, 40, 50_000, 0.06, 0.12).status == ScenarioStatus.INVALID
