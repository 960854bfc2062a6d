from __future__ import annotations

from math import isclose

import pytest

from fincalc.core.health import (
    ActivityLevel,
    BmiCategory,
    DiabetesRiskLevel,
    Gender,
    bmi,
    bmi_category,
    bmr,
    child_height,
    daily_calories,
    diabetes_risk,
    diabetes_risk_level,
    healthy_weight_range,
    ideal_weight,
    walking_calories,
    walking_met,
)


def test_bmi_and_category():
    value = bmi(70, 175)
    assert isclose(value, 22.857, abs_tol=0.001)
    assert bmi_category(value) == BmiCategory.NORMAL
    assert bmi(70, 0) == 0.0


@pytest.mark.parametrize(
    "value, expected",
    [
        (18.49999, BmiCategory.UNDERWEIGHT),
        (18.5, BmiCategory.NORMAL),
        (24.9999, BmiCategory.NORMAL),
        (25.0, BmiCategory.OVERWEIGHT),
        (30.0, BmiCategory.OBESE),
    ],
)
def test_bmi_boundaries_go_to_higher_band(value, expected):
    assert bmi_category(value) == expected


def test_healthy_weight_range():
    healthy = healthy_weight_range(180)
    assert isclose(healthy.min, 18.5 * 3.24)
    assert isclose(healthy.max, 24.9 * 3.24)


def test_bmr_mifflin_st_jeor():
    assert isclose(bmr(70, 175, 30, Gender.MALE), 1_648.75)
    assert isclose(bmr(70, 175, 30, Gender.FEMALE), 1_482.75)


def test_daily_calories_goals():
    targets = daily_calories(70, 175, 30, Gender.MALE, ActivityLevel.MODERATE)
    assert isclose(targets.maintenance, 1_648.75 * 1.55)
    assert isclose(targets.weight_loss, targets.maintenance - 500)
    assert isclose(targets.weight_gain, targets.maintenance + 500)


def test_ideal_weight_formulas():
    weights = ideal_weight(170, Gender.MALE)
    inches_over = 170 / 2.54 - 60
    assert isclose(weights.robinson, 52 + 1.9 * inches_over)
    assert isclose(weights.devine, 50 + 2.3 * inches_over)


def test_ideal_weight_short_height_uses_base_only():
    weights = ideal_weight(150, Gender.FEMALE)
    assert weights.miller == 53.1
    assert weights.hamwi == 45.5


def test_child_height_mid_parental():
    boy = child_height(180, 165, Gender.MALE)
    assert boy.predicted == 179
    assert (boy.low, boy.high) == (169, 189)
    assert child_height(180, 165, Gender.FEMALE).predicted == 166


def test_walking_met_bands_and_incline():
    assert walking_met(3.0) == 2.0
    assert walking_met(5.0) == 3.5
    assert walking_met(5.0, 10) == 4.5
    assert walking_met(7.0) == 5.0


def test_walking_calories():
    burn = walking_calories(70, 60, 5)
    assert burn.calories == 245
    assert isclose(burn.distance_km, 5.0)
    assert burn.steps == 6_667


def test_diabetes_low_risk():
    risk = diabetes_risk(50, 27, 95)
    assert risk.score == 8
    assert risk.level == DiabetesRiskLevel.LOW
    assert risk.advice


def test_diabetes_maximum_score():
    risk = diabetes_risk(70, 36, 105, family_history=True, high_blood_pressure=True, physically_active=False)
    assert risk.score == 30
    assert risk.percentage == 100
    assert risk.level == DiabetesRiskLevel.VERY_HIGH


def test_diabetes_tiers():
    assert diabetes_risk(50, 27, 95, physically_active=False).level == DiabetesRiskLevel.SLIGHTLY_ELEVATED
    assert diabetes_risk(60, 31, 95, family_history=True).level == DiabetesRiskLevel.MODERATE


def test_walking_calories_round_halves_up():
    # 3.5 MET * 70 kg * 0.5 h = 122.5
    assert walking_calories(70, 30, 5).calories == 123


@pytest.mark.parametrize(
    "score, expected",
    [
        (0, DiabetesRiskLevel.LOW),
        (10, DiabetesRiskLevel.LOW),
        (11, DiabetesRiskLevel.SLIGHTLY_ELEVATED),
        (16, DiabetesRiskLevel.SLIGHTLY_ELEVATED),
        (17, DiabetesRiskLevel.MODERATE),
        (22, DiabetesRiskLevel.MODERATE),
        (23, DiabetesRiskLevel.HIGH),
        (27, DiabetesRiskLevel.HIGH),
        (28, DiabetesRiskLevel.VERY_HIGH),
        (30, DiabetesRiskLevel.VERY_HIGH),
    ],
)
def test_diabetes_tier_boundaries(score, expected):
    assert diabetes_risk_level(score) == expected


def test_moderate_and_high_risk_share_advice():
    moderate = diabetes_risk(60, 31, 95, family_history=True)
    high = diabetes_risk(60, 31, 95, family_history=True, high_blood_pressure=True, physically_active=False)
    assert high.level == DiabetesRiskLevel.HIGH
    assert moderate.advice == high.advice
    moderate.advice.append("extra")
    assert "extra" not in diabetes_risk(60, 31, 95, family_history=True).advice
