from __future__ import annotations

import math
from enum import Enum
from typing import Dict, List, Tuple

from pydantic import BaseModel


# -----------------------------
# Enumerations and coefficient tables
# -----------------------------


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class BmiCategory(str, Enum):
    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


class ActivityLevel(str, Enum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class IdealWeightMethod(str, Enum):
    ROBINSON = "robinson"
    MILLER = "miller"
    DEVINE = "devine"
    HAMWI = "hamwi"


class DiabetesRiskLevel(str, Enum):
    LOW = "Low Risk"
    SLIGHTLY_ELEVATED = "Slightly Elevated"
    MODERATE = "Moderate Risk"
    HIGH = "High Risk"
    VERY_HIGH = "Very High Risk"


# (upper bound exclusive, category); anything above the last bound is obese
BMI_BANDS: Tuple[Tuple[float, BmiCategory], ...] = (
    (18.5, BmiCategory.UNDERWEIGHT),
    (25.0, BmiCategory.NORMAL),
    (30.0, BmiCategory.OVERWEIGHT),
)
HEALTHY_BMI_MIN = 18.5
HEALTHY_BMI_MAX = 24.9

ACTIVITY_MULTIPLIERS: Dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}
CALORIE_ADJUSTMENT = 500

CM_PER_INCH = 2.54
FIVE_FEET_IN_INCHES = 60

# (method, gender) -> (base kg at five feet, kg per inch above five feet)
IDEAL_WEIGHT_CONSTANTS: Dict[Tuple[IdealWeightMethod, Gender], Tuple[float, float]] = {
    (IdealWeightMethod.ROBINSON, Gender.MALE): (52.0, 1.9),
    (IdealWeightMethod.MILLER, Gender.MALE): (56.2, 1.41),
    (IdealWeightMethod.DEVINE, Gender.MALE): (50.0, 2.3),
    (IdealWeightMethod.HAMWI, Gender.MALE): (48.0, 2.7),
    (IdealWeightMethod.ROBINSON, Gender.FEMALE): (49.0, 1.7),
    (IdealWeightMethod.MILLER, Gender.FEMALE): (53.1, 1.36),
    (IdealWeightMethod.DEVINE, Gender.FEMALE): (45.5, 2.3),
    (IdealWeightMethod.HAMWI, Gender.FEMALE): (45.5, 2.2),
}

MID_PARENTAL_OFFSET_CM = 13.0
CHILD_HEIGHT_BAND_CM = 10.0

# (upper speed km/h exclusive, MET); faster than the last bound uses FAST_WALK_MET
WALKING_MET_BANDS: Tuple[Tuple[float, float], ...] = (
    (3.5, 2.0),
    (4.5, 3.0),
    (5.5, 3.5),
    (6.5, 4.3),
)
FAST_WALK_MET = 5.0
INCLINE_MET_PER_5_PERCENT = 0.5
BASE_STRIDE_M = 0.75
STRIDE_LOSS_PER_INCLINE_PERCENT = 0.01

DIABETES_MAX_SCORE = 30
# (lower bound inclusive, points), checked from the highest bracket down
DIABETES_AGE_POINTS: Tuple[Tuple[float, int], ...] = ((65, 7), (55, 5), (45, 3))
DIABETES_BMI_POINTS: Tuple[Tuple[float, int], ...] = ((35, 7), (30, 4), (25, 2))
DIABETES_WAIST_POINTS: Tuple[Tuple[float, int], ...] = ((100, 5), (90, 3))
DIABETES_FAMILY_HISTORY_POINTS = 5
DIABETES_HIGH_BP_POINTS = 3
DIABETES_INACTIVITY_POINTS = 3
# (highest score inclusive, level)
DIABETES_TIERS: Tuple[Tuple[int, DiabetesRiskLevel], ...] = (
    (10, DiabetesRiskLevel.LOW),
    (16, DiabetesRiskLevel.SLIGHTLY_ELEVATED),
    (22, DiabetesRiskLevel.MODERATE),
    (27, DiabetesRiskLevel.HIGH),
)

CLINICAL_FOLLOW_UP_ADVICE: List[str] = [
    "Schedule a doctor's appointment soon",
    "Get HbA1c test done",
    "Start lifestyle modifications immediately",
    "Monitor your diet closely",
    "Consider a diabetes prevention program",
]

DIABETES_ADVICE: Dict[DiabetesRiskLevel, List[str]] = {
    DiabetesRiskLevel.LOW: [
        "Continue regular physical activity",
        "Maintain a balanced diet",
        "Annual health check-ups recommended",
    ],
    DiabetesRiskLevel.SLIGHTLY_ELEVATED: [
        "Get your blood sugar tested regularly",
        "Aim for 30 minutes of daily exercise",
        "Reduce sugar and refined carbs intake",
        "Maintain a healthy weight",
    ],
    DiabetesRiskLevel.MODERATE: CLINICAL_FOLLOW_UP_ADVICE,
    DiabetesRiskLevel.HIGH: CLINICAL_FOLLOW_UP_ADVICE,
    DiabetesRiskLevel.VERY_HIGH: [
        "Consult a doctor immediately",
        "Get complete diabetes screening",
        "Start a structured diet plan",
        "Begin a supervised exercise program",
        "Regular blood sugar monitoring required",
    ],
}


# -----------------------------
# Result bundles
# -----------------------------


class WeightRange(BaseModel):
    min: float
    max: float


class CalorieTargets(BaseModel):
    bmr: float
    maintenance: float
    weight_loss: float
    weight_gain: float


class IdealWeight(BaseModel):
    robinson: float
    miller: float
    devine: float
    hamwi: float
    healthy_range: WeightRange


class HeightPrediction(BaseModel):
    predicted: float
    low: float
    high: float


class WalkingBurn(BaseModel):
    met: float
    calories: int
    distance_km: float
    steps: int


class DiabetesRisk(BaseModel):
    score: int
    max_score: int
    percentage: float
    level: DiabetesRiskLevel
    advice: List[str]


# -----------------------------
# Body composition
# -----------------------------


def bmi(weight_kg: float, height_cm: float) -> float:
    """Body-mass index, kg / m^2. A non-positive height gives 0.0."""
    height_m = height_cm / 100
    if height_m <= 0:
        return 0.0
    return weight_kg / (height_m * height_m)


def bmi_category(value: float) -> BmiCategory:
    """Band a BMI; a value on a boundary belongs to the higher band."""
    for upper, category in BMI_BANDS:
        if value < upper:
            return category
    return BmiCategory.OBESE


def healthy_weight_range(height_cm: float) -> WeightRange:
    height_m = height_cm / 100
    return WeightRange(
        min=HEALTHY_BMI_MIN * height_m * height_m,
        max=HEALTHY_BMI_MAX * height_m * height_m,
    )


def bmr(weight_kg: float, height_cm: float, age: float, gender: Gender) -> float:
    """Basal metabolic rate (kcal/day), Mifflin-St Jeor."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    return base + 5 if Gender(gender) == Gender.MALE else base - 161


def daily_calories(
    weight_kg: float,
    height_cm: float,
    age: float,
    gender: Gender,
    activity: ActivityLevel,
) -> CalorieTargets:
    """Maintenance intake from BMR and activity, with +/-500 kcal goals."""
    basal = bmr(weight_kg, height_cm, age, gender)
    maintenance = basal * ACTIVITY_MULTIPLIERS[ActivityLevel(activity)]
    return CalorieTargets(
        bmr=basal,
        maintenance=maintenance,
        weight_loss=maintenance - CALORIE_ADJUSTMENT,
        weight_gain=maintenance + CALORIE_ADJUSTMENT,
    )


def ideal_weight_by_method(height_cm: float, gender: Gender, method: IdealWeightMethod) -> float:
    base, per_inch = IDEAL_WEIGHT_CONSTANTS[(IdealWeightMethod(method), Gender(gender))]
    inches_over_five_feet = max(0.0, height_cm / CM_PER_INCH - FIVE_FEET_IN_INCHES)
    return base + per_inch * inches_over_five_feet


def ideal_weight(height_cm: float, gender: Gender) -> IdealWeight:
    """Ideal body weight (kg) by all four published formulas."""
    by_method = {
        method.value: ideal_weight_by_method(height_cm, gender, method)
        for method in IdealWeightMethod
    }
    return IdealWeight(**by_method, healthy_range=healthy_weight_range(height_cm))


def child_height(father_cm: float, mother_cm: float, gender: Gender) -> HeightPrediction:
    """Mid-parental adult height estimate with a +/-10 cm band."""
    offset = MID_PARENTAL_OFFSET_CM if Gender(gender) == Gender.MALE else -MID_PARENTAL_OFFSET_CM
    predicted = (father_cm + mother_cm + offset) / 2
    return HeightPrediction(
        predicted=predicted,
        low=predicted - CHILD_HEIGHT_BAND_CM,
        high=predicted + CHILD_HEIGHT_BAND_CM,
    )


# -----------------------------
# Activity
# -----------------------------


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def walking_met(speed_kmh: float, incline_percent: float = 0.0) -> float:
    """MET for walking at ``speed_kmh`` plus 0.5 MET per 5% grade."""
    base_met = FAST_WALK_MET
    for upper, met in WALKING_MET_BANDS:
        if speed_kmh < upper:
            base_met = met
            break
    return base_met + (incline_percent / 5) * INCLINE_MET_PER_5_PERCENT


def walking_calories(
    weight_kg: float,
    duration_minutes: float,
    speed_kmh: float,
    incline_percent: float = 0.0,
) -> WalkingBurn:
    met = walking_met(speed_kmh, incline_percent)
    hours = duration_minutes / 60
    distance_km = speed_kmh * hours

    stride_m = BASE_STRIDE_M - incline_percent * STRIDE_LOSS_PER_INCLINE_PERCENT
    steps = _round_half_up(distance_km * 1000 / stride_m) if stride_m > 0 else 0

    return WalkingBurn(
        met=met,
        calories=_round_half_up(met * weight_kg * hours),
        distance_km=distance_km,
        steps=steps,
    )


# -----------------------------
# Risk scoring
# -----------------------------


def _bracket_points(value: float, brackets: Tuple[Tuple[float, int], ...]) -> int:
    for lower, points in brackets:
        if value >= lower:
            return points
    return 0


def diabetes_risk_level(score: int) -> DiabetesRiskLevel:
    for highest, level in DIABETES_TIERS:
        if score <= highest:
            return level
    return DiabetesRiskLevel.VERY_HIGH


def diabetes_risk(
    age: float,
    bmi_value: float,
    waist_cm: float,
    family_history: bool = False,
    high_blood_pressure: bool = False,
    physically_active: bool = True,
) -> DiabetesRisk:
    """Point score out of 30 from age, BMI, waist and three yes/no factors."""
    score = (
        _bracket_points(age, DIABETES_AGE_POINTS)
        + _bracket_points(bmi_value, DIABETES_BMI_POINTS)
        + _bracket_points(waist_cm, DIABETES_WAIST_POINTS)
    )
    if family_history:
        score += DIABETES_FAMILY_HISTORY_POINTS
    if high_blood_pressure:
        score += DIABETES_HIGH_BP_POINTS
    if not physically_active:
        score += DIABETES_INACTIVITY_POINTS

    level = diabetes_risk_level(score)
    return DiabetesRisk(
        score=score,
        max_score=DIABETES_MAX_SCORE,
        percentage=score / DIABETES_MAX_SCORE * 100,
        level=level,
        advice=list(DIABETES_ADVICE[level]),
    )
