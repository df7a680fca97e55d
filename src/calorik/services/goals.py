"""Calorie and macronutrient goal calculation.

BMR uses the Mifflin-St Jeor equation for every profile.
"""

import math

from calorik.domain.goals import BmiCategory, NutritionGoals
from calorik.domain.profiles import (
    ActivityLevel,
    Goal,
    ProfileDraft,
    Sex,
    UserProfile,
    validate_profile,
)

ACTIVITY_FACTORS: dict[ActivityLevel, float] = {
    ActivityLevel.LOW: 1.375,
    ActivityLevel.MEDIUM: 1.55,
    ActivityLevel.HIGH: 1.725,
}

GOAL_ADJUSTMENTS: dict[Goal, float] = {
    Goal.LOSE: -400.0,
    Goal.MAINTAIN: 0.0,
    Goal.GAIN: 400.0,
}

KCAL_PER_KG = 7700.0
MIN_DAILY_CALORIES = 1200

PROTEIN_SHARE = 0.30
CARBS_SHARE = 0.40
FAT_SHARE = 0.30
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

_SEX_OFFSETS: dict[Sex, float] = {Sex.MALE: 5.0, Sex.FEMALE: -161.0}

_BMI_BANDS: tuple[tuple[float, BmiCategory], ...] = (
    (18.5, BmiCategory.UNDERWEIGHT),
    (25.0, BmiCategory.NORMAL),
    (30.0, BmiCategory.OVERWEIGHT),
    (35.0, BmiCategory.OBESE),
)

Profile = ProfileDraft | UserProfile


def calculate_goals(profile: Profile) -> NutritionGoals:
    """Return daily calorie and macro targets plus BMI for a profile."""
    validate_profile(profile)
    bmr = basal_metabolic_rate(profile)
    tdee = bmr * ACTIVITY_FACTORS[profile.activity_level]
    calories = max(
        round_half_up(tdee + _goal_adjustment(profile)), MIN_DAILY_CALORIES
    )
    return NutritionGoals(
        bmr=bmr,
        tdee=tdee,
        calories=calories,
        protein_g=round_half_up(calories * PROTEIN_SHARE / KCAL_PER_G_PROTEIN),
        carbs_g=round_half_up(calories * CARBS_SHARE / KCAL_PER_G_CARBS),
        fat_g=round_half_up(calories * FAT_SHARE / KCAL_PER_G_FAT),
        bmi=round(body_mass_index(profile.weight_kg, profile.height_cm), 1),
    )


def basal_metabolic_rate(profile: Profile) -> float:
    """Mifflin-St Jeor resting energy expenditure in kcal/day."""
    return (
        10 * profile.weight_kg
        + 6.25 * profile.height_cm
        - 5 * profile.age
        + _SEX_OFFSETS[profile.sex]
    )


def body_mass_index(weight_kg: float, height_cm: float) -> float:
    """Return weight / height(m)^2."""
    if height_cm <= 0 or weight_kg <= 0:
        raise ValueError("weight and height must be positive")
    height_m = height_cm / 100
    return weight_kg / (height_m**2)


def daily_deficit(profile: Profile) -> float:
    """Return the timeline deficit in kcal/day, or 0 when no timeline applies."""
    if profile.goal is not Goal.LOSE or not profile.target_duration_weeks:
        return 0.0
    weight_to_lose = profile.weight_kg - profile.target_weight_kg
    if weight_to_lose <= 0:
        return 0.0
    return weight_to_lose * KCAL_PER_KG / (profile.target_duration_weeks * 7)


def bmi_category(bmi: float) -> BmiCategory:
    """Classify a BMI value."""
    for upper, category in _BMI_BANDS:
        if bmi < upper:
            return category
    return BmiCategory.SEVERELY_OBESE


def _goal_adjustment(profile: Profile) -> float:
    deficit = daily_deficit(profile)
    if deficit > 0:
        return -deficit
    return GOAL_ADJUSTMENTS[profile.goal]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, rounding halves up."""
    return math.floor(value + 0.5)
