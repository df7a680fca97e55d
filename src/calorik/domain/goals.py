"""Domain models for nutrition goals."""

from dataclasses import dataclass
from enum import Enum


class BmiCategory(str, Enum):
    """BMI bands."""

    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"
    SEVERELY_OBESE = "severely_obese"


@dataclass(frozen=True)
class NutritionGoals:
    """Daily targets derived from a profile."""

    bmr: float
    tdee: float
    calories: int
    protein_g: int
    carbs_g: int
    fat_g: int
    bmi: float
