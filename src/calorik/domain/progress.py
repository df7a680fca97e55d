"""Domain models for derived progress views."""

from dataclasses import dataclass
from datetime import date

from calorik.domain.foods import FoodItem
from calorik.domain.goals import NutritionGoals


@dataclass(frozen=True)
class DailyTotals:
    """Consumed calories and macros for a day."""

    day: date
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class DailySummary:
    """A day's intake measured against the profile's goals."""

    day: date
    goals: NutritionGoals
    consumed: DailyTotals
    remaining_calories: float
    remaining_protein_g: float
    remaining_carbs_g: float
    remaining_fat_g: float
    items: list[FoodItem]


@dataclass(frozen=True)
class WeekSummary:
    """Week-to-date totals and averages."""

    start: date
    daily: list[DailyTotals]
    calorie_goal: int
    avg_calories: float
    avg_protein_g: float
    avg_carbs_g: float
    avg_fat_g: float


@dataclass(frozen=True)
class TrendPoint:
    """Weight and intake recorded for a date."""

    day: date
    weight_kg: float | None
    calories: float | None


@dataclass(frozen=True)
class WeightProgress:
    """Progress from the starting weight toward the target."""

    starting_weight_kg: float
    current_weight_kg: float
    target_weight_kg: float
    weight_to_go_kg: float
    progress_percent: float
    weight_change_kg: float
