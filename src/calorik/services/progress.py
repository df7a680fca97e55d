"""Derived progress views over food and weight logs."""

from dataclasses import dataclass
from datetime import date, timedelta

from calorik.domain.foods import FoodItem
from calorik.domain.profiles import Goal, UserProfile
from calorik.domain.progress import (
    DailySummary,
    DailyTotals,
    TrendPoint,
    WeekSummary,
    WeightProgress,
)
from calorik.services.food_log import FoodLogStore
from calorik.services.goals import calculate_goals
from calorik.services.weight_log import WeightLogStore


@dataclass
class ProgressService:
    """Service computing daily, weekly and trend aggregates."""

    food_log: FoodLogStore
    weight_log: WeightLogStore

    def daily_summary(self, profile: UserProfile, day: date) -> DailySummary:
        """Return a day's consumption against the profile's goals."""
        goals = calculate_goals(profile)
        items = self.food_log.list_for_date(profile.id, day)
        consumed = _aggregate_day(day, items)
        return DailySummary(
            day=day,
            goals=goals,
            consumed=consumed,
            remaining_calories=goals.calories - consumed.calories,
            remaining_protein_g=goals.protein_g - consumed.protein_g,
            remaining_carbs_g=goals.carbs_g - consumed.carbs_g,
            remaining_fat_g=goals.fat_g - consumed.fat_g,
            items=items,
        )

    def week_summary(self, profile: UserProfile, day: date) -> WeekSummary:
        """Return totals for the Monday-start week containing a day."""
        goals = calculate_goals(profile)
        start = day - timedelta(days=day.weekday())
        daily = []
        for offset in range(7):
            current = start + timedelta(days=offset)
            items = self.food_log.list_for_date(profile.id, current)
            daily.append(_aggregate_day(current, items))
        total_days = max(len(daily), 1)
        return WeekSummary(
            start=start,
            daily=daily,
            calorie_goal=goals.calories,
            avg_calories=sum(d.calories for d in daily) / total_days,
            avg_protein_g=sum(d.protein_g for d in daily) / total_days,
            avg_carbs_g=sum(d.carbs_g for d in daily) / total_days,
            avg_fat_g=sum(d.fat_g for d in daily) / total_days,
        )

    def trend(self, profile: UserProfile) -> list[TrendPoint]:
        """Return per-date weight and calorie intake, oldest first."""
        weights = {
            entry.date: entry.weight_kg for entry in self.weight_log.list(profile.id)
        }
        calories = {
            day: sum(item.calories for item in items)
            for day, items in self.food_log.list_all(profile.id).items()
            if items
        }
        return [
            TrendPoint(
                day=day, weight_kg=weights.get(day), calories=calories.get(day)
            )
            for day in sorted(weights.keys() | calories.keys())
        ]

    def weight_progress(self, profile: UserProfile) -> WeightProgress:
        """Return progress from the first logged weight toward the target."""
        entries = self.weight_log.list(profile.id)
        start = entries[0].weight_kg if entries else profile.weight_kg
        current = profile.weight_kg
        target = profile.target_weight_kg

        to_go = 0.0
        progress = 0.0
        if profile.goal is Goal.LOSE:
            to_go = current - target
            total = start - target
            if total > 0:
                progress = (start - current) / total * 100
            elif to_go <= 0:
                progress = 100.0
        elif profile.goal is Goal.GAIN:
            to_go = target - current
            total = target - start
            if total > 0:
                progress = (current - start) / total * 100
            elif to_go <= 0:
                progress = 100.0

        return WeightProgress(
            starting_weight_kg=start,
            current_weight_kg=current,
            target_weight_kg=target,
            weight_to_go_kg=to_go,
            progress_percent=max(0.0, min(100.0, progress)),
            weight_change_kg=current - start,
        )


def _aggregate_day(day: date, items: list[FoodItem]) -> DailyTotals:
    return DailyTotals(
        day=day,
        calories=sum(item.calories for item in items),
        protein_g=sum(item.protein for item in items),
        carbs_g=sum(item.carbs for item in items),
        fat_g=sum(item.fat for item in items),
    )
