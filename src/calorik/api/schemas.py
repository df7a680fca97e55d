"""Pydantic models for API request payloads."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from calorik.domain.foods import NewFoodItem
from calorik.domain.profiles import ActivityLevel, Goal, ProfileDraft, Sex


class ProfileCreate(BaseModel):
    """Onboarding payload."""

    name: str = Field(min_length=1)
    avatar: str | None = None
    sex: Sex
    age: int = Field(gt=0, le=130)
    height_cm: float = Field(gt=0)
    weight_kg: float = Field(gt=0)
    target_weight_kg: float = Field(gt=0)
    activity_level: ActivityLevel
    goal: Goal
    target_duration_weeks: int | None = Field(default=None, ge=1)

    def to_draft(self) -> ProfileDraft:
        return ProfileDraft(**self.model_dump())


class ProfileUpdate(BaseModel):
    """Partial profile update; only fields that are sent change."""

    name: str | None = Field(default=None, min_length=1)
    avatar: str | None = None
    sex: Sex | None = None
    age: int | None = Field(default=None, gt=0, le=130)
    height_cm: float | None = Field(default=None, gt=0)
    weight_kg: float | None = Field(default=None, gt=0)
    target_weight_kg: float | None = Field(default=None, gt=0)
    activity_level: ActivityLevel | None = None
    goal: Goal | None = None
    target_duration_weeks: int | None = Field(default=None, ge=1)


class FoodItemIn(BaseModel):
    """Manually entered or estimated food item."""

    name: str = Field(min_length=1)
    calories: float = Field(ge=0)
    protein: float = Field(default=0, ge=0)
    carbs: float = Field(default=0, ge=0)
    fat: float = Field(default=0, ge=0)
    timestamp: datetime | None = None

    def to_new_item(self) -> NewFoodItem:
        return NewFoodItem(**self.model_dump())


class FoodLogRequest(BaseModel):
    """Items to append to a day's log."""

    day: date | None = None
    items: list[FoodItemIn] = Field(min_length=1)


class FoodItemUpdate(BaseModel):
    """Edit of a logged item's name or nutrition."""

    name: str | None = Field(default=None, min_length=1)
    calories: float | None = Field(default=None, ge=0)
    protein: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)
    fat: float | None = Field(default=None, ge=0)


class PresetLogRequest(BaseModel):
    """Preset foods to log by name."""

    day: date | None = None
    names: list[str] = Field(min_length=1)


class WeightIn(BaseModel):
    """Weight for a single day."""

    weight_kg: float = Field(gt=0)


class TextEstimateRequest(BaseModel):
    """Free-text meal description."""

    description: str = Field(min_length=1, max_length=2000)
