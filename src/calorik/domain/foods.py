"""Domain models for food logging."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class FoodItem:
    """A logged food entry."""

    id: UUID
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    timestamp: datetime


@dataclass(frozen=True)
class NewFoodItem:
    """Food data before it is assigned an id and timestamp."""

    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    timestamp: datetime | None = None


@dataclass(frozen=True)
class WeightEntry:
    """Body weight recorded for a single day."""

    date: date
    weight_kg: float


class FoodEstimate(BaseModel):
    """Nutrition estimate returned by the AI estimator."""

    name: str
    calories: float = Field(ge=0.0)
    protein: float = Field(ge=0.0)
    carbs: float = Field(ge=0.0)
    fat: float = Field(ge=0.0)

    def to_new_item(self) -> NewFoodItem:
        """Convert the estimate into a loggable food item."""
        return NewFoodItem(
            name=self.name,
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
        )


class ImageEstimate(BaseModel):
    """Structured output for image estimation."""

    items: list[FoodEstimate]
