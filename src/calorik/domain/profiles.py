"""Domain models for user profiles."""

import math
from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from calorik.domain.errors import InvalidProfileError


class Sex(str, Enum):
    """Biological sex used by the BMR equation."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(str, Enum):
    """Self-reported activity level."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Goal(str, Enum):
    """Weight goal."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


@dataclass(frozen=True)
class ProfileDraft:
    """Profile data collected at onboarding, before an id is assigned."""

    name: str
    sex: Sex
    age: int
    height_cm: float
    weight_kg: float
    target_weight_kg: float
    activity_level: ActivityLevel
    goal: Goal
    target_duration_weeks: int | None = None
    avatar: str | None = None


@dataclass(frozen=True)
class UserProfile:
    """Persisted user profile."""

    id: UUID
    name: str
    sex: Sex
    age: int
    height_cm: float
    weight_kg: float
    target_weight_kg: float
    activity_level: ActivityLevel
    goal: Goal
    target_duration_weeks: int | None = None
    avatar: str | None = None


def validate_profile(profile: ProfileDraft | UserProfile) -> None:
    """Raise InvalidProfileError when a profile has unusable metrics."""
    if not isinstance(profile.name, str) or not profile.name.strip():
        raise InvalidProfileError("name must not be empty")
    if not isinstance(profile.sex, Sex):
        raise InvalidProfileError(f"Unknown sex: {profile.sex!r}")
    if not isinstance(profile.activity_level, ActivityLevel):
        raise InvalidProfileError(
            f"Unknown activity level: {profile.activity_level!r}"
        )
    if not isinstance(profile.goal, Goal):
        raise InvalidProfileError(f"Unknown goal: {profile.goal!r}")
    for field_name in ("age", "height_cm", "weight_kg", "target_weight_kg"):
        value = getattr(profile, field_name)
        if not _is_positive_number(value):
            raise InvalidProfileError(f"{field_name} must be a positive number")
    weeks = profile.target_duration_weeks
    if weeks is not None and (
        isinstance(weeks, bool) or not isinstance(weeks, int) or weeks < 1
    ):
        raise InvalidProfileError("target_duration_weeks must be at least 1")


def _is_positive_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value) and value > 0
