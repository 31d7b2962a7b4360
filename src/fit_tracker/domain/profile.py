"""Domain models for body profiles."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID


class Sex(StrEnum):
    """Biological sex used by the Mifflin-St Jeor equation."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(StrEnum):
    """Self-reported daily activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


@dataclass(frozen=True)
class BodyMetrics:
    """User-entered body metrics."""

    weight_kg: float
    height_cm: float
    age_years: int
    sex: Sex
    activity_level: ActivityLevel


@dataclass(frozen=True)
class BodyProfile:
    """Persisted body profile snapshot with its computed energy target."""

    id: UUID
    user_id: UUID
    recorded_on: date
    metrics: BodyMetrics
    energy_target: int
    created_at: datetime | None
