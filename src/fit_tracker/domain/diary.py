"""Domain models for the food diary."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID

from fit_tracker.domain.numbers import round_half_up
from fit_tracker.domain.targets import MacroTargets

STORAGE_DECIMALS = 2


@dataclass(frozen=True)
class NutrientTotals:
    """Absolute energy and macronutrient amounts."""

    kcal: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    carb: float = 0.0

    def __add__(self, other: "NutrientTotals") -> "NutrientTotals":
        return NutrientTotals(
            kcal=self.kcal + other.kcal,
            protein=self.protein + other.protein,
            fat=self.fat + other.fat,
            carb=self.carb + other.carb,
        )

    def scaled(self, factor: float) -> "NutrientTotals":
        """Return the totals multiplied by ``factor``."""
        return NutrientTotals(
            kcal=self.kcal * factor,
            protein=self.protein * factor,
            fat=self.fat * factor,
            carb=self.carb * factor,
        )

    def rounded(self, decimals: int = STORAGE_DECIMALS) -> "NutrientTotals":
        """Apply the storage and display rounding policy."""
        return NutrientTotals(
            kcal=round_half_up(self.kcal, decimals),
            protein=round_half_up(self.protein, decimals),
            fat=round_half_up(self.fat, decimals),
            carb=round_half_up(self.carb, decimals),
        )


DailyTotals = NutrientTotals


@dataclass(frozen=True)
class LoggedEntry:
    """A diary entry with already-scaled nutrient totals."""

    id: UUID
    user_id: UUID
    day: date
    name: str
    kcal: float
    protein: float
    fat: float
    carb: float
    created_at: datetime | None

    @property
    def totals(self) -> NutrientTotals:
        return NutrientTotals(
            kcal=self.kcal, protein=self.protein, fat=self.fat, carb=self.carb
        )


@dataclass(frozen=True)
class FavoriteMeal:
    """Reusable, date-independent meal template."""

    id: UUID
    user_id: UUID
    name: str
    kcal: float
    protein: float
    fat: float
    carb: float
    created_at: datetime | None

    @property
    def totals(self) -> NutrientTotals:
        return NutrientTotals(
            kcal=self.kcal, protein=self.protein, fat=self.fat, carb=self.carb
        )


class AdherenceBand(StrEnum):
    """Classification of eaten energy against the target."""

    UNDER = "under"
    ON_TARGET = "on_target"
    OVER = "over"


@dataclass(frozen=True)
class MacroProgress:
    """Per-macro progress percentages, clamped to 100."""

    protein_percent: float
    fat_percent: float
    carb_percent: float


@dataclass(frozen=True)
class DailySummary:
    """Derived view of one diary day."""

    day: date
    totals: NutrientTotals
    energy_target: int
    adherence_percent: float
    band: AdherenceBand
    remaining_kcal: float
    macro_targets: MacroTargets
    macro_progress: MacroProgress
    entry_count: int
