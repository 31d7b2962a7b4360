"""Nutrition constants and target models."""

from dataclasses import dataclass, field

from fit_tracker.domain.profile import ActivityLevel

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}


@dataclass(frozen=True)
class NutritionConfig:
    """Fixed coefficients used by the target and adherence calculations."""

    activity_multipliers: dict[ActivityLevel, float] = field(
        default_factory=lambda: dict(ACTIVITY_MULTIPLIERS)
    )
    default_activity_multiplier: float = 1.2
    male_offset_kcal: float = 5.0
    female_offset_kcal: float = -161.0
    protein_share: float = 0.25
    fat_share: float = 0.30
    carb_share: float = 0.45
    protein_kcal_per_g: float = 4.0
    fat_kcal_per_g: float = 9.0
    carb_kcal_per_g: float = 4.0
    default_energy_target: int = 2000
    under_target_percent: float = 80.0
    over_target_percent: float = 105.0


DEFAULT_NUTRITION_CONFIG = NutritionConfig()


@dataclass(frozen=True)
class MacroTargets:
    """Daily macronutrient targets in grams."""

    protein_g: int
    fat_g: int
    carb_g: int


@dataclass(frozen=True)
class DailyTargets:
    """Energy target with the macro split derived from it."""

    energy_target: int
    macros: MacroTargets
