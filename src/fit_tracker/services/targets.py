"""Energy and macronutrient target calculations."""

from fit_tracker.domain.numbers import round_half_up
from fit_tracker.domain.profile import ActivityLevel, BodyMetrics, Sex
from fit_tracker.domain.targets import (
    DEFAULT_NUTRITION_CONFIG,
    DailyTargets,
    MacroTargets,
    NutritionConfig,
)


def calculate_energy_target(  # noqa: PLR0913
    weight_kg: float,
    height_cm: float,
    age_years: float,
    sex: Sex | str,
    activity_level: ActivityLevel | str | None,
    config: NutritionConfig = DEFAULT_NUTRITION_CONFIG,
) -> int:
    """Return the daily energy target in kcal (Mifflin-St Jeor BMR x activity).

    Inputs are not validated; non-positive metrics give a meaningless but
    finite result.
    """
    bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
    if sex == Sex.MALE:
        bmr += config.male_offset_kcal
    else:
        bmr += config.female_offset_kcal
    return _round_half_up(bmr * activity_multiplier(activity_level, config))


def calculate_macro_targets(
    energy_target_kcal: float, config: NutritionConfig = DEFAULT_NUTRITION_CONFIG
) -> MacroTargets:
    """Split an energy target into protein, fat and carb grams."""
    return MacroTargets(
        protein_g=_round_half_up(
            energy_target_kcal * config.protein_share / config.protein_kcal_per_g
        ),
        fat_g=_round_half_up(
            energy_target_kcal * config.fat_share / config.fat_kcal_per_g
        ),
        carb_g=_round_half_up(
            energy_target_kcal * config.carb_share / config.carb_kcal_per_g
        ),
    )


def targets_for_metrics(
    metrics: BodyMetrics, config: NutritionConfig = DEFAULT_NUTRITION_CONFIG
) -> DailyTargets:
    """Compute energy and macro targets for a set of body metrics."""
    energy_target = calculate_energy_target(
        metrics.weight_kg,
        metrics.height_cm,
        metrics.age_years,
        metrics.sex,
        metrics.activity_level,
        config,
    )
    return targets_for_energy(energy_target, config)


def targets_for_energy(
    energy_target: int, config: NutritionConfig = DEFAULT_NUTRITION_CONFIG
) -> DailyTargets:
    """Wrap an energy target together with its macro split."""
    return DailyTargets(
        energy_target=energy_target,
        macros=calculate_macro_targets(energy_target, config),
    )


def activity_multiplier(
    activity_level: ActivityLevel | str | None,
    config: NutritionConfig = DEFAULT_NUTRITION_CONFIG,
) -> float:
    """Return the multiplier for an activity level, defaulting when unknown."""
    if activity_level is None:
        return config.default_activity_multiplier
    try:
        level = ActivityLevel(activity_level)
    except ValueError:
        return config.default_activity_multiplier
    return config.activity_multipliers.get(level, config.default_activity_multiplier)


def _round_half_up(value: float) -> int:
    return int(round_half_up(value))
