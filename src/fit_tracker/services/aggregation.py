"""Aggregation of diary entries into daily totals and adherence."""

import math
from collections.abc import Iterable
from datetime import date

from fit_tracker.domain.diary import (
    AdherenceBand,
    DailySummary,
    DailyTotals,
    LoggedEntry,
    MacroProgress,
    NutrientTotals,
)
from fit_tracker.domain.numbers import round_half_up, to_float
from fit_tracker.domain.targets import (
    DEFAULT_NUTRITION_CONFIG,
    DailyTargets,
    MacroTargets,
    NutritionConfig,
)


def aggregate_entries(entries: Iterable[object]) -> DailyTotals:
    """Sum kcal and macros across entries, counting bad values as zero.

    Accepts anything with ``kcal``, ``protein``, ``fat`` and ``carb``
    attributes, so historical rows with missing fields still aggregate.
    """
    kcal = protein = fat = carb = 0.0
    for entry in entries:
        kcal += to_float(getattr(entry, "kcal", None))
        protein += to_float(getattr(entry, "protein", None))
        fat += to_float(getattr(entry, "fat", None))
        carb += to_float(getattr(entry, "carb", None))
    return NutrientTotals(kcal=kcal, protein=protein, fat=fat, carb=carb)


def compute_adherence(totals: NutrientTotals, target: float | None) -> float:
    """Return eaten energy as a percentage of target, capped at 100."""
    return _clamped_percent(to_float(totals.kcal), target)


def classify_adherence(
    totals: NutrientTotals,
    target: float | None,
    config: NutritionConfig = DEFAULT_NUTRITION_CONFIG,
) -> AdherenceBand:
    """Classify eaten energy into under, on-target or over bands.

    Uses the uncapped percentage so days above the target can be flagged.
    """
    percent = _raw_percent(to_float(totals.kcal), target)
    if percent < config.under_target_percent:
        return AdherenceBand.UNDER
    if percent > config.over_target_percent:
        return AdherenceBand.OVER
    return AdherenceBand.ON_TARGET


def macro_progress(totals: NutrientTotals, targets: MacroTargets) -> MacroProgress:
    return MacroProgress(
        protein_percent=_clamped_percent(to_float(totals.protein), targets.protein_g),
        fat_percent=_clamped_percent(to_float(totals.fat), targets.fat_g),
        carb_percent=_clamped_percent(to_float(totals.carb), targets.carb_g),
    )


def group_by_date(entries: Iterable[LoggedEntry]) -> dict[str, DailyTotals]:
    """Aggregate entries per ISO date, most recent date first."""
    buckets: dict[str, list[LoggedEntry]] = {}
    for entry in entries:
        buckets.setdefault(_date_key(entry.day), []).append(entry)
    return {
        key: aggregate_entries(buckets[key])
        for key in sorted(buckets, reverse=True)
    }


def summarize_day(
    day: date,
    entries: list[LoggedEntry],
    targets: DailyTargets,
    config: NutritionConfig = DEFAULT_NUTRITION_CONFIG,
) -> DailySummary:
    """Build the derived summary for one diary day."""
    totals = aggregate_entries(entries)
    return DailySummary(
        day=day,
        totals=totals,
        energy_target=targets.energy_target,
        adherence_percent=compute_adherence(totals, targets.energy_target),
        band=classify_adherence(totals, targets.energy_target, config),
        remaining_kcal=round_half_up(targets.energy_target - totals.kcal, 2),
        macro_targets=targets.macros,
        macro_progress=macro_progress(totals, targets.macros),
        entry_count=len(entries),
    )


def summarize_history(
    entries: Iterable[LoggedEntry],
    targets: DailyTargets,
    config: NutritionConfig = DEFAULT_NUTRITION_CONFIG,
) -> list[DailySummary]:
    """Summarize every logged day, most recent first."""
    by_day: dict[date, list[LoggedEntry]] = {}
    for entry in entries:
        by_day.setdefault(entry.day, []).append(entry)
    return [
        summarize_day(day, by_day[day], targets, config)
        for day in sorted(by_day, reverse=True)
    ]


def _raw_percent(value: float, target: float | None) -> float:
    if target is None or not math.isfinite(target) or target == 0:
        return 0.0
    return value / target * 100


def _clamped_percent(value: float, target: float | None) -> float:
    return min(100.0, _raw_percent(value, target))


def _date_key(day: date | str) -> str:
    if isinstance(day, date):
        return day.isoformat()
    return str(day)
