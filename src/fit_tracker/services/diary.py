"""Food diary service."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from fit_tracker.domain.diary import DailySummary, LoggedEntry, NutrientTotals
from fit_tracker.domain.foods import Ingredient
from fit_tracker.domain.targets import (
    DEFAULT_NUTRITION_CONFIG,
    DailyTargets,
    NutritionConfig,
)
from fit_tracker.services.aggregation import summarize_day, summarize_history
from fit_tracker.services.favorites import FavoriteService
from fit_tracker.services.servings import default_meal_name, meal_totals

_logger = logging.getLogger(__name__)


class DiaryRepository(Protocol):
    """Persistence interface for diary entries."""

    def create_entry(
        self,
        user_id: UUID,
        day: date,
        name: str,
        totals: NutrientTotals,
        created_at: datetime,
    ) -> LoggedEntry:
        """Store a diary entry and return it."""

    def list_entries(self, user_id: UUID, day: date) -> list[LoggedEntry]:
        """Return entries for one day."""

    def list_all_entries(self, user_id: UUID) -> list[LoggedEntry]:
        """Return every entry for a user."""

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete an entry."""


@dataclass
class DiaryService:
    """Logs meals and summarizes diary days."""

    repository: DiaryRepository
    favorite_service: FavoriteService
    config: NutritionConfig = DEFAULT_NUTRITION_CONFIG

    def add_entry(
        self, user_id: UUID, day: date, name: str, totals: NutrientTotals
    ) -> LoggedEntry:
        """Log already-scaled totals, rounded for storage."""
        return self.repository.create_entry(
            user_id,
            day=day,
            name=name.strip(),
            totals=totals.rounded(),
            created_at=datetime.now(tz=UTC),
        )

    def log_meal(
        self,
        user_id: UUID,
        day: date,
        ingredients: list[Ingredient],
        name: str | None = None,
        save_as_favorite: bool = False,
    ) -> LoggedEntry:
        """Scale ingredients into one entry, optionally keeping it as a favorite."""
        if not ingredients:
            raise ValueError("A meal needs at least one ingredient")
        meal_name = (name or "").strip() or default_meal_name(ingredients)
        totals = meal_totals(ingredients)
        entry = self.add_entry(user_id, day, meal_name, totals)
        if save_as_favorite:
            self.favorite_service.save(user_id, meal_name, totals)
        return entry

    def log_favorite(
        self, user_id: UUID, favorite_id: UUID, day: date
    ) -> LoggedEntry | None:
        """Log a favorite template on ``day``."""
        favorite = self.favorite_service.get(user_id, favorite_id)
        if favorite is None:
            return None
        return self.add_entry(user_id, day, favorite.name, favorite.totals)

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        self.repository.delete_entry(user_id, entry_id)
        _logger.info("Diary entry deleted: user=%s entry=%s", user_id, entry_id)

    def list_day(self, user_id: UUID, day: date) -> list[LoggedEntry]:
        """Return the day's entries, newest first."""
        return sorted(
            self.repository.list_entries(user_id, day),
            key=lambda entry: entry.created_at or datetime.min.replace(tzinfo=UTC),
            reverse=True,
        )

    def day_summary(
        self, user_id: UUID, day: date, targets: DailyTargets
    ) -> DailySummary:
        return summarize_day(
            day, self.repository.list_entries(user_id, day), targets, self.config
        )

    def history(self, user_id: UUID, targets: DailyTargets) -> list[DailySummary]:
        """Return one summary per logged day, most recent first."""
        return summarize_history(
            self.repository.list_all_entries(user_id), targets, self.config
        )
