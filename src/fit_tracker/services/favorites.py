"""Favorite meal templates."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from fit_tracker.domain.diary import FavoriteMeal, NutrientTotals

_logger = logging.getLogger(__name__)


class FavoriteRepository(Protocol):
    """Persistence interface for favorite meals."""

    def create_favorite(
        self,
        user_id: UUID,
        name: str,
        totals: NutrientTotals,
        created_at: datetime,
    ) -> FavoriteMeal:
        """Store a favorite and return it."""

    def list_favorites(self, user_id: UUID) -> list[FavoriteMeal]:
        """Return a user's favorites."""

    def get_favorite(self, user_id: UUID, favorite_id: UUID) -> FavoriteMeal | None:
        """Return a favorite by id, if present."""

    def delete_favorite(self, user_id: UUID, favorite_id: UUID) -> None:
        """Delete a favorite."""


@dataclass
class FavoriteService:
    """Application service for favorite meals."""

    repository: FavoriteRepository

    def save(self, user_id: UUID, name: str, totals: NutrientTotals) -> FavoriteMeal:
        """Save a meal template with rounded totals."""
        return self.repository.create_favorite(
            user_id,
            name=name.strip(),
            totals=totals.rounded(),
            created_at=datetime.now(tz=UTC),
        )

    def list_favorites(self, user_id: UUID) -> list[FavoriteMeal]:
        """Return favorites newest first."""
        return sorted(
            self.repository.list_favorites(user_id),
            key=lambda meal: meal.created_at or datetime.min.replace(tzinfo=UTC),
            reverse=True,
        )

    def get(self, user_id: UUID, favorite_id: UUID) -> FavoriteMeal | None:
        return self.repository.get_favorite(user_id, favorite_id)

    def delete(self, user_id: UUID, favorite_id: UUID) -> None:
        self.repository.delete_favorite(user_id, favorite_id)
        _logger.info("Favorite deleted: user=%s favorite=%s", user_id, favorite_id)
