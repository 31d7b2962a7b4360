"""Supabase repository for favorite meals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fit_tracker.adapters.supabase_rows import parse_datetime, parse_float
from fit_tracker.domain.diary import FavoriteMeal, NutrientTotals
from fit_tracker.services.favorites import FavoriteRepository

_COLUMNS = "id, user_id, name, kcal, protein, fat, carb, created_at"


@dataclass
class SupabaseFavoriteRepository(FavoriteRepository):
    """Supabase implementation for the ``saved_meals`` table."""

    client: Client

    def create_favorite(
        self,
        user_id: UUID,
        name: str,
        totals: NutrientTotals,
        created_at: datetime,
    ) -> FavoriteMeal:
        """Insert a favorite meal."""
        response = (
            self.client.table("saved_meals")
            .insert(
                {
                    "user_id": str(user_id),
                    "name": name,
                    "kcal": totals.kcal,
                    "protein": totals.protein,
                    "fat": totals.fat,
                    "carb": totals.carb,
                    "created_at": created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create favorite meal")
        return _parse_favorite(response.data[0])

    def list_favorites(self, user_id: UUID) -> list[FavoriteMeal]:
        """Return favorites, newest first."""
        response = (
            self.client.table("saved_meals")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_favorite(row) for row in response.data or []]

    def get_favorite(self, user_id: UUID, favorite_id: UUID) -> FavoriteMeal | None:
        """Return a favorite by id."""
        response = (
            self.client.table("saved_meals")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("id", str(favorite_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_favorite(response.data[0])

    def delete_favorite(self, user_id: UUID, favorite_id: UUID) -> None:
        """Delete a favorite owned by the user."""
        self.client.table("saved_meals").delete().eq("user_id", str(user_id)).eq(
            "id", str(favorite_id)
        ).execute()


def _parse_favorite(row: dict[str, object]) -> FavoriteMeal:
    return FavoriteMeal(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name") or ""),
        kcal=parse_float(row.get("kcal")),
        protein=parse_float(row.get("protein")),
        fat=parse_float(row.get("fat")),
        carb=parse_float(row.get("carb")),
        created_at=parse_datetime(row.get("created_at")),
    )
