"""Supabase repository for diary entries."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from fit_tracker.adapters.supabase_rows import parse_date, parse_datetime, parse_float
from fit_tracker.domain.diary import LoggedEntry, NutrientTotals
from fit_tracker.services.diary import DiaryRepository

_COLUMNS = "id, user_id, day, name, kcal, protein, fat, carb, created_at"


@dataclass
class SupabaseDiaryRepository(DiaryRepository):
    """Supabase implementation for the ``daily_logs`` table."""

    client: Client

    def create_entry(
        self,
        user_id: UUID,
        day: date,
        name: str,
        totals: NutrientTotals,
        created_at: datetime,
    ) -> LoggedEntry:
        """Insert a diary entry."""
        response = (
            self.client.table("daily_logs")
            .insert(
                {
                    "user_id": str(user_id),
                    "day": day.isoformat(),
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
            raise RuntimeError("Failed to create diary entry")
        return _parse_entry(response.data[0])

    def list_entries(self, user_id: UUID, day: date) -> list[LoggedEntry]:
        """Return entries logged on ``day``."""
        response = (
            self.client.table("daily_logs")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("day", day.isoformat())
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def list_all_entries(self, user_id: UUID) -> list[LoggedEntry]:
        """Return all entries, most recent day first."""
        response = (
            self.client.table("daily_logs")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("day", desc=True)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete an entry owned by the user."""
        self.client.table("daily_logs").delete().eq("user_id", str(user_id)).eq(
            "id", str(entry_id)
        ).execute()


def _parse_entry(row: dict[str, object]) -> LoggedEntry:
    return LoggedEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        day=parse_date(row.get("day")),
        name=str(row.get("name") or ""),
        kcal=parse_float(row.get("kcal")),
        protein=parse_float(row.get("protein")),
        fat=parse_float(row.get("fat")),
        carb=parse_float(row.get("carb")),
        created_at=parse_datetime(row.get("created_at")),
    )
