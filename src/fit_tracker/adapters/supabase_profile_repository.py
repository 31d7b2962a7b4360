"""Supabase repository for body profile snapshots."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from fit_tracker.adapters.supabase_rows import parse_date, parse_datetime, parse_float
from fit_tracker.domain.profile import ActivityLevel, BodyMetrics, BodyProfile, Sex
from fit_tracker.services.profiles import ProfileRepository

_COLUMNS = (
    "id, user_id, recorded_on, weight_kg, height_cm, age_years, sex, "
    "activity_level, energy_target, created_at"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for append-only profiles."""

    client: Client

    def create_profile(
        self,
        user_id: UUID,
        recorded_on: date,
        metrics: BodyMetrics,
        energy_target: int,
    ) -> BodyProfile:
        """Insert a profile snapshot."""
        response = (
            self.client.table("body_profiles")
            .insert(
                {
                    "user_id": str(user_id),
                    "recorded_on": recorded_on.isoformat(),
                    "weight_kg": metrics.weight_kg,
                    "height_cm": metrics.height_cm,
                    "age_years": metrics.age_years,
                    "sex": metrics.sex.value,
                    "activity_level": metrics.activity_level.value,
                    "energy_target": energy_target,
                    "created_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create body profile")
        return _parse_profile(response.data[0])

    def list_profiles(self, user_id: UUID) -> list[BodyProfile]:
        """Return a user's snapshots ordered by date."""
        response = (
            self.client.table("body_profiles")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("recorded_on", desc=False)
            .execute()
        )
        return [_parse_profile(row) for row in response.data or []]


def _parse_profile(row: dict[str, object]) -> BodyProfile:
    return BodyProfile(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        recorded_on=parse_date(row.get("recorded_on")),
        metrics=BodyMetrics(
            weight_kg=parse_float(row.get("weight_kg")),
            height_cm=parse_float(row.get("height_cm")),
            age_years=int(parse_float(row.get("age_years"))),
            sex=_parse_sex(row.get("sex")),
            activity_level=_parse_activity(row.get("activity_level")),
        ),
        energy_target=int(parse_float(row.get("energy_target"))),
        created_at=parse_datetime(row.get("created_at")),
    )


def _parse_sex(value: object) -> Sex:
    return Sex.MALE if value == Sex.MALE.value else Sex.FEMALE


def _parse_activity(value: object) -> ActivityLevel:
    try:
        return ActivityLevel(str(value))
    except ValueError:
        return ActivityLevel.SEDENTARY
