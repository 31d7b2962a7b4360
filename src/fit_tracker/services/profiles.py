"""Body profile service."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from fit_tracker.domain.profile import BodyMetrics, BodyProfile
from fit_tracker.domain.targets import (
    DEFAULT_NUTRITION_CONFIG,
    DailyTargets,
    NutritionConfig,
)
from fit_tracker.services.targets import calculate_energy_target, targets_for_energy

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for append-only profile snapshots."""

    def create_profile(
        self,
        user_id: UUID,
        recorded_on: date,
        metrics: BodyMetrics,
        energy_target: int,
    ) -> BodyProfile:
        """Store a new snapshot and return it."""

    def list_profiles(self, user_id: UUID) -> list[BodyProfile]:
        """Return all snapshots for a user."""


@dataclass
class ProfileService:
    """Records body metrics and derives the user's daily targets."""

    repository: ProfileRepository
    config: NutritionConfig = DEFAULT_NUTRITION_CONFIG

    def update_profile(self, user_id: UUID, metrics: BodyMetrics) -> BodyProfile:
        """Append a snapshot dated today with a freshly computed target."""
        energy_target = calculate_energy_target(
            metrics.weight_kg,
            metrics.height_cm,
            metrics.age_years,
            metrics.sex,
            metrics.activity_level,
            self.config,
        )
        profile = self.repository.create_profile(
            user_id,
            recorded_on=datetime.now(tz=UTC).date(),
            metrics=metrics,
            energy_target=energy_target,
        )
        _logger.info(
            "Profile updated: user=%s energy_target=%s", user_id, energy_target
        )
        return profile

    def list_history(self, user_id: UUID) -> list[BodyProfile]:
        """Return snapshots oldest first."""
        return sorted(self.repository.list_profiles(user_id), key=_snapshot_order)

    def get_current(self, user_id: UUID) -> BodyProfile | None:
        history = self.list_history(user_id)
        if not history:
            return None
        return history[-1]

    def get_targets(self, user_id: UUID) -> DailyTargets:
        """Return targets from the current profile, or the configured default."""
        current = self.get_current(user_id)
        energy_target = (
            current.energy_target
            if current is not None and current.energy_target
            else self.config.default_energy_target
        )
        return targets_for_energy(energy_target, self.config)


def _snapshot_order(profile: BodyProfile) -> tuple[date, datetime]:
    return (
        profile.recorded_on,
        profile.created_at or datetime.min.replace(tzinfo=UTC),
    )
