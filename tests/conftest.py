"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from fit_tracker.adapters.off_client import FoodSearchClient
from fit_tracker.config import Settings
from fit_tracker.containers import AppContainer
from fit_tracker.domain.diary import FavoriteMeal, LoggedEntry, NutrientTotals
from fit_tracker.domain.profile import BodyMetrics, BodyProfile
from fit_tracker.services.cache import InMemoryCache
from fit_tracker.services.diary import DiaryRepository, DiaryService
from fit_tracker.services.favorites import FavoriteRepository, FavoriteService
from fit_tracker.services.food_lookup import FoodLookupService, LocalFoodTable
from fit_tracker.services.profiles import ProfileRepository, ProfileService


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: list[BodyProfile] = field(default_factory=list)

    def create_profile(
        self,
        user_id: UUID,
        recorded_on: date,
        metrics: BodyMetrics,
        energy_target: int,
    ) -> BodyProfile:
        profile = BodyProfile(
            id=uuid4(),
            user_id=user_id,
            recorded_on=recorded_on,
            metrics=metrics,
            energy_target=energy_target,
            created_at=datetime.now(tz=UTC),
        )
        self.profiles.append(profile)
        return profile

    def list_profiles(self, user_id: UUID) -> list[BodyProfile]:
        return [profile for profile in self.profiles if profile.user_id == user_id]


@dataclass
class InMemoryDiaryRepository(DiaryRepository):
    """In-memory diary repository for tests."""

    entries: dict[UUID, LoggedEntry] = field(default_factory=dict)

    def create_entry(
        self,
        user_id: UUID,
        day: date,
        name: str,
        totals: NutrientTotals,
        created_at: datetime,
    ) -> LoggedEntry:
        entry = LoggedEntry(
            id=uuid4(),
            user_id=user_id,
            day=day,
            name=name,
            kcal=totals.kcal,
            protein=totals.protein,
            fat=totals.fat,
            carb=totals.carb,
            created_at=created_at,
        )
        self.entries[entry.id] = entry
        return entry

    def list_entries(self, user_id: UUID, day: date) -> list[LoggedEntry]:
        return [
            entry
            for entry in self.entries.values()
            if entry.user_id == user_id and entry.day == day
        ]

    def list_all_entries(self, user_id: UUID) -> list[LoggedEntry]:
        return [entry for entry in self.entries.values() if entry.user_id == user_id]

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        entry = self.entries.get(entry_id)
        if entry is not None and entry.user_id == user_id:
            del self.entries[entry_id]


@dataclass
class InMemoryFavoriteRepository(FavoriteRepository):
    """In-memory favorite repository for tests."""

    favorites: dict[UUID, FavoriteMeal] = field(default_factory=dict)

    def create_favorite(
        self,
        user_id: UUID,
        name: str,
        totals: NutrientTotals,
        created_at: datetime,
    ) -> FavoriteMeal:
        favorite = FavoriteMeal(
            id=uuid4(),
            user_id=user_id,
            name=name,
            kcal=totals.kcal,
            protein=totals.protein,
            fat=totals.fat,
            carb=totals.carb,
            created_at=created_at,
        )
        self.favorites[favorite.id] = favorite
        return favorite

    def list_favorites(self, user_id: UUID) -> list[FavoriteMeal]:
        return [meal for meal in self.favorites.values() if meal.user_id == user_id]

    def get_favorite(self, user_id: UUID, favorite_id: UUID) -> FavoriteMeal | None:
        favorite = self.favorites.get(favorite_id)
        if favorite is None or favorite.user_id != user_id:
            return None
        return favorite

    def delete_favorite(self, user_id: UUID, favorite_id: UUID) -> None:
        if self.get_favorite(user_id, favorite_id) is not None:
            del self.favorites[favorite_id]


@dataclass
class FakeSearchClient(FoodSearchClient):
    """Fake Open Food Facts client with a canned payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "products": [
                {
                    "product_name": "Skyr naturalny",
                    "brands": "Piątnica",
                    "nutriments": {
                        "energy-kcal_100g": 64,
                        "proteins_100g": 12,
                        "fat_100g": 0,
                        "carbohydrates_100g": 3.9,
                    },
                },
                {
                    "product_name": "Woda mineralna",
                    "brands": "Cisowianka",
                    "nutriments": {"energy-kcal_100g": 0},
                },
                {
                    "product_name": "Skyr waniliowy",
                    "brands": ["not", "a", "string"],
                    "nutriments": {
                        "energy-kcal_100g": 78,
                        "proteins_100g": 9.5,
                        "carbohydrates_100g": 9.4,
                    },
                },
            ]
        }
    )
    calls: list[str] = field(default_factory=list)
    error: Exception | None = None

    async def search_products(self, term: str, page_size: int = 5) -> dict[str, object]:
        self.calls.append(term)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service.key.signature",
        api_token="api-token",
        lookup_debounce_ms=0,
    )


@pytest.fixture
def search_client() -> FakeSearchClient:
    return FakeSearchClient()


@pytest.fixture
def container(settings: Settings, search_client: FakeSearchClient) -> AppContainer:
    favorite_service = FavoriteService(InMemoryFavoriteRepository())

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        profile_service=ProfileService(InMemoryProfileRepository()),
        diary_service=DiaryService(
            repository=InMemoryDiaryRepository(),
            favorite_service=favorite_service,
        ),
        favorite_service=favorite_service,
        food_lookup_service=FoodLookupService(
            local_table=LocalFoodTable.default(),
            search_client=search_client,
            cache=InMemoryCache(),
            retry_delay_seconds=0,
        ),
        close_resources=close_resources,
    )
