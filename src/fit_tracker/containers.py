"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fit_tracker.adapters.off_client import HttpxOpenFoodFactsClient
from fit_tracker.adapters.supabase_diary_repository import SupabaseDiaryRepository
from fit_tracker.adapters.supabase_favorite_repository import (
    SupabaseFavoriteRepository,
)
from fit_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from fit_tracker.config import Settings
from fit_tracker.services.cache import InMemoryCache
from fit_tracker.services.diary import DiaryService
from fit_tracker.services.favorites import FavoriteService
from fit_tracker.services.food_lookup import FoodLookupService, LocalFoodTable
from fit_tracker.services.profiles import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    diary_service: DiaryService
    favorite_service: FavoriteService
    food_lookup_service: FoodLookupService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))
    favorite_service = FavoriteService(SupabaseFavoriteRepository(supabase_client))
    diary_service = DiaryService(
        repository=SupabaseDiaryRepository(supabase_client),
        favorite_service=favorite_service,
    )
    off_client = HttpxOpenFoodFactsClient.create(resolved_settings.off_base_url)
    food_lookup_service = FoodLookupService(
        local_table=LocalFoodTable.default(),
        search_client=off_client,
        cache=InMemoryCache(),
        min_chars=resolved_settings.lookup_min_chars,
        page_size=resolved_settings.off_page_size,
        cache_ttl_seconds=resolved_settings.lookup_cache_ttl_seconds,
    )

    async def close_resources() -> None:
        await off_client.close()

    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        diary_service=diary_service,
        favorite_service=favorite_service,
        food_lookup_service=food_lookup_service,
        close_resources=close_resources,
    )
