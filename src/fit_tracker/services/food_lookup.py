"""Food lookup: local reference table first, Open Food Facts second."""

import asyncio
import logging
from dataclasses import dataclass, field

from fit_tracker.adapters.off_client import FoodSearchClient
from fit_tracker.domain.foods import FoodLookupResult, FoodRecord, FoodUnit
from fit_tracker.domain.numbers import to_float
from fit_tracker.services.cache import Cache

_logger = logging.getLogger(__name__)

_COMMON_FOODS: dict[str, tuple[float, float, float, float, FoodUnit]] = {
    "jajka": (155, 13, 11, 1.1, FoodUnit.GRAM),
    "jajko": (70, 6, 5, 0.5, FoodUnit.ITEM),
    "pierś z kurczaka": (165, 31, 3.6, 0, FoodUnit.GRAM),
    "ryż biały": (130, 2.7, 0.3, 28, FoodUnit.GRAM),
    "chleb razowy": (250, 9, 1.5, 50, FoodUnit.GRAM),
    "banan": (89, 1.1, 0.3, 23, FoodUnit.GRAM),
    "jabłko": (52, 0.3, 0.2, 14, FoodUnit.GRAM),
    "mleko 2%": (50, 3.4, 2, 4.8, FoodUnit.MILLILITER),
    "płatki owsiane": (389, 16.9, 6.9, 66, FoodUnit.GRAM),
    "twaróg półtłusty": (133, 18, 4, 3.5, FoodUnit.GRAM),
    "oliwa z oliwek": (884, 0, 100, 0, FoodUnit.MILLILITER),
}


@dataclass
class LocalFoodTable:
    """Built-in reference table matched by exact, case-insensitive name."""

    foods: dict[str, FoodRecord] = field(default_factory=dict)

    @classmethod
    def default(cls) -> "LocalFoodTable":
        return cls(
            foods={
                name: FoodRecord(
                    name=name,
                    kcal_per_100=kcal,
                    protein_per_100=protein,
                    fat_per_100=fat,
                    carb_per_100=carb,
                    unit=unit,
                    source="local",
                )
                for name, (kcal, protein, fat, carb, unit) in _COMMON_FOODS.items()
            }
        )

    def find(self, term: str) -> FoodRecord | None:
        return self.foods.get(_normalize(term))


@dataclass
class FoodLookupService:
    """Two-stage lookup: a local hit suppresses the remote search."""

    local_table: LocalFoodTable
    search_client: FoodSearchClient
    cache: Cache
    min_chars: int = 3
    page_size: int = 5
    cache_ttl_seconds: int = 3600
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def resolve(self, term: str) -> FoodLookupResult:
        """Resolve a typed food name to a local match or remote candidates."""
        local = self.local_table.find(term)
        if local is not None:
            return FoodLookupResult(term=term, local_match=local, candidates=[])
        return FoodLookupResult(
            term=term, local_match=None, candidates=await self.search_remote(term)
        )

    async def search_remote(self, term: str) -> list[FoodRecord]:
        """Search the remote database; failures degrade to no suggestions."""
        query = term.strip()
        if len(query) < self.min_chars:
            return []
        cache_key = f"off:search:{query.lower()}:{self.page_size}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        try:
            payload = await self._search_with_retry(query)
        except Exception as exc:
            _logger.warning("Food search failed for %r: %s", query, exc)
            return []
        products = payload.get("products") if isinstance(payload, dict) else None
        if not isinstance(products, list):
            products = []
        foods = [
            food
            for food in (_parse_product(product) for product in products)
            if food is not None
        ][: self.page_size]
        self.cache.set(cache_key, foods, ttl_seconds=self.cache_ttl_seconds)
        return foods

    async def _search_with_retry(self, query: str) -> dict[str, object]:
        attempt = 0
        while True:
            try:
                return await self.search_client.search_products(
                    query, page_size=self.page_size
                )
            except Exception as exc:
                attempt += 1
                _logger.info(
                    "Food search attempt %s/%s failed (status=%s)",
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


@dataclass
class LookupDebouncer:
    """Debounces lookups per input field and drops superseded ones.

    ``submit`` waits for the quiet period before resolving; a newer submit
    for the same field cancels the pending one, which then returns ``None``.
    """

    lookup: FoodLookupService
    quiet_period_seconds: float = 0.6
    _pending: dict[str, asyncio.Task] = field(default_factory=dict, init=False)

    async def submit(self, field_key: str, term: str) -> FoodLookupResult | None:
        previous = self._pending.get(field_key)
        if previous is not None and not previous.done():
            previous.cancel()
        task = asyncio.create_task(self._resolve_after_quiet_period(term))
        self._pending[field_key] = task
        try:
            return await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if task.cancelled() and (current is None or not current.cancelling()):
                return None
            raise
        finally:
            if self._pending.get(field_key) is task:
                del self._pending[field_key]

    async def _resolve_after_quiet_period(self, term: str) -> FoodLookupResult:
        await asyncio.sleep(self.quiet_period_seconds)
        return await self.lookup.resolve(term)


def _parse_product(product: object) -> FoodRecord | None:
    if not isinstance(product, dict):
        return None
    nutriments = product.get("nutriments") or {}
    if not isinstance(nutriments, dict):
        return None
    kcal = to_float(nutriments.get("energy-kcal_100g"))
    name = str(product.get("product_name") or "").strip()
    if kcal <= 0 or not name:
        return None
    brands = product.get("brands")
    return FoodRecord(
        name=name,
        kcal_per_100=kcal,
        protein_per_100=to_float(nutriments.get("proteins_100g")),
        fat_per_100=to_float(nutriments.get("fat_100g")),
        carb_per_100=to_float(nutriments.get("carbohydrates_100g")),
        unit=FoodUnit.GRAM,
        brand=brands if isinstance(brands, str) and brands else None,
        source="openfoodfacts",
    )


def _normalize(term: str) -> str:
    return term.strip().lower()


def _status_code_from_exception(exc: Exception) -> str:
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
