"""Open Food Facts search API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class FoodSearchClient(Protocol):
    """Interface for remote food search."""

    async def search_products(self, term: str, page_size: int = 5) -> dict[str, object]:
        """Search products by name and return raw API data."""


@dataclass
class HttpxOpenFoodFactsClient(FoodSearchClient):
    """HTTPX-backed Open Food Facts client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10

    @classmethod
    def create(cls, base_url: str) -> "HttpxOpenFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(
                headers={"User-Agent": "fit-tracker/0.1"},
            ),
        )

    async def search_products(self, term: str, page_size: int = 5) -> dict[str, object]:
        """Run a simple product search; values are reported per 100 g/ml."""
        response = await self.http_client.get(
            f"{self.base_url}/cgi/search.pl",
            params={
                "search_terms": term,
                "search_simple": 1,
                "action": "process",
                "json": 1,
                "page_size": page_size,
            },
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
