"""Spoonacular recipe API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class RecipeApiClient(Protocol):
    """Interface for recipe API interactions."""

    async def complex_search(self, params: dict[str, object]) -> dict[str, object]:
        """Run a recipe search and return raw API data."""

    async def get_information(self, recipe_id: int) -> dict[str, object]:
        """Fetch a single recipe with nutrition and return raw API data."""


@dataclass
class HttpxSpoonacularClient(RecipeApiClient):
    """HTTPX-backed Spoonacular client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10.0

    @classmethod
    def create(
        cls, api_key: str, base_url: str, timeout_seconds: float = 10.0
    ) -> "HttpxSpoonacularClient":
        """Create a Spoonacular client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def complex_search(self, params: dict[str, object]) -> dict[str, object]:
        """Search recipes with Spoonacular's complexSearch endpoint."""
        url = f"{self.base_url}/complexSearch"
        response = await self.http_client.get(
            url,
            params={**params, "apiKey": self.api_key},
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def get_information(self, recipe_id: int) -> dict[str, object]:
        """Fetch recipe information including nutrition."""
        url = f"{self.base_url}/{recipe_id}/information"
        response = await self.http_client.get(
            url,
            params={"apiKey": self.api_key, "includeNutrition": "true"},
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
