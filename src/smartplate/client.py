"""HTTP client for the SmartPlate API."""

from dataclasses import dataclass

import httpx

from smartplate.domain.deals import Deal
from smartplate.domain.recipes import Recipe, RecipePreferences


@dataclass
class SmartPlateClient:
    """Typed client consuming the SmartPlate REST surface."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10.0

    @classmethod
    def create(
        cls, base_url: str = "http://localhost:3001", timeout_seconds: float = 10.0
    ) -> "SmartPlateClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}{path}"

    async def _get(self, path: str, params: dict[str, str] | None = None) -> object:
        response = await self.http_client.get(
            self._url(path), params=params, timeout=self.timeout_seconds
        )
        response.raise_for_status()
        return response.json()

    async def get_current_deals(self) -> list[Deal]:
        """Fetch the current deals."""
        payload = await self._get("/api/deals/current")
        return [Deal.model_validate(item) for item in payload]

    async def refresh_deals(self) -> dict[str, object]:
        """Ask the server to refresh its deal cache."""
        response = await self.http_client.post(
            self._url("/api/deals/refresh"), timeout=self.timeout_seconds
        )
        response.raise_for_status()
        return response.json()

    async def get_deals_by_store(self, store_name: str) -> list[Deal]:
        """Fetch deals for one store."""
        payload = await self._get(f"/api/deals/store/{store_name}")
        return [Deal.model_validate(item) for item in payload]

    async def get_recipe_suggestions(
        self,
        deal_ingredients: list[str],
        preferences: RecipePreferences | None = None,
        pantry_items: list[str] | None = None,
    ) -> list[Recipe]:
        """Request recipe suggestions for deal ingredients."""
        body = {
            "dealIngredients": deal_ingredients,
            "preferences": (preferences or RecipePreferences()).model_dump(
                by_alias=True
            ),
            "pantryItems": pantry_items or [],
        }
        response = await self.http_client.post(
            self._url("/api/recipes/suggestions"),
            json=body,
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return [Recipe.model_validate(item) for item in response.json()]

    async def get_recipe_details(self, recipe_id: int | str) -> Recipe | None:
        """Fetch one recipe, or None when the server does not know it."""
        response = await self.http_client.get(
            self._url(f"/api/recipes/{recipe_id}"), timeout=self.timeout_seconds
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        response.raise_for_status()
        return Recipe.model_validate(response.json())

    async def search_recipes(
        self, query: str, diet: str | None = None, meal_type: str | None = None
    ) -> list[Recipe]:
        """Search recipes by free text."""
        params = {"query": query}
        if diet:
            params["diet"] = diet
        if meal_type:
            params["type"] = meal_type
        payload = await self._get("/api/recipes/search", params=params)
        return [Recipe.model_validate(item) for item in payload.get("results", [])]

    async def check_health(self) -> dict[str, object]:
        """Fetch the service health payload."""
        return await self._get("/health")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
