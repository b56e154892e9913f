"""Supermarket price API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class PriceApiClient(Protocol):
    """Interface for a third-party supermarket price API."""

    async def search_products(self, query: str) -> object:
        """Search products by query and return raw API data."""


@dataclass
class HttpxPriceApiClient(PriceApiClient):
    """HTTPX-backed client for RapidAPI-hosted price APIs."""

    api_key: str
    base_url: str
    host: str
    http_client: httpx.AsyncClient
    search_path: str = "/coles/product-search/"
    timeout_seconds: float = 10.0

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        api_key: str,
        base_url: str,
        host: str,
        *,
        search_path: str = "/coles/product-search/",
        timeout_seconds: float = 10.0,
    ) -> "HttpxPriceApiClient":
        """Create a price API client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            host=host,
            http_client=httpx.AsyncClient(),
            search_path=search_path,
            timeout_seconds=timeout_seconds,
        )

    async def search_products(self, query: str) -> object:
        """Search products by query."""
        url = f"{self.base_url.rstrip('/')}{self.search_path}"
        response = await self.http_client.get(
            url,
            params={"query": query},
            headers={
                "X-RapidAPI-Key": self.api_key,
                "X-RapidAPI-Host": self.host,
            },
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
