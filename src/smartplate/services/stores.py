"""Store adapters normalizing supermarket specials into deals."""

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from smartplate.adapters.price_api_client import PriceApiClient
from smartplate.domain.deals import Deal, StoreName
from smartplate.services.fallback_data import DEAL_VALIDITY, store_search_url

_logger = logging.getLogger(__name__)

_NON_PRICE_CHARS = re.compile(r"[^0-9.]")

CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "meat",
        ("chicken", "beef", "pork", "lamb", "mince", "sausage", "bacon", "steak"),
    ),
    ("seafood", ("salmon", "fish", "prawn", "tuna", "barramundi", "seafood")),
    ("dairy", ("milk", "cheese", "yogurt", "yoghurt", "cream", "eggs")),
    (
        "vegetables",
        (
            "spinach",
            "carrot",
            "potato",
            "broccoli",
            "lettuce",
            "tomato",
            "onion",
            "avocado",
        ),
    ),
    ("fruit", ("apple", "banana", "berr", "orange", "mango", "grape", "pear")),
    (
        "pantry",
        ("rice", "pasta", "oil", "flour", "sugar", "sauce", "noodle", "peanut butter"),
    ),
)

_PRODUCT_LIST_KEYS = ("results", "products", "data", "items")


class StoreAdapter(Protocol):
    """A source of deals for one store."""

    store: StoreName

    @property
    def has_credentials(self) -> bool:
        """Whether a live API is configured for the store."""

    async def fetch_deals(self) -> list[Deal]:
        """Return the store's current deals, never raising."""


def coerce_price(raw: object) -> float:
    """Convert a price given as a string or number into a non-negative float."""
    if raw is None or isinstance(raw, bool):
        return 0.0
    cleaned = _NON_PRICE_CHARS.sub("", str(raw))
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def infer_category(product_name: str) -> str:
    """Infer a deal category from keywords in the product name."""
    lowered = product_name.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return "other"


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class PriceApiStoreAdapter(StoreAdapter):
    """Adapter backed by an optional price API with a fixed fallback list."""

    store: StoreName
    client: PriceApiClient | None
    fallback: Callable[[datetime | None], list[Deal]]
    query: str = "special"
    clock: Callable[[], datetime] = field(default=_utcnow)

    @property
    def has_credentials(self) -> bool:
        """Whether a live API client is configured."""
        return self.client is not None

    @property
    def api_source(self) -> str:
        """Source tag attached to deals mapped from the live API."""
        return f"real-{self.store.value}-api"

    async def fetch_deals(self) -> list[Deal]:
        """Fetch live specials, falling back to the fixed list on any error."""
        now = self.clock()
        if self.client is None:
            return self.fallback(now)
        try:
            payload = await self.client.search_products(self.query)
            deals = self.map_products(payload, now)
        except Exception as exc:
            _logger.warning(
                "%s price API failed, serving fallback deals: %s",
                self.store.value,
                exc,
            )
            return self.fallback(now)
        if not deals:
            _logger.info(
                "%s price API returned no products, serving fallback deals",
                self.store.value,
            )
            return self.fallback(now)
        _logger.info("%s price API returned %s deals", self.store.value, len(deals))
        return deals

    def map_products(self, payload: object, now: datetime) -> list[Deal]:
        """Map a raw API payload into deals."""
        records = _extract_records(payload)
        return [
            self._to_deal(record, now)
            for record in records
            if isinstance(record, Mapping) and _record_name(record)
        ]

    def _to_deal(self, record: Mapping[str, object], now: datetime) -> Deal:
        name = _record_name(record)
        price = coerce_price(
            _first(record, "current_price", "price", "currentPrice", "salePrice")
        )
        original = coerce_price(
            _first(
                record,
                "original_price",
                "originalPrice",
                "was_price",
                "wasPrice",
            )
        )
        url = _first(record, "url", "product_url", "productUrl", "link")
        description = _first(record, "description", "brand", "product_brand")
        unit = _first(record, "unit", "size", "product_size", "package_size")
        return Deal(
            name=name,
            category=infer_category(name),
            price=price,
            original_price=original if original > price else None,
            store=self.store,
            description=str(description) if description else name,
            unit=str(unit) if unit else "each",
            valid_until=now + DEAL_VALIDITY,
            product_url=str(url) if url else store_search_url(self.store, name),
            api_source=self.api_source,
        )


def _extract_records(payload: object) -> list[object]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        for key in _PRODUCT_LIST_KEYS:
            value = payload.get(key)
            if isinstance(value, list):
                return value
    raise ValueError(f"Unexpected price API payload: {type(payload).__name__}")


def _record_name(record: Mapping[str, object]) -> str:
    name = _first(record, "product_name", "name", "title", "productName")
    return str(name).strip() if name else ""


def _first(record: Mapping[str, object], *keys: str) -> object | None:
    for key in keys:
        value = record.get(key)
        if value not in (None, ""):
            return value
    return None
