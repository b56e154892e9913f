"""Deal domain models."""

import math
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class StoreName(StrEnum):
    """Supermarkets that deals can come from."""

    COLES = "coles"
    WOOLWORTHS = "woolworths"


def discount_percentage(price: float, original_price: float | None) -> int | None:
    """Return the whole-number discount, rounding halves up."""
    if original_price is None or original_price <= 0:
        return None
    raw = (original_price - price) / original_price * 100
    return math.floor(raw + 0.5)


class Deal(BaseModel):
    """A discounted product listing scoped to one store."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    name: str
    category: str
    price: float = Field(ge=0)
    original_price: float | None = None
    store: StoreName
    description: str = ""
    unit: str = "each"
    valid_until: datetime
    product_url: str | None = None
    discount_percentage: int | None = None
    api_source: str = "mock"

    @model_validator(mode="after")
    def _derive_discount(self) -> "Deal":
        derived = discount_percentage(self.price, self.original_price)
        if derived is not None and derived != self.discount_percentage:
            object.__setattr__(self, "discount_percentage", derived)
        return self
