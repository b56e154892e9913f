"""Tests for deal and recipe models."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from smartplate.domain.deals import Deal, StoreName, discount_percentage
from smartplate.domain.recipes import RecipePreferences, SuggestionRequest

VALID_UNTIL = datetime(2026, 10, 26, tzinfo=UTC)


def _deal(**overrides: object) -> Deal:
    data: dict[str, object] = {
        "name": "Baby Spinach",
        "category": "Vegetables",
        "price": 2.5,
        "original_price": 3.99,
        "store": "coles",
        "valid_until": VALID_UNTIL,
    }
    data.update(overrides)
    return Deal(**data)


def test_discount_is_derived_from_prices() -> None:
    deal = _deal()

    assert deal.discount_percentage == 37
    assert deal.store is StoreName.COLES


def test_discount_rounds_half_up() -> None:
    assert discount_percentage(3.0, 8.0) == 63
    assert _deal(price=3.0, original_price=8.0).discount_percentage == 63


def test_supplied_discount_is_replaced_when_prices_disagree() -> None:
    deal = _deal(discount_percentage=99)

    assert deal.discount_percentage == 37


def test_discount_kept_without_original_price() -> None:
    assert _deal(original_price=None).discount_percentage is None
    assert _deal(original_price=None, discount_percentage=10).discount_percentage == 10
    assert _deal(original_price=0).discount_percentage is None


def test_negative_price_rejected() -> None:
    with pytest.raises(ValidationError):
        _deal(price=-1)


def test_unknown_store_rejected() -> None:
    with pytest.raises(ValidationError):
        _deal(store="aldi")


def test_deal_serializes_with_camel_case_keys() -> None:
    payload = _deal(product_url="https://example.test/spinach").model_dump(
        by_alias=True, mode="json"
    )

    assert payload["originalPrice"] == 3.99
    assert payload["discountPercentage"] == 37
    assert payload["productUrl"] == "https://example.test/spinach"
    assert payload["store"] == "coles"
    assert "validUntil" in payload


def test_deal_parses_camel_case_payload() -> None:
    deal = Deal.model_validate(
        {
            "name": "Salmon",
            "category": "Seafood",
            "price": 12.99,
            "originalPrice": 18.99,
            "store": "woolworths",
            "validUntil": "2026-10-26T00:00:00+00:00",
            "apiSource": "real-woolworths-api",
        }
    )

    assert deal.discount_percentage == 32
    assert deal.api_source == "real-woolworths-api"


def test_discount_derived_from_string_prices() -> None:
    deal = Deal.model_validate(
        {
            "name": "Baby Spinach",
            "category": "Vegetables",
            "price": "2.50",
            "originalPrice": "5",
            "store": "coles",
            "validUntil": "2026-10-26T00:00:00+00:00",
            "discountPercentage": 10,
        }
    )

    assert deal.price == 2.5
    assert deal.original_price == 5.0
    assert deal.discount_percentage == 50


def test_preferences_match_ignoring_case() -> None:
    preferences = RecipePreferences(dietary=["Vegetarian"])

    assert preferences.wants("vegetarian")
    assert not preferences.wants("vegan")


def test_suggestion_request_treats_null_fields_as_empty() -> None:
    request = SuggestionRequest.model_validate(
        {"dealIngredients": ["Pasta"], "preferences": None, "pantryItems": None}
    )

    assert request.preferences.dietary == []
    assert request.all_ingredients() == ["Pasta"]


def test_null_dietary_means_no_filter() -> None:
    request = SuggestionRequest.model_validate(
        {"dealIngredients": ["Pasta"], "preferences": {"dietary": None}}
    )

    assert request.preferences.dietary == []
    assert not request.preferences.wants("vegetarian")


def test_suggestion_request_appends_pantry_items() -> None:
    request = SuggestionRequest.model_validate(
        {"dealIngredients": ["Pasta"], "pantryItems": ["Garlic"]}
    )

    assert request.all_ingredients() == ["Pasta", "Garlic"]
