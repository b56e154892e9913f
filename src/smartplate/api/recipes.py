"""Recipe API endpoints."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status
from pydantic import ValidationError

from smartplate.domain.recipes import Recipe, SuggestionRequest

if TYPE_CHECKING:
    from smartplate.containers import AppContainer

router = APIRouter(prefix="/api/recipes", tags=["recipes"])

_logger = logging.getLogger(__name__)

_INVALID_INGREDIENTS = "dealIngredients is required and must be an array"


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.post("/suggestions")
async def recipe_suggestions(request: Request) -> list[Recipe]:
    """Suggest recipes for deal ingredients and pantry items."""
    try:
        body = await request.json()
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Request body must be valid JSON",
        ) from exc
    if not isinstance(body, dict) or not isinstance(body.get("dealIngredients"), list):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=_INVALID_INGREDIENTS
        )
    try:
        suggestion = SuggestionRequest.model_validate(body)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid suggestion request: {exc.error_count()} error(s)",
        ) from exc

    ingredients = suggestion.all_ingredients()
    _logger.info(
        "Recipe suggestions requested: ingredients=%s dietary=%s",
        len(ingredients),
        suggestion.preferences.dietary,
    )
    recipes = await _container(request).recipe_service.find_recipes_by_ingredients(
        ingredients, suggestion.preferences
    )
    _logger.info("Found %s recipes", len(recipes))
    return recipes


@router.get("/search")
async def search_recipes(
    request: Request,
    query: str | None = None,
    diet: str | None = None,
    type: str | None = None,  # noqa: A002
) -> dict[str, object]:
    """Search recipes by free text."""
    results = await _container(request).recipe_service.search_recipes(
        query, diet=diet, meal_type=type
    )
    return {
        "results": [recipe.model_dump(by_alias=True) for recipe in results],
        "query": query,
        "total": len(results),
    }


@router.get("/health")
async def recipes_health(request: Request) -> dict[str, object]:
    """Report whether the recipe API is configured."""
    configured = _container(request).recipe_service.has_credentials
    return {
        "status": "OK",
        "service": "recipes",
        "timestamp": datetime.now(tz=UTC).isoformat(),
        "apiKeys": {"spoonacular": "configured" if configured else "missing"},
        "features": {
            "mockData": "available",
            "realAPI": "available" if configured else "disabled",
        },
    }


@router.get("/{recipe_id}")
async def recipe_detail(recipe_id: str, request: Request) -> Recipe:
    """Return a single recipe."""
    recipe = await _container(request).recipe_service.get_recipe_details(recipe_id)
    if recipe is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found"
        )
    return recipe
