"""Recipe suggestions backed by Spoonacular with a fixed fallback list."""

import html
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from smartplate.adapters.spoonacular_client import RecipeApiClient
from smartplate.domain.recipes import Nutrition, Recipe, RecipePreferences
from smartplate.services.fallback_data import fallback_recipes

MAX_QUERY_INGREDIENTS = 5
MEAT_KEYWORDS = ("chicken", "beef", "salmon", "fish", "meat")

_DIET_PARAMS = {
    "vegetarian": ("diet", "vegetarian"),
    "vegan": ("diet", "vegan"),
    "gluten-free": ("intolerances", "gluten"),
    "dairy-free": ("intolerances", "dairy"),
}
_MEAT_FREE_DIETS = ("vegetarian", "vegan")
_NUTRIENT_NAMES = {
    "Calories": "calories",
    "Protein": "protein",
    "Carbohydrates": "carbs",
    "Fat": "fat",
}
_NON_LETTERS = re.compile(r"[^a-z\s]")
_WHITESPACE = re.compile(r"\s+")
_TAGS = re.compile(r"<[^>]+>")

_logger = logging.getLogger(__name__)


def clean_ingredient_tokens(
    ingredients: Iterable[str], limit: int = MAX_QUERY_INGREDIENTS
) -> list[str]:
    """Lowercase, strip non-letters, and drop short or duplicate ingredients."""
    tokens: list[str] = []
    for ingredient in ingredients:
        cleaned = _NON_LETTERS.sub("", str(ingredient).lower())
        cleaned = _WHITESPACE.sub(" ", cleaned).strip()
        if len(cleaned) <= 2 or cleaned in tokens:  # noqa: PLR2004
            continue
        tokens.append(cleaned)
        if len(tokens) == limit:
            break
    return tokens


def dietary_params(preferences: RecipePreferences) -> dict[str, str]:
    """Map dietary preferences onto Spoonacular diet and intolerance params."""
    grouped: dict[str, list[str]] = {}
    for diet in preferences.dietary:
        mapped = _DIET_PARAMS.get(diet.lower())
        if mapped is None:
            continue
        name, value = mapped
        values = grouped.setdefault(name, [])
        if value not in values:
            values.append(value)
    return {name: ",".join(values) for name, values in grouped.items()}


def contains_meat(recipe: Recipe) -> bool:
    """Whether any ingredient mentions a meat or fish keyword."""
    return any(
        keyword in ingredient.lower()
        for ingredient in recipe.ingredients
        for keyword in MEAT_KEYWORDS
    )


def filter_dietary(
    recipes: list[Recipe], preferences: RecipePreferences
) -> list[Recipe]:
    """Drop recipes that conflict with the requested diets."""
    if any(preferences.wants(diet) for diet in _MEAT_FREE_DIETS):
        return [recipe for recipe in recipes if not contains_meat(recipe)]
    return recipes


def match_deal_ingredients(
    recipe_ingredients: Iterable[str], supplied: Iterable[str]
) -> list[str]:
    """Supplied ingredients that overlap a recipe ingredient by substring."""
    lowered = [ingredient.lower() for ingredient in recipe_ingredients if ingredient]
    matches: list[str] = []
    for candidate in supplied:
        needle = candidate.strip().lower()
        if not needle or candidate in matches:
            continue
        if any(needle in have or have in needle for have in lowered):
            matches.append(candidate)
    return matches


@dataclass
class RecipeService:
    """Finds recipes for deal ingredients, degrading to fallback recipes."""

    client: RecipeApiClient | None = None
    result_limit: int = 6

    @property
    def has_credentials(self) -> bool:
        """Whether a live recipe API is configured."""
        return self.client is not None

    def fallback_recipes(self, preferences: RecipePreferences | None) -> list[Recipe]:
        """Fallback recipes filtered by dietary preferences."""
        return filter_dietary(fallback_recipes(), preferences or RecipePreferences())

    async def find_recipes_by_ingredients(
        self,
        ingredients: list[str] | None,
        preferences: RecipePreferences | None = None,
    ) -> list[Recipe]:
        """Suggest recipes that use the supplied ingredients."""
        resolved = preferences or RecipePreferences()
        if not ingredients or self.client is None:
            return self.fallback_recipes(resolved)

        tokens = clean_ingredient_tokens(ingredients)
        if not tokens:
            return self.fallback_recipes(resolved)
        params: dict[str, object] = {
            "includeIngredients": ",".join(tokens),
            "number": self.result_limit,
            "sort": "max-used-ingredients",
            "addRecipeInformation": "true",
            "addRecipeNutrition": "true",
            "fillIngredients": "true",
            **dietary_params(resolved),
        }
        try:
            payload = await self.client.complex_search(params)
            results = payload.get("results") or []
            recipes = [
                _map_recipe(item, ingredients)
                for item in results
                if isinstance(item, Mapping)
            ]
        except Exception as exc:
            _logger.warning("Recipe search failed, serving fallback recipes: %s", exc)
            return self.fallback_recipes(resolved)

        recipes = filter_dietary(recipes, resolved)
        if not recipes:
            _logger.info("Recipe API returned no matches, serving fallback recipes")
            return self.fallback_recipes(resolved)
        return recipes

    async def get_recipe_details(self, recipe_id: int | str) -> Recipe | None:
        """Look up a single recipe, or None when it is unknown."""
        key = str(recipe_id).strip()
        if self.client is not None and key.isdigit():
            try:
                payload = await self.client.get_information(int(key))
                return _map_recipe(payload, [])
            except Exception as exc:
                _logger.warning("Recipe lookup failed for id=%s: %s", key, exc)
        for recipe in fallback_recipes():
            if str(recipe.id) == key:
                return recipe
        return None

    async def search_recipes(
        self,
        query: str | None,
        diet: str | None = None,
        meal_type: str | None = None,
    ) -> list[Recipe]:
        """Free-text recipe search."""
        preferences = RecipePreferences(dietary=[diet] if diet else [])
        if self.client is not None and query:
            params: dict[str, object] = {
                "query": query,
                "number": self.result_limit,
                "addRecipeInformation": "true",
                "addRecipeNutrition": "true",
            }
            if diet:
                params["diet"] = diet
            if meal_type:
                params["type"] = meal_type
            try:
                payload = await self.client.complex_search(params)
                return [
                    _map_recipe(item, [])
                    for item in payload.get("results") or []
                    if isinstance(item, Mapping)
                ]
            except Exception as exc:
                _logger.warning("Recipe search failed for query=%s: %s", query, exc)

        recipes = self.fallback_recipes(preferences)
        if not query:
            return recipes
        needle = query.lower()
        return [
            recipe
            for recipe in recipes
            if needle in recipe.title.lower()
            or any(needle in item.lower() for item in recipe.ingredients)
        ]


def _map_recipe(item: Mapping[str, object], supplied: list[str]) -> Recipe:
    """Map a Spoonacular recipe payload into a recipe."""
    ingredients = _ingredient_names(item)
    score = item.get("spoonacularScore")
    rating = round(min(max(float(score) / 20, 0.0), 5.0), 1) if score else 0.0
    return Recipe(
        id=item["id"],
        title=str(item.get("title") or "Untitled recipe"),
        image=item.get("image"),
        cook_time=int(item.get("readyInMinutes") or 0),
        servings=int(item.get("servings") or 1),
        rating=rating,
        ingredients=ingredients,
        deal_ingredients=match_deal_ingredients(ingredients, supplied),
        description=_summary(item.get("summary")),
        instructions=_instructions(item),
        nutrition=_nutrition(item.get("nutrition")),
        source_url=item.get("sourceUrl"),
    )


def _ingredient_names(item: Mapping[str, object]) -> list[str]:
    names: list[str] = []
    groups = ("extendedIngredients", "usedIngredients", "missedIngredients")
    for group in groups:
        for ingredient in item.get(group) or []:
            if not isinstance(ingredient, Mapping):
                continue
            name = ingredient.get("name") or ingredient.get("original")
            if name and name not in names:
                names.append(str(name))
        if names and group == "extendedIngredients":
            break
    return names


def _strip_html(text: str) -> str:
    return _WHITESPACE.sub(" ", html.unescape(_TAGS.sub("", text))).strip()


def _summary(raw: object, limit: int = 200) -> str:
    if not raw:
        return ""
    text = _strip_html(str(raw))
    if len(text) <= limit:
        return text
    return text[:limit].rsplit(" ", 1)[0] + "..."


def _instructions(item: Mapping[str, object]) -> str:
    steps: list[str] = []
    for block in item.get("analyzedInstructions") or []:
        if isinstance(block, Mapping):
            steps.extend(
                str(step.get("step", "")).strip()
                for step in block.get("steps") or []
                if isinstance(step, Mapping) and step.get("step")
            )
    if steps:
        return " ".join(f"{index}. {step}" for index, step in enumerate(steps, 1))
    raw = item.get("instructions")
    return _strip_html(str(raw)) if raw else ""


def _nutrition(raw: object) -> Nutrition:
    values: dict[str, float] = {}
    nutrients = raw.get("nutrients") if isinstance(raw, Mapping) else None
    for nutrient in nutrients or []:
        if not isinstance(nutrient, Mapping):
            continue
        key = _NUTRIENT_NAMES.get(str(nutrient.get("name")))
        amount = nutrient.get("amount")
        if key and amount is not None:
            values[key] = round(float(amount))
    return Nutrition(**values)
