"""Recipe domain models."""

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Nutrition(_CamelModel):
    """Per-serving macronutrients."""

    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0


class Recipe(_CamelModel):
    """A recipe suggestion built from remote or fallback data."""

    id: int | str
    title: str
    image: str | None = None
    cook_time: int = 0
    servings: int = 1
    rating: float = Field(default=0, ge=0, le=5)
    ingredients: list[str] = Field(default_factory=list)
    deal_ingredients: list[str] = Field(default_factory=list)
    description: str = ""
    instructions: str = ""
    nutrition: Nutrition = Field(default_factory=Nutrition)
    source_url: str | None = None


class RecipePreferences(_CamelModel):
    """Dietary preferences a client sends along with a request."""

    dietary: list[str] = Field(default_factory=list)

    @field_validator("dietary", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return [] if value is None else value

    def wants(self, diet: str) -> bool:
        """Return True when the diet is requested, ignoring case."""
        return diet.lower() in {item.lower() for item in self.dietary}


class SuggestionRequest(_CamelModel):
    """Body of a recipe suggestion request."""

    deal_ingredients: list[str]
    preferences: RecipePreferences = Field(default_factory=RecipePreferences)
    pantry_items: list[str] = Field(default_factory=list)

    def all_ingredients(self) -> list[str]:
        """Deal ingredients followed by pantry items."""
        return [*self.deal_ingredients, *self.pantry_items]

    @field_validator("preferences", "pantry_items", mode="before")
    @classmethod
    def _none_as_default(cls, value: object, info: ValidationInfo) -> object:
        if value is not None:
            return value
        return {} if info.field_name == "preferences" else []
