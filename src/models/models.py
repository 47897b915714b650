"""Data models and schemas for the recipe finder.

Defines Pydantic models for decoding Spoonacular responses and the filter
criteria applied to them. All upstream JSON passes through these models, so a
payload that does not fit the schema is rejected instead of passed along.
All models use Pydantic v2 with camelCase aliases matching the Spoonacular API.
"""

from enum import Enum
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field


INGREDIENT_IMAGE_BASE_URL = "https://spoonacular.com/cdn/ingredients_100x100/"

DIETARY_RESTRICTIONS = (
    "Vegetarian",
    "Vegan",
    "Gluten Free",
    "Ketogenic",
    "Paleo",
    "Pescetarian",
)

MEAL_TYPES = (
    "Breakfast",
    "Lunch",
    "Dinner",
    "Appetizer",
    "Salad",
    "Dessert",
    "Snack",
)


class SearchStatus(str, Enum):
    """Lifecycle of the recipe search pipeline as seen by the presentation layer."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    EMPTY = "empty"
    ERROR = "error"


class IngredientSuggestion(BaseModel):
    """One autocomplete suggestion from /food/ingredients/autocomplete."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Annotated[str, Field(min_length=1, description="Ingredient display name")]
    image: Annotated[Optional[str], Field(None, description="Image file name on the Spoonacular CDN")]

    @property
    def image_url(self) -> Optional[str]:
        """Full CDN URL for the suggestion thumbnail, or None if no image."""
        if not self.image:
            return None
        return f"{INGREDIENT_IMAGE_BASE_URL}{self.image}"


class MissedIngredient(BaseModel):
    """Ingredient a recipe needs that is not in the user's set."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    id: Optional[int] = None
    amount: Optional[float] = None
    unit: Optional[str] = None
    image: Optional[str] = None


class RecipeCandidate(BaseModel):
    """Search-stage result from /recipes/findByIngredients, before enrichment.

    Ordering of candidates is the upstream relevance order and is never
    re-ranked locally.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Annotated[int, Field(description="Recipe ID from Spoonacular API")]
    title: Annotated[str, Field(min_length=1, description="Recipe title")]
    image: Annotated[Optional[str], Field(None, description="URL to recipe image")]
    used_ingredient_count: Annotated[
        int, Field(0, ge=0, alias="usedIngredientCount", description="Ingredients used from the set")
    ]
    missed_ingredient_count: Annotated[
        int, Field(0, ge=0, alias="missedIngredientCount", description="Ingredients the recipe needs beyond the set")
    ]
    missed_ingredients: Annotated[
        List[MissedIngredient], Field(default_factory=list, alias="missedIngredients")
    ]

    @property
    def missed_ingredient_names(self) -> List[str]:
        return [ingredient.name for ingredient in self.missed_ingredients]


class RecipeDietInfo(BaseModel):
    """Dietary metadata taken from /recipes/{id}/information.

    Flags missing from the payload decode as False, except ketogenic,
    which stays None so filtering can tell "not keto" from "not reported".
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    vegetarian: bool = False
    vegan: bool = False
    gluten_free: Annotated[bool, Field(False, alias="glutenFree")]
    dairy_free: Annotated[bool, Field(False, alias="dairyFree")]
    ketogenic: Annotated[Optional[bool], Field(None, description="Rarely sent upstream; None when absent")]
    dish_types: Annotated[List[str], Field(default_factory=list, alias="dishTypes")]
    diets: Annotated[List[str], Field(default_factory=list)]


class RecipeDetail(RecipeCandidate):
    """A candidate enriched with dietary flags and dish-type tags.

    Identity (id, title, counts) always comes from the search stage.
    """

    vegetarian: bool = False
    vegan: bool = False
    gluten_free: Annotated[bool, Field(False, alias="glutenFree")]
    dairy_free: Annotated[bool, Field(False, alias="dairyFree")]
    ketogenic: Annotated[Optional[bool], Field(None, description="Rarely sent upstream; None when absent")]
    dish_types: Annotated[List[str], Field(default_factory=list, alias="dishTypes")]
    diets: Annotated[List[str], Field(default_factory=list)]

    @classmethod
    def from_candidate(cls, candidate: RecipeCandidate, diet_info: RecipeDietInfo) -> "RecipeDetail":
        """Merge a search candidate with its enrichment payload."""
        merged = candidate.model_dump()
        merged.update(diet_info.model_dump(exclude={"id"}))
        return cls(**merged)


class ExtendedIngredient(BaseModel):
    """Ingredient line of the standalone recipe view."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    amount: Optional[float] = None
    unit: str = ""
    original: Optional[str] = None


class RecipeInformation(BaseModel):
    """Full recipe for the standalone detail view, keyed by recipe id."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: Annotated[str, Field(min_length=1)]
    image: Optional[str] = None
    instructions: Annotated[Optional[str], Field(None, description="Free-text (often HTML) instructions")]
    extended_ingredients: Annotated[
        List[ExtendedIngredient], Field(default_factory=list, alias="extendedIngredients")
    ]
    ready_in_minutes: Annotated[Optional[int], Field(None, ge=0, alias="readyInMinutes")]
    servings: Annotated[Optional[int], Field(None, ge=0)]
    source_url: Annotated[Optional[str], Field(None, alias="sourceUrl")]


class FilterCriteria(BaseModel):
    """User-selected filters applied to the enriched recipe list.

    dietary_restrictions combine with AND, meal_types with OR. Both empty
    means no filtering.
    """

    model_config = ConfigDict(frozen=True)

    dietary_restrictions: Annotated[frozenset[str], Field(default_factory=frozenset)]
    meal_types: Annotated[frozenset[str], Field(default_factory=frozenset)]

    @property
    def is_empty(self) -> bool:
        return not self.dietary_restrictions and not self.meal_types

    def toggle_restriction(self, restriction: str) -> "FilterCriteria":
        """Return criteria with the restriction added, or removed if already selected."""
        return self.model_copy(
            update={"dietary_restrictions": _toggled(self.dietary_restrictions, restriction)}
        )

    def toggle_meal_type(self, meal_type: str) -> "FilterCriteria":
        """Return criteria with the meal type added, or removed if already selected."""
        return self.model_copy(update={"meal_types": _toggled(self.meal_types, meal_type)})


def _toggled(tags: frozenset[str], tag: str) -> frozenset[str]:
    if tag in tags:
        return tags - {tag}
    return tags | {tag}
