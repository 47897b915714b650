"""Recipe finder session: the state one browsing session renders.

RecipeFinder wires the ingredient set, autocomplete, recipe search and filter
criteria together and exposes what a presentation layer needs:
- suggestions for the ingredient input
- the selected ingredients
- loading flag and search status
- the filtered recipe list
- the standalone recipe view

Create one per session with RecipeFinder.create(), which owns the HTTP client:

    async with RecipeFinder.create() as finder:
        finder.add_ingredient("chicken")
        finder.add_ingredient("rice")
        await finder.search.wait()
        finder.toggle_restriction("Vegetarian")
        recipes = finder.displayed_recipes
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Tuple

from src.models.models import (
    FilterCriteria,
    IngredientSuggestion,
    RecipeDetail,
    RecipeInformation,
    SearchStatus,
)
from src.pantry.ingredient_set import IngredientSet
from src.search.autocomplete import IngredientAutocomplete
from src.search.filters import filter_recipes
from src.search.recipe_search import RecipeSearch, fetch_recipe_information
from src.spoonacular.client import SpoonacularClient
from src.utils.config import Config, config as default_config
from src.utils.logger import logger


class RecipeFinder:
    """One browsing session of the recipe finder."""

    def __init__(self, client: SpoonacularClient, settings: Optional[Config] = None) -> None:
        settings = settings or default_config
        self.client = client
        self.unbacked_policy = settings.UNBACKED_RESTRICTION_POLICY

        self.ingredients = IngredientSet()
        self.autocomplete = IngredientAutocomplete(
            client,
            limit=settings.AUTOCOMPLETE_LIMIT,
            min_chars=settings.AUTOCOMPLETE_MIN_CHARS,
            debounce_seconds=settings.autocomplete_debounce_seconds,
        )
        self.search = RecipeSearch(
            client,
            self.ingredients,
            max_results=settings.MAX_RECIPES,
            enrichment_policy=settings.ENRICHMENT_POLICY,
        )
        self.criteria = FilterCriteria()

    @classmethod
    @asynccontextmanager
    async def create(cls, settings: Optional[Config] = None) -> AsyncIterator["RecipeFinder"]:
        """Build a finder with its own Spoonacular client, closed on exit."""
        settings = settings or default_config
        async with SpoonacularClient(
            api_key=settings.SPOONACULAR_API_KEY,
            base_url=settings.SPOONACULAR_BASE_URL,
            timeout_seconds=settings.REQUEST_TIMEOUT_SECONDS,
        ) as client:
            finder = cls(client, settings)
            logger.info("Recipe finder session started")
            try:
                yield finder
            finally:
                finder.close()
                logger.info("Recipe finder session closed")

    def close(self) -> None:
        self.autocomplete.cancel()
        self.search.close()

    # Ingredient input

    @property
    def selected_ingredients(self) -> Tuple[str, ...]:
        return self.ingredients.items

    @property
    def suggestions(self) -> List[IngredientSuggestion]:
        return self.autocomplete.suggestions

    def type_ingredient(self, text: str) -> Optional[asyncio.Task]:
        """Feed the current input text to the debounced autocomplete."""
        return self.autocomplete.update_query(text)

    def add_ingredient(self, name: Optional[str] = None) -> bool:
        """Add an ingredient, defaulting to the text typed so far.

        On success the input and its suggestions are cleared, as when a
        suggestion is picked.

        Returns:
            True if the ingredient set changed.
        """
        added = self.ingredients.add(name if name is not None else self.autocomplete.query)
        if added:
            self.autocomplete.cancel()
        return added

    def add_suggestion(self, suggestion: IngredientSuggestion) -> bool:
        return self.add_ingredient(suggestion.name)

    def remove_ingredient(self, name: str) -> bool:
        return self.ingredients.remove(name)

    def clear_ingredients(self) -> bool:
        return self.ingredients.clear()

    # Filters

    def toggle_restriction(self, restriction: str) -> FilterCriteria:
        self.criteria = self.criteria.toggle_restriction(restriction)
        return self.criteria

    def toggle_meal_type(self, meal_type: str) -> FilterCriteria:
        self.criteria = self.criteria.toggle_meal_type(meal_type)
        return self.criteria

    # Results

    @property
    def is_loading(self) -> bool:
        return self.search.is_loading

    @property
    def status(self) -> SearchStatus:
        return self.search.status

    @property
    def displayed_recipes(self) -> List[RecipeDetail]:
        """Current recipes after filtering; recomputed on every read."""
        return filter_recipes(self.search.recipes, self.criteria, self.unbacked_policy)

    async def recipe_information(self, recipe_id: int) -> Optional[RecipeInformation]:
        return await fetch_recipe_information(self.client, recipe_id)
