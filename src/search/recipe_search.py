"""Ingredient-driven recipe search with dietary enrichment.

RecipeSearch re-runs a two-stage pipeline every time the ingredient set
changes:

1. SEARCH: one /recipes/findByIngredients request for up to MAX_RECIPES
   candidates, in the upstream relevance order.
2. ENRICH: one /recipes/{id}/information request per candidate, all issued
   concurrently and awaited together (asyncio.gather). Results are matched
   back to candidates by id, so the stage-1 order survives whatever order
   the responses arrive in.

Enrichment failure policy (ENRICHMENT_POLICY):
- "all-or-nothing": any failed detail request fails the whole page
- "best-effort": failed detail requests are logged and their recipes dropped

Every run is stamped with a generation; only the latest run may publish
recipes, status or clear the loading flag. A failed run keeps the previous
recipes on screen and sets status to ERROR.
"""

import asyncio
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from src.models.models import (
    RecipeCandidate,
    RecipeDetail,
    RecipeDietInfo,
    RecipeInformation,
    SearchStatus,
)
from src.pantry.ingredient_set import IngredientSet
from src.spoonacular.client import SpoonacularClient
from src.spoonacular.errors import SpoonacularError
from src.utils.logger import logger
from src.utils.safe_execute import log_error, safe_execute_async


ALL_OR_NOTHING = "all-or-nothing"
BEST_EFFORT = "best-effort"

SearchListener = Callable[["RecipeSearch"], None]


class RecipeSearch:
    """Recipe list driven by an IngredientSet.

    Attributes:
        recipes: Enriched recipes from the latest successful run.
        status: Current SearchStatus.
        is_loading: True while the latest run is in flight.
        error: Message of the latest failure, None otherwise.
    """

    def __init__(
        self,
        client: SpoonacularClient,
        ingredients: IngredientSet,
        max_results: int = 20,
        enrichment_policy: str = ALL_OR_NOTHING,
        on_change: Optional[SearchListener] = None,
    ) -> None:
        if enrichment_policy not in (ALL_OR_NOTHING, BEST_EFFORT):
            raise ValueError(f"Unknown enrichment policy: {enrichment_policy}")

        self.client = client
        self.ingredients = ingredients
        self.max_results = max_results
        self.enrichment_policy = enrichment_policy
        self.on_change = on_change

        self.recipes: List[RecipeDetail] = []
        self.status = SearchStatus.IDLE
        self.is_loading = False
        self.error: Optional[str] = None

        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self._unsubscribe = ingredients.subscribe(self._on_ingredients_changed)

    @property
    def generation(self) -> int:
        return self._generation

    def close(self) -> None:
        """Stop following the ingredient set."""
        self._unsubscribe()

    async def wait(self) -> None:
        """Wait for the most recently scheduled refresh to finish."""
        if self._task is not None:
            await self._task

    def _on_ingredients_changed(self, snapshot: Tuple[str, ...]) -> None:
        # Requires a running event loop; IngredientSet notifies synchronously
        self._task = asyncio.create_task(self.refresh(snapshot))

    async def refresh(self, ingredients: Optional[Sequence[str]] = None) -> List[RecipeDetail]:
        """Run the search pipeline for the given (or current) ingredients.

        An empty ingredient list makes no request and clears the recipes.

        Returns:
            The recipe list after this run. A superseded run returns the
            list as published by the newer run.
        """
        names = tuple(ingredients) if ingredients is not None else self.ingredients.items
        self._generation += 1
        generation = self._generation

        if not names:
            self.recipes = []
            self.error = None
            self.status = SearchStatus.IDLE
            self.is_loading = False
            self._notify()
            return self.recipes

        self.is_loading = True
        self.status = SearchStatus.LOADING
        self._notify()
        logger.info(f"Searching recipes for {len(names)} ingredient(s): {', '.join(names)}")

        try:
            details = await self._run_pipeline(names)
        except SpoonacularError as e:
            log_error("Recipe search failed", e, extra={"generation": generation})
            if generation == self._generation:
                self.status = SearchStatus.ERROR
                self.error = str(e)
        else:
            if generation == self._generation:
                self.recipes = details
                self.error = None
                self.status = SearchStatus.READY if details else SearchStatus.EMPTY
                logger.info(f"Recipe search complete: {len(details)} recipe(s)")
            else:
                logger.debug(
                    f"Discarding stale search results (latest generation {self._generation})",
                    extra={"generation": generation},
                )
        finally:
            if generation == self._generation:
                self.is_loading = False
                self._notify()

        return self.recipes

    async def _run_pipeline(self, names: Sequence[str]) -> List[RecipeDetail]:
        candidates = await self.client.find_by_ingredients(names, number=self.max_results)
        logger.debug(f"Search stage returned {len(candidates)} candidate(s)")
        if not candidates:
            return []
        return await self._enrich(candidates)

    async def _enrich(self, candidates: Sequence[RecipeCandidate]) -> List[RecipeDetail]:
        results = await asyncio.gather(
            *(self.client.get_recipe_diet_info(candidate.id) for candidate in candidates),
            return_exceptions=True,
        )

        diet_by_id: Dict[int, RecipeDietInfo] = {}
        failures: List[Tuple[int, SpoonacularError]] = []
        for candidate, result in zip(candidates, results):
            if isinstance(result, SpoonacularError):
                failures.append((candidate.id, result))
            elif isinstance(result, BaseException):
                raise result
            else:
                diet_by_id[candidate.id] = result

        if failures:
            if self.enrichment_policy == ALL_OR_NOTHING:
                raise failures[0][1]
            for recipe_id, failure in failures:
                log_error("Dropping recipe after failed enrichment", failure, extra={"recipe_id": recipe_id})

        return [
            RecipeDetail.from_candidate(candidate, diet_by_id[candidate.id])
            for candidate in candidates
            if candidate.id in diet_by_id
        ]

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)


async def fetch_recipe_information(client: SpoonacularClient, recipe_id: int) -> Optional[RecipeInformation]:
    """Fetch the standalone recipe view.

    Returns:
        RecipeInformation, or None if the lookup failed (logged).
    """
    return await safe_execute_async(
        client.get_recipe_information(recipe_id),
        f"Recipe information lookup failed for {recipe_id}",
        default_return=None,
        exceptions=(SpoonacularError,),
    )
