"""Debounced ingredient autocomplete.

Keystrokes go through IngredientAutocomplete.update_query(). Each call:
1. Bumps the request generation
2. Cancels the previously scheduled lookup if it is still waiting out the
   debounce window (lookups already on the network are left to finish)
3. Clears suggestions for short queries, or schedules a lookup after the
   debounce delay

A lookup result is applied only if its generation is still the latest, so a
slow response for an old query can never overwrite newer suggestions.
Failures are logged and produce an empty suggestion list.
"""

import asyncio
from typing import Callable, List, Optional

from src.models.models import IngredientSuggestion
from src.spoonacular.client import SpoonacularClient
from src.spoonacular.errors import SpoonacularError
from src.utils.logger import logger
from src.utils.safe_execute import safe_execute_async


SuggestionListener = Callable[[List[IngredientSuggestion]], None]


class IngredientAutocomplete:
    """Suggestion state for the ingredient input box."""

    def __init__(
        self,
        client: SpoonacularClient,
        limit: int = 5,
        min_chars: int = 2,
        debounce_seconds: float = 0.3,
        on_suggestions: Optional[SuggestionListener] = None,
    ) -> None:
        self.client = client
        self.limit = limit
        self.min_chars = min_chars
        self.debounce_seconds = debounce_seconds
        self.on_suggestions = on_suggestions

        self.query = ""
        self.suggestions: List[IngredientSuggestion] = []
        self._generation = 0
        self._pending: Optional[asyncio.Task] = None

    @property
    def generation(self) -> int:
        return self._generation

    async def suggest(self, query: str) -> List[IngredientSuggestion]:
        """Look up suggestions for a query, without debouncing.

        Returns an empty list without touching the network when the query is
        shorter than min_chars, and an empty list when the lookup fails.
        """
        query = query.strip()
        if len(query) < self.min_chars:
            return []

        suggestions = await safe_execute_async(
            self.client.autocomplete_ingredients(query, number=self.limit),
            f"Autocomplete lookup failed for {query!r}",
            default_return=[],
            exceptions=(SpoonacularError,),
        )
        return suggestions[: self.limit]

    def update_query(self, query: str) -> Optional[asyncio.Task]:
        """Record a keystroke and schedule a debounced lookup.

        Must be called from a running event loop.

        Returns:
            The scheduled lookup task (resolves to the applied suggestions, or
            None if the result was stale), or None for short queries.
        """
        self.query = query
        self._generation += 1
        generation = self._generation
        self._cancel_pending()

        if len(query.strip()) < self.min_chars:
            self._apply([])
            return None

        self._pending = asyncio.create_task(self._debounced_lookup(query, generation))
        return self._pending

    def cancel(self) -> None:
        """Drop any scheduled lookup, invalidate in-flight ones and clear suggestions."""
        self.query = ""
        self._generation += 1
        self._cancel_pending()
        self._apply([])

    async def _debounced_lookup(self, query: str, generation: int) -> Optional[List[IngredientSuggestion]]:
        await asyncio.sleep(self.debounce_seconds)

        # Past the quiet window: this lookup can no longer be cancelled
        if self._pending is asyncio.current_task():
            self._pending = None

        suggestions = await self.suggest(query)

        if generation != self._generation:
            logger.debug(
                f"Discarding stale suggestions for {query!r} (latest generation {self._generation})",
                extra={"generation": generation, "query": query},
            )
            return None

        self._apply(suggestions)
        return suggestions

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    def _apply(self, suggestions: List[IngredientSuggestion]) -> None:
        self.suggestions = list(suggestions)
        if self.on_suggestions is not None:
            self.on_suggestions(self.suggestions)
