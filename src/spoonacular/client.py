"""Async HTTP client for the Spoonacular recipe API.

This module provides the SpoonacularClient class, the only code in the project
that talks HTTP. Every response is decoded through a Pydantic model; transport,
status and schema failures surface as SpoonacularError subclasses so callers
can collapse them into a single "fetch failed" outcome.

Endpoints used:
- GET /food/ingredients/autocomplete   (ingredient suggestions)
- GET /recipes/findByIngredients       (search stage)
- GET /recipes/{id}/information        (enrichment and standalone detail view)
"""

import asyncio
import json
from typing import Any, Optional, Sequence

import aiohttp
from pydantic import TypeAdapter, ValidationError

from src.models.models import (
    IngredientSuggestion,
    RecipeCandidate,
    RecipeDietInfo,
    RecipeInformation,
)
from src.spoonacular.errors import (
    SpoonacularDecodeError,
    SpoonacularRequestError,
    SpoonacularResponseError,
)
from src.utils.logger import logger


DEFAULT_BASE_URL = "https://api.spoonacular.com"

_SUGGESTIONS = TypeAdapter(list[IngredientSuggestion])
_CANDIDATES = TypeAdapter(list[RecipeCandidate])
_DIET_INFO = TypeAdapter(RecipeDietInfo)
_INFORMATION = TypeAdapter(RecipeInformation)


class SpoonacularClient:
    """Thin async wrapper over the Spoonacular REST API.

    Use as an async context manager, or call close() when done. A session
    passed in by the caller is borrowed and left open.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 10,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Spoonacular API key. Not validated; an empty key makes
                every request fail with a 401 response error.
            base_url: API root, overridable for tests and proxies.
            timeout_seconds: Total timeout per request.
            session: Optional shared aiohttp session.
        """
        if not api_key:
            logger.warning("SPOONACULAR_API_KEY is not set, recipe lookups will fail")

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "SpoonacularClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        # Created lazily so the session binds to the running event loop
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def _get_json(self, path: str, params: Optional[dict[str, str]] = None) -> Any:
        """GET a path and return the decoded JSON body.

        Raises:
            SpoonacularRequestError: Connection failure or timeout.
            SpoonacularResponseError: Non-2xx status.
            SpoonacularDecodeError: Body is not valid UTF-8 JSON.
        """
        url = f"{self.base_url}{path}"
        query = {**(params or {}), "apiKey": self.api_key}
        logger.debug(f"GET {path} params={params}")

        try:
            async with self._get_session().get(url, params=query, timeout=self.timeout) as response:
                if response.status >= 400:
                    raise SpoonacularResponseError(
                        f"{path} returned HTTP {response.status}",
                        status=response.status,
                        endpoint=path,
                    )
                body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise SpoonacularRequestError(f"{path} request failed: {e!r}", endpoint=path) from e

        try:
            return json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            raise SpoonacularDecodeError(f"{path} returned invalid JSON: {e}", endpoint=path) from e

    @staticmethod
    def _decode(adapter: Any, payload: Any, path: str) -> Any:
        try:
            return adapter.validate_python(payload)
        except ValidationError as e:
            raise SpoonacularDecodeError(
                f"{path} payload does not match schema: {e.error_count()} error(s)", endpoint=path
            ) from e

    async def autocomplete_ingredients(self, query: str, number: int = 5) -> list[IngredientSuggestion]:
        """Suggest ingredient names for partial input.

        Args:
            query: Partial ingredient text as typed.
            number: Maximum number of suggestions.

        Returns:
            Up to `number` suggestions in upstream order.
        """
        path = "/food/ingredients/autocomplete"
        payload = await self._get_json(path, {"query": query, "number": str(number)})
        return self._decode(_SUGGESTIONS, payload, path)[:number]

    async def find_by_ingredients(self, ingredients: Sequence[str], number: int = 20) -> list[RecipeCandidate]:
        """Find recipes that use the given ingredients.

        Ranking (descending used-ingredient count, upstream tie-breaks) is the
        service's own and is preserved as returned.

        Args:
            ingredients: Ingredient names, sent comma-joined.
            number: Maximum number of candidates.
        """
        path = "/recipes/findByIngredients"
        payload = await self._get_json(path, {"ingredients": ",".join(ingredients), "number": str(number)})
        return self._decode(_CANDIDATES, payload, path)

    async def get_recipe_diet_info(self, recipe_id: int) -> RecipeDietInfo:
        """Fetch dietary flags and dish types for one recipe (enrichment stage)."""
        path = f"/recipes/{recipe_id}/information"
        payload = await self._get_json(path)
        return self._decode(_DIET_INFO, payload, path)

    async def get_recipe_information(self, recipe_id: int) -> RecipeInformation:
        """Fetch the full recipe (ingredients and instructions) for the detail view."""
        path = f"/recipes/{recipe_id}/information"
        payload = await self._get_json(path)
        return self._decode(_INFORMATION, payload, path)
