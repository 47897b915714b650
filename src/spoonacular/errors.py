"""Exceptions raised by the Spoonacular HTTP client.

Call sites treat every subclass the same way ("fetch failed"); the split exists
so logs and tests can tell a dead network from a bad key from a bad payload.
"""

from typing import Optional


class SpoonacularError(Exception):
    """Base class for all Spoonacular fetch failures."""

    def __init__(self, message: str, endpoint: Optional[str] = None) -> None:
        super().__init__(message)
        self.endpoint = endpoint


class SpoonacularRequestError(SpoonacularError):
    """Transport failure: connection refused, DNS, timeout."""


class SpoonacularResponseError(SpoonacularError):
    """Upstream answered with a non-success HTTP status."""

    def __init__(self, message: str, status: int, endpoint: Optional[str] = None) -> None:
        super().__init__(message, endpoint=endpoint)
        self.status = status


class SpoonacularDecodeError(SpoonacularError):
    """Response body is not JSON or does not match the expected schema."""
