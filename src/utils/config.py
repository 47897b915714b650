"""Configuration management for the Fridge-to-Table recipe finder.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


ENRICHMENT_POLICIES = ("all-or-nothing", "best-effort")
UNBACKED_RESTRICTION_POLICIES = ("permissive", "diets")


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Spoonacular API Key: not validated here, requests fail downstream without it
        self.SPOONACULAR_API_KEY: str = os.getenv("SPOONACULAR_API_KEY", "")
        self.SPOONACULAR_BASE_URL: str = os.getenv("SPOONACULAR_BASE_URL", "https://api.spoonacular.com").rstrip("/")
        # Total timeout per upstream request, in seconds. Default: 10
        self.REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))
        # Maximum number of candidates returned by find-by-ingredients. Default: 20
        self.MAX_RECIPES: int = int(os.getenv("MAX_RECIPES", "20"))
        # Maximum number of autocomplete suggestions. Default: 5
        self.AUTOCOMPLETE_LIMIT: int = int(os.getenv("AUTOCOMPLETE_LIMIT", "5"))
        # Queries shorter than this never reach the network. Default: 2
        self.AUTOCOMPLETE_MIN_CHARS: int = int(os.getenv("AUTOCOMPLETE_MIN_CHARS", "2"))
        # Quiet window before an autocomplete lookup fires. Default: 300 ms
        self.AUTOCOMPLETE_DEBOUNCE_MS: int = int(os.getenv("AUTOCOMPLETE_DEBOUNCE_MS", "300"))
        # Enrichment Policy: "all-or-nothing" or "best-effort"
        # "all-or-nothing": one failed detail request fails the whole result page
        # "best-effort": failed detail requests are dropped, the rest are shown
        self.ENRICHMENT_POLICY: str = os.getenv("ENRICHMENT_POLICY", "all-or-nothing").lower()
        # Unbacked Restriction Policy: "permissive" or "diets"
        # Applies to restriction tags without a boolean flag (Paleo, Pescetarian)
        # "permissive": always satisfied
        # "diets": satisfied only if the recipe's diets list names it
        self.UNBACKED_RESTRICTION_POLICY: str = os.getenv("UNBACKED_RESTRICTION_POLICY", "permissive").lower()

    @property
    def autocomplete_debounce_seconds(self) -> float:
        return self.AUTOCOMPLETE_DEBOUNCE_MS / 1000

    def validate(self) -> None:
        """Validate configuration values.

        A missing SPOONACULAR_API_KEY is deliberately not an error: the finder
        still starts and every lookup degrades to an empty result.

        Raises:
            ValueError: If a policy name is unknown or a limit is out of range.
        """
        if self.ENRICHMENT_POLICY not in ENRICHMENT_POLICIES:
            raise ValueError(
                f"ENRICHMENT_POLICY must be 'all-or-nothing' or 'best-effort', got: {self.ENRICHMENT_POLICY}"
            )
        if self.UNBACKED_RESTRICTION_POLICY not in UNBACKED_RESTRICTION_POLICIES:
            raise ValueError(
                f"UNBACKED_RESTRICTION_POLICY must be 'permissive' or 'diets', got: {self.UNBACKED_RESTRICTION_POLICY}"
            )
        if self.REQUEST_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"REQUEST_TIMEOUT_SECONDS must be positive, got: {self.REQUEST_TIMEOUT_SECONDS}"
            )
        if not (1 <= self.MAX_RECIPES <= 100):
            raise ValueError(f"MAX_RECIPES must be between 1 and 100, got: {self.MAX_RECIPES}")
        if not (1 <= self.AUTOCOMPLETE_LIMIT <= 100):
            raise ValueError(f"AUTOCOMPLETE_LIMIT must be between 1 and 100, got: {self.AUTOCOMPLETE_LIMIT}")
        if self.AUTOCOMPLETE_MIN_CHARS < 1:
            raise ValueError(f"AUTOCOMPLETE_MIN_CHARS must be at least 1, got: {self.AUTOCOMPLETE_MIN_CHARS}")
        if self.AUTOCOMPLETE_DEBOUNCE_MS < 0:
            raise ValueError(
                f"AUTOCOMPLETE_DEBOUNCE_MS must not be negative, got: {self.AUTOCOMPLETE_DEBOUNCE_MS}"
            )


# Create module-level config instance and validate immediately
config = Config()
config.validate()
