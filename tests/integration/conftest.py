"""Pytest configuration and fixtures for integration tests.

Loads .env and skips the live Spoonacular tests when no API key is configured.
These tests spend real API quota (roughly 25 points per full run).
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv


def pytest_configure(config):
    """Load .env from the project root before test collection."""
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(env_path)


@pytest.fixture(scope="session", autouse=True)
def check_api_key():
    """Skip integration tests if SPOONACULAR_API_KEY is not configured."""
    if not os.getenv("SPOONACULAR_API_KEY"):
        pytest.skip(
            "Integration tests skipped. Missing SPOONACULAR_API_KEY. Please set it in your .env file.",
            allow_module_level=True,
        )
