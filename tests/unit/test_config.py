"""Unit tests for configuration management."""

import pytest

from src.utils.config import Config


ENV_VARS = (
    "SPOONACULAR_API_KEY",
    "SPOONACULAR_BASE_URL",
    "REQUEST_TIMEOUT_SECONDS",
    "MAX_RECIPES",
    "AUTOCOMPLETE_LIMIT",
    "AUTOCOMPLETE_MIN_CHARS",
    "AUTOCOMPLETE_DEBOUNCE_MS",
    "ENRICHMENT_POLICY",
    "UNBACKED_RESTRICTION_POLICY",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfigInitialization:
    """Test Config class initialization and environment variable loading."""

    def test_config_loads_default_values(self, clean_env):
        """Test that Config uses default values when env vars not set."""
        config = Config()

        assert config.SPOONACULAR_API_KEY == ""
        assert config.SPOONACULAR_BASE_URL == "https://api.spoonacular.com"
        assert config.REQUEST_TIMEOUT_SECONDS == 10
        assert config.MAX_RECIPES == 20
        assert config.AUTOCOMPLETE_LIMIT == 5
        assert config.AUTOCOMPLETE_MIN_CHARS == 2
        assert config.AUTOCOMPLETE_DEBOUNCE_MS == 300
        assert config.ENRICHMENT_POLICY == "all-or-nothing"
        assert config.UNBACKED_RESTRICTION_POLICY == "permissive"

    def test_config_loads_from_environment(self, clean_env):
        """Test that Config loads values from environment variables."""
        clean_env.setenv("SPOONACULAR_API_KEY", "test_spoonacular_key")
        clean_env.setenv("SPOONACULAR_BASE_URL", "http://localhost:9000/")
        clean_env.setenv("MAX_RECIPES", "8")
        clean_env.setenv("AUTOCOMPLETE_DEBOUNCE_MS", "150")
        clean_env.setenv("ENRICHMENT_POLICY", "Best-Effort")

        config = Config()

        assert config.SPOONACULAR_API_KEY == "test_spoonacular_key"
        assert config.SPOONACULAR_BASE_URL == "http://localhost:9000"
        assert config.MAX_RECIPES == 8
        assert config.AUTOCOMPLETE_DEBOUNCE_MS == 150
        assert config.ENRICHMENT_POLICY == "best-effort"

    def test_config_converts_numeric_types(self, clean_env):
        """Test that Config properly converts numeric environment variables."""
        clean_env.setenv("REQUEST_TIMEOUT_SECONDS", "2.5")
        clean_env.setenv("AUTOCOMPLETE_LIMIT", "3")

        config = Config()

        assert isinstance(config.REQUEST_TIMEOUT_SECONDS, float)
        assert config.REQUEST_TIMEOUT_SECONDS == 2.5
        assert isinstance(config.AUTOCOMPLETE_LIMIT, int)

    def test_debounce_seconds(self, clean_env):
        clean_env.setenv("AUTOCOMPLETE_DEBOUNCE_MS", "250")
        assert Config().autocomplete_debounce_seconds == 0.25


class TestConfigValidation:
    """Test Config validation logic."""

    def test_missing_api_key_is_not_an_error(self, clean_env):
        """The key is only needed when requests are made."""
        Config().validate()

    def test_invalid_enrichment_policy(self, clean_env):
        clean_env.setenv("ENRICHMENT_POLICY", "sometimes")
        with pytest.raises(ValueError, match="ENRICHMENT_POLICY"):
            Config().validate()

    def test_invalid_unbacked_policy(self, clean_env):
        clean_env.setenv("UNBACKED_RESTRICTION_POLICY", "strict")
        with pytest.raises(ValueError, match="UNBACKED_RESTRICTION_POLICY"):
            Config().validate()

    def test_timeout_must_be_positive(self, clean_env):
        clean_env.setenv("REQUEST_TIMEOUT_SECONDS", "0")
        with pytest.raises(ValueError, match="REQUEST_TIMEOUT_SECONDS"):
            Config().validate()

    @pytest.mark.parametrize("value", ["0", "101"])
    def test_max_recipes_range(self, clean_env, value):
        clean_env.setenv("MAX_RECIPES", value)
        with pytest.raises(ValueError, match="MAX_RECIPES"):
            Config().validate()

    def test_negative_debounce(self, clean_env):
        clean_env.setenv("AUTOCOMPLETE_DEBOUNCE_MS", "-1")
        with pytest.raises(ValueError, match="AUTOCOMPLETE_DEBOUNCE_MS"):
            Config().validate()

    def test_zero_debounce_is_allowed(self, clean_env):
        clean_env.setenv("AUTOCOMPLETE_DEBOUNCE_MS", "0")
        Config().validate()
