"""Tests for LexConfig.from_dict() method.

The from_dict() method enables framework integration by allowing
config creation from dictionaries (e.g. a [tool.*] table in a TOML file).
"""

from strata.config import LexConfig


class TestLexConfigFromDict:
    """Test LexConfig.from_dict() factory method."""

    def test_from_dict_basic(self):
        """from_dict should create config with specified values."""
        config = LexConfig.from_dict({"zero_width_limit": 8, "trace": True})

        assert config.zero_width_limit == 8
        assert config.trace is True

    def test_from_dict_ignores_unknown_keys(self):
        """from_dict should silently ignore unknown keys."""
        config = LexConfig.from_dict({"trace": True, "color": "red", "depth": 3})

        assert config.trace is True
        assert config.zero_width_limit == 32

    def test_from_dict_empty(self):
        """from_dict with empty dict should return default config."""
        assert LexConfig.from_dict({}) == LexConfig()

    def test_from_dict_returns_frozen_config(self):
        config = LexConfig.from_dict({"trace": True})
        assert isinstance(config, LexConfig)
        assert hash(config) == hash(LexConfig(trace=True))
