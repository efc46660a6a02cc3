"""
Tests for engine configuration.
"""

import pytest
from pydantic import ValidationError

from ..config import EngineConfig


class TestEngineConfig:
    """Tests for EngineConfig."""

    def test_defaults(self):
        """Defaults match the standard game."""
        config = EngineConfig()

        assert config.hand_size == 5
        assert config.starting_health == 10
        assert config.log_limit == 100
        assert config.random_seed is None

    def test_from_env_mapping(self):
        """NETRUN_* variables override defaults."""
        config = EngineConfig.from_env({"NETRUN_HAND_SIZE": "7", "NETRUN_RANDOM_SEED": "42"})

        assert config.hand_size == 7
        assert config.random_seed == 42
        assert config.market_size == 5

    def test_from_env_rejects_bad_values(self):
        """Invalid values fail validation."""
        with pytest.raises(ValidationError):
            EngineConfig.from_env({"NETRUN_STARTING_HEALTH": "0"})

    def test_frozen_and_strict_fields(self):
        """Configs cannot be changed or given unknown fields."""
        config = EngineConfig()

        with pytest.raises(ValidationError):
            config.hand_size = 3
        with pytest.raises(ValidationError):
            EngineConfig(turn_limit=5)
