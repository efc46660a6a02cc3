"""
Engine configuration.

Defaults match the standard game. Every field can be overridden from the
environment through EngineConfig.from_env().
"""

from typing import Optional
import os

from pydantic import BaseModel, Field


# Environment configuration
NETRUN_RANDOM_SEED = os.getenv("NETRUN_RANDOM_SEED", None)
NETRUN_HAND_SIZE = os.getenv("NETRUN_HAND_SIZE", None)
NETRUN_MARKET_SIZE = os.getenv("NETRUN_MARKET_SIZE", None)
NETRUN_STARTING_HEALTH = os.getenv("NETRUN_STARTING_HEALTH", None)
NETRUN_STARTING_ACTIONS = os.getenv("NETRUN_STARTING_ACTIONS", None)
NETRUN_STARTING_BUYS = os.getenv("NETRUN_STARTING_BUYS", None)
NETRUN_LOG_LIMIT = os.getenv("NETRUN_LOG_LIMIT", None)
NETRUN_LOCATIONS_BETWEEN = os.getenv("NETRUN_LOCATIONS_BETWEEN", None)


class EngineConfig(BaseModel):
    """Tunable game parameters."""
    model_config = {"frozen": True, "extra": "forbid"}

    random_seed: Optional[int] = None
    hand_size: int = Field(default=5, ge=0)
    market_size: int = Field(default=5, ge=0)
    starting_health: int = Field(default=10, ge=1)
    starting_actions: int = Field(default=1, ge=0)
    starting_buys: int = Field(default=1, ge=0)
    log_limit: int = Field(default=100, ge=1)
    locations_between: int = Field(default=3, ge=0)  # Locations between entrance and exit

    @classmethod
    def from_env(cls, environ=None) -> "EngineConfig":
        """
        Build a config from NETRUN_* variables.

        Pass environ (a mapping) to read from something other than the
        process environment. Unset variables keep their defaults; bad
        values raise pydantic.ValidationError.
        """
        if environ is None:
            values = {
                "random_seed": NETRUN_RANDOM_SEED,
                "hand_size": NETRUN_HAND_SIZE,
                "market_size": NETRUN_MARKET_SIZE,
                "starting_health": NETRUN_STARTING_HEALTH,
                "starting_actions": NETRUN_STARTING_ACTIONS,
                "starting_buys": NETRUN_STARTING_BUYS,
                "log_limit": NETRUN_LOG_LIMIT,
                "locations_between": NETRUN_LOCATIONS_BETWEEN,
            }
        else:
            values = {name: environ.get(f"NETRUN_{name.upper()}") for name in cls.model_fields}
        return cls.model_validate({k: v for k, v in values.items() if v is not None})
