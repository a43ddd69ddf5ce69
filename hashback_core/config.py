"""
HashBack Configuration
======================
Configuration constants and environment variables.
"""

import os
from dataclasses import dataclass

_DEFAULTS = {
    "HASHBACK_CLOCK_SKEW_SECONDS": 9,
    "HASHBACK_MIN_ROUNDS": 1,
    "HASHBACK_MAX_ROUNDS": 99,
    "HASHBACK_UNUS_CAPACITY": 999,
    "HASHBACK_DEFAULT_ROUNDS": 1,
}


def env_int(name: str) -> int:
    """Read an integer setting from the environment, falling back to its default."""
    return int(os.getenv(name, str(_DEFAULTS[name])))


# Issuer-side defaults from environment
CLOCK_SKEW_SECONDS = env_int("HASHBACK_CLOCK_SKEW_SECONDS")
MIN_ROUNDS = env_int("HASHBACK_MIN_ROUNDS")
MAX_ROUNDS = env_int("HASHBACK_MAX_ROUNDS")
UNUS_CAPACITY = env_int("HASHBACK_UNUS_CAPACITY")

# Caller-side defaults
DEFAULT_ROUNDS = env_int("HASHBACK_DEFAULT_ROUNDS")


@dataclass
class ParserConfig:
    """Configuration for a header parser."""
    clock_skew_seconds: int = CLOCK_SKEW_SECONDS
    min_rounds: int = MIN_ROUNDS
    max_rounds: int = MAX_ROUNDS
    unus_capacity: int = UNUS_CAPACITY

    @classmethod
    def from_env(cls) -> "ParserConfig":
        """Build a config from the current environment."""
        return cls(
            clock_skew_seconds=env_int("HASHBACK_CLOCK_SKEW_SECONDS"),
            min_rounds=env_int("HASHBACK_MIN_ROUNDS"),
            max_rounds=env_int("HASHBACK_MAX_ROUNDS"),
            unus_capacity=env_int("HASHBACK_UNUS_CAPACITY"),
        )
