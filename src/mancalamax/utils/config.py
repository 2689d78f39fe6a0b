"""
Runtime settings, read from the environment.

    MANCALAMAX_TIME_LIMIT_MS   iterative-deepening budget per move (1000)
    MANCALAMAX_MAX_DEPTH       iterative-deepening depth ceiling (1000)
    MANCALAMAX_FIXED_DEPTH     depth for fixed-depth searches (8)
    MANCALAMAX_HEURISTIC       cutoff evaluation name (default)
    MANCALAMAX_SEED            seed for random fallback moves (unset)
    MANCALAMAX_LOG_LEVEL       logging level name (WARNING)
"""

from __future__ import annotations
import os
import random
from typing import Mapping, Optional

ENV_PREFIX = "MANCALAMAX_"

DEFAULT_TIME_LIMIT_MS = 1000
DEFAULT_MAX_DEPTH = 1000
DEFAULT_FIXED_DEPTH = 8
DEFAULT_HEURISTIC = "default"
DEFAULT_LOG_LEVEL = "WARNING"


def _env_int(env: Mapping[str, str], name: str, default: Optional[int]) -> Optional[int]:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


class Settings:
    """Search and logging settings with sensible defaults."""

    def __init__(
        self,
        time_limit_ms: int = DEFAULT_TIME_LIMIT_MS,
        max_depth: int = DEFAULT_MAX_DEPTH,
        fixed_depth: int = DEFAULT_FIXED_DEPTH,
        heuristic: str = DEFAULT_HEURISTIC,
        seed: Optional[int] = None,
        log_level: str = DEFAULT_LOG_LEVEL,
    ):
        self.time_limit_ms = time_limit_ms
        self.max_depth = max_depth
        self.fixed_depth = fixed_depth
        self.heuristic = heuristic
        self.seed = seed
        self.log_level = log_level.upper()
        self.rng = random.Random(seed)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            time_limit_ms=_env_int(env, "TIME_LIMIT_MS", DEFAULT_TIME_LIMIT_MS),
            max_depth=_env_int(env, "MAX_DEPTH", DEFAULT_MAX_DEPTH),
            fixed_depth=_env_int(env, "FIXED_DEPTH", DEFAULT_FIXED_DEPTH),
            heuristic=env.get(ENV_PREFIX + "HEURISTIC", DEFAULT_HEURISTIC),
            seed=_env_int(env, "SEED", None),
            log_level=env.get(ENV_PREFIX + "LOG_LEVEL", DEFAULT_LOG_LEVEL),
        )

    def __repr__(self) -> str:
        return (
            f"Settings(time_limit_ms={self.time_limit_ms}, max_depth={self.max_depth}, "
            f"fixed_depth={self.fixed_depth}, heuristic={self.heuristic!r}, "
            f"seed={self.seed}, log_level={self.log_level!r})"
        )
