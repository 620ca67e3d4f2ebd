"""
Engine settings read from ``BOND_``-prefixed environment variables.

BOND_YTM_TOLERANCE : float
    Absolute price tolerance for the YTM solver (default 1e-6).
BOND_YTM_MAX_ITERATIONS : int
    Iteration cap for the YTM solver (default 1000).
BOND_BREAK_EVEN_WIDTH : float
    Bracket width at which the break-even solver stops (default 1e-6).
BOND_LOG_LEVEL : str
    Logging level for the console front end (default WARNING).
BOND_LOG_FORMAT : str
    Logging format string for the console front end.

Unparseable, non-positive or unknown (log level) values fall back to the default.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Any


def _get_env(key: str, default: Any, value_type: type = str) -> Any:
    env_value = os.environ.get(f"BOND_{key.upper()}")
    if env_value is None:
        return default

    try:
        if value_type == int:
            return int(env_value)
        elif value_type == float:
            return float(env_value)
        else:
            return env_value
    except (ValueError, TypeError):
        return default


def _positive(value: Any, default: Any) -> Any:
    return value if value > 0 else default


def _log_level(name: str, default: str = "WARNING") -> str:
    name = name.upper()
    # getLevelName maps unknown names to "Level <name>" rather than an int
    return name if isinstance(logging.getLevelName(name), int) else default


class Settings:
    def __init__(self) -> None:
        # solver defaults
        self.ytm_tolerance: float = _positive(_get_env("YTM_TOLERANCE", 1e-6, float), 1e-6)
        self.ytm_max_iterations: int = _positive(_get_env("YTM_MAX_ITERATIONS", 1000, int), 1000)
        self.break_even_width: float = _positive(_get_env("BREAK_EVEN_WIDTH", 1e-6, float), 1e-6)

        # logging
        self.log_level: str = _log_level(_get_env("LOG_LEVEL", "WARNING", str))
        self.log_format: str = _get_env("LOG_FORMAT", "%(asctime)s [%(levelname)s] %(name)s: %(message)s", str)

    def __repr__(self) -> str:
        return (
            f"Settings(ytm_tolerance={self.ytm_tolerance!r}, ytm_max_iterations={self.ytm_max_iterations!r}, "
            f"break_even_width={self.break_even_width!r}, log_level={self.log_level!r})"
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
