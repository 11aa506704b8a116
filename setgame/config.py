"""
config.py
=========
Runtime configuration for game sessions and the command line.

Values come from the process environment, optionally seeded from a `.env`
file via python-dotenv. Explicit keyword overrides passed to `load_config`
take precedence over the environment.

Variables
---------
SET_SEED                  int, RNG seed (unset = fresh randomness)
SET_TABLE_SIZE            int, cards dealt on a fresh table (default 12)
SET_REQUIRE_INITIAL_SET   bool, redeal until the first table holds a Set
SET_PUZZLE_OPTIONS        int, options offered per puzzle (default 9)
SET_ENABLE_LOGGING        bool, turn logging on/off (default on)
SET_LOG_LEVEL             logging level name (default WARNING)
SET_LOG_FILE              optional path for a log file
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .type import PUZZLE_OPTIONS, TABLE_SIZE

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class GameConfig:
    """
    Static configuration for a game session or CLI run.
    """
    seed: Optional[int] = None
    table_size: int = TABLE_SIZE
    require_initial_set: bool = False
    puzzle_options: int = PUZZLE_OPTIONS
    enable_logging: bool = True
    log_level: str = "WARNING"
    log_file: Optional[str] = None


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def load_config(dotenv: bool = True, **overrides) -> GameConfig:
    """Build a GameConfig from the environment, then apply non-None overrides."""
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))
    config = GameConfig(
        seed=_env_int("SET_SEED", None),
        table_size=_env_int("SET_TABLE_SIZE", TABLE_SIZE),
        require_initial_set=_env_bool("SET_REQUIRE_INITIAL_SET", False),
        puzzle_options=_env_int("SET_PUZZLE_OPTIONS", PUZZLE_OPTIONS),
        enable_logging=_env_bool("SET_ENABLE_LOGGING", True),
        log_level=os.getenv("SET_LOG_LEVEL", "WARNING").upper(),
        log_file=os.getenv("SET_LOG_FILE") or None,
    )
    unknown = set(overrides) - set(GameConfig.__dataclass_fields__)
    if unknown:
        raise TypeError(f"Unknown config option(s): {', '.join(sorted(unknown))}")
    return replace(config, **{k: v for k, v in overrides.items() if v is not None})
