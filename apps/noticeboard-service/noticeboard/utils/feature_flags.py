"""Reaction switches read from the environment."""

import os
from functools import lru_cache
from typing import Dict, Optional


def _env_bool(name: str, default: bool) -> bool:
    raw: Optional[str] = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in ("", "0", "false", "no", "off"):
        return False
    if value in ("1", "true", "yes", "on"):
        return True
    return default


@lru_cache(maxsize=None)
def get_feature_flags() -> Dict[str, bool]:
    return {
        "reactions_enabled": _env_bool("REACTIONS_ENABLED", True),
        "reaction_toggle_off": _env_bool("REACTION_TOGGLE_OFF", False),
    }


def reactions_enabled() -> bool:
    """Global toggle for the reaction endpoint."""
    return get_feature_flags()["reactions_enabled"]


def reaction_toggle_off_enabled() -> bool:
    """Repeating the same reaction removes it."""
    return get_feature_flags()["reaction_toggle_off"]


def refresh_feature_flag_cache() -> None:
    get_feature_flags.cache_clear()
