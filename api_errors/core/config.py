"""Error handling configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_STRICT_DETAILS = False
DEFAULT_INTERNAL_MESSAGE = "Internal server error"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


@dataclass(frozen=True)
class ErrorSettings:
    """Runtime settings for error parsing and response rendering."""

    strict_details: bool
    internal_message: str


@lru_cache(maxsize=1)
def get_error_settings() -> ErrorSettings:
    """Load error settings from the environment."""
    return ErrorSettings(
        strict_details=_get_bool_env("API_ERRORS_STRICT_DETAILS", DEFAULT_STRICT_DETAILS),
        internal_message=os.getenv("API_ERRORS_INTERNAL_MESSAGE", DEFAULT_INTERNAL_MESSAGE),
    )
