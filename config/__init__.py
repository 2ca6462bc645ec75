"""Central configuration for the book package wizard.

Values are read once at import time from the environment (a local ``.env`` is
loaded first). ``BOOK_WIZARD_SAVE_URL`` points at the selection service; when
it is empty the save action reports an error instead of posting anywhere.
"""

from __future__ import annotations

import logging
import os
import warnings
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_ROOT = Path(__file__).resolve().parents[1]
_TRUTHY_ENV_VALUES: tuple[str, ...] = ("1", "true", "yes", "on")

DEFAULT_CATALOG_PATH = _ROOT / "data" / "catalog.json"
DEFAULT_SAVE_TIMEOUT = 10.0


def _is_truthy_flag(value: str | None) -> bool:
    """Return ``True`` when ``value`` matches a truthy environment token."""

    if value is None:
        return False
    return value.strip().lower() in _TRUTHY_ENV_VALUES


def _parse_positive_float_env(value: str | None, *, env_var: str, default: float) -> float:
    """Return a positive float parsed from ``value`` or ``default``."""

    if value is None or not value.strip():
        return default
    try:
        parsed = float(value.strip())
    except ValueError:
        warnings.warn(
            "%s is not a number; ignoring %s" % (value, env_var),
            RuntimeWarning,
        )
        return default
    if parsed <= 0:
        warnings.warn("%s must be positive; ignoring %s" % (value, env_var), RuntimeWarning)
        return default
    return parsed


def _resolve_log_level(value: str | None) -> int:
    if not value:
        return logging.INFO
    level = logging.getLevelName(value.strip().upper())
    if isinstance(level, int):
        return level
    warnings.warn("Unknown log level %s; using INFO" % value, RuntimeWarning)
    return logging.INFO


CATALOG_PATH = Path(os.getenv("BOOK_WIZARD_CATALOG_PATH") or DEFAULT_CATALOG_PATH)
SAVE_URL = os.getenv("BOOK_WIZARD_SAVE_URL", "").strip()
SAVE_TIMEOUT = _parse_positive_float_env(
    os.getenv("BOOK_WIZARD_SAVE_TIMEOUT"),
    env_var="BOOK_WIZARD_SAVE_TIMEOUT",
    default=DEFAULT_SAVE_TIMEOUT,
)
LOG_LEVEL = _resolve_log_level(os.getenv("BOOK_WIZARD_LOG_LEVEL"))

# Development login shortcut: pretend a user of this school is signed in.
DEV_AUTH_ENABLED = _is_truthy_flag(os.getenv("BOOK_WIZARD_DEV_AUTH"))
DEV_SCHOOL_ID = os.getenv("BOOK_WIZARD_SCHOOL_ID", "").strip() or None

# Where "View book" links point; ``{book_id}`` is substituted.
BOOK_PREVIEW_URL = os.getenv("BOOK_WIZARD_PREVIEW_URL", "/pdf/{book_id}")


__all__ = [
    "BOOK_PREVIEW_URL",
    "CATALOG_PATH",
    "DEFAULT_CATALOG_PATH",
    "DEFAULT_SAVE_TIMEOUT",
    "DEV_AUTH_ENABLED",
    "DEV_SCHOOL_ID",
    "LOG_LEVEL",
    "SAVE_TIMEOUT",
    "SAVE_URL",
]
