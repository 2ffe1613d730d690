"""
Configuration & Constants
=========================
This module serves as the central registry for tunables and resource paths.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (thresholds, delays, URLs) from
   being scattered across the gesture, stack and source modules.
2. Overrides: User-level overrides are read from QSettings so that the
   content source or batch size can be changed without touching the code.

Exports:
    AppConfig: Resolved runtime configuration.
    load_stylesheet: Reads the packaged Qt stylesheet.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib.resources import files
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

# --- Gesture ---
SWIPE_THRESHOLD: float = 100.0
FLY_DISTANCE: float = 1000.0
EXIT_ROTATION: float = 30.0
ROTATION_FACTOR: float = 0.08
SETTLE_DELAY_MS: int = 300

# --- Notices ---
NOTICE_DURATION_MS: int = 2000

# --- Content source ---
API_URL: str = "https://rizzapi.vercel.app/random"
BATCH_SIZE: int = 15
REQUEST_TIMEOUT: float = 10.0
DEFAULT_CATEGORY: str = "Pickup Line"

# --- Persistence ---
STORAGE_KEY: str = "savedLines"


@dataclass(frozen=True)
class AppConfig:
    """Runtime configuration, defaults first, QSettings overrides second."""
    api_url: str = API_URL
    batch_size: int = BATCH_SIZE
    request_timeout: float = REQUEST_TIMEOUT
    swipe_threshold: float = SWIPE_THRESHOLD

    @classmethod
    def from_settings(cls, settings: QSettings) -> AppConfig:
        defaults = cls()
        return cls(
            api_url=_read(settings, "source/url", str, defaults.api_url),
            batch_size=_read(settings, "source/batch_size", _positive_int, defaults.batch_size),
            request_timeout=_read(settings, "source/timeout", _positive_float, defaults.request_timeout),
            swipe_threshold=_read(settings, "gesture/threshold", _positive_float, defaults.swipe_threshold),
        )


def _positive_int(value: Any) -> int:
    result = int(value)
    if result <= 0:
        raise ValueError(f"expected a positive integer, got {value!r}")
    return result


def _positive_float(value: Any) -> float:
    result = float(value)
    if result <= 0:
        raise ValueError(f"expected a positive number, got {value!r}")
    return result


def _read(settings: QSettings, key: str, convert: Callable[[Any], Any], default: Any) -> Any:
    raw = settings.value(key)
    if raw is None or raw == "":
        return default
    try:
        return convert(raw)
    except (TypeError, ValueError) as e:
        logger.warning(f"Ignoring invalid setting '{key}'={raw!r}: {e}")
        return default


def load_stylesheet(name: str = "style.qss") -> str:
    """
    Return the packaged Qt stylesheet, or an empty string if it is missing.
    """
    resource = files("swipelines.resources").joinpath(name)
    if not resource.is_file():
        logger.warning(f"Stylesheet '{name}' not found in package resources.")
        return ""
    return resource.read_text(encoding="utf-8")
