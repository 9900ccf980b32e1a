"""Default configuration values."""
from __future__ import annotations

from typing import Any, Dict

from ..scanner.models import (
    DEFAULT_BANNER_SIZE,
    DEFAULT_BANNER_TIMEOUT,
    DEFAULT_CONCURRENCY,
    DEFAULT_CONNECT_TIMEOUT,
)

DEFAULT_SETTINGS: Dict[str, Any] = {
    "connect_timeout": DEFAULT_CONNECT_TIMEOUT,
    "banner_timeout": DEFAULT_BANNER_TIMEOUT,
    "concurrency": DEFAULT_CONCURRENCY,
    "grab_banner": True,
    "banner_size": DEFAULT_BANNER_SIZE,
    "max_hosts": 65536,
    "log_level": "INFO",
    "log_file": None,
}

# Environment variables that override the matching setting and its type.
ENV_OVERRIDES: Dict[str, tuple[str, type]] = {
    "PORTSCOUT_CONNECT_TIMEOUT": ("connect_timeout", float),
    "PORTSCOUT_BANNER_TIMEOUT": ("banner_timeout", float),
    "PORTSCOUT_CONCURRENCY": ("concurrency", int),
    "PORTSCOUT_LOG_LEVEL": ("log_level", str),
}

__all__ = ["DEFAULT_SETTINGS", "ENV_OVERRIDES"]
