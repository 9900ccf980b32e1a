"""Configuration helpers and defaults for portscout."""
from __future__ import annotations

from .defaults import DEFAULT_SETTINGS, ENV_OVERRIDES
from .manager import Config
from .paths import ConfigPaths

__all__ = ["Config", "ConfigPaths", "DEFAULT_SETTINGS", "ENV_OVERRIDES"]
