"""Load scanner settings from a JSON file and the environment."""
from __future__ import annotations

import json
import logging
import os
import shutil
from copy import deepcopy
from json import JSONDecodeError
from pathlib import Path
from typing import Any, Dict, Mapping

from ..scanner.models import ScannerConfig
from .defaults import DEFAULT_SETTINGS, ENV_OVERRIDES
from .paths import ConfigPaths

logger = logging.getLogger(__name__)


class Config:
    """Load, mutate, and persist portscout configuration.

    Values come from :data:`DEFAULT_SETTINGS`, then the JSON config file,
    then ``PORTSCOUT_*`` environment variables. Command line flags are
    applied on top by the caller.
    """

    def __init__(
        self,
        *,
        paths: ConfigPaths | None = None,
        defaults: Dict[str, Any] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.paths = paths or ConfigPaths.create()
        self.defaults: Dict[str, Any] = deepcopy(defaults or DEFAULT_SETTINGS)
        self.config: Dict[str, Any] = self.defaults.copy()
        self.load_ok = self._load_config()
        self._apply_env(os.environ if environ is None else environ)

    @property
    def config_file(self) -> Path:
        """Return the primary configuration file path."""

        return self.paths.config_file

    def _load_config(self) -> bool:
        """Load configuration from disk, falling back to defaults."""

        path = self.paths.config_file
        if not path.exists():
            return True
        try:
            with open(path, "r", encoding="utf-8") as handle:
                loaded = json.load(handle)
            if not isinstance(loaded, dict):
                raise JSONDecodeError("top level must be an object", "", 0)
        except JSONDecodeError as exc:
            logger.warning("Invalid config file, using defaults: %s", exc)
            backup = path.with_suffix(path.suffix + ".bak")
            try:
                shutil.move(path, backup)
            except OSError as backup_err:
                logger.warning("Failed to back up invalid config: %s", backup_err)
            return False
        except OSError as exc:
            logger.error("Error reading config: %s", exc)
            return False
        self.config = {**self.defaults, **loaded}
        return True

    def _apply_env(self, environ: Mapping[str, str]) -> None:
        for var, (key, cast) in ENV_OVERRIDES.items():
            raw = environ.get(var)
            if raw is None or raw == "":
                continue
            try:
                self.config[key] = cast(raw)
            except ValueError:
                logger.warning("Ignoring %s=%r: expected %s", var, raw, cast.__name__)

    def save(self) -> bool:
        """Persist the current configuration to disk."""

        try:
            self.paths.ensure()
            with open(self.paths.config_file, "w", encoding="utf-8") as handle:
                json.dump(self.config, handle, indent=4)
            return True
        except OSError as exc:
            logger.error("Error saving config: %s", exc)
            return False

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for *key* or ``default`` when unset."""

        return self.config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Assign *value* to *key* within the configuration."""

        self.config[key] = value

    def reset_to_defaults(self) -> None:
        """Replace the configuration with the default values."""

        self.config = self.defaults.copy()
        self.save()

    def max_hosts(self) -> int:
        """Return the CIDR expansion limit as an integer.

        Raises ``ValueError`` when the configured value is not a number.
        """

        value = self.get("max_hosts")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValueError(f"max_hosts must be an integer, got {value!r}") from None

    def scanner_config(self, **overrides: Any) -> ScannerConfig:
        """Build a :class:`ScannerConfig`, letting non-``None`` *overrides* win.

        Raises ``ValueError`` when the resulting values are invalid.
        """

        values = {
            "connect_timeout": float(self.get("connect_timeout")),
            "banner_timeout": float(self.get("banner_timeout")),
            "concurrency": int(self.get("concurrency")),
            "grab_banner": bool(self.get("grab_banner")),
            "banner_size": int(self.get("banner_size")),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ScannerConfig(**values)


__all__ = ["Config"]
