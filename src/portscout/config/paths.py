"""Filesystem helpers for configuration storage."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ConfigPaths:
    """Resolved filesystem locations for configuration data."""

    root: Path
    config_file: Path
    log_dir: Path

    @classmethod
    def create(cls, root: Path | None = None) -> "ConfigPaths":
        """Return paths rooted at *root*, ``PORTSCOUT_HOME`` or ``~/.portscout``."""

        if root is None:
            env_root = os.environ.get("PORTSCOUT_HOME")
            root = Path(env_root) if env_root else Path.home() / ".portscout"
        base = Path(root).expanduser().resolve()
        return cls(root=base, config_file=base / "config.json", log_dir=base / "logs")

    def ensure(self) -> None:
        """Create the configuration and log directories if needed."""

        self.root.mkdir(parents=True, exist_ok=True)
        self.log_dir.mkdir(exist_ok=True)


__all__ = ["ConfigPaths"]
