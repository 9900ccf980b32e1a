"""Support utilities shared by the CLI and library code."""

from __future__ import annotations

from .logging_config import setup_logging

__all__ = ["setup_logging"]
