"""Concrete command implementations for the portscout CLI."""
from __future__ import annotations

from . import local_hosts, portscan

__all__ = ["local_hosts", "portscan"]
