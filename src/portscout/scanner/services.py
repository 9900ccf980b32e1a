"""Port number to service name lookups used for display."""

from __future__ import annotations

import socket
from typing import Dict

# socket.getservbyport can be slow on some platforms, so names are cached.
_SERVICE_CACHE: Dict[int, str] = {}


def get_service_name(port: int) -> str:
    """Return the service name for ``port`` or ``"unknown"``."""
    name = _SERVICE_CACHE.get(port)
    if name is not None:
        return name
    try:
        name = socket.getservbyport(port, "tcp")
    except (OSError, OverflowError):
        name = "unknown"
    _SERVICE_CACHE[port] = name
    return name


def clear_service_cache() -> None:
    """Forget cached service names."""
    _SERVICE_CACHE.clear()


__all__ = ["clear_service_cache", "get_service_name"]
