"""Single TCP connect probe with optional banner capture."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time

from .models import (
    DEFAULT_BANNER_SIZE,
    DEFAULT_BANNER_TIMEOUT,
    DEFAULT_CONNECT_TIMEOUT,
    ScanResult,
)

logger = logging.getLogger(__name__)


async def _read_banner(
    reader: asyncio.StreamReader, timeout: float, limit: int
) -> str:
    """Return whatever the peer sends within *timeout*, or ``""``."""
    try:
        data = await asyncio.wait_for(reader.read(limit), timeout)
    except (OSError, asyncio.TimeoutError, asyncio.IncompleteReadError):
        return ""
    return data.decode(errors="replace").rstrip("\r\n")


async def _close(writer: asyncio.StreamWriter, timeout: float) -> None:
    writer.close()
    with contextlib.suppress(OSError, asyncio.TimeoutError):
        await asyncio.wait_for(writer.wait_closed(), timeout)


async def probe(
    host: str,
    port: int,
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
    banner_timeout: float = DEFAULT_BANNER_TIMEOUT,
    *,
    grab_banner: bool = True,
    banner_size: int = DEFAULT_BANNER_SIZE,
) -> ScanResult:
    """Try to connect to ``host:port`` and return a :class:`ScanResult`.

    A refused, unreachable, unresolvable or timed out connection yields ``open=False`` with
    the cause stored in ``error``; this coroutine does not raise for network
    failures. When connected and *grab_banner* is set, a single read bounded
    by *banner_timeout* fills ``banner``. Silence or EOF during that read
    leaves ``banner`` empty and the port open. The connection is closed on
    every path.
    """

    start = time.perf_counter()
    try:
        reader, writer = await asyncio.wait_for(
            asyncio.open_connection(host, port), connect_timeout
        )
    except (OSError, ValueError, asyncio.TimeoutError) as exc:
        if isinstance(exc, asyncio.TimeoutError) and not str(exc):
            exc = asyncio.TimeoutError(f"connect timed out after {connect_timeout}s")
        logger.debug("%s:%d closed: %r", host, port, exc)
        return ScanResult(
            host=host,
            port=port,
            open=False,
            latency=time.perf_counter() - start,
            error=exc,
        )

    banner = ""
    try:
        if grab_banner:
            banner = await _read_banner(reader, banner_timeout, banner_size)
    finally:
        await _close(writer, banner_timeout)

    return ScanResult(
        host=host,
        port=port,
        open=True,
        banner=banner,
        latency=time.perf_counter() - start,
    )


__all__ = ["probe"]
