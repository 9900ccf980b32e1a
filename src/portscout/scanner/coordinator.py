"""Bounded concurrent scanning of many ports.

:class:`Scanner` runs a fixed pool of worker coroutines over the requested
ports. Each worker takes the next pending port, probes it to completion and
then takes another, so no more than ``concurrency`` probes are ever in flight.
Results are buffered as they finish and sorted by port once at the end.

Cancellation is cooperative. The optional ``cancel_event`` (anything with an
``is_set()`` method, such as :class:`threading.Event` or
:class:`asyncio.Event`) is checked before each port is admitted. Probes that
are already running are left to reach their own timeout, and the report
returned is flagged ``cancelled`` with whatever results were collected.
"""

from __future__ import annotations

import asyncio
import ipaddress
import logging
import socket
import time
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable, Sequence

from .models import ScannerConfig, ScanReport, ScanResult
from .probe import probe

logger = logging.getLogger(__name__)

ProbeFunc = Callable[..., Awaitable[ScanResult]]
ProgressFunc = Callable[[int, int], None]


class ScanState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


def _cancelled(event: Any) -> bool:
    """Return ``True`` if the optional *event* is set."""

    return bool(event is not None and event.is_set())


def _is_ip_literal(host: str) -> bool:
    try:
        ipaddress.ip_address(host.split("%", 1)[0])
    except ValueError:
        return False
    return True


class Scanner:
    """Scan ports on a host with at most ``config.concurrency`` probes at once.

    ``state`` moves from ``IDLE`` to ``RUNNING`` when a scan starts and to
    ``COMPLETED`` when it returns, cancelled or not.
    """

    def __init__(
        self,
        config: ScannerConfig | None = None,
        *,
        probe_func: ProbeFunc = probe,
    ) -> None:
        self.config = config or ScannerConfig()
        self.state = ScanState.IDLE
        self._probe = probe_func

    async def _probe_port(self, host: str, port: int) -> ScanResult:
        cfg = self.config
        return await self._probe(
            host,
            port,
            cfg.connect_timeout,
            cfg.banner_timeout,
            grab_banner=cfg.grab_banner,
            banner_size=cfg.banner_size,
        )

    async def scan(
        self,
        cancel_event: Any | None,
        host: str,
        ports: Sequence[int],
        progress: ProgressFunc | None = None,
    ) -> ScanReport:
        """Probe every port in *ports* on *host* and return a sorted report.

        Without cancellation the report holds exactly one result per requested
        port. *progress* is called with ``(done, total)`` after each probe.
        """

        port_list = list(ports)
        total = len(port_list)
        self.state = ScanState.RUNNING
        logger.info(
            "Scanning %s: %d ports, concurrency %d",
            host,
            total,
            self.config.concurrency,
        )
        started = time.perf_counter()

        results: list[ScanResult] = []
        lock = asyncio.Lock()
        pending = iter(port_list)
        cancelled = False

        async def worker() -> None:
            nonlocal cancelled
            while True:
                async with lock:
                    if _cancelled(cancel_event):
                        cancelled = True
                        return
                    port = next(pending, None)
                if port is None:
                    return
                result = await self._probe_port(host, port)
                async with lock:
                    results.append(result)
                    done = len(results)
                if progress is not None:
                    progress(done, total)

        try:
            workers = min(self.config.concurrency, total)
            await asyncio.gather(*(worker() for _ in range(workers)))
        finally:
            self.state = ScanState.COMPLETED

        results.sort(key=lambda r: r.port)
        report = ScanReport(
            host=host,
            requested=total,
            results=tuple(results),
            cancelled=cancelled,
        )
        elapsed = time.perf_counter() - started
        if cancelled:
            logger.warning(
                "Scan of %s cancelled after %d/%d ports (%.2fs)",
                host,
                len(results),
                total,
                elapsed,
            )
        else:
            logger.info(
                "Scan of %s finished in %.2fs: %d open",
                host,
                elapsed,
                len(report.open_ports),
            )
        return report

    async def _check_resolvable(self, host: str) -> Exception | None:
        if _is_ip_literal(host):
            return None
        loop = asyncio.get_running_loop()
        try:
            await asyncio.wait_for(
                loop.getaddrinfo(host, None, type=socket.SOCK_STREAM),
                self.config.connect_timeout,
            )
        except (socket.gaierror, UnicodeError) as exc:
            # UnicodeError: the name cannot be IDNA encoded, e.g. a label over 63 chars
            return exc
        except asyncio.TimeoutError:
            return socket.gaierror(f"resolving {host} timed out")
        return None

    async def scan_many(
        self,
        cancel_event: Any | None,
        targets: Iterable[str],
        ports: Sequence[int],
        progress: ProgressFunc | None = None,
    ) -> list[ScanReport]:
        """Scan each target in turn and return one report per target.

        A hostname that cannot be resolved produces a report with ``error``
        set instead of aborting the remaining targets. Targets not reached
        because of cancellation are reported as cancelled with no results.
        """

        port_list = list(ports)
        reports: list[ScanReport] = []
        for host in targets:
            if _cancelled(cancel_event):
                reports.append(
                    ScanReport(host=host, requested=len(port_list), cancelled=True)
                )
                continue
            error = await self._check_resolvable(host)
            if error is not None:
                logger.error("Skipping %s: %s", host, error)
                reports.append(
                    ScanReport(host=host, requested=len(port_list), error=error)
                )
                continue
            reports.append(await self.scan(cancel_event, host, port_list, progress))
        return reports


def scan_ports_sync(
    host: str,
    ports: Sequence[int],
    config: ScannerConfig | None = None,
    *,
    cancel_event: Any | None = None,
) -> ScanReport:
    """Blocking wrapper around :meth:`Scanner.scan` for non-async callers."""

    return asyncio.run(Scanner(config).scan(cancel_event, host, ports))


__all__ = ["ScanState", "Scanner", "scan_ports_sync"]
