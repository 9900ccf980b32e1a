"""Value types shared by the prober, the coordinator and the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .services import get_service_name

DEFAULT_CONNECT_TIMEOUT = 2.0
DEFAULT_BANNER_TIMEOUT = 1.0
DEFAULT_CONCURRENCY = 100
DEFAULT_BANNER_SIZE = 1024


@dataclass(frozen=True)
class ScannerConfig:
    """Timeouts and concurrency budget for a scan.

    ``connect_timeout`` and ``banner_timeout`` are in seconds. ``concurrency``
    caps the number of probes in flight at once.
    """

    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    banner_timeout: float = DEFAULT_BANNER_TIMEOUT
    concurrency: int = DEFAULT_CONCURRENCY
    grab_banner: bool = True
    banner_size: int = DEFAULT_BANNER_SIZE

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {self.concurrency}")
        if self.connect_timeout <= 0:
            raise ValueError(f"connect_timeout must be > 0, got {self.connect_timeout}")
        if self.banner_timeout <= 0:
            raise ValueError(f"banner_timeout must be > 0, got {self.banner_timeout}")
        if self.banner_size < 1:
            raise ValueError(f"banner_size must be >= 1, got {self.banner_size}")


@dataclass(frozen=True)
class ScanResult:
    """Outcome of probing one port on one host."""

    host: str
    port: int
    open: bool
    banner: str = ""
    latency: float = 0.0
    error: BaseException | None = field(default=None, compare=False)

    @property
    def state(self) -> str:
        return "open" if self.open else "closed"

    @property
    def service(self) -> str:
        return get_service_name(self.port)


@dataclass(frozen=True)
class ScanReport:
    """Sorted results of scanning one host.

    ``requested`` is the number of ports asked for. It only differs from
    ``len(results)`` when the scan was cancelled (``partial`` is then true)
    or when the target failed before any probe ran (``error`` is set).
    """

    host: str
    requested: int
    results: tuple[ScanResult, ...] = ()
    cancelled: bool = False
    error: BaseException | None = field(default=None, compare=False)

    @property
    def partial(self) -> bool:
        return len(self.results) < self.requested

    @property
    def open_ports(self) -> list[int]:
        return [r.port for r in self.results if r.open]

    def __iter__(self) -> Iterator[ScanResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def __getitem__(self, index: int) -> ScanResult:
        return self.results[index]


__all__ = [
    "DEFAULT_BANNER_SIZE",
    "DEFAULT_BANNER_TIMEOUT",
    "DEFAULT_CONCURRENCY",
    "DEFAULT_CONNECT_TIMEOUT",
    "ScanReport",
    "ScanResult",
    "ScannerConfig",
]
