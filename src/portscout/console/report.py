"""Turn :class:`ScanReport` objects into rows, rich tables and JSON data.

Rows are emitted in exactly the order the report holds them; nothing here
sorts or drops results.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from rich.table import Table
from rich.text import Text

from ..scanner.models import ScanReport, ScanResult

HEADERS: tuple[str, ...] = ("PORT", "STATE", "SERVICE", "LATENCY", "BANNER")

# Banners longer than this are shortened in the table (not in JSON output).
MAX_BANNER_WIDTH = 30


def _short_banner(banner: str, width: int = MAX_BANNER_WIDTH) -> str:
    banner = " ".join(banner.split())
    if not banner:
        return "-"
    if len(banner) > width:
        return banner[: width - 3] + "..."
    return banner


def result_row(result: ScanResult) -> List[str]:
    """Return the display cells for *result* matching :data:`HEADERS`."""

    return [
        str(result.port),
        result.state,
        result.service,
        f"{result.latency * 1000:.1f}ms",
        _short_banner(result.banner) if result.open else "-",
    ]


def result_rows(report: ScanReport | Iterable[ScanResult]) -> List[List[str]]:
    """Return one row per result, in the order given."""

    return [result_row(r) for r in report]


def build_table(report: ScanReport) -> Table:
    """Return a rich table for *report* with a caption summarising it."""

    table = Table(*HEADERS, title=f"Scan results for {report.host}")
    for result, row in zip(report, result_rows(report)):
        style = "bold green" if result.open else "dim"
        table.add_row(*(Text(cell, style=style) for cell in row))

    caption = f"{len(report.open_ports)} open / {len(report)} scanned"
    if report.partial:
        caption += f" (partial: {len(report)} of {report.requested} ports)"
    if report.error is not None:
        caption += f" error: {report.error}"
    table.caption = Text(caption)
    return table


def result_to_dict(result: ScanResult) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "port": result.port,
        "state": result.state,
        "service": result.service,
        "latency": round(result.latency, 6),
    }
    if result.banner:
        data["banner"] = result.banner
    if result.error is not None:
        data["error"] = str(result.error) or type(result.error).__name__
    return data


def report_to_dict(report: ScanReport) -> Dict[str, Any]:
    """Return *report* serialized to a JSON-serializable dict."""

    data: Dict[str, Any] = {
        "host": report.host,
        "requested": report.requested,
        "scanned": len(report),
        "open": report.open_ports,
        "cancelled": report.cancelled,
        "partial": report.partial,
        "results": [result_to_dict(r) for r in report],
    }
    if report.error is not None:
        data["error"] = str(report.error)
    return data


def reports_to_dict(reports: Iterable[ScanReport]) -> Dict[str, Any]:
    """Return a JSON-serializable mapping of host -> report data."""

    return {report.host: report_to_dict(report) for report in reports}


__all__ = [
    "HEADERS",
    "MAX_BANNER_WIDTH",
    "build_table",
    "report_to_dict",
    "reports_to_dict",
    "result_row",
    "result_rows",
    "result_to_dict",
]
