"""Port scanning engine: parsing, probing and coordinated scans."""

from __future__ import annotations

from .coordinator import Scanner, ScanState, scan_ports_sync
from .errors import ParseError, ParseReason
from .models import ScannerConfig, ScanReport, ScanResult
from .ports import COMMON_PORTS, common_ports, parse_port_range
from .probe import probe
from .services import get_service_name
from .targets import local_targets, parse_targets

__all__ = [
    "COMMON_PORTS",
    "ParseError",
    "ParseReason",
    "ScanReport",
    "ScanResult",
    "ScanState",
    "Scanner",
    "ScannerConfig",
    "common_ports",
    "get_service_name",
    "local_targets",
    "parse_port_range",
    "parse_targets",
    "probe",
    "scan_ports_sync",
]
