"""``portscout portscan``: scan ports on a host or address block."""
from __future__ import annotations

import argparse
import asyncio
import contextlib
import json
import logging
import signal
import threading
from typing import Any, Sequence

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress

from ...config import Config
from ...console.report import build_table, reports_to_dict
from ...scanner import (
    ParseError,
    Scanner,
    ScanReport,
    common_ports,
    local_targets,
    parse_port_range,
    parse_targets,
)

logger = logging.getLogger(__name__)

EXAMPLES = """\
examples:
  portscout portscan 192.168.1.1 --ports 80,443
  portscout portscan example.com --ports 1-1024
  portscout portscan 192.168.1.0/24 --common
  portscout portscan 10.0.0.1 --ports 8000-9000 --timeout 5
"""


def register(subparsers: Any) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "portscan",
        help="Scan ports on a target host or network",
        description="Scan ports on a target host or network.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "target",
        nargs="?",
        help="Hostname, IP address or CIDR block (e.g. 192.168.1.0/24)",
    )
    parser.add_argument(
        "-p",
        "--ports",
        help="Comma separated ports or ranges (e.g. 80,443,8000-9000)",
    )
    parser.add_argument("--common", action="store_true", help="Use the common ports preset")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Scan the addresses of this machine's network interfaces",
    )
    parser.add_argument("--timeout", type=float, help="Connect timeout per port in seconds")
    parser.add_argument(
        "--banner-timeout", type=float, help="How long to wait for a banner in seconds"
    )
    parser.add_argument(
        "-c", "--concurrency", type=int, help="Maximum probes in flight at once"
    )
    parser.add_argument(
        "--no-banner", action="store_true", help="Do not read banners from open ports"
    )
    parser.add_argument(
        "--json",
        nargs="?",
        const="-",
        metavar="FILE",
        help="Write results as JSON to FILE or stdout",
    )
    parser.set_defaults(handler=handle)
    return parser


def _resolve_ports(args: argparse.Namespace, parser: argparse.ArgumentParser) -> Sequence[int]:
    if args.common:
        return common_ports()
    if not args.ports:
        parser.error("must specify --ports or --common")
    try:
        return parse_port_range(args.ports)
    except ParseError as exc:
        parser.error(f"invalid --ports: {exc}")


def _resolve_targets(
    args: argparse.Namespace, config: Config, parser: argparse.ArgumentParser
) -> list[str]:
    try:
        max_hosts = config.max_hosts()
    except ValueError as exc:
        parser.error(str(exc))

    targets: list[str] = []
    if args.target:
        try:
            targets.extend(parse_targets(args.target, max_hosts=max_hosts))
        except ParseError as exc:
            parser.error(f"invalid target: {exc}")
    if args.local:
        targets.extend(local_targets())
    if not targets:
        parser.error("target host required (or use --local)")
    return list(dict.fromkeys(targets))


async def run_scan(
    scanner: Scanner,
    targets: Sequence[str],
    ports: Sequence[int],
    *,
    console: Console,
    show_progress: bool = True,
    cancel_event: threading.Event | None = None,
) -> list[ScanReport]:
    """Scan *targets* showing a progress bar; Ctrl-C stops admitting probes."""

    cancel_event = cancel_event or threading.Event()
    loop = asyncio.get_running_loop()
    handler_installed = False
    with contextlib.suppress(NotImplementedError, RuntimeError, ValueError):
        loop.add_signal_handler(signal.SIGINT, cancel_event.set)
        handler_installed = True

    try:
        with Progress(console=console, disable=not show_progress, transient=True) as progress:
            task = progress.add_task("scan", total=len(targets) * len(ports))

            def update(done: int, total: int) -> None:
                progress.advance(task)

            return await scanner.scan_many(cancel_event, targets, ports, update)
    finally:
        if handler_installed:
            loop.remove_signal_handler(signal.SIGINT)


def _check_json_dest(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    if args.json is None or args.json == "-":
        return
    try:
        with open(args.json, "a", encoding="utf-8"):
            pass
    except OSError as exc:
        parser.error(f"cannot write --json file: {exc}")


def _write_json(reports: list[ScanReport], dest: str, console: Console) -> bool:
    data = reports_to_dict(reports)
    if dest == "-":
        console.out(json.dumps(data, indent=2), highlight=False)
        return True
    try:
        with open(dest, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2)
    except OSError as exc:
        logger.error("Failed to write %s: %s", dest, exc)
        console.out(json.dumps(data, indent=2), highlight=False)
        return False
    return True


def handle(
    args: argparse.Namespace,
    config: Config,
    parser: argparse.ArgumentParser,
    console: Console,
) -> int:
    ports = _resolve_ports(args, parser)
    targets = _resolve_targets(args, config, parser)
    _check_json_dest(args, parser)
    try:
        scanner_config = config.scanner_config(
            connect_timeout=args.timeout,
            banner_timeout=args.banner_timeout,
            concurrency=args.concurrency,
            grab_banner=False if args.no_banner else None,
        )
    except ValueError as exc:
        parser.error(str(exc))

    scanner = Scanner(scanner_config)
    reports = asyncio.run(
        run_scan(
            scanner,
            targets,
            ports,
            console=console,
            show_progress=args.json is None,
        )
    )

    written = True
    if args.json is not None:
        written = _write_json(reports, args.json, console)
    else:
        for report in reports:
            if report.error is not None:
                console.print(
                    f"[red]error:[/red] {escape(report.host)}: {escape(str(report.error))}"
                )
                continue
            console.print(build_table(report))

    if any(report.cancelled for report in reports):
        return 130
    if not written or any(report.error is not None for report in reports):
        return 1
    return 0


__all__ = ["handle", "register", "run_scan"]
