"""Command line entry point for portscout."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from rich.console import Console

from .. import __version__
from ..config import Config, ConfigPaths
from ..utils.logging_config import setup_logging
from .commands import local_hosts, portscan

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portscout",
        description="TCP port scanner with banner capture",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config-dir",
        type=Path,
        help="Directory holding config.json (default: $PORTSCOUT_HOME or ~/.portscout)",
    )
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    portscan.register(subparsers)
    local_hosts.register(subparsers)
    return parser


def main(argv: Sequence[str] | None = None, *, console: Console | None = None) -> int:
    """Parse *argv*, configure logging and run the selected command."""

    parser = build_parser()
    args = parser.parse_args(argv)

    paths = ConfigPaths.create(args.config_dir) if args.config_dir else None
    config = Config(paths=paths)
    level = "DEBUG" if args.verbose else config.get("log_level", "INFO")
    setup_logging(level, args.log_file or config.get("log_file"))
    logger.debug("Using config file %s", config.config_file)

    return args.handler(args, config, parser, console or Console())


__all__ = ["build_parser", "main"]
