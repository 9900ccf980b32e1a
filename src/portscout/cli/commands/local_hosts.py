"""``portscout local``: list addresses bound to local interfaces."""
from __future__ import annotations

import argparse
import json
from typing import Any

from rich.console import Console

from ...config import Config
from ...scanner import local_targets


def register(subparsers: Any) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "local",
        help="List local interface addresses usable as scan targets",
    )
    parser.add_argument(
        "--loopback", action="store_true", help="Include loopback addresses"
    )
    parser.add_argument("--json", action="store_true", help="Print a JSON list")
    parser.set_defaults(handler=handle)
    return parser


def handle(
    args: argparse.Namespace,
    config: Config,
    parser: argparse.ArgumentParser,
    console: Console,
) -> int:
    hosts = local_targets(include_loopback=args.loopback)
    if args.json:
        console.out(json.dumps(hosts), highlight=False)
        return 0
    if not hosts:
        console.print("No local addresses found")
        return 0
    for host in hosts:
        console.print(host, highlight=False)
    return 0


__all__ = ["handle", "register"]
