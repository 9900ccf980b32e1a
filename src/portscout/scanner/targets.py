"""Target expression expansion.

Targets are a bare hostname, an IPv4/IPv6 literal, or a CIDR block. Expansion
is purely arithmetic; hostnames are passed through untouched and only resolved
when a probe connects.
"""

from __future__ import annotations

import ipaddress
import logging
import socket

import psutil

from .errors import ParseError, ParseReason

logger = logging.getLogger(__name__)

# Refuse to materialise blocks larger than this many addresses.
DEFAULT_MAX_HOSTS = 65536


def _parse_network(spec: str) -> ipaddress.IPv4Network | ipaddress.IPv6Network:
    addr_s, prefix_s = spec.split("/", 1)
    try:
        address = ipaddress.ip_address(addr_s.strip())
    except ValueError:
        raise ParseError(spec, ParseReason.INVALID_ADDRESS, "not an IP literal") from None

    prefix_s = prefix_s.strip()
    if not prefix_s.isdigit() or not prefix_s.isascii():
        raise ParseError(spec, ParseReason.INVALID_PREFIX, "prefix must be a number")
    prefix = int(prefix_s)
    if prefix > address.max_prefixlen:
        raise ParseError(
            spec,
            ParseReason.INVALID_PREFIX,
            f"IPv{address.version} prefix must be 0-{address.max_prefixlen}",
        )
    return ipaddress.ip_network(f"{address}/{prefix}", strict=False)


def parse_targets(spec: str, *, max_hosts: int = DEFAULT_MAX_HOSTS) -> tuple[str, ...]:
    """Expand *spec* into the addresses to probe.

    A block of one or two addresses yields every address in it. Larger
    blocks skip the first (network) and last (broadcast) address, so a /30
    gives two hosts and a /24 gives 254. Anything without a ``/`` is returned
    as a single target.
    """

    spec = spec.strip()
    if not spec:
        raise ParseError(spec, ParseReason.EMPTY, "no target given")
    if "/" not in spec:
        return (spec,)

    net = _parse_network(spec)
    total = net.num_addresses
    if total <= 2:
        return tuple(str(ipaddress.ip_address(int(net.network_address) + i)) for i in range(total))

    usable = total - 2
    if max_hosts and usable > max_hosts:
        raise ParseError(
            spec, ParseReason.TOO_LARGE, f"{usable} hosts exceeds limit of {max_hosts}"
        )

    first = int(net.network_address) + 1
    hosts = tuple(str(ipaddress.ip_address(first + i)) for i in range(usable))
    logger.debug("Expanded %s to %d hosts", spec, len(hosts))
    return hosts


def local_targets(*, include_loopback: bool = False) -> list[str]:
    """Return addresses bound to local network interfaces.

    IPv6 link-local scope suffixes are stripped. Results are sorted and
    de-duplicated.
    """

    hosts: set[str] = set()
    for addrs in psutil.net_if_addrs().values():
        for addr in addrs:
            if addr.family not in (socket.AF_INET, socket.AF_INET6):
                continue
            address = addr.address.split("%", 1)[0]
            try:
                ip = ipaddress.ip_address(address)
            except ValueError:
                continue
            if ip.is_loopback and not include_loopback:
                continue
            hosts.add(str(ip))
    return sorted(hosts, key=lambda h: (ipaddress.ip_address(h).version, ipaddress.ip_address(h)))


__all__ = ["DEFAULT_MAX_HOSTS", "local_targets", "parse_targets"]
