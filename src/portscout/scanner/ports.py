"""Port expression parsing and the common ports table."""

from __future__ import annotations

from .errors import ParseError, ParseReason

MIN_PORT = 1
MAX_PORT = 65535

# Well-known service ports used when no explicit port list is given.
COMMON_PORTS: tuple[int, ...] = (
    21,    # ftp
    22,    # ssh
    23,    # telnet
    25,    # smtp
    53,    # dns
    80,    # http
    110,   # pop3
    143,   # imap
    443,   # https
    445,   # smb
    3306,  # mysql
    3389,  # rdp
    5432,  # postgresql
    6379,  # redis
    8080,  # http-alt
    8443,  # https-alt
)


def common_ports() -> list[int]:
    """Return a copy of :data:`COMMON_PORTS`."""

    return list(COMMON_PORTS)


def _get_port_number(value: str, token: str) -> int:
    """Return ``value`` as a port number, reporting failures against *token*."""

    value = value.strip()
    if not value.isdigit() or not value.isascii():
        raise ParseError(token, ParseReason.MALFORMED_INTEGER)
    port = int(value)
    if not MIN_PORT <= port <= MAX_PORT:
        raise ParseError(
            token, ParseReason.OUT_OF_RANGE, f"ports must be {MIN_PORT}-{MAX_PORT}"
        )
    return port


def parse_port_range(spec: str) -> tuple[int, ...]:
    """Return the sorted, de-duplicated ports described by *spec*.

    ``spec`` is a comma separated list of single ports (``22``) and inclusive
    ranges (``8000-8010``). Whitespace around tokens is ignored. Any invalid
    token raises :class:`ParseError` naming that token; nothing is silently
    dropped.
    """

    spec = spec.strip()
    if not spec:
        raise ParseError(spec, ParseReason.EMPTY, "no ports given")

    ports: set[int] = set()
    for part in spec.split(","):
        token = part.strip()
        if "-" in token:
            bounds = token.split("-")
            if len(bounds) != 2:
                raise ParseError(token, ParseReason.MALFORMED_RANGE, "expected start-end")
            start = _get_port_number(bounds[0], token)
            end = _get_port_number(bounds[1], token)
            if start > end:
                raise ParseError(
                    token, ParseReason.INVERTED_RANGE, f"start {start} > end {end}"
                )
            ports.update(range(start, end + 1))
        else:
            ports.add(_get_port_number(token, token))

    return tuple(sorted(ports))


__all__ = [
    "COMMON_PORTS",
    "MAX_PORT",
    "MIN_PORT",
    "common_ports",
    "parse_port_range",
]
