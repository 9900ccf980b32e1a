"""Application-wide logging configuration using rich handlers."""
from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    level: int | str = logging.INFO,
    log_file: str | None = None,
    *,
    console: Console | None = None,
) -> None:
    """Configure standard logging with RichHandler and optional file output.

    Parameters
    ----------
    level:
        Minimum logging severity, as a number or a name like ``"DEBUG"``.
    log_file:
        Optional path to a log file. If provided, a ``RotatingFileHandler``
        writes plain text logs. If ``None``, the environment variable
        ``PORTSCOUT_LOG_FILE`` is consulted. When neither is set no file
        logging is configured.
    console:
        Console the rich handler writes to. Defaults to stderr so log lines
        never mix with JSON written to stdout.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    if log_file is None:
        log_file = os.getenv("PORTSCOUT_LOG_FILE")

    handlers: list[logging.Handler] = [
        RichHandler(
            console=console or Console(stderr=True),
            rich_tracebacks=True,
            show_path=False,
        )
    ]

    if log_file:
        file_handler = RotatingFileHandler(log_file, maxBytes=5_000_000, backupCount=5)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        handlers=handlers,
        format="%(message)s",
        force=True,
    )


__all__ = ["setup_logging"]
