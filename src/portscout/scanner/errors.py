"""Exceptions raised while turning user input into scan work items."""
from __future__ import annotations

from enum import Enum


class ParseReason(str, Enum):
    """Why a port or target expression was rejected."""

    EMPTY = "empty"
    MALFORMED_INTEGER = "malformed_integer"
    OUT_OF_RANGE = "out_of_range"
    INVERTED_RANGE = "inverted_range"
    MALFORMED_RANGE = "malformed_range"
    INVALID_ADDRESS = "invalid_address"
    INVALID_PREFIX = "invalid_prefix"
    TOO_LARGE = "too_large"


class ParseError(ValueError):
    """Raised when a port or target expression cannot be parsed.

    ``token`` holds the raw piece of input that failed and ``reason`` one of
    :class:`ParseReason`. The message always names the token so it can be
    shown to the user as-is.
    """

    def __init__(self, token: str, reason: ParseReason, detail: str | None = None) -> None:
        self.token = token
        self.reason = reason
        self.detail = detail
        message = f"{reason.value.replace('_', ' ')}: {token!r}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


__all__ = ["ParseError", "ParseReason"]
