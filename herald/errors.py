"""Herald exception hierarchy."""

from __future__ import annotations

from typing import Any


class HeraldError(Exception):
    """Base class for every error raised by herald."""


class InvalidArgumentError(HeraldError, ValueError):
    """A builder argument is missing, malformed, or would exceed a limit.

    Raised synchronously by the mutating call, before any state changes.
    """


class ErrorResponse(HeraldError):
    """A request finished with a non-2xx status."""

    def __init__(self, status: int, payload: dict[str, Any] | None = None) -> None:
        self.status = status
        self.payload = payload or {}
        self.code = self.payload.get("code", 0)
        message = self.payload.get("message", "")
        super().__init__(f"{status}: {self.code} {message}".rstrip())
