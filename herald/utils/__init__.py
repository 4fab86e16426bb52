"""Utility modules for herald."""

from herald.utils.logging import get_logger, redact, setup_logging

__all__ = [
    "get_logger",
    "redact",
    "setup_logging",
]
