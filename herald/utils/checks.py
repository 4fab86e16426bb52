"""Argument checks shared by the request builders.

Every helper raises InvalidArgumentError with a message naming the
offending argument, so callers can validate first and mutate after.
"""

from __future__ import annotations

import re
from typing import Any, Iterable

from herald.errors import InvalidArgumentError

_SNOWFLAKE_RE = re.compile(r"^\d{1,20}$")


def check(condition: bool, message: str) -> None:
    if not condition:
        raise InvalidArgumentError(message)


def not_null(value: Any, name: str) -> None:
    if value is None:
        raise InvalidArgumentError(f"{name} may not be None")


def none_null(values: Iterable[Any] | None, name: str) -> None:
    not_null(values, name)
    for value in values:  # type: ignore[union-attr]
        if value is None:
            raise InvalidArgumentError(f"{name} may not contain None")


def not_empty(value: str | None, name: str) -> None:
    not_null(value, name)
    if not value:
        raise InvalidArgumentError(f"{name} may not be empty")


def not_longer(value: str, max_length: int, name: str) -> None:
    if len(value) > max_length:
        raise InvalidArgumentError(
            f"{name} may not be longer than {max_length} characters (got {len(value)})"
        )


def is_snowflake(value: str | int, name: str = "ID") -> str:
    """Validate a Discord snowflake and return it as a string."""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise InvalidArgumentError(
            f"{name} must be a string or integer, got {type(value).__name__}"
        )
    text = str(value)
    if not _SNOWFLAKE_RE.match(text):
        raise InvalidArgumentError(f"{name} must be a valid snowflake, got {text!r}")
    return text
