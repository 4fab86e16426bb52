"""Interaction callback response types."""

from __future__ import annotations

from enum import IntEnum

from herald.errors import InvalidArgumentError


class ResponseType(IntEnum):
    """How an interaction callback is acknowledged.

    Values are wire codes and must never be renumbered.
    """

    # Respond with a message, showing the user's input
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    # ACK without a message yet, showing the user's input
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5
    # ACK a component interaction, edit the original message later
    DEFERRED_MESSAGE_UPDATE = 6
    # Edit the message the component was attached to
    MESSAGE_UPDATE = 7

    @property
    def raw(self) -> int:
        return int(self.value)

    @classmethod
    def from_raw(cls, code: int) -> ResponseType:
        try:
            return cls(code)
        except ValueError:
            raise InvalidArgumentError(f"Unknown interaction response type: {code!r}") from None
