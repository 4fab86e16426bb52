"""Building message entities from raw API payloads."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import discord

from herald.models import ActionRow, Channel, Message, User


class EntityBuilder(ABC):
    @abstractmethod
    def create_message(
        self, payload: dict[str, Any], channel: Channel | None, cache: bool
    ) -> Message: ...


class PayloadEntityBuilder(EntityBuilder):
    """Builds plain ``Message`` values; nothing is cached."""

    def create_message(
        self, payload: dict[str, Any], channel: Channel | None, cache: bool
    ) -> Message:
        author_data = payload.get("author")
        author = None
        if author_data:
            author = User(
                id=str(author_data["id"]),
                name=author_data.get("username", ""),
                bot=author_data.get("bot", False),
            )

        if channel is None and payload.get("channel_id"):
            channel = Channel(id=str(payload["channel_id"]))

        webhook_id = payload.get("webhook_id")
        return Message(
            id=str(payload["id"]),
            channel=channel,
            content=payload.get("content", ""),
            tts=payload.get("tts", False),
            embeds=[discord.Embed.from_dict(e) for e in payload.get("embeds", [])],
            action_rows=[
                ActionRow.from_dict(c)
                for c in payload.get("components", [])
                if c.get("type") == 1
            ],
            flags=payload.get("flags", 0),
            author=author,
            webhook_id=str(webhook_id) if webhook_id is not None else None,
        )
