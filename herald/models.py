"""Lightweight message domain values used by the request builders."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from herald.mentions import MentionPolicy

# Message flag bit for responses only the invoking user can see
EPHEMERAL_FLAG = 1 << 6


class MentionType(str, Enum):
    USER = "user"
    ROLE = "role"
    EVERYONE = "everyone"
    HERE = "here"
    CHANNEL = "channel"
    EMOTE = "emote"

    @property
    def parse_key(self) -> str | None:
        """Key used in the allowed_mentions ``parse`` array, if any."""
        return _PARSE_KEYS.get(self)


_PARSE_KEYS: dict[MentionType, str] = {
    MentionType.USER: "users",
    MentionType.ROLE: "roles",
    MentionType.EVERYONE: "everyone",
    MentionType.HERE: "everyone",
}


def is_serializable(value: Any) -> bool:
    if isinstance(value, dict):
        return True
    return callable(getattr(value, "to_dict", None)) or callable(getattr(value, "to_data", None))


def serialize(value: Any) -> dict[str, Any]:
    """Turn an opaque embed/component value into a JSON-ready dict.

    Accepts plain dicts, ``discord.Embed`` (or anything with ``to_dict``)
    and objects exposing ``to_data``.
    """
    if isinstance(value, dict):
        return dict(value)
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    to_data = getattr(value, "to_data", None)
    if callable(to_data):
        return to_data()
    raise TypeError(f"Cannot serialize {type(value).__name__} into a message payload")


@dataclass(frozen=True)
class Channel:
    id: str
    name: str = ""
    guild_id: str | None = None


@dataclass(frozen=True)
class User:
    id: str
    name: str = ""
    bot: bool = False

    @property
    def mention(self) -> str:
        return f"<@{self.id}>"


@dataclass(frozen=True)
class Member:
    user: User
    guild_id: str
    nick: str | None = None

    @property
    def id(self) -> str:
        return self.user.id

    @property
    def mention(self) -> str:
        return self.user.mention


@dataclass(frozen=True)
class Role:
    id: str
    name: str = ""

    @property
    def mention(self) -> str:
        return f"<@&{self.id}>"


@dataclass
class ActionRow:
    """A row of interactive components (buttons, select menus)."""

    components: list[Any] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"type": 1, "components": [serialize(c) for c in self.components]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ActionRow:
        return cls(components=list(data.get("components", [])))


@dataclass
class Message:
    id: str
    channel: Channel | None = None
    content: str = ""
    tts: bool = False
    embeds: list[Any] = field(default_factory=list)
    action_rows: list[ActionRow] = field(default_factory=list)
    flags: int = 0
    author: User | None = None
    webhook_id: str | None = None
    # Only set on locally drafted messages; received messages carry no policy
    allowed_mentions: MentionPolicy | None = None

    @property
    def is_ephemeral(self) -> bool:
        return bool(self.flags & EPHEMERAL_FLAG)

    @property
    def is_webhook_message(self) -> bool:
        return self.webhook_id is not None


class AttachmentOption(Enum):
    # Hide the attachment behind a content warning until clicked
    SPOILER = "spoiler"
