"""Deferred webhook message builder.

Content is collected through chained setters that validate as they go.
Nothing is serialized until the execution engine calls ``finalize_data``,
which picks a JSON body or, when files are attached, a multipart body.

Attachments are one-shot: finalizing moves them out of the builder, so
finalizing again yields a valid body that simply has no files.
"""

from __future__ import annotations

from typing import Any, Iterable

from herald.mentions import MentionPolicy
from herald.models import (
    EPHEMERAL_FLAG,
    ActionRow,
    AttachmentOption,
    Channel,
    Member,
    MentionType,
    Message,
    Role,
    User,
    is_serializable,
    serialize,
)
from herald.requests.base import ApiContext, Request, Response, RestAction
from herald.requests.body import (
    MEDIA_TYPE_OCTET,
    DataSource,
    FormPart,
    RequestBody,
    encode_json,
)
from herald.requests.route import CompiledRoute
from herald.utils import checks
from herald.utils.logging import get_logger

log = get_logger(__name__)

MAX_EMBEDS = 10
MAX_FILES = 10
MAX_ACTION_ROWS = 5
MAX_USERNAME_LENGTH = 128
SPOILER_PREFIX = "SPOILER_"


def normalize_avatar_url(url: str | None) -> str | None:
    """Treat an empty avatar URL as no override."""
    if url is not None and not url:
        return None
    return url


def _is_data_source(data: Any) -> bool:
    return isinstance(data, (bytes, bytearray, memoryview)) or callable(getattr(data, "read", None))


class WebhookMessageAction(RestAction[Message]):
    def __init__(self, api: ApiContext, channel: Channel | None, route: CompiledRoute) -> None:
        super().__init__(api, route)
        self._channel = channel
        self._content = ""
        self._embeds: list[Any] = []
        self._files: dict[str, DataSource] = {}
        self._mentions = MentionPolicy()
        self._components: list[ActionRow] = []
        self._ephemeral = False
        self._tts = False
        self._username: str | None = None
        self._avatar_url: str | None = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def channel(self) -> Channel | None:
        return self._channel

    @property
    def content(self) -> str:
        return self._content

    @property
    def embeds(self) -> list[Any]:
        return list(self._embeds)

    @property
    def files(self) -> dict[str, DataSource]:
        return dict(self._files)

    @property
    def components(self) -> list[ActionRow]:
        return list(self._components)

    @property
    def mention_policy(self) -> MentionPolicy:
        return self._mentions

    @property
    def tts(self) -> bool:
        return self._tts

    @property
    def ephemeral(self) -> bool:
        return self._ephemeral

    @property
    def username(self) -> str | None:
        return self._username

    @property
    def avatar_url(self) -> str | None:
        return self._avatar_url

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def apply_message(self, message: Message) -> WebhookMessageAction:
        """Copy tts, embeds, mentions, action rows and content from ``message``."""
        checks.not_null(message, "Message")
        checks.check(
            len(self._embeds) + len(message.embeds) <= MAX_EMBEDS,
            f"Cannot have more than {MAX_EMBEDS} embeds in a message!",
        )
        checks.check(
            len(self._components) + len(message.action_rows) <= MAX_ACTION_ROWS,
            f"Can only have {MAX_ACTION_ROWS} action rows per message!",
        )
        checks.check(
            all(is_serializable(v) for v in [*message.embeds, *message.action_rows]),
            "Message embeds and action rows must be serializable",
        )
        self._tts = message.tts
        self._embeds.extend(message.embeds)
        if message.allowed_mentions is not None:
            self._mentions.apply(message.allowed_mentions)
        self._components.extend(message.action_rows)
        return self.set_content(message.content)

    def set_content(self, content: str | None) -> WebhookMessageAction:
        self._content = content if content is not None else ""
        return self

    def set_tts(self, tts: bool) -> WebhookMessageAction:
        self._tts = tts
        return self

    def set_ephemeral(self, ephemeral: bool) -> WebhookMessageAction:
        self._ephemeral = ephemeral
        return self

    def set_username(self, name: str | None) -> WebhookMessageAction:
        if name is not None:
            checks.not_empty(name, "Name")
            checks.not_longer(name, MAX_USERNAME_LENGTH, "Name")
        self._username = name
        return self

    def set_avatar_url(self, url: str | None) -> WebhookMessageAction:
        self._avatar_url = normalize_avatar_url(url)
        return self

    def add_embeds(self, embeds: Iterable[Any]) -> WebhookMessageAction:
        checks.not_null(embeds, "Message Embeds")
        embeds = list(embeds)
        checks.none_null(embeds, "Message Embeds")
        for embed in embeds:
            checks.check(
                is_serializable(embed),
                f"Embeds must be dicts or serializable objects, got {type(embed).__name__}",
            )
        checks.check(
            len(self._embeds) + len(embeds) <= MAX_EMBEDS,
            f"Cannot have more than {MAX_EMBEDS} embeds in a message!",
        )
        self._embeds.extend(embeds)
        return self

    def add_embed(self, *embeds: Any) -> WebhookMessageAction:
        return self.add_embeds(embeds)

    def add_file(
        self, name: str, data: DataSource, *options: AttachmentOption
    ) -> WebhookMessageAction:
        checks.not_null(name, "Name")
        checks.not_null(data, "Data")
        checks.none_null(options, "AttachmentOption")
        checks.check(_is_data_source(data), "Data must be bytes or a readable binary stream")
        # < rather than <= since one is added after this
        checks.check(len(self._files) < MAX_FILES, f"Cannot have more than {MAX_FILES} files in a message!")
        if options and options[0] is AttachmentOption.SPOILER:
            name = SPOILER_PREFIX + name
        self._files[name] = data
        return self

    def add_action_rows(self, *rows: ActionRow) -> WebhookMessageAction:
        checks.none_null(rows, "ActionRows")
        for row in rows:
            checks.check(
                is_serializable(row),
                f"Action rows must be ActionRow, dicts or serializable objects, got {type(row).__name__}",
            )
        checks.check(
            len(self._components) + len(rows) <= MAX_ACTION_ROWS,
            f"Can only have {MAX_ACTION_ROWS} action rows per message!",
        )
        self._components.extend(rows)
        return self

    def mention_replied_user(self, mention: bool) -> WebhookMessageAction:
        self._mentions.mention_replied_user(mention)
        return self

    def allowed_mentions(self, types: Iterable[MentionType] | None) -> WebhookMessageAction:
        self._mentions.allowed_mentions(types)
        return self

    def mention(self, *mentionables: User | Member | Role) -> WebhookMessageAction:
        self._mentions.mention(*mentionables)
        return self

    def mention_users(self, *user_ids: str | int) -> WebhookMessageAction:
        self._mentions.mention_users(*user_ids)
        return self

    def mention_roles(self, *role_ids: str | int) -> WebhookMessageAction:
        self._mentions.mention_roles(*role_ids)
        return self

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def to_json(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "content": self._content,
            "tts": self._tts,
        }
        # TODO: interaction follow-ups ignore username/avatar_url, drop them for those routes
        if self._username is not None:
            payload["username"] = self._username
        if self._avatar_url is not None:
            payload["avatar_url"] = self._avatar_url
        if self._ephemeral:
            payload["flags"] = EPHEMERAL_FLAG
        if self._embeds:
            payload["embeds"] = [serialize(e) for e in self._embeds]
        if self._components:
            payload["components"] = [serialize(c) for c in self._components]
        payload["allowed_mentions"] = self._mentions.to_data()
        return payload

    def finalize_data(self) -> RequestBody:
        payload = self.to_json()
        if not self._files:
            log.debug(
                "webhook_message_finalized",
                route=self.route.path,
                multipart=False,
                embeds=len(self._embeds),
                components=len(self._components),
            )
            return RequestBody.from_json(payload)

        # Sources move into the body; the builder keeps no reference to them
        files, self._files = self._files, {}
        parts = [
            FormPart(f"file{index}", data, filename=name, content_type=MEDIA_TYPE_OCTET)
            for index, (name, data) in enumerate(files.items())
        ]
        parts.append(FormPart("payload_json", encode_json(payload)))
        log.debug(
            "webhook_message_finalized",
            route=self.route.path,
            multipart=True,
            files=len(files),
            embeds=len(self._embeds),
            components=len(self._components),
        )
        return RequestBody.from_parts(parts)

    def handle_success(self, response: Response, request: Request[Message]) -> None:
        message = request.api.entity_builder.create_message(
            response.get_object(), self._channel, False
        )
        log.debug("webhook_message_delivered", message_id=message.id, route=self.route.path)
        request.on_success(message)
