"""Allowed-mentions policy tracker.

Collects which mentions in an outgoing message may actually notify and
serializes them into the ``allowed_mentions`` object of a message payload.
Unset values fall back to process-wide defaults at serialization time, so
changing the defaults affects every policy that never overrode them.
"""

from __future__ import annotations

from typing import Any, Iterable

from herald.errors import InvalidArgumentError
from herald.models import Member, MentionType, Role, User
from herald.utils import checks
from herald.utils.logging import get_logger

log = get_logger(__name__)


class MentionPolicy:
    _default_types: frozenset[MentionType] = frozenset(MentionType)
    _default_replied_user: bool = True

    def __init__(self) -> None:
        # None means "use the default"; an empty set suppresses everything
        self._types: set[MentionType] | None = None
        self._replied_user: bool | None = None
        # dicts keep insertion order and drop duplicates
        self._users: dict[str, None] = {}
        self._roles: dict[str, None] = {}

    # ------------------------------------------------------------------
    # Process-wide defaults
    # ------------------------------------------------------------------

    @classmethod
    def set_default_mentions(cls, types: Iterable[MentionType] | None) -> None:
        """Set the category set used by policies that never chose one.

        ``None`` restores the built-in default of every mention type.
        """
        if types is None:
            cls._default_types = frozenset(MentionType)
        else:
            types = list(types)
            checks.none_null(types, "MentionTypes")
            cls._default_types = frozenset(types)
        log.debug("mention_defaults_updated", types=sorted(t.value for t in cls._default_types))

    @classmethod
    def get_default_mentions(cls) -> frozenset[MentionType]:
        return cls._default_types

    @classmethod
    def set_default_mention_replied_user(cls, mention: bool) -> None:
        cls._default_replied_user = mention
        log.debug("mention_defaults_updated", replied_user=mention)

    @classmethod
    def is_default_mention_replied_user(cls) -> bool:
        return cls._default_replied_user

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def mention_replied_user(self, mention: bool) -> MentionPolicy:
        self._replied_user = mention
        return self

    def allowed_mentions(self, types: Iterable[MentionType] | None) -> MentionPolicy:
        if types is None:
            self._types = None
            return self
        types = list(types)
        checks.none_null(types, "MentionTypes")
        for mention_type in types:
            checks.check(
                isinstance(mention_type, MentionType),
                f"Expected a MentionType, got {type(mention_type).__name__}",
            )
        self._types = set(types)
        return self

    def mention(self, *mentionables: User | Member | Role) -> MentionPolicy:
        checks.none_null(mentionables, "Mentionable")
        users: list[str] = []
        roles: list[str] = []
        for mentionable in mentionables:
            if isinstance(mentionable, (User, Member)):
                users.append(mentionable.id)
            elif isinstance(mentionable, Role):
                roles.append(mentionable.id)
            else:
                raise InvalidArgumentError(
                    f"Cannot whitelist mentions for {type(mentionable).__name__}"
                )
        self._users.update(dict.fromkeys(users))
        self._roles.update(dict.fromkeys(roles))
        return self

    def mention_users(self, *user_ids: str | int) -> MentionPolicy:
        checks.none_null(user_ids, "User ID")
        ids = [checks.is_snowflake(user_id, "User ID") for user_id in user_ids]
        self._users.update(dict.fromkeys(ids))
        return self

    def mention_roles(self, *role_ids: str | int) -> MentionPolicy:
        checks.none_null(role_ids, "Role ID")
        ids = [checks.is_snowflake(role_id, "Role ID") for role_id in role_ids]
        self._roles.update(dict.fromkeys(ids))
        return self

    def apply(self, other: MentionPolicy) -> MentionPolicy:
        """Replace this policy's state with ``other``'s, unset values included."""
        checks.not_null(other, "MentionPolicy")
        self._types = None if other._types is None else set(other._types)
        self._replied_user = other._replied_user
        self._users = dict(other._users)
        self._roles = dict(other._roles)
        return self

    def copy(self) -> MentionPolicy:
        return MentionPolicy().apply(self)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def types(self) -> frozenset[MentionType]:
        """Effective category set after applying defaults."""
        if self._types is None:
            return self._default_types
        return frozenset(self._types)

    @property
    def replied_user(self) -> bool:
        if self._replied_user is None:
            return self._default_replied_user
        return self._replied_user

    @property
    def mentioned_users(self) -> tuple[str, ...]:
        return tuple(self._users)

    @property
    def mentioned_roles(self) -> tuple[str, ...]:
        return tuple(self._roles)

    def to_data(self) -> dict[str, Any]:
        types = self.types
        parse: list[str] = []
        for mention_type in MentionType:
            key = mention_type.parse_key
            if mention_type in types and key is not None and key not in parse:
                parse.append(key)

        data: dict[str, Any] = {}
        # An explicit whitelist replaces the coarse parse key for that kind
        if self._users:
            if "users" in parse:
                parse.remove("users")
            data["users"] = list(self._users)
        if self._roles:
            if "roles" in parse:
                parse.remove("roles")
            data["roles"] = list(self._roles)
        data["replied_user"] = self.replied_user
        data["parse"] = parse
        return data

    def __repr__(self) -> str:
        return f"MentionPolicy({self.to_data()!r})"
