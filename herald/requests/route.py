"""HTTP route templates for webhook and interaction endpoints."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from urllib.parse import urlencode

from herald.errors import InvalidArgumentError

_PARAM_RE = re.compile(r"\{(\w+)\}")


@dataclass(frozen=True)
class CompiledRoute:
    method: str
    path: str
    query: dict[str, str] = field(default_factory=dict)

    @property
    def url_path(self) -> str:
        if not self.query:
            return self.path
        return f"{self.path}?{urlencode(self.query)}"

    def with_query(self, **params: str) -> CompiledRoute:
        return CompiledRoute(self.method, self.path, {**self.query, **params})


@dataclass(frozen=True)
class Route:
    method: str
    template: str

    @property
    def param_names(self) -> list[str]:
        return _PARAM_RE.findall(self.template)

    def compile(self, *params: str | int) -> CompiledRoute:
        names = self.param_names
        if len(params) != len(names):
            raise InvalidArgumentError(
                f"{self.template} takes {len(names)} parameter(s), got {len(params)}"
            )
        values = iter(str(p) for p in params)
        path = _PARAM_RE.sub(lambda _m: next(values), self.template)
        return CompiledRoute(self.method, path)


EXECUTE_WEBHOOK = Route("POST", "webhooks/{webhook_id}/{webhook_token}")
INTERACTION_FOLLOWUP = Route("POST", "webhooks/{application_id}/{interaction_token}")
INTERACTION_CALLBACK = Route("POST", "interactions/{interaction_id}/{interaction_token}/callback")
