"""Request contract shared with the execution engine.

The engine owns transport, retries and rate limits. It asks a RestAction
for its body once via ``finalize_data`` and hands the parsed response back
through ``handle_response``; the action completes the pending Request.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from herald.entities import EntityBuilder, PayloadEntityBuilder
from herald.errors import ErrorResponse
from herald.requests.body import RequestBody
from herald.requests.route import CompiledRoute
from herald.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")


@dataclass
class ApiContext:
    """Session-wide collaborators available to every action."""

    entity_builder: EntityBuilder = field(default_factory=PayloadEntityBuilder)


@dataclass
class Response:
    status: int
    payload: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_ok(self) -> bool:
        return 200 <= self.status < 300

    def get_object(self) -> dict[str, Any]:
        if not isinstance(self.payload, dict):
            raise TypeError(f"Response payload is not an object: {type(self.payload).__name__}")
        return self.payload


class Request(Generic[T]):
    """A pending request; completed exactly once with a value or an error.

    Must be created while an event loop is running.
    """

    def __init__(self, action: RestAction[T], route: CompiledRoute) -> None:
        self.action = action
        self.route = route
        self._future: asyncio.Future[T] = asyncio.get_running_loop().create_future()

    @property
    def api(self) -> ApiContext:
        return self.action.api

    @property
    def done(self) -> bool:
        return self._future.done()

    def on_success(self, value: T) -> None:
        if self._future.done():
            log.warning("request_already_completed", route=self.route.path)
            return
        self._future.set_result(value)

    def on_failure(self, error: BaseException) -> None:
        if self._future.done():
            log.warning("request_already_completed", route=self.route.path, error=str(error))
            return
        self._future.set_exception(error)

    async def result(self) -> T:
        return await self._future


class RestAction(ABC, Generic[T]):
    def __init__(self, api: ApiContext, route: CompiledRoute) -> None:
        self.api = api
        self.route = route

    @abstractmethod
    def finalize_data(self) -> RequestBody | None:
        """Produce the wire body. Called once, when the request is sent."""
        ...

    def handle_success(self, response: Response, request: Request[T]) -> None:
        request.on_success(response.get_object())  # type: ignore[arg-type]

    def handle_response(self, response: Response, request: Request[T]) -> None:
        if response.is_ok:
            self.handle_success(response, request)
            return
        payload = response.payload if isinstance(response.payload, dict) else None
        request.on_failure(ErrorResponse(response.status, payload))
