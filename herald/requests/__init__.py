"""Request builders and the contract they share with the execution engine."""

from herald.requests.base import ApiContext, Request, Response, RestAction
from herald.requests.body import FormPart, RequestBody
from herald.requests.route import (
    EXECUTE_WEBHOOK,
    INTERACTION_CALLBACK,
    INTERACTION_FOLLOWUP,
    CompiledRoute,
    Route,
)
from herald.requests.webhook_message import WebhookMessageAction

__all__ = [
    "ApiContext",
    "Request",
    "Response",
    "RestAction",
    "FormPart",
    "RequestBody",
    "Route",
    "CompiledRoute",
    "EXECUTE_WEBHOOK",
    "INTERACTION_FOLLOWUP",
    "INTERACTION_CALLBACK",
    "WebhookMessageAction",
]
