"""Herald command line: preview the wire body of a drafted webhook message."""

from __future__ import annotations

import contextlib
import json
from pathlib import Path
from typing import Any

import click
import discord
import yaml

from herald.config import Settings, apply_settings, load_settings
from herald.errors import HeraldError
from herald.models import ActionRow, AttachmentOption, Channel, MentionType
from herald.requests.base import ApiContext
from herald.requests.body import RequestBody
from herald.requests.route import EXECUTE_WEBHOOK, CompiledRoute
from herald.requests.webhook_message import WebhookMessageAction
from herald.utils.logging import get_logger, redact, setup_logging

log = get_logger(__name__)

# Used when no webhook is configured; previews never hit the network
_PREVIEW_ROUTE = EXECUTE_WEBHOOK.compile("0", "preview")


def build_action(
    draft: dict[str, Any],
    route: CompiledRoute,
    base_dir: Path,
    stack: contextlib.ExitStack,
) -> WebhookMessageAction:
    """Apply a YAML draft to a fresh builder. Opened files join ``stack``."""
    channel_id = draft.get("channel_id")
    channel = Channel(id=str(channel_id)) if channel_id else None
    action = WebhookMessageAction(ApiContext(), channel, route)

    action.set_content(draft.get("content"))
    action.set_tts(bool(draft.get("tts", False)))
    action.set_ephemeral(bool(draft.get("ephemeral", False)))
    action.set_username(draft.get("username"))
    action.set_avatar_url(draft.get("avatar_url"))

    embeds = draft.get("embeds") or []
    if embeds:
        # non-mapping entries go through as-is so the builder rejects them
        action.add_embeds(discord.Embed.from_dict(e) if isinstance(e, dict) else e for e in embeds)
    rows = draft.get("components") or []
    if rows:
        action.add_action_rows(*(ActionRow.from_dict(r) if isinstance(r, dict) else r for r in rows))

    for entry in draft.get("files") or []:
        path = base_dir / entry["path"]
        name = entry.get("name") or path.name
        options = [AttachmentOption.SPOILER] if entry.get("spoiler") else []
        action.add_file(name, stack.enter_context(open(path, "rb")), *options)

    mentions = draft.get("mentions") or {}
    if "types" in mentions:
        types = mentions["types"]
        action.allowed_mentions(None if types is None else [MentionType(t) for t in types])
    if mentions.get("users"):
        action.mention_users(*mentions["users"])
    if mentions.get("roles"):
        action.mention_roles(*mentions["roles"])
    if "replied_user" in mentions:
        action.mention_replied_user(bool(mentions["replied_user"]))
    return action


def describe_body(body: RequestBody) -> dict[str, Any]:
    summary: dict[str, Any] = {"content_type": body.content_type, "payload": body.json()}
    if body.is_multipart:
        summary["files"] = [
            {"part": part.name, "filename": part.filename}
            for part in body.parts
            if part.filename is not None
        ]
    return summary


def _resolve_route(settings: Settings) -> CompiledRoute:
    if settings.webhook.webhook_id and settings.webhook.webhook_token:
        return settings.webhook.compile_route()
    return _PREVIEW_ROUTE


@click.group()
@click.option("--config", "config_path", default=None, help="Path to config YAML file")
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, log_level: str | None) -> None:
    """Herald, webhook message builder."""
    settings = load_settings(config_path)
    if log_level:
        settings.log_level = log_level
    setup_logging(level=settings.log_level, json_output=settings.log_json)
    apply_settings(settings)
    ctx.obj = settings


@cli.command()
@click.argument("draft_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def preview(settings: Settings, draft_path: Path) -> None:
    """Print the request a YAML draft would send."""
    with open(draft_path) as f:
        draft = yaml.safe_load(f) or {}

    route = _resolve_route(settings)
    with contextlib.ExitStack() as stack:
        try:
            action = build_action(draft, route, draft_path.parent, stack)
            body = action.finalize_data()
        except (HeraldError, ValueError, KeyError, TypeError, OSError) as e:
            raise click.ClickException(f"Invalid draft: {e}") from e
        summary = {
            "method": route.method,
            "url": redact(settings.webhook.url_for(route)),
            **describe_body(body),
        }

    log.info("draft_previewed", multipart=body.is_multipart, route=route.path)
    click.echo(json.dumps(summary, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    cli()
