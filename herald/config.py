"""Configuration management with Pydantic Settings + optional YAML."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from herald.mentions import MentionPolicy
from herald.models import MentionType
from herald.requests.route import EXECUTE_WEBHOOK, CompiledRoute
from herald.utils import checks


def get_config_dir() -> Path:
    env = os.environ.get("HERALD_CONFIG_DIR")
    if env:
        return Path(env)
    if sys.platform == "win32":
        return Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming")) / "herald"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "herald"
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "herald"


class MentionsConfig(BaseModel):
    default_types: list[MentionType] = Field(default_factory=lambda: list(MentionType))
    mention_replied_user: bool = True


class WebhookConfig(BaseModel):
    base_url: str = "https://discord.com/api/v10"
    webhook_id: str = ""
    webhook_token: str = ""
    # Ask the API to return the created message instead of 204
    wait: bool = True

    def compile_route(self) -> CompiledRoute:
        checks.is_snowflake(self.webhook_id, "Webhook ID")
        checks.not_empty(self.webhook_token, "Webhook token")
        route = EXECUTE_WEBHOOK.compile(self.webhook_id, self.webhook_token)
        if self.wait:
            route = route.with_query(wait="true")
        return route

    def url_for(self, route: CompiledRoute) -> str:
        return f"{self.base_url.rstrip('/')}/{route.url_path}"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HERALD_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    mentions: MentionsConfig = Field(default_factory=MentionsConfig)
    webhook: WebhookConfig = Field(default_factory=WebhookConfig)
    log_level: str = "INFO"
    log_json: bool = False


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from env vars, optionally overlaying a YAML config."""
    yaml_data: dict[str, Any] = {}

    if config_path is None:
        config_path = os.environ.get("HERALD_CONFIG")
    if config_path is None:
        default = get_config_dir() / "config.yaml"
        if default.exists():
            config_path = default

    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                yaml_data = yaml.safe_load(f) or {}

    # YAML values are init kwargs, so they take precedence over env vars
    return Settings(**yaml_data)


def apply_settings(settings: Settings) -> None:
    """Push configured defaults into process-wide state."""
    MentionPolicy.set_default_mentions(settings.mentions.default_types)
    MentionPolicy.set_default_mention_replied_user(settings.mentions.mention_replied_user)
