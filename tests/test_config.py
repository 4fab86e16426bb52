"""Tests for settings loading."""

import pytest

from herald.config import MentionsConfig, Settings, WebhookConfig, apply_settings, load_settings
from herald.errors import InvalidArgumentError
from herald.mentions import MentionPolicy
from herald.models import MentionType


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    monkeypatch.setenv("HERALD_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.delenv("HERALD_CONFIG", raising=False)


class TestDefaults:
    def test_settings_defaults(self):
        settings = Settings()
        assert settings.log_level == "INFO"
        assert settings.log_json is False
        assert settings.mentions.default_types == list(MentionType)
        assert settings.mentions.mention_replied_user is True
        assert settings.webhook.base_url == "https://discord.com/api/v10"
        assert settings.webhook.wait is True

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("HERALD_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("HERALD_WEBHOOK__WEBHOOK_ID", "123")
        settings = Settings()
        assert settings.log_level == "DEBUG"
        assert settings.webhook.webhook_id == "123"


class TestLoadSettings:
    def test_yaml_file(self, tmp_path):
        path = tmp_path / "herald.yaml"
        path.write_text(
            "log_json: true\n"
            "mentions:\n"
            "  default_types: [user, role]\n"
            "  mention_replied_user: false\n"
            "webhook:\n"
            "  webhook_id: '999'\n"
            "  webhook_token: abc\n"
        )
        settings = load_settings(path)
        assert settings.log_json is True
        assert settings.mentions.default_types == [MentionType.USER, MentionType.ROLE]
        assert settings.mentions.mention_replied_user is False
        assert settings.webhook.webhook_token == "abc"

    def test_config_env_var(self, monkeypatch, tmp_path):
        path = tmp_path / "other.yaml"
        path.write_text("log_level: WARNING\n")
        monkeypatch.setenv("HERALD_CONFIG", str(path))
        assert load_settings().log_level == "WARNING"

    def test_default_config_dir(self, tmp_path):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("log_level: ERROR\n")
        assert load_settings().log_level == "ERROR"

    def test_yaml_beats_env_and_env_fills_gaps(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HERALD_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("HERALD_LOG_JSON", "true")
        path = tmp_path / "herald.yaml"
        path.write_text("log_level: WARNING\n")
        settings = load_settings(path)
        assert settings.log_level == "WARNING"
        assert settings.log_json is True

    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_settings(tmp_path / "nope.yaml").log_level == "INFO"


class TestWebhookConfig:
    def test_compile_route_with_wait(self):
        cfg = WebhookConfig(webhook_id="123", webhook_token="tok")
        route = cfg.compile_route()
        assert route.url_path == "webhooks/123/tok?wait=true"
        assert cfg.url_for(route) == "https://discord.com/api/v10/webhooks/123/tok?wait=true"

    def test_compile_route_without_wait(self):
        cfg = WebhookConfig(webhook_id="123", webhook_token="tok", wait=False)
        assert cfg.compile_route().url_path == "webhooks/123/tok"

    def test_unconfigured_webhook_rejected(self):
        with pytest.raises(InvalidArgumentError):
            WebhookConfig().compile_route()


class TestApplySettings:
    def test_pushes_mention_defaults(self):
        settings = Settings(
            mentions=MentionsConfig(default_types=[MentionType.ROLE], mention_replied_user=False)
        )
        apply_settings(settings)
        assert MentionPolicy.get_default_mentions() == frozenset({MentionType.ROLE})
        assert MentionPolicy().to_data() == {"replied_user": False, "parse": ["roles"]}
