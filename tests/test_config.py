"""Tests for configuration and logging helpers."""

from pathlib import Path

import pytest

from escape_room.config import Config
from escape_room.logging import redact_secrets_processor

ENV_VARS = [
    "ESCAPE_ROOM_DATABASE_URL",
    "ESCAPE_ROOM_LOG_LEVEL",
    "ESCAPE_ROOM_LOG_FILE",
    "ESCAPE_ROOM_JSON_LOGS",
    "ESCAPE_ROOM_REDACT_SECRETS",
    "ESCAPE_ROOM_MODEL",
    "ESCAPE_ROOM_NARRATION",
    "ESCAPE_ROOM_NARRATION_TIMEOUT",
    "ESCAPE_ROOM_GENERATION_TIMEOUT",
    "OPENAI_API_KEY",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = Config.from_env()
    assert config.database_url == "sqlite:///./escape_room.db"
    assert config.log_level == "WARNING"
    assert config.log_file is None
    assert not config.json_logs
    assert config.redact_secrets
    assert config.narration
    assert config.narration_timeout == 10.0
    assert config.generation_timeout == 120.0
    assert not config.llm_enabled


def test_from_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ESCAPE_ROOM_DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("ESCAPE_ROOM_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("ESCAPE_ROOM_LOG_FILE", "/tmp/escape.log")
    monkeypatch.setenv("ESCAPE_ROOM_JSON_LOGS", "yes")
    monkeypatch.setenv("ESCAPE_ROOM_REDACT_SECRETS", "false")
    monkeypatch.setenv("ESCAPE_ROOM_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("ESCAPE_ROOM_NARRATION", "0")
    monkeypatch.setenv("ESCAPE_ROOM_NARRATION_TIMEOUT", "2.5")
    monkeypatch.setenv("ESCAPE_ROOM_GENERATION_TIMEOUT", "90")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    config = Config.from_env()

    assert config.database_url == "sqlite:///:memory:"
    assert config.log_level == "DEBUG"
    assert config.log_file == Path("/tmp/escape.log")
    assert config.json_logs
    assert not config.redact_secrets
    assert config.model == "gpt-4o-mini"
    assert not config.narration
    assert config.narration_timeout == 2.5
    assert config.generation_timeout == 90.0
    assert config.llm_enabled


def test_empty_api_key_disables_llm(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("OPENAI_API_KEY", "")
    assert Config.from_env().openai_api_key is None


def test_redact_secrets():
    event = {"event": "application_starting", "api_key": "sk-secret-abcd", "model": "m"}
    redacted = redact_secrets_processor(None, "info", event)
    assert redacted["api_key"] == "***abcd"
    assert redacted["model"] == "m"


def test_redact_leaves_missing_keys_alone():
    event = {"event": "application_starting", "api_key": None}
    assert redact_secrets_processor(None, "info", event)["api_key"] is None
