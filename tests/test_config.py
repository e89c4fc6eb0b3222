from __future__ import annotations

import pytest
from pydantic import ValidationError

from datocms_cma.client import Client
from datocms_cma.core.config import DEFAULT_BASE_URL, ClientSettings, get_user_env_file, write_user_env_vars


def test_settings_read_prefixed_env_vars(monkeypatch) -> None:
    monkeypatch.setenv("DATOCMS_API_TOKEN", "from-env")
    monkeypatch.setenv("DATOCMS_ENVIRONMENT", "staging")
    monkeypatch.setenv("DATOCMS_MAX_RETRIES", "5")

    settings = ClientSettings(_env_file=None)

    assert settings.api_token == "from-env"
    assert settings.environment == "staging"
    assert settings.max_retries == 5
    assert settings.base_url == DEFAULT_BASE_URL


def test_user_env_file_follows_xdg(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert get_user_env_file() == tmp_path / "datocms-cma" / ".env"


def test_write_user_env_vars_merges_and_sorts(tmp_path) -> None:
    env_path = tmp_path / "cfg" / ".env"
    env_path.parent.mkdir()
    env_path.write_text("# comment\nDATOCMS_ENVIRONMENT='old'\n", encoding="utf-8")

    write_user_env_vars({"DATOCMS_API_TOKEN": "abc", "DATOCMS_BASE_URL": None}, env_path=env_path)

    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert lines[1:] == ["DATOCMS_API_TOKEN=abc", "DATOCMS_ENVIRONMENT=old"]


def test_client_overrides_settings_fields(settings) -> None:
    client = Client(settings, api_token="other", environment="sandbox")

    assert client.settings.api_token == "other"
    assert client.settings.environment == "sandbox"
    assert client.requester.settings.environment == "sandbox"


def test_log_level_is_normalized(monkeypatch) -> None:
    monkeypatch.setenv("DATOCMS_LOG_LEVEL", "debug")

    assert ClientSettings(_env_file=None).log_level == "DEBUG"


def test_unknown_log_level_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("DATOCMS_LOG_LEVEL", "verbose")

    with pytest.raises(ValidationError):
        ClientSettings(_env_file=None)
