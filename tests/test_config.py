from pathlib import Path

import pytest

from worklog_sync.config import load_settings
from worklog_sync.errors import ConfigError

ENV = {
    "NOTION_API_KEY": "secret",
    "NOTION_DATABASE_ID": "db",
    "TOMOTABAR_LOG_PATH": "/tmp/tomotabar/log.jsonl",
}


def test_load_settings():
    settings = load_settings(ENV)
    assert settings.notion_api_key == "secret"
    assert settings.notion_database_id == "db"
    assert settings.log_path == Path("/tmp/tomotabar/log.jsonl")
    assert settings.recovery_path == Path("/tmp/tomotabar/log.jsonl.recovery")


def test_explicit_recovery_path():
    settings = load_settings({**ENV, "WORKLOG_RECOVERY_PATH": "/var/tmp/failed.log"})
    assert settings.recovery_path == Path("/var/tmp/failed.log")


@pytest.mark.parametrize("name", sorted(ENV))
def test_missing_setting(name):
    env = {key: value for key, value in ENV.items() if key != name}
    with pytest.raises(ConfigError, match=f"Please set the {name} environment variable."):
        load_settings(env)


def test_empty_setting_counts_as_missing():
    with pytest.raises(ConfigError):
        load_settings({**ENV, "NOTION_API_KEY": ""})


def test_load_settings_from_dotenv(tmp_path, monkeypatch):
    for name in ENV:
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    dotenv = tmp_path / ".env"
    dotenv.write_text("".join(f"{key}={value}\n" for key, value in ENV.items()), encoding="utf-8")

    settings = load_settings(dotenv_path=str(dotenv))

    assert settings.notion_database_id == "db"
