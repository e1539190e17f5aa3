"""Environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

from worklog_sync.errors import ConfigError

REQUIRED = ("NOTION_DATABASE_ID", "TOMOTABAR_LOG_PATH", "NOTION_API_KEY")
RECOVERY_SUFFIX = ".recovery"


@dataclass(frozen=True)
class Settings:
    notion_api_key: str
    notion_database_id: str
    log_path: Path
    recovery_path: Path


def default_recovery_path(log_path: Path) -> Path:
    return log_path.with_name(log_path.name + RECOVERY_SUFFIX)


def load_settings(environ: Mapping[str, str] | None = None, dotenv_path: str | None = None) -> Settings:
    """Build settings from the environment, reading a .env file first.

    Raises ConfigError for the first required variable that is unset.
    """

    if environ is None:
        load_dotenv(dotenv_path)
        environ = os.environ

    for name in REQUIRED:
        if not environ.get(name):
            raise ConfigError(name)

    log_path = Path(environ["TOMOTABAR_LOG_PATH"]).expanduser()
    recovery_raw = environ.get("WORKLOG_RECOVERY_PATH")
    recovery_path = Path(recovery_raw).expanduser() if recovery_raw else default_recovery_path(log_path)

    return Settings(
        notion_api_key=environ["NOTION_API_KEY"],
        notion_database_id=environ["NOTION_DATABASE_ID"],
        log_path=log_path,
        recovery_path=recovery_path,
    )
