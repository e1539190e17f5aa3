"""Exception types raised by worklog-sync."""

from __future__ import annotations


class WorklogError(Exception):
    """Base class for worklog-sync errors."""


class ConfigError(WorklogError):
    """A required setting is missing."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Please set the {name} environment variable.")


class LogParseError(WorklogError, ValueError):
    """A transition log line could not be parsed."""


class SinkError(WorklogError):
    """The sink rejected or failed to receive a record."""
