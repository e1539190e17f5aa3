"""Sinks that receive delivery records."""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

import requests

from worklog_sync.errors import SinkError
from worklog_sync.schema import DeliveryRecord

logger = logging.getLogger(__name__)

NOTION_API_BASE = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"
TITLE_PROPERTY = "Name"
DATE_PROPERTY = "Working Time"


class Sink(Protocol):
    def create(self, record: DeliveryRecord) -> None:
        """Store one record, raising on failure."""


def work_properties(record: DeliveryRecord) -> dict[str, Any]:
    """Notion page properties for a work period."""
    return {
        TITLE_PROPERTY: {
            "title": [{"text": {"content": record.title}}],
        },
        DATE_PROPERTY: {
            "date": {"start": record.start, "end": record.end},
        },
    }


class NotionSink:
    """Creates one page per work period in a Notion database.

    Built once at startup from settings and handed to the pipeline.
    """

    def __init__(
        self,
        api_key: str,
        database_id: str,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ):
        self.database_id = database_id
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {api_key}",
                "Notion-Version": NOTION_VERSION,
                "Content-Type": "application/json",
            }
        )

    def create(self, record: DeliveryRecord) -> None:
        payload = {
            "parent": {"database_id": self.database_id},
            "properties": work_properties(record),
        }
        try:
            resp = self.session.post(f"{NOTION_API_BASE}/pages", json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise SinkError(f"Notion request failed: {exc}") from exc

        if not resp.ok:
            raise SinkError(f"Notion API error: {resp.status_code} {resp.text}")
        logger.debug("Created Notion page for %s", record.title)


class MemorySink:
    """Keeps records in memory; used for dry runs and tests."""

    def __init__(self, fail_on: Callable[[DeliveryRecord], bool] | None = None):
        self.records: list[DeliveryRecord] = []
        self.attempts = 0
        self.fail_on = fail_on

    def create(self, record: DeliveryRecord) -> None:
        self.attempts += 1
        if self.fail_on is not None and self.fail_on(record):
            raise SinkError(f"Refused record {record.title}")
        self.records.append(record)
