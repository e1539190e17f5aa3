"""Delivery record construction."""

from __future__ import annotations

from datetime import datetime, timezone

from worklog_sync.schema import DeliveryRecord, NormalizedInterval, RawInterval

TITLE_PREFIX = "⏳"


def minute_duration(start: datetime, end: datetime) -> float:
    """Unrounded duration in minutes."""

    return (end - start).total_seconds() / 60


def format_minutes(value: float) -> str:
    # whole numbers render without a trailing ".0"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def to_iso(value: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix."""

    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def build_record(raw: RawInterval, normalized: NormalizedInterval) -> DeliveryRecord:
    """Title the record from the raw duration, date it from the normalized one."""

    minutes = minute_duration(raw.start, raw.end)
    return DeliveryRecord(
        title=f"{TITLE_PREFIX} {format_minutes(minutes)}",
        start=to_iso(normalized.start),
        end=to_iso(normalized.end),
    )
