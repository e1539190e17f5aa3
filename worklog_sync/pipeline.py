"""Delivery pipeline and batch orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from worklog_sync.adapters.jsonl_adapter import read_events, to_log_line, truncate
from worklog_sync.config import Settings
from worklog_sync.normalizer import normalize
from worklog_sync.records import build_record
from worklog_sync.recovery import RecoveryLog
from worklog_sync.reducer import is_in_progress, reduce_intervals
from worklog_sync.schema import (
    BatchOutcome,
    BatchStatus,
    DeliveryRecord,
    NormalizedInterval,
    RawInterval,
    TransitionEvent,
)
from worklog_sync.sink import Sink

logger = logging.getLogger(__name__)


@dataclass
class DeliveryReport:
    delivered: list[RawInterval] = field(default_factory=list)
    failed: list[RawInterval] = field(default_factory=list)


def normalize_all(intervals: Iterable[RawInterval]) -> tuple[list[tuple[RawInterval, NormalizedInterval]], int]:
    """Pair each raw interval with its normalized form; count the dropped ones."""

    pairs = []
    dropped = 0
    for raw in intervals:
        normalized = normalize(raw.start, raw.end)
        if normalized is None:
            logger.debug("Dropping short interval %s - %s", raw.start.isoformat(), raw.end.isoformat())
            dropped += 1
            continue
        pairs.append((raw, normalized))
    return pairs, dropped


def deliver(
    pairs: Iterable[tuple[RawInterval, NormalizedInterval]],
    sink: Sink,
    recovery: RecoveryLog,
) -> DeliveryReport:
    """Send each period in order; requeue the raw interval of every failure."""

    report = DeliveryReport()
    for raw, normalized in pairs:
        record = build_record(raw, normalized)
        try:
            sink.create(record)
        except Exception as exc:  # noqa: BLE001
            logger.error("Error posting work period %s: %s", record.title, exc)
            recovery.requeue(raw)
            report.failed.append(raw)
            continue
        report.delivered.append(raw)
    return report


def _tail_open(events: list[TransitionEvent]) -> bool:
    return is_in_progress([to_log_line(event) for event in events[-1:]])


def merge_batch(
    primary_events: list[TransitionEvent],
    recovery_events: list[TransitionEvent],
) -> tuple[list[TransitionEvent], BatchStatus | None]:
    """Merge both logs and decide whether the batch may be delivered.

    Returns the merged events and, when the batch is held back, the status
    explaining why (None when it is ready).
    """

    # recovery lines go after the primary ones
    events = primary_events + recovery_events
    if not events:
        return events, BatchStatus.EMPTY_LOG
    if _tail_open(events) or _tail_open(primary_events):
        return events, BatchStatus.IN_PROGRESS
    return events, None


def load_batch(settings: Settings) -> tuple[list[TransitionEvent], BatchStatus | None]:
    """Read both logs without modifying either; see merge_batch."""

    events, held = merge_batch(read_events(settings.log_path), RecoveryLog(settings.recovery_path).read_events())
    if held is BatchStatus.EMPTY_LOG:
        logger.error("No log lines found in %s", settings.log_path)
    elif held is BatchStatus.IN_PROGRESS:
        logger.info("Work period still in progress, nothing to deliver yet")
    return events, held


def sync(settings: Settings, sink: Sink) -> BatchOutcome:
    """Run one batch: merge logs, reduce, normalize, deliver, acknowledge.

    Every file is parsed before any file is modified, so a malformed line
    (LogParseError) leaves both logs as they were.
    """

    events, held = load_batch(settings)
    if held is not None:
        return BatchOutcome(status=held)

    recovery = RecoveryLog(settings.recovery_path)
    recovery.clear()
    pairs, dropped = normalize_all(reduce_intervals([to_log_line(event) for event in events]))
    report = deliver(pairs, sink, recovery)
    truncate(settings.log_path)

    logger.info(
        "Delivered %d work periods (%d queued for retry, %d too short)",
        len(report.delivered),
        len(report.failed),
        dropped,
    )
    return BatchOutcome(
        status=BatchStatus.DELIVERED,
        delivered=len(report.delivered),
        failed=len(report.failed),
        dropped=dropped,
    )


def preview(events: list[TransitionEvent]) -> list[tuple[RawInterval, NormalizedInterval, DeliveryRecord]]:
    """What a sync would deliver for these events, without touching any file.

    Callers gate the events with merge_batch or load_batch first.
    """

    pairs, _ = normalize_all(reduce_intervals([to_log_line(event) for event in events]))
    return [(raw, normalized, build_record(raw, normalized)) for raw, normalized in pairs]
