"""JSON-lines adapter for timer transition logs."""

from __future__ import annotations

import json
import logging
import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from worklog_sync.errors import LogParseError
from worklog_sync.schema import TIMER_STATES, TRANSITION_EVENTS, LogLine, TransitionEvent

logger = logging.getLogger(__name__)

_TIMESTAMP_FIELDS = ("unixTimestamp", "timestamp")


def _parse_timestamp(item: dict, line_number: int) -> float:
    for field in _TIMESTAMP_FIELDS:
        if field not in item:
            continue
        value = item[field]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise LogParseError(f"Line {line_number}: invalid {field} {value!r}")
        try:
            if not math.isfinite(value):
                raise ValueError("not finite")
            unix_to_datetime(value)
        except (OverflowError, OSError, ValueError) as exc:
            raise LogParseError(f"Line {line_number}: invalid {field} {value!r}") from exc
        return value
    raise LogParseError(f"Line {line_number}: missing timestamp")


def _decode(line: str, line_number: int) -> dict:
    try:
        item = json.loads(line)
    except json.JSONDecodeError as exc:
        raise LogParseError(f"Line {line_number}: malformed JSON") from exc

    if not isinstance(item, dict):
        raise LogParseError(f"Line {line_number}: expected a JSON object")
    return item


def _parse_item(item: dict, line_number: int) -> TransitionEvent:
    from_state = item.get("fromState")
    to_state = item.get("toState")
    for name, state in (("fromState", from_state), ("toState", to_state)):
        if state not in TIMER_STATES:
            raise LogParseError(f"Line {line_number}: invalid {name} {state!r}")

    event = item.get("event", "startStop")
    if event not in TRANSITION_EVENTS:
        raise LogParseError(f"Line {line_number}: invalid event {event!r}")

    return TransitionEvent(
        event=event,
        from_state=from_state,
        to_state=to_state,
        timestamp=_parse_timestamp(item, line_number),
    )


def parse_event(line: str, line_number: int = 1) -> TransitionEvent:
    """Parse one JSON log line into a transition event."""

    return _parse_item(_decode(line, line_number), line_number)


def parse_lines(lines: Iterable[str]) -> list[TransitionEvent]:
    """Parse raw log lines, skipping blanks and non-transition records.

    The first malformed line aborts parsing with a LogParseError.
    """

    events: list[TransitionEvent] = []
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        item = _decode(line, line_number)
        if item.get("type", "transition") != "transition":
            logger.debug("Skipping non-transition record on line %d", line_number)
            continue
        events.append(_parse_item(item, line_number))
    return events


def read_events(file_path: str | Path) -> list[TransitionEvent]:
    """Read a transition log file; a missing file reads as empty."""

    path = Path(file_path)
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning("Log file %s does not exist", path)
        return []

    try:
        return parse_lines(content.split("\n"))
    except LogParseError as exc:
        raise LogParseError(f"{path}: {exc}") from exc


def unix_to_datetime(timestamp: float) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def to_log_line(event: TransitionEvent) -> LogLine:
    return LogLine(stopping=event.stopping, date=unix_to_datetime(event.timestamp))


def serialize_event(event: TransitionEvent) -> str:
    """Render an event as one log line in the timer's own format."""

    return json.dumps(
        {
            "event": event.event,
            "fromState": event.from_state,
            "toState": event.to_state,
            "unixTimestamp": event.timestamp,
            "type": "transition",
        },
        ensure_ascii=False,
    )


def truncate(file_path: str | Path) -> None:
    """Empty a log file in place; a missing file stays missing."""

    path = Path(file_path)
    if path.exists():
        path.write_text("", encoding="utf-8")
