"""Recovery log for work periods whose delivery failed."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from worklog_sync.adapters.jsonl_adapter import read_events, serialize_event, truncate
from worklog_sync.schema import RawInterval, TransitionEvent

logger = logging.getLogger(__name__)


def _unix(value: datetime) -> int | float:
    seconds = value.timestamp()
    return int(seconds) if seconds.is_integer() else seconds


def requeue_events(raw: RawInterval) -> tuple[TransitionEvent, TransitionEvent]:
    """Transition pair that reduces back to exactly ``raw``."""

    return (
        TransitionEvent(event="startStop", from_state="idle", to_state="work", timestamp=_unix(raw.start)),
        TransitionEvent(event="startStop", from_state="work", to_state="idle", timestamp=_unix(raw.end)),
    )


class RecoveryLog:
    """Transition log of failed deliveries, replayed on the next run."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def read_events(self) -> list[TransitionEvent]:
        if not self.path.exists() or self.path.stat().st_size == 0:
            return []
        events = read_events(self.path)
        logger.info("Loaded %d recovery events from %s", len(events), self.path)
        return events

    def clear(self) -> None:
        truncate(self.path)

    def _ends_mid_line(self) -> bool:
        if not self.path.exists() or self.path.stat().st_size == 0:
            return False
        with open(self.path, "rb") as handle:
            handle.seek(-1, 2)
            return handle.read(1) != b"\n"

    def requeue(self, raw: RawInterval) -> None:
        lines = "\n".join(serialize_event(event) for event in requeue_events(raw))
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if self._ends_mid_line():
            lines = "\n" + lines
        with open(self.path, "a", encoding="utf-8") as handle:
            handle.write(lines + "\n")
        logger.info("Queued %s - %s for retry", raw.start.isoformat(), raw.end.isoformat())
