"""Core data schema for timer transitions and work periods."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

TIMER_STATES = {"idle", "work", "rest"}
STOPPING_STATES = {"idle", "rest"}
TRANSITION_EVENTS = {"startStop", "timerFired"}


@dataclass(frozen=True)
class TransitionEvent:
    """One timer state change read from (or written to) a transition log."""

    event: str
    from_state: str
    to_state: str
    timestamp: float

    @property
    def stopping(self) -> bool:
        return self.to_state in STOPPING_STATES


@dataclass(frozen=True)
class LogLine:
    """The part of a transition the reducer looks at."""

    stopping: bool
    date: datetime


@dataclass(frozen=True)
class RawInterval:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class NormalizedInterval:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class DeliveryRecord:
    """External representation of a work period."""

    title: str
    start: str
    end: str


class BatchStatus(str, Enum):
    DELIVERED = "delivered"
    EMPTY_LOG = "empty_log"
    IN_PROGRESS = "in_progress"


@dataclass
class BatchOutcome:
    """Result of one sync invocation."""

    status: BatchStatus
    delivered: int = 0
    failed: int = 0
    dropped: int = 0
