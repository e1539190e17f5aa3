"""Fold ordered timer transitions into raw work intervals."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Sequence

from worklog_sync.schema import LogLine, RawInterval


def reduce_intervals(lines: Iterable[LogLine]) -> list[RawInterval]:
    """Extract closed work intervals from lines given in chronological order.

    A non-stopping line opens an interval unless one is already open; a
    stopping line closes the open interval. An interval still open when the
    lines run out is incomplete and is not returned.
    """

    intervals: list[RawInterval] = []
    work_start: datetime | None = None

    for line in lines:
        if line.stopping:
            if work_start is None:
                continue
            if line.date > work_start:
                intervals.append(RawInterval(start=work_start, end=line.date))
            work_start = None
        elif work_start is None:
            work_start = line.date

    return intervals


def is_in_progress(lines: Sequence[LogLine]) -> bool:
    """True when the last line leaves a work interval open."""

    return bool(lines) and not lines[-1].stopping
