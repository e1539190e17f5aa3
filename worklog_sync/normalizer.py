"""Minute quantization and clamping of raw work intervals."""

from __future__ import annotations

import math
from datetime import datetime, timedelta

from worklog_sync.schema import NormalizedInterval

PERIOD = timedelta(minutes=1)
MIN_DURATION = timedelta(minutes=5)
MAX_DURATION = timedelta(minutes=25)


def round_half_up(value: float) -> int:
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def normalize(start: datetime, end: datetime) -> NormalizedInterval | None:
    """Quantize to whole minutes, drop anything under five, cap at twenty-five.

    Time past the cap is discarded rather than carried into a new interval.
    """

    periods = round_half_up((end - start) / PERIOD)
    quantized = periods * PERIOD
    if quantized < MIN_DURATION:
        return None

    clamped = min(quantized, MAX_DURATION)
    return NormalizedInterval(start=start, end=start + clamped)
