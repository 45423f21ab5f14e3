"""Timestamp normalization and day-index arithmetic (pure functions)."""

from __future__ import annotations

import math
from datetime import date, datetime

import pandas as pd
import pytz

from gitscribe.core.config import TIMEZONE

DAY = pd.Timedelta(days=1)


def normalize_timestamp(value, target_tz=None) -> pd.Timestamp | None:
    """Normalize a timestamp-like value into ``target_tz`` (UTC by default).

    Naive values are taken to be UTC. Returns None when the input cannot be
    parsed.
    """
    if value is None or value == "":
        return None
    ts = pd.to_datetime(value, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    try:
        if getattr(ts, "tzinfo", None) is None:
            ts = ts.tz_localize(pytz.UTC)
        return ts.tz_convert(target_tz or pytz.timezone(TIMEZONE))
    except (TypeError, ValueError):
        return None


def floor_day(value) -> pd.Timestamp | None:
    ts = normalize_timestamp(value)
    if ts is None:
        return None
    return ts.floor("D")


def day_offset(value, origin: date | datetime) -> float | None:
    """Fractional number of days from ``origin`` to ``value``."""
    ts = normalize_timestamp(value)
    start = normalize_timestamp(origin)
    if ts is None or start is None:
        return None
    return (ts - start) / DAY


def day_index(value, origin: date | datetime) -> int | None:
    """Day offset rounded to the nearest whole day, halves rounding up."""
    offset = day_offset(value, origin)
    if offset is None:
        return None
    return _round_half_up(offset)


def _round_half_up(value: float) -> int:
    # round() is banker's rounding; day boundaries need half-up
    return math.floor(value + 0.5)
