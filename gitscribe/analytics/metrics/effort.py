"""Effort ledgers derived from an issue's time-tracking notes or labels.

GitLab records every ``/spend`` quick action as a system note of the form
``added 1d 2h 30m of time spent at 2020-02-25``. The ledger collects those
notes into a total plus a per-day breakdown keyed by the date the time was
spent at (which may differ from the day the note was written).

Parsing is permissive: a duration with no recognizable ``d``/``h``/``m``
component contributes zero hours rather than raising.
"""

from __future__ import annotations

import re
from collections import defaultdict
from datetime import date

import pandas as pd

from gitscribe.core.config import HOURS_PER_DAY, MINUTES_PER_HOUR, STORYPOINTS_LABEL_PREFIX
from gitscribe.core.models import DiscussionModel, EffortLedger, IssueModel

from .timestamps import normalize_timestamp

TIME_SPENT_PATTERN = re.compile(r"^added (?P<duration>.+?) of time spent at (?P<date>\d{4}-\d{2}-\d{2})$")
DAYS_PATTERN = re.compile(r"(\d+)d")
HOURS_PATTERN = re.compile(r"(\d+)h")
MINUTES_PATTERN = re.compile(r"(\d+)m")


def _component(pattern: re.Pattern[str], text: str) -> int:
    match = pattern.search(text)
    return int(match.group(1)) if match else 0


def parse_duration_hours(text: str) -> float:
    """Convert GitLab duration text (``1d 2h 30m``) into hours.

    >>> parse_duration_hours("1d 2h 30m")
    10.5
    >>> parse_duration_hours("garbage")
    0.0
    """
    days = _component(DAYS_PATTERN, text)
    hours = _component(HOURS_PATTERN, text)
    minutes = _component(MINUTES_PATTERN, text)
    return float(days * HOURS_PER_DAY + hours + minutes / MINUTES_PER_HOUR)


def parse_time_spent(body: str) -> tuple[float, date] | None:
    """Return ``(hours, spent_at)`` for a time-spent note body, else None."""
    match = TIME_SPENT_PATTERN.match(body.strip())
    if not match:
        return None
    spent_at = pd.to_datetime(match.group("date"), format="%Y-%m-%d", errors="coerce")
    if spent_at is None or pd.isna(spent_at):
        return None
    return parse_duration_hours(match.group("duration")), spent_at.date()


def _time_spent_entry(entry: DiscussionModel, start, end) -> tuple[float, date] | None:
    if not entry.notes:
        return None
    note = entry.notes[0]
    if not note.system:
        return None
    created = normalize_timestamp(note.created)
    if created is None or created < start or created > end:
        return None
    return parse_time_spent(note.body)


def extract_time_ledger(issue: IssueModel, window_start, window_end) -> EffortLedger:
    """Collect logged time for ``issue`` from notes written inside the window.

    Both window bounds are inclusive. The issue is not modified.
    """
    start = normalize_timestamp(window_start)
    end = normalize_timestamp(window_end)
    ledger = EffortLedger()
    if start is None or end is None:
        return ledger
    by_day: dict[date, float] = defaultdict(float)
    for entry in issue.discussion:
        parsed = _time_spent_entry(entry, start, end)
        if parsed is None:
            continue
        hours, spent_at = parsed
        ledger.total += hours
        by_day[spent_at] += hours
    ledger.days = dict(by_day)
    return ledger


def extract_point_estimate(issue: IssueModel) -> EffortLedger:
    """Story points from the first ``storypoints::<n>`` label (granularity-less)."""
    for label in issue.labels:
        if not label.startswith(STORYPOINTS_LABEL_PREFIX):
            continue
        points = pd.to_numeric(label[len(STORYPOINTS_LABEL_PREFIX) :].strip(), errors="coerce")
        if points is None or pd.isna(points):
            return EffortLedger()
        return EffortLedger(total=float(points))
    return EffortLedger()
