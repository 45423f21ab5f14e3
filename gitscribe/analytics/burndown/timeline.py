"""Reconstruct when an issue entered the milestone and when it left it.

The milestone an issue belongs to today says nothing about when it was
planned in, so the entry day is recovered from GitLab's system notes: the
most recent ``changed milestone to %...`` note naming this milestone. The
exit day is simply the close timestamp placed on the window's day grid.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from gitscribe.analytics.metrics.timestamps import day_index, floor_day, normalize_timestamp
from gitscribe.core.config import MILESTONE_CHANGE_IID_TEMPLATE, MILESTONE_CHANGE_TITLE_TEMPLATE
from gitscribe.core.errors import MissingMilestoneAssignmentEvidence
from gitscribe.core.models import DiscussionModel, IssueModel

from .window import MilestoneWindow


@dataclass(slots=True, frozen=True)
class IssueSpan:
    entry_day: int
    exit_day: int | None  # None while the issue is open


def milestone_change_bodies(window: MilestoneWindow) -> frozenset[str]:
    bodies = {MILESTONE_CHANGE_TITLE_TEMPLATE.format(title=window.title)}
    if window.iid is not None:
        bodies.add(MILESTONE_CHANGE_IID_TEMPLATE.format(iid=window.iid))
    return frozenset(bodies)


def _entry_timestamp(entry: DiscussionModel) -> pd.Timestamp | None:
    # System discussions carry a single note; its update time dates the change
    if entry.notes:
        first = entry.notes[0]
        ts = normalize_timestamp(first.updated) or normalize_timestamp(first.created)
        if ts is not None:
            return ts
    return normalize_timestamp(entry.updated) or normalize_timestamp(entry.created)


def _sort_key(pair) -> tuple[bool, int]:
    ts = pair[1]
    return (ts is not None, ts.value if ts is not None else 0)


def newest_first(discussion) -> list[tuple[DiscussionModel, pd.Timestamp | None]]:
    """Discussion entries ordered by timestamp, newest first.

    The sort is stable: equal timestamps keep their original order, and
    entries without any timestamp go last.
    """
    stamped = [(entry, _entry_timestamp(entry)) for entry in discussion]
    return sorted(stamped, key=_sort_key, reverse=True)


def find_milestone_assignment(issue: IssueModel, window: MilestoneWindow) -> pd.Timestamp:
    """Timestamp of the latest system note moving ``issue`` into the milestone."""
    bodies = milestone_change_bodies(window)
    for entry, ts in newest_first(issue.discussion):
        if ts is None:
            continue
        if any(note.system and note.body in bodies for note in entry.notes):
            return ts
    raise MissingMilestoneAssignmentEvidence(issue.iid, issue.title, window.title)


def classify_issue(issue: IssueModel, window: MilestoneWindow) -> IssueSpan:
    assigned = find_milestone_assignment(issue, window)
    # Issues planned in before the window opened count from day 0
    entry_day = max(0, day_index(floor_day(assigned), window.start))
    exit_day = day_index(issue.closed, window.start) if issue.closed is not None else None
    return IssueSpan(entry_day=entry_day, exit_day=exit_day)
