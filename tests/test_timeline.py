from datetime import date, datetime

import pandas as pd
import pytest

from gitscribe.analytics.burndown import MilestoneWindow, classify_issue, find_milestone_assignment
from gitscribe.analytics.burndown.timeline import newest_first
from gitscribe.core.errors import InvalidWindow, MissingMilestoneAssignmentEvidence
from gitscribe.core.models import DiscussionModel, IssueModel, NoteModel

WINDOW = MilestoneWindow("Sprint 1", date(2020, 2, 1), date(2020, 2, 5), iid=3)


def _ts(value):
    return pd.Timestamp(value, tz="UTC").to_pydatetime()


def _entry(body, at, system=True, entry_id=None):
    note = NoteModel(body=body, system=system, created=_ts(at), updated=_ts(at))
    return DiscussionModel(id=entry_id, author="root", created=_ts(at), updated=_ts(at), notes=(note,))


def _issue(*entries, closed=None):
    return IssueModel(
        id=7,
        iid=7,
        project_id=1,
        title="Timeline",
        created=None,
        closed=_ts(closed) if closed else None,
        discussion=tuple(entries),
    )


def test_window_days():
    assert WINDOW.days == 5
    assert WINDOW.labels == ["Day 1", "Day 2", "Day 3", "Day 4", "Day 5"]
    assert MilestoneWindow("One", date(2020, 2, 1), date(2020, 2, 1)).days == 1


def test_window_truncates_datetimes_to_days():
    window = MilestoneWindow("Sprint 1", datetime(2020, 2, 1, 15, 30), datetime(2020, 2, 5, 9, 0))
    assert window.days == 5
    assert window.start == pd.Timestamp("2020-02-01", tz="UTC")
    assert window.end == pd.Timestamp("2020-02-05T23:59:59.999999", tz="UTC")


def test_window_rejects_inverted_or_missing_dates():
    with pytest.raises(InvalidWindow):
        MilestoneWindow("Bad", date(2020, 2, 5), date(2020, 2, 1))
    with pytest.raises(InvalidWindow):
        MilestoneWindow("Undated", None, date(2020, 2, 1))


def test_newest_first_is_stable():
    a = _entry("a", "2020-02-01T10:00", entry_id="a")
    b = _entry("b", "2020-02-02T10:00", entry_id="b")
    c = _entry("c", "2020-02-01T10:00", entry_id="c")
    ordered = [entry.id for entry, _ in newest_first([a, b, c])]
    assert ordered == ["b", "a", "c"]


def test_latest_matching_note_wins():
    issue = _issue(
        _entry('changed milestone to %"Sprint 1"', "2020-01-20T08:00"),
        _entry('changed milestone to %"Sprint 2"', "2020-02-04T08:00"),
        _entry("changed milestone to %3", "2020-02-02T15:00"),
        _entry("looks good", "2020-02-03T08:00", system=False),
    )
    assert find_milestone_assignment(issue, WINDOW) == pd.Timestamp("2020-02-02T15:00", tz="UTC")


def test_user_comment_is_not_evidence():
    issue = _issue(_entry('changed milestone to %"Sprint 1"', "2020-02-02T08:00", system=False))
    with pytest.raises(MissingMilestoneAssignmentEvidence) as excinfo:
        find_milestone_assignment(issue, WINDOW)
    assert excinfo.value.issue_iid == 7
    assert excinfo.value.milestone_title == "Sprint 1"


def test_entry_day_floors_and_clamps():
    late_in_day = _issue(_entry('changed milestone to %"Sprint 1"', "2020-02-02T23:30"))
    assert classify_issue(late_in_day, WINDOW).entry_day == 1
    planned_early = _issue(_entry('changed milestone to %"Sprint 1"', "2020-01-15T08:00"))
    assert classify_issue(planned_early, WINDOW).entry_day == 0


def test_exit_day_rounds_close_timestamp():
    added = _entry('changed milestone to %"Sprint 1"', "2020-02-01T08:00")
    assert classify_issue(_issue(added, closed="2020-02-03T11:00"), WINDOW).exit_day == 2
    assert classify_issue(_issue(added, closed="2020-02-03T13:00"), WINDOW).exit_day == 3
    assert classify_issue(_issue(added, closed="2020-02-03T12:00"), WINDOW).exit_day == 3
    assert classify_issue(_issue(added), WINDOW).exit_day is None
