from datetime import date

import pandas as pd

from gitscribe.analytics.metrics.effort import (
    extract_point_estimate,
    extract_time_ledger,
    parse_duration_hours,
    parse_time_spent,
)
from gitscribe.core.models import DiscussionModel, IssueModel, NoteModel

WINDOW_START = pd.Timestamp("2020-02-01", tz="UTC")
WINDOW_END = pd.Timestamp("2020-02-05T23:59:59", tz="UTC")


def _entry(body, at, system=True):
    ts = pd.Timestamp(at, tz="UTC").to_pydatetime()
    note = NoteModel(body=body, system=system, created=ts, updated=ts, author="root")
    return DiscussionModel(id=None, author="root", created=ts, updated=ts, notes=(note,))


def _issue(*entries, labels=()):
    return IssueModel(
        id=1,
        iid=1,
        project_id=1,
        title="Sample",
        created=None,
        closed=None,
        labels=tuple(labels),
        discussion=tuple(entries),
    )


def test_parse_duration_components():
    assert parse_duration_hours("1d 2h 30m") == 10.5
    assert parse_duration_hours("3h") == 3.0
    assert parse_duration_hours("45m") == 0.75
    assert parse_duration_hours("2d") == 16.0


def test_parse_duration_is_permissive():
    assert parse_duration_hours("a while") == 0.0


def test_parse_time_spent_note():
    assert parse_time_spent("added 1d 2h 30m of time spent at 2020-02-25") == (10.5, date(2020, 2, 25))
    assert parse_time_spent("changed milestone to %3") is None


def test_time_ledger_accumulates_by_spent_date():
    issue = _issue(
        _entry("added 2h of time spent at 2020-02-03", "2020-02-03T10:00"),
        _entry("added 30m of time spent at 2020-02-03", "2020-02-04T09:00"),
        _entry("added 1d of time spent at 2020-02-02", "2020-02-04T09:30"),
    )
    ledger = extract_time_ledger(issue, WINDOW_START, WINDOW_END)
    assert ledger.total == 10.5
    assert ledger.days == {date(2020, 2, 3): 2.5, date(2020, 2, 2): 8.0}


def test_time_ledger_ignores_user_comments_and_notes_outside_window():
    issue = _issue(
        _entry("added 2h of time spent at 2020-02-03", "2020-02-03T10:00", system=False),
        _entry("added 4h of time spent at 2020-01-30", "2020-01-31T23:00"),
        _entry("added 1h of time spent at 2020-02-06", "2020-02-06T00:00"),
        _entry("added 1h of time spent at 2020-02-05", "2020-02-05T18:00"),
    )
    ledger = extract_time_ledger(issue, WINDOW_START, WINDOW_END)
    assert ledger.total == 1.0
    assert ledger.days == {date(2020, 2, 5): 1.0}


def test_time_ledger_empty_when_nothing_matches():
    ledger = extract_time_ledger(_issue(), WINDOW_START, WINDOW_END)
    assert ledger.total == 0
    assert ledger.days == {}


def test_point_estimate_from_label():
    ledger = extract_point_estimate(_issue(labels=["bug", "storypoints::5"]))
    assert ledger.total == 5.0
    assert ledger.days == {}


def test_point_estimate_missing_or_malformed_label():
    assert extract_point_estimate(_issue(labels=["bug"])).total == 0
    assert extract_point_estimate(_issue(labels=["storypoints::lots"])).total == 0
