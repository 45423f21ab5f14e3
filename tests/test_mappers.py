from datetime import date

from gitscribe.core.mappers import issues_to_dataframe, map_discussion, map_issue, map_milestone

RAW_ISSUE = {
    "id": 101,
    "iid": 12,
    "project_id": 4,
    "title": "Fix login",
    "state": "closed",
    "created_at": "2020-01-30T08:00:00.000Z",
    "closed_at": "2020-02-03T16:30:00.000Z",
    "labels": ["backend", "storypoints::3"],
    "time_stats": {"time_estimate": 28800, "total_time_spent": 5400},
}

RAW_DISCUSSION = {
    "id": "6a9c1750b37d513a43987b574953fceb50b03ce7",
    "individual_note": True,
    "notes": [
        {
            "id": 1126,
            "body": 'changed milestone to %"Sprint 1"',
            "author": {"username": "root", "name": "Administrator"},
            "created_at": "2020-02-01T09:00:00.000Z",
            "updated_at": "2020-02-01T09:05:00.000Z",
            "system": True,
        }
    ],
}


def test_map_issue_converts_time_stats_to_hours():
    issue = map_issue(RAW_ISSUE)
    assert issue.iid == 12
    assert issue.project_id == 4
    assert issue.labels == ("backend", "storypoints::3")
    assert issue.time_estimate == 8.0
    assert issue.total_time_spent == 1.5
    assert issue.closed.isoformat() == "2020-02-03T16:30:00+00:00"
    assert issue.discussion == ()


def test_map_issue_open_has_no_close():
    issue = map_issue({**RAW_ISSUE, "closed_at": None, "time_stats": None})
    assert issue.closed is None
    assert issue.time_estimate == 0.0


def test_map_discussion_uses_first_note():
    entry = map_discussion(RAW_DISCUSSION)
    assert entry.author == "root"
    assert len(entry.notes) == 1
    assert entry.notes[0].system is True
    assert entry.updated.isoformat() == "2020-02-01T09:05:00+00:00"


def test_map_milestone_dates():
    milestone = map_milestone(
        {"id": 9, "iid": 3, "title": "Sprint 1", "start_date": "2020-02-01", "due_date": "2020-02-05"}
    )
    assert milestone.start_date == date(2020, 2, 1)
    assert milestone.due_date == date(2020, 2, 5)


def test_issues_to_dataframe():
    df = issues_to_dataframe([map_issue(RAW_ISSUE, [RAW_DISCUSSION])])
    assert list(df["iid"]) == [12]
    assert df.loc[0, "labels"] == "backend, storypoints::3"
    assert df.loc[0, "discussion_count"] == 1
