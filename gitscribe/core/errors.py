"""Error hierarchy for burndown aggregation and GitLab retrieval."""

from __future__ import annotations

from datetime import date


class GitscribeError(Exception):
    """Base error for all gitscribe exceptions."""


class InvalidWindow(GitscribeError, ValueError):
    """The milestone window is missing a date or ends before it starts."""

    def __init__(self, start: date | None, due: date | None) -> None:
        self.start = start
        self.due = due
        if start is None or due is None:
            msg = f"Milestone window needs both a start and a due date (start={start}, due={due})"
        else:
            msg = f"Milestone due date {due} is before its start date {start}"
        super().__init__(msg)


class MissingMilestoneAssignmentEvidence(GitscribeError):
    """No system note records the issue being moved into the milestone."""

    def __init__(self, issue_iid: int | None, issue_title: str | None, milestone_title: str) -> None:
        self.issue_iid = issue_iid
        self.issue_title = issue_title
        self.milestone_title = milestone_title
        super().__init__(
            f"Issue #{issue_iid} ({issue_title!r}) has no 'changed milestone' note for "
            f"milestone {milestone_title!r}"
        )


class GitLabFetchError(GitscribeError, RuntimeError):
    """A GitLab API request failed."""
