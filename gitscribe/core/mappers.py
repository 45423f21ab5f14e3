"""Mapping raw GitLab API JSON into model instances."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from datetime import date, datetime
from typing import Any

import pandas as pd

from .models import DiscussionModel, GroupModel, IssueModel, MilestoneModel, NoteModel

SECONDS_PER_HOUR = 3600.0


def parse_dt(val: Any) -> datetime | None:
    if not val:
        return None
    ts = pd.to_datetime(val, utc=True, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    return ts.to_pydatetime()


def parse_date(val: Any) -> date | None:
    ts = parse_dt(val)
    if ts is None:
        return None
    return ts.date()


def _author_name(author: Any) -> str | None:
    if not isinstance(author, dict):
        return None
    return author.get("username") or author.get("name")


def _seconds_to_hours(value: Any) -> float:
    seconds = pd.to_numeric(value, errors="coerce")
    if seconds is None or pd.isna(seconds):
        return 0.0
    return float(seconds) / SECONDS_PER_HOUR


def map_group(raw: dict[str, Any]) -> GroupModel:
    return GroupModel(id=raw.get("id"), name=raw.get("name") or "", full_path=raw.get("full_path"))


def map_milestone(raw: dict[str, Any]) -> MilestoneModel:
    return MilestoneModel(
        id=raw.get("id"),
        iid=raw.get("iid"),
        title=raw.get("title") or "",
        start_date=parse_date(raw.get("start_date")),
        due_date=parse_date(raw.get("due_date")),
        state=raw.get("state"),
    )


def map_note(raw: dict[str, Any]) -> NoteModel:
    return NoteModel(
        body=raw.get("body") or "",
        system=bool(raw.get("system")),
        created=parse_dt(raw.get("created_at")),
        updated=parse_dt(raw.get("updated_at")),
        author=_author_name(raw.get("author")),
    )


def map_discussion(raw: dict[str, Any]) -> DiscussionModel:
    notes = tuple(map_note(n) for n in raw.get("notes") or [] if isinstance(n, dict))
    first = notes[0] if notes else None
    return DiscussionModel(
        id=raw.get("id"),
        author=first.author if first else None,
        created=first.created if first else None,
        updated=first.updated if first else None,
        notes=notes,
    )


def map_issue(raw: dict[str, Any], discussion: Iterable[dict[str, Any]] | None = None) -> IssueModel:
    time_stats = raw.get("time_stats") or {}
    return IssueModel(
        id=raw.get("id"),
        iid=raw.get("iid"),
        project_id=raw.get("project_id"),
        title=raw.get("title"),
        created=parse_dt(raw.get("created_at")),
        closed=parse_dt(raw.get("closed_at")),
        state=raw.get("state"),
        labels=tuple(raw.get("labels") or ()),
        time_estimate=_seconds_to_hours(time_stats.get("time_estimate")),
        total_time_spent=_seconds_to_hours(time_stats.get("total_time_spent")),
        discussion=tuple(map_discussion(d) for d in discussion or []),
    )


def with_discussion(issue: IssueModel, discussion: Iterable[dict[str, Any]]) -> IssueModel:
    """Return a copy of ``issue`` carrying the mapped discussion threads."""
    return replace(issue, discussion=tuple(map_discussion(d) for d in discussion))


def issues_to_dataframe(issues: Iterable[IssueModel]) -> pd.DataFrame:
    rows = []
    for i in issues:
        rows.append(
            {
                "iid": i.iid,
                "title": i.title,
                "state": i.state or ("closed" if i.closed else "opened"),
                "created": i.created,
                "closed": i.closed,
                "labels": ", ".join(sorted({lb for lb in i.labels if lb}, key=lambda s: s.lower())),
                "time_estimate": i.time_estimate,
                "total_time_spent": i.total_time_spent,
                "discussion_count": len(i.discussion),
            }
        )
    df = pd.DataFrame(rows)
    for col in ("created", "closed"):
        if col in df.columns:
            df[col] = pd.to_datetime(df[col], utc=True, errors="coerce")
    return df
