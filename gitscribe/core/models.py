"""Domain data models for GitLab milestones, issues, and discussions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(slots=True, frozen=True)
class NoteModel:
    body: str
    system: bool
    created: datetime | None
    updated: datetime | None
    author: str | None = None


@dataclass(slots=True, frozen=True)
class DiscussionModel:
    id: str | None
    author: str | None
    created: datetime | None
    updated: datetime | None
    notes: tuple[NoteModel, ...] = ()


@dataclass(slots=True, frozen=True)
class IssueModel:
    id: int | None
    iid: int | None
    project_id: int | None
    title: str | None
    created: datetime | None
    closed: datetime | None
    state: str | None = None
    labels: tuple[str, ...] = ()
    # Hours, converted from GitLab's time_stats seconds
    time_estimate: float = 0.0
    total_time_spent: float = 0.0
    discussion: tuple[DiscussionModel, ...] = ()


@dataclass(slots=True, frozen=True)
class MilestoneModel:
    id: int | None
    iid: int | None
    title: str
    start_date: date | None
    due_date: date | None
    state: str | None = None


@dataclass(slots=True, frozen=True)
class GroupModel:
    id: int
    name: str
    full_path: str | None = None


@dataclass(slots=True)
class EffortLedger:
    """Effort attributed to one issue: a total plus an optional per-day split."""

    total: float = 0.0
    days: dict[date, float] = field(default_factory=dict)
