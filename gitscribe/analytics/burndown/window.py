"""Milestone window: the day grid every burndown series is laid out on."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date

import pandas as pd

from gitscribe.analytics.metrics.timestamps import DAY, floor_day
from gitscribe.core.errors import InvalidWindow
from gitscribe.core.models import MilestoneModel


@dataclass(slots=True, frozen=True)
class MilestoneWindow:
    title: str
    start_date: date
    due_date: date
    iid: int | None = None

    def __post_init__(self):
        if self.start_date is None or self.due_date is None or self.due_date < self.start_date:
            raise InvalidWindow(self.start_date, self.due_date)

    @classmethod
    def from_milestone(cls, milestone: MilestoneModel) -> MilestoneWindow:
        return cls(
            title=milestone.title,
            start_date=milestone.start_date,
            due_date=milestone.due_date,
            iid=milestone.iid,
        )

    @property
    def start(self) -> pd.Timestamp:
        """Midnight UTC at the start of the first day."""
        return floor_day(self.start_date)

    @property
    def end(self) -> pd.Timestamp:
        """Last instant of the due date (inclusive bound)."""
        return floor_day(self.due_date) + DAY - pd.Timedelta(microseconds=1)

    @property
    def days(self) -> int:
        span = (floor_day(self.due_date) - self.start) / DAY
        return math.ceil(span) + 1

    @property
    def labels(self) -> list[str]:
        return [f"Day {day + 1}" for day in range(self.days)]
