"""Fold issues onto the milestone day grid and derive the burndown series."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

import pandas as pd

from gitscribe.analytics.metrics.effort import extract_point_estimate, extract_time_ledger
from gitscribe.analytics.metrics.timestamps import day_index
from gitscribe.core.models import EffortLedger, IssueModel, MilestoneModel

from .options import BurndownOptions, EffortSource
from .timeline import IssueSpan, classify_issue
from .window import MilestoneWindow

logger = logging.getLogger(__name__)

LedgerFn = Callable[[IssueModel], EffortLedger]
EstimateFn = Callable[[IssueModel, EffortLedger], float]


@dataclass(slots=True)
class BurndownSeries:
    title: str
    labels: list[str]
    issues_opened_by_day: list[int]
    issues_closed_by_day: list[int]
    effort_spent_by_day: list[float]
    effort_estimated_by_day: list[float]
    completed_tasks: list[int]
    remaining_effort: list[float]
    ideal_burndown: list[float]
    remaining_tasks: list[int]
    total_effort: float

    @property
    def days(self) -> int:
        return len(self.labels)


@dataclass(slots=True)
class _DayGrid:
    opened: list[int]
    closed: list[int]
    spent: list[float]
    estimated: list[float]

    @classmethod
    def empty(cls, days: int) -> _DayGrid:
        return cls([0] * days, [0] * days, [0.0] * days, [0.0] * days)


def effort_functions(window: MilestoneWindow, options: BurndownOptions) -> tuple[LedgerFn, EstimateFn]:
    """Pick the ledger and estimate functions for the configured effort source."""
    if options.effort_source is EffortSource.ESTIMATE:
        return extract_point_estimate, lambda issue, ledger: ledger.total

    def ledger_fn(issue: IssueModel) -> EffortLedger:
        return extract_time_ledger(issue, window.start, window.end)

    def estimate_fn(issue: IssueModel, ledger: EffortLedger) -> float:
        # Issues without a /estimate are estimated at what was actually logged
        return issue.time_estimate if issue.time_estimate > 0 else ledger.total

    return ledger_fn, estimate_fn


def _fold_ledger(grid: _DayGrid, ledger: EffortLedger, window: MilestoneWindow, exit_day: int | None) -> None:
    last = window.days - 1
    if ledger.days:
        for day in sorted(ledger.days):
            idx = min(max(day_index(day, window.start), 0), last)
            grid.spent[idx] += ledger.days[day]
    elif exit_day is not None:
        grid.spent[exit_day] += ledger.total


def _fold_issue(
    grid: _DayGrid,
    span: IssueSpan,
    ledger: EffortLedger,
    estimate: float,
    window: MilestoneWindow,
    options: BurndownOptions,
) -> None:
    days = window.days
    grid.opened[span.entry_day] += 1
    grid.estimated[span.entry_day] += estimate or 0.0
    # Closing exactly on the boundary after the due date still counts for the last day
    if span.exit_day is not None and span.exit_day <= days:
        exit_day = min(span.exit_day, days - 1)
        grid.closed[exit_day] += 1
        _fold_ledger(grid, ledger, window, exit_day)
    elif options.include_open:
        _fold_ledger(grid, ledger, window, None)


def _derive(grid: _DayGrid, window: MilestoneWindow, options: BurndownOptions) -> BurndownSeries:
    days = window.days
    cum_spent = pd.Series(grid.spent, dtype="float64").cumsum()
    cum_estimated = pd.Series(grid.estimated, dtype="float64").cumsum()
    if options.use_estimate:
        total_effort = float(sum(grid.estimated))
        remaining_effort = (cum_estimated - cum_spent).tolist()
    else:
        total_effort = float(sum(grid.spent))
        remaining_effort = (total_effort - cum_spent).tolist()

    if days == 1:
        ideal_burndown = [total_effort]
    else:
        step = total_effort / (days - 1)
        ideal_burndown = [total_effort - step * i for i in range(days)]

    remaining_tasks = (
        pd.Series(grid.opened, dtype="int64").cumsum() - pd.Series(grid.closed, dtype="int64").cumsum()
    )
    return BurndownSeries(
        title=window.title,
        labels=window.labels,
        issues_opened_by_day=list(grid.opened),
        issues_closed_by_day=list(grid.closed),
        effort_spent_by_day=list(grid.spent),
        effort_estimated_by_day=list(grid.estimated),
        completed_tasks=list(grid.closed),
        remaining_effort=[float(v) for v in remaining_effort],
        ideal_burndown=ideal_burndown,
        remaining_tasks=[int(v) for v in remaining_tasks.tolist()],
        total_effort=total_effort,
    )


def compute_burndown(
    milestone: MilestoneModel | MilestoneWindow,
    issues: Iterable[IssueModel],
    options: BurndownOptions | None = None,
) -> BurndownSeries:
    """Build the burndown series for ``issues`` over the milestone window.

    Parameters
    ----------
    milestone : MilestoneModel or MilestoneWindow
        Milestone whose start and due dates define the day grid.
    issues : iterable of IssueModel
        Issues with their discussion already fetched. Never modified.
    options : BurndownOptions, optional
        Effort source and totals mode.

    Returns
    -------
    BurndownSeries
        Per-day arrays plus the cumulative series, all ``window.days`` long.

    Raises
    ------
    InvalidWindow
        The milestone has no dates or is due before it starts.
    MissingMilestoneAssignmentEvidence
        An issue has no system note moving it into this milestone.
    """
    options = options or BurndownOptions()
    if isinstance(milestone, MilestoneWindow):
        window = milestone
    else:
        window = MilestoneWindow.from_milestone(milestone)
    days = window.days
    ledger_fn, estimate_fn = effort_functions(window, options)
    grid = _DayGrid.empty(days)

    issues = list(issues)
    logger.debug("Parsing data for milestone %r of %s days from %s issues", window.title, days, len(issues))
    for issue in issues:
        span = classify_issue(issue, window)
        if span.entry_day >= days:
            logger.debug("Skipping issue #%s: added after the milestone's due date", issue.iid)
            continue
        if span.exit_day is not None and span.exit_day < 0:
            logger.debug("Skipping issue #%s: closed before the milestone's start date", issue.iid)
            continue
        ledger = ledger_fn(issue)
        _fold_issue(grid, span, ledger, estimate_fn(issue, ledger), window, options)

    return _derive(grid, window, options)
