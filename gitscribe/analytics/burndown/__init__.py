"""Burndown aggregation: milestone day grid, issue timelines, and series."""

from gitscribe.analytics.burndown.aggregator import BurndownSeries, compute_burndown, effort_functions
from gitscribe.analytics.burndown.options import BurndownOptions, EffortSource
from gitscribe.analytics.burndown.timeline import IssueSpan, classify_issue, find_milestone_assignment
from gitscribe.analytics.burndown.window import MilestoneWindow

__all__ = [
    "BurndownOptions",
    "BurndownSeries",
    "EffortSource",
    "IssueSpan",
    "MilestoneWindow",
    "classify_issue",
    "compute_burndown",
    "effort_functions",
    "find_milestone_assignment",
]
