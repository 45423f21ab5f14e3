"""BurndownService: orchestrates fetching, mapping, and burndown aggregation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor

from gitscribe.analytics.burndown import BurndownOptions, BurndownSeries, compute_burndown

from .config import DISCUSSION_FETCH_MAX_WORKERS, DISCUSSION_FETCH_MIN_PARALLEL
from .gitlab_client import GitLabAPI
from .mappers import map_group, map_issue, map_milestone, with_discussion
from .models import GroupModel, IssueModel, MilestoneModel

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int | None, int | None], None]


class BurndownService:
    def __init__(self, api: GitLabAPI):
        self.api = api

    # ------------------ Lookup Methods ------------------
    def list_groups(self) -> list[GroupModel]:
        return [map_group(g) for g in self.api.fetch_groups()]

    def find_group(self, name: str) -> GroupModel:
        for group in self.list_groups():
            if group.name == name:
                return group
        raise LookupError(f"No group named {name!r} is visible with this token")

    def list_milestones(self, group: GroupModel) -> list[MilestoneModel]:
        logger.debug("Fetching milestones for group %r with id %s", group.name, group.id)
        return [map_milestone(m) for m in self.api.fetch_milestones(group.id)]

    def find_milestone(self, group: GroupModel, title: str) -> MilestoneModel:
        for milestone in self.list_milestones(group):
            if milestone.title == title:
                return milestone
        raise LookupError(f"No milestone titled {title!r} in group {group.name!r}")

    # ------------------ Fetch Methods ------------------
    def fetch_milestone_issues(self, group: GroupModel, milestone: MilestoneModel) -> list[IssueModel]:
        logger.debug("Fetching issues for milestone %r with id %s", milestone.title, milestone.id)
        return [map_issue(raw) for raw in self.api.fetch_milestone_issues(group.id, milestone.id)]

    def fetch_and_merge_discussions(
        self,
        issues: Sequence[IssueModel],
        *,
        progress: ProgressCallback | None = None,
    ) -> list[IssueModel]:
        """Return copies of ``issues`` with their discussion threads attached.

        Discussions are fetched with a thread pool (python-gitlab is
        synchronous and each call is one or more HTTP round trips). Order of
        the returned list matches ``issues``. A failed fetch propagates:
        a burndown computed without an issue's discussion would be wrong.
        """
        if not issues:
            return []
        total = len(issues)
        if progress:
            progress("Loading issue discussions", 0, total)

        if total < DISCUSSION_FETCH_MIN_PARALLEL:
            merged = []
            for idx, issue in enumerate(issues, start=1):
                merged.append(self._merge_discussion(issue))
                if progress:
                    progress("Loading issue discussions", idx, total)
            return merged

        completed = 0
        with ThreadPoolExecutor(max_workers=DISCUSSION_FETCH_MAX_WORKERS) as pool:
            futures = [pool.submit(self._merge_discussion, issue) for issue in issues]
            merged = []
            for fut in futures:
                merged.append(fut.result())
                completed += 1
                if progress:
                    progress("Loading issue discussions", completed, total)
        return merged

    def _merge_discussion(self, issue: IssueModel) -> IssueModel:
        raw = self.api.fetch_issue_discussion(issue.project_id, issue.iid)
        logger.debug("Fetched %s discussion entries for issue #%s %r", len(raw), issue.iid, issue.title)
        return with_discussion(issue, raw)

    # ------------------ Burndown ------------------
    def build_burndown(
        self,
        group_name: str,
        milestone_title: str,
        options: BurndownOptions | None = None,
        *,
        progress: ProgressCallback | None = None,
    ) -> tuple[MilestoneModel, BurndownSeries]:
        milestone, _, series = self.build_report(group_name, milestone_title, options, progress=progress)
        return milestone, series

    def build_report(
        self,
        group_name: str,
        milestone_title: str,
        options: BurndownOptions | None = None,
        *,
        progress: ProgressCallback | None = None,
    ) -> tuple[MilestoneModel, list[IssueModel], BurndownSeries]:
        """Like ``build_burndown`` but also returns the issues with their discussion."""
        logger.debug("Will generate report for milestone %r of group %r", milestone_title, group_name)
        if progress:
            progress(f"Looking up group {group_name}", None, None)
        group = self.find_group(group_name)
        if progress:
            progress(f"Looking up milestone {milestone_title}", None, None)
        milestone = self.find_milestone(group, milestone_title)
        if progress:
            progress(f"Querying issues of {milestone.title}", None, None)
        issues = self.fetch_milestone_issues(group, milestone)
        issues = self.fetch_and_merge_discussions(issues, progress=progress)
        if progress:
            progress("Calculating burndown", None, None)
        return milestone, issues, compute_burndown(milestone, issues, options)
