"""GitLab API client wrapper (python-gitlab, raw attribute dicts)."""

from __future__ import annotations

import logging
from typing import Any

import gitlab
from gitlab.exceptions import GitlabError

from .errors import GitLabFetchError

logger = logging.getLogger(__name__)


class GitLabAPI:
    def __init__(self, host: str, token: str):
        self.host = host.rstrip("/")
        self.client = gitlab.Gitlab(url=self.host, private_token=token)

    def fetch_groups(self) -> list[dict[str, Any]]:
        """Fetch all groups visible to the token owner."""
        logger.debug("Fetching groups")
        try:
            groups = self.client.groups.list(get_all=True)
        except GitlabError as exc:  # pragma: no cover - network error path
            raise GitLabFetchError(f"Failed to fetch groups: {exc}") from exc
        return [g.attributes for g in groups]

    def fetch_milestones(self, group_id: int) -> list[dict[str, Any]]:
        logger.debug("Fetching milestones for group with id %s", group_id)
        try:
            group = self.client.groups.get(group_id, lazy=True)
            milestones = group.milestones.list(get_all=True)
        except GitlabError as exc:  # pragma: no cover - network error path
            raise GitLabFetchError(f"Failed to fetch milestones of group {group_id}: {exc}") from exc
        return [m.attributes for m in milestones]

    def fetch_milestone_issues(self, group_id: int, milestone_id: int) -> list[dict[str, Any]]:
        logger.debug("Fetching issues for milestone %s of group %s", milestone_id, group_id)
        try:
            group = self.client.groups.get(group_id, lazy=True)
            milestone = group.milestones.get(milestone_id, lazy=True)
            # issues() always paginates lazily; drain the iterator here
            issues = list(milestone.issues())
        except GitlabError as exc:  # pragma: no cover - network error path
            raise GitLabFetchError(f"Failed to fetch issues of milestone {milestone_id}: {exc}") from exc
        return [i.attributes for i in issues]

    def fetch_issue_discussion(self, project_id: int, issue_iid: int) -> list[dict[str, Any]]:
        logger.debug("Fetching discussion for issue #%s of project %s", issue_iid, project_id)
        try:
            project = self.client.projects.get(project_id, lazy=True)
            issue = project.issues.get(issue_iid, lazy=True)
            discussions = issue.discussions.list(get_all=True)
        except GitlabError as exc:  # pragma: no cover - network error path
            raise GitLabFetchError(
                f"Failed to fetch discussion of issue #{issue_iid} in project {project_id}: {exc}"
            ) from exc
        return [d.attributes for d in discussions]
