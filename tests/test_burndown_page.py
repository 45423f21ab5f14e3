from gitscribe.analytics.burndown import EffortSource
from gitscribe.core.gitlab_client import GitLabAPI
from gitscribe.core.models import GroupModel
from gitscribe.core.service import BurndownService
from gitscribe.pages.burndown import cached_milestones, options_from_controls


class CountingAPI(GitLabAPI):
    def __init__(self):
        self.host = "https://gitlab.example.com"
        self.milestone_calls = []

    def fetch_milestones(self, group_id):
        self.milestone_calls.append(group_id)
        return [{"id": 9, "iid": 3, "title": f"Sprint {group_id}", "start_date": "2020-02-01", "due_date": "2020-02-05"}]


def test_milestones_fetched_once_per_group():
    api = CountingAPI()
    svc = BurndownService(api)
    cache = {}
    team, other = GroupModel(id=2, name="Team"), GroupModel(id=1, name="Other")

    first = cached_milestones(svc, team, cache)
    again = cached_milestones(svc, team, cache)
    assert again is first
    assert [m.title for m in first] == ["Sprint 2"]
    assert api.milestone_calls == [2]

    cached_milestones(svc, other, cache)
    assert api.milestone_calls == [2, 1]
    assert set(cache) == {1, 2}


def test_options_from_controls():
    options = options_from_controls(storypoints=True, include_open=False, use_estimate=True)
    assert options.effort_source is EffortSource.ESTIMATE
    assert options.use_estimate
    assert not options.include_open
    assert options_from_controls(False, True, False).effort_source is EffortSource.SPENT
