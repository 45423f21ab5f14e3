"""Central configuration, constants, and tuning knobs."""

from __future__ import annotations

from dataclasses import dataclass

# =============================================================================
# GitLab Connection Settings
# =============================================================================
GITLAB_DEFAULT_HOST = "https://gitlab.com"
# Milestone dates and note timestamps are compared on UTC day boundaries
TIMEZONE = "UTC"

# =============================================================================
# Effort Parsing
# =============================================================================
# GitLab time tracking convention: one working day is eight hours
HOURS_PER_DAY: int = 8
MINUTES_PER_HOUR: int = 60
STORYPOINTS_LABEL_PREFIX = "storypoints::"

# =============================================================================
# System Note Templates
# =============================================================================
MILESTONE_CHANGE_TITLE_TEMPLATE = 'changed milestone to %"{title}"'
MILESTONE_CHANGE_IID_TEMPLATE = "changed milestone to %{iid}"

# =============================================================================
# Chart Defaults
# =============================================================================
DEFAULT_CHART_WIDTH: int = 1420
DEFAULT_CHART_HEIGHT: int = 720

SERIES_COLORS: dict[str, str] = {
    "Completed tasks": "#E3AC28",
    "Remaining effort": "#4674C1",
    "Ideal burndown": "#558139",
    "Remaining tasks": "#9EC4E4",
}

EFFORT_AXIS_TITLE = "Remaining effort"
TASK_AXIS_TITLE = "Remaining and completed tasks"

# Parallel discussion fetch tuning
# Threads because python-gitlab is synchronous and the calls are I/O bound.
# Keep worker count moderate to avoid hitting GitLab rate limits.
DISCUSSION_FETCH_MAX_WORKERS = 8
DISCUSSION_FETCH_MIN_PARALLEL = 4  # below this, stay sequential to reduce overhead


@dataclass(slots=True)
class AppSettings:
    download_encoding: str = "utf-8"
    csv_file_prefix: str = "burndown"


SETTINGS = AppSettings()

VERSION = "0.2.0"
