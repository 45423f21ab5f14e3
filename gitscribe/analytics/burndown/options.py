"""Burndown mode configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from gitscribe.core.config import DEFAULT_CHART_HEIGHT, DEFAULT_CHART_WIDTH


class EffortSource(str, Enum):
    SPENT = "spent"  # time logged through /spend notes
    ESTIMATE = "estimate"  # storypoints::<n> labels


@dataclass(slots=True, frozen=True)
class BurndownOptions:
    effort_source: EffortSource = EffortSource.SPENT
    # Fold logged effort of issues still open at the end of the window
    include_open: bool = False
    # Derive total effort and ideal burndown from estimates instead of spent effort
    use_estimate: bool = False
    # Canvas size, only read by the chart renderer
    width: int = DEFAULT_CHART_WIDTH
    height: int = DEFAULT_CHART_HEIGHT
