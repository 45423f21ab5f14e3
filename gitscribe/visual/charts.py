"""Chart builders (Altair) for the milestone burndown."""

from __future__ import annotations

from io import BytesIO

import altair as alt
import pandas as pd

from gitscribe.analytics.burndown import BurndownSeries
from gitscribe.core.config import (
    DEFAULT_CHART_HEIGHT,
    DEFAULT_CHART_WIDTH,
    EFFORT_AXIS_TITLE,
    SERIES_COLORS,
    TASK_AXIS_TITLE,
)

EFFORT_SERIES = ("Remaining effort", "Ideal burndown")
TASK_SERIES = ("Completed tasks", "Remaining tasks")


def burndown_frame(series: BurndownSeries) -> pd.DataFrame:
    """Wide table with one row per day of the milestone (also used for CSV export)."""
    return pd.DataFrame(
        {
            "day": series.labels,
            "opened": series.issues_opened_by_day,
            "closed": series.issues_closed_by_day,
            "effort_spent": series.effort_spent_by_day,
            "effort_estimated": series.effort_estimated_by_day,
            "Completed tasks": series.completed_tasks,
            "Remaining effort": series.remaining_effort,
            "Ideal burndown": series.ideal_burndown,
            "Remaining tasks": series.remaining_tasks,
        }
    )


def _long(frame: pd.DataFrame, names) -> pd.DataFrame:
    return frame.melt(id_vars=["day"], value_vars=list(names), var_name="series", value_name="value")


def burndown_chart(
    series: BurndownSeries,
    title: str | None = None,
    *,
    width: int = DEFAULT_CHART_WIDTH,
    height: int = DEFAULT_CHART_HEIGHT,
) -> alt.LayerChart:
    """Effort lines on the left axis, task bar/line on the right axis."""
    frame = burndown_frame(series)
    x = alt.X("day:N", sort=list(series.labels), title=None, axis=alt.Axis(labelAngle=0))
    color = alt.Color(
        "series:N",
        scale=alt.Scale(domain=list(SERIES_COLORS), range=list(SERIES_COLORS.values())),
        legend=alt.Legend(title=None, orient="right"),
    )
    tooltip = [
        alt.Tooltip("day:N", title="Day"),
        alt.Tooltip("series:N"),
        alt.Tooltip("value:Q", format=".2f"),
    ]

    tasks = _long(frame, TASK_SERIES)
    task_y = alt.Y("value:Q", title=TASK_AXIS_TITLE, axis=alt.Axis(orient="right"))
    completed = (
        alt.Chart(tasks[tasks["series"] == "Completed tasks"])
        .mark_bar(opacity=0.85)
        .encode(x=x, y=task_y, color=color, tooltip=tooltip)
    )
    remaining_tasks = (
        alt.Chart(tasks[tasks["series"] == "Remaining tasks"])
        .mark_line(strokeWidth=4)
        .encode(x=x, y=task_y, color=color, tooltip=tooltip)
    )

    effort = _long(frame, EFFORT_SERIES)
    effort_y = alt.Y("value:Q", title=EFFORT_AXIS_TITLE, axis=alt.Axis(orient="left"))
    effort_lines = (
        alt.Chart(effort).mark_line(strokeWidth=4).encode(x=x, y=effort_y, color=color, tooltip=tooltip)
    )
    effort_points = (
        alt.Chart(effort[effort["series"] == "Remaining effort"])
        .mark_point(shape="diamond", size=160, filled=True)
        .encode(x=x, y=effort_y, color=color)
    )

    task_layer = alt.layer(completed, remaining_tasks)
    effort_layer = alt.layer(effort_lines, effort_points)
    return (
        alt.layer(task_layer, effort_layer)
        .resolve_scale(y="independent")
        .properties(title=title or series.title, width=width, height=height)
    )


def render_png(chart: alt.TopLevelMixin) -> bytes:
    """Render ``chart`` to PNG bytes (needs the vl-convert backend)."""
    buf = BytesIO()
    chart.save(buf, format="png")
    return buf.getvalue()
