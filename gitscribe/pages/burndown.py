"""Burndown page: pick a group milestone and chart its burndown."""

from __future__ import annotations

import logging

import streamlit as st

from gitscribe.analytics.burndown import BurndownOptions, EffortSource
from gitscribe.app import register_page
from gitscribe.core.config import DEFAULT_CHART_HEIGHT, DEFAULT_CHART_WIDTH, SETTINGS
from gitscribe.core.errors import GitscribeError
from gitscribe.core.mappers import issues_to_dataframe
from gitscribe.core.service import BurndownService
from gitscribe.visual.charts import burndown_chart, burndown_frame, render_png
from gitscribe.visual.progress import ProgressReporter

logger = logging.getLogger(__name__)


def options_from_controls(storypoints: bool, include_open: bool, use_estimate: bool) -> BurndownOptions:
    return BurndownOptions(
        effort_source=EffortSource.ESTIMATE if storypoints else EffortSource.SPENT,
        include_open=include_open,
        use_estimate=use_estimate,
        width=DEFAULT_CHART_WIDTH,
        height=DEFAULT_CHART_HEIGHT,
    )


def cached_milestones(service: BurndownService, group, cache: dict) -> list:
    """Milestones of ``group``, fetched once per group and kept in ``cache``."""
    if group.id not in cache:
        cache[group.id] = service.list_milestones(group)
    return cache[group.id]


@register_page("Burndown")
def burndown_page():
    st.title("Milestone Burndown")
    service: BurndownService | None = st.session_state.get("burndown_service")
    if service is None:
        st.warning("Initialize connection on Setup page first.")
        return

    if "groups" not in st.session_state:
        st.session_state["groups"] = service.list_groups()
    groups = st.session_state["groups"]
    if not groups:
        st.info("No groups visible with this token.")
        return
    group = st.selectbox("Group", groups, format_func=lambda g: g.name)
    milestones = cached_milestones(service, group, st.session_state.setdefault("milestones_by_group", {}))
    if not milestones:
        st.info(f"Group {group.name} has no milestones.")
        return
    milestone = st.selectbox("Milestone", milestones, format_func=lambda m: m.title)

    col1, col2, col3 = st.columns(3)
    storypoints = col1.checkbox("Story points", help="Use storypoints::<n> labels instead of logged time")
    include_open = col2.checkbox("Include open issues", help="Count effort logged on issues still open")
    use_estimate = col3.checkbox("Use estimate", help="Derive totals from estimated rather than spent effort")

    if st.button("Build Burndown", type="primary"):
        options = options_from_controls(storypoints, include_open, use_estimate)
        reporter = ProgressReporter(f"Building burndown for {milestone.title}")
        try:
            _, issues, series = service.build_report(
                group.name, milestone.title, options, progress=reporter.callback
            )
        except (GitscribeError, LookupError) as exc:
            logger.warning("Burndown for %r failed: %s", milestone.title, exc)
            reporter.error(f"Failed to build burndown: {exc}")
            return
        st.session_state["burndown_series"] = series
        st.session_state["burndown_issues"] = issues_to_dataframe(issues)
        # Rendered once per build; reruns reuse the bytes
        st.session_state["burndown_png"] = render_png(burndown_chart(series))
        reporter.complete(f"Burndown ready: {series.days} day(s), total effort {series.total_effort:g}.")

    series = st.session_state.get("burndown_series")
    if series is None:
        st.info("No burndown computed yet.")
        return
    chart = burndown_chart(series)
    st.altair_chart(chart, use_container_width=True)
    frame = burndown_frame(series)
    st.dataframe(frame, hide_index=True)
    issues_df = st.session_state.get("burndown_issues")
    if issues_df is not None and not issues_df.empty:
        st.subheader("Issues")
        st.dataframe(issues_df, hide_index=True)
    st.download_button(
        "Download CSV",
        data=frame.to_csv(index=False).encode(SETTINGS.download_encoding),
        file_name=f"{SETTINGS.csv_file_prefix}_{series.title}.csv",
        mime="text/csv",
    )
    st.download_button(
        "Download PNG",
        data=st.session_state["burndown_png"],
        file_name=f"{SETTINGS.csv_file_prefix}_{series.title}.png",
        mime="image/png",
    )
