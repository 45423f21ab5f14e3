from datetime import date

import pytest

from gitscribe.analytics.burndown import MilestoneWindow, compute_burndown
from gitscribe.visual.charts import burndown_chart, burndown_frame, render_png

WINDOW = MilestoneWindow("Sprint 1", date(2020, 2, 1), date(2020, 2, 5), iid=3)


def test_burndown_frame_shape():
    frame = burndown_frame(compute_burndown(WINDOW, []))
    assert len(frame) == 5
    assert list(frame["day"]) == ["Day 1", "Day 2", "Day 3", "Day 4", "Day 5"]
    for col in ("Completed tasks", "Remaining effort", "Ideal burndown", "Remaining tasks"):
        assert col in frame.columns


def test_burndown_chart_layers():
    chart = burndown_chart(compute_burndown(WINDOW, []), width=800, height=400)
    vega = chart.to_dict()
    assert vega["title"] == "Sprint 1"
    assert vega["width"] == 800
    assert len(vega["layer"]) == 2
    assert vega["resolve"]["scale"]["y"] == "independent"


def test_render_png():
    pytest.importorskip("vl_convert")
    png = render_png(burndown_chart(compute_burndown(WINDOW, []), width=300, height=200))
    assert png.startswith(b"\x89PNG")
