from irt_explorer.formula import format_formula
from irt_explorer.graph_engine import series_names
from irt_explorer.state import ViewState


def test_initial_render_creates_plot_and_formula(pipeline, chart, math_surface):
    pipeline.render_initial(ViewState())
    kind, container_id, series, layout, render_config = chart.calls[0]
    assert kind == "create"
    assert container_id == "plot-container"
    assert len(series) == 4
    assert layout["xaxis"]["title"]["text"] == "Ability (θ)"
    assert render_config["displayModeBar"] is False
    assert render_config["scrollZoom"] is False
    target, expression, options = math_surface.calls[0]
    assert target == "formula-display"
    assert expression == format_formula(1.0, 0.0, 0.0, 1.0)
    assert options == {"display_mode": True, "fail_silently": True}


def test_update_preserves_current_layout(pipeline, chart):
    pipeline.render_initial(ViewState(show_information=False))
    chart.layouts["plot-container"]["xaxis"]["range"] = [-1.0, 2.0]
    chart.layouts["plot-container"]["yaxis"]["range"] = [0.2, 0.6]
    chart.layouts["plot-container"]["yaxis"]["autorange"] = False
    pipeline.render_update(ViewState(a=2.0, show_information=False))
    kind, _, _, layout, _ = chart.calls[-1]
    assert kind == "update"
    assert layout["xaxis"]["range"] == [-1.0, 2.0]
    assert layout["yaxis"]["range"] == [0.2, 0.6]


def test_update_switches_to_autorange_with_information(pipeline, chart):
    pipeline.render_initial(ViewState(show_information=False))
    pipeline.render_update(ViewState(show_information=True))
    layout = chart.calls[-1][3]
    assert layout["yaxis"]["autorange"] is True
    assert "range" not in layout["yaxis"]
    pipeline.render_update(ViewState(show_information=False))
    layout = chart.calls[-1][3]
    assert layout["yaxis"]["range"] == [-0.05, 1.05]
    assert layout["yaxis"]["autorange"] is False


def test_update_always_repushes_formula(pipeline, math_surface):
    pipeline.render_initial(ViewState())
    pipeline.render_update(ViewState())
    pipeline.render_update(ViewState(b=-1.0))
    assert len(math_surface.calls) == 3
    assert "(-1.0)" in math_surface.last_expression


def test_update_before_initial_creates_plot(pipeline, chart):
    pipeline.render_update(ViewState())
    assert [call[0] for call in chart.calls] == ["create"]


def test_hiding_information_removes_only_that_series(pipeline, chart):
    pipeline.render_initial(ViewState(show_information=True))
    with_info = chart.calls[-1][2]
    pipeline.render_update(ViewState(show_information=False))
    without_info = chart.calls[-1][2]
    assert series_names(with_info) == ["Probability", "Information", "Guessing (c)", "Inattention (d)"]
    assert series_names(without_info) == ["Probability", "Guessing (c)", "Inattention (d)"]
    assert [with_info[0], with_info[2], with_info[3]] == without_info


def test_resize_is_forwarded(pipeline, chart):
    pipeline.render_initial(ViewState())
    pipeline.resize()
    assert chart.calls[-1] == ("resize", "plot-container")
