import pytest

from irt_explorer.graph_engine import (
    build_layout,
    build_payload,
    build_series,
    generate_theta_grid,
    sample,
    series_names,
)
from irt_explorer.model import information, probability
from irt_explorer.state import ViewState

PARAMS = {"a": 1.4, "b": -0.6, "c": 0.15, "d": 0.95}


def test_theta_grid_has_81_points_over_domain():
    grid = generate_theta_grid()
    assert len(grid) == 81
    assert grid[0] == pytest.approx(-4.0)
    assert grid[-1] == pytest.approx(4.0)
    assert grid[1] - grid[0] == pytest.approx(0.1)


def test_sample_computes_probability_and_information():
    curve = sample(PARAMS, True)
    assert len(curve.probability) == len(curve.theta) == 81
    assert len(curve.information) == 81
    theta = curve.theta[40]
    assert curve.probability[40] == probability(theta, 1.4, -0.6, 0.15, 0.95)
    assert curve.information[40] == information(theta, 1.4, -0.6, 0.15, 0.95)


def test_sample_skips_information_when_not_requested():
    curve = sample(PARAMS, False)
    assert curve.information is None
    assert len(curve.probability) == 81


def test_sample_is_idempotent():
    assert sample(PARAMS, True) == sample(PARAMS, True)


def test_series_order_with_information():
    view = ViewState(**PARAMS, show_information=True)
    series = build_series(view, sample(view.params, True))
    assert series_names(series) == ["Probability", "Information", "Guessing (c)", "Inattention (d)"]
    assert [trace["showlegend"] for trace in series] == [True, True, False, False]


def test_series_order_without_information():
    view = ViewState(**PARAMS, show_information=False)
    series = build_series(view, sample(view.params, False))
    assert series_names(series) == ["Probability", "Guessing (c)", "Inattention (d)"]


def test_asymptotes_span_the_domain_at_c_and_d():
    view = ViewState(**PARAMS)
    series = build_series(view, sample(view.params, True))
    guessing, inattention = series[-2], series[-1]
    assert guessing["x"] == [-4.0, 4.0]
    assert guessing["y"] == [0.15, 0.15]
    assert inattention["y"] == [0.95, 0.95]
    assert guessing["line"]["dash"] == "dash"


def test_layout_fixed_range_without_information():
    layout = build_layout(ViewState(show_information=False))
    assert layout["yaxis"]["range"] == [-0.05, 1.05]
    assert "autorange" not in layout["yaxis"]
    assert layout["xaxis"]["range"] == [-4.0, 4.0]
    assert layout["paper_bgcolor"] == "rgba(0,0,0,0)"
    assert layout["plot_bgcolor"] == "rgba(0,0,0,0)"
    assert layout["showlegend"] is True


def test_layout_autoranges_with_information():
    layout = build_layout(ViewState(show_information=True))
    assert layout["yaxis"]["autorange"] is True
    assert "range" not in layout["yaxis"]


def test_payload_carries_render_config_and_formula():
    payload = build_payload(ViewState())
    assert payload.render_config == {"responsive": True, "displayModeBar": False, "scrollZoom": False}
    assert payload.formula.startswith("P(\\theta) = 0.00")
    assert len(payload.series) == 4
