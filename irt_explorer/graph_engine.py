from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from . import config
from .formula import format_formula
from .model import information, probability
from .state import ViewState


@dataclass(frozen=True)
class SampledCurve:
    theta: List[float]
    probability: List[float]
    information: Optional[List[float]] = None


@dataclass(frozen=True)
class RenderPayload:
    series: List[Dict[str, Any]]
    layout: Dict[str, Any]
    render_config: Dict[str, Any]
    formula: str


def generate_x_samples(x_min: float, x_max: float, count: int) -> List[float]:
    if count < 2:
        return [x_min]
    step = (x_max - x_min) / (count - 1)
    return [x_min + i * step for i in range(count)]


def generate_theta_grid() -> List[float]:
    count = int(round((config.THETA_MAX - config.THETA_MIN) / config.THETA_STEP)) + 1
    return generate_x_samples(config.THETA_MIN, config.THETA_MAX, count)


def sample(parameters: Mapping[str, float], include_information: bool) -> SampledCurve:
    a, b, c, d = (float(parameters[name]) for name in config.PARAM_NAMES)
    thetas = generate_theta_grid()
    probs = [probability(t, a, b, c, d) for t in thetas]
    infos = None
    if include_information:
        infos = [information(t, a, b, c, d) for t in thetas]
    return SampledCurve(theta=thetas, probability=probs, information=infos)


def _asymptote_trace(level: float, name: str) -> Dict[str, Any]:
    return dict(
        x=[config.THETA_MIN, config.THETA_MAX],
        y=[level, level],
        mode="lines",
        name=name,
        line=dict(config.ASYMPTOTE_LINE_STYLE),
        hoverinfo="none",
        showlegend=False,
    )


def build_series(view: ViewState, curve: SampledCurve) -> List[Dict[str, Any]]:
    series: List[Dict[str, Any]] = [
        dict(
            x=list(curve.theta),
            y=list(curve.probability),
            mode="lines",
            name="Probability",
            line=dict(config.PROBABILITY_LINE_STYLE),
            hoverinfo="x+y",
            showlegend=True,
        )
    ]
    if view.show_information and curve.information is not None:
        series.append(
            dict(
                x=list(curve.theta),
                y=list(curve.information),
                mode="lines",
                name="Information",
                line=dict(config.INFORMATION_LINE_STYLE),
                hoverinfo="x+y",
                showlegend=True,
            )
        )
    series.append(_asymptote_trace(view.c, "Guessing (c)"))
    series.append(_asymptote_trace(view.d, "Inattention (d)"))
    return series


def build_yaxis(show_information: bool) -> Dict[str, Any]:
    yaxis: Dict[str, Any] = dict(
        title=dict(text="P(θ) / I(θ)" if show_information else "Probability P(θ)"),
        showgrid=True,
        gridcolor=config.FIGURE_COLORS["grid"],
    )
    if show_information:
        yaxis["autorange"] = True
    else:
        yaxis["range"] = list(config.PROBABILITY_Y_RANGE)
        yaxis["dtick"] = 0.1
    return yaxis


def build_layout(view: ViewState) -> Dict[str, Any]:
    return dict(
        font=dict(family=config.FONT_FAMILY),
        margin=dict(config.PLOT_MARGIN),
        autosize=True,
        xaxis=dict(
            title=dict(text="Ability (θ)"),
            range=[config.THETA_MIN, config.THETA_MAX],
            zeroline=True,
            showgrid=True,
            gridcolor=config.FIGURE_COLORS["grid"],
            dtick=1,
        ),
        yaxis=build_yaxis(view.show_information),
        showlegend=True,
        legend=dict(orientation="h", x=0.0, y=1.02, xanchor="left", yanchor="bottom"),
        hovermode="closest",
        paper_bgcolor=config.TRANSPARENT,
        plot_bgcolor=config.TRANSPARENT,
        uirevision=config.UIREVISION,
    )


def build_payload(view: ViewState) -> RenderPayload:
    curve = sample(view.params, view.show_information)
    return RenderPayload(
        series=build_series(view, curve),
        layout=build_layout(view),
        render_config=dict(config.RENDER_CONFIG),
        formula=format_formula(view.a, view.b, view.c, view.d),
    )


def series_names(series: Sequence[Mapping[str, Any]]) -> List[str]:
    return [str(trace.get("name")) for trace in series]
