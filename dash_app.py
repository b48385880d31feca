"""Dash front end for the 4PL item response explorer."""

from __future__ import annotations

import uuid
from typing import List

import dash
from dash import Input, Output, State, dcc, html

from irt_explorer import config
from irt_explorer.controller import InformationToggled, ResetRequested, SliderInput
from irt_explorer.formula import format_param_value
from irt_explorer.logging_config import setup_logging
from irt_explorer.session import ExplorerSession, SessionRegistry, get_session_id

logger = setup_logging(config.LOG_LEVEL, config.LOG_FILE)

_SLIDER_IDS = {param: f"slider-{param}" for param in config.PARAM_NAMES}
_LABEL_IDS = {param: f"val-{param}" for param in config.PARAM_NAMES}
_INFO_TOGGLE_ID = "toggle-information"
_INFO_TOGGLE_VALUE = "on"
_REFRESH_TICK_ID = "refresh-tick"

_SESSIONS = SessionRegistry()


def _get_session(session_data) -> ExplorerSession:
    return _SESSIONS.get(get_session_id(session_data))


def _render_log_display(entries: List[str]) -> str:
    if not entries:
        return "Recent activity will appear here."
    lines = [f"- {entry}" for entry in reversed(entries)]
    return "\n".join(["Recent activity:", *lines])


def _param_control_row(session: ExplorerSession, param: str) -> html.Div:
    cfg = config.PARAM_BOUNDS[param]
    value = session.controller.store.get().params[param]
    marks = {
        cfg["min"]: format_param_value(param, cfg["min"]),
        cfg["max"]: format_param_value(param, cfg["max"]),
    }
    return html.Div(
        [
            html.Div(
                [
                    html.Label(config.PARAM_LABELS[param], htmlFor=_SLIDER_IDS[param], style={"fontWeight": 600}),
                    html.Span(
                        session.labels.get(param, format_param_value(param, value)),
                        id=_LABEL_IDS[param],
                        style={"fontFamily": "monospace"},
                    ),
                ],
                style={"display": "flex", "justifyContent": "space-between"},
            ),
            dcc.Slider(
                id=_SLIDER_IDS[param],
                min=cfg["min"],
                max=cfg["max"],
                step=cfg["step"],
                value=value,
                marks=marks,
                updatemode="drag",
                tooltip={"placement": "bottom", "always_visible": False},
            ),
        ],
        style={"marginBottom": "20px"},
    )


app = dash.Dash(__name__, external_scripts=[config.MATHJAX_CDN])
server = app.server


def _serve_layout() -> html.Div:
    # a fresh session per page load; parameters are not kept across reloads
    session_id = uuid.uuid4().hex
    session = _SESSIONS.get(session_id)
    view = session.controller.store.get()
    controls = html.Div(
        [
            html.H3("Item parameters"),
            *[_param_control_row(session, param) for param in config.PARAM_NAMES],
            dcc.Checklist(
                id=_INFO_TOGGLE_ID,
                options=[{"label": " Show item information I(θ)", "value": _INFO_TOGGLE_VALUE}],
                value=[_INFO_TOGGLE_VALUE] if view.show_information else [],
            ),
            html.Div(
                [
                    html.Button("Reset", id="reset-btn", n_clicks=0, type="button"),
                    html.Button(
                        "Download activity (CSV)",
                        id="btn-download-csv",
                        n_clicks=0,
                        type="button",
                        style={"marginLeft": "8px"},
                    ),
                ],
                style={"marginTop": "16px"},
            ),
            html.Pre(
                _render_log_display(session.activity.preview),
                id="log-display",
                style={"marginTop": "16px", "fontSize": "12px", "whiteSpace": "pre-wrap"},
            ),
            dcc.Download(id="download-csv"),
        ],
        style={"flex": "1", "minWidth": "280px", "padding": "16px"},
    )
    graph = html.Div(
        [
            dcc.Markdown(session.formula_markdown(), id=config.FORMULA_TARGET_ID, mathjax=True),
            dcc.Graph(
                id=config.PLOT_CONTAINER_ID,
                figure=session.figure(),
                config=dict(config.RENDER_CONFIG),
                style={"height": "520px"},
            ),
        ],
        style={"flex": "2", "padding": "16px"},
    )
    return html.Div(
        [
            dcc.Store(id="store-session", data={"session_id": session_id}),
            html.H1("4PL Item Response Explorer"),
            html.Div([controls, graph], style={"display": "flex", "flexWrap": "wrap"}),
            dcc.Interval(
                id=_REFRESH_TICK_ID,
                interval=config.REFRESH_INTERVAL_MS,
                n_intervals=0,
                disabled=True,
            ),
        ],
        style={"fontFamily": config.FONT_FAMILY, "maxWidth": "1200px", "margin": "0 auto"},
    )


app.layout = _serve_layout

_VIEW_OUTPUTS = [
    Output(config.PLOT_CONTAINER_ID, "figure", allow_duplicate=True),
    Output(config.FORMULA_TARGET_ID, "children", allow_duplicate=True),
    *[Output(_LABEL_IDS[param], "children", allow_duplicate=True) for param in config.PARAM_NAMES],
    Output("log-display", "children", allow_duplicate=True),
    Output(_REFRESH_TICK_ID, "disabled", allow_duplicate=True),
]


def _view_response(session: ExplorerSession, rendered: bool) -> tuple:
    if rendered:
        head = (session.figure(), session.formula_markdown())
    else:
        head = (dash.no_update, dash.no_update)
    # the interval only runs while a coalesced render is waiting
    return (
        *head,
        *session.label_texts(),
        _render_log_display(session.activity.preview),
        not session.pending,
    )


@app.callback(
    _VIEW_OUTPUTS,
    [Input(_SLIDER_IDS[param], "value") for param in config.PARAM_NAMES],
    State("store-session", "data"),
    prevent_initial_call=True,
)
def _handle_slider_input(*args):
    *values, session_data = args
    triggered = {item["prop_id"].split(".")[0] for item in dash.callback_context.triggered}
    session = _get_session(session_data)
    with session.lock:
        for param, value in zip(config.PARAM_NAMES, values):
            if _SLIDER_IDS[param] in triggered:
                session.controller.post(SliderInput(param, value))
        session.controller.process_events()
        rendered = session.controller.tick()
        return _view_response(session, rendered)


@app.callback(
    _VIEW_OUTPUTS,
    Input(_REFRESH_TICK_ID, "n_intervals"),
    State("store-session", "data"),
    prevent_initial_call=True,
)
def _handle_refresh_tick(_n_intervals, session_data):
    session = _get_session(session_data)
    with session.lock:
        if not session.controller.tick():
            return (*(dash.no_update,) * (len(_VIEW_OUTPUTS) - 1), not session.pending)
        return _view_response(session, True)


@app.callback(
    _VIEW_OUTPUTS,
    Input(_INFO_TOGGLE_ID, "value"),
    State("store-session", "data"),
    prevent_initial_call=True,
)
def _handle_information_toggle(value, session_data):
    session = _get_session(session_data)
    with session.lock:
        session.controller.dispatch(InformationToggled(value))
        return _view_response(session, True)


@app.callback(
    [
        *[Output(_SLIDER_IDS[param], "value") for param in config.PARAM_NAMES],
        Output(_INFO_TOGGLE_ID, "value"),
        *_VIEW_OUTPUTS,
    ],
    Input("reset-btn", "n_clicks"),
    State("store-session", "data"),
    prevent_initial_call=True,
)
def _handle_reset(n_clicks, session_data):
    if not n_clicks:
        return (dash.no_update,) * (len(config.PARAM_NAMES) + 1 + len(_VIEW_OUTPUTS))
    session = _get_session(session_data)
    with session.lock:
        session.controller.dispatch(ResetRequested())
        view = session.controller.store.get()
        sliders = [view.params[param] for param in config.PARAM_NAMES]
        toggle = [_INFO_TOGGLE_VALUE] if view.show_information else []
        return (*sliders, toggle, *_view_response(session, True))


@app.callback(
    Output("download-csv", "data"),
    Input("btn-download-csv", "n_clicks"),
    State("store-session", "data"),
    prevent_initial_call=True,
)
def _handle_download_csv(n_clicks, session_data):
    if not n_clicks:
        return dash.no_update
    session = _get_session(session_data)
    with session.lock:
        csv_content = session.activity.to_csv()
    if not csv_content:
        return dash.no_update
    return dcc.send_string(csv_content, filename=f"irt_activity_{session.session_id}.csv")


if __name__ == "__main__":
    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)
