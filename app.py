import streamlit as st
import streamlit_shadcn_ui as ui

from irt_explorer import config
from irt_explorer.controller import (
    InformationToggled,
    InteractionController,
    ResetRequested,
    SliderInput,
    WidgetBindings,
)
from irt_explorer.formula import format_param_value
from irt_explorer.logger import ActivityLog
from irt_explorer.logging_config import setup_logging
from irt_explorer.render_pipeline import RenderPipeline
from irt_explorer.state import ParameterStore
from irt_explorer.surfaces import FormulaSurface, PlotlyChartSurface

st.set_page_config(page_title="4PL Item Response Explorer", layout="wide")
setup_logging(config.LOG_LEVEL, config.LOG_FILE)


def _slider_setter(name: str):
    def _set(value: float):
        # the shadcn slider only honours default_value on a fresh key
        st.session_state[f"param_{name}_slider_force_sync"] = True
        st.session_state[f"param_{name}_slider_last"] = value
        slider_state_key = f"param_{name}_slider"
        if slider_state_key in st.session_state:
            del st.session_state[slider_state_key]

    return _set


def _checkbox_setter(value: bool):
    st.session_state["show_information"] = value


def _label_setter(name: str):
    def _set(text: str):
        st.session_state[f"param_{name}_label"] = text

    return _set


def _build_session():
    chart = PlotlyChartSurface()
    formula = FormulaSurface()
    controller = InteractionController(
        ParameterStore(),
        RenderPipeline(chart, formula),
        widgets=WidgetBindings(
            labels={n: _label_setter(n) for n in config.PARAM_NAMES},
            sliders={n: _slider_setter(n) for n in config.PARAM_NAMES},
            checkbox=_checkbox_setter,
        ),
        activity=ActivityLog(),
    )
    st.session_state["irt_chart"] = chart
    st.session_state["irt_formula"] = formula
    st.session_state["irt_controller"] = controller
    controller.start()


if "irt_controller" not in st.session_state:
    _build_session()

controller = st.session_state["irt_controller"]
chart = st.session_state["irt_chart"]
formula = st.session_state["irt_formula"]


def _on_information_change():
    controller.post(InformationToggled(st.session_state.get("show_information", False)))


def _on_reset():
    controller.post(ResetRequested())
    controller.process_events()


def _read_slider(name: str):
    cfg = config.PARAM_BOUNDS[name]
    last_key = f"param_{name}_slider_last"
    force_key = f"param_{name}_slider_force_sync"
    force_sync = st.session_state.get(force_key, True)
    current_value = controller.store.get().params[name]
    slider_value = ui.slider(
        label=config.PARAM_LABELS[name],
        min_value=cfg["min"],
        max_value=cfg["max"],
        step=cfg["step"],
        default_value=[current_value] if force_sync else None,
        key=f"param_{name}_slider",
    )
    if force_sync:
        st.session_state[force_key] = False
        st.session_state[last_key] = current_value
        return

    raw_value = None
    if isinstance(slider_value, (list, tuple)):
        if slider_value:
            raw_value = slider_value[0]
    elif isinstance(slider_value, (int, float, str)):
        raw_value = slider_value
    if raw_value is None:
        return
    try:
        raw_value = float(raw_value)
    except (TypeError, ValueError):
        return
    if raw_value != st.session_state.get(last_key):
        st.session_state[last_key] = raw_value
        controller.post(SliderInput(name, round(raw_value, config.PARAM_DECIMALS[name])))


st.title("4PL Item Response Explorer")
st.caption("P(θ) = c + (d − c) / (1 + e^(−a(θ − b)))")

left_col, right_col = st.columns([1, 2], gap="large")

with left_col:
    st.header("Item parameters")
    st.button("Reset", on_click=_on_reset, use_container_width=True)
    for _name in config.PARAM_NAMES:
        _read_slider(_name)
    st.session_state.setdefault("show_information", controller.store.get().show_information)
    st.checkbox(
        "Show item information I(θ)",
        key="show_information",
        on_change=_on_information_change,
    )

# each rerun is one refresh opportunity
controller.process_events()
controller.tick(force=True)

with left_col:
    for _name in config.PARAM_NAMES:
        st.markdown(
            f"**{_name}** = `{st.session_state.get(f'param_{_name}_label', format_param_value(_name, config.DEFAULT_PARAMS[_name]))}`"
        )

with right_col:
    expression = formula.expression(config.FORMULA_TARGET_ID)
    if expression:
        st.latex(expression)
    fig = chart.figure(config.PLOT_CONTAINER_ID)
    if fig is not None:
        st.plotly_chart(
            fig,
            use_container_width=True,
            config=chart.render_config(config.PLOT_CONTAINER_ID),
        )

st.divider()

st.header("Recent activity")
_preview = controller.activity.preview if controller.activity is not None else []
if _preview:
    st.write("\n".join(f"- {entry}" for entry in reversed(_preview)))
else:
    st.caption("Recent activity will appear here.")
_csv = controller.activity.to_csv() if controller.activity is not None else None
if _csv:
    st.download_button("Download activity (CSV)", _csv, file_name="irt_activity.csv", mime="text/csv")
