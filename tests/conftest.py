import copy

import pytest

from irt_explorer.controller import InteractionController, WidgetBindings
from irt_explorer.logger import ActivityLog
from irt_explorer.render_pipeline import RenderPipeline
from irt_explorer.scheduler import RenderCoalescer
from irt_explorer.state import ParameterStore


class RecordingChart:
    def __init__(self):
        self.calls = []
        self.layouts = {}

    def create_plot(self, container_id, series, layout, render_config):
        self.calls.append(("create", container_id, series, layout, render_config))
        self.layouts[container_id] = copy.deepcopy(layout)

    def update_plot(self, container_id, series, current_layout, render_config):
        self.calls.append(("update", container_id, series, current_layout, render_config))
        self.layouts[container_id] = copy.deepcopy(current_layout)

    def current_layout(self, container_id):
        layout = self.layouts.get(container_id)
        return copy.deepcopy(layout) if layout is not None else None

    def resize(self, container_id):
        self.calls.append(("resize", container_id))

    def calls_of(self, kind):
        return [call for call in self.calls if call[0] == kind]


class RecordingMath:
    def __init__(self):
        self.calls = []

    def render(self, target, expression, options):
        self.calls.append((target, expression, dict(options)))

    @property
    def last_expression(self):
        return self.calls[-1][1] if self.calls else None


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def chart():
    return RecordingChart()


@pytest.fixture
def math_surface():
    return RecordingMath()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def pipeline(chart, math_surface):
    return RenderPipeline(chart, math_surface)


@pytest.fixture
def widget_state():
    return {"labels": {}, "sliders": {}, "checkbox": None}


@pytest.fixture
def widgets(widget_state):
    def label_setter(name):
        return lambda text: widget_state["labels"].__setitem__(name, text)

    def slider_setter(name):
        return lambda value: widget_state["sliders"].__setitem__(name, value)

    def checkbox_setter(value):
        widget_state["checkbox"] = value

    return WidgetBindings(
        labels={name: label_setter(name) for name in "abcd"},
        sliders={name: slider_setter(name) for name in "abcd"},
        checkbox=checkbox_setter,
    )


@pytest.fixture
def controller(pipeline, widgets, clock):
    ctrl = InteractionController(
        ParameterStore(),
        pipeline,
        widgets=widgets,
        coalescer=RenderCoalescer(quantum=1.0 / 60.0, clock=clock),
        activity=ActivityLog(),
    )
    ctrl.start()
    return ctrl
