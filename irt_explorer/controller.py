"""Interaction controller: turns widget events into store mutations and renders.

The controller is a two-state machine. Slider input leaves it in
``RENDERING`` until the next refresh opportunity (:meth:`InteractionController.tick`)
flushes one coalesced render-update; checkbox toggles and resets render
immediately and return to ``IDLE``. Events can be dispatched one at a time or
posted to a queue and drained with :meth:`InteractionController.process_events`.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Deque, Dict, Optional, Union

from . import config
from .formula import format_display_labels, format_param_value
from .logger import ActivityLog
from .render_pipeline import RenderPipeline
from .scheduler import RenderCoalescer
from .state import ParameterStore, ViewState

logger = logging.getLogger(__name__)


class ControllerState(Enum):
    IDLE = "idle"
    RENDERING = "rendering"


@dataclass(frozen=True)
class SliderInput:
    param: str
    value: Any
    source: str = "slider"


@dataclass(frozen=True)
class InformationToggled:
    enabled: Any


@dataclass(frozen=True)
class ResetRequested:
    pass


@dataclass(frozen=True)
class Resized:
    pass


Event = Union[SliderInput, InformationToggled, ResetRequested, Resized]


@dataclass
class WidgetBindings:
    """Setters for whichever widgets the page actually has."""
    labels: Dict[str, Callable[[str], None]] = field(default_factory=dict)
    sliders: Dict[str, Callable[[float], None]] = field(default_factory=dict)
    checkbox: Optional[Callable[[bool], None]] = None


def _coerce_float(value: Any) -> Optional[float]:
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _is_toggle_enabled(value: Any) -> bool:
    if isinstance(value, (list, tuple, set)):
        return "on" in value or True in value
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return bool(value)


class InteractionController:
    def __init__(
        self,
        store: ParameterStore,
        pipeline: RenderPipeline,
        *,
        widgets: Optional[WidgetBindings] = None,
        coalescer: Optional[RenderCoalescer] = None,
        activity: Optional[ActivityLog] = None,
    ) -> None:
        self.store = store
        self.pipeline = pipeline
        self.widgets = widgets if widgets is not None else WidgetBindings()
        self.coalescer = coalescer if coalescer is not None else RenderCoalescer()
        self.activity = activity
        self.state = ControllerState.IDLE
        self.render_count = 0
        self._queue: Deque[Event] = deque()

    # -- lifecycle -------------------------------------------------------

    def start(self) -> None:
        view = self.store.get()
        self.pipeline.render_initial(view)
        self.render_count += 1
        self._sync_widgets(view)
        self.state = ControllerState.IDLE

    # -- event intake ----------------------------------------------------

    def post(self, event: Event) -> None:
        self._queue.append(event)

    def process_events(self) -> int:
        handled = 0
        while self._queue:
            self.dispatch(self._queue.popleft())
            handled += 1
        return handled

    def dispatch(self, event: Event) -> None:
        if isinstance(event, SliderInput):
            self._on_slider_input(event)
        elif isinstance(event, InformationToggled):
            self._on_information_toggled(event)
        elif isinstance(event, ResetRequested):
            self._on_reset()
        elif isinstance(event, Resized):
            self._on_resize()
        else:
            raise TypeError(f"Unsupported event: {event!r}")

    def tick(self, *, force: bool = False) -> bool:
        """Refresh opportunity: flush the pending coalesced render, if any."""
        flushed = self.coalescer.flush(force=force)
        if not self.coalescer.pending:
            self.state = ControllerState.IDLE
        return flushed

    # -- handlers --------------------------------------------------------

    def _on_slider_input(self, event: SliderInput) -> None:
        value = _coerce_float(event.value)
        if value is None:
            logger.debug("Ignoring unparseable %s payload: %r", event.param, event.value)
            return
        old_value = self.store.get().params.get(event.param)
        if old_value == value:
            return
        view = self.store.set(event.param, value)
        if view.c > view.d:
            logger.debug("Guessing asymptote above inattention asymptote (c=%s, d=%s)", view.c, view.d)
        self.coalescer.schedule(self._flush_render)
        self.state = ControllerState.RENDERING
        self._set_label(event.param, format_param_value(event.param, value))
        self._record(
            "param_change",
            view,
            param_name=event.param,
            old_value=old_value,
            new_value=value,
            source=event.source,
        )

    def _on_information_toggled(self, event: InformationToggled) -> None:
        enabled = _is_toggle_enabled(event.enabled)
        old_value = self.store.get().show_information
        if old_value == enabled:
            return
        view = self.store.toggle_information(enabled)
        self._render_now(view)
        self._record("information_toggle", view, old_value=old_value, new_value=enabled, source="toggle")

    def _on_reset(self) -> None:
        view = self.store.reset()
        self._render_now(view)
        self._sync_widgets(view)
        self._record("reset", view, source="button")

    def _on_resize(self) -> None:
        self.pipeline.resize()
        self._record("resize", self.store.get(), source="window")

    # -- rendering -------------------------------------------------------

    def _flush_render(self) -> None:
        # one snapshot feeds both the chart and the labels
        view = self.store.get()
        self.pipeline.render_update(view)
        self.render_count += 1
        self._sync_labels(view)

    def _render_now(self, view: ViewState) -> None:
        self.coalescer.cancel()
        self.pipeline.render_update(view)
        self.render_count += 1
        self._sync_labels(view)
        self.state = ControllerState.IDLE

    # -- widgets ---------------------------------------------------------

    def _set_label(self, param: str, text: str) -> None:
        setter = self.widgets.labels.get(param)
        if setter is not None:
            setter(text)

    def _sync_labels(self, view: ViewState) -> None:
        for param, text in format_display_labels(view.params).items():
            self._set_label(param, text)

    def _sync_widgets(self, view: ViewState) -> None:
        for param in config.PARAM_NAMES:
            setter = self.widgets.sliders.get(param)
            if setter is not None:
                setter(view.params[param])
        if self.widgets.checkbox is not None:
            self.widgets.checkbox(view.show_information)
        self._sync_labels(view)

    def _record(self, event: str, view: ViewState, **kwargs: Any) -> None:
        if self.activity is None:
            return
        self.activity.record(event, state=view.as_dict(), **kwargs)
