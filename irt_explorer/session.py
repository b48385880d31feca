"""Per-browser-session explorer state for the Dash front end."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Any, Dict, List, Optional

from . import config
from .controller import InteractionController, WidgetBindings
from .logger import ActivityLog
from .render_pipeline import RenderPipeline
from .state import ParameterStore
from .surfaces import FormulaSurface, PlotlyChartSurface

logger = logging.getLogger(__name__)


def get_session_id(session_data: Optional[Dict[str, Any]]) -> str:
    if isinstance(session_data, dict):
        raw = session_data.get("session_id")
        if isinstance(raw, str) and raw:
            return raw
    return "unknown"


class ExplorerSession:
    """One store, controller, chart, formula and activity log for one page."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        self.lock = threading.Lock()
        self.labels: Dict[str, str] = {}
        self.chart = PlotlyChartSurface()
        self.formula = FormulaSurface()
        self.activity = ActivityLog()
        self.controller = InteractionController(
            ParameterStore(),
            RenderPipeline(self.chart, self.formula),
            widgets=WidgetBindings(labels={param: self._label_setter(param) for param in config.PARAM_NAMES}),
            activity=self.activity,
        )
        self.controller.start()

    def _label_setter(self, param: str):
        def _set(text: str) -> None:
            self.labels[param] = text

        return _set

    @property
    def pending(self) -> bool:
        return self.controller.coalescer.pending

    def figure(self):
        return self.chart.figure(config.PLOT_CONTAINER_ID)

    def formula_markdown(self) -> str:
        return self.formula.markdown(config.FORMULA_TARGET_ID)

    def label_texts(self) -> List[str]:
        return [self.labels.get(param, "") for param in config.PARAM_NAMES]


class SessionRegistry:
    """Sessions keyed by id; the least recently used one is dropped past capacity."""

    def __init__(self, capacity: int = config.SESSION_CAPACITY) -> None:
        self._capacity = capacity
        self._sessions: "OrderedDict[str, ExplorerSession]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, session_id: str) -> ExplorerSession:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = ExplorerSession(session_id)
                self._sessions[session_id] = session
                while len(self._sessions) > self._capacity:
                    evicted, _ = self._sessions.popitem(last=False)
                    logger.debug("Dropping explorer session %s", evicted)
            else:
                self._sessions.move_to_end(session_id)
            return session

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
