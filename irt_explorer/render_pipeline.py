"""Push ViewState-derived series, layout and formula to the view collaborators."""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol

from . import config
from .graph_engine import RenderPayload, build_payload, build_yaxis
from .state import ViewState

logger = logging.getLogger(__name__)


class ChartCollaborator(Protocol):
    def create_plot(
        self,
        container_id: str,
        series: List[Dict[str, Any]],
        layout: Dict[str, Any],
        render_config: Dict[str, Any],
    ) -> None: ...

    def update_plot(
        self,
        container_id: str,
        series: List[Dict[str, Any]],
        current_layout: Dict[str, Any],
        render_config: Dict[str, Any],
    ) -> None: ...

    def current_layout(self, container_id: str) -> Optional[Dict[str, Any]]: ...

    def resize(self, container_id: str) -> None: ...


class MathCollaborator(Protocol):
    def render(self, target: str, expression: str, options: Mapping[str, Any]) -> None: ...


def _sync_yaxis(layout: Dict[str, Any], show_information: bool) -> Dict[str, Any]:
    yaxis = layout.setdefault("yaxis", {})
    fresh = build_yaxis(show_information)
    yaxis["title"] = fresh["title"]
    if show_information:
        yaxis.pop("range", None)
        yaxis.pop("dtick", None)
        yaxis["autorange"] = True
    elif yaxis.get("autorange", False) is True or "range" not in yaxis:
        # only undo our own auto-ranging; a fixed range set by the viewer stays
        yaxis["autorange"] = False
        yaxis["range"] = fresh["range"]
        yaxis["dtick"] = fresh["dtick"]
    return layout


class RenderPipeline:
    def __init__(
        self,
        chart: ChartCollaborator,
        math: MathCollaborator,
        *,
        container_id: str = config.PLOT_CONTAINER_ID,
        formula_target: str = config.FORMULA_TARGET_ID,
    ) -> None:
        self.chart = chart
        self.math = math
        self.container_id = container_id
        self.formula_target = formula_target

    def render_initial(self, view: ViewState) -> RenderPayload:
        payload = build_payload(view)
        self.chart.create_plot(self.container_id, payload.series, payload.layout, payload.render_config)
        self._render_formula(payload.formula)
        logger.debug("Initial render of %s with %d series", self.container_id, len(payload.series))
        return payload

    def render_update(self, view: ViewState) -> RenderPayload:
        current = self.chart.current_layout(self.container_id)
        if current is None:
            return self.render_initial(view)
        payload = build_payload(view)
        layout = _sync_yaxis(copy.deepcopy(dict(current)), view.show_information)
        self.chart.update_plot(self.container_id, payload.series, layout, payload.render_config)
        self._render_formula(payload.formula)
        return RenderPayload(
            series=payload.series,
            layout=layout,
            render_config=payload.render_config,
            formula=payload.formula,
        )

    def resize(self) -> None:
        self.chart.resize(self.container_id)

    def _render_formula(self, expression: str) -> None:
        self.math.render(self.formula_target, expression, dict(config.FORMULA_RENDER_OPTIONS))
