"""Plotly and formula surfaces consumed by the render pipeline."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

import plotly.graph_objects as go

logger = logging.getLogger(__name__)


class FormulaRenderError(ValueError):
    pass


class PlotlyChartSurface:
    """Keeps one ``go.Figure`` per container id."""

    def __init__(self) -> None:
        self._figures: Dict[str, go.Figure] = {}
        self._configs: Dict[str, Dict[str, Any]] = {}

    @staticmethod
    def _build(series: List[Dict[str, Any]], layout: Dict[str, Any]) -> go.Figure:
        return go.Figure(data=[go.Scatter(**trace) for trace in series], layout=layout)

    def create_plot(
        self,
        container_id: str,
        series: List[Dict[str, Any]],
        layout: Dict[str, Any],
        render_config: Dict[str, Any],
    ) -> None:
        self._figures[container_id] = self._build(series, layout)
        self._configs[container_id] = dict(render_config)

    def update_plot(
        self,
        container_id: str,
        series: List[Dict[str, Any]],
        current_layout: Dict[str, Any],
        render_config: Dict[str, Any],
    ) -> None:
        self._figures[container_id] = self._build(series, current_layout)
        self._configs[container_id] = dict(render_config)

    def current_layout(self, container_id: str) -> Optional[Dict[str, Any]]:
        fig = self._figures.get(container_id)
        if fig is None:
            return None
        return fig.layout.to_plotly_json()

    def resize(self, container_id: str) -> None:
        """Re-assert ``autosize`` on the stored figure.

        Browser window resizes are handled client-side by the ``responsive``
        render config; the server figure only has to keep autosizing on.
        """
        fig = self._figures.get(container_id)
        if fig is None:
            return
        fig.update_layout(autosize=True)

    def figure(self, container_id: str) -> Optional[go.Figure]:
        return self._figures.get(container_id)

    def render_config(self, container_id: str) -> Dict[str, Any]:
        return dict(self._configs.get(container_id, {}))


def _braces_balanced(expression: str) -> bool:
    depth = 0
    prev = ""
    for ch in expression:
        if prev == "\\":
            prev = ""
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth < 0:
                return False
        prev = ch
    return depth == 0


class FormulaSurface:
    """Holds the last successfully rendered expression per target."""

    def __init__(self) -> None:
        self._expressions: Dict[str, str] = {}

    def render(self, target: str, expression: str, options: Mapping[str, Any]) -> None:
        if not expression or not _braces_balanced(expression):
            if options.get("fail_silently", False):
                logger.warning("Skipping malformed formula for %s: %r", target, expression)
                return
            raise FormulaRenderError(f"Malformed expression for {target!r}: {expression!r}")
        self._expressions[target] = expression

    def expression(self, target: str) -> Optional[str]:
        return self._expressions.get(target)

    def markdown(self, target: str) -> str:
        expr = self._expressions.get(target)
        if expr is None:
            return ""
        return f"$$\n{expr}\n$$"
