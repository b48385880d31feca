from __future__ import annotations

import os

# Ability sampling grid
THETA_MIN = -4.0
THETA_MAX = 4.0
THETA_STEP = 0.1

# Parameter defaults and bounds
DEFAULT_PARAMS = {"a": 1.0, "b": 0.0, "c": 0.0, "d": 1.0}
DEFAULT_SHOW_INFORMATION = True
PARAM_NAMES = ("a", "b", "c", "d")
PARAM_BOUNDS = {
    "a": {"min": 0.1, "max": 3.0, "step": 0.1},
    "b": {"min": -3.0, "max": 3.0, "step": 0.1},
    "c": {"min": 0.0, "max": 0.5, "step": 0.01},
    "d": {"min": 0.5, "max": 1.0, "step": 0.01},
}
PARAM_DECIMALS = {"a": 1, "b": 1, "c": 2, "d": 2}
PARAM_LABELS = {
    "a": "Discrimination (a)",
    "b": "Difficulty (b)",
    "c": "Guessing (c)",
    "d": "Inattention (d)",
}

# Precision / guard rails
PROBABILITY_EPSILON = 1e-4

# Render scheduling (one display frame at 60 Hz)
RENDER_QUANTUM_SECONDS = 1.0 / 60.0
REFRESH_INTERVAL_MS = 100

# Dash sessions kept in memory (one per open page)
SESSION_CAPACITY = 256

# Collaborator targets
PLOT_CONTAINER_ID = "plot-container"
FORMULA_TARGET_ID = "formula-display"
FORMULA_RENDER_OPTIONS = {"display_mode": True, "fail_silently": True}

# Activity log
TRACE_HISTORY_CAPACITY = 50
PREVIEW_LOG_CAPACITY = 5
SCHEMA_VERSION = 1
MODEL_TYPE = "4pl"
SCHEMA_COLUMNS = [
    "schema_version",
    "seq",
    "t_server_iso",
    "elapsed_time_ms",
    "event",
    "model_type",
    "param_name",
    "old_value",
    "new_value",
    "source",
    "a",
    "b",
    "c",
    "d",
    "show_information",
]

# Plot palette and styles
FIGURE_COLORS = {
    "probability": "#4f46e5",
    "information": "#D55E00",
    "asymptote": "#94a3b8",
    "grid": "#f1f5f9",
}
PROBABILITY_LINE_STYLE = {"color": FIGURE_COLORS["probability"], "width": 3}
INFORMATION_LINE_STYLE = {"color": FIGURE_COLORS["information"], "width": 2}
ASYMPTOTE_LINE_STYLE = {"color": FIGURE_COLORS["asymptote"], "width": 2, "dash": "dash"}
PROBABILITY_Y_RANGE = [-0.05, 1.05]
FONT_FAMILY = "Inter, sans-serif"
PLOT_MARGIN = {"t": 40, "r": 40, "b": 50, "l": 60}
TRANSPARENT = "rgba(0,0,0,0)"
UIREVISION = "irt-4pl"
RENDER_CONFIG = {"responsive": True, "displayModeBar": False, "scrollZoom": False}

# External assets
MATHJAX_CDN = "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"

# Runtime knobs
LOG_LEVEL = os.environ.get("IRT_EXPLORER_LOG_LEVEL", "INFO")
LOG_FILE = os.environ.get("IRT_EXPLORER_LOG_FILE") or None
HOST = os.environ.get("IRT_EXPLORER_HOST", "127.0.0.1")
PORT = int(os.environ.get("IRT_EXPLORER_PORT", "8050"))
DEBUG = os.environ.get("IRT_EXPLORER_DEBUG", "1").lower() in {"1", "true", "yes", "on"}
