from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict

from . import config


@dataclass(frozen=True)
class ViewState:
    """Snapshot of the four model parameters plus the information toggle."""
    a: float = config.DEFAULT_PARAMS["a"]
    b: float = config.DEFAULT_PARAMS["b"]
    c: float = config.DEFAULT_PARAMS["c"]
    d: float = config.DEFAULT_PARAMS["d"]
    show_information: bool = config.DEFAULT_SHOW_INFORMATION

    @property
    def params(self) -> Dict[str, float]:
        return {"a": self.a, "b": self.b, "c": self.c, "d": self.d}

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def default_view_state() -> ViewState:
    return ViewState()


class ParameterStore:
    """Single source of truth for the current ViewState.

    Values are stored as given; range checks are left to the input widgets.
    """

    def __init__(self, initial: ViewState | None = None) -> None:
        self._state = initial if initial is not None else default_view_state()

    def get(self) -> ViewState:
        return self._state

    def set(self, key: str, value: float) -> ViewState:
        if key not in config.PARAM_NAMES:
            raise KeyError(f"Unknown model parameter: {key!r}")
        self._state = replace(self._state, **{key: float(value)})
        return self._state

    def reset(self) -> ViewState:
        self._state = default_view_state()
        return self._state

    def toggle_information(self, flag: bool) -> ViewState:
        self._state = replace(self._state, show_information=bool(flag))
        return self._state
