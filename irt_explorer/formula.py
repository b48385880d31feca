from __future__ import annotations

from typing import Any, Mapping

from . import config


def format_param_value(param: str, value: float) -> str:
    decimals = config.PARAM_DECIMALS.get(param, 2)
    # adding 0.0 folds -0.0 into 0.0
    return f"{float(value) + 0.0:.{decimals}f}"


def format_display_labels(params: Mapping[str, Any]) -> dict:
    return {name: format_param_value(name, params[name]) for name in config.PARAM_NAMES}


def format_formula(a: float, b: float, c: float, d: float) -> str:
    """LaTeX for P(theta) with the current parameter values substituted.

    A negative ``b`` is parenthesised so the exponent reads
    ``\\theta - (-1.0)`` instead of ``\\theta - -1.0``.
    """
    a_txt = format_param_value("a", a)
    b_txt = format_param_value("b", b)
    c_txt = format_param_value("c", c)
    d_txt = format_param_value("d", d)
    if b < 0:
        b_txt = f"({b_txt})"
    return (
        f"P(\\theta) = {c_txt} + \\frac{{{d_txt} - {c_txt}}}"
        f"{{1 + e^{{-{a_txt}(\\theta - {b_txt})}}}}"
    )
