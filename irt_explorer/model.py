"""Four-parameter logistic (4PL) response model."""

from __future__ import annotations

import math

from . import config


def logistic(x: float) -> float:
    """Return 1 / (1 + e^x), saturating to 0 or 1 for large |x|."""
    if x > 0:
        z = math.exp(-x)
        return z / (1.0 + z)
    return 1.0 / (1.0 + math.exp(x))


def probability(theta: float, a: float, b: float, c: float, d: float) -> float:
    """P(theta) = c + (d - c) * logistic(-a * (theta - b))."""
    return c + (d - c) * logistic(-a * (theta - b))


def information(theta: float, a: float, b: float, c: float, d: float) -> float:
    """Fisher information of a single 4PL item at ``theta``.

    Returns 0 when P(theta) is within ``config.PROBABILITY_EPSILON`` of 0 or 1,
    where the ratio below is numerically meaningless.
    """
    L = logistic(-a * (theta - b))
    p = c + (d - c) * L
    eps = config.PROBABILITY_EPSILON
    if p <= eps or p >= 1.0 - eps:
        return 0.0
    dp = a * (d - c) * L * (1.0 - L)
    return (dp * dp) / (p * (1.0 - p))
