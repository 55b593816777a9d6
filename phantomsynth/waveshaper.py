"""Waveshaping transfer functions used for drive and timbre shaping.

The shapers are listed roughly in order of increasing intensity; each maps
its useful input range onto [-1, 1].
"""

from __future__ import annotations

import math


def sign(x: float) -> float:
    """Return -1.0 for negative values and 1.0 otherwise (zero counts as positive)."""
    if x >= 0.0:
        return 1.0
    return -1.0


def clip(x: float, lower: float, upper: float) -> float:
    """Clamp ``x`` to the closed interval [lower, upper]."""
    return max(lower, min(x, upper))


def fexp2(x: float) -> float:
    """Fuzz exponential shaper."""
    return sign(-x) * (1.0 - math.exp(abs(x))) / (math.e - 1.0)


def atsr(x: float) -> float:
    """Arctangent plus square-root shaper.

    Undefined where ``|0.9 * x| > 1``; NaN is returned there.
    """
    scaled = 0.9 * x
    radicand = 1.0 - scaled * scaled
    if radicand < 0.0:
        return math.nan
    return 2.5 * math.atan(scaled) + 2.5 * math.sqrt(radicand) - 2.5


def cube(x: float) -> float:
    """Cubic shaper."""
    return x * x * x


def htan(k: float, x: float) -> float:
    """Hyperbolic tangent shaper whose steepness grows with the drive ``k``."""
    return math.tanh((k * 17.0 + 1.0) * x)


def hclip(x: float) -> float:
    """Hard clipper at +/-0.5."""
    return 0.5 * sign(x) if abs(x) > 0.5 else x