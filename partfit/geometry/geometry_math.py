"""
Scalar geometry primitives shared by every check.
"""

from __future__ import annotations

from dataclasses import dataclass

from .types import GlassGeometry, ScreenGeometry


# Corner radii within this distance are considered the same profile
CORNER_RADIUS_EPSILON_MM = 0.5


@dataclass(frozen=True)
class DimensionDelta:
    """Glass minus screen. Positive means the glass is larger."""
    width_delta_mm: float
    height_delta_mm: float


def delta(screen: ScreenGeometry, glass: GlassGeometry) -> DimensionDelta:
    """Compute the outer dimension difference between glass and screen."""
    return DimensionDelta(
        width_delta_mm=glass.dimensions.width_mm - screen.dimensions.width_mm,
        height_delta_mm=glass.dimensions.height_mm - screen.dimensions.height_mm,
    )


def corner_radius_compatible(
    screen_radius_mm: float,
    glass_radius_mm: float,
    epsilon_mm: float = CORNER_RADIUS_EPSILON_MM,
) -> bool:
    """
    Check whether the glass corner radius follows the screen's.

    A much smaller radius leaves corners exposed, a much larger one
    overhangs. Advisory only: no hard rule calls this.
    """
    return abs(screen_radius_mm - glass_radius_mm) <= epsilon_mm


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)
