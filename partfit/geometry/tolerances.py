"""
Tolerance Checker.

Decides whether glass outer dimensions fit the tolerance window a screen
declares, and how far from a perfect fit they are.

Checks run in a fixed order and the first failure wins:
    1. Width oversize
    2. Height oversize
    3. Width undersize
    4. Height undersize
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .geometry_math import delta
from .types import GlassGeometry, ScreenGeometry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToleranceCheck:
    """
    Outcome of the dimension check.

    penalty_coef is 0 for a perfect fit and reaches 1 at the undersize
    limit. It is not clamped here; the confidence scorer clamps.
    """
    passed: bool
    penalty_coef: float
    reason: Optional[str] = None


def check_dimensions(screen: ScreenGeometry, glass: GlassGeometry) -> ToleranceCheck:
    """Evaluate glass dimensions against the screen's fit tolerances."""
    d = delta(screen, glass)
    rules = screen.fit_tolerances
    width_delta = d.width_delta_mm
    height_delta = d.height_delta_mm

    # Oversize: hanging edges, lifting
    if width_delta > rules.max_oversize_mm:
        return _reject(
            f"Glass width too large (+{width_delta:.2f}mm > max +{rules.max_oversize_mm}mm)"
        )
    if height_delta > rules.max_oversize_mm:
        return _reject(
            f"Glass height too large (+{height_delta:.2f}mm > max +{rules.max_oversize_mm}mm)"
        )

    # Undersize: too much active area left exposed
    if width_delta < 0 and abs(width_delta) > rules.min_undersize_mm:
        return _reject(
            f"Glass width too narrow ({width_delta:.2f}mm < -{rules.min_undersize_mm}mm)"
        )
    if height_delta < 0 and abs(height_delta) > rules.min_undersize_mm:
        return _reject(
            f"Glass height too short ({height_delta:.2f}mm < -{rules.min_undersize_mm}mm)"
        )

    limit = rules.min_undersize_mm or 1.0
    width_penalty = abs(width_delta) / limit
    height_penalty = abs(height_delta) / limit

    return ToleranceCheck(
        passed=True,
        penalty_coef=(width_penalty + height_penalty) / 2,
    )


def _reject(reason: str) -> ToleranceCheck:
    logger.debug("Tolerance check failed: %s", reason)
    return ToleranceCheck(passed=False, penalty_coef=1.0, reason=reason)
