"""
Hard Rule Set.

Binary gates: any failure is an unconditional rejection. There is no
partial credit for curvature or cutout alignment.

Rules:
    Curvature - glass profile must suit the screen profile
    Cutout    - glass must leave the screen's sensor zone exposed
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..geometry.cutout import ALIGNMENT_EPSILON, does_hole_expose_sensor, parse_zone
from ..geometry.types import Curvature, GlassGeometry, ScreenGeometry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleCheck:
    """Pass/fail outcome of a hard rule with the reason on failure."""
    passed: bool
    reason: Optional[str] = None


PASSED = RuleCheck(passed=True)


# =============================================================================
# CURVATURE
# =============================================================================

FLAT_ON_CURVED = "Cannot put Flat Glass on Curved Screen (Lifting/Halo Risk)"
TWO_POINT_FIVE_D_ON_CURVED = "2.5D Glass insufficient for 3D Curved Screen"
CURVED_ON_FLAT = "Curved Glass on Flat Screen (Edge Mismatch)"

# (screen curvatures, glass curvature, reason)
_CURVATURE_REJECTIONS = (
    ((Curvature.CURVED_3D, Curvature.FOLDABLE), Curvature.FLAT, FLAT_ON_CURVED),
    ((Curvature.CURVED_3D,), Curvature.TWO_POINT_FIVE_D, TWO_POINT_FIVE_D_ON_CURVED),
    ((Curvature.FLAT,), Curvature.CURVED_3D, CURVED_ON_FLAT),
)


def check_curvature(screen: ScreenGeometry, glass: GlassGeometry) -> RuleCheck:
    """
    Reject glass whose profile cannot sit on the screen.

    Combinations not listed in the rejection table pass.
    """
    for screen_profiles, glass_profile, reason in _CURVATURE_REJECTIONS:
        if screen.curvature in screen_profiles and glass.curvature == glass_profile:
            logger.debug(
                "Curvature rejected for %s on %s: %s",
                glass.sku_code, screen.screen_id, reason,
            )
            return RuleCheck(passed=False, reason=reason)
    return PASSED


# =============================================================================
# CUTOUT
# =============================================================================

BLOCKS_SENSOR = "Glass blocks screen sensor (No Cutout)"
CUTOUT_MISALIGNED = "Glass cutout misaligned or too small for sensor"


def check_cutout(
    screen: ScreenGeometry,
    glass: GlassGeometry,
    alignment_epsilon: float = ALIGNMENT_EPSILON,
) -> RuleCheck:
    """
    Reject glass that would cover the screen's keep-out zone.

    A screen without a (parseable) keep-out zone accepts any glass.
    """
    keep_out = parse_zone(screen.cutout_mask)
    if keep_out is None:
        return PASSED

    hole = parse_zone(glass.cutout_mask)
    if hole is None:
        logger.debug("Glass %s has no hole for %s sensor", glass.sku_code, screen.screen_id)
        return RuleCheck(passed=False, reason=BLOCKS_SENSOR)

    if not does_hole_expose_sensor(keep_out, hole, alignment_epsilon):
        logger.debug(
            "Glass %s hole %s does not expose %s zone %s",
            glass.sku_code, hole, screen.screen_id, keep_out,
        )
        return RuleCheck(passed=False, reason=CUTOUT_MISALIGNED)

    return PASSED
