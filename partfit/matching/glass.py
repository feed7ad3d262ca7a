"""
Screen/Glass Matcher.

Classifies a screen + glass pair as EXACT, UNIVERSAL or INCOMPATIBLE.

Flow:
    1. Curvature check (always)
    2. Cutout and tolerance checks (only without a universal rule)
    3. Any rejection -> INCOMPATIBLE, confidence 0
    4. No rule -> EXACT from base 1.0; rule -> UNIVERSAL from fit_score / 100
    5. Score through the confidence scorer

A universal rule supersedes cutout and tolerance gating. It never
supersedes curvature and never produces EXACT.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..geometry.tolerances import ToleranceCheck, check_dimensions
from ..geometry.types import GlassGeometry, ScreenGeometry, UniversalRule
from .config import DEFAULT_CONFIG, MatcherConfig
from .confidence import calculate
from .result import MatchResult
from .rules import check_curvature, check_cutout

logger = logging.getLogger(__name__)


# Used in place of the tolerance check when a rule supersedes it
_SKIPPED_TOLERANCE = ToleranceCheck(passed=True, penalty_coef=0.0)


def match_glass(
    screen: ScreenGeometry,
    glass: GlassGeometry,
    computed_at: datetime,
    rule: Optional[UniversalRule] = None,
    config: MatcherConfig = DEFAULT_CONFIG,
) -> MatchResult:
    """
    Decide whether a glass SKU can go on a screen.

    Args:
        screen: Target screen geometry
        glass: Candidate glass geometry
        computed_at: Timestamp stamped into the result metadata
        rule: Optional pre-approved cross-model rule
        config: Weights and epsilons

    Returns:
        MatchResult for the pair
    """
    rejections: list[str] = []

    curvature = check_curvature(screen, glass)
    if not curvature.passed:
        rejections.append(curvature.reason)

    dimensions = _SKIPPED_TOLERANCE
    if rule is None:
        cutout = check_cutout(screen, glass, config.mask_alignment_epsilon)
        if not cutout.passed:
            rejections.append(cutout.reason)

        dimensions = check_dimensions(screen, glass)
        if not dimensions.passed:
            rejections.append(dimensions.reason)

    if rejections:
        logger.debug(
            "Glass %s rejected for screen %s: %s",
            glass.sku_code, screen.screen_id, rejections,
        )
        return MatchResult.incompatible(rejections, computed_at=computed_at)

    if rule is None:
        scored = calculate(
            base_score=1.0,
            geometry_penalty_coef=dimensions.penalty_coef,
            is_native=True,
            geometry_weight=config.geometry_weight,
        )
        return MatchResult.exact(
            confidence=scored.score,
            breakdown=scored.breakdown,
            computed_at=computed_at,
        )

    scored = calculate(
        base_score=rule.fit_score / 100,
        geometry_penalty_coef=dimensions.penalty_coef,
        is_native=False,
        geometry_weight=config.geometry_weight,
    )
    logger.debug(
        "Glass %s accepted for screen %s via universal rule %s -> %s (%.3f)",
        glass.sku_code, screen.screen_id,
        rule.source_screen_id, rule.target_screen_id, scored.score,
    )
    return MatchResult.universal(
        confidence=scored.score,
        breakdown=scored.breakdown,
        computed_at=computed_at,
        warnings=rule.warnings,
    )
