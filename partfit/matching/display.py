"""
Display Swap Matcher.

Decides whether a donor display assembly can be fitted into a target
housing. Independent of the glass path: no tolerance window, no
universal rules.

Hard rejections (confidence 0):
    - Connector type differs (short circuit risk)
    - Donor larger than the housing by more than the allowed overhang

Downgrades (additive, routed through the clamped confidence scorer):
    - Resolution mismatch
    - Donor refresh rate lower than target
    - OLED target receiving an IPS donor
"""

from __future__ import annotations

import logging
from datetime import datetime

from ..geometry.types import DisplayProfile
from .config import DEFAULT_CONFIG, MatcherConfig
from .confidence import calculate
from .result import MatchResult

logger = logging.getLogger(__name__)


def match_display(
    target: DisplayProfile,
    donor: DisplayProfile,
    computed_at: datetime,
    config: MatcherConfig = DEFAULT_CONFIG,
) -> MatchResult:
    """
    Decide whether a donor display fits and works in the target device.

    Returns:
        INCOMPATIBLE on a hard rejection, otherwise EXACT when the scored
        confidence exceeds the display threshold and UNIVERSAL below it
    """
    if target.connection_type != donor.connection_type:
        reason = (
            f"Connector Mismatch: Target uses {target.connection_type}, "
            f"Donor uses {donor.connection_type}"
        )
        logger.debug("Display swap %s -> %s rejected: %s", donor.screen_id, target.screen_id, reason)
        return MatchResult.incompatible([reason], computed_at=computed_at)

    width_delta = donor.dimensions.width_mm - target.dimensions.width_mm
    height_delta = donor.dimensions.height_mm - target.dimensions.height_mm
    if width_delta > config.housing_overhang_mm or height_delta > config.housing_overhang_mm:
        reason = (
            f"Donor screen too large for housing "
            f"(W:+{width_delta:.2f}mm, H:+{height_delta:.2f}mm)"
        )
        logger.debug("Display swap %s -> %s rejected: %s", donor.screen_id, target.screen_id, reason)
        return MatchResult.incompatible([reason], computed_at=computed_at)

    warnings, penalty = _collect_downgrades(target, donor, config)

    is_native = target.screen_id == donor.screen_id
    scored = calculate(
        base_score=1.0,
        geometry_penalty_coef=0.0,
        is_native=is_native,
        compatibility_penalty=penalty,
        geometry_weight=config.geometry_weight,
    )

    if scored.score > config.display_exact_threshold:
        return MatchResult.exact(
            confidence=scored.score,
            breakdown=scored.breakdown,
            computed_at=computed_at,
            warnings=warnings,
            is_native=is_native,
        )
    return MatchResult.universal(
        confidence=scored.score,
        breakdown=scored.breakdown,
        computed_at=computed_at,
        warnings=warnings,
        is_native=is_native,
    )


def _collect_downgrades(
    target: DisplayProfile,
    donor: DisplayProfile,
    config: MatcherConfig,
) -> tuple[list[str], float]:
    """Gather downgrade warnings and the total penalty they carry."""
    warnings: list[str] = []
    penalty = 0.0

    if target.display_resolution != donor.display_resolution:
        warnings.append(
            f"Resolution Mismatch: Target {target.display_resolution}, "
            f"Donor {donor.display_resolution}. Image may be scaled or cropped."
        )
        penalty += config.resolution_mismatch_penalty

    if donor.refresh_rate_hz < target.refresh_rate_hz:
        warnings.append(
            f"Refresh Rate Downgrade: Target expects {target.refresh_rate_hz:g}Hz, "
            f"Donor is {donor.refresh_rate_hz:g}Hz."
        )
        penalty += config.refresh_downgrade_penalty

    if target.panel_technology == "OLED" and donor.panel_technology == "IPS":
        warnings.append(
            "Technology Downgrade: Target expects OLED, Donor is IPS (Thicker/Lower Quality)."
        )
        penalty += config.panel_downgrade_penalty

    if warnings:
        logger.debug(
            "Display swap %s -> %s downgraded by %.2f: %s",
            donor.screen_id, target.screen_id, penalty, warnings,
        )
    return warnings, penalty
