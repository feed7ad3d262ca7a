"""
Confidence Scorer for the PartFit Compatibility Engine.

Core principle:
    A confidence value must be decomposable into labelled parts.
    Final score = base + every penalty + verification bonus, clamped to [0, 1].

Breakdown components:
    - id_match: 1.0 for a native part, else 0.0 (informational, never summed)
    - geometry_penalty: tolerance coefficient times the geometry weight
    - cutout_penalty / curvature_penalty: graded penalties (0 while those rules are binary)
    - compatibility_penalty: display swap downgrades
    - verification_bonus: reserved for external verification, always 0
"""

from __future__ import annotations

from dataclasses import dataclass

from ..geometry.geometry_math import clamp
from .config import GEOMETRY_WEIGHT


@dataclass(frozen=True)
class ConfidenceBreakdown:
    """
    Labelled parts of a confidence value.

    Penalties are stored as non-positive numbers.
    """
    id_match: float = 0.0
    geometry_penalty: float = 0.0
    cutout_penalty: float = 0.0
    curvature_penalty: float = 0.0
    compatibility_penalty: float = 0.0
    verification_bonus: float = 0.0

    @property
    def total_adjustment(self) -> float:
        """Sum of the parts that move the score away from its base."""
        return (
            self.geometry_penalty
            + self.cutout_penalty
            + self.curvature_penalty
            + self.compatibility_penalty
            + self.verification_bonus
        )

    @property
    def components(self) -> list[tuple[str, float]]:
        """All parts in display order as (name, value) pairs."""
        return [
            ("id_match", self.id_match),
            ("geometry_penalty", self.geometry_penalty),
            ("cutout_penalty", self.cutout_penalty),
            ("curvature_penalty", self.curvature_penalty),
            ("compatibility_penalty", self.compatibility_penalty),
            ("verification_bonus", self.verification_bonus),
        ]

    @classmethod
    def zero(cls) -> ConfidenceBreakdown:
        return cls()


@dataclass(frozen=True)
class ScoreResult:
    score: float
    breakdown: ConfidenceBreakdown


def calculate(
    base_score: float,
    geometry_penalty_coef: float,
    is_native: bool,
    cutout_penalty: float = 0.0,
    curvature_penalty: float = 0.0,
    compatibility_penalty: float = 0.0,
    geometry_weight: float = GEOMETRY_WEIGHT,
) -> ScoreResult:
    """
    Combine a base score with weighted penalties.

    Args:
        base_score: Starting confidence (1.0 for native, rule fit for universal)
        geometry_penalty_coef: Tolerance coefficient, 0 for a perfect fit
        is_native: Whether the part is native to the target
        cutout_penalty: Positive magnitude, stored negated
        curvature_penalty: Positive magnitude, stored negated
        compatibility_penalty: Positive magnitude of display downgrades, stored negated
        geometry_weight: Maximum share removed by a coefficient of 1

    Returns:
        ScoreResult with the clamped score and its breakdown
    """
    breakdown = ConfidenceBreakdown(
        id_match=1.0 if is_native else 0.0,
        geometry_penalty=0.0 - geometry_penalty_coef * geometry_weight,
        cutout_penalty=0.0 - cutout_penalty,
        curvature_penalty=0.0 - curvature_penalty,
        compatibility_penalty=0.0 - compatibility_penalty,
        verification_bonus=0.0,
    )

    total = base_score + breakdown.total_adjustment

    return ScoreResult(score=clamp(total, 0.0, 1.0), breakdown=breakdown)
