"""
Match Result Model.

A verdict is one of three variants, each with its own payload:

    EXACT / UNIVERSAL - confidence, breakdown, warnings
    INCOMPATIBLE      - rejection reasons only (confidence 0, zero breakdown)

Matchers build results exclusively through the variant constructors.
The invariants below are enforced at construction time:

1. confidence is in [0.0, 1.0]
2. rejection_reasons is non-empty iff status is INCOMPATIBLE
3. INCOMPATIBLE results have confidence 0 and no warnings
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable

from ..geometry.types import MatchStatus
from .confidence import ConfidenceBreakdown


class MatchResultError(Exception):
    """Raised when a result would violate a verdict invariant."""
    pass


@dataclass(frozen=True)
class MatchMetadata:
    is_native: bool
    computed_at: datetime


@dataclass(frozen=True)
class MatchResult:
    """A single compatibility verdict."""
    status: MatchStatus
    confidence: float
    confidence_breakdown: ConfidenceBreakdown
    metadata: MatchMetadata
    warnings: tuple[str, ...] = ()
    rejection_reasons: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        self._validate()

    def _validate(self) -> None:
        if not isinstance(self.status, MatchStatus):
            raise MatchResultError(
                f"status must be MatchStatus, got {type(self.status)}"
            )

        if not (0.0 <= self.confidence <= 1.0):
            raise MatchResultError(
                f"confidence must be in [0.0, 1.0], got {self.confidence}"
            )

        rejected = self.status == MatchStatus.INCOMPATIBLE
        if rejected != bool(self.rejection_reasons):
            raise MatchResultError(
                f"{self.status.value} result with "
                f"{len(self.rejection_reasons)} rejection reasons"
            )

        if rejected:
            if self.confidence != 0.0:
                raise MatchResultError(
                    f"INCOMPATIBLE result must have confidence 0.0, got {self.confidence}"
                )
            if self.warnings:
                raise MatchResultError("INCOMPATIBLE result must not carry warnings")

    # -------------------------------------------------------------------------
    # Variant constructors
    # -------------------------------------------------------------------------

    @classmethod
    def exact(
        cls,
        confidence: float,
        breakdown: ConfidenceBreakdown,
        computed_at: datetime,
        warnings: Iterable[str] = (),
        is_native: bool = True,
    ) -> MatchResult:
        return cls(
            status=MatchStatus.EXACT,
            confidence=confidence,
            confidence_breakdown=breakdown,
            warnings=tuple(warnings),
            metadata=MatchMetadata(is_native=is_native, computed_at=computed_at),
        )

    @classmethod
    def universal(
        cls,
        confidence: float,
        breakdown: ConfidenceBreakdown,
        computed_at: datetime,
        warnings: Iterable[str] = (),
        is_native: bool = False,
    ) -> MatchResult:
        return cls(
            status=MatchStatus.UNIVERSAL,
            confidence=confidence,
            confidence_breakdown=breakdown,
            warnings=tuple(warnings),
            metadata=MatchMetadata(is_native=is_native, computed_at=computed_at),
        )

    @classmethod
    def incompatible(
        cls,
        reasons: Iterable[str],
        computed_at: datetime,
    ) -> MatchResult:
        return cls(
            status=MatchStatus.INCOMPATIBLE,
            confidence=0.0,
            confidence_breakdown=ConfidenceBreakdown.zero(),
            rejection_reasons=tuple(reasons),
            metadata=MatchMetadata(is_native=False, computed_at=computed_at),
        )

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    @property
    def is_compatible(self) -> bool:
        return self.status != MatchStatus.INCOMPATIBLE

    def without_timestamp(self) -> dict[str, Any]:
        """
        Everything except computed_at, for comparing repeated runs.
        """
        return {
            "status": self.status,
            "confidence": self.confidence,
            "confidence_breakdown": self.confidence_breakdown,
            "warnings": self.warnings,
            "rejection_reasons": self.rejection_reasons,
            "is_native": self.metadata.is_native,
        }
