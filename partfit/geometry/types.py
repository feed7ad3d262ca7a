"""
Geometry Value Types for the PartFit Compatibility Engine.

Every record the engine consumes is an immutable value object built by
the caller from persisted data right before a match and discarded right
after. The engine never stores or mutates them.

Value Types:
    Dimensions       - Outer or active-area size in millimetres
    ToleranceConfig  - Oversize/undersize limits declared by a screen
    ScreenGeometry   - The display module opening of a target device
    GlassGeometry    - A candidate tempered-glass SKU
    UniversalRule    - A vetted cross-model substitution
    DisplayProfile   - A screen plus electrical/panel facts (display swap)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum


# =============================================================================
# ENUMERATIONS
# =============================================================================

class Curvature(Enum):
    """Panel profile classes."""
    FLAT = "FLAT"
    TWO_POINT_FIVE_D = "2.5D"
    CURVED_3D = "CURVED_3D"
    FOLDABLE = "FOLDABLE"


class EdgeCoverage(Enum):
    """Adhesive and coverage style of a glass SKU."""
    FULL_GLUE = "FULL_GLUE"
    BORDER_GLUE = "BORDER_GLUE"
    CASE_FRIENDLY = "CASE_FRIENDLY"
    EDGE_TO_EDGE = "EDGE_TO_EDGE"


class MatchStatus(Enum):
    """
    Terminal verdicts of a single match.

    - EXACT: native fit, confirmed by strict geometry
    - UNIVERSAL: cross-model fit backed by a vetted rule (or a downgraded swap)
    - INCOMPATIBLE: hard rejection with explicit reasons
    """
    EXACT = "EXACT"
    UNIVERSAL = "UNIVERSAL"
    INCOMPATIBLE = "INCOMPATIBLE"

    @property
    def label(self) -> str:
        """Traffic-light colour shown to technicians."""
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    MatchStatus.EXACT: "GREEN",
    MatchStatus.UNIVERSAL: "YELLOW",
    MatchStatus.INCOMPATIBLE: "RED",
}


class GeometryValidationError(Exception):
    """Raised when a geometry record is structurally invalid."""
    pass


def _require_measure(name: str, value: float) -> None:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise GeometryValidationError(
            f"{name} must be a number, got {type(value).__name__}"
        )
    if not math.isfinite(value):
        raise GeometryValidationError(f"{name} must be finite, got {value}")
    if value < 0:
        raise GeometryValidationError(f"{name} must be >= 0, got {value}")


# =============================================================================
# MEASUREMENTS
# =============================================================================

@dataclass(frozen=True)
class Dimensions:
    """Width and height in millimetres."""
    width_mm: float
    height_mm: float

    def __post_init__(self):
        _require_measure("width_mm", self.width_mm)
        _require_measure("height_mm", self.height_mm)


@dataclass(frozen=True)
class ToleranceConfig:
    """
    Fit tolerances declared by a screen.

    max_oversize_mm is the largest positive delta (glass larger than the
    screen) still accepted. min_undersize_mm is the largest magnitude of
    negative delta still accepted. allowed_misalignment_mm is carried for
    callers and is not part of any numeric check.
    """
    max_oversize_mm: float = 0.0
    min_undersize_mm: float = 0.0
    allowed_misalignment_mm: float = 0.0

    def __post_init__(self):
        _require_measure("max_oversize_mm", self.max_oversize_mm)
        _require_measure("min_undersize_mm", self.min_undersize_mm)
        _require_measure("allowed_misalignment_mm", self.allowed_misalignment_mm)


# =============================================================================
# SCREEN & GLASS
# =============================================================================

@dataclass(frozen=True)
class ScreenGeometry:
    """
    The physical screen module of a target device.

    cutout_mask is a compact zone descriptor: "none", "circle(cx, cy, r)"
    or "rect(x, y, w, h)" in fractional screen coordinates.
    """
    screen_id: str
    dimensions: Dimensions
    active_area: Dimensions
    curvature: Curvature
    corner_radius_mm: float = 0.0
    cutout_mask: str = "none"
    fit_tolerances: ToleranceConfig = field(default_factory=ToleranceConfig)

    def __post_init__(self):
        if not self.screen_id:
            raise GeometryValidationError("screen_id is required")
        if not isinstance(self.curvature, Curvature):
            raise GeometryValidationError(
                f"curvature must be Curvature, got {type(self.curvature)}"
            )
        _require_measure("corner_radius_mm", self.corner_radius_mm)


@dataclass(frozen=True)
class GlassGeometry:
    """A candidate protective-glass part."""
    sku_code: str
    dimensions: Dimensions
    curvature: Curvature
    corner_radius_mm: float = 0.0
    cutout_mask: str = "none"
    edge_coverage: EdgeCoverage = EdgeCoverage.FULL_GLUE
    cutout_alignment_offset_allowance_mm: float = 0.5

    def __post_init__(self):
        if not self.sku_code:
            raise GeometryValidationError("sku_code is required")
        if not isinstance(self.curvature, Curvature):
            raise GeometryValidationError(
                f"curvature must be Curvature, got {type(self.curvature)}"
            )
        if not isinstance(self.edge_coverage, EdgeCoverage):
            raise GeometryValidationError(
                f"edge_coverage must be EdgeCoverage, got {type(self.edge_coverage)}"
            )
        _require_measure("corner_radius_mm", self.corner_radius_mm)
        _require_measure(
            "cutout_alignment_offset_allowance_mm",
            self.cutout_alignment_offset_allowance_mm,
        )


# =============================================================================
# UNIVERSAL RULE
# =============================================================================

@dataclass(frozen=True)
class UniversalRule:
    """
    A previously vetted cross-model substitution.

    fit_score is on a 0-100 scale. Its presence makes the matcher trust
    the prior approval over strict per-dimension gating.
    """
    target_screen_id: str
    source_screen_id: str
    fit_score: float
    is_safe: bool = True
    warnings: tuple[str, ...] = ()

    def __post_init__(self):
        if not isinstance(self.fit_score, (int, float)) or not math.isfinite(self.fit_score):
            raise GeometryValidationError(
                f"fit_score must be a finite number, got {self.fit_score!r}"
            )
        # Accept lists from callers but keep the record hashable
        object.__setattr__(self, "warnings", tuple(self.warnings))


# =============================================================================
# DISPLAY PROFILE
# =============================================================================

@dataclass(frozen=True)
class DisplayProfile(ScreenGeometry):
    """
    A screen with the electrical and panel facts needed for display swaps.

    Only the display swap matcher reads the extra fields.
    """
    display_resolution: str = ""
    connection_type: str = ""
    panel_technology: str = ""
    refresh_rate_hz: float = 60.0

    def __post_init__(self):
        super().__post_init__()
        _require_measure("refresh_rate_hz", self.refresh_rate_hz)
