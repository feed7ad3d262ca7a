# PartFit Compatibility Engine
# Geometry compatibility for replacement glass and display swaps

"""
Core invariant: every verdict is a pure function of its geometry and
rule inputs, and every verdict can be explained component by component.

Entry points:
    match_glass(screen, glass, rule=None)  -> MatchResult
    match_display(target, donor)           -> MatchResult
    CompatibilityEngine(config, clock)     -> configured engine
"""

from .geometry.types import (
    Curvature,
    Dimensions,
    DisplayProfile,
    EdgeCoverage,
    GeometryValidationError,
    GlassGeometry,
    MatchStatus,
    ScreenGeometry,
    ToleranceConfig,
    UniversalRule,
)
from .matching.config import MatcherConfig
from .matching.engine import CompatibilityEngine, match_display, match_glass
from .matching.result import MatchResult

__all__ = [
    "CompatibilityEngine",
    "Curvature",
    "Dimensions",
    "DisplayProfile",
    "EdgeCoverage",
    "GeometryValidationError",
    "GlassGeometry",
    "MatchResult",
    "MatchStatus",
    "MatcherConfig",
    "ScreenGeometry",
    "ToleranceConfig",
    "UniversalRule",
    "match_display",
    "match_glass",
]
