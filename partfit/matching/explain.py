"""
Plain-English explanations of match verdicts.

These are views over a MatchResult, not a source of truth. They answer:
"Why was this part recommended (or not), and how sure are we?"
"""

from __future__ import annotations

from typing import Optional

from ..geometry.geometry_math import corner_radius_compatible
from ..geometry.types import GlassGeometry, MatchStatus, ScreenGeometry
from .config import DEFAULT_CONFIG, MatcherConfig
from .result import MatchResult


_SUMMARIES = {
    MatchStatus.EXACT: "Native fit confirmed by strict geometry.",
    MatchStatus.UNIVERSAL: "Cross-model fit; review the warnings before recommending.",
    MatchStatus.INCOMPATIBLE: "Do not recommend this part.",
}


def explain_result(
    result: MatchResult,
    screen: Optional[ScreenGeometry] = None,
    glass: Optional[GlassGeometry] = None,
    config: MatcherConfig = DEFAULT_CONFIG,
) -> str:
    """
    Render a verdict with every component that produced it.

    When both geometries are given, an advisory corner-radius note is
    added. It never changes the verdict.
    """
    lines = [
        f"**{result.status.value}** [{result.status.label}] "
        f"with confidence {result.confidence:.0%}",
        "",
    ]

    if result.rejection_reasons:
        lines.append("**Rejected because:**")
        for reason in result.rejection_reasons:
            lines.append(f"- {reason}")
    else:
        lines.append("**Confidence Breakdown:**")
        for name, value in result.confidence_breakdown.components:
            sign = "+" if value >= 0 else ""
            lines.append(f"- {name}: {sign}{value:.3f}")

    if result.warnings:
        lines.append("")
        lines.append("**Warnings:** " + "; ".join(result.warnings))

    if screen is not None and glass is not None:
        lines.append("")
        lines.append(_corner_radius_note(screen, glass, config))

    lines.append("")
    lines.append(f"**Summary:** {_SUMMARIES[result.status]}")

    return "\n".join(lines)


def short_explanation(result: MatchResult) -> str:
    """One line for quick scanning."""
    head = f"{result.status.value} ({result.confidence:.0%})"
    if result.rejection_reasons:
        return f"{head} - {result.rejection_reasons[0]}"
    if result.warnings:
        return f"{head} - {result.warnings[0]}"
    return f"{head} - No concerns"


def _corner_radius_note(
    screen: ScreenGeometry,
    glass: GlassGeometry,
    config: MatcherConfig,
) -> str:
    if corner_radius_compatible(
        screen.corner_radius_mm,
        glass.corner_radius_mm,
        config.corner_radius_epsilon_mm,
    ):
        return (
            f"Advisory: corner radius follows the screen "
            f"({glass.corner_radius_mm:g}mm vs {screen.corner_radius_mm:g}mm)."
        )
    return (
        f"Advisory: corner radius differs by more than "
        f"{config.corner_radius_epsilon_mm:g}mm "
        f"({glass.corner_radius_mm:g}mm vs {screen.corner_radius_mm:g}mm)."
    )
