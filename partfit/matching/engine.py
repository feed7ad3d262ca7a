"""
Compatibility Engine facade.

Binds a MatcherConfig and a clock to the two matchers. The engine holds
no mutable state, so one instance can serve any number of threads.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from ..geometry.types import DisplayProfile, GlassGeometry, ScreenGeometry, UniversalRule
from . import display, glass
from .config import DEFAULT_CONFIG, MatcherConfig
from .result import MatchResult


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CompatibilityEngine:
    """
    Entry point for glass and display compatibility checks.

    Args:
        config: Weights, epsilons and thresholds (defaults if None)
        clock: Source of computed_at timestamps (UTC now if None)
    """

    def __init__(
        self,
        config: Optional[MatcherConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._config = config if config is not None else DEFAULT_CONFIG
        self._clock = clock if clock is not None else utc_now

    @property
    def config(self) -> MatcherConfig:
        return self._config

    def match_glass(
        self,
        screen: ScreenGeometry,
        glass_part: GlassGeometry,
        rule: Optional[UniversalRule] = None,
    ) -> MatchResult:
        """Classify a screen + glass pair, optionally under a universal rule."""
        return glass.match_glass(
            screen,
            glass_part,
            computed_at=self._clock(),
            rule=rule,
            config=self._config,
        )

    def match_display(self, target: DisplayProfile, donor: DisplayProfile) -> MatchResult:
        """Classify a donor display going into a target housing."""
        return display.match_display(
            target,
            donor,
            computed_at=self._clock(),
            config=self._config,
        )


_default_engine = CompatibilityEngine()


def match_glass(
    screen: ScreenGeometry,
    glass_part: GlassGeometry,
    rule: Optional[UniversalRule] = None,
) -> MatchResult:
    """Match with the default configuration."""
    return _default_engine.match_glass(screen, glass_part, rule)


def match_display(target: DisplayProfile, donor: DisplayProfile) -> MatchResult:
    """Match with the default configuration."""
    return _default_engine.match_display(target, donor)
