"""
Matcher Configuration.

Every tunable weight, epsilon and threshold used by the matchers lives
in one immutable MatcherConfig. The engine receives it at construction,
so alternate tunings can be exercised without touching module state.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Union

from ..geometry.cutout import ALIGNMENT_EPSILON
from ..geometry.geometry_math import CORNER_RADIUS_EPSILON_MM

logger = logging.getLogger(__name__)


# =============================================================================
# DEFAULTS
# =============================================================================

# Largest share of confidence the tolerance penalty can remove
GEOMETRY_WEIGHT = 0.20

# Donor may exceed the target housing by at most this much
HOUSING_OVERHANG_MM = 0.5

# Display swaps above this confidence are EXACT, otherwise UNIVERSAL
DISPLAY_EXACT_THRESHOLD = 0.8

RESOLUTION_MISMATCH_PENALTY = 0.3
REFRESH_DOWNGRADE_PENALTY = 0.1
PANEL_DOWNGRADE_PENALTY = 0.2


class ConfigError(Exception):
    """Raised when a configuration is malformed or out of range."""
    pass


@dataclass(frozen=True)
class MatcherConfig:
    """
    Tunable parameters of the compatibility engine.

    All values are non-negative; display_exact_threshold is in [0, 1].
    """
    geometry_weight: float = GEOMETRY_WEIGHT
    corner_radius_epsilon_mm: float = CORNER_RADIUS_EPSILON_MM
    mask_alignment_epsilon: float = ALIGNMENT_EPSILON
    housing_overhang_mm: float = HOUSING_OVERHANG_MM
    display_exact_threshold: float = DISPLAY_EXACT_THRESHOLD
    resolution_mismatch_penalty: float = RESOLUTION_MISMATCH_PENALTY
    refresh_downgrade_penalty: float = REFRESH_DOWNGRADE_PENALTY
    panel_downgrade_penalty: float = PANEL_DOWNGRADE_PENALTY

    def __post_init__(self):
        self._validate()

    def _validate(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(
                    f"{f.name} must be a number, got {type(value).__name__}"
                )
            if not math.isfinite(value) or value < 0:
                raise ConfigError(
                    f"{f.name} must be a finite value >= 0, got {value}"
                )

        if self.display_exact_threshold > 1.0:
            raise ConfigError(
                f"display_exact_threshold must be in [0.0, 1.0], "
                f"got {self.display_exact_threshold}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MatcherConfig:
        """
        Build a config from a mapping, keeping defaults for absent keys.

        Raises:
            ConfigError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        return cls(**dict(data))

    def to_dict(self) -> dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_CONFIG = MatcherConfig()


def load_config(path: Union[str, Path]) -> MatcherConfig:
    """
    Load a MatcherConfig from a JSON file.

    Raises:
        ConfigError: If the file is not a JSON object or holds invalid values
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise ConfigError(f"Config file {path} is not UTF-8 text: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")

    config = MatcherConfig.from_dict(data)
    logger.debug("Loaded matcher config from %s: %s", path, config)
    return config
