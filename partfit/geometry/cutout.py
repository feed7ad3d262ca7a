"""
Cutout Zone Model.

Screens declare a keep-out zone (sensor, camera) that must stay exposed.
Glass SKUs declare the hole cut into them. Both are written in a compact
descriptor language, in fractional screen coordinates (0..1):

    none
    circle(cx, cy, r)
    rect(x, y, w, h)

Containment is approximated with bounding circles: centres must align
within an epsilon and the hole must be at least as large as the zone.
This is not a polygon intersection.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


# Maximum centre distance, as a fraction of the screen extent
ALIGNMENT_EPSILON = 0.02

NO_CUTOUT = "none"

_NUMBER = r"([\d.]+)"
_CIRCLE_PATTERN = re.compile(
    r"circle\(\s*" + r"\s*,\s*".join([_NUMBER] * 3) + r"\s*\)"
)
_RECT_PATTERN = re.compile(
    r"rect\(\s*" + r"\s*,\s*".join([_NUMBER] * 4) + r"\s*\)"
)


class ZoneShape(Enum):
    CIRCLE = "circle"
    RECT = "rect"


@dataclass(frozen=True)
class NormalizedZone:
    """
    A parsed cutout zone.

    size is the radius for circles and the width for rects; height is
    only meaningful for rects and is 0 for circles.
    """
    shape: ZoneShape
    x: float
    y: float
    size: float
    height: float = 0.0


def _to_float(token: str) -> Optional[float]:
    try:
        return float(token)
    except ValueError:
        # "1.2.3" matches the character class but is not a number
        return None


def parse_zone(descriptor: Optional[str]) -> Optional[NormalizedZone]:
    """
    Parse a cutout descriptor into a NormalizedZone.

    Returns None for "none", empty input, or anything unrecognised;
    callers treat that as "no constraint".
    """
    if not descriptor or descriptor.strip() == NO_CUTOUT:
        return None

    circle = _CIRCLE_PATTERN.search(descriptor)
    if circle:
        values = [_to_float(v) for v in circle.groups()]
        if None in values:
            return None
        cx, cy, r = values
        return NormalizedZone(shape=ZoneShape.CIRCLE, x=cx, y=cy, size=r)

    rect = _RECT_PATTERN.search(descriptor)
    if rect:
        values = [_to_float(v) for v in rect.groups()]
        if None in values:
            return None
        x, y, w, h = values
        return NormalizedZone(shape=ZoneShape.RECT, x=x, y=y, size=w, height=h)

    return None


def does_hole_expose_sensor(
    screen_keep_out: NormalizedZone,
    glass_hole: NormalizedZone,
    alignment_epsilon: float = ALIGNMENT_EPSILON,
) -> bool:
    """
    Check whether a glass hole leaves the screen keep-out zone uncovered.

    1. Alignment: centre distance must not exceed alignment_epsilon.
    2. Size: the hole's radius/width must be >= the zone's.
    """
    distance = math.hypot(
        screen_keep_out.x - glass_hole.x,
        screen_keep_out.y - glass_hole.y,
    )
    if distance > alignment_epsilon:
        return False

    return glass_hole.size >= screen_keep_out.size
