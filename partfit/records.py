"""
Record mapping for the PartFit Compatibility Engine.

Callers resolve brand/model names and load rows from their own stores.
This module turns those rows (or JSON documents) into engine value types
and turns verdicts back into JSON-safe primitives.

Accepted record shapes:
    - Nested: {"dimensions": {"width_mm": 70, "height_mm": 150}, ...}
    - Flat database columns: {"width_mm": "70.0", "height_mm": "150.0", ...}

Numeric fields may arrive as strings (database NUMERIC columns).
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Type, TypeVar, Union

from .geometry.types import (
    Curvature,
    Dimensions,
    DisplayProfile,
    EdgeCoverage,
    GeometryValidationError,
    GlassGeometry,
    ScreenGeometry,
    ToleranceConfig,
    UniversalRule,
)
from .matching.result import MatchResult

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

DEFAULT_ALIGNMENT_ALLOWANCE_MM = 0.5
DEFAULT_REFRESH_RATE_HZ = 60.0


class RecordError(Exception):
    """Raised when a record cannot be mapped to a value type."""
    pass


# =============================================================================
# FIELD HELPERS
# =============================================================================

def _require(record: Mapping[str, Any], *keys: str) -> Any:
    """Return the first present key, or raise naming the first one."""
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    raise RecordError(f"Record missing required field: {keys[0]}")


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise RecordError(f"Invalid {name} value: {value!r}")
    try:
        return float(value)
    except (ValueError, TypeError):
        raise RecordError(f"Invalid {name} value: {value!r}")


def _optional_number(record: Mapping[str, Any], key: str, default: float) -> float:
    value = record.get(key)
    if value is None or value == "":
        return default
    return _number(value, key)


_TRUE_STRINGS = {"true", "1"}
_FALSE_STRINGS = {"false", "0"}


def _flag(value: Any, name: str, default: bool) -> bool:
    """Accept a real bool or "true"/"false"/"1"/"0" (any case)."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise RecordError(f"Invalid {name} value: {value!r}")


def _enum(enum_type: Type[E], value: Any, name: str) -> E:
    """Accept an enum value ("2.5D") or member name ("TWO_POINT_FIVE_D")."""
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        pass
    try:
        return enum_type[str(value)]
    except KeyError:
        raise RecordError(f"Invalid {name}: {value!r}")


def _dimensions(
    record: Mapping[str, Any],
    key: str,
    flat_width: str,
    flat_height: str,
) -> Dimensions:
    nested = record.get(key)
    if isinstance(nested, Mapping):
        width = _require(nested, "width_mm")
        height = _require(nested, "height_mm")
    else:
        width = _require(record, flat_width)
        height = _require(record, flat_height)

    return Dimensions(
        width_mm=_number(width, f"{key}.width_mm"),
        height_mm=_number(height, f"{key}.height_mm"),
    )


def _tolerances(record: Mapping[str, Any]) -> ToleranceConfig:
    raw = record.get("fit_tolerances")
    if raw is None:
        return ToleranceConfig()

    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise RecordError(f"fit_tolerances is not valid JSON: {e}") from e

    if not isinstance(raw, Mapping):
        raise RecordError("fit_tolerances must be an object")

    return ToleranceConfig(
        max_oversize_mm=_optional_number(raw, "max_oversize_mm", 0.0),
        min_undersize_mm=_optional_number(raw, "min_undersize_mm", 0.0),
        allowed_misalignment_mm=_optional_number(raw, "allowed_misalignment_mm", 0.0),
    )


def _mask(record: Mapping[str, Any]) -> str:
    return record.get("cutout_mask") or record.get("cutout_mask_svg") or "none"


# =============================================================================
# RECORD -> VALUE TYPE
# =============================================================================

def _screen_fields(record: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "screen_id": str(_require(record, "id", "screen_id")),
        "dimensions": _dimensions(record, "dimensions", "width_mm", "height_mm"),
        "active_area": _dimensions(
            record, "active_area", "active_area_width_mm", "active_area_height_mm"
        ),
        "curvature": _enum(
            Curvature, _require(record, "curvature", "curved_type"), "curvature"
        ),
        "corner_radius_mm": _optional_number(record, "corner_radius_mm", 0.0),
        "cutout_mask": _mask(record),
        "fit_tolerances": _tolerances(record),
    }


def screen_from_record(record: Mapping[str, Any]) -> ScreenGeometry:
    """
    Map a screen record to ScreenGeometry.

    Raises:
        RecordError: If required fields are missing or malformed
    """
    try:
        return ScreenGeometry(**_screen_fields(record))
    except GeometryValidationError as e:
        raise RecordError(f"Invalid screen record: {e}") from e


def glass_from_record(record: Mapping[str, Any]) -> GlassGeometry:
    """
    Map a glass SKU record to GlassGeometry.

    Raises:
        RecordError: If required fields are missing or malformed
    """
    try:
        return GlassGeometry(
            sku_code=str(_require(record, "sku_code")),
            dimensions=_dimensions(record, "dimensions", "glass_width_mm", "glass_height_mm"),
            curvature=_enum(
                Curvature, _require(record, "curvature", "glass_curvature"), "curvature"
            ),
            corner_radius_mm=_optional_number(
                record, "corner_radius_mm",
                _optional_number(record, "glass_corner_radius_mm", 0.0),
            ),
            cutout_mask=_mask(record),
            edge_coverage=_enum(
                EdgeCoverage,
                record.get("edge_coverage") or EdgeCoverage.FULL_GLUE.value,
                "edge_coverage",
            ),
            cutout_alignment_offset_allowance_mm=_optional_number(
                record, "cutout_alignment_offset_allowance_mm",
                _optional_number(
                    record, "cutout_alignment_offset_mm", DEFAULT_ALIGNMENT_ALLOWANCE_MM
                ),
            ),
        )
    except GeometryValidationError as e:
        raise RecordError(f"Invalid glass record: {e}") from e


def rule_from_record(record: Mapping[str, Any]) -> UniversalRule:
    """
    Map a universal rule record to UniversalRule.

    Raises:
        RecordError: If required fields are missing or malformed
    """
    warnings = record.get("warnings") or []
    if not isinstance(warnings, (list, tuple)) or not all(
        isinstance(w, str) for w in warnings
    ):
        raise RecordError("warnings must be a list of strings")

    is_safe = record.get("is_safe", record.get("is_safe_to_recommend"))

    try:
        return UniversalRule(
            target_screen_id=str(_require(record, "target_screen_id")),
            source_screen_id=str(_require(record, "source_screen_id")),
            fit_score=_number(_require(record, "fit_score"), "fit_score"),
            is_safe=_flag(is_safe, "is_safe", default=True),
            warnings=tuple(warnings),
        )
    except GeometryValidationError as e:
        raise RecordError(f"Invalid rule record: {e}") from e


def display_from_record(record: Mapping[str, Any]) -> DisplayProfile:
    """
    Map a screen record carrying display facts to DisplayProfile.

    Raises:
        RecordError: If required fields are missing or malformed
    """
    try:
        return DisplayProfile(
            **_screen_fields(record),
            display_resolution=str(_require(record, "display_resolution")),
            connection_type=str(_require(record, "connection_type")),
            panel_technology=str(record.get("panel_technology") or ""),
            refresh_rate_hz=_optional_number(
                record, "refresh_rate_hz", DEFAULT_REFRESH_RATE_HZ
            ),
        )
    except GeometryValidationError as e:
        raise RecordError(f"Invalid display record: {e}") from e


# =============================================================================
# VALUE TYPE -> RECORD
# =============================================================================

def result_to_record(result: MatchResult) -> dict[str, Any]:
    """Serialize a verdict to JSON-safe primitives."""
    breakdown = result.confidence_breakdown
    return {
        "status": result.status.value,
        "label": result.status.label,
        "confidence": result.confidence,
        "confidence_breakdown": dict(breakdown.components),
        "warnings": list(result.warnings),
        "rejection_reasons": list(result.rejection_reasons),
        "metadata": {
            "is_native": result.metadata.is_native,
            "computed_at": result.metadata.computed_at.isoformat(),
        },
    }


def load_record(path: Union[str, Path]) -> dict[str, Any]:
    """
    Read a single JSON object from a file.

    Raises:
        RecordError: If the file does not hold a JSON object
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise RecordError(f"{path} is not UTF-8 text: {e}") from e
    except json.JSONDecodeError as e:
        raise RecordError(f"{path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise RecordError(f"{path} must contain a JSON object")

    logger.debug("Loaded record from %s", path)
    return data
