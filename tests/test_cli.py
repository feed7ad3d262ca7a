"""
Tests for the CLI and verdict explanations.

These tests verify:
1. CLI command correctness for glass and display checks
2. INCOMPATIBLE is a normal outcome; bad input exits 1
3. JSON output matches the serialized verdict
4. Explanations show every component that produced a verdict
"""

import json
from datetime import datetime, timezone

import pytest

from partfit.cli.main import (
    create_parser,
    format_result,
    format_result_row,
    format_status_badge,
    main,
)
from partfit.geometry.types import (
    Curvature,
    Dimensions,
    GlassGeometry,
    MatchStatus,
    ScreenGeometry,
    ToleranceConfig,
    UniversalRule,
)
from partfit.matching.engine import CompatibilityEngine
from partfit.matching.explain import explain_result, short_explanation


FIXED_TIME = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

SCREEN = {
    "id": "screen_ph_01",
    "dimensions": {"width_mm": 70.0, "height_mm": 150.0},
    "active_area": {"width_mm": 68.0, "height_mm": 148.0},
    "curvature": "FLAT",
    "corner_radius_mm": 2.0,
    "cutout_mask": "none",
    "fit_tolerances": {"max_oversize_mm": 0.0, "min_undersize_mm": 2.0},
}

GLASS = {
    "sku_code": "TG-PH01",
    "dimensions": {"width_mm": 69.0, "height_mm": 149.0},
    "curvature": "FLAT",
    "corner_radius_mm": 2.0,
}

DISPLAY = {
    "id": "sams_a54",
    "width_mm": 71.0,
    "height_mm": 156.0,
    "active_area_width_mm": 70.0,
    "active_area_height_mm": 155.0,
    "curved_type": "FLAT",
    "display_resolution": "1080x2340",
    "connection_type": "FPC_SAMS_A54_V1",
    "panel_technology": "OLED",
    "refresh_rate_hz": 120,
}


# =============================================================================
# TEST FIXTURES
# =============================================================================

def write_json(tmp_path, name: str, data) -> str:
    """Helper to write a JSON record and return its path."""
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def make_screen(curvature: Curvature = Curvature.FLAT) -> ScreenGeometry:
    return ScreenGeometry(
        screen_id="screen_ph_01",
        dimensions=Dimensions(70.0, 150.0),
        active_area=Dimensions(68.0, 148.0),
        curvature=curvature,
        corner_radius_mm=2.0,
        fit_tolerances=ToleranceConfig(min_undersize_mm=2.0),
    )


def make_glass(corner_radius: float = 2.0) -> GlassGeometry:
    return GlassGeometry(
        sku_code="TG-PH01",
        dimensions=Dimensions(70.0, 150.0),
        curvature=Curvature.FLAT,
        corner_radius_mm=corner_radius,
    )


def fixed_engine() -> CompatibilityEngine:
    return CompatibilityEngine(clock=lambda: FIXED_TIME)


# =============================================================================
# PARSER TESTS
# =============================================================================

class TestParser:
    """Test argument parsing."""

    def test_glass_command(self):
        args = create_parser().parse_args(["glass", "s.json", "g.json", "--rule", "r.json"])

        assert args.command == "glass"
        assert args.rule == "r.json"
        assert not args.json

    def test_display_command(self):
        args = create_parser().parse_args(["display", "t.json", "d.json", "--json"])

        assert args.command == "display"
        assert args.json

    def test_json_and_explain_are_exclusive(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["glass", "s.json", "g.json", "--json", "--explain"])

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage: partfit" in capsys.readouterr().out


# =============================================================================
# GLASS COMMAND TESTS
# =============================================================================

class TestGlassCommand:
    """Test the glass command end to end."""

    def test_exact_match(self, tmp_path, capsys):
        code = main([
            "glass",
            write_json(tmp_path, "screen.json", SCREEN),
            write_json(tmp_path, "glass.json", GLASS),
        ])

        out = capsys.readouterr().out
        assert code == 0
        assert "[EXACT]" in out
        assert "TG-PH01 on screen_ph_01" in out

    def test_incompatible_exits_zero(self, tmp_path, capsys):
        code = main([
            "glass",
            write_json(tmp_path, "screen.json", {**SCREEN, "curvature": "CURVED_3D"}),
            write_json(tmp_path, "glass.json", GLASS),
        ])

        out = capsys.readouterr().out
        assert code == 0
        assert "[INCOMPATIBLE]" in out
        assert "x Cannot put Flat Glass on Curved Screen" in out

    def test_universal_rule(self, tmp_path, capsys):
        rule = {
            "target_screen_id": "screen_ph_01",
            "source_screen_id": "screen_ph_02",
            "fit_score": 85,
            "warnings": ["Slight gap on edges"],
        }

        code = main([
            "glass",
            write_json(tmp_path, "screen.json", SCREEN),
            write_json(tmp_path, "glass.json", GLASS),
            "--rule", write_json(tmp_path, "rule.json", rule),
        ])

        out = capsys.readouterr().out
        assert code == 0
        assert "[UNIVERSAL]" in out
        assert "! Slight gap on edges" in out

    def test_json_output(self, tmp_path, capsys):
        main([
            "glass",
            write_json(tmp_path, "screen.json", SCREEN),
            write_json(tmp_path, "glass.json", GLASS),
            "--json",
        ])

        record = json.loads(capsys.readouterr().out)
        assert record["status"] == "EXACT"
        assert record["label"] == "GREEN"
        assert 0.0 <= record["confidence"] <= 1.0
        assert record["metadata"]["is_native"] is True

    def test_explain_output(self, tmp_path, capsys):
        main([
            "glass",
            write_json(tmp_path, "screen.json", SCREEN),
            write_json(tmp_path, "glass.json", GLASS),
            "--explain",
        ])

        out = capsys.readouterr().out
        assert "**Confidence Breakdown:**" in out
        assert "geometry_penalty" in out
        assert "Advisory: corner radius" in out

    def test_config_override(self, tmp_path, capsys):
        config = write_json(tmp_path, "config.json", {"geometry_weight": 0.0})

        main([
            "glass",
            write_json(tmp_path, "screen.json", SCREEN),
            write_json(tmp_path, "glass.json", GLASS),
            "--config", config,
            "--json",
        ])

        assert json.loads(capsys.readouterr().out)["confidence"] == 1.0

    def test_missing_file_exits_one(self, tmp_path, capsys):
        code = main([
            "glass",
            str(tmp_path / "missing.json"),
            write_json(tmp_path, "glass.json", GLASS),
        ])

        out = capsys.readouterr().out
        assert code == 1
        assert "ERROR: Invalid input" in out

    def test_malformed_record_exits_one(self, tmp_path, capsys):
        code = main([
            "glass",
            write_json(tmp_path, "screen.json", {**SCREEN, "curvature": "WAVY"}),
            write_json(tmp_path, "glass.json", GLASS),
        ])

        out = capsys.readouterr().out
        assert code == 1
        assert "Reason: Invalid curvature" in out

    def test_bad_config_exits_one(self, tmp_path, capsys):
        code = main([
            "glass",
            write_json(tmp_path, "screen.json", SCREEN),
            write_json(tmp_path, "glass.json", GLASS),
            "--config", write_json(tmp_path, "config.json", {"geometry_weight": -1}),
        ])

        assert code == 1
        assert "geometry_weight" in capsys.readouterr().out

    def test_binary_record_exits_one(self, tmp_path, capsys):
        screen = tmp_path / "screen.json"
        screen.write_bytes(b'{"id": "\xff\xfe"}')

        code = main(["glass", str(screen), write_json(tmp_path, "glass.json", GLASS)])

        out = capsys.readouterr().out
        assert code == 1
        assert "not UTF-8 text" in out

    def test_malformed_rule_warnings_exit_one(self, tmp_path, capsys):
        rule = {
            "target_screen_id": "screen_ph_01",
            "source_screen_id": "screen_ph_02",
            "fit_score": 85,
            "warnings": 5,
        }

        code = main([
            "glass",
            write_json(tmp_path, "screen.json", SCREEN),
            write_json(tmp_path, "glass.json", GLASS),
            "--rule", write_json(tmp_path, "rule.json", rule),
        ])

        assert code == 1
        assert "warnings must be a list of strings" in capsys.readouterr().out


# =============================================================================
# DISPLAY COMMAND TESTS
# =============================================================================

class TestDisplayCommand:
    """Test the display command end to end."""

    def test_same_profile(self, tmp_path, capsys):
        path = write_json(tmp_path, "target.json", DISPLAY)

        code = main(["display", path, path])

        out = capsys.readouterr().out
        assert code == 0
        assert "[EXACT]" in out
        assert "sams_a54 into sams_a54" in out

    def test_connector_mismatch(self, tmp_path, capsys):
        donor = {**DISPLAY, "id": "donor", "connection_type": "FPC_OTHER"}

        code = main([
            "display",
            write_json(tmp_path, "target.json", DISPLAY),
            write_json(tmp_path, "donor.json", donor),
            "--json",
        ])

        record = json.loads(capsys.readouterr().out)
        assert code == 0
        assert record["status"] == "INCOMPATIBLE"
        assert record["confidence"] == 0.0
        assert "Connector Mismatch" in record["rejection_reasons"][0]

    def test_missing_display_facts_exit_one(self, tmp_path, capsys):
        path = write_json(tmp_path, "target.json", SCREEN)

        code = main(["display", path, path])

        assert code == 1
        assert "display_resolution" in capsys.readouterr().out


# =============================================================================
# FORMATTING & EXPLANATION TESTS
# =============================================================================

class TestFormatting:
    """Test one-line output formatting."""

    def test_status_badge(self):
        assert format_status_badge(MatchStatus.UNIVERSAL) == "[UNIVERSAL]"

    def test_result_row(self):
        result = fixed_engine().match_glass(make_screen(), make_glass())

        row = format_result_row("TG-PH01 on screen_ph_01", result)

        assert row.startswith("[EXACT]")
        assert "100%" in row
        assert "GREEN" in row

    def test_rejections_listed(self):
        result = fixed_engine().match_glass(make_screen(Curvature.CURVED_3D), make_glass())

        text = format_result("x", result)

        assert "  x " in text
        assert "RED" in text


class TestExplanations:
    """Test plain-English explanations."""

    def test_exact_lists_every_component(self):
        result = fixed_engine().match_glass(make_screen(), make_glass())

        text = explain_result(result)

        for name, _ in result.confidence_breakdown.components:
            assert name in text
        assert "Native fit confirmed" in text

    def test_rejection_lists_reasons(self):
        result = fixed_engine().match_glass(make_screen(Curvature.CURVED_3D), make_glass())

        text = explain_result(result)

        assert "**Rejected because:**" in text
        assert "Confidence Breakdown" not in text
        assert "Do not recommend" in text

    def test_universal_shows_warnings(self):
        rule = UniversalRule("screen_ph_01", "screen_ph_02", 90, warnings=["Gap on edges"])
        result = fixed_engine().match_glass(make_screen(), make_glass(), rule)

        text = explain_result(result)

        assert "**Warnings:** Gap on edges" in text

    def test_corner_radius_note_is_advisory(self):
        """A radius mismatch shows up in the text but not in the verdict."""
        screen = make_screen()
        glass = make_glass(corner_radius=4.0)
        result = fixed_engine().match_glass(screen, glass)

        text = explain_result(result, screen, glass)

        assert result.status == MatchStatus.EXACT
        assert "corner radius differs" in text

    def test_short_explanation(self):
        engine = fixed_engine()

        assert short_explanation(engine.match_glass(make_screen(), make_glass())) == (
            "EXACT (100%) - No concerns"
        )
        rejected = engine.match_glass(make_screen(Curvature.CURVED_3D), make_glass())
        assert short_explanation(rejected).startswith("INCOMPATIBLE (0%) - Cannot put Flat")

    def test_explanation_is_deterministic(self):
        engine = fixed_engine()

        first = explain_result(engine.match_glass(make_screen(), make_glass()))
        second = explain_result(engine.match_glass(make_screen(), make_glass()))

        assert first == second
