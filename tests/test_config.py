"""Tests for YAML config loading and module-level constants."""

from __future__ import annotations

import re

import pytest

from gview.config import (
    BASE_COLORS,
    DEFAULT_FEATURE_COLOR,
    FALLBACK_BASE_COLOR,
    FEATURE_COLORS,
    GC_MIN_WINDOW,
    GC_TARGET_WINDOWS,
    GOTO_WINDOW,
    OPERON_COLORS,
    OPERON_MAX_GAP,
    OPERON_MIN_GENES,
    ROW_BUFFER,
    feature_type_color,
    load_palette,
    load_settings,
)

HEX_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


class TestLoadPalette:
    def test_has_required_keys(self):
        palette = load_palette()
        for key in ("nucleotide", "feature", "rendering", "operon"):
            assert key in palette

    def test_nucleotide_keys(self):
        for base in "ATGCN":
            assert base in load_palette()["nucleotide"], f"Missing nucleotide key: {base}"

    def test_feature_keys(self):
        feature = load_palette()["feature"]
        for key in ("gene", "CDS", "mRNA", "tRNA", "rRNA", "promoter", "terminator", "regulatory"):
            assert key in feature, f"Missing feature key: {key}"

    def test_all_colors_are_hex(self):
        palette = load_palette()
        colors = [
            *palette["nucleotide"].values(),
            *palette["feature"].values(),
            *palette["rendering"].values(),
            *palette["operon"],
        ]
        for color in colors:
            assert HEX_RE.match(color), f"Invalid hex color: {color}"

    def test_cached(self):
        assert load_palette() is load_palette()


class TestLoadSettings:
    def test_values(self):
        settings = load_settings()
        assert settings["layout"]["row_buffer"] == 10
        assert settings["operon"] == {"max_gap": 300, "min_genes": 2}
        assert settings["navigation"]["goto_window"] == 1000

    def test_types(self):
        settings = load_settings()
        for section in settings.values():
            for value in section.values():
                assert isinstance(value, int)


class TestConstants:
    def test_match_yaml(self):
        palette, settings = load_palette(), load_settings()
        assert BASE_COLORS == palette["nucleotide"]
        assert FEATURE_COLORS == palette["feature"]
        assert OPERON_COLORS == palette["operon"]
        assert DEFAULT_FEATURE_COLOR == palette["rendering"]["default_feature"]
        assert FALLBACK_BASE_COLOR == palette["rendering"]["fallback_base_color"]
        assert ROW_BUFFER == settings["layout"]["row_buffer"]
        assert (GC_TARGET_WINDOWS, GC_MIN_WINDOW) == (50, 10)
        assert (OPERON_MAX_GAP, OPERON_MIN_GENES) == (300, 2)
        assert GOTO_WINDOW == 1000

    def test_operon_palette_has_several_colors(self):
        assert len(OPERON_COLORS) >= 2
        assert len(set(OPERON_COLORS)) == len(OPERON_COLORS)

    @pytest.mark.parametrize("feature_type", ["CDS", "gene", "promoter"])
    def test_feature_type_color(self, feature_type):
        assert feature_type_color(feature_type) == FEATURE_COLORS[feature_type]

    def test_unknown_type_uses_default(self):
        assert feature_type_color("mobile_element") == DEFAULT_FEATURE_COLOR
