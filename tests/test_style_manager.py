"""Tests for the StyleManager presets and stylesheet."""

from __future__ import annotations

import pytest

from lvzj.nodes import Color, Style
from lvzj.style_manager import FontSpec, Palette, StyleManager


class TestPresets:
    def test_preset_names(self) -> None:
        assert StyleManager.PRESETS == ["default", "dark", "print", "minimal"]

    def test_unknown_preset(self) -> None:
        with pytest.raises(ValueError, match="Unknown preset"):
            StyleManager("neon")

    @pytest.mark.parametrize("preset", StyleManager.PRESETS)
    def test_every_preset_builds_stylesheet(self, preset: str) -> None:
        css = StyleManager(preset).stylesheet()
        assert ".lvzj-content" in css

    def test_print_font(self) -> None:
        sm = StyleManager("print")
        assert sm.font.size_px == 12.0
        assert "Georgia" in sm.font.family

    def test_minimal_square_corners(self) -> None:
        css = StyleManager("minimal").stylesheet()
        assert "border-radius: 0;" in css
        assert "border-radius: 0.375rem" not in css


class TestColours:
    def test_base_colour(self) -> None:
        assert StyleManager().get_color(Color.RED) == "#ef4444"

    def test_theme_colours(self) -> None:
        sm = StyleManager()
        assert sm.get_color(Color.PRIMARY) == sm.palette.primary
        assert sm.get_color(Color.DEFAULT) == sm.palette.border

    def test_dark_black_is_visible(self) -> None:
        assert StyleManager("dark").get_color(Color.BLACK) == "#ffffff"

    def test_presets_do_not_share_palettes(self) -> None:
        StyleManager("dark")
        assert StyleManager().get_color(Color.BLACK) == "#000000"

    def test_highlight_is_translucent(self) -> None:
        assert StyleManager().get_highlight(Color.RED) == "rgba(239, 68, 68, 0.3)"


class TestStylesheet:
    def test_style_rules(self) -> None:
        css = StyleManager().stylesheet()
        for style in Style:
            assert f".lvzj-{style.value} {{" in css

    def test_colour_rules(self) -> None:
        css = StyleManager().stylesheet()
        assert ".lvzj-fg-cyan { color: #06b6d4; }" in css
        assert ".lvzj-bg-yellow {" in css
        assert ".lvzj-progress-primary .lvzj-progress-fill" in css
        assert ".lvzj-box-blue {" in css

    def test_hidden_spoiler_rule(self) -> None:
        css = StyleManager().stylesheet()
        assert '.lvzj-spoiler[data-revealed="false"]' in css


class TestDerive:
    def test_font_derive(self) -> None:
        base = FontSpec()
        derived = base.derive(size_px=20.0, unknown=1)
        assert derived.size_px == 20.0
        assert base.size_px == 16.0
        assert not hasattr(derived, "unknown")

    def test_palette_derive_copies_colours(self) -> None:
        base = Palette()
        derived = base.derive(primary="#000000")
        derived.colors[Color.RED] = "#111111"
        assert base.colors[Color.RED] == "#ef4444"
