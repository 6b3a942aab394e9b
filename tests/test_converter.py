"""Integration tests for the Converter orchestrator."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from lvzj.config import ParserOptions
from lvzj.converter import FORMATS, Converter
from lvzj.errors import InputTooLarge
from lvzj.style_manager import StyleManager

FIXTURE_DIR = Path(__file__).parent / "fixtures"
SAMPLE = FIXTURE_DIR / "sample.lvzj"


class TestConverterInit:
    """Test Converter construction."""

    def test_default_preset(self):
        c = Converter()
        assert c.style_manager.preset == "default"

    def test_custom_preset(self):
        c = Converter(style_preset="dark")
        assert c.style_manager.preset == "dark"

    def test_invalid_preset_raises(self):
        with pytest.raises(ValueError):
            Converter(style_preset="nonexistent")

    def test_all_presets_valid(self):
        for preset in StyleManager.PRESETS:
            c = Converter(style_preset=preset)
            assert c.style_manager.preset == preset

    def test_options_reach_parser(self):
        c = Converter(options=ParserOptions(max_input_chars=5))
        with pytest.raises(InputTooLarge):
            c.convert_text("x" * 6)


class TestConvertText:
    """Test convert_text and the other output formats."""

    def test_fragment(self):
        html = Converter().convert_text("(tučně)Ahoj")
        assert html.startswith('<div class="lvzj-content">')
        assert '<span class="lvzj-bold">Ahoj</span>' in html

    def test_standalone(self):
        html = Converter().convert_text("Ahoj", standalone=True, title="Test")
        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Test</title>" in html

    def test_empty_text(self):
        assert Converter().convert_text("") == '<div class="lvzj-content">\n</div>\n'

    def test_plain_text(self):
        assert Converter().to_plain_text("(nadpis)Ahoj\n(spoiler)x(konec)") == "Ahoj\n[spoiler]"

    def test_to_dict(self):
        assert Converter().to_dict("(tučně)x") == {
            "type": "fragment",
            "children": [{
                "type": "paragraph",
                "children": [{
                    "type": "styled",
                    "styles": ["bold"],
                    "children": [{"type": "text", "text": "x"}],
                }],
            }],
        }

    def test_countdown_target_serialised(self):
        tree = Converter().to_dict("(odpočet do 1. 2. 2030 10:30)")
        countdown = tree["children"][0]["children"][0]
        assert countdown["target"] == "2030-02-01T10:30:00+01:00"

    @pytest.mark.parametrize("fmt", FORMATS)
    def test_convert_formats(self, fmt):
        out = Converter().convert("(tučně)x", fmt)
        assert out.strip()

    def test_convert_json_is_tree(self):
        c = Converter()
        assert json.loads(c.convert("(tučně)x", "json")) == c.to_dict("(tučně)x")

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unknown format"):
            Converter().convert("x", "pdf")


class TestConvertFile:
    """Test file-based conversion."""

    def test_sample_file(self, tmp_path):
        out = tmp_path / "sample.html"
        Converter().convert_file(SAMPLE, out)
        html = out.read_text(encoding="utf-8")
        assert html.startswith("<!DOCTYPE html>")
        assert "<title>sample</title>" in html
        assert "lvzj-box-blue" in html

    def test_creates_parent_dirs(self, tmp_path):
        out = tmp_path / "a" / "b" / "out.html"
        Converter().convert_file(SAMPLE, out)
        assert out.exists()

    def test_fragment_file(self, tmp_path):
        out = tmp_path / "out.html"
        Converter().convert_file(SAMPLE, out, standalone=False)
        assert out.read_text(encoding="utf-8").startswith('<div class="lvzj-content">')

    def test_text_file(self, tmp_path):
        out = tmp_path / "out.txt"
        Converter().convert_file(SAMPLE, out, fmt="text")
        text = out.read_text(encoding="utf-8")
        assert text.startswith("Novinky z Lidí v Zemi")
        assert "[spoiler]" in text

    def test_encoding(self, tmp_path):
        src = tmp_path / "cp.txt"
        src.write_bytes("(tučně)Příliš žluťoučký".encode("cp1250"))
        out = tmp_path / "cp.html"
        Converter().convert_file(src, out, encoding="cp1250")
        assert "Příliš žluťoučký" in out.read_text(encoding="utf-8")
