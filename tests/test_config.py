"""Tests for lvzj.toml loading and option validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from lvzj.config import LvzjConfig, ParserOptions, RenderOptions, load_config


class TestParserOptions:
    def test_defaults(self) -> None:
        options = ParserOptions()
        assert options.max_input_chars == 100_000
        assert options.max_depth == 32
        assert options.depth_policy == "literal"
        assert options.timezone == "Europe/Prague"
        assert options.whole_word_keywords is False

    def test_tzinfo(self) -> None:
        assert ParserOptions().tzinfo.key == "Europe/Prague"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            ParserOptions().max_depth = 3  # type: ignore[misc]

    @pytest.mark.parametrize("kwargs", [
        {"max_input_chars": 0},
        {"max_depth": -1},
        {"depth_policy": "explode"},
        {"timezone": "Mars/Olympus"},
    ])
    def test_invalid(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            ParserOptions(**kwargs)


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        config = load_config()
        assert config == LvzjConfig()
        assert config.source is None

    def test_cwd_file(self, tmp_path: Path, monkeypatch) -> None:
        (tmp_path / "lvzj.toml").write_text("[parser]\nmax_depth = 4\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        config = load_config()
        assert config.parser.max_depth == 4
        assert config.source == tmp_path / "lvzj.toml"

    def test_explicit_file(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.toml"
        path.write_text(
            "[parser]\n"
            'depth_policy = "raise"\n'
            'timezone = "UTC"\n'
            "whole_word_keywords = true\n"
            "[render]\n"
            'style = "print"\n'
            "standalone = false\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.parser == ParserOptions(
            depth_policy="raise", timezone="UTC", whole_word_keywords=True,
        )
        assert config.render == RenderOptions(style="print", standalone=False)
        assert config.source == path

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / "lvzj.toml"
        path.write_text("[parser]\nmax_input_chars = -1\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)
