"""Tests for the CLI module."""

from __future__ import annotations

import json
import shutil
import subprocess
import sys
from pathlib import Path

import pytest

from lvzj.cli import main

FIXTURE_DIR = Path(__file__).parent / "fixtures"
SAMPLE = FIXTURE_DIR / "sample.lvzj"


@pytest.fixture
def sample(tmp_path) -> Path:
    """A copy of the sample document in a scratch directory."""
    path = tmp_path / "clanek.lvzj"
    shutil.copy(SAMPLE, path)
    return path


class TestCLIMain:
    """Test the main() entry point."""

    def test_list_styles(self, capsys):
        ret = main(["--list-styles"])
        assert ret == 0
        out = capsys.readouterr().out
        assert "default" in out
        assert "dark" in out

    def test_examples(self, capsys):
        ret = main(["--examples"])
        assert ret == 0
        out = capsys.readouterr().out
        assert "Styly písma:" in out
        assert "(tučně)Tučný text" in out
        assert "(seznam číslovaný)\\n- první" in out

    def test_missing_input(self):
        with pytest.raises(SystemExit):
            main([])

    def test_unknown_style(self, sample):
        with pytest.raises(SystemExit):
            main([str(sample), "-s", "neon"])

    def test_file_not_found(self, capsys):
        ret = main(["nonexistent.lvzj"])
        assert ret == 1
        err = capsys.readouterr().err
        assert "not found" in err

    def test_default_output_path(self, sample, capsys):
        ret = main([str(sample)])
        assert ret == 0
        out = sample.with_suffix(".html")
        assert out.exists()
        assert out.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")
        assert "Converted:" in capsys.readouterr().out

    def test_explicit_output(self, sample, tmp_path):
        out = tmp_path / "out" / "page.html"
        assert main([str(sample), "-o", str(out)]) == 0
        assert out.exists()

    def test_fragment(self, sample, tmp_path):
        out = tmp_path / "frag.html"
        assert main([str(sample), "-o", str(out), "--fragment"]) == 0
        assert out.read_text(encoding="utf-8").startswith('<div class="lvzj-content">')

    def test_style_option(self, sample, tmp_path):
        out = tmp_path / "dark.html"
        assert main([str(sample), "-o", str(out), "-s", "dark"]) == 0
        assert "#111827" in out.read_text(encoding="utf-8")

    def test_text_to_stdout(self, sample, capsys):
        assert main([str(sample), "-f", "text", "-o", "-"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Novinky z Lidí v Zemi")

    def test_json_output(self, sample):
        assert main([str(sample), "-f", "json"]) == 0
        tree = json.loads(sample.with_suffix(".json").read_text(encoding="utf-8"))
        assert tree["type"] == "fragment"

    def test_never_overwrites_input(self, tmp_path):
        src = tmp_path / "poznamky.txt"
        src.write_text("(tučně)x", encoding="utf-8")
        assert main([str(src), "-f", "text"]) == 0
        assert src.read_text(encoding="utf-8") == "(tučně)x"
        assert (tmp_path / "poznamky.txt.txt").read_text(encoding="utf-8") == "x\n"

    def test_verbose_flag(self, sample, tmp_path):
        out = tmp_path / "v.html"
        assert main([str(sample), "-o", str(out), "-v"]) == 0

    def test_bad_encoding(self, tmp_path, capsys):
        src = tmp_path / "bad.txt"
        src.write_bytes(b"\xff\xfe\xfa")
        assert main([str(src)]) == 1
        assert "Error:" in capsys.readouterr().err


class TestCLIConfig:
    """Test lvzj.toml handling."""

    def test_config_style(self, sample, tmp_path):
        cfg = tmp_path / "lvzj.toml"
        cfg.write_text('[render]\nstyle = "dark"\n', encoding="utf-8")
        out = tmp_path / "c.html"
        assert main([str(sample), "-o", str(out), "-c", str(cfg)]) == 0
        assert "#111827" in out.read_text(encoding="utf-8")

    def test_config_standalone_off(self, sample, tmp_path):
        cfg = tmp_path / "lvzj.toml"
        cfg.write_text("[render]\nstandalone = false\n", encoding="utf-8")
        out = tmp_path / "c.html"
        assert main([str(sample), "-o", str(out), "-c", str(cfg)]) == 0
        assert not out.read_text(encoding="utf-8").startswith("<!DOCTYPE")

    def test_config_limit(self, sample, tmp_path, capsys):
        cfg = tmp_path / "lvzj.toml"
        cfg.write_text("[parser]\nmax_input_chars = 5\n", encoding="utf-8")
        assert main([str(sample), "-c", str(cfg)]) == 1
        assert "limit" in capsys.readouterr().err

    def test_missing_config(self, sample, capsys):
        assert main([str(sample), "-c", "missing.toml"]) == 1
        assert "not found" in capsys.readouterr().err

    def test_invalid_config(self, sample, tmp_path, capsys):
        cfg = tmp_path / "lvzj.toml"
        cfg.write_text('[parser]\ndepth_policy = "explode"\n', encoding="utf-8")
        assert main([str(sample), "-c", str(cfg)]) == 1
        assert "depth_policy" in capsys.readouterr().err


class TestCLISubprocess:
    """Test invoking the CLI as a subprocess."""

    def test_version(self):
        result = subprocess.run(
            [sys.executable, "-m", "lvzj.cli", "--version"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert "lvzj" in result.stdout

    def test_help(self):
        result = subprocess.run(
            [sys.executable, "-m", "lvzj.cli", "--help"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert "LvZJ" in result.stdout
