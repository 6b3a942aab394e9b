"""Configuration loader for lvzj.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEPTH_POLICIES = ("raise", "literal")


@dataclass(frozen=True)
class ParserOptions:
    """Limits and matching behaviour of the parser."""

    max_input_chars: int = 100_000
    max_depth: int = 32
    # "raise" -> InputTooComplex, "literal" -> too-deep construct stays as text
    depth_policy: str = "literal"
    timezone: str = "Europe/Prague"
    whole_word_keywords: bool = False

    def __post_init__(self) -> None:
        if self.max_input_chars <= 0:
            raise ValueError("max_input_chars must be positive")
        if self.max_depth < 0:
            raise ValueError("max_depth must not be negative")
        if self.depth_policy not in DEPTH_POLICIES:
            raise ValueError(
                f"Unknown depth_policy {self.depth_policy!r}. "
                f"Choose from: {', '.join(DEPTH_POLICIES)}"
            )
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone {self.timezone!r}") from exc

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


@dataclass
class RenderOptions:
    """Rendering configuration."""
    style: str = "default"
    standalone: bool = True


@dataclass
class LvzjConfig:
    """Complete lvzj configuration."""
    parser: ParserOptions = field(default_factory=ParserOptions)
    render: RenderOptions = field(default_factory=RenderOptions)
    source: Path | None = None


def load_config(config_path: Path | str | None = None) -> LvzjConfig:
    """
    Load configuration from lvzj.toml.

    Search order:
    1. config_path (if provided; must exist)
    2. cwd/lvzj.toml

    Args:
        config_path: Explicit path to config file

    Returns:
        LvzjConfig with resolved settings
    """
    toml_data: dict[str, Any] = {}
    source: Path | None = None

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.is_file():
            raise FileNotFoundError(f"config file not found: {config_path}")
        search_paths = [config_path]
    else:
        search_paths = [Path.cwd() / "lvzj.toml"]

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            source = path
            break

    parser_data = toml_data.get("parser", {})
    defaults = ParserOptions()
    parser_options = ParserOptions(
        max_input_chars=int(parser_data.get("max_input_chars", defaults.max_input_chars)),
        max_depth=int(parser_data.get("max_depth", defaults.max_depth)),
        depth_policy=str(parser_data.get("depth_policy", defaults.depth_policy)),
        timezone=str(parser_data.get("timezone", defaults.timezone)),
        whole_word_keywords=bool(
            parser_data.get("whole_word_keywords", defaults.whole_word_keywords)
        ),
    )

    render_data = toml_data.get("render", {})
    render_options = RenderOptions(
        style=str(render_data.get("style", "default")),
        standalone=bool(render_data.get("standalone", True)),
    )

    return LvzjConfig(parser=parser_options, render=render_options, source=source)
