"""High-level LvZJ conversion orchestrator.

Ties together the parser, style manager, and renderer into a single
public API for converting LvZJ text or files to HTML, plain text or a
JSON-compatible tree.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from lvzj.config import ParserOptions
from lvzj.parser import LvzjParser
from lvzj.renderer import HtmlRenderer
from lvzj.style_manager import StyleManager

logger = logging.getLogger(__name__)

FORMATS = ("html", "text", "json")


class Converter:
    """Convert LvZJ content to HTML.

    Usage::

        converter = Converter(style_preset="default")
        converter.convert_file("clanek.txt", "clanek.html")

        # or from string
        html = converter.convert_text("(tučně)Ahoj")
    """

    STYLE_PRESETS = StyleManager.PRESETS

    def __init__(
        self,
        style_preset: str = "default",
        options: Optional[ParserOptions] = None,
    ) -> None:
        self.style_manager = StyleManager(style_preset)
        self.parser = LvzjParser(options)
        self.renderer = HtmlRenderer(self.style_manager)

    def convert_text(
        self,
        text: str,
        *,
        standalone: bool = False,
        title: str = "LvZJ",
        now: Optional[datetime] = None,
    ) -> str:
        """Convert LvZJ text to HTML.

        Args:
            text: LvZJ source string.
            standalone: Return a complete page with stylesheet and script
                instead of a fragment.
            title: Page title for standalone output.
            now: Instant at which countdowns are evaluated.

        Returns:
            HTML markup.
        """
        doc = self.parser.parse(text)
        if standalone:
            return self.renderer.render_document(doc, title=title, now=now)
        return self.renderer.render(doc, now=now)

    def to_plain_text(self, text: str, *, now: Optional[datetime] = None) -> str:
        """Convert LvZJ text to a plain-text preview."""
        return self.renderer.render_text(self.parser.parse(text), now=now)

    def to_dict(self, text: str) -> dict[str, Any]:
        """Return the parsed tree as a JSON-compatible dict."""
        return self.parser.parse(text).to_dict()

    def convert(
        self,
        text: str,
        fmt: str = "html",
        *,
        standalone: bool = False,
        title: str = "LvZJ",
    ) -> str:
        """Convert *text* to one of :data:`FORMATS`."""
        if fmt == "html":
            return self.convert_text(text, standalone=standalone, title=title)
        if fmt == "text":
            return self.to_plain_text(text) + "\n"
        if fmt == "json":
            return json.dumps(self.to_dict(text), ensure_ascii=False, indent=2) + "\n"
        raise ValueError(f"Unknown format {fmt!r}. Choose from: {', '.join(FORMATS)}")

    def convert_file(
        self,
        input_path: str | Path,
        output_path: str | Path,
        *,
        encoding: str = "utf-8",
        fmt: str = "html",
        standalone: bool = True,
    ) -> None:
        """Read an LvZJ file and write the converted output.

        Args:
            input_path: Path to the input text file.
            output_path: Path for the output file.
            encoding: Text encoding of the source file.
            fmt: Output format, one of :data:`FORMATS`.
            standalone: Write a complete HTML page instead of a fragment.
        """
        input_path = Path(input_path)
        output_path = Path(output_path)

        source = input_path.read_text(encoding=encoding)
        output = self.convert(source, fmt, standalone=standalone, title=input_path.stem)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(output, encoding="utf-8")
        logger.info("Converted %s -> %s (%s, %d characters)", input_path, output_path, fmt, len(output))
