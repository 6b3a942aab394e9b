"""Command-line interface for lvzj.

Usage::

    lvzj clanek.txt                      # writes clanek.html
    lvzj clanek.txt -o out.html          # explicit output path
    lvzj clanek.txt --style dark         # use dark preset
    lvzj clanek.txt -f text -o -         # plain-text preview on stdout
    lvzj --list-styles                   # list available presets
    lvzj --examples                      # print the language reference
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from lvzj import __version__
from lvzj.config import load_config
from lvzj.converter import FORMATS, Converter
from lvzj.errors import LvzjError
from lvzj.reference import REFERENCE
from lvzj.style_manager import StyleManager

logger = logging.getLogger(__name__)

_SUFFIXES = {"html": ".html", "text": ".txt", "json": ".json"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lvzj",
        description="Render LvZJ (Lidi v Zemi Jazyk) markup to HTML, text or JSON.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Path to the LvZJ text file to convert.",
    )
    parser.add_argument(
        "-o", "--output",
        help="Output file path, '-' for stdout. Defaults to <input> with the format's suffix.",
    )
    parser.add_argument(
        "-s", "--style",
        choices=StyleManager.PRESETS,
        help="Style preset (default: from config, else 'default').",
    )
    parser.add_argument(
        "-f", "--format",
        default="html",
        choices=FORMATS,
        help="Output format (default: %(default)s).",
    )
    parser.add_argument(
        "--fragment",
        action="store_true",
        help="Write an HTML fragment instead of a standalone page.",
    )
    parser.add_argument(
        "-e", "--encoding",
        default="utf-8",
        help="Input file encoding (default: %(default)s).",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to lvzj.toml (default: ./lvzj.toml if present).",
    )
    parser.add_argument(
        "--list-styles",
        action="store_true",
        help="List available style presets and exit.",
    )
    parser.add_argument(
        "--examples",
        action="store_true",
        help="Print the language reference and exit.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print debug logging.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _print_examples() -> None:
    for category in REFERENCE:
        print(f"{category.name}:")
        for item in category.items:
            code = item.code.replace("\n", "\\n")
            print(f"  {code}")
            print(f"      {item.description}")
        print()


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_styles:
        print("Available style presets:")
        for preset in StyleManager.PRESETS:
            print(f"  - {preset}")
        return 0

    if args.examples:
        _print_examples()
        return 0

    if not args.input:
        parser.error("the following argument is required: input")

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"Error: file not found: {input_path}", file=sys.stderr)
        return 1

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    style = args.style or config.render.style
    standalone = config.render.standalone and not args.fragment
    logger.debug("Config: %s, style: %s, format: %s", config.source, style, args.format)

    try:
        converter = Converter(style_preset=style, options=config.parser)
        if args.output == "-":
            source = input_path.read_text(encoding=args.encoding)
            sys.stdout.write(converter.convert(
                source, args.format, standalone=standalone, title=input_path.stem,
            ))
            return 0
        output_path = (
            Path(args.output) if args.output
            else input_path.with_suffix(_SUFFIXES[args.format])
        )
        if output_path.resolve() == input_path.resolve():
            # never overwrite the source, e.g. ``poznamky.txt -f text``
            output_path = input_path.with_name(input_path.name + _SUFFIXES[args.format])
        converter.convert_file(
            input_path,
            output_path,
            encoding=args.encoding,
            fmt=args.format,
            standalone=standalone,
        )
    except (LvzjError, OSError, UnicodeDecodeError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Converted: {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
