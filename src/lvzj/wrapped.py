"""Wrapped-construct extraction.

Spoilers, boxes, quotes and raw spans are paired open/close markers whose
bodies may cross line boundaries. They are located in one left-to-right pass
over the whole text, before it is split into lines, and each match is
replaced by an opaque sentinel token that the inline parser expands later.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from lvzj.nodes import Color, Float
from lvzj.vocabulary import BOX_COLORS, BOX_FLOAT_WORDS, color_from_word

logger = logging.getLogger(__name__)

SENTINEL_OPEN = "\ue000"
SENTINEL_CLOSE = "\ue001"
SENTINEL_RE = re.compile(f"{SENTINEL_OPEN}(\\d+){SENTINEL_CLOSE}")


class WrappedKind(Enum):
    SPOILER = "spoiler"
    BOX = "box"
    QUOTE = "quote"
    RAW = "raw"


_OPENER_RE = re.compile(
    r"\("
    r"(?:"
    r"(?P<raw>prostě)"
    r"|(?P<spoiler>spoiler)"
    r"|(?:(?P<box_color>\w+)\s+)?(?P<box>boxík)(?:\s+(?P<box_args>[^)]*))?"
    r"|(?P<quote>citace)(?:\s+(?P<quote_args>[^)]*))?"
    r")\s*\)",
    re.IGNORECASE,
)

_CLOSERS = {
    WrappedKind.SPOILER: re.compile(r"\(konec\)", re.IGNORECASE),
    WrappedKind.BOX: re.compile(r"\(konec boxíku\)", re.IGNORECASE),
    WrappedKind.QUOTE: re.compile(r"\(konec citace\)", re.IGNORECASE),
    WrappedKind.RAW: re.compile(r"\(azj\)", re.IGNORECASE),
}

_QUOTED_RE = re.compile(r"[\"„“]([^\"“”]*)[\"“”]")
_URL_RE = re.compile(r"https?://\S+")


@dataclass(frozen=True)
class WrappedMatch:
    """One matched construct; offsets refer to the scanned text."""

    kind: WrappedKind
    start: int
    end: int
    inner: str
    source: str
    args: str = ""
    color_word: str = ""

    # -- box ----------------------------------------------------------------

    def box_params(self) -> tuple[Optional[str], Color, Optional[Float]]:
        """Return ``(title, color, float_side)`` for a box opener."""
        args = self.args
        title: Optional[str] = None
        m = _QUOTED_RE.search(args)
        if m:
            title = m.group(1).strip() or None
            args = args[:m.start()] + " " + args[m.end():]

        color = color_from_word(self.color_word, BOX_COLORS) if self.color_word else None
        float_side: Optional[Float] = None
        leftover: list[str] = []
        for word in args.split():
            lowered = word.lower()
            if float_side is None and lowered in BOX_FLOAT_WORDS:
                float_side = Float(BOX_FLOAT_WORDS[lowered])
                continue
            if color is None:
                color = color_from_word(lowered, BOX_COLORS)
                if color is not None:
                    continue
            leftover.append(word)
        if title is None and leftover:
            title = " ".join(leftover)
        return title, color or Color.DEFAULT, float_side

    # -- quote --------------------------------------------------------------

    def quote_params(self) -> tuple[Optional[str], str]:
        """Return ``(author, source_url)`` for a quote opener."""
        args = self.args
        source = ""
        m = _URL_RE.search(args)
        if m:
            source = m.group(0)
            args = args[:m.start()] + args[m.end():]
        author = args.strip().strip("\"„“”").strip()
        return author or None, source


def _kind_of(m: re.Match[str]) -> WrappedKind:
    if m.group("raw"):
        return WrappedKind.RAW
    if m.group("spoiler"):
        return WrappedKind.SPOILER
    if m.group("box"):
        return WrappedKind.BOX
    return WrappedKind.QUOTE


def scan_wrapped(text: str) -> list[WrappedMatch]:
    """Find all wrapped constructs in *text*.

    The earliest opener of any kind pairs with the nearest following closer
    of its kind. Matches never overlap; bodies are not scanned here, nested
    constructs are found when the body itself is parsed.
    """
    matches: list[WrappedMatch] = []
    # kinds whose closer no longer occurs after the scan position
    exhausted: set[WrappedKind] = set()
    pos = 0
    while True:
        opener = _OPENER_RE.search(text, pos)
        if opener is None:
            break
        kind = _kind_of(opener)
        closer = None
        if kind not in exhausted:
            closer = _CLOSERS[kind].search(text, opener.end())
        if closer is None:
            exhausted.add(kind)
            logger.debug("Unterminated %s at offset %d", kind.value, opener.start())
            pos = opener.start() + 1
            continue

        if kind is WrappedKind.BOX:
            args = opener.group("box_args") or ""
        elif kind is WrappedKind.QUOTE:
            args = opener.group("quote_args") or ""
        else:
            args = ""
        matches.append(WrappedMatch(
            kind=kind,
            start=opener.start(),
            end=closer.end(),
            inner=text[opener.end():closer.start()],
            source=text[opener.start():closer.end()],
            args=args.strip(),
            color_word=opener.group("box_color") or "",
        ))
        pos = closer.end()
    return matches


def extract_wrapped(text: str) -> tuple[str, list[WrappedMatch]]:
    """Replace every wrapped construct with a sentinel token.

    Returns the rewritten text and the match table; sentinel ``n`` refers to
    ``matches[n]``.
    """
    matches = scan_wrapped(text)
    if not matches:
        return text, matches
    pieces: list[str] = []
    last = 0
    for idx, match in enumerate(matches):
        pieces.append(text[last:match.start])
        pieces.append(f"{SENTINEL_OPEN}{idx}{SENTINEL_CLOSE}")
        last = match.end
    pieces.append(text[last:])
    return "".join(pieces), matches


def scrub_sentinels(text: str) -> str:
    """Replace sentinel characters in user input so they cannot be forged."""
    return text.replace(SENTINEL_OPEN, "\ufffd").replace(SENTINEL_CLOSE, "\ufffd")
