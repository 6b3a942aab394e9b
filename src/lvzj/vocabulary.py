"""The fixed Czech vocabulary of LvZJ.

The keyword surface is the protocol of the language: stored content depends
on it, so every table here is closed and ordered. Lookups walk the tables in
order and the first hit wins.
"""

from __future__ import annotations

import re
from datetime import datetime, tzinfo
from functools import lru_cache
from typing import Optional

from lvzj.nodes import Color, Style

# ---------------------------------------------------------------------------
# Style keywords
# ---------------------------------------------------------------------------

STYLE_KEYWORDS: list[tuple[tuple[str, ...], Style]] = [
    (("tučně", "tučnou"), Style.BOLD),
    (("kurzív",), Style.ITALIC),
    (("škrtnut",), Style.STRIKETHROUGH),
    (("horní index",), Style.SUPERSCRIPT),
    (("dolní index",), Style.SUBSCRIPT),
    (("strojově",), Style.MONOSPACE),
    (("kapitálkami",), Style.SMALL_CAPS),
    (("psace", "psací"), Style.SCRIPT),
    (("duhově", "duhovou"), Style.RAINBOW),
]

RESET_KEYWORDS = ("obyčejně", "normálně")
BRACKET_KEYWORD = "závorka"

# Compound colours come first so "modrozeleně" is not read as "zeleně".
# Texts written for the web editor rendered "(modrozeleně)" green; here it is
# cyan. Moving the compounds below "zeleně" restores the old rendering.
TEXT_COLORS: list[tuple[str, Color]] = [
    ("modrozeleně", Color.CYAN),
    ("modrozelenou", Color.CYAN),
    ("červeně", Color.RED),
    ("červenou", Color.RED),
    ("zeleně", Color.GREEN),
    ("zelenou", Color.GREEN),
    ("modře", Color.BLUE),
    ("modrou", Color.BLUE),
    ("žlutě", Color.YELLOW),
    ("žlutou", Color.YELLOW),
    ("fialově", Color.PURPLE),
    ("fialovou", Color.PURPLE),
    ("růžově", Color.PINK),
    ("růžovou", Color.PINK),
    ("hnědě", Color.BROWN),
    ("hnědou", Color.BROWN),
    ("oranžově", Color.ORANGE),
    ("oranžovou", Color.ORANGE),
    ("šedě", Color.GRAY),
    ("šedou", Color.GRAY),
    ("bíle", Color.WHITE),
    ("bílou", Color.WHITE),
    ("černě", Color.BLACK),
    ("černou", Color.BLACK),
]

HIGHLIGHT_TRIGGERS = ("podbarvení", "zvýrazn")
DEFAULT_HIGHLIGHT = Color.YELLOW

# Stems match every grammatical form ("červené", "červeně", "červená", ...).
_COLOR_STEMS: list[tuple[str, Color]] = [
    ("modrozelen", Color.CYAN),
    ("cyan", Color.CYAN),
    ("červen", Color.RED),
    ("zelen", Color.GREEN),
    ("modr", Color.BLUE),
    ("žlut", Color.YELLOW),
    ("oranž", Color.ORANGE),
    ("fial", Color.PURPLE),
    ("růž", Color.PINK),
]

HIGHLIGHT_COLORS = frozenset({
    Color.RED, Color.GREEN, Color.BLUE, Color.YELLOW,
    Color.CYAN, Color.PURPLE, Color.PINK, Color.ORANGE,
})
PROGRESS_COLORS = HIGHLIGHT_COLORS
BOX_COLORS = frozenset({
    Color.RED, Color.GREEN, Color.BLUE, Color.YELLOW,
    Color.ORANGE, Color.PURPLE, Color.PINK,
})

BOX_FLOAT_WORDS = {
    "vlevo": "left",
    "doleva": "left",
    "vpravo": "right",
    "doprava": "right",
}


# ---------------------------------------------------------------------------
# Matching helpers
# ---------------------------------------------------------------------------

@lru_cache(maxsize=256)
def _word_start_pattern(keyword: str) -> re.Pattern[str]:
    return re.compile(r"(?<!\w)" + re.escape(keyword))


def find_keyword(text: str, keyword: str, whole_word: bool = False) -> int:
    """Return the index of *keyword* in *text*, or ``-1``.

    With *whole_word* the keyword must start at a word boundary; stems such
    as ``kurzív`` still match the rest of their word.
    """
    if not whole_word:
        return text.find(keyword)
    m = _word_start_pattern(keyword).search(text)
    return m.start() if m else -1


def contains_keyword(text: str, keyword: str, whole_word: bool = False) -> bool:
    return find_keyword(text, keyword, whole_word) >= 0


def color_from_word(word: str, allowed: frozenset[Color]) -> Optional[Color]:
    """Map a colour word in any grammatical form to a :class:`Color`."""
    lowered = word.lower()
    for stem, color in _COLOR_STEMS:
        if stem in lowered:
            # "modrozelený" must not fall through to "zelen"
            return color if color in allowed else None
    return None


def match_styles(lowered: str, whole_word: bool = False) -> set[Style]:
    found: set[Style] = set()
    for keywords, style in STYLE_KEYWORDS:
        if any(contains_keyword(lowered, kw, whole_word) for kw in keywords):
            found.add(style)
    return found


def match_text_color(lowered: str, whole_word: bool = False) -> Optional[Color]:
    for keyword, color in TEXT_COLORS:
        if contains_keyword(lowered, keyword, whole_word):
            return color
    return None


_WORD_RE = re.compile(r"\w+")


def split_highlight(lowered: str, whole_word: bool = False) -> tuple[str, Optional[Color]]:
    """Find a highlight clause in *lowered*.

    Returns the text left for foreground matching and the highlight colour,
    or ``None`` when the command has no highlight clause. The colour is read
    from the word after the trigger, then the word before it; without a
    colour word the highlight is yellow.
    """
    idx = -1
    for trigger in HIGHLIGHT_TRIGGERS:
        idx = find_keyword(lowered, trigger, whole_word)
        if idx >= 0:
            break
    if idx < 0:
        return lowered, None

    words = list(_WORD_RE.finditer(lowered))
    pos = next(i for i, w in enumerate(words) if w.start() <= idx < w.end())
    spans = [words[pos].span()]
    highlight = DEFAULT_HIGHLIGHT
    for neighbour in (pos + 1, pos - 1):
        if 0 <= neighbour < len(words):
            color = color_from_word(words[neighbour].group(), HIGHLIGHT_COLORS)
            if color is not None:
                highlight = color
                spans.append(words[neighbour].span())
                break

    remaining = lowered
    for start, end in spans:
        remaining = remaining[:start] + " " * (end - start) + remaining[end:]
    return remaining, highlight


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

_DATE_PATTERNS = [
    re.compile(r"(\d{1,2})\s*\.\s*(\d{1,2})\s*\.\s*(\d{4})\s*(\d{1,2}):(\d{2})"),
    re.compile(r"(\d{1,2})\s*\.\s*(\d{1,2})\s*\.\s*(\d{4})"),
]


def parse_czech_date(text: str, tz: tzinfo) -> Optional[datetime]:
    """Parse ``D. M. YYYY[ H:MM]`` into an aware datetime in *tz*.

    Returns ``None`` when nothing matches or the date does not exist.
    """
    for pattern in _DATE_PATTERNS:
        m = pattern.search(text)
        if m is None:
            continue
        day, month, year = int(m.group(1)), int(m.group(2)), int(m.group(3))
        hour = int(m.group(4)) if m.lastindex and m.lastindex >= 4 else 0
        minute = int(m.group(5)) if m.lastindex and m.lastindex >= 5 else 0
        try:
            return datetime(year, month, day, hour, minute, tzinfo=tz)
        except ValueError:
            return None
    return None
