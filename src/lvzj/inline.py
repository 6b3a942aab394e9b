"""Inline parser: bracket commands, styled runs and auto-links.

The current style is an explicit accumulator (:class:`StyleState`) passed
into :meth:`InlineParser.parse` and returned from it, so parsing is
re-entrant and independent documents can be parsed in parallel.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from lvzj.nodes import (
    Color,
    CountdownStyle,
    Direction,
    LvzjNode,
    NodeType,
    Style,
    text_node,
)
from lvzj.vocabulary import (
    BRACKET_KEYWORD,
    PROGRESS_COLORS,
    RESET_KEYWORDS,
    color_from_word,
    match_styles,
    match_text_color,
    parse_czech_date,
    split_highlight,
)
from lvzj.wrapped import SENTINEL_OPEN, SENTINEL_RE, WrappedKind, WrappedMatch

if TYPE_CHECKING:
    from lvzj.parser import LvzjParser

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Style state
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StyleState:
    """Style flags plus the two colour axes active at the cursor."""

    styles: frozenset[Style] = frozenset()
    color: Optional[Color] = None
    highlight: Optional[Color] = None

    @property
    def is_plain(self) -> bool:
        return not self.styles and self.color is None and self.highlight is None

    def merge(self, other: StyleState) -> StyleState:
        """Apply *other* on top: flags accumulate, each colour axis is replaced."""
        return StyleState(
            styles=self.styles | other.styles,
            color=other.color if other.color is not None else self.color,
            highlight=other.highlight if other.highlight is not None else self.highlight,
        )


PLAIN = StyleState()


def parse_style_command(command: str, *, whole_word: bool = False) -> Optional[StyleState]:
    """Translate the content of a style bracket, or ``None`` if it has no keyword."""
    lowered = command.lower()
    remaining, highlight = split_highlight(lowered, whole_word)
    styles = match_styles(remaining, whole_word)
    color = match_text_color(remaining, whole_word)
    if not styles and color is None and highlight is None:
        return None
    return StyleState(styles=frozenset(styles), color=color, highlight=highlight)


# ---------------------------------------------------------------------------
# Command grammar
# ---------------------------------------------------------------------------

# Sentinels and nested "(" never belong to a command.
_COMMAND_RE = re.compile(r"\(([^()\ue000\ue001]+)\)")
_COUNTDOWN_RE = re.compile(
    r"odpočet(?P<verbose>\s+slovně)?\s+(?P<direction>do|od)\s+(?P<date>.+)"
)
_PROGRESS_RE = re.compile(r"žížalka\s+(?P<value>\d+)\s*(?:%|/\s*(?P<max>\d+))?")
_LINK_RE = re.compile(r"odkaz\s+na\s+(https?://\S+)", re.IGNORECASE)
_LINK_END_RE = re.compile(r"\(konec(?:\s+odkazu)?\)", re.IGNORECASE)
_URL_RE = re.compile(r"https?://[^\s<]+")
_SPECIAL_RE = re.compile(r"[(\ue000]")


class InlineParser:
    """Parse one text segment into inline nodes.

    *wrapped* is the match table of the fragment the segment came from;
    sentinel tokens in the segment index into it.
    """

    def __init__(
        self,
        owner: LvzjParser,
        wrapped: list[WrappedMatch],
        depth: int = 0,
    ) -> None:
        self.owner = owner
        self.options = owner.options
        self.wrapped = wrapped
        self.depth = depth
        # no "(konec)" exists at or after this offset of the current text
        self._no_closer_from: Optional[int] = None

    # -- public API ---------------------------------------------------------

    def parse(self, text: str, style: StyleState = PLAIN) -> tuple[list[LvzjNode], StyleState]:
        """Return the nodes for *text* and the style active at its end."""
        parts: list[LvzjNode] = []
        pos = 0
        end = len(text)
        self._no_closer_from = None
        while pos < end:
            ch = text[pos]
            if ch == SENTINEL_OPEN:
                m = SENTINEL_RE.match(text, pos)
                if m:
                    self._expand(self.wrapped[int(m.group(1))], parts, style)
                    pos = m.end()
                    continue
            if ch == "(":
                pos, style = self._command(text, pos, parts, style)
                continue

            nxt = _SPECIAL_RE.search(text, pos + 1)
            run_end = nxt.start() if nxt else end
            self._emit_run(text[pos:run_end], parts, style)
            pos = run_end
        return parts, style

    # -- wrapped constructs -------------------------------------------------

    def _expand(self, match: WrappedMatch, parts: list[LvzjNode], style: StyleState) -> None:
        if match.kind is WrappedKind.RAW:
            _emit_text(match.inner, parts, style)
            return

        children = self.owner.parse_nested(match.inner, self.depth + 1)
        if children is None:
            _emit_text(match.source, parts, style)
            return

        if match.kind is WrappedKind.SPOILER:
            parts.append(LvzjNode(type=NodeType.SPOILER, children=children))
        elif match.kind is WrappedKind.BOX:
            title, color, float_side = match.box_params()
            parts.append(LvzjNode(
                type=NodeType.BOX,
                title=title,
                color=color,
                float_side=float_side,
                children=children,
            ))
        else:
            author, source = match.quote_params()
            parts.append(LvzjNode(
                type=NodeType.QUOTE,
                author=author,
                url=source,
                children=children,
            ))

    # -- bracket commands ---------------------------------------------------

    def _command(
        self, text: str, pos: int, parts: list[LvzjNode], style: StyleState
    ) -> tuple[int, StyleState]:
        m = _COMMAND_RE.match(text, pos)
        if m is None:
            _emit_text("(", parts, style)
            return pos + 1, style

        command = m.group(1)
        lowered = command.lower().strip()

        node = self._countdown(lowered)
        if node is None:
            node = self._progress_bar(lowered)
        if node is not None:
            parts.append(node)
            return m.end(), style

        link_end = self._link(command, text, m.end(), parts, style)
        if link_end is not None:
            return link_end, style

        if lowered in RESET_KEYWORDS:
            return m.end(), PLAIN

        new_style = parse_style_command(
            command, whole_word=self.options.whole_word_keywords
        )
        if new_style is not None:
            return m.end(), style.merge(new_style)

        if lowered == BRACKET_KEYWORD:
            _emit_text("(", parts, style)
            return m.end(), style

        logger.debug("Unknown command %r kept as text", command)
        _emit_text("(", parts, style)
        return pos + 1, style

    def _countdown(self, lowered: str) -> Optional[LvzjNode]:
        m = _COUNTDOWN_RE.search(lowered)
        if m is None:
            return None
        target = parse_czech_date(m.group("date"), self.options.tzinfo)
        if target is None:
            logger.debug("Unparseable countdown date %r", m.group("date"))
            return None
        return LvzjNode(
            type=NodeType.COUNTDOWN,
            target=target,
            direction=Direction.TO_TARGET if m.group("direction") == "do" else Direction.SINCE_TARGET,
            countdown_style=CountdownStyle.VERBOSE if m.group("verbose") else CountdownStyle.COMPACT,
        )

    def _progress_bar(self, lowered: str) -> Optional[LvzjNode]:
        m = _PROGRESS_RE.search(lowered)
        if m is None:
            return None
        color = None
        word = _word_before(lowered, m.start())
        if word:
            color = color_from_word(word, PROGRESS_COLORS)
        return LvzjNode(
            type=NodeType.PROGRESS_BAR,
            value=int(m.group("value")),
            max_value=int(m.group("max")) if m.group("max") else 100,
            color=color or Color.PRIMARY,
        )

    def _link(
        self,
        command: str,
        text: str,
        label_start: int,
        parts: list[LvzjNode],
        style: StyleState,
    ) -> Optional[int]:
        m = _LINK_RE.search(command)
        if m is None:
            return None
        if self._no_closer_from is not None and label_start >= self._no_closer_from:
            return None
        closer = _LINK_END_RE.search(text, label_start)
        if closer is None:
            self._no_closer_from = label_start
            return None
        label = self.owner.parse_label(
            text[label_start:closer.start()], self.wrapped, self.depth + 1, style
        )
        if label is None:
            return None
        parts.append(LvzjNode(type=NodeType.LINK, url=m.group(1), children=label))
        return closer.end()

    # -- plain text ---------------------------------------------------------

    def _emit_run(self, run: str, parts: list[LvzjNode], style: StyleState) -> None:
        last = 0
        for m in _URL_RE.finditer(run):
            if m.start() > last:
                _emit_text(run[last:m.start()], parts, style)
            url = m.group(0)
            parts.append(LvzjNode(type=NodeType.LINK, url=url, children=[text_node(url)]))
            last = m.end()
        if last < len(run):
            _emit_text(run[last:], parts, style)


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def _word_before(text: str, end: int) -> str:
    """Return the word separated by whitespace from ``text[end:]``, or ``""``.

    Scans backwards so a long run of letters costs one pass.
    """
    stop = end
    while stop > 0 and text[stop - 1].isspace():
        stop -= 1
    if stop == end:
        return ""
    start = stop
    while start > 0 and _is_word_char(text[start - 1]):
        start -= 1
    return text[start:stop]


def _emit_text(text: str, parts: list[LvzjNode], style: StyleState) -> None:
    """Append *text* under *style*, merging with an identically styled run."""
    if not text:
        return
    prev = parts[-1] if parts else None
    if style.is_plain:
        if prev is not None and prev.type is NodeType.TEXT:
            prev.text += text
        else:
            parts.append(text_node(text))
        return

    if (
        prev is not None
        and prev.type is NodeType.STYLED
        and prev.styles == style.styles
        and prev.color == style.color
        and prev.highlight == style.highlight
        and len(prev.children) == 1
        and prev.children[0].type is NodeType.TEXT
    ):
        prev.children[0].text += text
        return
    parts.append(LvzjNode(
        type=NodeType.STYLED,
        styles=style.styles,
        color=style.color,
        highlight=style.highlight,
        children=[text_node(text)],
    ))
