"""LvZJ parser that produces a :class:`~lvzj.nodes.LvzjNode` tree.

Parsing runs in two phases. Wrapped constructs (spoilers, boxes, quotes,
raw spans) are first replaced by sentinel tokens over the whole text; the
result is then split into lines and each line is classified as a list item,
heading, divider, aligned paragraph, paragraph or blank line. Text inside
each block goes through :class:`~lvzj.inline.InlineParser`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from lvzj.config import ParserOptions
from lvzj.errors import InputTooComplex, InputTooLarge
from lvzj.inline import PLAIN, InlineParser, StyleState
from lvzj.nodes import (
    Alignment,
    DividerSize,
    HeadingLevel,
    LvzjNode,
    NodeType,
)
from lvzj.wrapped import WrappedMatch, extract_wrapped, scrub_sentinels

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Block markers
# ---------------------------------------------------------------------------

_LIST_OPEN_RE = re.compile(
    r"\(seznam(?P<ordered>\s+číslovaný)?(?P<pros_cons>\s+kladů\s+a\s+záporů)?\s*\)",
    re.IGNORECASE,
)
_LIST_CLOSE_RE = re.compile(r"\(konec(?:\s+seznamu)?\)", re.IGNORECASE)
_LIST_ITEM_PREFIXES = ("- ", "+ ")
_HEADING_RE = re.compile(r"\(nadpis\)", re.IGNORECASE)
_SMALL_HEADING_RE = re.compile(r"\(malý\s+nadpis\)", re.IGNORECASE)
_DIVIDER_RE = re.compile(r"\(oddělovač\)", re.IGNORECASE)
_SMALL_DIVIDER_RE = re.compile(r"\(malý\s+oddělovač\)", re.IGNORECASE)
_ALIGN_RIGHT_RE = re.compile(r"\((?:zarovnat\s+)?doprava\)", re.IGNORECASE)
_ALIGN_CENTER_RE = re.compile(r"\((?:zarovnat\s+)?doprostřed\)", re.IGNORECASE)


@dataclass
class _PendingList:
    ordered: bool = False
    pros_cons: bool = False
    items: list[tuple[str, str]] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class LvzjParser:
    """Parse LvZJ text into an :class:`LvzjNode` tree.

    Usage::

        parser = LvzjParser()
        tree = parser.parse("(nadpis)Ahoj\\n(tučně)světe")
    """

    def __init__(self, options: Optional[ParserOptions] = None) -> None:
        self.options = options or ParserOptions()

    # -- public API ---------------------------------------------------------

    def parse(self, text: str) -> LvzjNode:
        """Return a *FRAGMENT* ``LvzjNode`` holding the blocks of *text*."""
        if not text:
            return LvzjNode(type=NodeType.FRAGMENT)
        text = self._prepare(text)
        children = self._parse_fragment(text, depth=0)
        logger.debug("Parsed %d characters into %d blocks", len(text), len(children))
        return LvzjNode(type=NodeType.FRAGMENT, children=children)

    def parse_inline(self, text: str) -> LvzjNode:
        """Parse *text* as a single inline segment, without block rules."""
        if not text:
            return LvzjNode(type=NodeType.FRAGMENT)
        text, wrapped = extract_wrapped(self._prepare(text))
        nodes, _ = InlineParser(self, wrapped).parse(text)
        return LvzjNode(type=NodeType.FRAGMENT, children=nodes)

    # -- recursion entry points used by InlineParser -------------------------

    def parse_nested(self, text: str, depth: int) -> Optional[list[LvzjNode]]:
        """Parse the body of a wrapped construct.

        Returns ``None`` when the depth limit is hit under the ``literal``
        policy; the caller then keeps the construct as text.
        """
        if not self._enter(depth):
            return None
        return self._parse_fragment(text, depth)

    def parse_label(
        self,
        text: str,
        wrapped: list[WrappedMatch],
        depth: int,
        style: StyleState,
    ) -> Optional[list[LvzjNode]]:
        """Parse a link label that shares the sentinel table of its line."""
        if not self._enter(depth):
            return None
        nodes, _ = InlineParser(self, wrapped, depth).parse(text, style)
        return nodes

    # -- internals ----------------------------------------------------------

    def _prepare(self, text: str) -> str:
        if len(text) > self.options.max_input_chars:
            raise InputTooLarge(len(text), self.options.max_input_chars)
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        return scrub_sentinels(text)

    def _enter(self, depth: int) -> bool:
        if depth <= self.options.max_depth:
            return True
        if self.options.depth_policy == "raise":
            raise InputTooComplex(depth, self.options.max_depth)
        logger.debug("Depth %d over limit, keeping construct as text", depth)
        return False

    def _parse_fragment(self, text: str, depth: int) -> list[LvzjNode]:
        if depth > 0:
            text = text.strip("\n")
        text, wrapped = extract_wrapped(text)
        if depth > 0 and "\n" not in text:
            nodes, _ = InlineParser(self, wrapped, depth).parse(text)
            return nodes
        return self._segment(text, wrapped, depth)

    def _segment(
        self, text: str, wrapped: list[WrappedMatch], depth: int
    ) -> list[LvzjNode]:
        inline = InlineParser(self, wrapped, depth)
        blocks: list[LvzjNode] = []
        pending: Optional[_PendingList] = None

        def flush() -> None:
            nonlocal pending
            if pending is not None and pending.items:
                blocks.append(self._make_list(pending, inline))
            pending = None

        for line in text.split("\n"):
            # List open
            m = _LIST_OPEN_RE.search(line)
            if m:
                flush()
                pending = _PendingList(
                    ordered=m.group("ordered") is not None,
                    pros_cons=m.group("pros_cons") is not None,
                )
                continue

            # List item
            stripped = line.strip()
            if stripped.startswith(_LIST_ITEM_PREFIXES):
                if pending is None:
                    pending = _PendingList()
                pending.items.append((stripped[0], stripped[2:]))
                continue

            # List close
            if pending is not None and _LIST_CLOSE_RE.search(line):
                flush()
                continue

            # Any other line ends a list that already has items
            if pending is not None and pending.items:
                flush()

            if _HEADING_RE.search(line):
                blocks.append(self._make_heading(
                    _HEADING_RE.sub("", line), HeadingLevel.LARGE, inline,
                ))
                continue

            if _SMALL_HEADING_RE.search(line):
                blocks.append(self._make_heading(
                    _SMALL_HEADING_RE.sub("", line), HeadingLevel.SMALL, inline,
                ))
                continue

            if _DIVIDER_RE.search(line):
                blocks.append(LvzjNode(type=NodeType.DIVIDER))
                continue

            if _SMALL_DIVIDER_RE.search(line):
                blocks.append(LvzjNode(type=NodeType.DIVIDER, size=DividerSize.SMALL))
                continue

            align = Alignment.LEFT
            if _ALIGN_RIGHT_RE.search(line):
                align = Alignment.RIGHT
                line = _ALIGN_RIGHT_RE.sub("", line)
            elif _ALIGN_CENTER_RE.search(line):
                align = Alignment.CENTER
                line = _ALIGN_CENTER_RE.sub("", line)

            if align is not Alignment.LEFT or line.strip():
                children, _ = inline.parse(line, PLAIN)
                blocks.append(LvzjNode(
                    type=NodeType.PARAGRAPH, align=align, children=children,
                ))
            else:
                blocks.append(LvzjNode(type=NodeType.LINE_BREAK))

        flush()
        return blocks

    @staticmethod
    def _make_heading(text: str, level: HeadingLevel, inline: InlineParser) -> LvzjNode:
        children, _ = inline.parse(text, PLAIN)
        return LvzjNode(type=NodeType.HEADING, level=level, children=children)

    @staticmethod
    def _make_list(pending: _PendingList, inline: InlineParser) -> LvzjNode:
        items: list[LvzjNode] = []
        for marker, text in pending.items:
            children, _ = inline.parse(text, PLAIN)
            items.append(LvzjNode(
                type=NodeType.LIST_ITEM, marker=marker, children=children,
            ))
        return LvzjNode(
            type=NodeType.LIST,
            ordered=pending.ordered,
            pros_cons=pending.pros_cons,
            children=items,
        )


def parse(text: str, options: Optional[ParserOptions] = None) -> LvzjNode:
    """Parse *text* with a fresh :class:`LvzjParser`."""
    return LvzjParser(options).parse(text)
