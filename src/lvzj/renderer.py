"""HTML and plain-text renderers for LvZJ node trees.

This module converts a tree produced by :mod:`lvzj.parser` into an HTML
fragment styled by the classes of :mod:`lvzj.style_manager`, or into a plain
text preview suitable for notifications and message lists.

All text and attribute values pass through mistune's HTML escaping, so user
content can never inject markup. Link targets are limited to ``http`` and
``https`` URLs.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from mistune.util import escape, escape_url

from lvzj.countdown import format_countdown
from lvzj.nodes import (
    Alignment,
    Color,
    DividerSize,
    HeadingLevel,
    LvzjNode,
    NodeType,
)
from lvzj.style_manager import StyleManager

_BLOCK_TYPES = frozenset({
    NodeType.PARAGRAPH,
    NodeType.HEADING,
    NodeType.LIST,
    NodeType.DIVIDER,
    NodeType.BOX,
    NodeType.QUOTE,
})

_SAFE_SCHEMES = ("http://", "https://")

_STATIC_DIR = Path(__file__).parent / "static"
_CLIENT_SCRIPT = (_STATIC_DIR / "lvzj.js").read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _has_blocks(node: LvzjNode) -> bool:
    # a multi-line spoiler holds paragraphs, so its parent cannot be a <p>
    return any(
        child.type in _BLOCK_TYPES
        or (child.type is NodeType.SPOILER and _has_blocks(child))
        for child in node.children
    )


def _safe_href(url: str) -> str:
    if not url.lower().startswith(_SAFE_SCHEMES):
        return "#"
    return escape(escape_url(url))


def progress_percentage(node: LvzjNode) -> float:
    """Return the bar fill in percent, clamped to ``[0, 100]``."""
    if node.max_value <= 0:
        return 0.0
    return min(100.0, max(0.0, node.value / node.max_value * 100))


def _class_attr(*classes: str) -> str:
    return ' class="' + escape(" ".join(c for c in classes if c)) + '"'


# ---------------------------------------------------------------------------
# HtmlRenderer
# ---------------------------------------------------------------------------

class HtmlRenderer:
    """Render an :class:`~lvzj.nodes.LvzjNode` tree to HTML or plain text."""

    def __init__(
        self,
        style_manager: Optional[StyleManager] = None,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.style: StyleManager = style_manager or StyleManager()
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self._now: datetime = self.clock()

    # ======================================================================
    # Public API
    # ======================================================================

    def render(self, doc: LvzjNode, *, now: Optional[datetime] = None) -> str:
        """Return an HTML fragment for *doc*, evaluating countdowns at *now*."""
        assert doc.type == NodeType.FRAGMENT, (
            f"Expected FRAGMENT node, got {doc.type}"
        )
        self._now = now or self.clock()
        body = "".join(self._render_node(child) for child in doc.children)
        return f'<div class="lvzj-content">\n{body}</div>\n'

    def render_document(
        self,
        doc: LvzjNode,
        *,
        title: str = "LvZJ",
        now: Optional[datetime] = None,
    ) -> str:
        """Return a standalone HTML page with the preset stylesheet and the
        client script that ticks countdowns and toggles spoilers."""
        fragment = self.render(doc, now=now)
        return (
            "<!DOCTYPE html>\n"
            '<html lang="cs">\n<head>\n<meta charset="utf-8">\n'
            f"<title>{escape(title)}</title>\n"
            f"<style>\n{self.style.stylesheet()}</style>\n"
            "</head>\n<body>\n"
            f"{fragment}"
            f"<script>\n{_CLIENT_SCRIPT}</script>\n"
            "</body>\n</html>\n"
        )

    def render_text(self, doc: LvzjNode, *, now: Optional[datetime] = None) -> str:
        """Return a plain-text preview of *doc*."""
        self._now = now or self.clock()
        return self._plain(doc).strip("\n")

    # ======================================================================
    # Node dispatch
    # ======================================================================

    def _render_node(self, node: LvzjNode) -> str:
        handler = getattr(self, f"_render_{node.type.value}", None)
        if handler is not None:
            return handler(node)
        return self._render_children(node)

    def _render_children(self, node: LvzjNode) -> str:
        return "".join(self._render_node(child) for child in node.children)

    # ======================================================================
    # Per-NodeType renderers
    # ======================================================================

    def _render_fragment(self, node: LvzjNode) -> str:
        return self._render_children(node)

    def _render_text(self, node: LvzjNode) -> str:
        return escape(node.text).replace("\n", "<br>\n")

    def _render_styled(self, node: LvzjNode) -> str:
        classes = [f"lvzj-{style.value}" for style in sorted(node.styles, key=lambda s: s.value)]
        if node.color is not None:
            classes.append(f"lvzj-fg-{node.color.value}")
        if node.highlight is not None:
            classes.append(f"lvzj-bg-{node.highlight.value}")
        return f"<span{_class_attr(*classes)}>{self._render_children(node)}</span>"

    def _render_paragraph(self, node: LvzjNode) -> str:
        tag = "div" if _has_blocks(node) else "p"
        align = "" if node.align is Alignment.LEFT else f"lvzj-align-{node.align.value}"
        attr = _class_attr(align) if align else ""
        return f"<{tag}{attr}>{self._render_children(node)}</{tag}>\n"

    def _render_heading(self, node: LvzjNode) -> str:
        tag = "h2" if node.level is HeadingLevel.LARGE else "h3"
        return (
            f"<{tag}{_class_attr(f'lvzj-heading-{node.level.value}')}>"
            f"{self._render_children(node)}</{tag}>\n"
        )

    def _render_list(self, node: LvzjNode) -> str:
        tag = "ol" if node.ordered else "ul"
        classes = ["lvzj-list"]
        if node.pros_cons:
            classes.append("lvzj-pros-cons")
        items: list[str] = []
        for item in node.children:
            cls = ""
            if node.pros_cons:
                cls = _class_attr("lvzj-pro" if item.marker == "+" else "lvzj-con")
            items.append(f"<li{cls}>{self._render_children(item)}</li>\n")
        return f"<{tag}{_class_attr(*classes)}>\n{''.join(items)}</{tag}>\n"

    def _render_divider(self, node: LvzjNode) -> str:
        cls = "lvzj-divider-small" if node.size is DividerSize.SMALL else "lvzj-divider"
        return f"<hr{_class_attr(cls)}>\n"

    def _render_line_break(self, _node: LvzjNode) -> str:
        return "<br>\n"

    def _render_link(self, node: LvzjNode) -> str:
        return (
            f'<a class="lvzj-link" href="{_safe_href(node.url)}"'
            f' target="_blank" rel="noopener noreferrer">'
            f"{self._render_children(node)}</a>"
        )

    def _render_spoiler(self, node: LvzjNode) -> str:
        tag = "div" if _has_blocks(node) else "span"
        return (
            f'<{tag} class="lvzj-spoiler" data-revealed="false"'
            f' role="button" tabindex="0">{self._render_children(node)}</{tag}>'
        )

    def _render_progress_bar(self, node: LvzjNode) -> str:
        pct = progress_percentage(node)
        color = (node.color or Color.PRIMARY).value
        return (
            f'<span class="lvzj-progress lvzj-progress-{color}" role="progressbar"'
            f' aria-valuenow="{node.value}" aria-valuemin="0" aria-valuemax="{node.max_value}">'
            f'<span class="lvzj-progress-track">'
            f'<span class="lvzj-progress-fill" style="width: {pct:g}%"></span></span>'
            f'<span class="lvzj-progress-label">{round(pct)}%</span></span>'
        )

    def _render_countdown(self, node: LvzjNode) -> str:
        target = node.target.isoformat() if node.target else ""
        return (
            f'<span class="lvzj-countdown" data-target="{escape(target)}"'
            f' data-direction="{node.direction.value}"'
            f' data-style="{node.countdown_style.value}">'
            f"{escape(format_countdown(node, self._now))}</span>"
        )

    def _render_box(self, node: LvzjNode) -> str:
        color = node.color or Color.DEFAULT
        classes = ["lvzj-box", f"lvzj-box-{color.value}"]
        if node.float_side is not None:
            classes.append(f"lvzj-float-{node.float_side.value}")
        title = ""
        if node.title:
            title = f'<div class="lvzj-box-title">{escape(node.title)}</div>\n'
        return f"<div{_class_attr(*classes)}>\n{title}{self._render_children(node)}</div>\n"

    def _render_quote(self, node: LvzjNode) -> str:
        footer = ""
        if node.author or node.url:
            parts: list[str] = []
            if node.author:
                parts.append(f"<span>— {escape(node.author)}</span>")
            if node.url:
                parts.append(
                    f'<a class="lvzj-link" href="{_safe_href(node.url)}"'
                    f' target="_blank" rel="noopener noreferrer">zdroj</a>'
                )
            footer = f"<footer>{' '.join(parts)}</footer>\n"
        return (
            f'<blockquote class="lvzj-quote">\n{self._render_children(node)}'
            f"{footer}</blockquote>\n"
        )

    # ======================================================================
    # Plain-text preview
    # ======================================================================

    def _plain(self, node: LvzjNode) -> str:
        handler = getattr(self, f"_plain_{node.type.value}", None)
        if handler is not None:
            return handler(node)
        return self._plain_children(node)

    def _plain_children(self, node: LvzjNode) -> str:
        sep = "\n" if node.type is NodeType.FRAGMENT or _has_blocks(node) else ""
        return sep.join(self._plain(child) for child in node.children)

    def _plain_text(self, node: LvzjNode) -> str:
        return node.text

    def _plain_line_break(self, _node: LvzjNode) -> str:
        return ""

    def _plain_divider(self, node: LvzjNode) -> str:
        return "─" * (10 if node.size is DividerSize.SMALL else 20)

    def _plain_list(self, node: LvzjNode) -> str:
        lines: list[str] = []
        for idx, item in enumerate(node.children, start=1):
            if node.ordered:
                prefix = f"{idx}."
            elif node.pros_cons:
                prefix = item.marker
            else:
                prefix = "•"
            lines.append(f"{prefix} {self._plain_children(item)}")
        return "\n".join(lines)

    def _plain_link(self, node: LvzjNode) -> str:
        label = self._plain_children(node)
        return label if label == node.url else f"{label} ({node.url})"

    def _plain_spoiler(self, _node: LvzjNode) -> str:
        return "[spoiler]"

    def _plain_progress_bar(self, node: LvzjNode) -> str:
        pct = progress_percentage(node)
        filled = round(pct / 10)
        return f"[{'█' * filled}{'░' * (10 - filled)}] {round(pct)}%"

    def _plain_countdown(self, node: LvzjNode) -> str:
        return format_countdown(node, self._now)

    def _plain_box(self, node: LvzjNode) -> str:
        body = self._plain_children(node)
        return f"[{node.title}]\n{body}" if node.title else body

    def _plain_quote(self, node: LvzjNode) -> str:
        text = f"„{self._plain_children(node).strip()}“"
        if node.author:
            text += f" — {node.author}"
        if node.url:
            text += f" ({node.url})"
        return text
