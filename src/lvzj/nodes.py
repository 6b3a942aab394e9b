"""Node tree produced by the LvZJ parser.

Every parse yields a fresh tree of :class:`LvzjNode` objects. Nodes are
inert data: the interactive behaviour of spoilers and countdowns lives in
:mod:`lvzj.live`, never in the tree itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, Optional


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class NodeType(Enum):
    FRAGMENT = "fragment"
    TEXT = "text"
    STYLED = "styled"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    LIST = "list"
    LIST_ITEM = "list_item"
    DIVIDER = "divider"
    LINE_BREAK = "line_break"
    LINK = "link"
    SPOILER = "spoiler"
    PROGRESS_BAR = "progress_bar"
    COUNTDOWN = "countdown"
    BOX = "box"
    QUOTE = "quote"


class Style(Enum):
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    SUPERSCRIPT = "superscript"
    SUBSCRIPT = "subscript"
    MONOSPACE = "monospace"
    SMALL_CAPS = "small_caps"
    SCRIPT = "script"
    RAINBOW = "rainbow"


class Color(Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"
    CYAN = "cyan"
    PURPLE = "purple"
    PINK = "pink"
    BROWN = "brown"
    ORANGE = "orange"
    GRAY = "gray"
    WHITE = "white"
    BLACK = "black"
    # Theme colours for progress bars and boxes without a colour word
    PRIMARY = "primary"
    DEFAULT = "default"


class Alignment(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class HeadingLevel(Enum):
    LARGE = "large"
    SMALL = "small"


class DividerSize(Enum):
    NORMAL = "normal"
    SMALL = "small"


class Direction(Enum):
    TO_TARGET = "to_target"
    SINCE_TARGET = "since_target"


class CountdownStyle(Enum):
    COMPACT = "compact"
    VERBOSE = "verbose"


class Float(Enum):
    LEFT = "left"
    RIGHT = "right"


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------

@dataclass
class LvzjNode:
    type: NodeType
    children: list[LvzjNode] = field(default_factory=list)
    text: str = ""
    # Styled run
    styles: frozenset[Style] = frozenset()
    # Styled foreground / progress bar / box colour
    color: Optional[Color] = None
    highlight: Optional[Color] = None
    # Paragraph
    align: Alignment = Alignment.LEFT
    # Heading
    level: HeadingLevel = HeadingLevel.LARGE
    # List
    ordered: bool = False
    pros_cons: bool = False
    # List item ("+" or "-")
    marker: str = ""
    # Divider
    size: DividerSize = DividerSize.NORMAL
    # Link target / quote source
    url: str = ""
    # Progress bar
    value: int = 0
    max_value: int = 100
    # Countdown
    target: Optional[datetime] = None
    direction: Direction = Direction.TO_TARGET
    countdown_style: CountdownStyle = CountdownStyle.COMPACT
    # Box
    title: Optional[str] = None
    float_side: Optional[Float] = None
    # Quote
    author: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible dict holding only non-default fields."""
        out: dict[str, Any] = {"type": self.type.value}
        for f in fields(self):
            if f.name in ("type", "children"):
                continue
            value = getattr(self, f.name)
            if value == f.default:
                continue
            out[f.name] = _jsonable(value)
        if self.children:
            out["children"] = [child.to_dict() for child in self.children]
        return out


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, frozenset):
        return sorted(_jsonable(v) for v in value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def text_node(text: str) -> LvzjNode:
    return LvzjNode(type=NodeType.TEXT, text=text)


def extract_text(node: LvzjNode) -> str:
    """Recursively extract the literal text of a subtree."""
    parts: list[str] = []
    if node.text:
        parts.append(node.text)
    for child in node.children:
        parts.append(extract_text(child))
    return "".join(parts)


def walk(node: LvzjNode):
    """Yield *node* and all its descendants in document order."""
    yield node
    for child in node.children:
        yield from walk(child)
