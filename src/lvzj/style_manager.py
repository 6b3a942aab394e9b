"""Theme presets for rendered LvZJ output.

Manages style presets (default, dark, print, minimal) that map the closed
colour and style enumerations of the language to concrete colours, fonts
and the stylesheet used by the HTML renderer.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field

from lvzj.nodes import Color, Style


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

_BASE_COLORS: dict[Color, str] = {
    Color.RED: "#ef4444",
    Color.GREEN: "#22c55e",
    Color.BLUE: "#3b82f6",
    Color.YELLOW: "#eab308",
    Color.CYAN: "#06b6d4",
    Color.PURPLE: "#a855f7",
    Color.PINK: "#ec4899",
    Color.BROWN: "#b45309",
    Color.ORANGE: "#f97316",
    Color.GRAY: "#6b7280",
    Color.WHITE: "#ffffff",
    Color.BLACK: "#000000",
}


@dataclass
class FontSpec:
    """Font specification for rendered content."""

    family: str = "system-ui, -apple-system, 'Segoe UI', Roboto, sans-serif"
    mono_family: str = "ui-monospace, 'Cascadia Code', Consolas, monospace"
    serif_family: str = "Georgia, 'Times New Roman', serif"
    size_px: float = 16.0
    line_height: float = 1.6

    def derive(self, **overrides) -> FontSpec:
        """Return a copy with selected fields overridden."""
        clone = deepcopy(self)
        for k, v in overrides.items():
            if hasattr(clone, k):
                setattr(clone, k, v)
        return clone


@dataclass
class Palette:
    """Colours of one preset."""

    foreground: str = "#1f2937"
    background: str = "#ffffff"
    muted: str = "#f3f4f6"
    muted_foreground: str = "#6b7280"
    border: str = "#e5e7eb"
    primary: str = "#7c3aed"
    highlight_alpha: float = 0.3
    box_alpha: float = 0.1
    rounded: bool = True
    colors: dict[Color, str] = field(default_factory=lambda: dict(_BASE_COLORS))

    def derive(self, **overrides) -> Palette:
        clone = deepcopy(self)
        for k, v in overrides.items():
            if hasattr(clone, k):
                setattr(clone, k, v)
        return clone


@dataclass
class ThemeDef:
    """Complete theme combining font and palette."""

    name: str
    font: FontSpec
    palette: Palette


# ---------------------------------------------------------------------------
# Preset definitions
# ---------------------------------------------------------------------------

def _build_default_theme() -> ThemeDef:
    """Build the **default** preset: light background, accent colours."""
    return ThemeDef(name="default", font=FontSpec(), palette=Palette())


def _build_dark_theme() -> ThemeDef:
    """Build the **dark** preset. Black text is shown white."""
    palette = Palette(
        foreground="#e5e7eb",
        background="#111827",
        muted="#1f2937",
        muted_foreground="#9ca3af",
        border="#374151",
        primary="#a78bfa",
        highlight_alpha=0.35,
        box_alpha=0.15,
    )
    palette.colors[Color.BLACK] = "#ffffff"
    return ThemeDef(name="dark", font=FontSpec(), palette=palette)


def _build_print_theme() -> ThemeDef:
    """Build the **print** preset: serif body, no page background."""
    base = _build_default_theme()
    return ThemeDef(
        name="print",
        font=base.font.derive(
            family="Georgia, 'Times New Roman', serif",
            size_px=12.0,
            line_height=1.5,
        ),
        palette=base.palette.derive(
            foreground="#000000",
            background="transparent",
            primary="#1f2937",
            rounded=False,
        ),
    )


def _build_minimal_theme() -> ThemeDef:
    """Build the **minimal** preset: no tinted boxes, square corners."""
    base = _build_default_theme()
    return ThemeDef(
        name="minimal",
        font=base.font.derive(line_height=1.5),
        palette=base.palette.derive(
            box_alpha=0.0,
            rounded=False,
            primary="#374151",
        ),
    )


_PRESET_BUILDERS = {
    "default": _build_default_theme,
    "dark": _build_dark_theme,
    "print": _build_print_theme,
    "minimal": _build_minimal_theme,
}


def _hex_to_rgba(color: str, alpha: float) -> str:
    """Convert ``#RRGGBB`` to an ``rgba()`` value."""
    if not (color.startswith("#") and len(color) == 7):
        return color
    r, g, b = (int(color[i:i + 2], 16) for i in (1, 3, 5))
    return f"rgba({r}, {g}, {b}, {alpha:g})"


_STYLE_RULES: dict[Style, str] = {
    Style.BOLD: "font-weight: 700;",
    Style.ITALIC: "font-style: italic;",
    Style.STRIKETHROUGH: "text-decoration: line-through;",
    Style.SUPERSCRIPT: "font-size: 0.7em; vertical-align: super;",
    Style.SUBSCRIPT: "font-size: 0.7em; vertical-align: sub;",
    Style.MONOSPACE: "font-family: {mono};",
    Style.SMALL_CAPS: "text-transform: uppercase; letter-spacing: 0.05em; font-size: 0.9em;",
    Style.SCRIPT: "font-family: {serif}; font-style: italic;",
    Style.RAINBOW: (
        "background-image: linear-gradient(to right, {red}, {yellow}, {green}, {blue}, {purple});"
        " -webkit-background-clip: text; background-clip: text; color: transparent;"
    ),
}


# ---------------------------------------------------------------------------
# StyleManager
# ---------------------------------------------------------------------------

class StyleManager:
    """Manages theme presets and provides colours and the stylesheet.

    Usage::

        sm = StyleManager("dark")
        red = sm.get_color(Color.RED)
        css = sm.stylesheet()
    """

    PRESETS = list(_PRESET_BUILDERS.keys())

    def __init__(self, preset: str = "default") -> None:
        if preset not in _PRESET_BUILDERS:
            raise ValueError(
                f"Unknown preset {preset!r}. Choose from: {', '.join(_PRESET_BUILDERS)}"
            )
        self.preset = preset
        self._theme: ThemeDef = _PRESET_BUILDERS[preset]()

    # -- public API ---------------------------------------------------------

    @property
    def font(self) -> FontSpec:
        return self._theme.font

    @property
    def palette(self) -> Palette:
        return self._theme.palette

    def get_color(self, color: Color) -> str:
        """Return the CSS colour for *color*.

        ``PRIMARY`` and ``DEFAULT`` resolve to the theme's primary and
        border colours.
        """
        if color is Color.PRIMARY:
            return self.palette.primary
        if color is Color.DEFAULT:
            return self.palette.border
        return self.palette.colors[color]

    def get_highlight(self, color: Color) -> str:
        return _hex_to_rgba(self.get_color(color), self.palette.highlight_alpha)

    def stylesheet(self) -> str:
        """Return the CSS for every class the HTML renderer emits."""
        p = self.palette
        f = self.font
        radius = "0.375rem" if p.rounded else "0"
        fmt = {
            "mono": f.mono_family,
            "serif": f.serif_family,
            **{c.value: v for c, v in p.colors.items()},
        }
        rules: list[str] = [
            f".lvzj-content {{ font-family: {f.family}; font-size: {f.size_px:g}px;"
            f" line-height: {f.line_height:g}; color: {p.foreground}; background: {p.background}; }}",
            ".lvzj-content p { margin: 0.25em 0; }",
            ".lvzj-align-center { text-align: center; }",
            ".lvzj-align-right { text-align: right; }",
            ".lvzj-heading-large { font-size: 1.5em; font-weight: 700; margin: 1em 0 0.5em; }",
            ".lvzj-heading-small { font-size: 1.25em; font-weight: 600; margin: 0.75em 0 0.4em; }",
            f".lvzj-link {{ color: {p.primary}; text-decoration: none; }}",
            ".lvzj-link:hover { text-decoration: underline; }",
            ".lvzj-list { margin: 0.5em 0; padding-left: 1.5em; }",
            ".lvzj-pros-cons { list-style: none; padding-left: 0; }",
            f".lvzj-pro {{ color: {p.colors[Color.GREEN]}; }}",
            f".lvzj-con {{ color: {p.colors[Color.RED]}; }}",
            f".lvzj-divider {{ border: 0; border-top: 1px solid {p.border}; margin: 1em 0; }}",
            f".lvzj-divider-small {{ border: 0; border-top: 1px solid {p.border};"
            " width: 50%; margin: 0.5em auto; }",
            f".lvzj-spoiler {{ cursor: pointer; padding: 0 0.25em; border-radius: {radius}; }}",
            f".lvzj-spoiler[data-revealed=\"false\"] {{ background: {p.foreground};"
            f" color: {p.foreground}; }}",
            f".lvzj-spoiler[data-revealed=\"true\"] {{ background: {p.muted}; }}",
            f".lvzj-countdown {{ font-family: {f.mono_family}; background: {p.muted};"
            f" padding: 0.1em 0.5em; border-radius: {radius}; }}",
            ".lvzj-progress { display: inline-flex; align-items: center; gap: 0.5em; min-width: 100px; }",
            f".lvzj-progress-track {{ display: inline-block; flex: 1; height: 0.75em;"
            f" background: {p.muted}; border-radius: 999px; overflow: hidden; }}",
            ".lvzj-progress-fill { display: block; height: 100%; }",
            f".lvzj-progress-label {{ font-size: 0.75em; color: {p.muted_foreground}; }}",
            f".lvzj-box {{ border: 1px solid {p.border}; border-radius: {radius};"
            " padding: 1em; margin: 0.5em 0; }",
            ".lvzj-box-title { font-weight: 600; margin-bottom: 0.5em; }",
            ".lvzj-float-left { float: left; margin-right: 1em; max-width: 20rem; }",
            ".lvzj-float-right { float: right; margin-left: 1em; max-width: 20rem; }",
            f".lvzj-quote {{ border-left: 4px solid {p.primary}; padding: 0.5em 1em;"
            f" margin: 0.5em 0; font-style: italic; background: {p.muted}; }}",
            f".lvzj-quote footer {{ font-size: 0.875em; font-style: normal;"
            f" color: {p.muted_foreground}; margin-top: 0.5em; }}",
        ]
        for style, rule in _STYLE_RULES.items():
            rules.append(f".lvzj-{style.value} {{ {rule.format(**fmt)} }}")
        for color in Color:
            if color in (Color.PRIMARY, Color.DEFAULT):
                continue
            value = self.get_color(color)
            rules.append(f".lvzj-fg-{color.value} {{ color: {value}; }}")
            rules.append(f".lvzj-bg-{color.value} {{ background-color: {self.get_highlight(color)}; }}")
        for color in Color:
            value = self.get_color(color)
            rules.append(f".lvzj-progress-{color.value} .lvzj-progress-fill {{ background: {value}; }}")
            if color is not Color.DEFAULT:
                rules.append(
                    f".lvzj-box-{color.value} {{ border-color: {_hex_to_rgba(value, 0.5)};"
                    f" background: {_hex_to_rgba(value, p.box_alpha)}; }}"
                )
        return "\n".join(rules) + "\n"
