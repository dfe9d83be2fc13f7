"""Match highlight colours taken from a Pygments style.

Each Pygments style carries a ``highlight_color`` meant for marked lines; the
pager reuses it as the background of search matches so the chosen ``--style``
drives the palette.
"""

from __future__ import annotations

import re
from dataclasses import replace
from functools import lru_cache

from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .ui_theme import PLAIN_THEME, UITheme

DEFAULT_STYLE = "monokai"
_HEX_COLOR_RE = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")


def normalize_style(style: str | None) -> str:
    """Return ``style`` if Pygments knows it, else the default style."""
    if not style:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def hex_to_rgb(value: str) -> tuple[int, int, int] | None:
    match = _HEX_COLOR_RE.match(value.strip()) if value else None
    if match is None:
        return None
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


@lru_cache(maxsize=32)
def style_highlight_sgr(style: str) -> str | None:
    """Return a truecolor background SGR for the style's highlight colour."""
    style_cls = get_style_by_name(normalize_style(style))
    rgb = hex_to_rgb(getattr(style_cls, "highlight_color", "") or "")
    if rgb is None:
        return None
    r, g, b = rgb
    return f"\033[1;48;2;{r};{g};{b}m"


def apply_style(theme: UITheme, style: str | None) -> UITheme:
    """Return ``theme`` with its match colour taken from a Pygments style.

    The plain theme is returned unchanged so ``--no-color`` stays colourless.
    """
    if theme is PLAIN_THEME:
        return theme
    sgr = style_highlight_sgr(normalize_style(style))
    if sgr is None:
        return theme
    return replace(theme, match=sgr)
