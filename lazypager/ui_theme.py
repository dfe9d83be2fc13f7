"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the pager chrome and match highlighting. The
Pygments style chosen on the command line can override the match background
(see ``lazypager.highlight``).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    match: str
    current_match: str
    prompt: str
    prompt_query: str
    message: str
    status: str
    filler: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    match="\033[1;38;5;203m",
    current_match="\033[7;1;38;5;203m",
    prompt="\033[1;38;5;81m",
    prompt_query="\033[38;5;229m",
    message="\033[38;5;214m",
    status="\033[2;38;5;250m",
    filler="\033[2;38;5;240m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    match="\033[1;38;5;45m",
    current_match="\033[7;1;38;5;45m",
    prompt="\033[1;38;5;39m",
    prompt_query="\033[38;5;153m",
    message="\033[38;5;215m",
    status="\033[2;38;5;110m",
    filler="\033[2;38;5;24m",
)

# Reverse video is an attribute rather than a colour, so matches stay visible.
PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    match="\033[7m",
    current_match="\033[1;7m",
    prompt="",
    prompt_query="",
    message="",
    status="",
    filler="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
