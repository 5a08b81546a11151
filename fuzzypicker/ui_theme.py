"""Color themes for the picker frame and theme-name resolution.

Themes are ANSI palettes applied when a render plan is painted; the plan itself
only names line kinds and highlight spans.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the painter."""

    name: str
    reset: str
    prompt: str
    info: str
    message: str
    item: str
    selected: str
    match: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    prompt="\033[1;32m",
    info="\033[2;38;5;250m",
    message="\033[2;38;5;250m",
    item="\033[38;5;252m",
    selected="\033[97;48;5;240m",
    match="\033[1;38;5;81m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    prompt="\033[1;38;5;45m",
    info="\033[2;38;5;110m",
    message="\033[2;38;5;110m",
    item="\033[38;5;153m",
    selected="\033[97;48;5;24m",
    match="\033[1;38;5;215m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    prompt="",
    info="",
    message="",
    item="",
    selected="",
    match="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Names accepted by ``--theme`` and the ``theme`` config key."""
    return tuple(sorted(_THEMES))


def normalize_theme_name(name: str | None) -> str:
    """Map a user-supplied theme name onto a known one.

    Matching ignores case and surrounding whitespace; anything unknown, empty,
    or ``None`` resolves to the default theme.
    """
    key = (name or "").strip().casefold()
    return key if key in _THEMES else DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    if no_color:
        # Colorless output still draws the selection gutter and query.
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "UITheme",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
