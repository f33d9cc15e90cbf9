"""List rendering helpers for catalog entries and preference lists."""

from __future__ import annotations

from pokedex_browser.formatting import (
    escape_rich_text,
    format_display_name,
    format_entry_number,
)
from pokedex_browser.models import EntryDetail
from pokedex_browser.themes import THEME_COLORS, format_types

_ICON_SETS: dict[str, dict[str, str]] = {
    "unicode": {
        "favorite": "❤",
        "not_favorite": "♡",
    },
    "ascii": {
        "favorite": "<3",
        "not_favorite": "--",
    },
}
_ACTIVE_ICON_SET = _ICON_SETS["unicode"]


def set_ascii_icons(enabled: bool) -> None:
    """Switch favorite indicators between Unicode and ASCII modes."""
    global _ACTIVE_ICON_SET
    _ACTIVE_ICON_SET = _ICON_SETS["ascii"] if enabled else _ICON_SETS["unicode"]


def favorite_icon(is_favorite: bool) -> str:
    """Return the colored favorite marker for the active icon set."""
    if is_favorite:
        return f"[{THEME_COLORS['pink']}]{_ACTIVE_ICON_SET['favorite']}[/]"
    return f"[{THEME_COLORS['muted']}]{_ACTIVE_ICON_SET['not_favorite']}[/]"


def render_entry_option(entry: EntryDetail, is_favorite: bool = False) -> str:
    """Render one grid card as two lines of Rich markup."""
    name = escape_rich_text(format_display_name(entry.name))
    number = format_entry_number(entry.entry_id)
    title = (
        f"{favorite_icon(is_favorite)} [bold {THEME_COLORS['text']}]{name}[/] "
        f"[dim]{number}[/]"
    )
    types = format_types(entry.types) if entry.types else "[dim italic]unknown type[/]"
    return f"{title}\n   {types}"


def render_name_option(name: str, is_favorite: bool = False) -> str:
    """Render a favorites / recent-searches row."""
    safe = escape_rich_text(format_display_name(name))
    if is_favorite:
        return f"{favorite_icon(True)} {safe}"
    return safe


__all__ = [
    "favorite_icon",
    "render_entry_option",
    "render_name_option",
    "set_ascii_icons",
]
