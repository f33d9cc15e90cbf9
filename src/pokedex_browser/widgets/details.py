"""Detail pane widget for rendering a single catalog entry."""

from __future__ import annotations

from textual.widgets import Static

from pokedex_browser.formatting import (
    escape_rich_text,
    format_display_name,
    format_entry_number,
)
from pokedex_browser.models import EntryDetail
from pokedex_browser.parsing import format_height_m, format_weight_kg
from pokedex_browser.themes import THEME_COLORS, format_types
from pokedex_browser.widgets.listing import favorite_icon

EMPTY_DETAIL_MARKUP = (
    "[dim italic]Select a Pokémon to view details[/]\n"
    "[dim]Try: type a name in the search box and press [bold]Enter[/bold].[/]"
)


def render_entry_details(entry: EntryDetail, is_favorite: bool = False) -> str:
    """Build the full detail markup for one entry."""
    accent = THEME_COLORS["accent"]
    name = escape_rich_text(format_display_name(entry.name))
    abilities = ", ".join(escape_rich_text(a) for a in entry.abilities) or "[dim]none[/]"
    types = format_types(entry.types) if entry.types else "[dim]unknown[/]"
    lines = [
        f"{favorite_icon(is_favorite)} [bold {THEME_COLORS['text']}]{name}[/] "
        f"[{THEME_COLORS['purple']}]({format_entry_number(entry.entry_id)})[/]",
        "",
        f"  [bold {accent}]Types:[/] {types}",
        f"  [bold {accent}]Height:[/] {format_height_m(entry.height)}",
        f"  [bold {accent}]Weight:[/] {format_weight_kg(entry.weight)}",
        f"  [bold {accent}]Abilities:[/] {abilities}",
    ]
    if entry.image_url:
        lines.append(f"  [bold {accent}]Artwork:[/] [dim]{escape_rich_text(entry.image_url)}[/]")
    return "\n".join(lines)


class EntryDetails(Static):
    """Widget to display full entry details."""

    def __init__(self) -> None:
        super().__init__(EMPTY_DETAIL_MARKUP)
        self._entry: EntryDetail | None = None

    @property
    def entry(self) -> EntryDetail | None:
        return self._entry

    def update_entry(self, entry: EntryDetail | None, is_favorite: bool = False) -> None:
        """Update the displayed entry (``None`` shows the placeholder)."""
        self._entry = entry
        if entry is None:
            self.update(EMPTY_DETAIL_MARKUP)
            return
        self.update(render_entry_details(entry, is_favorite))


__all__ = [
    "EMPTY_DETAIL_MARKUP",
    "EntryDetails",
    "render_entry_details",
]
