"""Widget classes extracted from app.py for modular UI composition."""

from pokedex_browser.widgets.chrome import (
    PAGE_WINDOW_SIZE,
    ContextFooter,
    PaginationBar,
    visible_page_buttons,
)
from pokedex_browser.widgets.details import EntryDetails, render_entry_details
from pokedex_browser.widgets.listing import (
    render_entry_option,
    render_name_option,
    set_ascii_icons,
)

__all__ = [
    "PAGE_WINDOW_SIZE",
    "ContextFooter",
    "EntryDetails",
    "PaginationBar",
    "render_entry_details",
    "render_entry_option",
    "render_name_option",
    "set_ascii_icons",
    "visible_page_buttons",
]
