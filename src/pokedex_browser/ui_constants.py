"""Internal UI constants for the PokedexBrowser app."""

from __future__ import annotations

from textual.binding import Binding, BindingType

# Seconds before a status message clears itself
STATUS_CLEAR_SECONDS = 3.0
# Delay between the last keystroke and applying the name filter
SEARCH_DEBOUNCE_SECONDS = 0.25

APP_CSS = """
Screen {
    background: $th-background;
}

Header {
    background: $th-panel-alt;
    color: $th-text;
}

#main-container {
    height: 1fr;
}

#left-pane {
    width: 3fr;
    min-width: 40;
    height: 100%;
    border: tall $th-highlight;
    background: $th-panel;
}

#left-pane:focus-within {
    border: tall $th-accent;
}

#right-pane {
    width: 2fr;
    height: 100%;
    border: tall $th-highlight;
    background: $th-panel;
}

#right-pane:focus-within {
    border: tall $th-accent;
}

#list-header,
#favorites-header,
#recent-header {
    padding: 0 1;
    background: $th-panel;
    color: $th-accent;
    text-style: bold;
}

#details-header {
    padding: 0 1;
    background: $th-panel;
    color: $th-accent-alt;
    text-style: bold;
}

#search-input {
    width: 100%;
    border: tall $th-accent;
    background: $th-background;
}

#search-input:focus {
    border: tall $th-accent-alt;
}

#entry-list {
    height: 1fr;
    scrollbar-gutter: stable;
}

#entry-list > .option-list--option-highlighted {
    background: $th-highlight;
}

#entry-list:focus > .option-list--option-highlighted {
    background: $th-highlight-focus;
}

#details-scroll {
    height: 2fr;
    padding: 0 1;
}

#favorites-list,
#recent-list {
    height: 1fr;
    min-height: 3;
}

VerticalScroll {
    scrollbar-background: $th-scrollbar-bg;
    scrollbar-color: $th-scrollbar-thumb;
    scrollbar-color-hover: $th-scrollbar-hover;
    scrollbar-color-active: $th-scrollbar-active;
}

#status-bar {
    padding: 0 1;
    color: $th-muted;
}

#status-bar.error {
    color: $th-pink;
}
"""

APP_BINDINGS: list[BindingType] = [
    Binding("q", "quit", "Quit", show=False),
    Binding("slash", "focus_search", "Search", show=False),
    Binding("escape", "cancel", "Cancel", show=False),
    Binding("f", "toggle_favorite", "Favorite", show=False),
    Binding("d", "show_highlighted_detail", "Details", show=False),
    Binding("left_square_bracket", "previous_page", "Previous Page", show=False),
    Binding("right_square_bracket", "next_page", "Next Page", show=False),
    Binding("left_curly_bracket", "first_page", "First Page", show=False),
    Binding("right_curly_bracket", "last_page", "Last Page", show=False),
    Binding("ctrl+t", "cycle_theme", "Theme", show=False),
]

__all__ = [
    "APP_BINDINGS",
    "APP_CSS",
    "SEARCH_DEBOUNCE_SECONDS",
    "STATUS_CLEAR_SECONDS",
]
