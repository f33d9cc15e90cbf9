#!/usr/bin/env python3
"""Pokédex Browser - A Textual TUI for paging, filtering and bookmarking Pokémon.

Usage:
    pokedex-browser                     # Browse the catalog from page 1
    pokedex-browser --search char       # Start filtered to names containing "char"
    pokedex-browser --lookup pikachu    # Open one entry's details on startup
    pokedex-browser --list-favorites    # Print favorites and exit

Key bindings:
    /        - Focus the search box (typing filters, Enter looks a name up)
    [ / ]    - Previous / next page
    { / }    - First / last page
    f        - Toggle favorite for the highlighted or displayed entry
    d        - Show details of the highlighted list entry
    Escape   - Close details, then clear the search
    Ctrl+t   - Cycle color theme
    q        - Quit
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any

import httpx
from textual import on
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.timer import Timer
from textual.widgets import Header, Input, Label, OptionList
from textual.widgets.option_list import Option

from pokedex_browser.action_messages import build_favorite_toggled_message
from pokedex_browser.cli import (
    _configure_color_mode,
    _configure_logging,
    _validate_interactive_tty,
)
from pokedex_browser.cli import main as _cli_main
from pokedex_browser.config import load_config
from pokedex_browser.controller import (
    EVENT_DETAIL,
    EVENT_FAVORITES,
    EVENT_PAGE,
    EVENT_RECENTS,
    EVENT_STATUS,
    CatalogController,
)
from pokedex_browser.filtering import normalize_term
from pokedex_browser.formatting import escape_rich_text, format_display_name
from pokedex_browser.models import PageLoadFailed, UserConfig
from pokedex_browser.preferences import PreferenceStore
from pokedex_browser.services.interfaces import AppServices
from pokedex_browser.themes import TEXTUAL_THEMES, THEME_NAMES, apply_theme
from pokedex_browser.ui_constants import (
    APP_BINDINGS,
    APP_CSS,
    SEARCH_DEBOUNCE_SECONDS,
    STATUS_CLEAR_SECONDS,
)
from pokedex_browser.widgets import (
    ContextFooter,
    EntryDetails,
    PaginationBar,
    render_entry_option,
    render_name_option,
    set_ascii_icons,
)

logger = logging.getLogger(__name__)

FOOTER_BINDINGS: list[tuple[str, str]] = [
    ("/", "search"),
    ("[ ]", "page"),
    ("{ }", "first/last"),
    ("f", "favorite"),
    ("d", "details"),
    ("esc", "close"),
    ("ctrl+t", "theme"),
    ("q", "quit"),
]


class PokedexBrowser(App):
    """A TUI application to browse the Pokémon catalog."""

    TITLE = "Pokédex Browser"

    CSS = APP_CSS

    BINDINGS = APP_BINDINGS

    def __init__(
        self,
        config: UserConfig | None = None,
        *,
        services: AppServices | None = None,
        store: PreferenceStore | None = None,
        ascii_icons: bool = False,
        initial_search: str = "",
        initial_page: int = 1,
        initial_lookup: str = "",
    ) -> None:
        super().__init__()
        # Register all Textual themes so $th-* CSS variables resolve before compose()
        for textual_theme in TEXTUAL_THEMES.values():
            self.register_theme(textual_theme)
        self._config = config or UserConfig()
        self._config.theme_name = apply_theme(self._config.theme_name)
        try:
            self.theme = self._config.theme_name
        except Exception as e:
            logger.debug("Skipping theme activation in current context: %s", e, exc_info=True)
        self._store = store or PreferenceStore(self._config)
        self._controller = CatalogController(
            services=services,
            store=self._store,
            base_url=self._config.api_base_url,
            timeout_seconds=self._config.request_timeout_seconds,
        )
        self._initial_search = initial_search
        self._initial_page = max(1, initial_page)
        self._initial_lookup = initial_lookup.strip()
        self._applied_term: str | None = normalize_term(initial_search)
        self._pending_query = initial_search

        self._search_timer: Timer | None = None
        self._status_timer: Timer | None = None
        self._background_tasks: set[asyncio.Task[None]] = set()
        self._http_client: httpx.AsyncClient | None = None
        self._unsubscribe: Any = None
        set_ascii_icons(ascii_icons)

    @property
    def controller(self) -> CatalogController:
        return self._controller

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-container"):
            with Vertical(id="left-pane"):
                yield Label(" Pokémon", id="list-header")
                yield Input(
                    value=self._initial_search,
                    placeholder="Filter by name, Enter to look one up",
                    id="search-input",
                )
                yield OptionList(id="entry-list")
                yield PaginationBar()
                yield Label("", id="status-bar")
            with Vertical(id="right-pane"):
                yield Label(" Details", id="details-header")
                with VerticalScroll(id="details-scroll"):
                    yield EntryDetails()
                yield Label(" Favorites", id="favorites-header")
                yield OptionList(id="favorites-list")
                yield Label(" Recent searches", id="recent-header")
                yield OptionList(id="recent-list")
        yield ContextFooter()

    def on_mount(self) -> None:
        """Open the shared HTTP client and start the first page load."""
        # Create shared HTTP client for connection pooling
        self._http_client = httpx.AsyncClient()
        self._controller.client = self._http_client
        self._unsubscribe = self._controller.subscribe(self._on_controller_change)

        # Warn if config was corrupt and defaults were used
        if self._config.config_defaulted:
            self.notify(
                "Config file was corrupt and has been backed up. Using defaults.",
                severity="warning",
                timeout=8,
            )

        self._refresh_favorites_list()
        self._refresh_recent_list()
        self.query_one(ContextFooter).render_bindings(FOOTER_BINDINGS)
        self._track_task(self._startup())
        logger.debug("App mounted: base_url=%s", self._controller.base_url)
        self.query_one("#entry-list", OptionList).focus()

    async def _startup(self) -> None:
        controller = self._controller
        await controller.load_total_count()
        if self._initial_search.strip():
            result = await controller.set_search_term(self._initial_search)
            if result is None or isinstance(result, PageLoadFailed):
                self._applied_term = None
        else:
            await controller.load_current_page()
        if self._initial_page > 1:
            await controller.go_to_page(self._initial_page)
        if self._initial_lookup:
            await controller.show_detail(self._initial_lookup)

    async def on_unmount(self) -> None:
        """Stop timers, cancel background work and close the HTTP client."""
        for attr in ("_search_timer", "_status_timer"):
            timer = getattr(self, attr)
            setattr(self, attr, None)
            if timer is not None:
                timer.stop()

        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

        pending = [task for task in self._background_tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            _, still_pending = await asyncio.wait(pending, timeout=0.5)
            for task in still_pending:
                logger.debug("Background task did not cancel before shutdown: %r", task)
        self._background_tasks.clear()

        client = self._http_client
        self._http_client = None
        self._controller.client = None
        if client is not None:
            try:
                await client.aclose()
            except Exception as e:
                logger.debug(
                    "Failed to close shared HTTP client during shutdown: %s", e, exc_info=True
                )

    def _track_task(self, coro: Any) -> asyncio.Task[None]:
        """Create an asyncio task and track it to prevent garbage collection."""
        task = asyncio.create_task(coro)
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        task.add_done_callback(self._on_task_done)
        return task

    @staticmethod
    def _on_task_done(task: asyncio.Task[None]) -> None:
        """Log unhandled exceptions from background tasks."""
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Unhandled exception in background task: %s", exc, exc_info=exc)

    # ── Controller change events ─────────────────────────────────────────

    def _on_controller_change(self, event: str) -> None:
        if event == EVENT_PAGE:
            self._refresh_entry_list()
            self._update_list_header()
            self._track_task(
                self.query_one(PaginationBar).update_pagination(self._controller.pagination())
            )
        elif event == EVENT_DETAIL:
            self._refresh_details()
        elif event == EVENT_FAVORITES:
            self._refresh_favorites_list()
            self._refresh_entry_list()
            self._refresh_details()
        elif event == EVENT_RECENTS:
            self._refresh_recent_list()
        elif event == EVENT_STATUS:
            self._show_status(self._controller.status_message)

    def _refresh_entry_list(self) -> None:
        controller = self._controller
        option_list = self.query_one("#entry-list", OptionList)
        highlighted = option_list.highlighted
        option_list.clear_options()
        result = controller.last_result
        if isinstance(result, PageLoadFailed):
            option_list.add_option(
                Option(f"[dim italic]{escape_rich_text(result.reason)}[/]", disabled=True)
            )
            return
        if not controller.current_entries:
            if controller.filter_state.active:
                term = escape_rich_text(controller.filter_state.normalized_term)
                message = f"No Pokémon match '{term}'"
            else:
                message = "No Pokémon loaded yet"
            option_list.add_option(Option(f"[dim italic]{message}[/]", disabled=True))
            return
        option_list.add_options(
            Option(render_entry_option(entry, controller.is_favorite(entry.name)), id=entry.name)
            for entry in controller.current_entries
        )
        if highlighted is not None:
            option_list.highlighted = min(highlighted, option_list.option_count - 1)
        else:
            option_list.highlighted = 0

    def _update_list_header(self) -> None:
        controller = self._controller
        page_info = f"page {controller.current_page}/{controller.total_pages}"
        if controller.filter_state.active:
            term = escape_rich_text(controller.filter_state.normalized_term)
            text = f" Matches for '{term}' ({controller.item_count}) · {page_info}"
        else:
            text = f" Pokémon ({controller.total_count}) · {page_info}"
        self.query_one("#list-header", Label).update(text)
        self.sub_title = f"{controller.total_count} Pokémon"

    def _refresh_details(self) -> None:
        detail = self._controller.current_detail
        is_favorite = detail is not None and self._controller.is_favorite(detail.name)
        self.query_one(EntryDetails).update_entry(detail, is_favorite)

    def _refresh_favorites_list(self) -> None:
        option_list = self.query_one("#favorites-list", OptionList)
        option_list.clear_options()
        names = self._controller.display_favorites()
        option_list.add_options(Option(render_name_option(name, True), id=name) for name in names)
        self.query_one("#favorites-header", Label).update(f" Favorites ({len(names)})")

    def _refresh_recent_list(self) -> None:
        option_list = self.query_one("#recent-list", OptionList)
        option_list.clear_options()
        names = self._controller.recent_searches
        option_list.add_options(
            Option(render_name_option(name, self._controller.is_favorite(name)), id=name)
            for name in names
        )
        self.query_one("#recent-header", Label).update(f" Recent searches ({len(names)})")

    def _show_status(self, message: str) -> None:
        """Show ``message`` in the status bar and schedule it to clear."""
        status_bar = self.query_one("#status-bar", Label)
        status_bar.update(escape_rich_text(message))
        status_bar.set_class(bool(message), "error")
        old_timer = self._status_timer
        self._status_timer = None
        if old_timer is not None:
            old_timer.stop()
        if message:
            self._status_timer = self.set_timer(STATUS_CLEAR_SECONDS, self._clear_status)

    def _clear_status(self) -> None:
        self._status_timer = None
        self._controller.clear_status()

    # ── Input handlers ───────────────────────────────────────────────────

    @on(Input.Changed, "#search-input")
    def on_search_changed(self, event: Input.Changed) -> None:
        """Handle search input change with debouncing."""
        self._pending_query = event.value
        old_timer = self._search_timer
        self._search_timer = None
        if old_timer is not None:
            old_timer.stop()
        self._search_timer = self.set_timer(SEARCH_DEBOUNCE_SECONDS, self._debounced_filter)

    def _debounced_filter(self) -> None:
        self._search_timer = None
        self._track_task(self._apply_search(self._pending_query))

    async def _apply_search(self, query: str) -> None:
        normalized = normalize_term(query)
        if normalized == self._applied_term:
            return
        self._applied_term = normalized
        result = await self._controller.set_search_term(query)
        applied = result is not None and not isinstance(result, PageLoadFailed)
        if not applied and self._applied_term == normalized:
            # Superseded or failed: let the same term apply again on the next keystroke
            self._applied_term = None

    @on(Input.Submitted, "#search-input")
    def on_search_submitted(self, event: Input.Submitted) -> None:
        """Enter in the search box looks the typed name up."""
        name = event.value.strip()
        if name:
            self._track_task(self._controller.show_detail(name))

    @on(OptionList.OptionSelected, "#entry-list")
    def on_entry_selected(self, event: OptionList.OptionSelected) -> None:
        self._select_page_entry(event.option.id)

    @on(OptionList.OptionSelected, "#favorites-list")
    @on(OptionList.OptionSelected, "#recent-list")
    def on_name_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option.id:
            self._track_task(self._controller.show_detail(event.option.id))

    @on(PaginationBar.GoToPage)
    def on_go_to_page(self, event: PaginationBar.GoToPage) -> None:
        self._track_task(self._controller.go_to_page(event.page_number))

    def _select_page_entry(self, name: str | None) -> None:
        if not name:
            return
        for entry in self._controller.current_entries:
            if entry.name == name:
                self._controller.select_entry(entry)
                return

    @staticmethod
    def _highlighted_id(option_list: OptionList) -> str | None:
        index = option_list.highlighted
        if index is None:
            return None
        return option_list.get_option_at_index(index).id

    def _favorite_target(self) -> str | None:
        """Name the favorite toggle applies to: focused list row, else the open detail."""
        focused = self.focused
        if isinstance(focused, OptionList):
            name = self._highlighted_id(focused)
            if name:
                return name
        detail = self._controller.current_detail
        if detail is not None:
            return detail.name
        return self._highlighted_id(self.query_one("#entry-list", OptionList))

    # ── Actions ──────────────────────────────────────────────────────────

    def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()

    def action_cancel(self) -> None:
        """Close details first, then clear the search box."""
        if self._controller.current_detail is not None:
            self._controller.clear_detail()
            return
        search_input = self.query_one("#search-input", Input)
        if search_input.value:
            search_input.value = ""
            return
        self.query_one("#entry-list", OptionList).focus()

    def action_toggle_favorite(self) -> None:
        name = self._favorite_target()
        if not name:
            return
        is_favorite = self._controller.toggle_favorite(name)
        self.notify(build_favorite_toggled_message(format_display_name(name), is_favorite))
        if not self._controller.storage_available:
            self.notify("Failed to save favorites; changes last for this session.", severity="warning")

    def action_show_highlighted_detail(self) -> None:
        self._select_page_entry(self._highlighted_id(self.query_one("#entry-list", OptionList)))

    def action_next_page(self) -> None:
        self._track_task(self._controller.next_page())

    def action_previous_page(self) -> None:
        self._track_task(self._controller.previous_page())

    def action_first_page(self) -> None:
        self._track_task(self._controller.first_page())

    def action_last_page(self) -> None:
        self._track_task(self._controller.last_page())

    def action_cycle_theme(self) -> None:
        current = self._config.theme_name
        index = THEME_NAMES.index(current) if current in THEME_NAMES else -1
        name = apply_theme(THEME_NAMES[(index + 1) % len(THEME_NAMES)])
        self._config.theme_name = name
        self.theme = name
        if self._store.available and not self._store.flush("theme"):
            self.notify("Failed to save theme.", severity="warning")
        self._refresh_entry_list()
        self._refresh_details()
        self._refresh_favorites_list()
        self._refresh_recent_list()
        self.query_one(ContextFooter).render_bindings(FOOTER_BINDINGS)
        self.notify(f"Theme: {name}")


def main() -> int:
    """Main entry point wrapper for CLI/bootstrap logic."""
    return _cli_main(
        load_config_fn=load_config,
        configure_logging_fn=_configure_logging,
        configure_color_mode_fn=_configure_color_mode,
        validate_interactive_tty_fn=_validate_interactive_tty,
        app_factory=PokedexBrowser,
    )


if __name__ == "__main__":
    sys.exit(main())
