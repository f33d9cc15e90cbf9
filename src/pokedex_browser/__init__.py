"""Pokédex Browser: a Textual TUI over the PokéAPI catalog."""

from pokedex_browser.controller import CatalogController
from pokedex_browser.filtering import match_names, normalize_term, suggest_name
from pokedex_browser.models import (
    MAX_FAVORITES,
    MAX_RECENT_SEARCHES,
    PAGE_SIZE,
    CatalogIndexEntry,
    CatalogPage,
    EntryDetail,
    FilterState,
    PageLoaded,
    PageLoadFailed,
    PageLoadResult,
    PageWindow,
    PaginationButton,
    PaginationDescriptor,
    UserConfig,
)
from pokedex_browser.pagination import build_pagination, clamp_page, total_pages
from pokedex_browser.preferences import PreferenceStore, add_recent_search, toggle_favorite
from pokedex_browser.themes import DEFAULT_THEME, THEME_COLORS

__all__ = [
    "DEFAULT_THEME",
    "MAX_FAVORITES",
    "MAX_RECENT_SEARCHES",
    "PAGE_SIZE",
    "THEME_COLORS",
    "CatalogController",
    "CatalogIndexEntry",
    "CatalogPage",
    "EntryDetail",
    "FilterState",
    "PageLoadFailed",
    "PageLoadResult",
    "PageLoaded",
    "PageWindow",
    "PaginationButton",
    "PaginationDescriptor",
    "PreferenceStore",
    "UserConfig",
    "add_recent_search",
    "build_pagination",
    "clamp_page",
    "match_names",
    "normalize_term",
    "suggest_name",
    "toggle_favorite",
    "total_pages",
]
