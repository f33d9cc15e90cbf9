"""Data models and constants for the Pokédex Browser application."""

from __future__ import annotations

from dataclasses import dataclass, field

# Application identity, used for platformdirs config paths
CONFIG_APP_NAME = "pokedex-browser"

# PokéAPI constants
POKEAPI_DEFAULT_BASE_URL = "https://pokeapi.co/api/v2/pokemon"
POKEAPI_INDEX_LIMIT = 100000
POKEAPI_TIMEOUT_SECONDS = 30

# Pagination
PAGE_SIZE = 24

# Preference list limits
MAX_FAVORITES = 50
MAX_RECENT_SEARCHES = 10

# Preference store keys
FAVORITES_KEY = "favorites"
RECENT_SEARCHES_KEY = "recentSearches"
PREFERENCE_KEYS = (FAVORITES_KEY, RECENT_SEARCHES_KEY)

# Pagination control labels
FIRST_LABEL = "First"
PREVIOUS_LABEL = "Previous"
NEXT_LABEL = "Next"
LAST_LABEL = "Last"


@dataclass(frozen=True, slots=True)
class CatalogIndexEntry:
    """One row of the catalog listing (name + resource URL)."""

    name: str
    source_ref: str


@dataclass(slots=True)
class CatalogPage:
    """A listing payload: entry summaries plus the catalog-wide count."""

    items: list[CatalogIndexEntry] = field(default_factory=list)
    count: int = 0


@dataclass(frozen=True, slots=True)
class EntryDetail:
    """Full record for one catalog entry.

    ``height`` is in decimetres and ``weight`` in hectograms, as served.
    """

    entry_id: int
    name: str
    image_url: str = ""
    types: tuple[str, ...] = ()
    height: int = 0
    weight: int = 0
    abilities: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PageWindow:
    """A ``(page_number, page_size)`` window over an ordered sequence."""

    page_number: int = 1
    page_size: int = PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page_number < 1:
            raise ValueError(f"page_number must be >= 1, got {self.page_number}")
        if self.page_size < 1:
            raise ValueError(f"page_size must be > 0, got {self.page_size}")

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size


@dataclass(slots=True)
class FilterState:
    """Name filter state. ``matched_names`` is ignored while inactive."""

    active: bool = False
    normalized_term: str = ""
    matched_names: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PaginationButton:
    """One pagination control: a label resolved to a concrete page."""

    label: str
    page_number: int
    active: bool = False


@dataclass(frozen=True, slots=True)
class PaginationDescriptor:
    """Everything a view needs to draw pagination controls."""

    buttons: tuple[PaginationButton, ...]
    total_pages: int
    current_page: int

    @property
    def labels(self) -> list[str]:
        return [button.label for button in self.buttons]

    @property
    def page_numbers(self) -> list[int]:
        return [button.page_number for button in self.buttons]


@dataclass(frozen=True, slots=True)
class PageLoaded:
    """Successful page load: entries in display order."""

    entries: tuple[EntryDetail, ...]
    pagination: PaginationDescriptor


@dataclass(frozen=True, slots=True)
class PageLoadFailed:
    """Failed page load with a user-facing reason."""

    reason: str
    pagination: PaginationDescriptor


PageLoadResult = PageLoaded | PageLoadFailed


@dataclass(slots=True)
class UserConfig:
    """Persisted user preferences and connection settings."""

    favorites: list[str] = field(default_factory=list)
    recent_searches: list[str] = field(default_factory=list)
    theme_name: str = "monokai"
    api_base_url: str = POKEAPI_DEFAULT_BASE_URL
    request_timeout_seconds: int = POKEAPI_TIMEOUT_SECONDS
    version: int = 1
    config_defaulted: bool = False  # Transient: set when a corrupt file was replaced


__all__ = [
    "CONFIG_APP_NAME",
    "FAVORITES_KEY",
    "FIRST_LABEL",
    "LAST_LABEL",
    "MAX_FAVORITES",
    "MAX_RECENT_SEARCHES",
    "NEXT_LABEL",
    "PAGE_SIZE",
    "POKEAPI_DEFAULT_BASE_URL",
    "POKEAPI_INDEX_LIMIT",
    "POKEAPI_TIMEOUT_SECONDS",
    "PREFERENCE_KEYS",
    "PREVIOUS_LABEL",
    "RECENT_SEARCHES_KEY",
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
    "UserConfig",
]
