"""Pagination/filter controller: decides what to fetch and publishes plain data.

The controller owns all browsing state (current page, filter, cached name
index, preference lists, status line) and never touches widgets. Views
subscribe with :meth:`CatalogController.subscribe` and re-read whatever
state the event names.

Two pagination modes share one page counter:

* unfiltered: pages come from the remote listing (``list_page``) and the
  page count derives from ``total_count``, fetched once at startup;
* filter-active: pages are slices of ``filter_state.matched_names``, built
  locally from the catalog index, which is fetched at most once.

Each page load takes a fresh request token. A response whose token is no
longer current is dropped, so the most recent request wins regardless of
which response arrives last.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

import httpx

from pokedex_browser.action_messages import (
    build_fetch_error,
    build_not_found_message,
)
from pokedex_browser.filtering import match_names, normalize_term, suggest_name
from pokedex_browser.models import (
    FAVORITES_KEY,
    PAGE_SIZE,
    POKEAPI_DEFAULT_BASE_URL,
    POKEAPI_TIMEOUT_SECONDS,
    RECENT_SEARCHES_KEY,
    CatalogIndexEntry,
    EntryDetail,
    FilterState,
    PageLoaded,
    PageLoadFailed,
    PageLoadResult,
    PageWindow,
    PaginationDescriptor,
)
from pokedex_browser.pagination import (
    build_pagination,
    clamp_page,
    slice_window,
    total_pages,
)
from pokedex_browser.preferences import (
    PreferenceStore,
    add_recent_search,
    display_favorites,
    toggle_favorite,
)
from pokedex_browser.services.catalog_api_service import CatalogNotFoundError
from pokedex_browser.services.interfaces import AppServices, build_default_app_services

logger = logging.getLogger(__name__)

# Change events published to subscribers
EVENT_PAGE = "page"
EVENT_DETAIL = "detail"
EVENT_FAVORITES = "favorites"
EVENT_RECENTS = "recents"
EVENT_STATUS = "status"

ChangeListener = Callable[[str], None]

# Failures a fetch may raise that the controller turns into status messages
FETCH_ERRORS = (httpx.HTTPError, OSError, ValueError, CatalogNotFoundError)


class CatalogController:
    """Browsing state machine for one catalog session."""

    def __init__(
        self,
        *,
        services: AppServices | None = None,
        store: PreferenceStore | None = None,
        client: httpx.AsyncClient | None = None,
        base_url: str = POKEAPI_DEFAULT_BASE_URL,
        timeout_seconds: int = POKEAPI_TIMEOUT_SECONDS,
        page_size: int = PAGE_SIZE,
    ) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be > 0, got {page_size}")
        self._services = services or build_default_app_services()
        self._store = store or PreferenceStore()
        self.client = client
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds

        self.page_size = page_size
        self.current_page = 1
        self.total_count = 0
        self.filter_state = FilterState()
        self.catalog_index: tuple[CatalogIndexEntry, ...] | None = None
        self._index_task: asyncio.Task[tuple[CatalogIndexEntry, ...]] | None = None

        self.current_entries: tuple[EntryDetail, ...] = ()
        self.last_result: PageLoadResult | None = None
        self.current_detail: EntryDetail | None = None
        self.status_message = ""

        self.favorites: list[str] = self._store.load(FAVORITES_KEY)
        self.recent_searches: list[str] = self._store.load(RECENT_SEARCHES_KEY)

        self._request_token = 0
        self._detail_token = 0
        self._listeners: list[ChangeListener] = []

    # ── Notifications ────────────────────────────────────────────────────

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a change listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _emit(self, event: str) -> None:
        for listener in list(self._listeners):
            listener(event)

    def set_status(self, message: str) -> None:
        self.status_message = message
        self._emit(EVENT_STATUS)

    def clear_status(self) -> None:
        if self.status_message:
            self.set_status("")

    # ── Derived pagination state ─────────────────────────────────────────

    @property
    def request_token(self) -> int:
        return self._request_token

    @property
    def item_count(self) -> int:
        """Items in the current mode: matched names, or the whole catalog."""
        if self.filter_state.active:
            return len(self.filter_state.matched_names)
        return self.total_count

    @property
    def total_pages(self) -> int:
        return total_pages(self.item_count, self.page_size)

    @property
    def window(self) -> PageWindow:
        return PageWindow(page_number=self.current_page, page_size=self.page_size)

    def pagination(self) -> PaginationDescriptor:
        return build_pagination(self.current_page, self.total_pages)

    # ── Remote calls ─────────────────────────────────────────────────────

    async def load_total_count(self) -> bool:
        """Fetch the unfiltered catalog size. Returns False on failure."""
        try:
            page = await self._services.catalog.list_page(
                client=self.client,
                offset=0,
                limit=1,
                base_url=self.base_url,
                timeout_seconds=self.timeout_seconds,
            )
        except FETCH_ERRORS as exc:
            logger.warning("Catalog count fetch failed: %s", exc, exc_info=True)
            self.set_status(build_fetch_error("count the catalog", exc))
            return False
        self.total_count = page.count
        logger.debug("Catalog has %d entries", self.total_count)
        return True

    async def ensure_catalog_index(self) -> tuple[CatalogIndexEntry, ...]:
        """Return the full name index, fetching it on first use only.

        Concurrent callers share one in-flight request. A failed load is not
        cached, so the next caller retries.
        """
        if self.catalog_index is not None:
            return self.catalog_index
        if self._index_task is None:
            self._index_task = asyncio.ensure_future(self._fetch_catalog_index())
        task = self._index_task
        try:
            index = await asyncio.shield(task)
        except BaseException:
            if self._index_task is task and task.done():
                self._index_task = None
            raise
        return index

    async def _fetch_catalog_index(self) -> tuple[CatalogIndexEntry, ...]:
        page = await self._services.catalog.list_all(
            client=self.client,
            base_url=self.base_url,
            timeout_seconds=self.timeout_seconds,
        )
        index = tuple(page.items)
        self.catalog_index = index
        if not self.total_count:
            self.total_count = page.count
        logger.debug("Catalog index loaded: %d names", len(index))
        return index

    async def _fetch_details(self, names: list[str]) -> list[EntryDetail]:
        """Fetch details concurrently; results follow the order of ``names``."""
        return list(
            await asyncio.gather(
                *(
                    self._services.catalog.get_by_name(
                        client=self.client,
                        name=name,
                        base_url=self.base_url,
                        timeout_seconds=self.timeout_seconds,
                    )
                    for name in names
                )
            )
        )

    # ── Navigation ───────────────────────────────────────────────────────

    def _begin_request(self) -> int:
        self._request_token += 1
        return self._request_token

    async def set_search_term(self, term: str) -> PageLoadResult | None:
        """Apply a name filter (or clear it) and load page 1 of the new mode.

        Returns ``None`` when a newer request superseded this one.
        """
        normalized = normalize_term(term)
        token = self._begin_request()

        if not normalized:
            self.filter_state = FilterState()
            self.current_page = 1
            return await self._load_page(token)

        try:
            index = await self.ensure_catalog_index()
        except FETCH_ERRORS as exc:
            logger.warning("Catalog index fetch failed: %s", exc, exc_info=True)
            if token != self._request_token:
                return None
            return self._fail_page(build_fetch_error("load the catalog index", exc))

        if token != self._request_token:
            return None

        self.filter_state = FilterState(
            active=True,
            normalized_term=normalized,
            matched_names=match_names(index, normalized),
        )
        self.current_page = 1
        logger.debug(
            "Filter %r matched %d names", normalized, len(self.filter_state.matched_names)
        )
        return await self._load_page(token)

    async def go_to_page(self, page_number: int) -> PageLoadResult | None:
        """Move to ``page_number`` (clamped) and reload in the current mode."""
        self.current_page = clamp_page(page_number, self.total_pages)
        return await self.load_current_page()

    async def next_page(self) -> PageLoadResult | None:
        return await self.go_to_page(self.current_page + 1)

    async def previous_page(self) -> PageLoadResult | None:
        return await self.go_to_page(self.current_page - 1)

    async def first_page(self) -> PageLoadResult | None:
        return await self.go_to_page(1)

    async def last_page(self) -> PageLoadResult | None:
        return await self.go_to_page(self.total_pages)

    async def load_current_page(self) -> PageLoadResult | None:
        """Load the current page window in the current mode."""
        return await self._load_page(self._begin_request())

    async def _load_page(self, token: int) -> PageLoadResult | None:
        self.current_page = clamp_page(self.current_page, self.total_pages)
        window = self.window
        try:
            if self.filter_state.active:
                names = slice_window(self.filter_state.matched_names, window)
            else:
                page = await self._services.catalog.list_page(
                    client=self.client,
                    offset=window.offset,
                    limit=window.page_size,
                    base_url=self.base_url,
                    timeout_seconds=self.timeout_seconds,
                )
                if not self.total_count:
                    self.total_count = page.count
                names = [item.name for item in page.items]
            entries = await self._fetch_details(names)
        except FETCH_ERRORS as exc:
            logger.warning(
                "Page %d load failed: %s", window.page_number, exc, exc_info=True
            )
            if token != self._request_token:
                return None
            return self._fail_page(build_fetch_error(f"load page {window.page_number}", exc))

        # Ignore stale responses after newer requests.
        if token != self._request_token:
            logger.debug("Dropping stale page %d response", window.page_number)
            return None

        self.current_entries = tuple(entries)
        result = PageLoaded(entries=self.current_entries, pagination=self.pagination())
        self.last_result = result
        self._emit(EVENT_PAGE)
        return result

    def _fail_page(self, reason: str) -> PageLoadFailed:
        self.current_entries = ()
        result = PageLoadFailed(reason=reason, pagination=self.pagination())
        self.last_result = result
        self._emit(EVENT_PAGE)
        self.set_status(reason)
        return result

    # ── Detail lookup ────────────────────────────────────────────────────

    async def show_detail(self, name: str) -> EntryDetail | None:
        """Look up one entry by user-typed name (case-insensitive).

        On success the entry becomes the current detail and its name is
        recorded as a recent search. On failure only the status line changes.
        """
        query = name.strip()
        if not query:
            return None
        self._detail_token += 1
        token = self._detail_token
        try:
            detail = await self._services.catalog.get_by_name(
                client=self.client,
                name=query,
                base_url=self.base_url,
                timeout_seconds=self.timeout_seconds,
            )
        except CatalogNotFoundError:
            if token == self._detail_token:
                suggestion = (
                    suggest_name(self.catalog_index, query) if self.catalog_index else None
                )
                self.set_status(build_not_found_message(query, suggestion))
            return None
        except (httpx.HTTPError, OSError, ValueError) as exc:
            logger.warning("Detail lookup for %r failed: %s", query, exc, exc_info=True)
            if token == self._detail_token:
                self.set_status(build_fetch_error(f"look up {query}", exc))
            return None

        if token != self._detail_token:
            return None

        self.recent_searches = add_recent_search(self.recent_searches, detail.name)
        self._store.save(RECENT_SEARCHES_KEY, self.recent_searches)
        self._emit(EVENT_RECENTS)

        self.current_detail = detail
        self._emit(EVENT_DETAIL)
        return detail

    def select_entry(self, entry: EntryDetail) -> None:
        """Show an entry from the current page without recording a search."""
        self._detail_token += 1
        self.current_detail = entry
        self._emit(EVENT_DETAIL)

    def clear_detail(self) -> None:
        self._detail_token += 1
        if self.current_detail is not None:
            self.current_detail = None
            self._emit(EVENT_DETAIL)

    # ── Favorites ────────────────────────────────────────────────────────

    def is_favorite(self, name: str) -> bool:
        return name in self.favorites

    def toggle_favorite(self, name: str) -> bool:
        """Toggle ``name`` in favorites; returns whether it is now a favorite."""
        self.favorites = toggle_favorite(self.favorites, name)
        self._store.save(FAVORITES_KEY, self.favorites)
        self._emit(EVENT_FAVORITES)
        return self.is_favorite(name)

    def display_favorites(self) -> list[str]:
        return display_favorites(self.favorites)

    @property
    def storage_available(self) -> bool:
        return self._store.available


__all__ = [
    "EVENT_DETAIL",
    "EVENT_FAVORITES",
    "EVENT_PAGE",
    "EVENT_RECENTS",
    "EVENT_STATUS",
    "CatalogController",
    "ChangeListener",
]
