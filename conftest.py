"""Shared test fixtures for Pokédex Browser tests."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from pokedex_browser import DEFAULT_THEME, THEME_COLORS
from pokedex_browser.controller import CatalogController
from pokedex_browser.models import (
    PAGE_SIZE,
    CatalogIndexEntry,
    CatalogPage,
    EntryDetail,
    UserConfig,
)
from pokedex_browser.preferences import PreferenceStore
from pokedex_browser.services.catalog_api_service import CatalogNotFoundError
from pokedex_browser.services.interfaces import AppServices
from pokedex_browser.widgets.listing import set_ascii_icons

# ── Module-level state isolation ─────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Restore THEME_COLORS and the icon set after each test.

    PokedexBrowser.__init__ mutates both; without this, app tests would leak
    theme and icon changes into later tests.
    """
    yield
    THEME_COLORS.clear()
    THEME_COLORS.update(DEFAULT_THEME)
    set_ascii_icons(False)


# ── Fakes ────────────────────────────────────────────────────────────────────


class FakeCatalogService:
    """In-memory catalog honoring the CatalogApiService call signature.

    Records every call. ``index_gate`` holds ``list_all`` open until set, so
    tests can overlap concurrent searches. Errors can be injected per method.
    """

    def __init__(self, names: list[str] | tuple[str, ...] = ()) -> None:
        self.names = list(names)
        self._positions = {name: i for i, name in enumerate(self.names)}
        self.list_page_calls: list[tuple[int, int]] = []
        self.list_all_calls = 0
        self.detail_calls: list[str] = []
        self.index_gate: asyncio.Event | None = None
        self.list_page_error: Exception | None = None
        self.list_all_error: Exception | None = None
        self.detail_errors: dict[str, Exception] = {}

    def _entries(self, base_url: str) -> list[CatalogIndexEntry]:
        return [
            CatalogIndexEntry(name=name, source_ref=f"{base_url}/{i + 1}/")
            for i, name in enumerate(self.names)
        ]

    async def list_page(
        self, *, client: Any, offset: int, limit: int, base_url: str, timeout_seconds: int
    ) -> CatalogPage:
        self.list_page_calls.append((offset, limit))
        if self.list_page_error is not None:
            raise self.list_page_error
        items = self._entries(base_url)[offset : offset + limit]
        return CatalogPage(items=items, count=len(self.names))

    async def list_all(self, *, client: Any, base_url: str, timeout_seconds: int) -> CatalogPage:
        self.list_all_calls += 1
        if self.index_gate is not None:
            await self.index_gate.wait()
        if self.list_all_error is not None:
            raise self.list_all_error
        return CatalogPage(items=self._entries(base_url), count=len(self.names))

    async def get_by_name(
        self, *, client: Any, name: str, base_url: str, timeout_seconds: int
    ) -> EntryDetail:
        key = name.strip().lower()
        self.detail_calls.append(key)
        if key in self.detail_errors:
            raise self.detail_errors[key]
        if key not in self._positions:
            raise CatalogNotFoundError(name, status_code=404)
        return EntryDetail(
            entry_id=self._positions[key] + 1,
            name=key,
            types=("normal",),
            height=7,
            weight=69,
            abilities=("overgrow",),
        )


# ── Factories ────────────────────────────────────────────────────────────────


@pytest.fixture
def make_entry():
    """Factory fixture for creating EntryDetail instances with sensible defaults."""

    def _make(
        name: str = "bulbasaur",
        entry_id: int = 1,
        types: tuple[str, ...] = ("grass", "poison"),
        height: int = 7,
        weight: int = 69,
        abilities: tuple[str, ...] = ("overgrow", "chlorophyll"),
        image_url: str = "https://img.example/1.png",
    ) -> EntryDetail:
        return EntryDetail(
            entry_id=entry_id,
            name=name,
            image_url=image_url,
            types=types,
            height=height,
            weight=weight,
            abilities=abilities,
        )

    return _make


@pytest.fixture
def make_names():
    """Factory for ``count`` distinct catalog names: mon-001, mon-002, ..."""

    def _make(count: int) -> list[str]:
        return [f"mon-{i:03d}" for i in range(1, count + 1)]

    return _make


@pytest.fixture
def fake_catalog():
    """Factory for FakeCatalogService instances."""

    def _make(names: list[str] | tuple[str, ...] = ()) -> FakeCatalogService:
        return FakeCatalogService(names)

    return _make


@pytest.fixture
def sample_config():
    """Factory fixture for creating UserConfig with optional overrides."""

    def _make(**kwargs: Any) -> UserConfig:
        return UserConfig(**kwargs)

    return _make


@pytest.fixture
def make_controller():
    """Build a CatalogController over a FakeCatalogService and a non-writing store.

    Returns ``(controller, service, saved)`` where ``saved`` collects every
    config snapshot handed to the store's save function.
    """

    def _make(
        names: list[str] | tuple[str, ...] = (),
        *,
        service: FakeCatalogService | None = None,
        config: UserConfig | None = None,
        save_ok: bool = True,
        page_size: int = PAGE_SIZE,
    ) -> tuple[CatalogController, FakeCatalogService, list[dict[str, list[str]]]]:
        service = service or FakeCatalogService(names)
        saved: list[dict[str, list[str]]] = []

        def _save(cfg: UserConfig) -> bool:
            saved.append(
                {
                    "favorites": list(cfg.favorites),
                    "recentSearches": list(cfg.recent_searches),
                }
            )
            return save_ok

        store = PreferenceStore(config or UserConfig(), save_fn=_save)
        controller = CatalogController(
            services=AppServices(catalog=service),
            store=store,
            page_size=page_size,
        )
        return controller, service, saved

    return _make
