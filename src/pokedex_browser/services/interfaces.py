"""Service interfaces + default adapters for app-level dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import httpx

from pokedex_browser.models import CatalogPage, EntryDetail
from pokedex_browser.services import catalog_api_service as _catalog_api


@runtime_checkable
class CatalogApiService(Protocol):
    """Interface for remote catalog operations."""

    async def list_page(
        self,
        *,
        client: httpx.AsyncClient | None,
        offset: int,
        limit: int,
        base_url: str,
        timeout_seconds: int,
    ) -> CatalogPage:
        """Fetch one page of entry summaries."""
        ...

    async def list_all(
        self,
        *,
        client: httpx.AsyncClient | None,
        base_url: str,
        timeout_seconds: int,
    ) -> CatalogPage:
        """Fetch the complete name index."""
        ...

    async def get_by_name(
        self,
        *,
        client: httpx.AsyncClient | None,
        name: str,
        base_url: str,
        timeout_seconds: int,
    ) -> EntryDetail:
        """Fetch full detail for one entry."""
        ...


class DefaultCatalogApiService:
    """Default adapter that delegates to function-based PokéAPI services."""

    async def list_page(
        self,
        *,
        client: httpx.AsyncClient | None,
        offset: int,
        limit: int,
        base_url: str,
        timeout_seconds: int,
    ) -> CatalogPage:
        return await _catalog_api.list_page(
            client=client,
            offset=offset,
            limit=limit,
            base_url=base_url,
            timeout_seconds=timeout_seconds,
        )

    async def list_all(
        self,
        *,
        client: httpx.AsyncClient | None,
        base_url: str,
        timeout_seconds: int,
    ) -> CatalogPage:
        return await _catalog_api.list_all(
            client=client,
            base_url=base_url,
            timeout_seconds=timeout_seconds,
        )

    async def get_by_name(
        self,
        *,
        client: httpx.AsyncClient | None,
        name: str,
        base_url: str,
        timeout_seconds: int,
    ) -> EntryDetail:
        return await _catalog_api.get_by_name(
            client=client,
            name=name,
            base_url=base_url,
            timeout_seconds=timeout_seconds,
        )


@dataclass(slots=True)
class AppServices:
    """Aggregated service interfaces consumed by the app layer."""

    catalog: CatalogApiService


def build_default_app_services() -> AppServices:
    """Build default app services backed by existing function-based modules."""
    return AppServices(catalog=DefaultCatalogApiService())


__all__ = [
    "AppServices",
    "CatalogApiService",
    "DefaultCatalogApiService",
    "build_default_app_services",
]
