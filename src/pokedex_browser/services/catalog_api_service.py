"""Internal PokéAPI service helpers for listing pages, the full index, and entry detail."""

from __future__ import annotations

import httpx

from pokedex_browser.models import (
    POKEAPI_DEFAULT_BASE_URL,
    POKEAPI_INDEX_LIMIT,
    POKEAPI_TIMEOUT_SECONDS,
    CatalogPage,
    EntryDetail,
)
from pokedex_browser.parsing import parse_entry_json, parse_listing_json

POKEAPI_USER_AGENT = "pokedex-browser/1.0"


class CatalogNotFoundError(LookupError):
    """Raised when the catalog has no entry for the requested name."""

    def __init__(self, name: str, status_code: int | None = None) -> None:
        super().__init__(name)
        self.name = name
        self.status_code = status_code

    def __str__(self) -> str:
        return f"No catalog entry named {self.name!r}"


async def _get(
    client: httpx.AsyncClient | None,
    url: str,
    *,
    params: dict[str, int] | None,
    timeout_seconds: int,
    user_agent: str,
) -> httpx.Response:
    """GET through the shared client, or a temporary one when none is given."""
    headers = {"User-Agent": user_agent, "Accept": "application/json"}
    if client is not None:
        return await client.get(url, params=params, headers=headers, timeout=timeout_seconds)
    async with httpx.AsyncClient() as tmp_client:
        return await tmp_client.get(url, params=params, headers=headers, timeout=timeout_seconds)


async def list_page(
    *,
    client: httpx.AsyncClient | None,
    offset: int,
    limit: int,
    base_url: str = POKEAPI_DEFAULT_BASE_URL,
    timeout_seconds: int = POKEAPI_TIMEOUT_SECONDS,
    user_agent: str = POKEAPI_USER_AGENT,
) -> CatalogPage:
    """Fetch one page of entry summaries plus the total catalog count."""
    response = await _get(
        client,
        base_url,
        params={"limit": max(1, limit), "offset": max(0, offset)},
        timeout_seconds=timeout_seconds,
        user_agent=user_agent,
    )
    response.raise_for_status()
    return parse_listing_json(response.text)


async def list_all(
    *,
    client: httpx.AsyncClient | None,
    base_url: str = POKEAPI_DEFAULT_BASE_URL,
    timeout_seconds: int = POKEAPI_TIMEOUT_SECONDS,
    user_agent: str = POKEAPI_USER_AGENT,
) -> CatalogPage:
    """Fetch the complete name index in one request."""
    return await list_page(
        client=client,
        offset=0,
        limit=POKEAPI_INDEX_LIMIT,
        base_url=base_url,
        timeout_seconds=timeout_seconds,
        user_agent=user_agent,
    )


async def get_by_name(
    *,
    client: httpx.AsyncClient | None,
    name: str,
    base_url: str = POKEAPI_DEFAULT_BASE_URL,
    timeout_seconds: int = POKEAPI_TIMEOUT_SECONDS,
    user_agent: str = POKEAPI_USER_AGENT,
) -> EntryDetail:
    """Fetch full detail for one entry by (case-insensitive) name.

    Raises:
        CatalogNotFoundError: the name is blank or the API answered non-success.
        httpx.HTTPError: on transport failures.
    """
    key = name.strip().lower()
    if not key:
        raise CatalogNotFoundError(name)
    response = await _get(
        client,
        f"{base_url.rstrip('/')}/{key}",
        params=None,
        timeout_seconds=timeout_seconds,
        user_agent=user_agent,
    )
    if not response.is_success:
        raise CatalogNotFoundError(name, status_code=response.status_code)
    return parse_entry_json(response.text)


__all__ = [
    "POKEAPI_USER_AGENT",
    "CatalogNotFoundError",
    "get_by_name",
    "list_all",
    "list_page",
]
