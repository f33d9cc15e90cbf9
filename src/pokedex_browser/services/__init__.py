"""Internal service layer for app orchestration extraction."""

from pokedex_browser.services.catalog_api_service import (
    CatalogNotFoundError,
    get_by_name,
    list_all,
    list_page,
)

__all__ = [
    "CatalogNotFoundError",
    "get_by_name",
    "list_all",
    "list_page",
]
