"""PokéAPI JSON payload parsing into catalog records."""

from __future__ import annotations

import json
import logging
from typing import Any

from pokedex_browser.models import CatalogIndexEntry, CatalogPage, EntryDetail

logger = logging.getLogger(__name__)


def _load_json_object(text: str, what: str) -> dict[str, Any]:
    """Decode a JSON document whose root must be an object."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid PokéAPI {what} response") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Invalid PokéAPI {what} response: expected a JSON object")
    return data


def _named_resource_name(item: Any, key: str) -> str:
    """Extract ``item[key]["name"]`` from a PokéAPI slot record, or ''."""
    if not isinstance(item, dict):
        return ""
    resource = item.get(key)
    if not isinstance(resource, dict):
        return ""
    name = resource.get("name")
    return name if isinstance(name, str) else ""


def _slot_order(item: Any) -> int:
    slot = item.get("slot") if isinstance(item, dict) else None
    return slot if isinstance(slot, int) else 0


def parse_listing_payload(data: dict[str, Any]) -> CatalogPage:
    """Parse a ``/pokemon?limit=&offset=`` listing into a CatalogPage.

    Rows without a string name are skipped; duplicate names keep their
    first occurrence so the listing order is preserved.
    """
    raw_results = data.get("results", [])
    if not isinstance(raw_results, list):
        raw_results = []

    items: list[CatalogIndexEntry] = []
    seen: set[str] = set()
    for row in raw_results:
        if not isinstance(row, dict):
            continue
        name = row.get("name")
        if not isinstance(name, str) or not name or name in seen:
            continue
        seen.add(name)
        url = row.get("url")
        items.append(CatalogIndexEntry(name=name, source_ref=url if isinstance(url, str) else ""))

    count = data.get("count")
    if not isinstance(count, int) or count < 0:
        count = len(items)
    return CatalogPage(items=items, count=count)


def parse_listing_json(text: str) -> CatalogPage:
    """Parse a listing response body."""
    return parse_listing_payload(_load_json_object(text, "listing"))


def _extract_image_url(sprites: Any) -> str:
    """Prefer the official artwork; fall back to the default front sprite."""
    if not isinstance(sprites, dict):
        return ""
    other = sprites.get("other")
    if isinstance(other, dict):
        artwork = other.get("official-artwork")
        if isinstance(artwork, dict):
            url = artwork.get("front_default")
            if isinstance(url, str) and url:
                return url
    front = sprites.get("front_default")
    return front if isinstance(front, str) else ""


def parse_entry_payload(data: dict[str, Any]) -> EntryDetail:
    """Parse a ``/pokemon/{name}`` document into an EntryDetail."""
    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise ValueError("Invalid PokéAPI entry response: missing name")

    entry_id = data.get("id")
    raw_types = data.get("types", [])
    raw_abilities = data.get("abilities", [])
    types = [
        _named_resource_name(item, "type")
        for item in sorted(raw_types if isinstance(raw_types, list) else [], key=_slot_order)
    ]
    abilities = [
        _named_resource_name(item, "ability")
        for item in sorted(
            raw_abilities if isinstance(raw_abilities, list) else [], key=_slot_order
        )
    ]
    height = data.get("height")
    weight = data.get("weight")

    return EntryDetail(
        entry_id=entry_id if isinstance(entry_id, int) else 0,
        name=name,
        image_url=_extract_image_url(data.get("sprites")),
        types=tuple(t for t in types if t),
        height=height if isinstance(height, int) else 0,
        weight=weight if isinstance(weight, int) else 0,
        abilities=tuple(a for a in abilities if a),
    )


def parse_entry_json(text: str) -> EntryDetail:
    """Parse an entry response body."""
    return parse_entry_payload(_load_json_object(text, "entry"))


def format_height_m(height_dm: int) -> str:
    """Format a height in decimetres as metres (``7`` -> ``'0.7 m'``)."""
    return f"{height_dm / 10:g} m"


def format_weight_kg(weight_hg: int) -> str:
    """Format a weight in hectograms as kilograms (``69`` -> ``'6.9 kg'``)."""
    return f"{weight_hg / 10:g} kg"


__all__ = [
    "format_height_m",
    "format_weight_kg",
    "parse_entry_json",
    "parse_entry_payload",
    "parse_listing_json",
    "parse_listing_payload",
]
