"""Favorites / recent-search list rules and the local preference store."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pokedex_browser.config import save_config
from pokedex_browser.models import (
    FAVORITES_KEY,
    MAX_FAVORITES,
    MAX_RECENT_SEARCHES,
    PREFERENCE_KEYS,
    RECENT_SEARCHES_KEY,
    UserConfig,
)

logger = logging.getLogger(__name__)

_KEY_TO_FIELD = {
    FAVORITES_KEY: "favorites",
    RECENT_SEARCHES_KEY: "recent_searches",
}


def toggle_favorite(
    favorites: list[str], name: str, limit: int = MAX_FAVORITES
) -> list[str]:
    """Return favorites with ``name`` removed if present, else appended.

    At capacity the oldest entry (front of the list) is evicted first.
    Duplicates already present in ``favorites`` are collapsed, so the
    result always has set semantics.
    """
    unique = list(dict.fromkeys(favorites))
    if name in unique:
        return [fav for fav in unique if fav != name]
    while len(unique) >= limit:
        unique.pop(0)
    unique.append(name)
    return unique


def add_recent_search(
    recents: list[str], name: str, limit: int = MAX_RECENT_SEARCHES
) -> list[str]:
    """Return recents with ``name`` moved (or inserted) at the front."""
    updated = [name, *(entry for entry in recents if entry != name)]
    return updated[:limit]


def display_favorites(favorites: list[str]) -> list[str]:
    """Favorites in display order (most recently added first)."""
    return list(reversed(favorites))


class PreferenceStore:
    """Key-value view of the two persisted preference lists.

    Every ``save`` overwrites the whole list and persists immediately. When
    a write fails the store flips to in-memory mode for the rest of the
    session: values keep updating, nothing else is written.
    """

    def __init__(
        self,
        config: UserConfig | None = None,
        save_fn: Callable[[UserConfig], bool] = save_config,
    ) -> None:
        self._config = config or UserConfig()
        self._save_fn = save_fn
        self.available = True

    @property
    def config(self) -> UserConfig:
        return self._config

    def load(self, key: str) -> list[str]:
        """Return a copy of the list stored under ``key``."""
        return list(getattr(self._config, self._field_for(key)))

    def save(self, key: str, value: list[str]) -> bool:
        """Replace the list under ``key`` and persist. Returns persistence success."""
        setattr(self._config, self._field_for(key), list(value))
        return self.flush(key)

    def flush(self, what: str = "settings") -> bool:
        """Persist the current config as-is. Returns persistence success."""
        if not self.available:
            return False
        if self._save_fn(self._config):
            return True
        self.available = False
        logger.warning("Preference storage unavailable; keeping %s in memory only", what)
        return False

    @staticmethod
    def _field_for(key: str) -> str:
        if key not in PREFERENCE_KEYS:
            raise KeyError(f"Unknown preference key: {key!r}")
        return _KEY_TO_FIELD[key]


__all__ = [
    "PreferenceStore",
    "add_recent_search",
    "display_favorites",
    "toggle_favorite",
]
