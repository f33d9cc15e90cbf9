"""Configuration persistence: load and save."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from pokedex_browser.models import (
    CONFIG_APP_NAME,
    MAX_FAVORITES,
    MAX_RECENT_SEARCHES,
    POKEAPI_DEFAULT_BASE_URL,
    POKEAPI_TIMEOUT_SECONDS,
    UserConfig,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Configuration Persistence
# ============================================================================
#
# Validation contract: _dict_to_config() guarantees valid output for any input:
#
#   Field                    Rule                               Handler
#   ───────────────────────  ─────────────────────────────────  ─────────────────────
#   favorites[]              str, unique, newest MAX_FAVORITES  _parse_favorites
#   recent_searches[]        str, unique, first MAX_RECENT      _parse_recent_searches
#   request_timeout_seconds  1 ≤ x ≤ 300                        _coerce_timeout
#   api_base_url             non-empty str                      _dict_to_config
#   scalar fields            type-checked via _safe_get()       _dict_to_config
#
CONFIG_FILENAME = "config.json"
MAX_REQUEST_TIMEOUT_SECONDS = 300


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Uses platformdirs for cross-platform config directory:
    - Linux: ~/.config/pokedex-browser/config.json
    - macOS: ~/Library/Application Support/pokedex-browser/config.json
    - Windows: %APPDATA%/pokedex-browser/config.json
    """
    config_dir = Path(user_config_dir(CONFIG_APP_NAME))
    return config_dir / CONFIG_FILENAME


def _config_to_dict(config: UserConfig) -> dict[str, Any]:
    """Serialize UserConfig to a JSON-compatible dictionary."""
    return {
        "version": config.version,
        "theme_name": config.theme_name,
        "api_base_url": config.api_base_url,
        "request_timeout_seconds": _coerce_timeout(config.request_timeout_seconds),
        "favorites": list(config.favorites),
        "recentSearches": list(config.recent_searches),
    }


def _safe_get(data: dict, key: str, default: Any, expected_type: type) -> Any:
    """Safely get a value from dict with type validation.

    Returns the default if key is missing or value has wrong type.
    """
    value = data.get(key, default)
    if not isinstance(value, expected_type):
        return default
    return value


def _coerce_timeout(value: Any) -> int:
    """Validate and clamp the configured request timeout."""
    if not isinstance(value, int) or isinstance(value, bool):
        return POKEAPI_TIMEOUT_SECONDS
    return max(1, min(value, MAX_REQUEST_TIMEOUT_SECONDS))


def _unique_strings(raw: Any) -> list[str]:
    """Keep string items only, dropping later duplicates."""
    if not isinstance(raw, list):
        return []
    return list(dict.fromkeys(item for item in raw if isinstance(item, str) and item))


def _parse_favorites(raw: Any) -> list[str]:
    """Parse favorites; storage order is oldest first, so keep the newest tail."""
    favorites = _unique_strings(raw)
    if len(favorites) > MAX_FAVORITES:
        favorites = favorites[-MAX_FAVORITES:]
    return favorites


def _parse_recent_searches(raw: Any) -> list[str]:
    """Parse recent searches; storage order is newest first."""
    return _unique_strings(raw)[:MAX_RECENT_SEARCHES]


def _dict_to_config(data: dict[str, Any]) -> UserConfig:
    """Deserialize a dictionary to UserConfig with type validation."""
    base_url = _safe_get(data, "api_base_url", POKEAPI_DEFAULT_BASE_URL, str).strip()
    return UserConfig(
        favorites=_parse_favorites(data.get("favorites")),
        recent_searches=_parse_recent_searches(data.get("recentSearches")),
        theme_name=_safe_get(data, "theme_name", "monokai", str),
        api_base_url=base_url or POKEAPI_DEFAULT_BASE_URL,
        request_timeout_seconds=_coerce_timeout(
            data.get("request_timeout_seconds", POKEAPI_TIMEOUT_SECONDS)
        ),
        version=_safe_get(data, "version", 1, int),
    )


def _backup_corrupt_config(config_path: Path) -> None:
    """Move an unreadable config aside so the next save starts clean."""
    backup_path = config_path.with_name(config_path.name + ".corrupt")
    try:
        os.replace(config_path, backup_path)
        logger.warning("Backed up corrupt config to %s", backup_path)
    except OSError as e:
        logger.warning("Could not back up corrupt config: %s", e)


def load_config() -> UserConfig:
    """Load configuration from disk.

    Returns default config if file doesn't exist or is corrupted. A corrupt
    file is renamed to ``config.json.corrupt`` and the returned config has
    ``config_defaulted`` set so the UI can warn.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return UserConfig()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.warning("Config file has invalid JSON, using defaults: %s", e)
        _backup_corrupt_config(config_path)
        return UserConfig(config_defaulted=True)
    except OSError as e:
        logger.warning("Could not read config file, using defaults: %s", e)
        return UserConfig()

    if not isinstance(data, dict):
        logger.warning("Config file root is not an object, using defaults")
        _backup_corrupt_config(config_path)
        return UserConfig(config_defaulted=True)
    return _dict_to_config(data)


def save_config(config: UserConfig) -> bool:
    """Save configuration to disk atomically.

    Uses write-to-tempfile + os.replace() to prevent partial writes
    on crash/interrupt from corrupting the config file.

    Creates the config directory if it doesn't exist.
    Returns True on success, False on failure.
    """
    config_path = get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = _config_to_dict(config)
        json_str = json.dumps(data, indent=2, ensure_ascii=False)
        fd, tmp_path = tempfile.mkstemp(dir=config_path.parent, suffix=".tmp", prefix=".config-")
        closed = False
        try:
            os.write(fd, json_str.encode("utf-8"))
            os.close(fd)
            closed = True
            os.replace(tmp_path, config_path)
        except BaseException:
            if not closed:
                os.close(fd)
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
        return True
    except OSError as e:
        logger.error("Failed to save config: %s", e)
        return False


__all__ = [
    "CONFIG_APP_NAME",
    "CONFIG_FILENAME",
    "get_config_path",
    "load_config",
    "save_config",
]
