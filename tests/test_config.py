"""Tests for config load/save, validation and corrupt-file recovery."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from pokedex_browser.config import (
    MAX_REQUEST_TIMEOUT_SECONDS,
    _config_to_dict,
    _dict_to_config,
    load_config,
    save_config,
)
from pokedex_browser.models import (
    MAX_FAVORITES,
    MAX_RECENT_SEARCHES,
    POKEAPI_DEFAULT_BASE_URL,
    POKEAPI_TIMEOUT_SECONDS,
    UserConfig,
)


@pytest.fixture
def config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "pokedex-browser" / "config.json"
    monkeypatch.setattr("pokedex_browser.config.get_config_path", lambda: path)
    return path


class TestLoadConfig:
    def test_missing_file_returns_defaults(self, config_path: Path) -> None:
        config = load_config()
        assert config == UserConfig()
        assert config.config_defaulted is False

    def test_round_trip_through_disk(self, config_path: Path) -> None:
        original = UserConfig(
            favorites=["bulbasaur", "pikachu"],
            recent_searches=["eevee"],
            theme_name="pokedex-red",
            request_timeout_seconds=12,
        )
        assert save_config(original) is True
        loaded = load_config()
        assert loaded.favorites == ["bulbasaur", "pikachu"]
        assert loaded.recent_searches == ["eevee"]
        assert loaded.theme_name == "pokedex-red"
        assert loaded.request_timeout_seconds == 12

    def test_uses_camel_case_recent_key_on_disk(self, config_path: Path) -> None:
        save_config(UserConfig(recent_searches=["ditto"]))
        data = json.loads(config_path.read_text(encoding="utf-8"))
        assert data["recentSearches"] == ["ditto"]
        assert data["favorites"] == []

    def test_invalid_json_is_backed_up(self, config_path: Path) -> None:
        config_path.parent.mkdir(parents=True)
        config_path.write_text("{not json", encoding="utf-8")

        config = load_config()

        assert config.config_defaulted is True
        assert not config_path.exists()
        backup = config_path.with_name("config.json.corrupt")
        assert backup.read_text(encoding="utf-8") == "{not json"

    def test_non_object_root_is_backed_up(self, config_path: Path) -> None:
        config_path.parent.mkdir(parents=True)
        config_path.write_text("[1, 2]", encoding="utf-8")
        assert load_config().config_defaulted is True
        assert config_path.with_name("config.json.corrupt").exists()

    def test_unreadable_file_returns_defaults(self, config_path: Path) -> None:
        config_path.parent.mkdir(parents=True)
        config_path.write_text("{}", encoding="utf-8")
        with patch.object(Path, "read_text", side_effect=OSError("denied")):
            config = load_config()
        assert config == UserConfig()


class TestSaveConfig:
    def test_creates_directory(self, config_path: Path) -> None:
        assert save_config(UserConfig()) is True
        assert config_path.exists()

    def test_leaves_no_temp_files(self, config_path: Path) -> None:
        save_config(UserConfig(favorites=["mew"]))
        leftovers = [p.name for p in config_path.parent.iterdir() if p.suffix == ".tmp"]
        assert leftovers == []

    def test_replace_failure_returns_false(self, config_path: Path) -> None:
        with patch("pokedex_browser.config.os.replace", side_effect=OSError("disk full")):
            assert save_config(UserConfig()) is False
        leftovers = list(config_path.parent.glob("*.tmp"))
        assert leftovers == []


class TestDictToConfig:
    def test_drops_non_strings_and_duplicates(self) -> None:
        config = _dict_to_config(
            {"favorites": ["a", 3, None, "a", "b"], "recentSearches": ["x", "x", {}]}
        )
        assert config.favorites == ["a", "b"]
        assert config.recent_searches == ["x"]

    def test_truncates_lists_to_caps(self) -> None:
        favorites = [f"f{i}" for i in range(MAX_FAVORITES + 5)]
        recents = [f"r{i}" for i in range(MAX_RECENT_SEARCHES + 5)]
        config = _dict_to_config({"favorites": favorites, "recentSearches": recents})
        assert config.favorites == favorites[-MAX_FAVORITES:]
        assert config.recent_searches == recents[:MAX_RECENT_SEARCHES]

    def test_wrong_types_fall_back_to_defaults(self) -> None:
        config = _dict_to_config(
            {
                "favorites": "pikachu",
                "theme_name": 7,
                "api_base_url": "   ",
                "request_timeout_seconds": True,
            }
        )
        assert config.favorites == []
        assert config.theme_name == "monokai"
        assert config.api_base_url == POKEAPI_DEFAULT_BASE_URL
        assert config.request_timeout_seconds == POKEAPI_TIMEOUT_SECONDS

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(0, 1), (-10, 1), (45, 45), (10_000, MAX_REQUEST_TIMEOUT_SECONDS)],
    )
    def test_timeout_is_clamped(self, raw: int, expected: int) -> None:
        assert _dict_to_config({"request_timeout_seconds": raw}).request_timeout_seconds == expected

    def test_config_defaulted_is_not_persisted(self) -> None:
        assert "config_defaulted" not in _config_to_dict(UserConfig(config_defaulted=True))
