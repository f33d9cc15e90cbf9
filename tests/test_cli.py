"""Tests for CLI/bootstrap helpers."""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from pokedex_browser.cli import (
    _configure_color_mode,
    _configure_logging,
    _validate_interactive_tty,
    main,
)
from pokedex_browser.models import POKEAPI_DEFAULT_BASE_URL, UserConfig


def _run(argv: list[str], *, config: UserConfig | None = None, tty: bool = True, **overrides):
    app = MagicMock()
    app_factory = MagicMock(return_value=app)
    color_fn = MagicMock()
    logging_fn = MagicMock()
    kwargs = {
        "load_config_fn": lambda: config or UserConfig(),
        "configure_logging_fn": logging_fn,
        "configure_color_mode_fn": color_fn,
        "validate_interactive_tty_fn": lambda: tty,
        "app_factory": app_factory,
    }
    kwargs.update(overrides)
    code = main(argv, **kwargs)
    return code, app_factory, app, color_fn, logging_fn


class TestMain:
    def test_launches_app_with_defaults(self) -> None:
        config = UserConfig()
        code, factory, app, color_fn, logging_fn = _run([], config=config)

        assert code == 0
        factory.assert_called_once_with(
            config=config,
            ascii_icons=False,
            initial_search="",
            initial_page=1,
            initial_lookup="",
        )
        app.run.assert_called_once_with()
        color_fn.assert_called_once_with("auto")
        logging_fn.assert_called_once_with(False)

    def test_passes_startup_options(self) -> None:
        code, factory, _, _, logging_fn = _run(
            ["--search", "char", "--page", "3", "--lookup", "pikachu", "--ascii", "--debug"]
        )
        assert code == 0
        kwargs = factory.call_args.kwargs
        assert kwargs["initial_search"] == "char"
        assert kwargs["initial_page"] == 3
        assert kwargs["initial_lookup"] == "pikachu"
        assert kwargs["ascii_icons"] is True
        logging_fn.assert_called_once_with(True)

    def test_no_color_wins_over_color(self) -> None:
        _, _, _, color_fn, _ = _run(["--color", "always", "--no-color"])
        color_fn.assert_called_once_with("never")

    def test_api_url_overrides_config(self) -> None:
        config = UserConfig()
        _run(["--api-url", "https://mirror.example/api/v2/pokemon"], config=config)
        assert config.api_base_url == "https://mirror.example/api/v2/pokemon"

    def test_rejects_non_http_api_url(self, capsys) -> None:
        config = UserConfig()
        code, factory, _, _, _ = _run(["--api-url", "ftp://nope"], config=config)
        assert code == 1
        assert "Could not use --api-url." in capsys.readouterr().err
        assert config.api_base_url == POKEAPI_DEFAULT_BASE_URL
        factory.assert_not_called()

    @pytest.mark.parametrize("page", ["0", "-2", "two"])
    def test_rejects_bad_page(self, page: str) -> None:
        with pytest.raises(SystemExit) as excinfo:
            _run(["--page", page])
        assert excinfo.value.code == 2

    def test_requires_tty_for_ui(self, capsys) -> None:
        code, factory, _, _, _ = _run([], tty=False)
        assert code == 2
        assert "requires an interactive TTY" in capsys.readouterr().err
        factory.assert_not_called()

    def test_list_favorites_without_tty(self, capsys) -> None:
        config = UserConfig(favorites=["bulbasaur", "mr-mime"])
        code, factory, _, _, _ = _run(["--list-favorites"], config=config, tty=False)
        out = capsys.readouterr().out
        assert code == 0
        assert out.splitlines() == [
            "Favorites:",
            "  Mr Mime  (mr-mime)",
            "  Bulbasaur  (bulbasaur)",
        ]
        factory.assert_not_called()

    def test_list_recent(self, capsys) -> None:
        config = UserConfig(recent_searches=["eevee", "pikachu"])
        code, _, _, _, _ = _run(["--list-recent"], config=config, tty=False)
        assert code == 0
        assert capsys.readouterr().out.splitlines()[1:] == [
            "  Eevee  (eevee)",
            "  Pikachu  (pikachu)",
        ]

    def test_list_empty_explains_next_step(self, capsys) -> None:
        code, _, _, _, _ = _run(["--list-favorites"], tty=False)
        err = capsys.readouterr().err
        assert code == 0
        assert "Could not list favorites." in err
        assert "Next step:" in err

    def test_list_flags_are_exclusive(self, capsys) -> None:
        code, _, _, _, _ = _run(["--list-favorites", "--list-recent"])
        assert code == 1
        assert "cannot be combined" in capsys.readouterr().err


class TestConfigureColorMode:
    def test_never(self, monkeypatch) -> None:
        monkeypatch.setenv("FORCE_COLOR", "1")
        monkeypatch.delenv("NO_COLOR", raising=False)
        _configure_color_mode("never")
        assert os.environ["NO_COLOR"] == "1"
        assert "FORCE_COLOR" not in os.environ

    def test_always(self, monkeypatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        _configure_color_mode("always")
        assert os.environ["FORCE_COLOR"] == "1"
        assert "NO_COLOR" not in os.environ

    def test_auto_clears_force(self, monkeypatch) -> None:
        monkeypatch.setenv("FORCE_COLOR", "1")
        _configure_color_mode("auto")
        assert "FORCE_COLOR" not in os.environ


class TestConfigureLogging:
    def test_disabled_by_default(self) -> None:
        try:
            _configure_logging(False)
            assert logging.root.manager.disable == logging.CRITICAL
        finally:
            logging.disable(logging.NOTSET)

    def test_debug_writes_rotating_file(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setattr("pokedex_browser.cli.user_config_dir", lambda name: str(tmp_path))
        before = list(logging.root.handlers)
        old_level = logging.root.level
        try:
            _configure_logging(True)
            added = [h for h in logging.root.handlers if h not in before]
            assert len(added) == 1
            handler = added[0]
            assert isinstance(handler, logging.handlers.RotatingFileHandler)
            assert handler.maxBytes == 5 * 1024 * 1024
            assert handler.backupCount == 3
            assert Path(handler.baseFilename) == tmp_path / "debug.log"
            assert logging.root.level == logging.DEBUG
        finally:
            for handler in list(logging.root.handlers):
                if handler not in before:
                    logging.root.removeHandler(handler)
                    handler.close()
            logging.root.setLevel(old_level)


def test_validate_interactive_tty(monkeypatch) -> None:
    monkeypatch.setattr("sys.stdin", MagicMock(isatty=lambda: True))
    monkeypatch.setattr("sys.stdout", MagicMock(isatty=lambda: False))
    assert _validate_interactive_tty() is False
