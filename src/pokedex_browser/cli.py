"""CLI/bootstrap helpers for the Pokédex browser application."""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from pokedex_browser.action_messages import build_actionable_error
from pokedex_browser.config import load_config
from pokedex_browser.formatting import format_display_name
from pokedex_browser.models import CONFIG_APP_NAME, UserConfig
from pokedex_browser.preferences import display_favorites

logger = logging.getLogger(__name__)


def _print_name_list(title: str, names: list[str], *, empty_action: str, next_step: str) -> int:
    """Print a stored name list for non-interactive use. Returns exit code."""
    if not names:
        print(
            build_actionable_error(
                empty_action,
                why="the list is empty",
                next_step=next_step,
            ),
            file=sys.stderr,
        )
        return 0
    print(f"{title}:")
    for name in names:
        print(f"  {format_display_name(name)}  ({name})")
    return 0


def _configure_logging(debug: bool) -> None:
    """Configure logging. When debug=True, logs to file at DEBUG level."""
    if not debug:
        # Default: suppress all logging (TUI captures stderr)
        logging.disable(logging.CRITICAL)
        return

    log_dir = Path(user_config_dir(CONFIG_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "debug.log"

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG)


def _configure_color_mode(color_mode: str) -> None:
    """Configure environment hints for terminal color behavior."""
    if color_mode == "never":
        os.environ["NO_COLOR"] = "1"
        os.environ.pop("FORCE_COLOR", None)
        return
    if color_mode == "always":
        os.environ["FORCE_COLOR"] = "1"
        os.environ.pop("NO_COLOR", None)
        return
    os.environ.pop("FORCE_COLOR", None)


def _validate_interactive_tty() -> bool:
    """Return True when stdin/stdout are interactive terminals."""
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a whole number, got {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a page number >= 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse the Pokémon catalog from PokéAPI in a TUI"
    )
    parser.add_argument(
        "--search",
        type=str,
        default="",
        help="Start with the list filtered to names containing TERM",
    )
    parser.add_argument(
        "--page",
        type=_positive_int,
        default=1,
        help="Start on page N (clamped to the last page)",
    )
    parser.add_argument(
        "--lookup",
        type=str,
        default="",
        help="Open the details of NAME on startup",
    )
    parser.add_argument(
        "--list-favorites",
        action="store_true",
        help="Print saved favorites and exit",
    )
    parser.add_argument(
        "--list-recent",
        action="store_true",
        help="Print recent searches and exit",
    )
    parser.add_argument(
        "--api-url",
        type=str,
        default=None,
        help="Override the catalog endpoint (default: config value)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to file (~/.config/pokedex-browser/debug.log)",
    )
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Color output mode for terminal UI (default: auto)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable terminal colors (equivalent to --color never)",
    )
    parser.add_argument(
        "--ascii",
        action="store_true",
        help="Use ASCII-only favorite icons for compatibility with limited terminals",
    )
    return parser


def main(
    argv: list[str] | None = None,
    *,
    load_config_fn: Callable[[], UserConfig] = load_config,
    configure_logging_fn: Callable[[bool], None] = _configure_logging,
    configure_color_mode_fn: Callable[[str], None] = _configure_color_mode,
    validate_interactive_tty_fn: Callable[[], bool] = _validate_interactive_tty,
    app_factory: Callable[..., Any] | None = None,
) -> int:
    """Main entry point. Returns exit code."""
    args = build_parser().parse_args(argv)
    if args.list_favorites and args.list_recent:
        print("Error: --list-favorites cannot be combined with --list-recent", file=sys.stderr)
        return 1

    color_mode = "never" if args.no_color else args.color
    configure_color_mode_fn(color_mode)
    configure_logging_fn(args.debug)
    logger.debug("pokedex-browser starting, cwd=%s", Path.cwd())

    config = load_config_fn()
    if args.api_url:
        api_url = args.api_url.strip()
        if not api_url.startswith(("http://", "https://")):
            print(
                build_actionable_error(
                    "use --api-url",
                    why=f"{api_url!r} is not an http(s) URL",
                    next_step="pass a URL like https://pokeapi.co/api/v2/pokemon",
                ),
                file=sys.stderr,
            )
            return 1
        config.api_base_url = api_url

    if args.list_favorites:
        return _print_name_list(
            "Favorites",
            display_favorites(config.favorites),
            empty_action="list favorites",
            next_step="press f on an entry in the browser to add one",
        )
    if args.list_recent:
        return _print_name_list(
            "Recent searches",
            list(config.recent_searches),
            empty_action="list recent searches",
            next_step="type a name in the search box and press Enter",
        )

    if not validate_interactive_tty_fn():
        print(
            "Error: pokedex-browser requires an interactive TTY for the full UI.",
            file=sys.stderr,
        )
        print("Next steps:", file=sys.stderr)
        print("  - Run pokedex-browser directly in a terminal session", file=sys.stderr)
        print("  - Use --list-favorites or --list-recent for non-interactive output", file=sys.stderr)
        print("  - Use --help for command documentation", file=sys.stderr)
        return 2

    if app_factory is None:
        from pokedex_browser.app import PokedexBrowser as _PokedexBrowser

        app_factory = _PokedexBrowser

    app = app_factory(
        config=config,
        ascii_icons=args.ascii,
        initial_search=args.search,
        initial_page=args.page,
        initial_lookup=args.lookup,
    )
    app.run()
    return 0


__all__ = [
    "_configure_color_mode",
    "_configure_logging",
    "_validate_interactive_tty",
    "build_parser",
    "main",
]
