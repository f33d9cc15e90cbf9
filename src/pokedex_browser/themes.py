"""Theme system: color palettes, Pokémon type colors, and Textual theme builders."""

from __future__ import annotations

from textual.theme import Theme as TextualTheme

# Default color for unknown types
DEFAULT_TYPE_COLOR = "#888888"

# Canonical type colors (game palette, slightly brightened for dark backgrounds)
TYPE_COLORS: dict[str, str] = {
    "normal": "#a8a77a",
    "fire": "#ee8130",
    "water": "#6390f0",
    "electric": "#f7d02c",
    "grass": "#7ac74c",
    "ice": "#96d9d6",
    "fighting": "#c22e28",
    "poison": "#a33ea1",
    "ground": "#e2bf65",
    "flying": "#a98ff3",
    "psychic": "#f95587",
    "bug": "#a6b91a",
    "rock": "#b6a136",
    "ghost": "#735797",
    "dragon": "#6f35fc",
    "dark": "#9a7b66",
    "steel": "#b7b7ce",
    "fairy": "#d685ad",
}

DEFAULT_THEME = {
    "background": "#272822",
    "panel": "#1e1e1e",
    "panel_alt": "#3e3d32",
    "text": "#f8f8f2",
    "muted": "#75715e",
    "accent": "#66d9ef",
    "accent_alt": "#e6db74",
    "green": "#a6e22e",
    "yellow": "#e6db74",
    "orange": "#fd971f",
    "pink": "#f92672",
    "purple": "#ae81ff",
    "highlight": "#49483e",
    "highlight_focus": "#5a5950",
    "scrollbar_background": "#3e3d32",
    "scrollbar": "#75715e",
    "scrollbar_active": "#66d9ef",
    "scrollbar_hover": "#a8a8a2",
}

POKEDEX_RED_THEME: dict[str, str] = {
    "background": "#1b1b1f",
    "panel": "#26262c",
    "panel_alt": "#3a2a2e",
    "text": "#f1f1f1",
    "muted": "#8a8a96",
    "accent": "#ff5959",
    "accent_alt": "#ffcb05",
    "green": "#7ac74c",
    "yellow": "#ffcb05",
    "orange": "#ee8130",
    "pink": "#f95587",
    "purple": "#a98ff3",
    "highlight": "#3a2a2e",
    "highlight_focus": "#5a3a40",
    "scrollbar_background": "#26262c",
    "scrollbar": "#8a8a96",
    "scrollbar_active": "#ff5959",
    "scrollbar_hover": "#b0b0ba",
}

THEMES: dict[str, dict[str, str]] = {
    "monokai": DEFAULT_THEME,
    "pokedex-red": POKEDEX_RED_THEME,
}
THEME_NAMES: list[str] = list(THEMES.keys())


def _build_textual_theme(name: str, colors: dict[str, str]) -> TextualTheme:
    """Convert an app color dict to a Textual Theme with custom CSS variables.

    Maps color keys to $th-* CSS variables used throughout the TCSS.
    Also sets primary/background/foreground for Textual's built-in widget styling.
    """
    variables = {
        "th-background": colors["background"],
        "th-panel": colors["panel"],
        "th-panel-alt": colors["panel_alt"],
        "th-highlight": colors["highlight"],
        "th-highlight-focus": colors["highlight_focus"],
        "th-accent": colors["accent"],
        "th-accent-alt": colors["accent_alt"],
        "th-muted": colors["muted"],
        "th-text": colors["text"],
        "th-green": colors["green"],
        "th-orange": colors["orange"],
        "th-pink": colors["pink"],
        "th-scrollbar-bg": colors["scrollbar_background"],
        "th-scrollbar-thumb": colors["scrollbar"],
        "th-scrollbar-active": colors["scrollbar_active"],
        "th-scrollbar-hover": colors["scrollbar_hover"],
    }
    return TextualTheme(
        name=name,
        primary=colors["accent"],
        secondary=colors["accent_alt"],
        accent=colors["green"],
        foreground=colors["text"],
        background=colors["background"],
        surface=colors["panel"],
        panel=colors["panel_alt"],
        warning=colors["orange"],
        error=colors["pink"],
        success=colors["green"],
        dark=True,
        variables=variables,
    )


TEXTUAL_THEMES: dict[str, TextualTheme] = {
    name: _build_textual_theme(name, colors) for name, colors in THEMES.items()
}

THEME_COLORS = DEFAULT_THEME.copy()


def apply_theme(theme_name: str) -> str:
    """Load ``theme_name`` into THEME_COLORS; unknown names fall back to monokai."""
    resolved = theme_name if theme_name in THEMES else THEME_NAMES[0]
    THEME_COLORS.clear()
    THEME_COLORS.update(THEMES[resolved])
    return resolved


def get_type_color(type_name: str) -> str:
    return TYPE_COLORS.get(type_name.lower(), DEFAULT_TYPE_COLOR)


def format_types(types: tuple[str, ...] | list[str]) -> str:
    """Format type names as colored Rich markup."""
    return " ".join(f"[{get_type_color(t)}]{t}[/]" for t in types)


__all__ = [
    "DEFAULT_THEME",
    "DEFAULT_TYPE_COLOR",
    "POKEDEX_RED_THEME",
    "TEXTUAL_THEMES",
    "THEMES",
    "THEME_COLORS",
    "THEME_NAMES",
    "TYPE_COLORS",
    "apply_theme",
    "format_types",
    "get_type_color",
]
