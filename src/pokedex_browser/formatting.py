"""Text formatting utilities shared by widgets and the CLI."""

from __future__ import annotations

from rich.markup import escape as escape_markup


def escape_rich_text(text: str) -> str:
    """Escape text for safe Rich markup rendering."""
    return escape_markup(text) if text else ""


def format_display_name(name: str) -> str:
    """Turn an API slug into a display name (``mr-mime`` -> ``Mr Mime``)."""
    return " ".join(part.capitalize() for part in name.split("-") if part)


def format_entry_number(entry_id: int) -> str:
    """Format a national dex number (``25`` -> ``#025``)."""
    return f"#{entry_id:03d}" if entry_id > 0 else "#???"


__all__ = [
    "escape_rich_text",
    "format_display_name",
    "format_entry_number",
]
