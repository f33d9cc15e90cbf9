"""Widget chrome for pagination controls and footer hints."""

from __future__ import annotations

import asyncio

from textual.containers import Horizontal
from textual.events import Click
from textual.message import Message
from textual.widgets import Label, Static

from pokedex_browser.formatting import escape_rich_text
from pokedex_browser.models import PaginationDescriptor
from pokedex_browser.themes import THEME_COLORS

# Numbered page buttons shown around the current page; directional buttons are always shown
PAGE_WINDOW_SIZE = 7


def visible_page_buttons(descriptor: PaginationDescriptor) -> list[int]:
    """Indexes into ``descriptor.buttons`` worth drawing in one terminal row.

    The descriptor carries every page number; a long catalog would overflow
    the bar, so numbered buttons are windowed around the current page while
    First/Previous/Next/Last stay visible.
    """
    buttons = descriptor.buttons
    numbered = list(range(2, len(buttons) - 2))
    if len(numbered) <= PAGE_WINDOW_SIZE:
        window = numbered
    else:
        current_pos = 2 + descriptor.current_page - 1
        half = PAGE_WINDOW_SIZE // 2
        start = max(2, current_pos - half)
        end = min(len(buttons) - 2, start + PAGE_WINDOW_SIZE)
        start = max(2, end - PAGE_WINDOW_SIZE)
        window = list(range(start, end))
    return [0, 1, *window, len(buttons) - 2, len(buttons) - 1]


class ContextFooter(Static):
    """Footer showing the key bindings that matter in the current state."""

    DEFAULT_CSS = """
    ContextFooter {
        dock: bottom;
        height: 1;
        background: $th-background;
        color: $th-muted;
        padding: 0 1;
        border-top: solid $th-panel-alt;
    }
    """

    def render_bindings(self, bindings: list[tuple[str, str]], mode_badge: str = "") -> None:
        """Update the footer with a list of (key, label) binding hints."""
        accent = THEME_COLORS["accent"]
        muted = THEME_COLORS["muted"]
        parts = []
        if mode_badge:
            parts.append(mode_badge)
        for key, label in bindings:
            safe_key = escape_rich_text(key)
            if key and label:
                parts.append(f"[bold {accent}]{safe_key}[/] [{muted}]{label}[/]")
            elif label:
                parts.append(f"[italic {muted}]{label}[/]")
            else:
                parts.append(f"[italic {muted}]{safe_key}[/]")
        self.update("  ".join(parts))


class PaginationBar(Horizontal):
    """Horizontal strip of First/Previous/1..N/Next/Last page buttons."""

    class GoToPage(Message):
        """Request to load a specific page."""

        def __init__(self, page_number: int) -> None:
            super().__init__()
            self.page_number = page_number

    DEFAULT_CSS = """
    PaginationBar {
        height: auto;
        padding: 0 1;
        background: $th-panel;
    }

    PaginationBar .page-button {
        padding: 0 1;
        color: $th-muted;
    }

    PaginationBar .page-button:hover {
        color: $th-text;
    }

    PaginationBar .page-button.active {
        color: $th-accent;
        text-style: bold;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self._descriptor: PaginationDescriptor | None = None
        self._targets: dict[str, int] = {}
        # Redraws remove and remount children; overlapping ones would collide on ids
        self._redraw_lock = asyncio.Lock()

    @property
    def descriptor(self) -> PaginationDescriptor | None:
        return self._descriptor

    async def update_pagination(self, descriptor: PaginationDescriptor) -> None:
        """Redraw the buttons for ``descriptor``."""
        async with self._redraw_lock:
            targets: dict[str, int] = {}
            labels: list[Label] = []
            for position in visible_page_buttons(descriptor):
                button = descriptor.buttons[position]
                widget_id = f"page-button-{position}"
                targets[widget_id] = button.page_number
                classes = "page-button active" if button.active else "page-button"
                labels.append(Label(button.label, classes=classes, id=widget_id))
            await self.remove_children()
            self._descriptor = descriptor
            self._targets = targets
            await self.mount_all(labels)

    def target_for(self, widget_id: str) -> int | None:
        return self._targets.get(widget_id)

    def on_click(self, event: Click) -> None:
        """Translate a click on a button label into a GoToPage request."""
        widget = event.widget
        if widget is None:
            return
        target = self.target_for(widget.id or "")
        if target is not None:
            self.post_message(self.GoToPage(target))


__all__ = [
    "PAGE_WINDOW_SIZE",
    "ContextFooter",
    "PaginationBar",
    "visible_page_buttons",
]
