"""Pagination arithmetic and pagination-control descriptors."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from pokedex_browser.models import (
    FIRST_LABEL,
    LAST_LABEL,
    NEXT_LABEL,
    PREVIOUS_LABEL,
    PageWindow,
    PaginationButton,
    PaginationDescriptor,
)

T = TypeVar("T")


def total_pages(item_count: int, page_size: int) -> int:
    """Number of pages for ``item_count`` items; never less than 1."""
    if page_size < 1:
        raise ValueError(f"page_size must be > 0, got {page_size}")
    if item_count <= 0:
        return 1
    return -(-item_count // page_size)


def clamp_page(page_number: int, pages: int) -> int:
    """Clamp ``page_number`` into ``[1, pages]``."""
    return max(1, min(page_number, max(1, pages)))


def slice_window(items: Sequence[T], window: PageWindow) -> list[T]:
    """Return the items inside ``window``, in their original order."""
    start = window.offset
    return list(items[start : start + window.page_size])


def build_pagination(current_page: int, pages: int) -> PaginationDescriptor:
    """Build First/Previous/1..N/Next/Last controls for the current page.

    Directional labels resolve to clamped page numbers, so no control ever
    points outside ``[1, pages]``. Every button whose page equals the
    current page is flagged active, matching how numbered and directional
    buttons render side by side.
    """
    pages = max(1, pages)
    current = clamp_page(current_page, pages)
    targets: list[tuple[str, int]] = [
        (FIRST_LABEL, 1),
        (PREVIOUS_LABEL, max(1, current - 1)),
    ]
    targets.extend((str(number), number) for number in range(1, pages + 1))
    targets.extend(
        [
            (NEXT_LABEL, min(pages, current + 1)),
            (LAST_LABEL, pages),
        ]
    )
    buttons = tuple(
        PaginationButton(label=label, page_number=number, active=number == current)
        for label, number in targets
    )
    return PaginationDescriptor(buttons=buttons, total_pages=pages, current_page=current)


__all__ = [
    "build_pagination",
    "clamp_page",
    "slice_window",
    "total_pages",
]
