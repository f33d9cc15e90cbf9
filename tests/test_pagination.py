"""Tests for pagination arithmetic and control descriptors."""

from __future__ import annotations

import pytest

from pokedex_browser.models import PageWindow
from pokedex_browser.pagination import (
    build_pagination,
    clamp_page,
    slice_window,
    total_pages,
)


class TestTotalPages:
    def test_exact_multiple(self) -> None:
        assert total_pages(600, 24) == 25

    def test_rounds_up_partial_page(self) -> None:
        assert total_pages(601, 24) == 26

    @pytest.mark.parametrize("count", [0, -5])
    def test_empty_is_one_page(self, count: int) -> None:
        assert total_pages(count, 24) == 1

    def test_rejects_zero_page_size(self) -> None:
        with pytest.raises(ValueError, match="page_size"):
            total_pages(10, 0)


class TestClampPage:
    @pytest.mark.parametrize(
        ("page", "pages", "expected"),
        [(0, 5, 1), (-3, 5, 1), (3, 5, 3), (9, 5, 5), (4, 0, 1)],
    )
    def test_clamps_into_range(self, page: int, pages: int, expected: int) -> None:
        assert clamp_page(page, pages) == expected


class TestPageWindow:
    def test_offset(self) -> None:
        assert PageWindow(page_number=3, page_size=24).offset == 48

    def test_rejects_page_zero(self) -> None:
        with pytest.raises(ValueError, match="page_number"):
            PageWindow(page_number=0)

    def test_rejects_zero_page_size(self) -> None:
        with pytest.raises(ValueError, match="page_size"):
            PageWindow(page_number=1, page_size=0)

    def test_slice_keeps_order(self) -> None:
        items = [f"n{i}" for i in range(10)]
        assert slice_window(items, PageWindow(page_number=2, page_size=4)) == [
            "n4",
            "n5",
            "n6",
            "n7",
        ]

    def test_slice_short_last_page(self) -> None:
        items = list(range(10))
        assert slice_window(items, PageWindow(page_number=3, page_size=4)) == [8, 9]

    def test_slice_past_end_is_empty(self) -> None:
        assert slice_window([1, 2], PageWindow(page_number=5, page_size=4)) == []


class TestBuildPagination:
    def test_labels_and_targets_mid_range(self) -> None:
        descriptor = build_pagination(3, 5)
        assert descriptor.labels == ["First", "Previous", "1", "2", "3", "4", "5", "Next", "Last"]
        assert descriptor.page_numbers == [1, 2, 1, 2, 3, 4, 5, 4, 5]
        assert descriptor.total_pages == 5
        assert descriptor.current_page == 3

    def test_only_current_numbered_button_is_active(self) -> None:
        descriptor = build_pagination(3, 5)
        active_numbered = [b.label for b in descriptor.buttons[2:-2] if b.active]
        assert active_numbered == ["3"]

    def test_directional_buttons_clamp_on_first_page(self) -> None:
        descriptor = build_pagination(1, 4)
        first, previous = descriptor.buttons[0], descriptor.buttons[1]
        assert (first.page_number, previous.page_number) == (1, 1)
        assert first.active and previous.active

    def test_directional_buttons_clamp_on_last_page(self) -> None:
        descriptor = build_pagination(4, 4)
        next_button, last_button = descriptor.buttons[-2], descriptor.buttons[-1]
        assert (next_button.page_number, last_button.page_number) == (4, 4)
        assert next_button.active and last_button.active

    def test_single_page(self) -> None:
        descriptor = build_pagination(1, 0)
        assert descriptor.labels == ["First", "Previous", "1", "Next", "Last"]
        assert set(descriptor.page_numbers) == {1}

    def test_out_of_range_current_is_clamped(self) -> None:
        assert build_pagination(99, 3).current_page == 3
