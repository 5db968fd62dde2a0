"""Tests for page/offset arithmetic."""

import pytest

from dashboard.core.domain_types import ITEMS_PER_PAGE
from dashboard.core.pagination import page_offset, total_pages


def test_page_size_is_six():
    assert ITEMS_PER_PAGE == 6


@pytest.mark.parametrize("count, pages", [
    (0, 0), (1, 1), (6, 1), (7, 2), (12, 2), (13, 3),
])
def test_total_pages_is_ceil_of_count_over_page_size(count, pages):
    assert total_pages(count) == pages


def test_page_offset_first_page_starts_at_zero():
    assert page_offset(1) == 0


def test_page_offset_skips_previous_pages():
    assert page_offset(2) == 6
    assert page_offset(5) == 24


def test_page_offset_rejects_pages_below_one():
    with pytest.raises(ValueError):
        page_offset(0)


def test_custom_page_size():
    assert total_pages(10, per_page=3) == 4
    assert page_offset(3, per_page=3) == 6
