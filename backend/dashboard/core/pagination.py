"""Pagination — pure page/offset arithmetic for listing queries."""

from dashboard.core.domain_types import ITEMS_PER_PAGE


def page_offset(page: int, per_page: int = ITEMS_PER_PAGE) -> int:
    """Row offset of a 1-based page."""
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    return (page - 1) * per_page


def total_pages(count: int, per_page: int = ITEMS_PER_PAGE) -> int:
    """Number of pages needed for count rows (ceil division, 0 rows -> 0 pages)."""
    if count <= 0:
        return 0
    return -(-count // per_page)
