# -*- coding: utf-8 -*-
"""Page slicing for the sorted transfer list."""

import math
from typing import List, Sequence, TypeVar

T = TypeVar("T")

PAGE_SIZE_OPTIONS = (10, 20, 50)
DEFAULT_PAGE_SIZE = 10


def paginate(rows: Sequence[T], page: int, page_size: int) -> List[T]:
    """Return the 1-based page of rows.

    Out-of-range pages come back empty. Callers clamp the page number
    themselves (see ``clamp_page``).
    """
    if page < 1 or page_size < 1:
        return []
    start = (page - 1) * page_size
    return list(rows[start : start + page_size])


def total_pages(total: int, page_size: int) -> int:
    if page_size < 1:
        return 0
    return math.ceil(total / page_size)


def clamp_page(page: int, pages: int) -> int:
    """Clamp page into [1, pages]; an empty list still has page 1."""
    return min(max(page, 1), max(pages, 1))
