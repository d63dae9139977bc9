"""
Pagination Utilities
====================
Page/offset arithmetic shared by the table listing and export endpoints.
"""

import math
from typing import List, Tuple

from models import Pagination


def compute_offset(page: int, limit: int) -> int:
    """
    Zero-based row offset of a 1-based page.

    Examples:
        compute_offset(1, 50) -> 0
        compute_offset(3, 50) -> 100
    """
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")
    return (page - 1) * limit


def compute_total_pages(total: int, limit: int) -> int:
    """Number of pages needed to show `total` rows, `limit` rows at a time."""
    if total < 0:
        raise ValueError(f"total must be >= 0, got {total}")
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")
    return math.ceil(total / limit)


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    return Pagination(
        page=page,
        limit=limit,
        total=total,
        total_pages=compute_total_pages(total, limit),
    )


def row_range(offset: int, limit: int) -> Tuple[int, int]:
    """Inclusive (start, end) pair for a PostgREST range request."""
    return offset, offset + limit - 1


def batch_windows(total: int, batch_size: int) -> List[Tuple[int, int]]:
    """
    Inclusive (start, end) windows covering rows [0, total).

    The last window is clipped to the final row.
    """
    if total < 0:
        raise ValueError(f"total must be >= 0, got {total}")
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")

    windows = []
    for start in range(0, total, batch_size):
        end = min(start + batch_size, total) - 1
        windows.append((start, end))
    return windows
