# src/common/pagination.py
"""
Pagination helpers for service-layer list operations.
"""

from typing import Any, Dict, List, Tuple

from django.core.paginator import Paginator

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def paginate_queryset(queryset, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Tuple[List[Any], Dict]:
    """
    Slice a queryset into one page.

    Args:
        queryset: Ordered queryset
        page: 1-based page number; out-of-range values clamp to the last page
        page_size: Items per page, capped at MAX_PAGE_SIZE

    Returns:
        Tuple of (items, pagination metadata)
    """
    page_size = max(1, min(int(page_size), MAX_PAGE_SIZE))
    paginator = Paginator(queryset, page_size)
    page_obj = paginator.get_page(page)

    metadata = {
        'total_count': paginator.count,
        'page_size': page_size,
        'current_page': page_obj.number,
        'total_pages': paginator.num_pages,
    }
    return list(page_obj), metadata
