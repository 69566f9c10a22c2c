"""Zero-based page slicing shared by store ranking and review listing."""

from typing import Any, Dict

from django.core.paginator import EmptyPage, Paginator


def paginate(items, page: int, size: int) -> Dict[str, Any]:
    """
    Slice ``items`` (queryset or list) into page ``page`` of ``size`` items.

    A page past the end yields no results but still reports the total count.
    """
    paginator = Paginator(items, size)
    try:
        page_obj = paginator.page(page + 1)
        results = list(page_obj.object_list)
        has_next = page_obj.has_next()
    except EmptyPage:
        results = []
        has_next = False

    return {
        "results": results,
        "count": paginator.count,
        "page": page,
        "size": size,
        "num_pages": paginator.num_pages if paginator.count else 0,
        "has_next": has_next,
        "has_previous": page > 0,
    }
