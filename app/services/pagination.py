"""Prev/next link policy for list pages."""

from typing import Any, Mapping, Optional

from app.models.pagination import PaginationLinks


def build_pagination(meta: Optional[Mapping[str, Any]]) -> PaginationLinks:
    """Return links only for the page indicators present (truthy) in *meta*.

    A missing or null indicator yields no link at all for that direction.
    """
    meta = meta or {}
    previous_page = meta.get("previous_page") or None
    next_page = meta.get("next_page") or None
    return PaginationLinks(
        previous_page=previous_page,
        next_page=next_page,
        previous_href=f"?page={previous_page}" if previous_page else None,
        next_href=f"?page={next_page}" if next_page else None,
    )
