from typing import Optional

from pydantic import BaseModel


class PaginationLinks(BaseModel):
    """Navigation links for a list page.

    A field is ``None`` when the upstream metadata carries no indicator for
    that direction; templates must then omit the link entirely.
    """

    previous_page: Optional[int] = None
    next_page: Optional[int] = None
    previous_href: Optional[str] = None
    next_href: Optional[str] = None
