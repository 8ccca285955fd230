from typing import Literal, Optional

from pydantic import BaseModel

Resource = Literal["post", "category", "page"]
Action = Literal["list", "retrieve"]


class ContentType(BaseModel):
    """Describes how one kind of CMS content is fetched.

    ``page_type`` is only used for the generic ``page`` resource (custom page
    types such as products).  ``include`` is forwarded on retrieval.  Paged
    types forward ``page`` and ``page_size`` when listing.
    """

    resource: Resource
    page_type: Optional[str] = None
    include: Optional[str] = None
    paged: bool = False


class PageSpec(BaseModel):
    """One renderable page: what to fetch and which template renders it."""

    name: str
    template: str
    content_type: ContentType
    action: Action
    fixed_slug: Optional[str] = None

    @property
    def needs_slug(self) -> bool:
        return self.action == "retrieve" and self.fixed_slug is None
