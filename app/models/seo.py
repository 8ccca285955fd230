from typing import Optional

from pydantic import BaseModel


class SeoMeta(BaseModel):
    """Head metadata injected into every rendered page."""

    title: str
    description: str = ""
    image: Optional[str] = None
