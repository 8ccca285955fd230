"""Head metadata (title, description, Open Graph image) for rendered pages."""

from typing import Any, Mapping, Optional

from bs4 import BeautifulSoup

from app.models.content import PageSpec
from app.models.seo import SeoMeta

_DESCRIPTION_MAX_CHARS = 160


def html_to_text(html: Optional[str]) -> str:
    """Return the visible text of an HTML fragment, whitespace-collapsed."""
    if not html:
        return ""
    text = BeautifulSoup(html, "lxml").get_text(separator=" ", strip=True)
    return " ".join(text.split())


def _truncate(text: str, limit: int = _DESCRIPTION_MAX_CHARS) -> str:
    if len(text) <= limit:
        return text
    cut = text[: limit - 1].rsplit(" ", 1)[0]
    return cut.rstrip(" ,.;:") + "…"


def build_seo(spec: PageSpec, payload: Mapping[str, Any], site_name: str) -> SeoMeta:
    """Derive :class:`SeoMeta` for *spec* from its resolved *payload*."""
    if spec.action == "list":
        return SeoMeta(title=site_name)

    data = payload.get("data") or {}
    resource = spec.content_type.resource

    if resource == "post":
        description = (
            data.get("meta_description")
            or data.get("summary")
            or html_to_text(data.get("body"))
        )
        return SeoMeta(
            title=data.get("seo_title") or data.get("title") or site_name,
            description=_truncate(description),
            image=data.get("featured_image") or None,
        )

    if resource == "category":
        name = data.get("name") or site_name
        return SeoMeta(title=name, description=f"Posts in {name}")

    fields = data.get("fields") or {}
    return SeoMeta(
        title=fields.get("seo_title") or fields.get("title") or site_name,
        description=_truncate(
            fields.get("meta_description") or html_to_text(fields.get("description"))
        ),
        image=fields.get("image") or None,
    )
