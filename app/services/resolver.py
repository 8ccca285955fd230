"""Page-data resolution: one content-type table, one generic fetch."""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from app.models.content import ContentType, PageSpec

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
DEMO_POST_SLUG = "example-post"

POST = ContentType(resource="post", paged=True)
CATEGORY = ContentType(resource="category", include="recent_posts")


class MissingSlugError(LookupError):
    """Raised when a detail page is requested without a slug."""


def build_page_registry(product_page_type: str = "product") -> Dict[str, PageSpec]:
    """Return every renderable page keyed by its page name."""
    product = ContentType(resource="page", page_type=product_page_type, paged=True)
    pages = [
        PageSpec(name="index", template="index.html", content_type=POST, action="list"),
        PageSpec(name="posts", template="index.html", content_type=POST, action="list"),
        PageSpec(
            name="post",
            template="post.html",
            content_type=POST,
            action="retrieve",
            fixed_slug=DEMO_POST_SLUG,
        ),
        PageSpec(name="post_detail", template="post.html", content_type=POST, action="retrieve"),
        PageSpec(
            name="categories", template="categories.html", content_type=CATEGORY, action="list"
        ),
        PageSpec(
            name="category", template="category.html", content_type=CATEGORY, action="retrieve"
        ),
        PageSpec(name="products", template="products.html", content_type=product, action="list"),
        PageSpec(name="product", template="product.html", content_type=product, action="retrieve"),
    ]
    return {page.name: page for page in pages}


# Order matters: literal segments must precede the ``{slug}`` patterns they overlap.
ROUTES: List[Tuple[str, str]] = [
    ("/", "index"),
    ("/post", "post"),
    ("/posts", "posts"),
    ("/posts/categories", "categories"),
    ("/posts/category/{slug}", "category"),
    ("/posts/{slug}", "post_detail"),
    ("/products", "products"),
    ("/products/{slug}", "product"),
]

# Page names reachable through the fallback handler (``/<name>?slug=...``).
FALLBACK_PAGES = ("index", "post", "posts", "categories", "category", "product", "products")


def page_number(value: Optional[str]) -> int:
    """Parse the ``page`` query value; anything but a positive integer means 1."""
    try:
        number = int(value) if value is not None else 1
    except ValueError:
        return 1
    return number if number >= 1 else 1


async def resolve(
    spec: PageSpec,
    client: Any,
    context: Mapping[str, str],
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Dict[str, Any]:
    """Fetch the data payload for *spec* with exactly one upstream call.

    *context* holds the query parameters merged with path parameters.  Upstream
    errors are not caught.

    Raises:
        MissingSlugError: if a detail page has no slug to look up.
    """
    content_type = spec.content_type
    resource = getattr(client, content_type.resource)
    args: List[Any] = [content_type.page_type] if content_type.resource == "page" else []

    if spec.action == "list":
        if content_type.paged:
            number = page_number(context.get("page"))
            logger.info("Resolving %s", spec.name, extra={"page": number})
            return await resource.list(*args, page=number, page_size=page_size)
        logger.info("Resolving %s", spec.name)
        return await resource.list(*args)

    slug = spec.fixed_slug or context.get("slug")
    if not slug:
        raise MissingSlugError(f"Page '{spec.name}' requires a slug.")
    logger.info("Resolving %s", spec.name, extra={"slug": slug})
    if content_type.include:
        return await resource.retrieve(*args, slug, include=content_type.include)
    return await resource.retrieve(*args, slug)
