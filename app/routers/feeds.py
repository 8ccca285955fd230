"""Feed passthrough: RSS, Atom and sitemap documents proxied from the CMS."""

import logging

import httpx
from fastapi import APIRouter, Request, Response
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.dependencies import get_client

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter(tags=["Feeds"])

_MEDIA_TYPES = {
    "sitemap": "application/xml",
    "atom": "application/atom+xml",
    "rss": "application/rss+xml",
}


async def proxy_feed(request: Request, kind: str) -> Response:
    """Fetch the *kind* feed upstream and return it unmodified.

    Upstream failures produce an empty ``502`` instead of leaving the request
    without a response.
    """
    client = get_client(request)
    logger.info("Feed request received", extra={"feed": kind})
    try:
        payload = await client.feed.retrieve(kind)
    except (httpx.HTTPError, RuntimeError, ValueError) as exc:
        logger.error("Error fetching %s feed: %s", kind, exc)
        return Response(status_code=502)

    return Response(content=payload.get("data") or "", media_type=_MEDIA_TYPES[kind])


@router.get("/sitemap", summary="Proxy the CMS sitemap")
@limiter.limit("60/minute")
async def sitemap(request: Request) -> Response:
    return await proxy_feed(request, "sitemap")


@router.get("/atom", summary="Proxy the CMS Atom feed")
@limiter.limit("60/minute")
async def atom(request: Request) -> Response:
    return await proxy_feed(request, "atom")


@router.get("/rss", summary="Proxy the CMS RSS feed")
@limiter.limit("60/minute")
async def rss(request: Request) -> Response:
    return await proxy_feed(request, "rss")
