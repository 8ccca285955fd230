"""Async client for the ButterCMS v2 read API.

The client mirrors the resource layout of the official SDKs::

    client.post.list(page=1, page_size=10)
    client.post.retrieve("my-post")
    client.category.retrieve("news", include="recent_posts")
    client.page.retrieve("product", "blue-mug")
    client.feed.retrieve("rss")

Every call performs exactly one HTTP GET and returns the decoded JSON body
(``{"data": ..., "meta": ...}``).  Errors are never caught here; callers see
:class:`httpx.HTTPError` subclasses or :class:`RuntimeError` for oversized
responses.
"""

import json
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote, urlparse

import httpx

logger = logging.getLogger(__name__)

MAX_CONTENT_SIZE = 10 * 1024 * 1024  # 10 MB
TIMEOUT = 10  # seconds
ALLOWED_SCHEMES = {"http", "https"}
FEED_KINDS = ("rss", "atom", "sitemap")


def _validate_base_url(url: str) -> None:
    """Raise ValueError if *url* is not a usable http(s) API base."""
    parsed = urlparse(url)
    if parsed.scheme not in ALLOWED_SCHEMES:
        raise ValueError(f"Scheme '{parsed.scheme}' is not allowed. Use http or https.")
    if not parsed.hostname:
        raise ValueError("API base URL must have a valid hostname.")


class ButterClient:
    """Thin ButterCMS client bound to one API token."""

    def __init__(
        self,
        api_token: str,
        base_url: str = "https://api.buttercms.com/v2",
        *,
        timeout: float = TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        _validate_base_url(base_url)
        if not api_token:
            logger.warning("ButterCMS API token is empty; upstream calls will be rejected")
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            timeout=timeout, follow_redirects=True, transport=transport
        )

        self.post = _PostResource(self)
        self.category = _CategoryResource(self)
        self.page = _PageResource(self)
        self.feed = _FeedResource(self)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """GET ``base_url + path`` and return the decoded JSON body.

        Raises:
            httpx.HTTPError: on network errors or non-2xx responses.
            RuntimeError: if the body exceeds MAX_CONTENT_SIZE.
            ValueError: if the body is not valid JSON.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        query = {k: v for k, v in (params or {}).items() if v is not None}
        query["auth_token"] = self.api_token
        logger.debug("ButterCMS request", extra={"path": path})

        async with self._http.stream("GET", url, params=query) as response:
            response.raise_for_status()

            content_length = response.headers.get("content-length")
            if content_length and int(content_length) > MAX_CONTENT_SIZE:
                raise RuntimeError("Response body exceeds the maximum allowed size.")

            chunks = []
            total = 0
            async for chunk in response.aiter_bytes():
                total += len(chunk)
                if total > MAX_CONTENT_SIZE:
                    raise RuntimeError("Response body exceeds the maximum allowed size.")
                chunks.append(chunk)

        return json.loads(b"".join(chunks))


class _Resource:
    def __init__(self, client: ButterClient) -> None:
        self._client = client


class _PostResource(_Resource):
    async def list(self, page: int = 1, page_size: int = 10) -> Dict[str, Any]:
        return await self._client.get("posts/", {"page": page, "page_size": page_size})

    async def retrieve(self, slug: str) -> Dict[str, Any]:
        return await self._client.get(f"posts/{quote(slug, safe='')}/")


class _CategoryResource(_Resource):
    async def list(self) -> Dict[str, Any]:
        return await self._client.get("categories/")

    async def retrieve(self, slug: str, include: Optional[str] = None) -> Dict[str, Any]:
        return await self._client.get(
            f"categories/{quote(slug, safe='')}/", {"include": include}
        )


class _PageResource(_Resource):
    async def list(
        self, page_type: str, page: Optional[int] = None, page_size: Optional[int] = None
    ) -> Dict[str, Any]:
        return await self._client.get(
            f"pages/{quote(page_type, safe='')}/", {"page": page, "page_size": page_size}
        )

    async def retrieve(self, page_type: str, slug: str) -> Dict[str, Any]:
        return await self._client.get(
            f"pages/{quote(page_type, safe='')}/{quote(slug, safe='')}/"
        )


class _FeedResource(_Resource):
    async def retrieve(self, kind: str) -> Dict[str, Any]:
        if kind not in FEED_KINDS:
            raise ValueError(f"Unknown feed kind '{kind}'.")
        return await self._client.get(f"feeds/{kind}/")
