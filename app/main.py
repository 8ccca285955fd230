import logging
import logging.config
from contextlib import asynccontextmanager
from typing import Any, Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse, Response
from jinja2 import TemplateNotFound
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, get_settings
from app.routers.feeds import limiter, router as feeds_router
from app.routers.pages import fallback_router, router as pages_router
from app.routers.webhook import router as webhook_router
from app.services.butter import ButterClient
from app.services.render import ERROR_TEMPLATE, RenderPipeline
from app.services.resolver import MissingSlugError, build_page_registry


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                },
            },
            "root": {"level": level.upper(), "handlers": ["console"]},
        }
    )


logger = logging.getLogger(__name__)


def _error_page(request: Request, status_code: int) -> HTMLResponse:
    snapshot = request.app.state.pipeline.snapshot()
    html = snapshot.render(ERROR_TEMPLATE, status_code=status_code, site_name=request.app.state.settings.site_name)
    return HTMLResponse(html, status_code=status_code)


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[Any] = None,
    pipeline: Optional[RenderPipeline] = None,
) -> FastAPI:
    """Build the application around explicitly supplied collaborators.

    Missing collaborators are constructed from *settings*.  Only a client
    built here is closed on shutdown.
    """
    settings = settings or get_settings()
    pages = build_page_registry(settings.product_page_type)
    owns_client = client is None
    if client is None:
        client = ButterClient(
            settings.butter_api_token, settings.butter_api_base, timeout=settings.api_timeout
        )
    if pipeline is None:
        pipeline = RenderPipeline(
            settings.template_dir,
            required=[page.template for page in pages.values()],
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_client:
            await client.aclose()

    app = FastAPI(
        title="Butter Pages",
        description="Server-rendered blog, category and product pages backed by ButterCMS.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.client = client
    app.state.pipeline = pipeline
    app.state.pages = pages

    # Rate-limiting state
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code == 404:
            return _error_page(request, 404)
        return await http_exception_handler(request, exc)

    @app.exception_handler(MissingSlugError)
    @app.exception_handler(TemplateNotFound)
    async def lookup_exception_handler(request: Request, exc: Exception) -> HTMLResponse:
        logger.warning("Page lookup failed for %s: %s", request.url.path, exc)
        return _error_page(request, 404)

    @app.exception_handler(httpx.HTTPStatusError)
    async def upstream_status_handler(request: Request, exc: httpx.HTTPStatusError) -> HTMLResponse:
        status = exc.response.status_code
        if status == 404:
            logger.warning("Content not found upstream for %s", request.url.path)
            return _error_page(request, 404)
        logger.error("CMS returned HTTP %d for %s", status, request.url.path)
        return _error_page(request, 502)

    @app.exception_handler(httpx.RequestError)
    async def upstream_request_handler(request: Request, exc: httpx.RequestError) -> HTMLResponse:
        logger.error("Error reaching CMS for %s: %s", request.url.path, exc)
        return _error_page(request, 502)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> HTMLResponse:
        logger.exception("Unhandled exception for %s", request.url)
        return _error_page(request, 500)

    app.include_router(pages_router)
    app.include_router(feeds_router)
    app.include_router(webhook_router)
    # Catch-all; must stay last.
    app.include_router(fallback_router)

    return app


configure_logging(get_settings().log_level)

app = create_app()
