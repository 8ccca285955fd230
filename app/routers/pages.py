"""HTML page routes built from the resolver's route table."""

import logging
from typing import Any, Callable, Dict, Mapping

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse

from app.dependencies import get_client, get_pages, get_pipeline, settings_from_request
from app.models.content import PageSpec
from app.services.pagination import build_pagination
from app.services.resolver import FALLBACK_PAGES, ROUTES, resolve
from app.services.seo import build_seo

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"])
fallback_router = APIRouter(tags=["Pages"])


async def render_page(request: Request, spec: PageSpec, context: Mapping[str, str]) -> HTMLResponse:
    """Resolve *spec*'s payload and render it with one consistent snapshot."""
    settings = settings_from_request(request)
    # Captured before the upstream await so a concurrent rebuild cannot mix
    # template generations within this request.
    snapshot = get_pipeline(request).snapshot()

    payload = await resolve(spec, get_client(request), context, page_size=settings.page_size)

    template_context: Dict[str, Any] = {
        "data": payload.get("data"),
        "meta": payload.get("meta") or {},
        "seo": build_seo(spec, payload, settings.site_name),
        "site_name": settings.site_name,
        "page_name": spec.name,
    }
    if spec.action == "list":
        template_context["pagination"] = build_pagination(payload.get("meta"))

    html = snapshot.render(spec.template, **template_context)
    return HTMLResponse(html)


def _page_endpoint(name: str) -> Callable:
    async def endpoint(request: Request) -> HTMLResponse:
        context = {**request.query_params, **request.path_params}
        return await render_page(request, get_pages(request)[name], context)

    endpoint.__name__ = f"render_{name}"
    return endpoint


for _path, _name in ROUTES:
    router.add_api_route(
        _path,
        _page_endpoint(_name),
        methods=["GET"],
        response_class=HTMLResponse,
        summary=f"Render the {_name} page",
    )


@fallback_router.get("/{path:path}", response_class=HTMLResponse, summary="Render a page by name")
async def fallback(request: Request, path: str) -> HTMLResponse:
    """Resolve ``/<page>?slug=...`` to a page by name; anything else is a 404."""
    name = path.strip("/")
    if name not in FALLBACK_PAGES:
        logger.info("No page for path", extra={"path": path})
        raise HTTPException(status_code=404, detail="Not Found")

    return await render_page(request, get_pages(request)[name], dict(request.query_params))
