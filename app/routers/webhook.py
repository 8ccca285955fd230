import logging

from fastapi import APIRouter, Request, Response

from app.dependencies import get_pipeline

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Webhook"])


# No signature verification: any POST here triggers a rebuild.
@router.post("/webhook-receiver", summary="Rebuild the render pipeline after a publish")
async def webhook_receiver(request: Request) -> Response:
    """Swap in a freshly compiled template snapshot.

    Returns an empty ``200`` on success and an empty ``500`` when the rebuild
    fails; the previous snapshot keeps serving in that case.
    """
    pipeline = get_pipeline(request)
    logger.info(
        "Webhook notification received",
        extra={"client": request.client.host if request.client else None},
    )
    try:
        snapshot = await pipeline.reinitialize()
    except Exception:
        logger.exception("Render pipeline reinitialisation failed")
        return Response(status_code=500)

    logger.info("Webhook processed", extra={"generation": snapshot.generation})
    return Response(status_code=200)
