from __future__ import annotations

import logging

from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse

from services import metrics_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Metrics"])


@router.get("/metrics", response_class=PlainTextResponse)
async def metrics() -> PlainTextResponse:
    try:
        body = await metrics_service.render_metrics()
    except Exception:
        logger.exception("Error generating metrics")
        return PlainTextResponse("Error generating metrics", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return PlainTextResponse(body, media_type=metrics_service.CONTENT_TYPE)
