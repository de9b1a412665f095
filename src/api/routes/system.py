from __future__ import annotations

import time

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from core.config import settings
from core.metrics import process_uptime
from db.database import check_db_connection
from schemas.responses import HealthCheckResponse, ProbeResponse, ServiceInfoResponse

router = APIRouter(tags=["System"])


@router.get("/health", tags=["Health"], response_model=HealthCheckResponse)
async def health() -> JSONResponse:
    ok = await check_db_connection()
    payload = HealthCheckResponse(
        uptime=process_uptime(),
        message="OK" if ok else "Database connection failed",
        timestamp=int(time.time() * 1000),
        service=settings.service_name,
        version=settings.api_version,
        database="connected" if ok else "disconnected",
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=payload.model_dump(),
    )


@router.get("/health/ready", tags=["Health"], response_model=ProbeResponse)
async def ready() -> JSONResponse:
    if await check_db_connection():
        return JSONResponse(status_code=status.HTTP_200_OK, content={"status": "ready"})
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not ready", "error": "Database unavailable"},
    )


@router.get("/health/live", tags=["Health"], response_model=ProbeResponse, response_model_exclude_none=True)
async def live() -> ProbeResponse:
    return ProbeResponse(status="alive")


@router.get("/", tags=["Root"], response_model=ServiceInfoResponse)
async def root() -> ServiceInfoResponse:
    return ServiceInfoResponse(
        service=settings.service_name,
        message=f"Welcome to {settings.api_title}",
        version=settings.api_version,
        docs="/docs" if settings.environment != "production" else None,
        health="/health",
        api_url=settings.public_api_url,
    )
