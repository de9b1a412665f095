from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging
import os

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from api.handlers.exceptions import register_exception_handlers
from api.middleware.request_counter import register_request_counter_middleware
from api.routes.metrics import router as metrics_router
from api.routes.posts import router as posts_router
from api.routes.system import router as system_router
from core.config import settings
from core.exceptions import FatalInitError
from core.logging import setup_logging
from core.metrics import init_metrics
from db.database import close_db_connections
from db.init_db import initialize_database

# Initialize global logging configuration early
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("Starting up %s", settings.api_title)

    if settings.init.on_start:
        result = await initialize_database(
            max_attempts=settings.init.max_attempts,
            retry_delay=settings.init.retry_delay,
        )
        if not result.ok:
            await close_db_connections()
            raise FatalInitError(f"Database initialization failed after {result.attempts} attempts") from result.error
    else:
        logger.debug("Skipping database initialization on startup (DB_INIT_ON_START=false)")

    logger.info("Application startup completed")

    yield

    logger.info("Shutting down %s", settings.api_title)
    await close_db_connections()
    logger.info("Application shutdown completed")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description=settings.api_description,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url="/redoc" if settings.environment != "production" else None,
        openapi_url="/openapi.json" if settings.environment != "production" else None,
    )

    init_metrics()

    # Routers
    app.include_router(posts_router)
    app.include_router(system_router)
    app.include_router(metrics_router)

    # CORS (from env CORS_ALLOW_ORIGINS comma-separated) so the blog client can call the API
    _cors_env = os.getenv("CORS_ALLOW_ORIGINS", "")
    _cors_origins = [o.strip() for o in _cors_env.split(",") if o.strip()]
    if _cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=_cors_origins,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
            allow_credentials=False,
            max_age=3600,
        )

    # Middlewares
    register_request_counter_middleware(app)

    # Exception handlers
    register_exception_handlers(app)

    return app
