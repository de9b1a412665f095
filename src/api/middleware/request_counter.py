from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from fastapi import Request
from fastapi.responses import Response

from core.metrics import get_request_counter

if TYPE_CHECKING:  # pragma: no cover
    from fastapi import FastAPI


def register_request_counter_middleware(app: FastAPI) -> None:
    """Attach middleware that counts handled requests by method and status."""
    counter = get_request_counter()

    @app.middleware("http")
    async def count_requests(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:  # noqa: D401
        response = await call_next(request)
        counter.increment(request.method, response.status_code)
        return response
