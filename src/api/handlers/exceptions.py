from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.exceptions import BlogException, ValidationError, map_exception_to_http

if TYPE_CHECKING:  # pragma: no cover
    from fastapi import FastAPI, Request


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        # ("body", "title") -> "title"; a missing body reports as "body"
        field = loc[-1] if loc else "body"
        message = str(err.get("msg", "Invalid value")).removeprefix("Value error, ")
        errors.append({"field": field, "message": message})
    return errors


def render_blog_exception(exc: BlogException) -> JSONResponse:
    http_exc = map_exception_to_http(exc)
    content: dict[str, Any] = {
        "success": False,
        "error": http_exc.detail,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    if isinstance(exc, ValidationError):
        content["errors"] = (exc.details or {}).get("errors", [])
    return JSONResponse(status_code=http_exc.status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """Register application-wide exception handlers."""

    @app.exception_handler(BlogException)
    async def blog_exception_handler(request: Request, exc: BlogException) -> JSONResponse:  # noqa: D401
        return render_blog_exception(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: D401
        return render_blog_exception(ValidationError("Validation failed", details={"errors": _field_errors(exc)}))
