from __future__ import annotations

from dataclasses import dataclass

from fastapi import HTTPException, status


@dataclass(eq=False)
class BlogException(Exception):
    message: str
    details: dict | None = None

    def __str__(self) -> str:
        return self.message


class ValidationError(BlogException):
    pass


class NotFoundError(BlogException):
    pass


class StorageError(BlogException):
    """Connectivity, constraint or query failure reported by the storage client."""


class InternalError(BlogException):
    """Unexpected failure surfaced to callers with a generic message."""


class FatalInitError(BlogException):
    """Startup initialization gave up; the process must not serve traffic."""


EXC_TO_STATUS: dict[type[BlogException], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def map_exception_to_http(exc: BlogException) -> HTTPException:
    status_code = status.HTTP_400_BAD_REQUEST
    for typ, st in EXC_TO_STATUS.items():
        if isinstance(exc, typ):
            status_code = st
            break

    return HTTPException(status_code=status_code, detail=exc.message)
