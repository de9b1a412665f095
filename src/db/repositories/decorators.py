from collections.abc import Awaitable, Callable
import functools
import logging
from typing import Any

from core.exceptions import StorageError

logger = logging.getLogger(__name__)

AsyncFunc = Callable[..., Awaitable[Any]]


def handle_db_errors(log_prefix: str = ""):
    """Decorator that logs storage failures with the entity being touched.

    The StorageError itself is re-raised unchanged so the service layer can
    decide how to surface it.

    Args:
        log_prefix: Human readable operation name for log messages
    """

    def decorator(func: AsyncFunc) -> AsyncFunc:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            func_name = getattr(func, "__name__", str(func))
            try:
                return await func(*args, **kwargs)
            except StorageError as e:
                entity_info = _extract_entity_info(args, kwargs)
                logger.error(f"Database error while {log_prefix or func_name} {entity_info}: {e.__cause__ or e}")
                raise

        return wrapper

    return decorator


def _extract_entity_info(args: tuple, kwargs: dict) -> str:
    """Find an identifier in the call arguments for more informative log messages."""
    if args and isinstance(args[0], int | str):
        return str(args[0])

    for key in ["post_id", "id", "page", "offset"]:
        if key in kwargs:
            return f"{key}={kwargs[key]}"

    return ""
