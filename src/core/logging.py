import logging

from .config import settings

QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "sqlalchemy.pool", "asyncio", "aiosqlite")


def setup_logging() -> None:
    """
    Configure root logging from settings.logging.

    Safe to call more than once: when handlers already exist only the level
    is refreshed.
    """
    level = getattr(logging, (settings.logging.level or "INFO").upper(), logging.INFO)

    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return

    logging.basicConfig(level=level, format=settings.logging.format)

    # Driver and access chatter stays at INFO even when the app runs at DEBUG
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))


__all__ = ["setup_logging"]
