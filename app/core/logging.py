"""
Logging setup.

The engine modules only ever call ``logging.getLogger(__name__)``; the
application entry points call :func:`configure_logging` once so that the
level and format come from :mod:`app.core.config`.
"""

import logging

from app.core.config import settings


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger from settings (idempotent)."""
    resolved = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=resolved, format=settings.LOG_FORMAT)
    root.setLevel(resolved)
