"""Logger factory with lazy, one-time configuration.

Modules obtain loggers through ``get_logger(__name__)``; the first call
configures the root logger from application settings.
"""

import logging
from threading import Lock
from typing import Optional, Union

from ..config.settings import get_settings
from .config import setup_logging_configuration

_logging_configured = False
_configuration_lock = Lock()


def get_logger(name: Optional[str] = None, **extra_context) -> Union[logging.Logger, logging.LoggerAdapter]:
    """Get a logger, configuring logging on first use.

    Args:
        name: Logger name, typically ``__name__``.
        **extra_context: Fields attached to every record from this logger.

    Returns:
        A logger, or a ``LoggerAdapter`` when extra context is given.

    Example:
        ```python
        logger = get_logger(__name__)
        logger.info("Ingestion finished", extra={"chunks_inserted": 4})

        pdf_logger = get_logger(__name__, component="pdf")
        ```
    """
    _ensure_logging_configured()

    base_logger = logging.getLogger(name or "creator_kb")

    if extra_context:
        return logging.LoggerAdapter(base_logger, extra_context)
    return base_logger


def configure_logging() -> None:
    """Configure logging now instead of on the first ``get_logger`` call."""
    global _logging_configured

    with _configuration_lock:
        if _logging_configured:
            return
        setup_logging_configuration()
        _logging_configured = True

        settings = get_settings()
        logging.getLogger(__name__).info(
            f"Logging configured for {settings.ENVIRONMENT.value} environment",
            extra={
                "log_level": settings.LOG_LEVEL,
                "console_enabled": settings.LOG_CONSOLE_ENABLED,
                "file_enabled": settings.LOG_FILE_ENABLED,
            },
        )


def mark_logging_configured() -> None:
    """Skip automatic configuration; used when tests install their own handlers."""
    global _logging_configured
    _logging_configured = True


def _ensure_logging_configured() -> None:
    if not _logging_configured:
        configure_logging()
