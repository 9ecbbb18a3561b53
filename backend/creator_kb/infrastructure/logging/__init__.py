"""Centralized logging infrastructure.

Usage:
    ```python
    from creator_kb.infrastructure.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Document ingested", extra={"document_id": str(document.id)})
    ```
"""

from .config import (
    configure_testing_logging,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
    setup_logging_configuration,
)
from .factory import configure_logging, get_logger, mark_logging_configured

__all__ = [
    "get_logger",
    "configure_logging",
    "configure_testing_logging",
    "mark_logging_configured",
    "setup_logging_configuration",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
    "reset_correlation_id",
]
