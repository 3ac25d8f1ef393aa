"""
core/logging_config.py
──────────────────────
Process-wide logging setup, called once from the application lifespan.

Every other module only does ``logger = logging.getLogger(__name__)``.
"""

import logging

from core.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings) -> None:
    """
    Configure the root logger from ``settings``.

    ``DEBUG=True`` forces the DEBUG level regardless of ``LOG_LEVEL``.
    """
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL)
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    logging.getLogger(__name__).debug("Logging configured (level=%s)", logging.getLevelName(level))
