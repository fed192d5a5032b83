"""Process-wide logging setup."""

from __future__ import annotations

import logging

from pipestore.core.config import AppSettings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: AppSettings | None = None) -> None:
    """Apply ``settings.log_level`` to the root logger."""
    if settings is None:
        settings = AppSettings()
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
    # SQL echo is controlled by DatabaseConfig.echo, keep the engine logger quiet otherwise
    if not settings.database.echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
