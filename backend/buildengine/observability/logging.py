"""Logging configuration with build context."""

from __future__ import annotations

import logging

from buildengine.config import EngineSettings, get_settings
from buildengine.observability.build_context import get_build_id

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s build_id=%(build_id)s %(message)s"


class BuildContextFilter(logging.Filter):
    """Attach build_id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "build_id", None):
            record.build_id = get_build_id() or "-"
        return True


def configure_logging(settings: EngineSettings | None = None) -> None:
    """Configure base logging to include build context."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    root_logger = logging.getLogger()
    if not any(isinstance(f, BuildContextFilter) for f in root_logger.filters):
        root_logger.addFilter(BuildContextFilter())
    # basicConfig handlers format build_id, so records from child loggers need it too
    for handler in root_logger.handlers:
        if not any(isinstance(f, BuildContextFilter) for f in handler.filters):
            handler.addFilter(BuildContextFilter())
