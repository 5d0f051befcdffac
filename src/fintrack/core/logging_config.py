"""Root logger setup for the API process."""

import logging
import sys

from fintrack.api.middleware.logging import JSONLogFormatter
from fintrack.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name; defaults to settings.log_level
        json_logs: Emit JSON records; defaults to settings.log_json
    """
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    use_json = settings.log_json if json_logs is None else json_logs

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    if use_json:
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    # Replace rather than stack handlers when the app factory runs more than once.
    for existing in list(root_logger.handlers):
        if getattr(existing, "_fintrack_handler", False):
            root_logger.removeHandler(existing)
    handler._fintrack_handler = True
    root_logger.addHandler(handler)
