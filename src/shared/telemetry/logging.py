"""Process-wide logging setup"""
import logging
import sys

from src.infrastructure.config.settings import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"

# httpx and httpcore log every upstream request at INFO
CHATTY_LOGGERS = ("httpx", "httpcore")


def setup_logging() -> None:
    """
    Send logs to stdout at INFO (DEBUG when settings.debug is on).

    When tracing instrumentation already configured the root logger its
    format (with trace ids) is kept; only levels are adjusted.
    """
    debug = get_settings().debug
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, handlers=[handler])
    logging.getLogger().setLevel(logging.DEBUG if debug else logging.INFO)

    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
