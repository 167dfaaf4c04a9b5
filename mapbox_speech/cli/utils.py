"""
Logging setup for the mapbox-speech command line
"""
import logging
import sys
from typing import Optional

LOGGER_NAME = "mapbox_speech"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers of the HTTP stack under requests
HTTP_LOGGERS = ("urllib3",)


class CliLogHandler(logging.StreamHandler):
    """Stream handler bound to the current sys.stderr at emit time."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


def setup_logging(
    debug: bool = False,
    log_format: Optional[str] = None,
) -> logging.Logger:
    """
    Attach a stderr handler to the mapbox_speech logger.

    The root logger is left alone. HTTP library loggers are held at
    WARNING and only share the handler when ``debug`` is set. Calling
    this again replaces the handlers installed by the previous call.

    Args:
        debug: Log at DEBUG level, including the HTTP stack
        log_format: Custom log format string

    Returns:
        The mapbox_speech logger
    """
    handler = CliLogHandler()
    handler.setFormatter(logging.Formatter(log_format or LOG_FORMAT))

    logger = logging.getLogger(LOGGER_NAME)
    _replace_handler(logger, handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    for name in HTTP_LOGGERS:
        http_logger = logging.getLogger(name)
        if debug:
            _replace_handler(http_logger, handler)
            http_logger.setLevel(logging.DEBUG)
        else:
            _replace_handler(http_logger, None)
            http_logger.setLevel(logging.WARNING)

    logger.debug("Debug mode enabled for %s", LOGGER_NAME)
    return logger


def _replace_handler(
    logger: logging.Logger, handler: Optional[logging.Handler]
) -> None:
    for old in [h for h in logger.handlers if isinstance(h, CliLogHandler)]:
        logger.removeHandler(old)
    if handler is not None:
        logger.addHandler(handler)
