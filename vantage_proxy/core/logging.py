"""
Loguru setup for the proxy.

Standard library records, uvicorn's included, are forwarded into Loguru so
every line carries the request id bound by the HTTP middleware.
"""
import logging
import sys
from typing import Any, Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[request_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[request_id]} | {name}:{function}:{line} - {message}"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")
# These log full outbound URLs, apikey parameter included
QUIET_LOGGERS = ("httpx", "httpcore")


class InterceptHandler(logging.Handler):
    """Forwards standard logging records to Loguru, keeping the caller location."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame, depth = frame.f_back, depth + 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _default_request_id(record: dict[str, Any]) -> None:
    record["extra"].setdefault("request_id", "N/A")


def _route_stdlib_logging() -> None:
    handler = InterceptHandler()
    logging.basicConfig(handlers=[handler], level=0, force=True)

    for name in UVICORN_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [handler]
        std_logger.propagate = False

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure Loguru sinks and stdlib interception.

    Args:
        level: Minimum level for every sink.
        log_file: Rotating log file path; None keeps console output only.
    """
    _route_stdlib_logging()

    logger.remove()
    logger.configure(patcher=_default_request_id)
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)

    if log_file:
        logger.add(
            log_file,
            format=FILE_FORMAT,
            level=level,
            rotation="10 MB",
            retention="30 days",
            compression="zip",
            enqueue=True,
        )
