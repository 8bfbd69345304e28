from __future__ import annotations

import logging
import sys
from datetime import datetime

from loguru import logger

from flatfile.config.settings import settings

# Package whose loguru records are enabled once logging is configured
PACKAGE_NAME = "flatfile"

# Track if logging has been configured to prevent re-initialization
_configured = False


def _get_log_filename() -> str:
    """Generate a log filename with current date and time."""
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    return f"{timestamp}.log"


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level_name = logger.level(record.levelname).name
        except ValueError:
            level_name = record.levelno

        # Find caller from where the logging call originated
        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level_name, record.getMessage()
        )


def configure_logging(level: str | None = None, force: bool = False) -> None:
    """
    Configure logging with loguru and redirect standard logging to loguru.
    - level: optional override for the minimum log level; if None the level
      comes from settings.LOG_LEVEL, else is inferred from settings.ENV
      ("development" -> DEBUG; else INFO).
    - force: reconfigure even if logging was already configured.

    The package logger is disabled on import; this enables it.
    """
    global _configured
    if _configured and not force:
        return

    env = settings.ENV.lower()
    is_production = env == "production"

    # Determine default level from settings if not provided
    if level is None:
        level = settings.LOG_LEVEL or ("DEBUG" if env == "development" else "INFO")
    level = level.upper()

    # Remove default loguru handlers
    logger.remove()

    log_file_path = None
    if settings.LOG_TO_FILE:
        log_dir = settings.get_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file_path = log_dir / _get_log_filename()

        # File format (always human-readable, no colors)
        file_fmt = (
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
            "{level: <8} | "
            "{name}:{function}:{line} | "
            "{message}"
        )
        logger.add(
            log_file_path,
            level=level,
            format=file_fmt,
            enqueue=True,
            backtrace=True,
            diagnose=True,
            encoding="utf-8",
        )

    if is_production:
        # Production: JSON structured logs to stderr
        logger.add(
            sys.stderr,
            level=level,
            serialize=True,
            backtrace=False,
            diagnose=False,
        )
    else:
        # Development: Human-readable format to stderr
        fmt = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )
        logger.add(
            sys.stderr,
            level=level,
            format=fmt,
            backtrace=True,
            diagnose=True,
            colorize=True,
        )

    # loguru-only levels (TRACE, SUCCESS) have no stdlib counterpart
    stdlib_level = logging.getLevelName(level)
    if not isinstance(stdlib_level, int):
        stdlib_level = logging.DEBUG

    # Replace the root handlers with InterceptHandler
    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(stdlib_level)

    logger.enable(PACKAGE_NAME)

    _configured = True
    logger.info(
        f"Logging configured for {settings.APP_NAME} {settings.APP_VERSION}: "
        f"level={level}, environment={env}, log_file={log_file_path}"
    )
