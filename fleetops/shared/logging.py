"""
Logging Configuration - Shared Layer

structlog on top of the stdlib logging tree. Call ``configure_logging`` at
import time of an entry point, then ``update_logging_from_settings`` once the
application settings are loaded.
"""

import logging
import os
import sys
from typing import Any, List, Optional

import structlog
from structlog.types import Processor

from fleetops.shared.consts import EnumEnvironment

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _build_renderer(environment: str) -> Processor:
    if environment.lower() == EnumEnvironment.PRODUCTION.value:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _shared_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def configure_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: str = "development",
) -> None:
    """
    Configure stdlib logging and structlog.

    Args:
        level: Log level override; falls back to ``LOG_LEVEL`` then INFO.
        format_string: Accepted for settings compatibility; the structlog
            renderer owns the final line layout.
        file_path: Optional log file, falls back to ``LOG_FILE_PATH``.
        environment: Selects JSON output for production, console otherwise.
    """
    log_level = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    log_file = file_path or os.environ.get("LOG_FILE_PATH")
    numeric_level = getattr(logging, log_level, logging.INFO)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_build_renderer(environment),
        foreign_pre_chain=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
        ],
    )
    for handler in handlers:
        handler.setFormatter(formatter)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.handlers = handlers
    root_logger.setLevel(numeric_level)

    # Scheduler internals are chatty at INFO.
    logging.getLogger("apscheduler").setLevel(max(numeric_level, logging.WARNING))

    logging.info("Logging configured with level: %s", log_level)
    if log_file:
        logging.info("Logging to file: %s", log_file)


def update_logging_from_settings(settings: Any) -> None:
    """Re-apply logging configuration from a loaded ``AppSettings``."""
    try:
        level = getattr(settings.logging.level, "value", settings.logging.level)
        environment = getattr(settings.environment, "value", settings.environment)
        configure_logging(
            level=level,
            format_string=settings.logging.format,
            file_path=settings.logging.file_path,
            environment=environment,
        )
        logging.info("Logging configuration updated from application settings")
    except Exception as e:
        logging.error("Failed to update logging from settings: %s", e)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger configured for the project."""
    return structlog.get_logger(name)
