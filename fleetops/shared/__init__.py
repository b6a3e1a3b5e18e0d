"""
Shared module - Cross-cutting concerns

Enums, logging helpers and environment utilities used by every layer.
It must not depend on Infrastructure or Frameworks.
"""

from .consts import EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
