# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the license found in the
# LICENSE file in the root directory of this source tree.

"""
Logging utility that appends structured fields to standard log messages.
"""

import logging
from enum import Enum, auto, unique
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@unique
class LogLevel(Enum):
    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()
    CRITICAL = auto()


class StructuredLogger:
    """Logger that formats keyword fields as `key=value` pairs."""

    def __init__(self, name: Optional[str] = None, level: int = logging.INFO):
        """
        Initialize a structured logger.

        Args:
            name: Logger name (defaults to __name__)
            level: Logging level (default: INFO)
        """
        self.logger = logging.getLogger(name or __name__)
        self.logger.setLevel(level)

    @property
    def name(self) -> str:
        return self.logger.name

    @property
    def handlers(self):
        """Access underlying logger's handlers for configuration."""
        return self.logger.handlers

    def addHandler(self, handler):
        """Add a handler to the underlying logger."""
        self.logger.addHandler(handler)

    def removeHandler(self, handler):
        """Remove a handler from the underlying logger."""
        self.logger.removeHandler(handler)

    def setLevel(self, level):
        """Set logging level."""
        self.logger.setLevel(level)

    def isEnabledFor(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)

    def _log(self, level: LogLevel, message: str, **kwargs) -> None:
        local_log = getattr(self.logger, level.name.lower())
        if kwargs:
            # Format kwargs as `key=value` pairs
            kwargs_str: str = " ".join(f"{k}={v}" for k, v in kwargs.items())
            formatted_message: str = f"{message} [{kwargs_str}]"
            local_log(formatted_message, extra=kwargs)
        else:
            local_log(message)

    def debug(self, message: str, **kwargs) -> None:
        self._log(level=LogLevel.DEBUG, message=message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self._log(level=LogLevel.INFO, message=message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._log(level=LogLevel.WARNING, message=message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self._log(level=LogLevel.ERROR, message=message, **kwargs)

    def critical(self, message: str, **kwargs) -> None:
        self._log(level=LogLevel.CRITICAL, message=message, **kwargs)


def get_logger(name: Optional[str] = None, level: int = logging.INFO) -> StructuredLogger:
    """
    Get a logger instance

    Args:
        name: Logger name (defaults to calling module's `__name__`)
        level: Logger level (default: `INFO`)

    Returns:
        `StructuredLogger`
    """
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    return StructuredLogger(name=name, level=level)
