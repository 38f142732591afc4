"""
Diagnostic logging for relmap, driven by the ``[logging]`` settings section.

Everything is logged under the ``relmap`` stdlib logger. With console and
file output both off that logger only carries a NullHandler and its records
propagate to whatever handlers the application has configured.
"""

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from ..core.interfaces.logger import ILogger
from ..core.models.config import LoggingConfig

LOGGER_NAME = "relmap"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOG_FILE = Path.home() / ".relmap" / "relmap.log"
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
BACKUP_COUNT = 3

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# Handlers attached by RelmapLogger, per logger name
_installed: dict[str, list[logging.Handler]] = {}
_installed_lock = threading.Lock()


def build_handlers(config: LoggingConfig) -> list[logging.Handler]:
    """Handlers requested by ``config``; empty when output is off."""
    handlers: list[logging.Handler] = []
    if config.console:
        handlers.append(logging.StreamHandler(sys.stderr))
    if config.file:
        path = Path(config.file_path).expanduser() if config.file_path else DEFAULT_LOG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(path, maxBytes=MAX_FILE_SIZE, backupCount=BACKUP_COUNT))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


class RelmapLogger(ILogger):
    """
    ILogger over a stdlib logger configured from LoggingConfig.

    Creating a RelmapLogger replaces the handlers a previous one installed
    on the same logger. Handlers added by the application stay.
    """

    def __init__(self, config: LoggingConfig | None = None, name: str = LOGGER_NAME) -> None:
        config = config or LoggingConfig()
        self._logger = logging.getLogger(name)

        handlers = build_handlers(config)
        self._logger.propagate = not handlers
        if not handlers:
            handlers = [logging.NullHandler()]

        with _installed_lock:
            for old in _installed.pop(name, []):
                self._logger.removeHandler(old)
                old.close()
            for handler in handlers:
                self._logger.addHandler(handler)
            _installed[name] = handlers

        self._handlers = handlers
        self.set_level(config.level)

    @property
    def handlers(self) -> list[logging.Handler]:
        return list(self._handlers)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(message, *args, **kwargs)

    def set_level(self, level: str) -> None:
        """Set the level of the logger and of the handlers it installed."""
        value = LEVELS.get(level.lower(), logging.WARNING)
        self._logger.setLevel(value)
        for handler in self._handlers:
            handler.setLevel(value)


class NullLogger(ILogger):
    """Logger used before bootstrap; drops everything."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def set_level(self, level: str) -> None:
        pass
