"""
Logging infrastructure for maze_lab.

Every module logs through a child of the ``maze_lab`` logger, so one call to
``configure_logging`` sets level, colours and an optional log file for the
whole engine. Algorithms log at DEBUG when a run reaches a terminal state;
the stepping driver logs run and race summaries at INFO.
"""

from __future__ import annotations

import logging
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import ClassVar

import colorlog

ROOT_LOGGER = "maze_lab"
LOG_FORMAT = "%(asctime)s - %(name)-28s - %(levelname)-8s - %(message)s"
DATE_FORMAT = "%H:%M:%S"

LEVEL_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


class LabFormatter(colorlog.ColoredFormatter):
    """
    Formatter for maze_lab records.

    Args:
        use_colors: Colour the whole line by level
        include_location: Append ``[file:line]`` to every record
    """

    def __init__(self, use_colors: bool = False, include_location: bool = False):
        fmt = LOG_FORMAT
        if include_location:
            fmt += " [%(filename)s:%(lineno)d]"
        if use_colors:
            fmt = "%(log_color)s" + fmt
        super().__init__(fmt, datefmt=DATE_FORMAT, log_colors=LEVEL_COLORS, no_color=not use_colors)
        self.use_colors = use_colors
        self.include_location = include_location


class LabLogger:
    """
    Owner of the handlers on the ``maze_lab`` root logger.

    Module loggers carry no handlers of their own and propagate to the root,
    so reconfiguring replaces exactly one console handler and at most one
    file handler.
    """

    _lock: ClassVar[threading.Lock] = threading.Lock()
    _level: ClassVar[int] = logging.WARNING
    _use_colors: ClassVar[bool] = True
    _include_location: ClassVar[bool] = False
    _log_file_path: ClassVar[Path | None] = None
    _configured: ClassVar[bool] = False

    @classmethod
    def configure(
        cls,
        level: str | int = "INFO",
        log_to_file: bool = False,
        log_file_path: str | Path | None = None,
        use_colors: bool = True,
        include_location: bool = False,
    ) -> None:
        """
        Configure logging for the whole engine.

        Args:
            level: Level name or number
            log_to_file: Also write records to a file
            log_file_path: File to write; defaults to ``./logs/maze_lab_<timestamp>.log``
            use_colors: Colour terminal output
            include_location: Append source location to records
        """
        with cls._lock:
            resolved = logging.getLevelName(level.upper()) if isinstance(level, str) else level
            if not isinstance(resolved, int):
                raise ValueError(f"Unknown logging level: {level!r}")
            cls._level = resolved
            cls._use_colors = use_colors
            cls._include_location = include_location

            if not log_to_file:
                cls._log_file_path = None
            elif log_file_path is None:
                stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
                cls._log_file_path = Path.cwd() / "logs" / f"maze_lab_{stamp}.log"
            else:
                cls._log_file_path = Path(log_file_path)
            if cls._log_file_path is not None:
                cls._log_file_path.parent.mkdir(parents=True, exist_ok=True)

            cls._install()

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Logger for ``name``, placed under the ``maze_lab`` hierarchy."""
        if not cls._configured:
            with cls._lock:
                if not cls._configured:
                    cls._install()
        if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
            name = f"{ROOT_LOGGER}.{name}"
        return logging.getLogger(name)

    @classmethod
    def _install(cls) -> None:
        root = logging.getLogger(ROOT_LOGGER)
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        root.setLevel(cls._level)
        root.propagate = False

        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(LabFormatter(use_colors=cls._use_colors, include_location=cls._include_location))
        root.addHandler(console)

        if cls._log_file_path is not None:
            file_handler = logging.FileHandler(cls._log_file_path)
            file_handler.setFormatter(LabFormatter(use_colors=False, include_location=cls._include_location))
            root.addHandler(file_handler)

        cls._configured = True


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Get a maze_lab logger.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        Logger that writes through the engine's handlers
    """
    return LabLogger.get_logger(name)


def configure_logging(**kwargs) -> None:
    """Configure engine logging; see ``LabLogger.configure`` for the keywords."""
    LabLogger.configure(**kwargs)


def configure_development_logging(include_location: bool = True) -> None:
    """DEBUG level, coloured, with source locations: every step outcome becomes visible."""
    configure_logging(level="DEBUG", use_colors=True, include_location=include_location)
    get_logger("maze_lab.development").debug("Development logging enabled")
