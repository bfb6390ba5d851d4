"""Diagnostic logging behind the ``ENABLE_TRACING`` toggle.

Module loggers are plain stdlib loggers under ``cag``; when tracing is on,
records are rendered by structlog into an hourly-rotating file. Nothing is
ever written to the terminal, which belongs to the pager.
"""

from __future__ import annotations

import contextlib
import logging
import logging.handlers
from collections.abc import Iterator

import structlog

from .config import PagerConfig

ROOT_LOGGER_NAME = "cag"

logger = logging.getLogger(__name__)


def build_file_handler(config: PagerConfig) -> logging.Handler:
    """Create the rotating file handler that renders records with structlog."""
    config.log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.TimedRotatingFileHandler(
        config.log_path,
        when="H",
        encoding="utf-8",
        delay=True,
    )
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=False),
            foreign_pre_chain=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.format_exc_info,
            ],
        )
    )
    handler.setLevel(logging.DEBUG)
    return handler


@contextlib.contextmanager
def tracing(config: PagerConfig) -> Iterator[logging.Handler | None]:
    """Install the trace file handler for the duration of the block.

    Yields ``None`` when tracing is disabled. The handler is always detached
    and closed on exit, including error paths.
    """
    if not config.tracing_enabled:
        yield None
        return

    root = logging.getLogger(ROOT_LOGGER_NAME)
    handler = build_file_handler(config)
    previous_level = root.level
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    logger.debug("Tracing enabled, writing to %s", config.log_path)
    try:
        yield handler
    finally:
        root.removeHandler(handler)
        root.setLevel(previous_level)
        handler.close()
