"""
Structured logging configuration for lin.

Uses structlog so that every log entry is an event name plus key/value
context, rendered as coloured console output or as JSON lines.

Setup:
    Call ``configure_logging()`` once at process startup.  Every module
    then uses::

        import structlog
        logger = structlog.get_logger()

        logger.info("refresh_completed", issues=12, generation=3)

The dashboard owns the terminal while it runs, so ``lin`` passes a
``log_file`` and nothing is written to stderr until the TUI has exited.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog


def configure_logging(
    *,
    level: str = "INFO",
    json_output: bool = False,
    log_file: Path | str | None = None,
) -> None:
    """
    Configure structlog + stdlib logging for the process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).
        json_output: If True, emit JSON lines instead of console output.
        log_file: If given, log to this file instead of stderr.

    Calling it again is safe: the root logger never gets a second handler
    of the same kind.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=log_file is None and sys.stderr.isatty(),
        )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler: logging.Handler
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    # Swap out any handler we installed earlier (e.g. stderr -> file)
    for existing in list(root.handlers):
        if isinstance(getattr(existing, "formatter", None), structlog.stdlib.ProcessorFormatter):
            root.removeHandler(existing)
            existing.close()
    root.addHandler(handler)

    root.setLevel(log_level)

    # Suppress noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
