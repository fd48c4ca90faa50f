"""
channelgate.logging_setup - structlog Configuration
=====================================================

Every component logs through ``structlog.get_logger(component=...)``. That
proxy resolves on each event, so a logger created before configure_logging()
runs still honors the configured level and stream. This module decides
where those events go.

Log events are written to stderr so they never mix with whatever a caller
might capture from stdout. The default level (WARNING) keeps a normal run
silent: the CI log then shows only the test commands' own output. At INFO
each command is traced before it runs, like ``set -x`` in a shell script.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

import structlog


def configure_logging(
    level: str = "WARNING",
    log_format: str = "console",
    stream: Optional[IO[str]] = None,
) -> None:
    """Configure structlog output.

    Args:
        level: Minimum level name (as validated by GateConfig.log_level).
        log_format: "json" for JSON lines, anything else for console lines.
        stream: Destination for log lines. Defaults to sys.stderr.
    """
    renderer: structlog.typing.Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper())),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )
