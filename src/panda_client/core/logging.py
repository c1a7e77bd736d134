"""Structured logging configuration for the Panda client.

Events are emitted through structlog and routed into the stdlib ``logging``
tree, so applications can attach their own handlers next to the ones
installed by ``configure_logging``.
"""

import logging
import sys
from os import PathLike
from typing import Optional, Union

import structlog

# Applied to structlog events and to records from plain stdlib loggers alike.
_SHARED_PROCESSORS: list = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]

# Root handlers installed by the last configure_logging call.
_installed_handlers: list[logging.Handler] = []


def _formatter(json_format: bool, colors: bool) -> structlog.stdlib.ProcessorFormatter:
    if json_format:
        renderer = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderer = [structlog.dev.ConsoleRenderer(colors=colors)]
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_SHARED_PROCESSORS,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderer],
    )


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_file: Optional[Union[str, PathLike]] = None,
) -> None:
    """Configure structured logging for applications embedding the client.

    The library itself never calls this; it only emits events through
    ``get_logger``. Calling it again replaces the handlers it installed
    on the root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Whether to output logs in JSON format
        log_file: Optional file path; events are written there as well as
            to stdout, never with color codes
    """
    numeric_level = getattr(logging, level.upper())

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(_formatter(json_format, colors=sys.stdout.isatty()))
    handlers: list[logging.Handler] = [stream_handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(_formatter(json_format, colors=False))
        handlers.append(file_handler)

    root = logging.getLogger()
    for handler in _installed_handlers:
        root.removeHandler(handler)
        handler.close()
    _installed_handlers[:] = handlers
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(numeric_level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically module name)
    """
    return structlog.get_logger(name)
