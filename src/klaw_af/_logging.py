"""Structured logging for klaw-af.

Engine events go through structlog loggers that hand their event dicts to the
stdlib `klaw_af` logger hierarchy. Nothing is emitted until either the
application configures stdlib logging itself, or `configure_logging` (also
reached through `klaw_af.init(log_level=...)`) attaches a structured handler
to the `klaw_af` logger. The root logger and the global structlog
configuration are never touched, so the host application keeps its own setup.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Any, Final

import structlog

__all__ = [
    'LOGGER_NAME',
    'configure_logging',
    'get_logger',
]

LOGGER_NAME: Final = 'klaw_af'

_handler: logging.Handler | None = None


def _event_processors() -> list[Any]:
    """Processor chain applied to events logged through `get_logger`."""
    return [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]


def _formatter(json_output: bool) -> structlog.stdlib.ProcessorFormatter:
    # plain stdlib records under klaw_af get the same fields as structlog events
    foreign = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.stdlib.ExtraAdder(),
    ]
    if json_output:
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=foreign,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Attach a structured handler to the `klaw_af` logger.

    Calling it again replaces the handler installed by the previous call.
    Records stop propagating to the root logger, so engine events are not
    printed twice by an application-level handler.

    Args:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
        json_output: If True, emit JSON lines. If False, use console output.
        stream: Where to write. Defaults to sys.stderr.

    Returns:
        The installed handler.
    """
    global _handler

    package_logger = logging.getLogger(LOGGER_NAME)
    if _handler is not None:
        package_logger.removeHandler(_handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(_formatter(json_output))
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    package_logger.propagate = False
    _handler = handler
    return handler


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger bound to the stdlib logger `name`.

    Level filtering is left to stdlib logging, so the logger is silent until
    its stdlib counterpart is enabled for the level.

    Args:
        name: Logger name, normally a module's __name__.

    Returns:
        A structlog BoundLogger.
    """
    return structlog.wrap_logger(
        logging.getLogger(name or LOGGER_NAME),
        processors=_event_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
