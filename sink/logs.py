"""JSON log lines on stdout, through structlog and the stdlib root logger."""

import logging
import sys
from typing import Optional, TextIO

import structlog

_TIME_STAMPER = structlog.processors.TimeStamper(fmt="iso", key="time")
_JSON_RENDERER = structlog.processors.JSONRenderer()

# shared by sink loggers and by records from other libraries (uvicorn)
_PRE_CHAIN = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    _TIME_STAMPER,
]


def configure_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """Route structlog and stdlib records through one JSON handler.

    Fields given as keyword arguments to a structlog logger end up as keys of
    the JSON object, next to ``event``, ``level`` and ``time``.
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_JSON_RENDERER,
            foreign_pre_chain=_PRE_CHAIN,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_PRE_CHAIN,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # loggers stay lazy so structlog.testing.capture_logs can swap processors
        cache_logger_on_first_use=False,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
