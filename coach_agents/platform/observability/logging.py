"""Structured logging for agent runs, built on structlog.

Records from both structlog and stdlib loggers go through one processor
chain and are written to stderr, leaving stdout to the CLI's results. Every
entry made while a run is active carries that run's ``run_id``.
"""

import logging
import sys
from contextvars import ContextVar

import structlog

# Set by the driver for the duration of a run; visible to every task it spawns
run_id_ctx: ContextVar[str | None] = ContextVar("run_id", default=None)

# Third-party loggers that are chatty at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "LiteLLM", "openai")


def add_run_id(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    """Processor that tags an entry with the active run's ID."""
    if (run_id := run_id_ctx.get()) is not None:
        event_dict.setdefault("run_id", run_id)
    return event_dict


def _processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_run_id,
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(log_level: str, json_output: bool = True) -> None:
    """Route structlog and stdlib logging through a single stderr handler.

    Args:
        log_level: Root logging level (INFO, DEBUG, etc.)
        json_output: True for JSON lines, False for colored console output
    """
    processors = _processors()
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers[:] = [handler]
    root_logger.setLevel(log_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, typically for ``__name__``."""
    return structlog.get_logger(name)
