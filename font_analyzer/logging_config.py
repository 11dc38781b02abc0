# ─────────────────────────────────────────────────────────────────────────────
# Logging Configuration — structlog on top of stdlib logging
# ─────────────────────────────────────────────────────────────────────────────


import logging
import sys

import structlog


def configure_logging(log_level: str = "INFO", json_output: bool = True) -> None:
    """Configure structlog for structured logging.

    JSON output emits one parseable object per line (server deployments).
    Console output is for local development and the CLI. Both the client
    and the server log through the same root handler, so uvicorn and httpx
    records get the same formatting.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # httpx logs every request at INFO; the client logs its own attempts.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def truncate_title(title: str, limit: int = 50) -> str:
    """Shorten a title for log fields."""
    if len(title) <= limit:
        return title
    return title[:limit] + "..."
