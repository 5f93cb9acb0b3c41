"""Unified structlog + stdlib JSON logging configuration.

Both ``structlog.get_logger()`` and ``logging.getLogger(__name__)`` calls
render through the same processor chain, as JSON lines in production or
coloured console output in development.  Event keys that carry contact
identifiers are masked before rendering.
"""

import logging
import sys

import structlog

_MASKED_KEYS = frozenset({"email", "phone", "phone_number", "phoneNumber"})


def mask_identifiers(
    logger: object, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """Replace email/phone values with a short masked form."""
    for key in _MASKED_KEYS & event_dict.keys():
        value = event_dict[key]
        if value:
            text = str(value)
            event_dict[key] = text[:2] + "***" if len(text) > 4 else "***"
    return event_dict


def configure_logging(json_output: bool = True, log_level: str = "INFO") -> None:
    """Configure unified logging for both structlog and stdlib.

    Args:
        json_output: If ``True``, render logs as JSON lines. If ``False``,
            use structlog's coloured console renderer for development.
        log_level: Root log level (``"DEBUG"``, ``"INFO"``, ``"WARNING"``, etc.).
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        mask_identifiers,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper()))

    # SQL echo goes through the engine's own flag; keep pool chatter quiet.
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
