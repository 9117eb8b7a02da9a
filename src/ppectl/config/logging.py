"""structlog setup for ppectl.

Service modules log through stdlib ``logging.getLogger(__name__)``; the
records are rendered by structlog's ``ProcessorFormatter`` so they share
one format with native structlog loggers. Everything goes to stderr,
keeping stdout for menu text and rendered results.
"""

from __future__ import annotations

import logging
import sys

import structlog

PACKAGE_LOGGER = "ppectl"

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def package_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """DEBUG when verbose, ERROR when quiet, WARNING otherwise."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
) -> None:
    """Route ppectl logs to stderr as console lines or JSON objects.

    Args:
        verbose: Show DEBUG records from ``ppectl.*`` (store and service traces).
        quiet: Show only ERROR records. Ignored when *verbose* is set.
        log_json: One JSON object per record instead of console lines.
    """
    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(package_level(verbose=verbose, quiet=quiet))
