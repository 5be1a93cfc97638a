"""structlog setup shared by the API server and the extraction CLI.

Every record, whether it comes from a structlog logger or from a
third-party library through stdlib ``logging``, runs through one processor
chain:

* request-scoped bindings from :func:`extraction_context`
  (``extraction_id``, ``url``);
* :func:`redact_credentials`, which masks vendor keys that travel in query
  strings (``apikey=``, ``client_id=``) before anything is rendered;
* log level, ISO timestamp, then a console renderer or, with
  ``APP_ENV=production`` or ``json_output=True``, a JSON renderer.
"""

import logging
import os
import re
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TextIO

import structlog

# Query parameters that carry vendor credentials.
_CREDENTIAL_PARAM = re.compile(
    r"(?i)\b(apikey|api_key|client_id|client_secret|token)=([^&\s\"']+)"
)
_MASK = "***"

# Third-party loggers that would otherwise log every vendor call at INFO.
_QUIET_LOGGERS = ("httpx", "httpcore")


def redact_credentials(
    _logger: Any, _method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Mask credential query parameters in every string value of a record."""
    for key, value in event_dict.items():
        if isinstance(value, str) and "=" in value:
            event_dict[key] = _CREDENTIAL_PARAM.sub(rf"\1={_MASK}", value)
    return event_dict


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> structlog.BoundLogger:
    """Configure structlog and route stdlib logging through it.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR).
        json_output: Force the JSON renderer regardless of ``APP_ENV``.
        stream: Destination for all output.  The server logs to stdout; the
            CLI passes stderr so its stdout carries only the draft.

    Returns:
        The root structlog logger.
    """
    use_json = json_output or os.environ.get("APP_ENV", "development") == "production"
    out = stream or sys.stdout
    level = log_level.upper()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        redact_credentials,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    renderer: structlog.types.Processor
    if use_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=out.isatty())

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=out),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(out)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *shared_processors,
                renderer,
            ],
        )
    )
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return structlog.get_logger()


@contextmanager
def extraction_context(url: str) -> Iterator[str]:
    """Bind a fresh ``extraction_id`` and the submitted *url* for one request.

    Yields the id.  Bindings are removed on exit, including on error.
    """
    extraction_id = uuid.uuid4().hex[:12]
    with structlog.contextvars.bound_contextvars(extraction_id=extraction_id, url=url):
        yield extraction_id


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a logger bound with *name*, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(logger_name=name)
