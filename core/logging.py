"""
Structured Logging

structlog configuration shared by the API process and pipeline runs.

Every event carries the service name and the season being ingested. Events
emitted while a pipeline runs also carry the pipeline name and run id, so
the registry and extractor lines of one run can be grouped without passing
a logger around. Requests additionally get a correlation id.
"""

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Optional

import structlog


correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

# Third-party loggers that log every HTTP request at DEBUG/INFO
HTTP_LIBRARY_LOGGERS = ("urllib3", "requests", "charset_normalizer")


def get_correlation_id() -> str:
    return correlation_id_var.get()


def set_correlation_id(cid: str) -> None:
    correlation_id_var.set(cid)


def add_correlation_id(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Processor: copy the request's correlation id onto the event."""
    cid = correlation_id_var.get()
    if cid:
        event_dict["correlation_id"] = cid
    return event_dict


def add_static_fields(**fields: Any) -> structlog.typing.Processor:
    """
    Processor factory for fields that are fixed for the life of the process
    (service name, season). Fields already set on the event win.
    """

    def processor(
        logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def level_number(log_level: str) -> int:
    """Numeric level for a name such as "info"; raises ValueError if unknown."""
    value = logging.getLevelName(log_level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {log_level}")
    return value


def quiet_http_loggers(level: int = logging.WARNING) -> None:
    for name in HTTP_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(level)


def _renderer(json_format: bool) -> list[structlog.typing.Processor]:
    if json_format:
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stdout.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        ),
    ]


def setup_logging(
    log_level: str = "INFO",
    json_format: bool = True,
    service_name: str = "strike-data-platform",
    season: Optional[int] = None,
) -> None:
    """
    Configure structlog for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: JSON lines if True, coloured console output otherwise
        service_name: Added to every event as "service"
        season: Added to every event as "season" when given
    """
    level = level_number(log_level)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    quiet_http_loggers()

    static = {"service": service_name}
    if season is not None:
        static["season"] = season

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_static_fields(**static),
        add_correlation_id,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=processors + _renderer(json_format),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


@contextmanager
def pipeline_log_scope(pipeline: str, run_id: Any) -> Iterator[None]:
    """
    Bind pipeline and run_id to every event logged inside the block,
    including events from loggers created elsewhere (registry, extractors).

    Pipelines run in worker threads; contextvars are per thread, so the
    binding does not leak into other runs.
    """
    with structlog.contextvars.bound_contextvars(pipeline=pipeline, run_id=str(run_id)):
        yield


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """
    Get a logger, optionally named by component.

    Example:
        log = get_logger("extractor")
        log.info("page_fetched", slug="runs-per-game")
    """
    return structlog.get_logger(name)
