"""Logging for kube-score.

Everything logs under the ``kube_score`` logger. Diagnostics go to stderr so
that rendered scorecards on stdout stay machine-readable.
"""

import logging
import sys
from typing import Any

ROOT_LOGGER = "kube_score"


class StructuredFormatter(logging.Formatter):
    """Formatter that appends ``key=value`` context, sorted by key."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = getattr(record, "extra_fields", None)
        if not fields:
            return message

        pairs = []
        for key in sorted(fields):
            value = str(fields[key])
            if " " in value:
                value = f'"{value}"'
            pairs.append(f"{key}={value}")
        return f"{message} {' '.join(pairs)}"


class StderrHandler(logging.StreamHandler):
    """Stream handler that always writes to the current ``sys.stderr``."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


def level_for(verbose: int = 0, quiet: bool = False) -> int:
    """Map CLI verbosity flags to a log level.

    Quiet wins over verbose. One ``-v`` shows unknown kinds and other
    informational notes, two or more add debug output.
    """
    if quiet:
        return logging.ERROR
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(level: int | str = logging.WARNING, structured: bool = False) -> None:
    """Configure the ``kube_score`` logger.

    Args:
        level: Log level, as a number or a name such as "DEBUG"
        structured: Prefix records with time and logger name
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    if structured:
        formatter = StructuredFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    else:
        formatter = StructuredFormatter("%(levelname)s: %(message)s")

    handler = StderrHandler()
    handler.setFormatter(formatter)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger below ``kube_score``."""
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


class ContextLogger(logging.LoggerAdapter):
    """Adapter that attaches fixed context, plus any ``extra`` given per call."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        fields = dict(self.extra)
        fields.update(extra.pop("extra_fields", {}))
        extra["extra_fields"] = fields
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger_with_context(name: str, **context: Any) -> ContextLogger:
    """Get a logger that reports ``context`` with every record.

    Example:
        log = get_logger_with_context("engine", check="pod-probes", resource="Pod/web")
        log.warning("Check could not be evaluated")
        # WARNING: Check could not be evaluated check=pod-probes resource=Pod/web
    """
    return ContextLogger(get_logger(name), context)
