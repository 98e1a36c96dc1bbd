"""Structured logging for extraction runs.

Every record carries the extraction run id and the current pipeline phase
(``select``, ``extract``, ``report``). The project verbosity level picks both
the log level and how much of each record is printed: low levels get a short
console line, levels from 3 up add the timestamp and logger name.
"""

from __future__ import annotations

import contextvars
import logging
import uuid
from contextlib import contextmanager
from typing import Iterator

PHASES = ("select", "extract", "report")

_RUN_ID_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "run_id", default="-"
)
_PHASE_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "phase", default="-"
)

LOG_FORMAT = "run_id=%(run_id)s | phase=%(phase)s | %(levelname)s | %(message)s"
DETAILED_LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | run_id=%(run_id)s | phase=%(phase)s | "
    "%(name)s | %(message)s"
)
DETAILED_FORMAT_VERBOSITY = 3


class _RunContextFilter(logging.Filter):
    """Stamp the run id and phase onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _RUN_ID_VAR.get("-")
        record.phase = _PHASE_VAR.get("-")
        return True


def verbosity_to_log_level(verbosity: int) -> int:
    """Map a project verbosity level (0-5) to a logging level.

    0 only shows warnings, 1-2 add progress and summaries, 3 and above
    include per-file debug detail.
    """
    if verbosity <= 0:
        return logging.WARNING
    if verbosity <= 2:
        return logging.INFO
    return logging.DEBUG


def log_format_for_verbosity(verbosity: int) -> str:
    if verbosity >= DETAILED_FORMAT_VERBOSITY:
        return DETAILED_LOG_FORMAT
    return LOG_FORMAT


def configure_structured_logging(verbosity: int = 1) -> int:
    """Configure root logging for a project verbosity level.

    Installs the run/phase filter on every root handler, creating a stderr
    handler when none exists.

    Returns:
        The logging level applied to the root logger.
    """
    level = verbosity_to_log_level(verbosity)
    fmt = log_format_for_verbosity(verbosity)

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=fmt)
    else:
        root_logger.setLevel(level)
        formatter = logging.Formatter(fmt)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)

    for handler in root_logger.handlers:
        if not any(isinstance(f, _RunContextFilter) for f in handler.filters):
            handler.addFilter(_RunContextFilter())
    return level


def set_run_id(run_id: str | None = None) -> str:
    """Set or generate the extraction run id (also the report file stem)."""
    value = run_id or uuid.uuid4().hex[:12]
    _RUN_ID_VAR.set(value)
    return value


def get_run_id() -> str:
    return _RUN_ID_VAR.get("-")


def get_phase() -> str:
    return _PHASE_VAR.get("-")


@contextmanager
def phase_scope(phase: str) -> Iterator[None]:
    """Run a block under one of :data:`PHASES`, restoring the previous phase.

    Raises:
        ValueError: If ``phase`` is not a pipeline phase.
    """
    if phase not in PHASES:
        raise ValueError(f"Unknown phase {phase!r}. Expected one of: {PHASES}")
    token = _PHASE_VAR.set(phase)
    try:
        yield
    finally:
        _PHASE_VAR.reset(token)
