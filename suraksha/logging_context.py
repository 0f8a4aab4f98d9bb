"""Run ID logging context for tracing one operator action across modules.

A single CLI invocation (load, mutate, persist, sync) gets one run id.
``load_config`` installs ``RunIdFilter`` on the root handlers and puts
``[%(run_id)s]`` in the log format, so every module's plain
``logging.getLogger(__name__)`` lines carry it.

Usage:
    from suraksha.logging_context import new_run_id, set_run_id

    set_run_id(new_run_id())
    logger.info("Visit logged")  # ... [RUN-1a2b3c] [suraksha...] INFO: Visit logged
"""

import logging
import uuid
from contextvars import ContextVar

_run_id: ContextVar[str] = ContextVar("run_id", default="NO_RUN_ID")


def new_run_id() -> str:
    """Generate a short run identifier."""
    return f"RUN-{uuid.uuid4().hex[:6]}"


def set_run_id(run_id: str) -> None:
    """Set the correlation ID for the current context."""
    _run_id.set(run_id)


class RunIdFilter(logging.Filter):
    """Injects run_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _run_id.get()  # type: ignore[attr-defined]
        return True


def install_run_id_filter(handler: logging.Handler) -> logging.Handler:
    """Attach a RunIdFilter to ``handler`` once.

    Handler-level filters see records propagated from every child logger,
    so formatters on the handler can use ``%(run_id)s``.
    """
    if not any(isinstance(f, RunIdFilter) for f in handler.filters):
        handler.addFilter(RunIdFilter())
    return handler
