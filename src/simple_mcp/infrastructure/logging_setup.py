"""Logging configuration with per-request trace IDs.

Library code only ever does ``logger = logging.getLogger(__name__)``.  The
application (CLI, MCP server) calls :func:`setup_logging` once at startup.

Every record carries a ``trid`` attribute: the trace ID bound by
:func:`trace_context` for the current task or thread, or ``-`` outside one.
Trace IDs live in a ``ContextVar`` so concurrent asyncio tasks keep their own::

    with trace_context() as trid:
        logger.info("handling hello_world")   # ... trid=Xy3_k9... handling hello_world
"""

from __future__ import annotations

import logging
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import IO, Iterator, Optional

from simple_mcp.config.constants import DEBUG_ENVS, LOG_DATE_FORMAT, LOG_FORMAT, TRACE_ID_LENGTH
from simple_mcp.domain.ids import generate_random_id

_NO_TRACE_ID = "-"

_trace_id: ContextVar[Optional[str]] = ContextVar("simple_mcp_trace_id", default=None)


def get_trace_id() -> Optional[str]:
    """Return the trace ID bound to the current context, if any."""
    return _trace_id.get()


@contextmanager
def trace_context(trace_id: Optional[str] = None) -> Iterator[str]:
    """Bind ``trace_id`` (or a fresh random one) for the duration of the block."""
    trid = trace_id or generate_random_id(TRACE_ID_LENGTH)
    token = _trace_id.set(trid)
    try:
        yield trid
    finally:
        _trace_id.reset(token)


class TraceIdFilter(logging.Filter):
    """Attach the current trace ID to every record as ``record.trid``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.trid = _trace_id.get() or _NO_TRACE_ID
        return True


def _utc_formatter() -> logging.Formatter:
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    formatter.converter = time.gmtime
    return formatter


def level_for_env(env: str) -> int:
    return logging.DEBUG if env in DEBUG_ENVS else logging.INFO


def setup_logging(env: str, *, verbose: bool = False, stream: Optional[IO[str]] = None) -> None:
    """Configure the root logger for the given environment.

    Logs go to stderr by default: over the stdio transport stdout belongs to
    the MCP protocol.  Safe to call more than once; existing handlers are
    replaced.
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(_utc_formatter())
    handler.addFilter(TraceIdFilter())
    logging.basicConfig(
        level=logging.DEBUG if verbose else level_for_env(env),
        handlers=[handler],
        force=True,
    )
    # httpx logs every request at INFO; keep it quiet unless debugging.
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
