from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Optional


# Context variables for enriched logging
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
viewer_var: ContextVar[Optional[str]] = ContextVar("viewer", default=None)
org_var: ContextVar[Optional[str]] = ContextVar("org", default=None)


class LoggingContextFilter(logging.Filter):
    """
    Logging filter that injects correlation_id, viewer and the requested
    organization from contextvars into each log record.

    Anonymous requests, non-org routes and records emitted outside a request
    get placeholders.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        cid = correlation_id_var.get()
        viewer = viewer_var.get()
        setattr(record, "correlation_id", cid or "-")
        setattr(record, "viewer", viewer or "-")
        setattr(record, "org", org_var.get() or "-")
        return True


# PUBLIC_INTERFACE
def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging with a structured format and context filter."""
    handler = logging.StreamHandler(stream=sys.stdout)
    fmt = (
        "%(asctime)s | %(levelname)s | %(name)s | cid=%(correlation_id)s | viewer=%(viewer)s | org=%(org)s | "
        "%(message)s"
    )
    formatter = logging.Formatter(fmt=fmt)
    handler.setFormatter(formatter)
    handler.addFilter(LoggingContextFilter())

    root = logging.getLogger()
    # Remove pre-existing default handlers configured elsewhere (e.g., basicConfig)
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(level)
