# src/featurectx/core/logging.py
from __future__ import annotations

import datetime as dt
import logging
import sys
from typing import Callable, Optional

from featurectx.core.config import settings
from featurectx.core.ctx import current_ctx

# Factory in place before configure_logging() swapped ours in
_old_factory: Optional[Callable[..., logging.LogRecord]] = None


def _describe_ctx() -> str:
    flags = current_ctx().as_dict()
    if not flags:
        return "-"
    return ",".join(f"{k}={'on' if v else 'off'}" for k, v in sorted(flags.items()))


def _record_factory(*args, **kwargs):
    """
    Global LogRecord factory that attaches the ambient flag overlay to every
    record, so '%(features)s' works for third-party loggers too.
    """
    rec: logging.LogRecord = _old_factory(*args, **kwargs)
    if not hasattr(rec, "features"):
        rec.__dict__["features"] = _describe_ctx()
    return rec


class _SafeFormatter(logging.Formatter):
    """ISO8601 UTC timestamps and resilience to a missing features field."""
    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "asctime"):
            record.asctime = dt.datetime.now(dt.timezone.utc).isoformat(timespec="seconds")
        if not hasattr(record, "features"):
            record.__dict__["features"] = "-"
        return super().format(record)


def _build_handler() -> logging.Handler:
    h = logging.StreamHandler(sys.stdout)
    h.setFormatter(_SafeFormatter(settings.LOG_FORMAT))
    return h


def configure_logging(level: Optional[str] = None) -> None:
    """
    Opt-in logging bootstrap for applications embedding featurectx.

    Installs the record factory once, adds a stdout handler when the root
    logger has none and sets the root level. Importing featurectx never
    touches the host's logging setup; only this call does.
    """
    global _old_factory
    if _old_factory is None:
        _old_factory = logging.getLogRecordFactory()
        logging.setLogRecordFactory(_record_factory)

    root = logging.getLogger()
    if not root.handlers:
        root.addHandler(_build_handler())
    root.setLevel((level or settings.LOG_LEVEL).upper())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
