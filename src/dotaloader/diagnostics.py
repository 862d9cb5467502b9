"""Best-effort diagnostics for lines that fail to import.

A failing line is one among millions, so the raw text and the failure
description are logged (and optionally quarantined) at the point of
failure.  Recording is best-effort: if it fails, that secondary error is
logged at DEBUG and dropped, and the original exception is re-raised
unchanged.

Usage::

    from dotaloader.diagnostics import recorded_failure

    with recorded_failure(line, quarantine=repo.insert_quarantine):
        record = ...  # any exception here is logged, then re-raised
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Iterator, Optional

logger = logging.getLogger(__name__)

QuarantineSink = Callable[[dict], None]


def build_quarantine_record(line: str, exc: BaseException) -> dict:
    """Build the diagnostic row stored for a failed line."""
    return {
        "source_line": line,
        "error_type": type(exc).__name__,
        "error_details": str(exc),
        "quarantined_at": datetime.now(timezone.utc).isoformat(),
        "resolved": 0,
    }


def record_failure(
    line: str,
    exc: BaseException,
    quarantine: Optional[QuarantineSink] = None,
) -> None:
    """Log (and optionally quarantine) a failed line. Never raises."""
    try:
        logger.error(
            "Failed to import line\nLine:\n%s\nMessage:\n%r", line, exc
        )
        if quarantine is not None:
            quarantine(build_quarantine_record(line, exc))
    except Exception as secondary:
        logger.debug("Error recording import failure: %s", secondary)


@contextmanager
def recorded_failure(
    line: str, quarantine: Optional[QuarantineSink] = None
) -> Iterator[None]:
    """Record any exception raised in the block, then re-raise it."""
    try:
        yield
    except Exception as exc:
        record_failure(line, exc, quarantine)
        raise
