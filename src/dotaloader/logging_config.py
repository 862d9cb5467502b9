"""Logging configuration for bulk import runs.

Three handlers on the root logger:

* console -- INFO+ (or the requested level), short timestamps
* run log -- DEBUG+ for everything, with logger names
* failures log -- only the records emitted by ``dotaloader.diagnostics``,
  i.e. the raw text of every line that failed, for offline diagnosis
"""

import logging
from datetime import datetime
from pathlib import Path

FILE_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"


class _DiagnosticsFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.name == "dotaloader.diagnostics" and record.levelno >= logging.ERROR


def setup_logging(
    data_dir: str = "data", console_level: int = logging.INFO
) -> Path:
    """Configure console, run-log and failures-log handlers.

    Existing root handlers are cleared first so repeated calls (e.g. in
    tests) do not duplicate output.

    Args:
        data_dir: Base data directory. ``logs/`` is created inside it.
        console_level: Minimum level for console output.

    Returns:
        Path to the run log. The failures log sits beside it as
        ``failures-<timestamp>.log``.
    """
    log_dir = Path(data_dir) / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d-%H%M%S")
    run_log = log_dir / f"run-{timestamp}.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-5s %(message)s", datefmt="%H:%M:%S")
    )

    run_handler = logging.FileHandler(str(run_log), encoding="utf-8")
    run_handler.setLevel(logging.DEBUG)
    run_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    # Opened lazily so clean runs leave no empty failures file
    failures = logging.FileHandler(
        str(log_dir / f"failures-{timestamp}.log"), encoding="utf-8", delay=True
    )
    failures.addFilter(_DiagnosticsFilter())
    failures.setFormatter(logging.Formatter(FILE_FORMAT))

    for handler in (console, run_handler, failures):
        root.addHandler(handler)

    return run_log
