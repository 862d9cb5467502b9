"""Sequential execution engine for newline-delimited match files.

Reads one or more input files (plain or gzip), hands every non-blank line
to ``MatchBulkImporter.produce`` as raw bytes together with its byte
offset, and applies the run's failure policy:

* ``fail`` -- the first failure propagates and aborts the run.
* ``skip`` -- the failure is counted, logged with file and offset, and
  the next line is processed.

The importer already logged the raw line and failure description before
the exception reaches this module.
"""

import gzip
import logging
import time
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator

from dotaloader.config import LoaderConfig
from dotaloader.context import WriteContext
from dotaloader.importer import MatchBulkImporter

logger = logging.getLogger(__name__)


def _open_binary(path: Path) -> BinaryIO:
    if path.suffix == ".gz":
        return gzip.open(path, "rb")
    return path.open("rb")


def iter_lines(path: str | Path) -> Iterator[tuple[int, bytes]]:
    """Yield ``(byte_offset, raw_line)`` for every line in ``path``.

    Offsets are positions in the (decompressed) stream.  Lines are not
    decoded here, so a bad byte sequence fails only its own line.
    Trailing newlines are stripped; blank lines are yielded too.
    """
    path = Path(path)
    offset = 0
    with _open_binary(path) as f:
        for raw in f:
            yield offset, raw.rstrip(b"\r\n")
            offset += len(raw)


class ImportStats:
    """Running counts for an import run."""

    def __init__(self) -> None:
        self.processed: int = 0
        self.imported: int = 0
        self.failed: int = 0
        self.skipped_blank: int = 0
        self._start_time: float = time.monotonic()

    def summary(self) -> dict:
        """Return a machine-readable summary dict."""
        return {
            "processed": self.processed,
            "imported": self.imported,
            "failed": self.failed,
            "skipped_blank": self.skipped_blank,
            "wall_time": time.monotonic() - self._start_time,
        }

    def format_summary(self) -> str:
        """Return a human-readable multiline summary string."""
        wall = time.monotonic() - self._start_time
        minutes, seconds = divmod(wall, 60)
        lines = [
            "--- Import Summary ---",
            f"  Processed : {self.processed}",
            f"  Imported  : {self.imported}",
            f"  Failed    : {self.failed}",
            f"  Blank     : {self.skipped_blank}",
            f"  Wall time : {int(minutes)}m {seconds:.1f}s",
        ]
        return "\n".join(lines)


def run_import(
    paths: Iterable[str | Path],
    importer: MatchBulkImporter,
    context: WriteContext,
    config: LoaderConfig,
) -> ImportStats:
    """Import every line of every file in ``paths``.

    Blank lines are counted in ``skipped_blank`` and never reach the
    importer.

    Returns:
        ImportStats for the run.

    Raises:
        Exception: The first line failure, when ``config.on_error`` is
            ``"fail"``.
    """
    stats = ImportStats()

    for path in paths:
        logger.info("Importing %s", path)
        for offset, raw in iter_lines(path):
            if not raw.strip():
                stats.skipped_blank += 1
                continue

            stats.processed += 1
            try:
                importer.produce(offset, raw, context)
            except Exception as e:
                stats.failed += 1
                if config.on_error == "fail":
                    logger.error(
                        "Aborting at %s offset %d: %s", path, offset, e
                    )
                    raise
                logger.warning("Skipped %s offset %d: %s", path, offset, e)
            else:
                stats.imported += 1

            if stats.processed % config.progress_interval == 0:
                logger.info(
                    "[%d] imported %d, failed %d",
                    stats.processed, stats.imported, stats.failed,
                )

    return stats
