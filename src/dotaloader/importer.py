"""Host adapter between an execution engine and the extractor/emitter.

The execution engine calls ``MatchBulkImporter.produce`` once per input
line, possibly from many threads at once.  The importer holds no
per-line state.
"""

from typing import Optional

from dotaloader.context import WriteContext
from dotaloader.diagnostics import QuarantineSink, recorded_failure
from dotaloader.emitter import DEFAULT_FAMILY, Cell, emit_match, match_cells
from dotaloader.exceptions import MalformedLineError
from dotaloader.extractor import parse_match


def decode_line(
    raw: bytes, quarantine: Optional[QuarantineSink] = None
) -> str:
    """Decode one raw input line as UTF-8.

    An undecodable line is recorded with its bad bytes replaced, then
    fails with ``MalformedLineError``.
    """
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        readable = raw.decode("utf-8", errors="replace")
        with recorded_failure(readable, quarantine):
            raise MalformedLineError(f"Line is not valid UTF-8: {e}") from e


def transform_line(line: str) -> list[Cell]:
    """Pure transformation of one raw line into its storage cells."""
    return match_cells(parse_match(line))


class MatchBulkImporter:
    """Imports match-details JSON lines into a write-context.

    Args:
        family: Column family every cell is written to.
        quarantine: Optional sink receiving a diagnostic dict for each
            failed line.
    """

    def __init__(
        self,
        family: str = DEFAULT_FAMILY,
        quarantine: Optional[QuarantineSink] = None,
    ) -> None:
        self.family = family
        self.quarantine = quarantine

    def produce(
        self, position: int, line: str | bytes, context: WriteContext
    ) -> None:
        """Parse ``line`` and write its cells to ``context``.

        ``position`` is the byte offset of the line in its input split;
        it only identifies the line to the caller.  ``line`` may be raw
        bytes straight from the input file.  Every failure is recorded
        and re-raised.
        """
        if isinstance(line, bytes):
            line = decode_line(line, self.quarantine)
        record = parse_match(line, quarantine=self.quarantine)
        with recorded_failure(line, self.quarantine):
            emit_match(record, context, self.family)
