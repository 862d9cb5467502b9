"""SQLite-backed write-context for match cells.

Provides CellRepository, which implements the ``WriteContext`` protocol
over the ``cells`` table and stores failed lines in ``quarantine``.
Each cell UPSERT uses INSERT ... ON CONFLICT DO UPDATE SET (not INSERT OR
REPLACE) so re-importing a match at the same version updates in place.
"""

import json
import sqlite3
from datetime import datetime, timezone
from typing import Any, Hashable

from pydantic import BaseModel

UPSERT_CELL = """
    INSERT INTO cells (
        entity_id, family, qualifier, version, value, written_at
    ) VALUES (
        :entity_id, :family, :qualifier, :version, :value, :written_at
    )
    ON CONFLICT(entity_id, family, qualifier, version) DO UPDATE SET
        value      = excluded.value,
        written_at = excluded.written_at
"""

INSERT_QUARANTINE = """
    INSERT INTO quarantine (
        source_line, error_type, error_details, quarantined_at, resolved
    ) VALUES (
        :source_line, :error_type, :error_details, :quarantined_at, :resolved
    )
"""


def encode_value(value: Any) -> str:
    """Serialize a cell value to JSON text."""
    if isinstance(value, BaseModel):
        return value.model_dump_json()
    return json.dumps(value)


class CellRepository:
    """Versioned cell writes on a SQLite connection.

    Receives a raw ``sqlite3.Connection`` (usually from ``open_store``) so
    tests can pass any connection, including in-memory databases.

    Write methods use ``with self.conn:`` for automatic commit on
    success / rollback on exception.  Exceptions (IntegrityError,
    OperationalError) are NOT caught -- they propagate to callers.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def get_entity_id(self, key: str) -> Hashable:
        """Row keys are stored as-is."""
        return key

    def put(
        self,
        entity_id: Hashable,
        family: str,
        column: str,
        timestamp: int,
        value: Any,
    ) -> None:
        """Insert or update one cell at version ``timestamp``."""
        with self.conn:
            self.conn.execute(
                UPSERT_CELL,
                {
                    "entity_id": str(entity_id),
                    "family": family,
                    "qualifier": column,
                    "version": timestamp,
                    "value": encode_value(value),
                    "written_at": datetime.now(timezone.utc).isoformat(),
                },
            )

    def insert_quarantine(self, record: dict) -> None:
        """Store a diagnostic row for a line that failed to import."""
        with self.conn:
            self.conn.execute(INSERT_QUARANTINE, record)

    def count_entities(self) -> int:
        """Return the number of distinct entities with at least one cell."""
        return self.conn.execute(
            "SELECT COUNT(DISTINCT entity_id) FROM cells"
        ).fetchone()[0]

    def count_quarantined(self) -> int:
        """Return the number of unresolved quarantine rows."""
        return self.conn.execute(
            "SELECT COUNT(*) FROM quarantine WHERE resolved = 0"
        ).fetchone()[0]
