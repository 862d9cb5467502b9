"""Storage write-context boundary.

The write-context is the storage collaborator's API for submitting
versioned, keyed cell writes.  ``CellRepository`` (SQLite) and
``MemoryWriteContext`` both implement it.
"""

from typing import Any, Hashable, Protocol


class WriteContext(Protocol):
    """Keyed, versioned cell writes."""

    def get_entity_id(self, key: str) -> Hashable:
        """Build the storage entity id for a row key."""
        ...

    def put(
        self,
        entity_id: Hashable,
        family: str,
        column: str,
        timestamp: int,
        value: Any,
    ) -> None:
        """Write one cell at version ``timestamp``."""
        ...


class MemoryWriteContext:
    """In-process write-context that keeps every cell in a dict.

    Used for dry runs.  Re-putting the same (entity, family, column,
    timestamp) replaces the stored value, matching versioned storage.
    """

    def __init__(self) -> None:
        self.cells: dict[tuple[Hashable, str, str, int], Any] = {}

    def get_entity_id(self, key: str) -> Hashable:
        return key

    def put(
        self,
        entity_id: Hashable,
        family: str,
        column: str,
        timestamp: int,
        value: Any,
    ) -> None:
        self.cells[(entity_id, family, column, timestamp)] = value

    def row(self, entity_id: Hashable, family: str = "data") -> dict[str, Any]:
        """Return {column: value} for the newest version of each column."""
        latest: dict[str, tuple[int, Any]] = {}
        for (eid, fam, column, ts), value in self.cells.items():
            if eid != entity_id or fam != family:
                continue
            if column not in latest or ts > latest[column][0]:
                latest[column] = (ts, value)
        return {column: value for column, (_, value) in latest.items()}

    def entity_count(self) -> int:
        return len({key[0] for key in self.cells})
