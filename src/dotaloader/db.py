"""Opening the SQLite cell store.

``open_store`` is the one entry point: it creates the file, tunes the
connection for a single bulk writer and brings the ``cells`` and
``quarantine`` tables up to date from the numbered scripts in
``dotaloader/migrations/`` (``001_initial.sql``, ...).  The applied
version is kept in ``PRAGMA user_version``.
"""

import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"

# Applied on every connection
STORE_PRAGMAS = (
    "PRAGMA journal_mode = WAL",
    # Safe with WAL; a crash loses at most the last commit
    "PRAGMA synchronous = NORMAL",
    "PRAGMA busy_timeout = 30000",
)


def schema_version(conn: sqlite3.Connection) -> int:
    return conn.execute("PRAGMA user_version").fetchone()[0]


def _migration_version(script: Path) -> int:
    prefix = script.name.split("_", 1)[0]
    if not prefix.isdigit():
        raise ValueError(f"Migration {script.name!r} has no NNN_ version prefix")
    return int(prefix)


def apply_migrations(
    conn: sqlite3.Connection, migrations_dir: str | Path | None = None
) -> int:
    """Run every migration script newer than the store's version.

    Returns:
        Number of scripts applied (0 when the store is current).

    Raises:
        ValueError: If a script name lacks its numeric prefix.
    """
    scripts = sorted(
        (_migration_version(p), p)
        for p in Path(migrations_dir or MIGRATIONS_DIR).glob("*.sql")
    )
    current = schema_version(conn)
    pending = [(v, p) for v, p in scripts if v > current]

    for version, script in pending:
        logger.debug("Applying migration %s", script.name)
        conn.executescript(script.read_text(encoding="utf-8"))
        conn.execute(f"PRAGMA user_version = {version}")

    if pending:
        logger.info(
            "Cell store schema %d -> %d", current, schema_version(conn)
        )
    return len(pending)


def open_store(
    db_path: str | Path, migrations_dir: str | Path | None = None
) -> sqlite3.Connection:
    """Open (creating if needed) the cell store at ``db_path``.

    The caller owns the returned connection and must close it.
    """
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    for pragma in STORE_PRAGMAS:
        conn.execute(pragma)
    apply_migrations(conn, migrations_dir)
    return conn
