"""CLI entry point for the match loader.

Provides ``main()`` as the entry point for the ``dotaloader`` console
script: sets up logging, opens the database, imports every input file,
and logs an end-of-run summary.

Usage::

    dotaloader matches.jsonl                    # fail-fast import
    dotaloader --on-error skip part-*.jsonl.gz  # skip bad lines
    dotaloader --dry-run matches.jsonl          # parse + emit, no database
"""

import argparse
import logging
import sys

from dotaloader.config import ON_ERROR_POLICIES, LoaderConfig
from dotaloader.context import MemoryWriteContext
from dotaloader.db import open_store
from dotaloader.importer import MatchBulkImporter
from dotaloader.logging_config import setup_logging
from dotaloader.repository import CellRepository
from dotaloader.runner import run_import

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the dotaloader CLI."""
    parser = argparse.ArgumentParser(
        prog="dotaloader",
        description="Import newline-delimited match-details JSON into a cell store",
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        help="Input files, one JSON match per line (.gz accepted)",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default="data",
        help="Data directory for DB and logs (default: data)",
    )
    parser.add_argument(
        "--db-path",
        type=str,
        default=None,
        help="SQLite database path (default: <data-dir>/dotaloader.db)",
    )
    parser.add_argument(
        "--on-error",
        choices=ON_ERROR_POLICIES,
        default="fail",
        help="Abort on the first bad line, or skip it (default: fail)",
    )
    parser.add_argument(
        "--no-quarantine",
        action="store_true",
        help="Do not store failed lines in the quarantine table",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and emit into memory only; no database is opened",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show DEBUG output on the console",
    )
    return parser


def build_config(args: argparse.Namespace) -> LoaderConfig:
    """Translate parsed arguments into a validated LoaderConfig."""
    config = LoaderConfig(
        data_dir=args.data_dir,
        db_path=args.db_path or f"{args.data_dir}/dotaloader.db",
        on_error=args.on_error,
        quarantine=not args.no_quarantine and not args.dry_run,
    )
    config.validate()
    return config


def run(args: argparse.Namespace) -> int:
    """Run an import for parsed arguments. Returns the process exit code."""
    log_file = setup_logging(
        data_dir=args.data_dir,
        console_level=logging.DEBUG if args.verbose else logging.INFO,
    )
    config = build_config(args)
    logger.info(
        "Starting dotaloader: %d input(s), on_error=%s, db=%s, log=%s",
        len(args.inputs), config.on_error,
        "memory" if args.dry_run else config.db_path, log_file,
    )

    conn = None
    repo = None
    if args.dry_run:
        context = MemoryWriteContext()
        quarantine = None
    else:
        conn = open_store(config.db_path)
        context = repo = CellRepository(conn)
        quarantine = repo.insert_quarantine if config.quarantine else None

    importer = MatchBulkImporter(
        family=config.column_family, quarantine=quarantine
    )
    try:
        stats = run_import(args.inputs, importer, context, config)
    except Exception:
        logger.error("Import aborted; see %s for the failing line", log_file)
        return 1
    else:
        logger.info("\n%s", stats.format_summary())
        if repo is not None:
            logger.info(
                "Store now holds %d matches, %d unresolved quarantined lines",
                repo.count_entities(), repo.count_quarantined(),
            )
        return 0
    finally:
        if conn is not None:
            conn.close()


def main() -> None:
    """Entry point for the dotaloader console script."""
    args = build_parser().parse_args()
    try:
        code = run(args)
    finally:
        logging.shutdown()
    sys.exit(code)


if __name__ == "__main__":
    main()
