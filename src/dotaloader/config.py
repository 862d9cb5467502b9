"""Loader configuration with defaults for a local SQLite import."""

from dataclasses import dataclass

ON_ERROR_POLICIES = ("fail", "skip")


@dataclass
class LoaderConfig:
    """Configuration for a bulk import run."""

    # Persistent data storage
    data_dir: str = "data"
    db_path: str = "data/dotaloader.db"

    # Column family every match cell is written to
    column_family: str = "data"

    # "fail" aborts the run on the first bad line; "skip" counts it and
    # moves on.  Either way the line is logged with its failure.
    on_error: str = "fail"

    # Store failed lines in the quarantine table for later inspection
    quarantine: bool = True

    # Log a progress line every N input lines
    progress_interval: int = 10000

    def validate(self) -> None:
        """Raise ValueError if any setting is out of range."""
        if self.on_error not in ON_ERROR_POLICIES:
            raise ValueError(
                f"on_error must be one of {ON_ERROR_POLICIES}, "
                f"got {self.on_error!r}"
            )
        if self.progress_interval < 1:
            raise ValueError(
                f"progress_interval must be positive, got {self.progress_interval}"
            )
