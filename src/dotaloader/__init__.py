"""Bulk loader for match-details JSON lines."""

__version__ = "0.1.0"
