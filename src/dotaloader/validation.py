"""Soft integrity checks on parsed records.

These are warn-and-keep checks: irregular data is reported but the
record is still imported.
"""

from dotaloader.models import MatchRecord

EXPECTED_PLAYERS = 10


def check_player_count(record: MatchRecord) -> list[str]:
    """Check that a match has exactly 10 players (2 teams of 5).

    Abandoned lobbies and some custom lobby types report fewer, so the
    match is not rejected.

    Returns:
        List of warning strings (empty if count is exactly 10).
    """
    count = len(record.players)
    if count != EXPECTED_PLAYERS:
        return [
            f"Expected {EXPECTED_PLAYERS} players for match "
            f"{record.match_id}, got {count}"
        ]
    return []
