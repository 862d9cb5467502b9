"""Emission driver: turns a MatchRecord into storage cell writes.

``match_cells`` is the pure decomposition of a record into
(key, column, timestamp, value) cells; ``emit_match`` submits them to a
write-context.  Every cell of a match is versioned at ``start_time``.
"""

from typing import Any, NamedTuple

from dotaloader.context import WriteContext
from dotaloader.enums import game_mode_label, lobby_type_label
from dotaloader.models import MatchRecord, PlayerData

DEFAULT_FAMILY = "data"


class Cell(NamedTuple):
    key: str
    column: str
    timestamp: int
    value: Any


def match_cells(record: MatchRecord) -> list[Cell]:
    """Decompose a match into its 18 storage cells.

    Raises:
        RangeViolation: If game_mode or lobby_type has no label.
    """
    # Resolve labels first so a bad code produces no cells at all
    game_mode = game_mode_label(record.game_mode)
    lobby_type = lobby_type_label(record.lobby_type)

    columns = [
        ("match_id", record.match_id),
        ("dire_towers_status", record.dire_towers_status),
        ("radiant_towers_status", record.radiant_towers_status),
        ("dire_barracks_status", record.dire_barracks_status),
        ("radiant_barracks_status", record.radiant_barracks_status),
        ("cluster", record.cluster),
        ("season", record.season),
        ("start_time", record.start_time),
        ("match_seq_num", record.match_seq_num),
        ("league_id", record.league_id),
        ("first_blood_time", record.first_blood_time),
        ("negative_votes", record.negative_votes),
        ("positive_votes", record.positive_votes),
        ("duration", record.duration),
        ("radiant_wins", record.radiant_win),
        ("player_data", PlayerData(players=record.players)),
        ("game_mode", game_mode),
        ("lobby_type", lobby_type),
    ]
    key = str(record.match_id)
    return [Cell(key, column, record.start_time, value) for column, value in columns]


def emit_match(
    record: MatchRecord, context: WriteContext, family: str = DEFAULT_FAMILY
) -> None:
    """Submit every cell of ``record`` to ``context``.

    Write-context exceptions are not caught; they propagate to the
    caller's failure policy.  Emission is not transactional, so a
    mid-emission failure may leave earlier cells written.
    """
    cells = match_cells(record)
    entity_id = context.get_entity_id(cells[0].key)
    for cell in cells:
        context.put(entity_id, family, cell.column, cell.timestamp, cell.value)
