"""Pydantic v2 model for one parsed match."""

from pydantic import BaseModel, Field

from dotaloader.accessors import Int32, Int64
from dotaloader.enums import GAME_MODE_RANGE, LOBBY_TYPE_RANGE

from .player import PlayerRecord


class MatchRecord(BaseModel):
    """Validation model for a single match from the match-details API.

    ``start_time`` doubles as the version timestamp of every stored cell.
    """

    match_id: Int64
    game_mode: int = Field(ge=GAME_MODE_RANGE[0], le=GAME_MODE_RANGE[1])
    lobby_type: int = Field(ge=LOBBY_TYPE_RANGE[0], le=LOBBY_TYPE_RANGE[1])
    # Building status bitmasks
    dire_towers_status: Int32
    radiant_towers_status: Int32
    dire_barracks_status: Int32
    radiant_barracks_status: Int32
    cluster: Int32
    season: Int32
    start_time: Int64
    match_seq_num: Int64
    league_id: Int32
    first_blood_time: Int32
    negative_votes: Int32
    positive_votes: Int32
    duration: Int32
    radiant_win: bool
    players: list[PlayerRecord]
