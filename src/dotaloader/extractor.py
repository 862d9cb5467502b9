"""Record extractor for match-details JSON lines.

Provides:
- parse_match: pure function, one JSON line in, MatchRecord out
- parse_player, parse_ability_upgrade, parse_additional_unit: nested records

Input lines follow the public match-details API with these tolerated
deviations:

* ``account_id`` may be null or absent (read as -1)
* ``leaver_status`` may be absent (read as 0)
* ``ability_upgrades`` may be absent (read as an empty list)
* ``additional_units`` may be a bare object or a one-element list
* ``game_mode`` may be 0 (labelled ``UNKNOWN_ZERO``)

Every other field is required; a missing one fails the whole line.
"""

import json
import logging
from typing import Any, Optional

from dotaloader.accessors import (
    FiniteFloat,
    Int32,
    Int64,
    optional_field,
    require_field,
)
from dotaloader.diagnostics import QuarantineSink, recorded_failure
from dotaloader.enums import check_game_mode, check_lobby_type
from dotaloader.exceptions import MalformedLineError
from dotaloader.models import (
    AbilityUpgradeRecord,
    AdditionalUnitRecord,
    MatchRecord,
    PlayerRecord,
)
from dotaloader.models.player import ITEM_SLOTS
from dotaloader.validation import check_player_count

logger = logging.getLogger(__name__)

# Record field -> JSON field, for the int32 match scalars
_MATCH_INT32_FIELDS = {
    "dire_towers_status": "tower_status_dire",
    "radiant_towers_status": "tower_status_radiant",
    "dire_barracks_status": "barracks_status_dire",
    "radiant_barracks_status": "barracks_status_radiant",
    "cluster": "cluster",
    "season": "season",
    "league_id": "leagueid",
    "first_blood_time": "first_blood_time",
    "negative_votes": "negative_votes",
    "positive_votes": "positive_votes",
    "duration": "duration",
}

_PLAYER_INT32_FIELDS = {
    "player_slot": "player_slot",
    "hero_id": "hero_id",
    "level": "level",
    "gold": "gold",
    "gold_spent": "gold_spent",
    "kills": "kills",
    "deaths": "deaths",
    "assists": "assists",
    "last_hits": "last_hits",
    "denies": "denies",
    "hero_damage": "hero_damage",
    "hero_healing": "hero_healing",
    "tower_damage": "tower_damage",
}


def parse_match(
    line: str, *, quarantine: Optional[QuarantineSink] = None
) -> MatchRecord:
    """Parse one JSON line into a validated MatchRecord.

    Any failure is logged together with the raw line (and passed to
    ``quarantine`` if given) before it is re-raised.

    Args:
        line: One line of newline-delimited JSON.
        quarantine: Optional callable receiving a diagnostic dict for a
            failed line (e.g. ``CellRepository.insert_quarantine``).

    Returns:
        MatchRecord with all players parsed.

    Raises:
        MalformedLineError: If the line is not a JSON object.
        MissingFieldError: If a required field is absent.
        FieldTypeError: If a field has an unreadable value.
        RangeViolation: If lobby_type or game_mode is out of range.
    """
    with recorded_failure(line, quarantine):
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            raise MalformedLineError(f"Line is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise MalformedLineError(
                f"Expected a JSON object, got {type(data).__name__}"
            )

        match_id = require_field(data, "match_id", Int64)
        game_mode = require_field(data, "game_mode", int)
        lobby_type = require_field(data, "lobby_type", int)
        scalars = {
            name: require_field(data, json_name, Int32)
            for name, json_name in _MATCH_INT32_FIELDS.items()
        }
        start_time = require_field(data, "start_time", Int64)
        match_seq_num = require_field(data, "match_seq_num", Int64)
        radiant_win = require_field(data, "radiant_win", bool)

        # Fail fast, before the players are parsed
        check_lobby_type(lobby_type)
        check_game_mode(game_mode)

        players = [
            parse_player(p) for p in require_field(data, "players", list)
        ]

        record = MatchRecord(
            match_id=match_id,
            game_mode=game_mode,
            lobby_type=lobby_type,
            start_time=start_time,
            match_seq_num=match_seq_num,
            radiant_win=radiant_win,
            players=players,
            **scalars,
        )

    for warning in check_player_count(record):
        logger.warning(warning)
    return record


def parse_player(player: Any) -> PlayerRecord:
    """Parse one entry of the ``players`` array."""
    if not isinstance(player, dict):
        raise MalformedLineError(
            f"Expected a player object, got {type(player).__name__}",
            field="players",
        )

    stats = {
        name: require_field(player, json_name, Int32)
        for name, json_name in _PLAYER_INT32_FIELDS.items()
    }

    # May be absent: some players have not spent any ability points
    upgrades = optional_field(player, "ability_upgrades", list, [])

    # May be absent: most heroes have no companion unit
    unit = optional_field(player, "additional_units", dict | list, None)
    additional_units = parse_additional_unit(unit) if unit is not None else None

    return PlayerRecord(
        gold_per_minute=require_field(player, "gold_per_min", FiniteFloat),
        exp_per_minute=require_field(player, "xp_per_min", FiniteFloat),
        account_id=optional_field(player, "account_id", Int64, -1),
        leaver_status=optional_field(player, "leaver_status", Int32, 0),
        item_ids=read_item_ids(player),
        ability_upgrades=[parse_ability_upgrade(u) for u in upgrades],
        additional_units=additional_units,
        **stats,
    )


def parse_ability_upgrade(upgrade: Any) -> AbilityUpgradeRecord:
    """Parse one ``ability_upgrades`` entry (``level``, ``ability``, ``time``)."""
    return AbilityUpgradeRecord(
        level=require_field(upgrade, "level", Int32),
        ability_id=require_field(upgrade, "ability", Int32),
        time=require_field(upgrade, "time", Int32),
    )


def parse_additional_unit(value: Any) -> AdditionalUnitRecord:
    """Parse ``additional_units``, given as an object or a one-element list."""
    # The API sometimes wraps the unit in a list
    if isinstance(value, list):
        if not value:
            raise MalformedLineError(
                "additional_units is an empty list", field="additional_units"
            )
        value = value[0]

    return AdditionalUnitRecord(
        name=require_field(value, "unitname", str),
        item_ids=read_item_ids(value),
    )


def read_item_ids(obj: dict) -> list[int]:
    """Read the six inventory slots ``item_0`` .. ``item_5``.

    Every slot is required; an incomplete inventory is corrupt data.
    """
    return [require_field(obj, f"item_{i}", Int32) for i in range(ITEM_SLOTS)]
