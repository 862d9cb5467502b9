"""Shared builders for match-details JSON used across the test suite."""

import copy
import json

import pytest

RADIANT_SLOTS = [0, 1, 2, 3, 4]
DIRE_SLOTS = [128, 129, 130, 131, 132]


def make_player_data(player_slot=0, **overrides) -> dict:
    """Return a complete player dict as the API sends it."""
    data = {
        "account_id": 76482434 + player_slot,
        "player_slot": player_slot,
        "hero_id": 80,
        "item_0": 63,
        "item_1": 1,
        "item_2": 48,
        "item_3": 116,
        "item_4": 0,
        "item_5": 141,
        "kills": 7,
        "deaths": 3,
        "assists": 12,
        "leaver_status": 0,
        "gold": 1200,
        "last_hits": 150,
        "denies": 10,
        "gold_per_min": 452,
        "xp_per_min": 510,
        "gold_spent": 14210,
        "hero_damage": 12034,
        "tower_damage": 2011,
        "hero_healing": 0,
        "level": 22,
        "ability_upgrades": [
            {"ability": 5565, "time": 120, "level": 1},
            {"ability": 5566, "time": 245, "level": 2},
            {"ability": 5565, "time": 390, "level": 3},
        ],
    }
    data.update(overrides)
    return data


def make_match_data(match_id=227028547, **overrides) -> dict:
    """Return a complete match dict with ten players."""
    data = {
        "players": [make_player_data(s) for s in RADIANT_SLOTS + DIRE_SLOTS],
        "radiant_win": True,
        "duration": 2400,
        "start_time": 1371553454,
        "match_id": match_id,
        "match_seq_num": 205000000,
        "tower_status_radiant": 1846,
        "tower_status_dire": 0,
        "barracks_status_radiant": 63,
        "barracks_status_dire": 0,
        "cluster": 111,
        "first_blood_time": 95,
        "lobby_type": 0,
        "human_players": 10,
        "leagueid": 0,
        "positive_votes": 3,
        "negative_votes": 1,
        "game_mode": 1,
        "season": 0,
    }
    data.update(overrides)
    return data


def bear_unit() -> dict:
    return {
        "unitname": "spirit_bear",
        "item_0": 50,
        "item_1": 0,
        "item_2": 143,
        "item_3": 0,
        "item_4": 0,
        "item_5": 212,
    }


@pytest.fixture
def match_data() -> dict:
    return make_match_data()


@pytest.fixture
def player_data() -> dict:
    return make_player_data()


@pytest.fixture
def match_line(match_data) -> str:
    return json.dumps(match_data)


@pytest.fixture
def unit_data() -> dict:
    return copy.deepcopy(bear_unit())
