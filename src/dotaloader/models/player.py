"""Pydantic v2 models for per-player records and their nested sub-records."""

from pydantic import BaseModel, Field

from dotaloader.accessors import FiniteFloat, Int32, Int64

ITEM_SLOTS = 6


class AbilityUpgradeRecord(BaseModel):
    """One ability point spent by a player."""

    level: Int32
    ability_id: Int32
    time: Int32  # seconds since match start


class AdditionalUnitRecord(BaseModel):
    """A companion unit (e.g. Spirit Bear) and its inventory."""

    name: str
    item_ids: list[Int32] = Field(min_length=ITEM_SLOTS, max_length=ITEM_SLOTS)


class PlayerRecord(BaseModel):
    """One player's performance in a match."""

    player_slot: Int32
    hero_id: Int32
    level: Int32
    # Economy
    gold: Int32
    gold_spent: Int32
    gold_per_minute: FiniteFloat
    # Combat
    kills: Int32
    deaths: Int32
    assists: Int32
    last_hits: Int32
    denies: Int32
    hero_damage: Int32
    hero_healing: Int32
    tower_damage: Int32
    exp_per_minute: FiniteFloat
    account_id: Int64 = -1  # -1 for anonymous / hidden accounts
    leaver_status: Int32 = 0  # 0 = did not leave
    item_ids: list[Int32] = Field(min_length=ITEM_SLOTS, max_length=ITEM_SLOTS)
    ability_upgrades: list[AbilityUpgradeRecord] = Field(default_factory=list)
    additional_units: AdditionalUnitRecord | None = None


class PlayerData(BaseModel):
    """Composite value written under the ``player_data`` column."""

    players: list[PlayerRecord]
