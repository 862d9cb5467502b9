"""Pydantic v2 record models for parsed matches.

Re-exports all model classes for convenient import::

    from dotaloader.models import MatchRecord, PlayerRecord, ...
"""

from .match import MatchRecord
from .player import (
    AbilityUpgradeRecord,
    AdditionalUnitRecord,
    PlayerData,
    PlayerRecord,
)

__all__ = [
    "MatchRecord",
    "PlayerRecord",
    "PlayerData",
    "AbilityUpgradeRecord",
    "AdditionalUnitRecord",
]
