"""Enumerated game-mode and lobby-type codes from the match-details API.

Labels are the member names and are resolved by code value.
"""

from enum import IntEnum

from dotaloader.exceptions import RangeViolation


class GameMode(IntEnum):
    UNKNOWN_ZERO = 0  # API reports 0 for some matches; not an error
    ALL_PICK = 1
    CAPTAINS_MODE = 2
    RANDOM_DRAFT = 3
    SINGLE_DRAFT = 4
    ALL_RANDOM = 5
    INTRO = 6
    DIRETIDE = 7
    REVERSE_CAPTAINS_MODE = 8
    GREEVILING = 9
    TUTORIAL = 10
    MID_ONLY = 11
    LEAST_PLAYED = 12
    NEW_PLAYER_POOL = 13


class LobbyType(IntEnum):
    INVALID = -1
    PUBLIC_MATCHMAKING = 0
    PRACTICE = 1
    TOURNAMENT = 2
    TUTORIAL = 3
    CO_OP_WITH_BOTS = 4
    TEAM_MATCH = 5


GAME_MODE_RANGE = (int(min(GameMode)), int(max(GameMode)))
LOBBY_TYPE_RANGE = (int(min(LobbyType)), int(max(LobbyType)))


def check_game_mode(code: int) -> GameMode:
    """Return the GameMode for ``code``.

    Raises:
        RangeViolation: If ``code`` is outside 0..13.
    """
    try:
        return GameMode(code)
    except ValueError:
        raise RangeViolation(
            f"Bad game mode int: {code}", field="game_mode", value=code
        ) from None


def check_lobby_type(code: int) -> LobbyType:
    """Return the LobbyType for ``code``.

    Raises:
        RangeViolation: If ``code`` is outside -1..5.
    """
    try:
        return LobbyType(code)
    except ValueError:
        raise RangeViolation(
            f"Bad lobby type int: {code}", field="lobby_type", value=code
        ) from None


def game_mode_label(code: int) -> str:
    """Resolve a game-mode code to its label string."""
    return check_game_mode(code).name


def lobby_type_label(code: int) -> str:
    """Resolve a lobby-type code to its label string."""
    return check_lobby_type(code).name
