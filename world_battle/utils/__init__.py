"""Utility functions and constants for World Battle."""

from .constants import (
    CREATOR_PLAYER_ID,
    DIE_SIDES,
    GAME_CODE_ALPHABET,
    GAME_CODE_LENGTH,
    INITIAL_ARMIES,
    MANDATORY_TRADE_HAND_SIZE,
    MAX_ATTACKER_DICE,
    MAX_DEFENDER_DICE,
    MAX_PLAYER_NAME_LENGTH,
    MAX_PLAYERS,
    MAX_SUGGESTED_SET_SIZE,
    MIN_ATTACKING_ARMIES,
    MIN_PLAYERS,
    MIN_TERRITORY_BONUS,
    MIN_TRADE_SET_SIZE,
    RNG_SEED_DEFAULT,
    TERRITORIES_PER_BONUS_ARMY,
)
from .rng import GameRNG

__all__ = [
    "CREATOR_PLAYER_ID",
    "DIE_SIDES",
    "GAME_CODE_ALPHABET",
    "GAME_CODE_LENGTH",
    "INITIAL_ARMIES",
    "MANDATORY_TRADE_HAND_SIZE",
    "MAX_ATTACKER_DICE",
    "MAX_DEFENDER_DICE",
    "MAX_PLAYER_NAME_LENGTH",
    "MAX_PLAYERS",
    "MAX_SUGGESTED_SET_SIZE",
    "MIN_ATTACKING_ARMIES",
    "MIN_PLAYERS",
    "MIN_TERRITORY_BONUS",
    "MIN_TRADE_SET_SIZE",
    "RNG_SEED_DEFAULT",
    "TERRITORIES_PER_BONUS_ARMY",
    "GameRNG",
]
