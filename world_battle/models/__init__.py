"""Data models for World Battle."""

from .card import Card, CardType, armies_for_card_count, is_valid_card_set
from .game import GamePhase, GameState
from .placement import ArmyPlacement
from .player import ARMY_COLORS, ArmyColor, Player, TurnState
from .territory import Continent, Territory, TerritoryState

__all__ = [
    "ARMY_COLORS",
    "ArmyColor",
    "ArmyPlacement",
    "Card",
    "CardType",
    "Continent",
    "GamePhase",
    "GameState",
    "Player",
    "Territory",
    "TerritoryState",
    "TurnState",
    "armies_for_card_count",
    "is_valid_card_set",
]
