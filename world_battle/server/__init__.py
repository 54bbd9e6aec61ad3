"""Host layer: game storage, lobby and player actions."""

from .actions import GameActionService
from .lobby import CreatedGame, GameService
from .store import GameStore

__all__ = [
    "CreatedGame",
    "GameActionService",
    "GameService",
    "GameStore",
]
