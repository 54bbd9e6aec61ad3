"""In-memory game storage."""

import logging
import threading

from ..engine.errors import ErrorCode, GameRuleError
from ..models.game import GameState

logger = logging.getLogger(__name__)


class GameStore:
    """Keeps every game in memory, keyed by game ID.

    Also holds one lock per stored game, created with the game and
    dropped when it is deleted. Callers that load, mutate and update
    a game hold its lock for the whole cycle so two requests never mutate
    the same game at once.
    """

    def __init__(self):
        self.games: dict[str, GameState] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def create(self, game_id: str, game: GameState) -> GameState:
        """Store a new game.

        Raises:
            GameRuleError: GAME_EXISTS if the id is taken
        """
        with self._registry_lock:
            if game_id in self.games:
                raise GameRuleError(ErrorCode.GAME_EXISTS, f"Game {game_id} already exists")
            self.games[game_id] = game
            self._locks[game_id] = threading.Lock()
        logger.debug(f"Stored game {game_id}")
        return game

    def get(self, game_id: str) -> GameState | None:
        return self.games.get(game_id)

    def update(self, game_id: str, game: GameState) -> GameState:
        """Replace a stored game.

        Raises:
            GameRuleError: GAME_NOT_FOUND if the id is unknown
        """
        with self._registry_lock:
            if game_id not in self.games:
                raise GameRuleError(ErrorCode.GAME_NOT_FOUND, f"Game {game_id} not found")
            self.games[game_id] = game
        return game

    def delete(self, game_id: str) -> bool:
        """Delete a game.

        Returns:
            True if deleted, False if not found
        """
        with self._registry_lock:
            self._locks.pop(game_id, None)
            if game_id in self.games:
                del self.games[game_id]
                logger.info(f"Deleted game {game_id}")
                return True
        return False

    def list(self) -> list[GameState]:
        return list(self.games.values())

    def exists(self, game_id: str) -> bool:
        return game_id in self.games

    def count(self) -> int:
        return len(self.games)

    def clear(self) -> None:
        with self._registry_lock:
            logger.info(f"Clearing {len(self.games)} games")
            self.games.clear()
            self._locks.clear()

    def lock(self, game_id: str) -> threading.Lock:
        """Exclusive-access lock for one stored game.

        Raises:
            GameRuleError: GAME_NOT_FOUND if the id is unknown
        """
        with self._registry_lock:
            if game_id not in self._locks:
                raise GameRuleError(ErrorCode.GAME_NOT_FOUND, f"Game {game_id} not found")
            return self._locks[game_id]
