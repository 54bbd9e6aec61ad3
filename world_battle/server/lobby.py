"""Game lobby: creating, joining and starting games."""

import logging
import threading
import uuid
from dataclasses import dataclass

from ..engine.errors import ErrorCode, GameRuleError
from ..engine.initializer import create_game as initialize_game
from ..engine.turn_machine import TurnStateMachine
from ..models.game import GamePhase, GameState
from ..models.player import ARMY_COLORS, Player
from ..utils import (
    CREATOR_PLAYER_ID,
    GAME_CODE_ALPHABET,
    GAME_CODE_LENGTH,
    MAX_PLAYER_NAME_LENGTH,
    MAX_PLAYERS,
    MIN_PLAYERS,
    GameRNG,
)
from .schemas.responses import GameInfo
from .store import GameStore

logger = logging.getLogger(__name__)


@dataclass
class CreatedGame:
    """A freshly created lobby game."""

    game_id: str
    game_code: str
    game: GameState


def validate_player_name(name: str) -> str:
    """Trim a display name and check its length.

    Returns:
        The trimmed name

    Raises:
        GameRuleError: INVALID_PLAYER_NAME if empty or too long
    """
    trimmed = (name or "").strip()
    if not trimmed:
        raise GameRuleError(ErrorCode.INVALID_PLAYER_NAME, "Player name is required")
    if len(trimmed) > MAX_PLAYER_NAME_LENGTH:
        raise GameRuleError(
            ErrorCode.INVALID_PLAYER_NAME,
            f"Player name must be {MAX_PLAYER_NAME_LENGTH} characters or less",
        )
    return trimmed


class GameService:
    """Lobby operations on top of a GameStore.

    Games wait in SETUP while players join. Starting a game deals the map
    and begins the first turn.
    """

    def __init__(
        self,
        store: GameStore | None = None,
        machine: TurnStateMachine | None = None,
        rng: GameRNG | None = None,
    ):
        self.store = store if store is not None else GameStore()
        self.machine = machine if machine is not None else TurnStateMachine()
        self.rng = rng if rng is not None else GameRNG()
        self.codes: dict[str, str] = {}  # game_id -> game code
        self._codes_lock = threading.Lock()

    def create_game(self, player_name: str, seed: int | None = None) -> CreatedGame:
        """Create a game in SETUP with the creator as player-1.

        Args:
            player_name: Creator's display name
            seed: Optional RNG seed used when the game is started

        Returns:
            CreatedGame with the new id, join code and state
        """
        name = validate_player_name(player_name)
        game_id = str(uuid.uuid4())
        game = GameState(
            game_id=game_id,
            phase=GamePhase.SETUP,
            players=[Player(id=CREATOR_PLAYER_ID, name=name, color=ARMY_COLORS[0])],
            turn_order=[CREATOR_PLAYER_ID],
            seed=seed,
        )
        with self._codes_lock:
            game_code = self._generate_game_code()
            self.store.create(game_id, game)
            self.codes[game_id] = game_code

        logger.info(f"Created game {game_id} (code {game_code}) for {name}")
        return CreatedGame(game_id=game_id, game_code=game_code, game=game)

    def join_game(self, game_id: str, player_name: str) -> GameState:
        """Add a player to a game that has not started yet.

        Raises:
            GameRuleError: INVALID_PLAYER_NAME, GAME_NOT_FOUND,
                GAME_ALREADY_STARTED, GAME_FULL or DUPLICATE_NAME
        """
        name = validate_player_name(player_name)

        with self.store.lock(game_id):
            game = self.get_game(game_id)

            if game.phase != GamePhase.SETUP:
                raise GameRuleError(ErrorCode.GAME_ALREADY_STARTED, "Game has already started")
            if len(game.players) >= MAX_PLAYERS:
                raise GameRuleError(
                    ErrorCode.GAME_FULL, f"Game is full (max {MAX_PLAYERS} players)"
                )
            if any(p.name.lower() == name.lower() for p in game.players):
                raise GameRuleError(ErrorCode.DUPLICATE_NAME, "Player name already taken")

            index = len(game.players)
            player_id = f"player-{index + 1}"
            game.players.append(Player(id=player_id, name=name, color=ARMY_COLORS[index]))
            game.turn_order.append(player_id)
            game.touch()

            self.store.update(game_id, game)

        logger.info(f"{name} joined game {game_id} as {player_id}")
        return game

    def start_game(self, game_id: str, requesting_player_id: str) -> GameState:
        """Deal the map and begin the first turn.

        Only the creator may start, and only with enough players.

        Raises:
            GameRuleError: GAME_NOT_FOUND, GAME_ALREADY_STARTED, NOT_CREATOR
                or INVALID_PLAYER_COUNT
        """
        with self.store.lock(game_id):
            lobby = self.get_game(game_id)

            if lobby.phase != GamePhase.SETUP:
                raise GameRuleError(ErrorCode.GAME_ALREADY_STARTED, "Game has already started")
            if requesting_player_id != CREATOR_PLAYER_ID:
                raise GameRuleError(
                    ErrorCode.NOT_CREATOR, "Only the game creator can start the game"
                )
            if len(lobby.players) < MIN_PLAYERS:
                raise GameRuleError(
                    ErrorCode.INVALID_PLAYER_COUNT,
                    f"Need at least {MIN_PLAYERS} players to start",
                )

            game = initialize_game(game_id, [p.name for p in lobby.players], rng=lobby.rng)
            game.created_at = lobby.created_at
            self.machine.begin_turn(game)

            self.store.update(game_id, game)

        logger.info(f"Started game {game_id} with {len(game.players)} players")
        return game

    def get_game(self, game_id: str) -> GameState:
        """Look up a game.

        Raises:
            GameRuleError: GAME_NOT_FOUND
        """
        game = self.store.get(game_id)
        if game is None:
            raise GameRuleError(ErrorCode.GAME_NOT_FOUND, f"Game {game_id} not found")
        return game

    def find_by_code(self, game_code: str) -> GameState | None:
        """Find a game by its join code (case-insensitive)."""
        wanted = game_code.strip().upper()
        with self._codes_lock:
            game_id = next((gid for gid, code in self.codes.items() if code == wanted), None)
        return self.store.get(game_id) if game_id else None

    def list_games(self) -> list[GameInfo]:
        """Summaries of every stored game, for the lobby screen."""
        return [self._game_info(game) for game in self.store.list()]

    def delete_game(self, game_id: str) -> bool:
        with self._codes_lock:
            self.codes.pop(game_id, None)
            return self.store.delete(game_id)

    def _game_info(self, game: GameState) -> GameInfo:
        if game.phase == GamePhase.SETUP:
            status = "waiting"
        elif game.phase == GamePhase.GAME_OVER:
            status = "finished"
        else:
            status = "in-progress"

        current = game.get_player(game.current_turn.player_id) if game.current_turn else None
        winner = game.get_player(game.winner) if game.winner else None
        with self._codes_lock:
            game_code = self.codes.get(game.game_id, "")

        return GameInfo(
            gameId=game.game_id,
            gameCode=game_code,
            creatorName=game.players[0].name if game.players else "Unknown",
            playerCount=len(game.players),
            maxPlayers=MAX_PLAYERS,
            status=status,
            phase=game.phase.value,
            currentPlayerName=current.name if current else None,
            winner=winner.name if winner else None,
        )

    def _generate_game_code(self) -> str:
        """Random join code, unique among the codes currently in use.

        Callers hold the codes lock.
        """
        in_use = set(self.codes.values())
        while True:
            code = "".join(self.rng.choice(GAME_CODE_ALPHABET) for _ in range(GAME_CODE_LENGTH))
            if code not in in_use:
                return code
