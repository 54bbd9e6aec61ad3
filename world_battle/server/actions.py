"""Player actions on stored games.

Each action loads the game, checks that the acting player exists, runs
the turn state machine and writes the game back, all while holding the
game's lock. Rejected actions are logged and re-raised unchanged.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from ..engine.errors import ErrorCode, GameRuleError
from ..engine.turn_machine import TurnStateMachine
from ..models.game import GameState
from .schemas.requests import (
    AttackRequest,
    FortifyRequest,
    MoveArmiesRequest,
    PlaceReinforcementsRequest,
    PlayerActionRequest,
    TradeCardsRequest,
)
from .schemas.responses import AttackResponse, ReinforcementInfo
from .store import GameStore

logger = logging.getLogger(__name__)


class GameActionService:
    """Applies player requests to games held in a GameStore."""

    def __init__(self, store: GameStore, machine: TurnStateMachine | None = None):
        self.store = store
        self.machine = machine if machine is not None else TurnStateMachine()

    def trade_cards(self, game_id: str, request: TradeCardsRequest) -> GameState:
        with self._locked_game(game_id, request.playerId, "trade cards") as game:
            self.machine.trade_cards(game, request.playerId, request.cardIds)
        return game

    def place_reinforcements(
        self, game_id: str, request: PlaceReinforcementsRequest
    ) -> GameState:
        placements = [p.to_placement() for p in request.placements]
        with self._locked_game(game_id, request.playerId, "place reinforcements") as game:
            self.machine.place_reinforcements(game, request.playerId, placements)
        return game

    def get_reinforcement_info(self, game_id: str, player_id: str) -> ReinforcementInfo:
        """Read-only: reinforcement breakdown for the player whose turn it is."""
        with self._locked_game(game_id, player_id, "get reinforcement info") as game:
            info = self.machine.reinforcement_info(game, player_id)
        return ReinforcementInfo.from_info(info)

    def end_reinforcement_phase(self, game_id: str, request: PlayerActionRequest) -> GameState:
        with self._locked_game(game_id, request.playerId, "end reinforcement") as game:
            self.machine.end_reinforcement_phase(game, request.playerId)
        return game

    def attack(self, game_id: str, request: AttackRequest) -> AttackResponse:
        with self._locked_game(game_id, request.playerId, "attack") as game:
            _, result = self.machine.attack(
                game, request.playerId, request.from_territory, request.to_territory
            )
        return AttackResponse.from_result(result, game)

    def auto_attack(self, game_id: str, request: AttackRequest) -> AttackResponse:
        with self._locked_game(game_id, request.playerId, "auto-attack") as game:
            _, result = self.machine.auto_attack(
                game, request.playerId, request.from_territory, request.to_territory
            )
        return AttackResponse.from_result(result, game)

    def move_armies(self, game_id: str, request: MoveArmiesRequest) -> GameState:
        with self._locked_game(game_id, request.playerId, "move armies") as game:
            self.machine.move_armies(
                game,
                request.playerId,
                request.from_territory,
                request.to_territory,
                request.armies,
            )
        return game

    def end_attack_phase(self, game_id: str, request: PlayerActionRequest) -> GameState:
        with self._locked_game(game_id, request.playerId, "end attack") as game:
            self.machine.end_attack_phase(game, request.playerId)
        return game

    def fortify(self, game_id: str, request: FortifyRequest) -> GameState:
        with self._locked_game(game_id, request.playerId, "fortify") as game:
            self.machine.fortify(
                game,
                request.playerId,
                request.from_territory,
                request.to_territory,
                request.armies,
            )
        return game

    def end_turn(self, game_id: str, request: PlayerActionRequest) -> GameState:
        with self._locked_game(game_id, request.playerId, "end turn") as game:
            self.machine.end_turn(game, request.playerId)
        return game

    @contextmanager
    def _locked_game(self, game_id: str, player_id: str, action: str) -> Iterator[GameState]:
        """Hold the game's lock around one action and store the result.

        The game is only written back if the action succeeds.
        """
        try:
            with self.store.lock(game_id):
                game = self.store.get(game_id)
                if game is None:
                    raise GameRuleError(ErrorCode.GAME_NOT_FOUND, f"Game {game_id} not found")
                if game.get_player(player_id) is None:
                    raise GameRuleError(
                        ErrorCode.PLAYER_NOT_FOUND, f"Player {player_id} not found"
                    )

                yield game

                self.store.update(game_id, game)
        except GameRuleError as e:
            logger.warning(f"Game {game_id}: {player_id} could not {action}: {e.message}")
            raise
