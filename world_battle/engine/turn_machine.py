"""Turn and phase state machine.

A turn moves through the phases in order:
1. REINFORCE - trade cards, place reinforcements
2. ATTACK - single or auto attacks, post-conquest army moves
3. FORTIFY - move armies between connected owned territories
Then the next non-eliminated player starts at REINFORCE. GAME_OVER is
terminal.

Every operation checks the acting player and the phase first, then
validates its own arguments in full before touching the game state, so a
rejected request leaves the state unchanged.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from ..models.game import GamePhase, GameState
from ..models.placement import ArmyPlacement
from ..models.player import Player, TurnState
from . import battle
from .battle import AttackResult
from .cards import TradeInResult, can_trade_in, must_trade_in, possible_trade_sets, trade_in_cards
from .deck import draw_card
from .errors import ErrorCode, GameRuleError
from .movement import fortify_armies
from .reinforcements import ContinentBonus, calculate_reinforcements, reinforcement_breakdown
from .victory import check_victory, process_eliminations

logger = logging.getLogger(__name__)


@dataclass
class ReinforcementInfo:
    """What the current player needs to know during REINFORCE."""

    territory_bonus: int
    continent_bonus: int
    total: int
    reinforcements_remaining: int
    controlled_continents: List[ContinentBonus] = field(default_factory=list)
    can_trade_cards: bool = False
    must_trade_cards: bool = False
    possible_card_sets: List[List[str]] = field(default_factory=list)


class TurnStateMachine:
    """Validates and applies player actions against the phase rules.

    The machine is stateless; all state lives in the GameState passed in.
    """

    # =========================================================================
    # TURN SETUP
    # =========================================================================

    def begin_turn(self, game: GameState) -> GameState:
        """Start the turn of the player at current_player_index.

        Computes their reinforcements, installs a fresh TurnState and moves
        to REINFORCE. Called after setup and after every turn rotation.
        """
        player_id = game.turn_order[game.current_player_index]
        reinforcements = calculate_reinforcements(game, player_id)

        game.current_turn = TurnState(
            player_id=player_id,
            reinforcements_remaining=reinforcements,
            conquered_territory_this_turn=False,
        )
        game.phase = GamePhase.REINFORCE
        game.touch()

        logger.info(
            f"Game {game.game_id}: {player_id}'s turn begins with {reinforcements} reinforcements"
        )
        return game

    # =========================================================================
    # REINFORCE PHASE
    # =========================================================================

    def trade_cards(
        self, game: GameState, player_id: str, card_ids: Sequence[str]
    ) -> Tuple[GameState, TradeInResult]:
        """Trade a card set for extra reinforcements.

        Args:
            game: Current game state
            player_id: Acting player
            card_ids: Cards to trade in

        Returns:
            Tuple of (updated game state, trade-in result)
        """
        player = self._validate_player_turn(game, player_id)
        self._validate_phase(game, GamePhase.REINFORCE)
        turn = self._require_turn(game)

        result = trade_in_cards(player, card_ids)

        player.cards = result.remaining_cards
        turn.reinforcements_remaining += result.armies_awarded
        game.touch()

        logger.info(
            f"Game {game.game_id}: {player_id} traded {len(result.cards_traded)} cards "
            f"for {result.armies_awarded} armies"
        )
        return game, result

    def place_reinforcements(
        self, game: GameState, player_id: str, placements: Sequence[ArmyPlacement]
    ) -> GameState:
        """Place a batch of reinforcement armies on owned territories.

        The whole batch is validated before any army is placed.
        """
        self._validate_player_turn(game, player_id)
        self._validate_phase(game, GamePhase.REINFORCE)
        turn = self._require_turn(game)

        if not placements:
            raise GameRuleError(ErrorCode.INVALID_ARMY_COUNT, "No placements provided")

        for placement in placements:
            if placement.armies < 1:
                raise GameRuleError(
                    ErrorCode.INVALID_ARMY_COUNT,
                    f"Must place at least 1 army on {placement.territory_id}",
                )
            territory = game.get_territory_state(placement.territory_id)
            if territory is None:
                raise GameRuleError(
                    ErrorCode.TERRITORY_NOT_FOUND,
                    f"Territory {placement.territory_id} not found",
                )
            if territory.occupied_by != player_id:
                raise GameRuleError(
                    ErrorCode.NOT_OWNER, f"You do not own territory {placement.territory_id}"
                )

        total = sum(p.armies for p in placements)
        if total > turn.reinforcements_remaining:
            raise GameRuleError(
                ErrorCode.NOT_ENOUGH_REINFORCEMENTS,
                f"Not enough reinforcements. Trying to place {total} "
                f"but only have {turn.reinforcements_remaining}",
            )

        for placement in placements:
            game.get_territory_state(placement.territory_id).armies += placement.armies
            logger.debug(f"{player_id} placed {placement.armies} on {placement.territory_id}")
        turn.reinforcements_remaining -= total
        game.touch()

        return game

    def end_reinforcement_phase(self, game: GameState, player_id: str) -> GameState:
        """Move from REINFORCE to ATTACK.

        Requires every reinforcement to be placed and no mandatory trade
        to be pending.
        """
        player = self._validate_player_turn(game, player_id)
        self._validate_phase(game, GamePhase.REINFORCE)
        turn = self._require_turn(game)

        if turn.reinforcements_remaining > 0:
            raise GameRuleError(
                ErrorCode.REINFORCEMENTS_REMAINING,
                f"Must place all reinforcements. {turn.reinforcements_remaining} armies remaining",
            )
        if must_trade_in(player):
            raise GameRuleError(
                ErrorCode.MUST_TRADE_CARDS,
                "Must trade in cards before ending reinforcement phase",
            )

        self._set_phase(game, GamePhase.ATTACK)
        return game

    def reinforcement_info(self, game: GameState, player_id: str) -> ReinforcementInfo:
        """Reinforcement breakdown and card options for the current player."""
        player = self._validate_player_turn(game, player_id)
        breakdown = reinforcement_breakdown(game, player_id)

        return ReinforcementInfo(
            territory_bonus=breakdown.territory_bonus,
            continent_bonus=breakdown.continent_bonus,
            total=breakdown.total,
            reinforcements_remaining=(
                game.current_turn.reinforcements_remaining if game.current_turn else 0
            ),
            controlled_continents=breakdown.controlled_continents,
            can_trade_cards=can_trade_in(player),
            must_trade_cards=must_trade_in(player),
            possible_card_sets=possible_trade_sets(player),
        )

    # =========================================================================
    # ATTACK PHASE
    # =========================================================================

    def attack(
        self, game: GameState, player_id: str, from_territory_id: str, to_territory_id: str
    ) -> Tuple[GameState, AttackResult]:
        """Resolve a single roll of the dice."""
        return self._run_attack(
            game, player_id, from_territory_id, to_territory_id, battle.execute_single_attack
        )

    def auto_attack(
        self, game: GameState, player_id: str, from_territory_id: str, to_territory_id: str
    ) -> Tuple[GameState, AttackResult]:
        """Roll until the territory falls or the attacker is down to 1 army."""
        return self._run_attack(
            game, player_id, from_territory_id, to_territory_id, battle.execute_auto_attack
        )

    def move_armies(
        self,
        game: GameState,
        player_id: str,
        from_territory_id: str,
        to_territory_id: str,
        armies: int,
    ) -> GameState:
        """Move extra armies into a territory after conquering it."""
        self._validate_player_turn(game, player_id)
        self._validate_phase(game, GamePhase.ATTACK)

        source = game.get_territory_state(from_territory_id)
        if source is not None and source.occupied_by != player_id:
            raise GameRuleError(
                ErrorCode.NOT_OWNER, f"You do not own territory {from_territory_id}"
            )

        battle.move_armies_after_conquest(game, from_territory_id, to_territory_id, armies)
        game.touch()
        return game

    def end_attack_phase(self, game: GameState, player_id: str) -> GameState:
        """Move from ATTACK to FORTIFY, drawing a card if a territory was conquered."""
        self._validate_player_turn(game, player_id)
        self._validate_phase(game, GamePhase.ATTACK)

        self._award_card_if_eligible(game, player_id)
        self._set_phase(game, GamePhase.FORTIFY)
        return game

    # =========================================================================
    # FORTIFY PHASE
    # =========================================================================

    def fortify(
        self,
        game: GameState,
        player_id: str,
        from_territory_id: str,
        to_territory_id: str,
        armies: int,
    ) -> GameState:
        """Move armies between two connected territories of the current player."""
        self._validate_player_turn(game, player_id)
        self._validate_phase(game, GamePhase.FORTIFY)

        fortify_armies(game, player_id, from_territory_id, to_territory_id, armies)
        game.touch()

        logger.debug(
            f"{player_id} fortified {to_territory_id} with {armies} from {from_territory_id}"
        )
        return game

    # =========================================================================
    # TURN ROTATION
    # =========================================================================

    def end_turn(self, game: GameState, player_id: str) -> GameState:
        """Hand the turn to the next non-eliminated player.

        Allowed from ATTACK or FORTIFY. Ending the turn straight from ATTACK
        still awards the conquest card.
        """
        self._validate_player_turn(game, player_id)
        if game.phase not in (GamePhase.ATTACK, GamePhase.FORTIFY):
            raise GameRuleError(
                ErrorCode.INVALID_PHASE,
                f"Can only end turn during ATTACK or FORTIFY phase, game is in {game.phase.value}",
            )

        if game.phase == GamePhase.ATTACK:
            self._award_card_if_eligible(game, player_id)

        self._advance_to_next_player(game)
        return self.begin_turn(game)

    # =========================================================================
    # INTERNAL HELPER METHODS
    # =========================================================================

    def _validate_player_turn(self, game: GameState, player_id: str) -> Player:
        """Raise NOT_YOUR_TURN unless player_id holds the turn."""
        current = game.current_player()
        if current is None or current.id != player_id:
            raise GameRuleError(ErrorCode.NOT_YOUR_TURN, "Not your turn")
        return current

    def _validate_phase(self, game: GameState, expected: GamePhase) -> None:
        if game.phase != expected:
            raise GameRuleError(
                ErrorCode.INVALID_PHASE,
                f"Invalid phase. Expected {expected.value}, but game is in {game.phase.value}",
            )

    def _require_turn(self, game: GameState) -> TurnState:
        if game.current_turn is None:
            raise GameRuleError(ErrorCode.NO_ACTIVE_TURN, "No active turn")
        return game.current_turn

    def _set_phase(self, game: GameState, phase: GamePhase) -> None:
        logger.info(f"Game {game.game_id}: {game.phase.value} -> {phase.value}")
        game.phase = phase
        game.touch()

    def _run_attack(
        self,
        game: GameState,
        player_id: str,
        from_territory_id: str,
        to_territory_id: str,
        execute,
    ) -> Tuple[GameState, AttackResult]:
        """Shared attack flow: checks, combat, then elimination and victory."""
        self._validate_player_turn(game, player_id)
        self._validate_phase(game, GamePhase.ATTACK)

        result = execute(game, from_territory_id, to_territory_id, player_id)

        if result.territory_conquered and game.current_turn is not None:
            game.current_turn.conquered_territory_this_turn = True

        result.eliminated_players = process_eliminations(game, player_id)
        check_victory(game)
        game.touch()

        return game, result

    def _award_card_if_eligible(self, game: GameState, player_id: str) -> None:
        """Draw one card for a player who conquered a territory this turn.

        Nothing happens if the deck is empty. The conquest flag is cleared
        so the card is awarded at most once per turn.
        """
        turn = game.current_turn
        if turn is None or not turn.conquered_territory_this_turn:
            return

        card, game.deck = draw_card(game.deck)
        turn.conquered_territory_this_turn = False
        if card is None:
            return

        player = game.get_player(player_id)
        if player is not None:
            player.cards.append(card)
            logger.debug(f"{player_id} drew {card.id} ({card.type.value})")

    def _advance_to_next_player(self, game: GameState) -> None:
        """Rotate current_player_index, skipping eliminated players.

        Gives up after one full lap of the turn order.
        """
        player_count = len(game.turn_order)
        game.current_player_index = (game.current_player_index + 1) % player_count

        for _ in range(player_count):
            next_player = game.get_player(game.turn_order[game.current_player_index])
            if next_player is not None and not next_player.is_eliminated:
                break
            game.current_player_index = (game.current_player_index + 1) % player_count
