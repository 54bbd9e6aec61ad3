"""Elimination and victory checks, run after every attack.

This module handles:
1. Eliminating every active player left with zero territories
2. Handing the eliminated players' cards to the attacker
3. Ending the game when a single active player remains
"""

import logging
from typing import List

from ..models.game import GamePhase, GameState

logger = logging.getLogger(__name__)


def process_eliminations(game: GameState, attacking_player_id: str) -> List[str]:
    """Eliminate players that own no territories.

    All cards of an eliminated player go straight to the attacking player;
    they are not returned to the deck.

    Args:
        game: Current game state
        attacking_player_id: Player whose attack caused the check

    Returns:
        IDs of the players eliminated by this check
    """
    attacker = game.get_player(attacking_player_id)
    eliminated = []

    for player in game.active_players():
        if game.player_territories(player.id):
            continue

        player.is_eliminated = True
        if attacker is not None and attacker is not player:
            attacker.cards.extend(player.cards)
            player.cards = []
        eliminated.append(player.id)
        logger.info(f"Game {game.game_id}: {player.id} eliminated by {attacking_player_id}")

    return eliminated


def check_victory(game: GameState) -> bool:
    """End the game if exactly one active player is left.

    Sets phase to GAME_OVER and records the winner.

    Args:
        game: Current game state

    Returns:
        True if the game is over, False otherwise
    """
    if game.phase == GamePhase.GAME_OVER:
        return True

    active = game.active_players()
    if len(active) != 1:
        return False

    game.phase = GamePhase.GAME_OVER
    game.winner = active[0].id
    logger.info(f"Game {game.game_id} over: winner = {game.winner}")
    return True
