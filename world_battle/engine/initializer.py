"""Game setup: build a fully populated game from a player roster.

Setup runs in one step:
1. Validate the roster (2-6 unique names)
2. Create players with ids and colors by join order
3. Randomize the turn order
4. Deal the shuffled territories round-robin in turn order, 1 army each
5. Scatter each player's remaining starting armies over their territories
6. Build and shuffle the card deck

The first player's reinforcements are left at 0. The caller must compute
them right after setup (see TurnStateMachine.begin_turn).
"""

import logging
from typing import List, Optional, Sequence

from ..models.game import GamePhase, GameState
from ..models.player import ARMY_COLORS, Player, TurnState
from ..models.territory import TerritoryState
from ..utils import INITIAL_ARMIES, MAX_PLAYERS, MIN_PLAYERS, GameRNG
from .deck import create_deck
from .errors import ErrorCode, GameRuleError
from .map_graph import TERRITORIES

logger = logging.getLogger(__name__)


def create_game(
    game_id: str,
    player_names: Sequence[str],
    rng: Optional[GameRNG] = None,
    seed: Optional[int] = None,
) -> GameState:
    """Create a new game ready for the first player's REINFORCE phase.

    Args:
        game_id: Identifier for the game
        player_names: Display names in join order
        rng: Random source (created from `seed` if omitted)
        seed: Seed for a new random source, ignored when `rng` is given

    Returns:
        New GameState in REINFORCE phase

    Raises:
        GameRuleError: INVALID_PLAYER_COUNT or DUPLICATE_NAME
    """
    names = [name.strip() for name in player_names]

    if not (MIN_PLAYERS <= len(names) <= MAX_PLAYERS):
        raise GameRuleError(
            ErrorCode.INVALID_PLAYER_COUNT,
            f"Game must have {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(names)}",
        )
    if len(set(names)) != len(names):
        raise GameRuleError(ErrorCode.DUPLICATE_NAME, "Player names must be unique")

    if rng is None:
        rng = GameRNG(seed)

    players = create_players(names)
    turn_order = rng.shuffled([p.id for p in players])
    territories = distribute_territories_round_robin(turn_order, rng)
    distribute_remaining_armies(territories, players, INITIAL_ARMIES[len(players)], rng)

    game = GameState(
        game_id=game_id,
        phase=GamePhase.REINFORCE,
        players=players,
        turn_order=turn_order,
        current_player_index=0,
        territories=territories,
        deck=create_deck(rng),
        current_turn=TurnState(player_id=turn_order[0]),
        seed=rng.seed,
        rng=rng,
    )

    logger.info(
        f"Initialized game {game_id}: {len(players)} players, turn order {turn_order}"
    )
    return game


def create_players(names: Sequence[str]) -> List[Player]:
    """Create players with ids and colors assigned by join order."""
    return [
        Player(id=f"player-{index + 1}", name=name, color=ARMY_COLORS[index])
        for index, name in enumerate(names)
    ]


def distribute_territories_round_robin(
    turn_order: List[str], rng: GameRNG
) -> List[TerritoryState]:
    """Deal shuffled territories one at a time in turn order.

    Territory i goes to turn_order[i % N], so each player ends up with
    either floor(42 / N) or ceil(42 / N) territories. Every territory
    starts with exactly 1 army.
    """
    shuffled = rng.shuffled(TERRITORIES)
    return [
        TerritoryState(
            territory_id=territory.id,
            occupied_by=turn_order[index % len(turn_order)],
            armies=1,
        )
        for index, territory in enumerate(shuffled)
    ]


def distribute_remaining_armies(
    territories: List[TerritoryState],
    players: List[Player],
    total_armies_per_player: int,
    rng: GameRNG,
) -> None:
    """Place each player's leftover starting armies one at a time.

    Each player already has 1 army per owned territory; the rest of their
    pool goes to uniformly random territories they own.
    """
    for player in players:
        owned = [t for t in territories if t.occupied_by == player.id]
        remaining = total_armies_per_player - len(owned)
        for _ in range(remaining):
            owned[rng.randrange(len(owned))].armies += 1
