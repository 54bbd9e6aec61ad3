#!/usr/bin/env python3
"""World Battle - self-play entry point.

Runs a full game between simple random bots through the lobby and the
action service, printing the lifecycle log and a final summary.
"""

import argparse
import logging
import sys

from world_battle.engine.cards import must_trade_in, recommended_trade_set
from world_battle.engine.map_graph import neighbors
from world_battle.engine.movement import are_territories_connected
from world_battle.models.game import GamePhase, GameState
from world_battle.server import GameActionService, GameService, GameStore
from world_battle.server.schemas.requests import (
    AttackRequest,
    FortifyRequest,
    MoveArmiesRequest,
    PlaceReinforcementsRequest,
    PlayerActionRequest,
    TradeCardsRequest,
)
from world_battle.utils import MAX_PLAYERS, MIN_PLAYERS, RNG_SEED_DEFAULT, GameRNG
from world_battle.utils.serialization import save_game

logger = logging.getLogger(__name__)

MAX_ATTACKS_PER_TURN = 10


class RandomBot:
    """Plays whole turns with random but legal choices."""

    def __init__(self, actions: GameActionService, rng: GameRNG):
        self.actions = actions
        self.rng = rng

    def play_turn(self, game_id: str, game: GameState, player_id: str) -> None:
        self._reinforce(game_id, game, player_id)
        self._attack(game_id, game, player_id)
        if game.phase == GamePhase.GAME_OVER:
            return

        self.actions.end_attack_phase(game_id, PlayerActionRequest(playerId=player_id))
        self._fortify(game_id, game, player_id)
        self.actions.end_turn(game_id, PlayerActionRequest(playerId=player_id))

    def _reinforce(self, game_id: str, game: GameState, player_id: str) -> None:
        player = game.get_player(player_id)
        card_set = recommended_trade_set(player)
        while card_set and (must_trade_in(player) or self.rng.randint(0, 1)):
            self.actions.trade_cards(
                game_id, TradeCardsRequest(playerId=player_id, cardIds=card_set)
            )
            card_set = recommended_trade_set(player)

        remaining = game.current_turn.reinforcements_remaining
        if remaining > 0:
            target = self.rng.choice(self._frontline(game, player_id))
            self.actions.place_reinforcements(
                game_id,
                PlaceReinforcementsRequest(
                    playerId=player_id,
                    placements=[{"territoryId": target, "armies": remaining}],
                ),
            )
        self.actions.end_reinforcement_phase(game_id, PlayerActionRequest(playerId=player_id))

    def _attack(self, game_id: str, game: GameState, player_id: str) -> None:
        for _ in range(MAX_ATTACKS_PER_TURN):
            options = [
                (t.territory_id, n)
                for t in game.player_territories(player_id)
                if t.armies >= 3
                for n in neighbors(t.territory_id)
                if game.get_territory_state(n).occupied_by != player_id
            ]
            if not options:
                return

            source, target = self.rng.choice(options)
            response = self.actions.auto_attack(
                game_id, AttackRequest(playerId=player_id, **{"from": source, "to": target})
            )
            if response.winner:
                return
            if response.territoryConquered:
                extra = game.get_territory_state(source).armies // 2
                self.actions.move_armies(
                    game_id,
                    MoveArmiesRequest(
                        playerId=player_id, armies=extra, **{"from": source, "to": target}
                    ),
                )

    def _fortify(self, game_id: str, game: GameState, player_id: str) -> None:
        interior = [
            t
            for t in game.player_territories(player_id)
            if t.armies > 1 and t.territory_id not in self._frontline(game, player_id)
        ]
        if not interior:
            return

        source = self.rng.choice(interior)
        targets = [
            tid
            for tid in self._frontline(game, player_id)
            if are_territories_connected(game, player_id, source.territory_id, tid)
        ]
        if not targets:
            return

        self.actions.fortify(
            game_id,
            FortifyRequest(
                playerId=player_id,
                armies=source.armies - 1,
                **{"from": source.territory_id, "to": self.rng.choice(targets)},
            ),
        )

    def _frontline(self, game: GameState, player_id: str) -> list[str]:
        """Owned territories bordering an enemy (all owned ones if none do)."""
        owned = [t.territory_id for t in game.player_territories(player_id)]
        border = [
            tid
            for tid in owned
            if any(game.get_territory_state(n).occupied_by != player_id for n in neighbors(tid))
        ]
        return border or owned


def run_game(player_count: int, seed: int, max_turns: int) -> GameState:
    """Set up a game through the lobby and let the bots play it out."""
    store = GameStore()
    lobby = GameService(store, rng=GameRNG(seed))
    actions = GameActionService(store, lobby.machine)
    bot = RandomBot(actions, GameRNG(seed))

    created = lobby.create_game("Player 1", seed=seed)
    for index in range(2, player_count + 1):
        lobby.join_game(created.game_id, f"Player {index}")
    game = lobby.start_game(created.game_id, "player-1")

    turns = 0
    while game.phase != GamePhase.GAME_OVER and turns < max_turns:
        bot.play_turn(created.game_id, game, game.current_player_id)
        turns += 1

    logger.info(f"Stopped after {turns} turns")
    return game


def print_summary(game: GameState) -> None:
    print("\n" + "=" * 60)
    if game.winner:
        print(f"Winner: {game.get_player(game.winner).name}")
    else:
        print("No winner (turn limit reached)")
    print("=" * 60)
    for player in game.players:
        territories = game.player_territories(player.id)
        armies = sum(t.armies for t in territories)
        status = "eliminated" if player.is_eliminated else f"{len(territories)} territories"
        print(f"  {player.name:<12} {status:<16} {armies:>4} armies  {len(player.cards)} cards")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="World Battle - Risk-style self-play",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                # 3 bots, seed 42
  %(prog)s --players 6 --seed 7           # 6 bots, specific seed
  %(prog)s --max-turns 50 --save out.json # Stop after 50 turns and save
        """,
    )
    parser.add_argument(
        "--players",
        type=int,
        default=3,
        help=f"Number of bot players, {MIN_PLAYERS}-{MAX_PLAYERS} (default: 3)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=RNG_SEED_DEFAULT,
        help=f"Random seed for the game and the bots (default: {RNG_SEED_DEFAULT})",
    )
    parser.add_argument(
        "--max-turns",
        type=int,
        default=500,
        help="Stop after this many turns if nobody has won (default: 500)",
    )
    parser.add_argument(
        "--save",
        type=str,
        metavar="FILE",
        help="Save final game state to JSON file",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging (dice rolls)")

    args = parser.parse_args()

    log_level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    if not (MIN_PLAYERS <= args.players <= MAX_PLAYERS):
        print(f"Error: --players must be between {MIN_PLAYERS} and {MAX_PLAYERS}")
        sys.exit(1)

    try:
        game = run_game(args.players, args.seed, args.max_turns)
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user. Exiting...")
        sys.exit(0)

    print_summary(game)

    if args.save:
        save_game(game, args.save)
        print(f"\nGame saved to {args.save}")


if __name__ == "__main__":
    main()
