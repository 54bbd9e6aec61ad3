"""Tests for the turn and phase state machine."""

import pytest

from world_battle.engine.cards import TradeInResult
from world_battle.engine.errors import ErrorCode, GameRuleError
from world_battle.engine.initializer import create_game
from world_battle.engine.map_graph import neighbors, territory_ids
from world_battle.engine.reinforcements import calculate_reinforcements
from world_battle.engine.turn_machine import TurnStateMachine
from world_battle.models import (
    ARMY_COLORS,
    ArmyPlacement,
    Card,
    CardType,
    GamePhase,
    GameState,
    Player,
    TerritoryState,
    TurnState,
)
from world_battle.utils import GameRNG


class ScriptedRNG(GameRNG):
    """Returns pre-set die values in order (attacker dice first, then defender)."""

    def __init__(self, rolls):
        super().__init__(0)
        self.rolls = list(rolls)

    def randint(self, a, b):
        return self.rolls.pop(0)


def started_game(seed=42, names=("Alice", "Bob")):
    """Freshly set up game with the first turn begun."""
    game = create_game("g1", list(names), seed=seed)
    return TurnStateMachine().begin_turn(game)


def make_game(
    assignments, phase=GamePhase.ATTACK, player_count=2, default_owner="player-2", rng=None
):
    """Game in the given phase with player-1 to move.

    Territories not listed belong to default_owner with 1 army each.
    """
    players = [
        Player(id=f"player-{i + 1}", name=f"P{i + 1}", color=ARMY_COLORS[i])
        for i in range(player_count)
    ]
    territories = []
    for tid in territory_ids():
        owner, armies = assignments.get(tid, (default_owner, 1))
        territories.append(TerritoryState(tid, owner, armies))
    return GameState(
        game_id="g1",
        phase=phase,
        players=players,
        turn_order=[p.id for p in players],
        territories=territories,
        deck=[Card("card-1", CardType.INFANTRY), Card("card-2", CardType.CAVALRY)],
        current_turn=TurnState(player_id="player-1"),
        rng=rng or GameRNG(42),
    )


def current(game):
    return game.current_turn.player_id


def owned(game, player_id):
    return [t.territory_id for t in game.player_territories(player_id)]


class TestBeginTurn:
    def test_first_turn_reinforcements(self):
        game = started_game()

        player_id = game.turn_order[0]
        assert game.phase == GamePhase.REINFORCE
        assert current(game) == player_id
        assert game.current_turn.reinforcements_remaining == calculate_reinforcements(
            game, player_id
        )
        assert game.current_turn.reinforcements_remaining >= 3


class TestReinforcePhase:
    def test_place_all_and_end_phase(self):
        machine = TurnStateMachine()
        game = started_game()
        player_id = current(game)
        target = owned(game, player_id)[0]
        before = game.get_territory_state(target).armies
        count = game.current_turn.reinforcements_remaining

        machine.place_reinforcements(game, player_id, [ArmyPlacement(target, count)])
        assert game.get_territory_state(target).armies == before + count
        assert game.current_turn.reinforcements_remaining == 0

        machine.end_reinforcement_phase(game, player_id)
        assert game.phase == GamePhase.ATTACK

    def test_split_placements(self):
        machine = TurnStateMachine()
        game = started_game()
        player_id = current(game)
        first, second = owned(game, player_id)[:2]
        count = game.current_turn.reinforcements_remaining

        machine.place_reinforcements(
            game, player_id, [ArmyPlacement(first, 1), ArmyPlacement(second, 1)]
        )

        assert game.current_turn.reinforcements_remaining == count - 2

    def test_too_many_armies(self):
        machine = TurnStateMachine()
        game = started_game()
        player_id = current(game)
        target = owned(game, player_id)[0]
        count = game.current_turn.reinforcements_remaining

        with pytest.raises(GameRuleError, match="Not enough reinforcements") as exc_info:
            machine.place_reinforcements(game, player_id, [ArmyPlacement(target, count + 1)])
        assert exc_info.value.code == ErrorCode.NOT_ENOUGH_REINFORCEMENTS
        assert game.current_turn.reinforcements_remaining == count

    def test_batch_rejected_as_a_whole(self):
        machine = TurnStateMachine()
        game = started_game()
        player_id = current(game)
        mine = owned(game, player_id)[0]
        enemy = next(t.territory_id for t in game.territories if t.occupied_by != player_id)
        before = game.get_territory_state(mine).armies

        with pytest.raises(GameRuleError) as exc_info:
            machine.place_reinforcements(
                game, player_id, [ArmyPlacement(mine, 1), ArmyPlacement(enemy, 1)]
            )

        assert exc_info.value.code == ErrorCode.NOT_OWNER
        assert game.get_territory_state(mine).armies == before

    def test_invalid_placements(self):
        machine = TurnStateMachine()
        game = started_game()
        player_id = current(game)
        mine = owned(game, player_id)[0]

        for placements, code in [
            ([], ErrorCode.INVALID_ARMY_COUNT),
            ([ArmyPlacement(mine, 0)], ErrorCode.INVALID_ARMY_COUNT),
            ([ArmyPlacement("atlantis", 1)], ErrorCode.TERRITORY_NOT_FOUND),
        ]:
            with pytest.raises(GameRuleError) as exc_info:
                machine.place_reinforcements(game, player_id, placements)
            assert exc_info.value.code == code

    def test_not_your_turn(self):
        machine = TurnStateMachine()
        game = started_game()
        other = game.turn_order[1]

        with pytest.raises(GameRuleError, match="Not your turn") as exc_info:
            machine.place_reinforcements(game, other, [ArmyPlacement(owned(game, other)[0], 1)])
        assert exc_info.value.code == ErrorCode.NOT_YOUR_TURN

    def test_end_phase_with_armies_remaining(self):
        machine = TurnStateMachine()
        game = started_game()

        with pytest.raises(GameRuleError, match="Must place all reinforcements") as exc_info:
            machine.end_reinforcement_phase(game, current(game))
        assert exc_info.value.code == ErrorCode.REINFORCEMENTS_REMAINING
        assert game.phase == GamePhase.REINFORCE

    def test_end_phase_requires_mandatory_trade(self):
        machine = TurnStateMachine()
        game = make_game({"alaska": ("player-1", 3)}, phase=GamePhase.REINFORCE)
        game.get_player("player-1").cards = [
            Card(f"card-{i}", CardType.INFANTRY) for i in range(1, 6)
        ]

        with pytest.raises(GameRuleError, match="Must trade in cards") as exc_info:
            machine.end_reinforcement_phase(game, "player-1")
        assert exc_info.value.code == ErrorCode.MUST_TRADE_CARDS

    def test_trade_cards(self):
        machine = TurnStateMachine()
        game = make_game({"alaska": ("player-1", 3)}, phase=GamePhase.REINFORCE)
        player = game.get_player("player-1")
        player.cards = [
            Card("card-1", CardType.INFANTRY),
            Card("card-2", CardType.CAVALRY),
            Card("card-3", CardType.ARTILLERY),
            Card("card-4", CardType.ARTILLERY),
        ]

        game, result = machine.trade_cards(game, "player-1", ["card-1", "card-2", "card-3"])

        assert isinstance(result, TradeInResult)
        assert result.armies_awarded == 8
        assert game.current_turn.reinforcements_remaining == 8
        assert [c.id for c in player.cards] == ["card-4"]

    def test_failed_trade_keeps_hand(self):
        machine = TurnStateMachine()
        game = make_game({"alaska": ("player-1", 3)}, phase=GamePhase.REINFORCE)
        player = game.get_player("player-1")
        player.cards = [
            Card("card-1", CardType.INFANTRY),
            Card("card-2", CardType.INFANTRY),
            Card("card-3", CardType.CAVALRY),
        ]

        with pytest.raises(GameRuleError):
            machine.trade_cards(game, "player-1", ["card-1", "card-2", "card-3"])
        assert len(player.cards) == 3
        assert game.current_turn.reinforcements_remaining == 0

    def test_trade_outside_reinforce_phase(self):
        machine = TurnStateMachine()
        game = make_game({"alaska": ("player-1", 3)}, phase=GamePhase.ATTACK)
        with pytest.raises(GameRuleError, match="Invalid phase") as exc_info:
            machine.trade_cards(game, "player-1", ["card-1", "card-2", "card-3"])
        assert exc_info.value.code == ErrorCode.INVALID_PHASE

    def test_no_active_turn(self):
        machine = TurnStateMachine()
        game = make_game({"alaska": ("player-1", 3)}, phase=GamePhase.REINFORCE)
        game.current_turn = None
        with pytest.raises(GameRuleError) as exc_info:
            machine.place_reinforcements(game, "player-1", [ArmyPlacement("alaska", 1)])
        assert exc_info.value.code == ErrorCode.NO_ACTIVE_TURN

    def test_reinforcement_info(self):
        machine = TurnStateMachine()
        game = started_game()
        player_id = current(game)

        info = machine.reinforcement_info(game, player_id)

        assert info.total == calculate_reinforcements(game, player_id)
        assert info.total == info.territory_bonus + info.continent_bonus
        assert info.reinforcements_remaining == info.total
        assert not info.can_trade_cards
        assert not info.must_trade_cards
        assert info.possible_card_sets == []


class TestAttackPhase:
    def test_attack_in_reinforce_phase_rejected(self):
        machine = TurnStateMachine()
        game = make_game({"alaska": ("player-1", 5)}, phase=GamePhase.REINFORCE)
        with pytest.raises(GameRuleError) as exc_info:
            machine.attack(game, "player-1", "alaska", "kamchatka")
        assert exc_info.value.code == ErrorCode.INVALID_PHASE

    def test_conquest_sets_card_flag(self):
        machine = TurnStateMachine()
        game = make_game(
            {"alaska": ("player-1", 4), "peru": ("player-1", 1)},
            rng=ScriptedRNG([6, 6, 6, 1]),
        )

        game, result = machine.attack(game, "player-1", "alaska", "kamchatka")

        assert result.territory_conquered
        assert result.eliminated_players == []
        assert game.current_turn.conquered_territory_this_turn
        assert game.phase == GamePhase.ATTACK

    def test_elimination_and_victory(self):
        """Taking the last territory eliminates the defender and ends the game."""
        machine = TurnStateMachine()
        game = make_game(
            {"alaska": ("player-1", 5), "kamchatka": ("player-2", 1)},
            default_owner="player-1",
            rng=ScriptedRNG([6, 6, 6, 1]),
        )
        loser = game.get_player("player-2")
        loser.cards = [Card("card-9", CardType.CAVALRY)]

        game, result = machine.attack(game, "player-1", "alaska", "kamchatka")

        assert result.eliminated_players == ["player-2"]
        assert loser.is_eliminated
        assert loser.cards == []
        assert [c.id for c in game.get_player("player-1").cards] == ["card-9"]
        assert game.phase == GamePhase.GAME_OVER
        assert game.winner == "player-1"

        # Nothing is accepted once the game is over
        with pytest.raises(GameRuleError) as exc_info:
            machine.attack(game, "player-1", "alaska", "kamchatka")
        assert exc_info.value.code == ErrorCode.INVALID_PHASE
        with pytest.raises(GameRuleError):
            machine.end_turn(game, "player-1")

    def test_elimination_without_victory(self):
        machine = TurnStateMachine()
        game = make_game(
            {"alaska": ("player-1", 5), "kamchatka": ("player-2", 1), "peru": ("player-3", 1)},
            default_owner="player-1",
            player_count=3,
            rng=ScriptedRNG([6, 6, 6, 1]),
        )

        game, result = machine.attack(game, "player-1", "alaska", "kamchatka")

        assert result.eliminated_players == ["player-2"]
        assert game.phase == GamePhase.ATTACK
        assert game.winner is None

    def test_auto_attack(self):
        machine = TurnStateMachine()
        game = make_game({"alaska": ("player-1", 10), "peru": ("player-1", 1)}, rng=GameRNG(3))

        game, result = machine.auto_attack(game, "player-1", "alaska", "kamchatka")

        assert result.rolls
        assert result.territory_conquered or game.get_territory_state("alaska").armies == 1
        assert game.current_turn.conquered_territory_this_turn == result.territory_conquered

    def test_move_armies_after_conquest(self):
        machine = TurnStateMachine()
        game = make_game({"alaska": ("player-1", 6), "kamchatka": ("player-1", 1)})

        machine.move_armies(game, "player-1", "alaska", "kamchatka", 3)

        assert game.get_territory_state("alaska").armies == 3
        assert game.get_territory_state("kamchatka").armies == 4

    def test_move_armies_from_enemy_territory(self):
        machine = TurnStateMachine()
        game = make_game({"alaska": ("player-1", 6)})
        with pytest.raises(GameRuleError) as exc_info:
            machine.move_armies(game, "player-1", "kamchatka", "yakutsk", 0)
        assert exc_info.value.code == ErrorCode.NOT_OWNER

    def test_end_attack_phase_awards_card_once(self):
        machine = TurnStateMachine()
        game = make_game({"alaska": ("player-1", 3)})
        game.current_turn.conquered_territory_this_turn = True

        machine.end_attack_phase(game, "player-1")

        assert game.phase == GamePhase.FORTIFY
        assert [c.id for c in game.get_player("player-1").cards] == ["card-1"]
        assert [c.id for c in game.deck] == ["card-2"]
        assert not game.current_turn.conquered_territory_this_turn

        machine.end_turn(game, "player-1")
        assert len(game.get_player("player-1").cards) == 1

    def test_no_card_without_conquest(self):
        machine = TurnStateMachine()
        game = make_game({"alaska": ("player-1", 3)})

        machine.end_attack_phase(game, "player-1")

        assert game.get_player("player-1").cards == []
        assert len(game.deck) == 2

    def test_no_card_when_deck_empty(self):
        machine = TurnStateMachine()
        game = make_game({"alaska": ("player-1", 3)})
        game.deck = []
        game.current_turn.conquered_territory_this_turn = True

        machine.end_attack_phase(game, "player-1")

        assert game.get_player("player-1").cards == []
        assert game.phase == GamePhase.FORTIFY


class TestFortifyPhase:
    def test_fortify(self):
        machine = TurnStateMachine()
        game = make_game(
            {"alaska": ("player-1", 5), "alberta": ("player-1", 1)}, phase=GamePhase.FORTIFY
        )

        machine.fortify(game, "player-1", "alaska", "alberta", 2)
        machine.fortify(game, "player-1", "alaska", "alberta", 1)

        assert game.get_territory_state("alaska").armies == 2
        assert game.get_territory_state("alberta").armies == 4

    def test_fortify_in_attack_phase_rejected(self):
        machine = TurnStateMachine()
        game = make_game({"alaska": ("player-1", 5), "alberta": ("player-1", 1)})
        with pytest.raises(GameRuleError) as exc_info:
            machine.fortify(game, "player-1", "alaska", "alberta", 2)
        assert exc_info.value.code == ErrorCode.INVALID_PHASE


class TestEndTurn:
    def test_end_turn_rotates_and_begins_next_turn(self):
        machine = TurnStateMachine()
        game = make_game({"alaska": ("player-1", 3)}, phase=GamePhase.FORTIFY)

        machine.end_turn(game, "player-1")

        assert game.current_player_index == 1
        assert current(game) == "player-2"
        assert game.phase == GamePhase.REINFORCE
        assert game.current_turn.reinforcements_remaining == calculate_reinforcements(
            game, "player-2"
        )

    def test_end_turn_from_attack_awards_card(self):
        machine = TurnStateMachine()
        game = make_game({"alaska": ("player-1", 3)})
        game.current_turn.conquered_territory_this_turn = True

        machine.end_turn(game, "player-1")

        assert [c.id for c in game.get_player("player-1").cards] == ["card-1"]
        assert current(game) == "player-2"
        assert not game.current_turn.conquered_territory_this_turn

    def test_end_turn_in_reinforce_phase_rejected(self):
        machine = TurnStateMachine()
        game = started_game()
        with pytest.raises(GameRuleError, match="ATTACK or FORTIFY") as exc_info:
            machine.end_turn(game, current(game))
        assert exc_info.value.code == ErrorCode.INVALID_PHASE

    def test_end_turn_skips_eliminated_players(self):
        machine = TurnStateMachine()
        game = make_game(
            {"alaska": ("player-1", 3), "peru": ("player-3", 1)},
            default_owner="player-1",
            player_count=3,
            phase=GamePhase.FORTIFY,
        )
        game.get_player("player-2").is_eliminated = True

        machine.end_turn(game, "player-1")

        assert current(game) == "player-3"
        assert game.current_player_index == 2

    def test_turn_order_wraps_around(self):
        machine = TurnStateMachine()
        game = make_game({"alaska": ("player-1", 3)}, phase=GamePhase.FORTIFY)
        game.current_player_index = 1
        game.current_turn = TurnState(player_id="player-2")

        machine.end_turn(game, "player-2")

        assert current(game) == "player-1"
        assert game.current_player_index == 0


def test_full_turn_cycle_keeps_territory_partition():
    """Play a few complete turns with every player attacking where possible."""
    machine = TurnStateMachine()
    game = started_game(seed=7, names=("Alice", "Bob", "Carol"))

    for _ in range(6):
        player_id = current(game)
        border = next(
            t.territory_id
            for t in game.player_territories(player_id)
            if any(
                game.get_territory_state(n).occupied_by != player_id
                for n in neighbors(t.territory_id)
            )
        )
        machine.place_reinforcements(
            game,
            player_id,
            [ArmyPlacement(border, game.current_turn.reinforcements_remaining)],
        )
        machine.end_reinforcement_phase(game, player_id)

        target = next(
            n for n in neighbors(border) if game.get_territory_state(n).occupied_by != player_id
        )
        machine.auto_attack(game, player_id, border, target)
        if game.phase == GamePhase.GAME_OVER:
            break

        machine.end_attack_phase(game, player_id)
        machine.end_turn(game, player_id)

        assert len(game.territories) == 42
        assert all(t.armies >= 1 and t.occupied_by for t in game.territories)
