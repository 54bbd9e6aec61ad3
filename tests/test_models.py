"""Tests for data models and error classification."""

import pytest

from world_battle.engine.errors import ErrorCategory, ErrorCode, GameRuleError
from world_battle.models import (
    ArmyColor,
    Card,
    CardType,
    GamePhase,
    GameState,
    Player,
    TerritoryState,
    TurnState,
)
from world_battle.utils import GameRNG


class TestCard:
    """Test Card dataclass."""

    def test_create_card(self):
        card = Card(id="card-1", type=CardType.INFANTRY, territory_id="alaska")
        assert card.id == "card-1"
        assert card.type == CardType.INFANTRY
        assert card.territory_id == "alaska"

    def test_card_type_coerced_from_string(self):
        card = Card(id="card-2", type="CAVALRY")
        assert card.type is CardType.CAVALRY

    def test_empty_id_rejected(self):
        with pytest.raises(ValueError, match="Card id cannot be empty"):
            Card(id="", type=CardType.ARTILLERY)


class TestPlayer:
    """Test Player and TurnState dataclasses."""

    def test_create_player(self):
        player = Player(id="player-1", name="Alice", color=ArmyColor.RED)
        assert not player.is_eliminated
        assert player.cards == []

    def test_color_coerced_from_string(self):
        player = Player(id="player-2", name="Bob", color="BLUE")
        assert player.color is ArmyColor.BLUE

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError, match="name cannot be empty"):
            Player(id="player-1", name="", color=ArmyColor.RED)

    def test_negative_reinforcements_rejected(self):
        with pytest.raises(ValueError, match="Invalid reinforcements_remaining"):
            TurnState(player_id="player-1", reinforcements_remaining=-1)


class TestTerritoryState:
    def test_negative_armies_rejected(self):
        with pytest.raises(ValueError, match="Invalid armies"):
            TerritoryState(territory_id="alaska", occupied_by="player-1", armies=-1)


class TestGameState:
    """Test GameState dataclass."""

    def create_players(self):
        return [
            Player(id="player-1", name="Alice", color=ArmyColor.RED),
            Player(id="player-2", name="Bob", color=ArmyColor.BLUE),
        ]

    def test_create_game_state_creates_rng(self):
        game = GameState(game_id="g1", seed=42)
        assert isinstance(game.rng, GameRNG)
        assert game.phase == GamePhase.SETUP
        assert game.current_turn is None

    def test_phase_coerced_from_string(self):
        game = GameState(game_id="g1", phase="ATTACK")
        assert game.phase is GamePhase.ATTACK

    def test_invalid_current_player_index(self):
        with pytest.raises(ValueError, match="Invalid current_player_index"):
            GameState(
                game_id="g1",
                players=self.create_players(),
                turn_order=["player-1", "player-2"],
                current_player_index=2,
            )

    def test_invalid_winner(self):
        with pytest.raises(ValueError, match="Invalid winner"):
            GameState(game_id="g1", players=self.create_players(), winner="player-9")

    def test_lookup_helpers(self):
        game = GameState(
            game_id="g1",
            players=self.create_players(),
            turn_order=["player-2", "player-1"],
            territories=[
                TerritoryState("alaska", "player-1", 3),
                TerritoryState("kamchatka", "player-2", 1),
            ],
        )

        assert game.current_player_id == "player-2"
        assert game.current_player().name == "Bob"
        assert game.get_player("player-9") is None
        assert game.get_territory_state("alaska").armies == 3
        assert game.get_territory_state("atlantis") is None
        assert [t.territory_id for t in game.player_territories("player-1")] == ["alaska"]

    def test_active_players_excludes_eliminated(self):
        players = self.create_players()
        players[1].is_eliminated = True
        game = GameState(game_id="g1", players=players)
        assert [p.id for p in game.active_players()] == ["player-1"]

    def test_touch_updates_last_modified(self):
        game = GameState(game_id="g1")
        before = game.last_modified
        game.touch()
        assert game.last_modified >= before


class TestErrors:
    """Test error codes and their categories."""

    def test_categories(self):
        assert ErrorCode.GAME_NOT_FOUND.category == ErrorCategory.IDENTITY
        assert ErrorCode.TERRITORY_NOT_FOUND.category == ErrorCategory.IDENTITY
        assert ErrorCode.NOT_YOUR_TURN.category == ErrorCategory.AUTHORIZATION
        assert ErrorCode.NOT_CREATOR.category == ErrorCategory.AUTHORIZATION
        assert ErrorCode.INVALID_PHASE.category == ErrorCategory.STATE
        assert ErrorCode.GAME_FULL.category == ErrorCategory.STATE
        assert ErrorCode.NOT_ADJACENT.category == ErrorCategory.RULE
        assert ErrorCode.INVALID_CARD_SET.category == ErrorCategory.RULE

    def test_every_code_has_a_category(self):
        for code in ErrorCode:
            assert isinstance(code.category, ErrorCategory)

    def test_game_rule_error(self):
        error = GameRuleError(ErrorCode.SELF_ATTACK, "Cannot attack your own territory")
        assert str(error) == "Cannot attack your own territory"
        assert error.code == ErrorCode.SELF_ATTACK
        assert error.category == ErrorCategory.RULE
        assert "SELF_ATTACK" in repr(error)
