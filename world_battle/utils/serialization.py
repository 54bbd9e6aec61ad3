"""Game state serialization to/from JSON.

Keys use the camelCase wire names of the game's JSON format. The RNG
state is saved too, so a restored game rolls the same dice as the
saved game would have.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from ..models.card import Card
from ..models.game import GamePhase, GameState
from ..models.player import Player, TurnState
from ..models.territory import TerritoryState
from .rng import GameRNG


def save_game(game: GameState, filepath: str | Path) -> None:
    """Save game state to a JSON file.

    Args:
        game: Game state to save
        filepath: Destination path (parent directories are created)
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        json.dump(serialize_game(game), f, indent=2)


def load_game(filepath: str | Path) -> GameState:
    """Load game state from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If JSON is invalid or malformed
    """
    with open(Path(filepath)) as f:
        data = json.load(f)

    return deserialize_game(data)


def serialize_game(game: GameState) -> dict[str, Any]:
    """Convert GameState to a JSON-compatible dictionary."""
    return {
        "gameId": game.game_id,
        "phase": game.phase.value,
        "players": [_serialize_player(p) for p in game.players],
        "turnOrder": list(game.turn_order),
        "currentPlayerIndex": game.current_player_index,
        "territories": [_serialize_territory(t) for t in game.territories],
        "deck": [_serialize_card(c) for c in game.deck],
        "currentTurn": _serialize_turn(game.current_turn) if game.current_turn else None,
        "winner": game.winner,
        "createdAt": game.created_at.isoformat(),
        "lastModified": game.last_modified.isoformat(),
        "seed": game.seed,
        "rngState": game.rng.get_state(),
    }


def deserialize_game(data: dict[str, Any]) -> GameState:
    """Reconstruct GameState from a dictionary.

    Raises:
        ValueError: If a value is malformed
        KeyError: If a required key is missing
    """
    rng = GameRNG(data.get("seed"))
    if data.get("rngState") is not None:
        # JSON turns the state tuple and its inner tuple into lists
        state = data["rngState"]
        if isinstance(state, list):
            state = (state[0], tuple(state[1]), state[2])
        rng.set_state(state)

    current_turn = data.get("currentTurn")
    return GameState(
        game_id=data["gameId"],
        phase=GamePhase(data["phase"]),
        players=[_deserialize_player(p) for p in data["players"]],
        turn_order=list(data["turnOrder"]),
        current_player_index=data["currentPlayerIndex"],
        territories=[_deserialize_territory(t) for t in data["territories"]],
        deck=[_deserialize_card(c) for c in data.get("deck", [])],
        current_turn=_deserialize_turn(current_turn) if current_turn else None,
        winner=data.get("winner"),
        created_at=datetime.fromisoformat(data["createdAt"]),
        last_modified=datetime.fromisoformat(data["lastModified"]),
        seed=data.get("seed"),
        rng=rng,
    )


def _serialize_card(card: Card) -> dict[str, Any]:
    return {"id": card.id, "type": card.type.value, "territoryId": card.territory_id}


def _deserialize_card(data: dict[str, Any]) -> Card:
    return Card(id=data["id"], type=data["type"], territory_id=data.get("territoryId"))


def _serialize_player(player: Player) -> dict[str, Any]:
    """Convert Player to dictionary."""
    return {
        "id": player.id,
        "name": player.name,
        "color": player.color.value,
        "isEliminated": player.is_eliminated,
        "cards": [_serialize_card(c) for c in player.cards],
    }


def _deserialize_player(data: dict[str, Any]) -> Player:
    """Reconstruct Player from dictionary."""
    return Player(
        id=data["id"],
        name=data["name"],
        color=data["color"],
        is_eliminated=data.get("isEliminated", False),
        cards=[_deserialize_card(c) for c in data.get("cards", [])],
    )


def _serialize_territory(territory: TerritoryState) -> dict[str, Any]:
    return {
        "territoryId": territory.territory_id,
        "occupiedBy": territory.occupied_by,
        "armies": territory.armies,
    }


def _deserialize_territory(data: dict[str, Any]) -> TerritoryState:
    return TerritoryState(
        territory_id=data["territoryId"],
        occupied_by=data.get("occupiedBy"),
        armies=data["armies"],
    )


def _serialize_turn(turn: TurnState) -> dict[str, Any]:
    return {
        "playerId": turn.player_id,
        "reinforcementsRemaining": turn.reinforcements_remaining,
        "conqueredTerritoryThisTurn": turn.conquered_territory_this_turn,
    }


def _deserialize_turn(data: dict[str, Any]) -> TurnState:
    return TurnState(
        player_id=data["playerId"],
        reinforcements_remaining=data.get("reinforcementsRemaining", 0),
        conquered_territory_this_turn=data.get("conqueredTerritoryThisTurn", False),
    )
