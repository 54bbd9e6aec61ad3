"""Fortify phase: moving armies between a player's own territories.

This module handles:
1. Connectivity through owned territories (breadth-first search)
2. Fortify move validation
3. Army transfer

Armies may travel any distance as long as every territory on the way is
owned by the moving player.
"""

from collections import deque

from ..models.game import GameState
from .errors import ErrorCode, GameRuleError
from .map_graph import neighbors


def are_territories_connected(
    game: GameState, player_id: str, from_territory_id: str, to_territory_id: str
) -> bool:
    """Check for a path between two territories through the player's land.

    Both endpoints and every territory in between must be occupied by
    `player_id`.

    Args:
        game: Current game state
        player_id: Player whose territories form the path
        from_territory_id: Start of the path
        to_territory_id: End of the path

    Returns:
        True if a path exists
    """
    owned = {t.territory_id for t in game.player_territories(player_id)}
    if from_territory_id not in owned or to_territory_id not in owned:
        return False

    visited = {from_territory_id}
    queue = deque([from_territory_id])
    while queue:
        current = queue.popleft()
        if current == to_territory_id:
            return True
        for neighbor in neighbors(current):
            if neighbor in owned and neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)

    return False


def validate_fortify(
    game: GameState,
    player_id: str,
    from_territory_id: str,
    to_territory_id: str,
    armies: int,
) -> None:
    """Check a fortify move. Raises GameRuleError if invalid.

    Args:
        game: Current game state
        player_id: Player moving armies
        from_territory_id: Source territory
        to_territory_id: Destination territory
        armies: Number of armies to move (must be >= 1)

    Raises:
        GameRuleError: If the move is not allowed
    """
    if armies < 1:
        raise GameRuleError(
            ErrorCode.INVALID_ARMY_COUNT, f"Must move at least 1 army, got {armies}"
        )
    if from_territory_id == to_territory_id:
        raise GameRuleError(
            ErrorCode.INVALID_MOVE, "Source and destination territories must differ"
        )

    from_territory = game.get_territory_state(from_territory_id)
    to_territory = game.get_territory_state(to_territory_id)
    if from_territory is None:
        raise GameRuleError(
            ErrorCode.TERRITORY_NOT_FOUND, f"Territory '{from_territory_id}' not found"
        )
    if to_territory is None:
        raise GameRuleError(
            ErrorCode.TERRITORY_NOT_FOUND, f"Territory '{to_territory_id}' not found"
        )

    if from_territory.occupied_by != player_id or to_territory.occupied_by != player_id:
        raise GameRuleError(ErrorCode.NOT_OWNER, "You must own both territories")
    if from_territory.armies <= armies:
        raise GameRuleError(
            ErrorCode.INSUFFICIENT_ARMIES,
            f"Must leave at least 1 army in {from_territory_id}: "
            f"requested {armies}, available {from_territory.armies}",
        )
    if not are_territories_connected(game, player_id, from_territory_id, to_territory_id):
        raise GameRuleError(
            ErrorCode.NOT_CONNECTED,
            "Territories must be connected through your own territories",
        )


def fortify_armies(
    game: GameState,
    player_id: str,
    from_territory_id: str,
    to_territory_id: str,
    armies: int,
) -> None:
    """Validate and execute a fortify move."""
    validate_fortify(game, player_id, from_territory_id, to_territory_id, armies)

    game.get_territory_state(from_territory_id).armies -= armies
    game.get_territory_state(to_territory_id).armies += armies
