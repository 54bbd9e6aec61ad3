"""Reinforcement accounting.

Reinforcements at the start of a turn are:
- Territory bonus: owned territories // 3, minimum 3
- Continent bonus: bonus armies of every continent the player fully owns

All functions are pure; they only read the game state.
"""

from dataclasses import dataclass, field
from typing import List

from ..models.game import GameState
from ..utils import MIN_TERRITORY_BONUS, TERRITORIES_PER_BONUS_ARMY
from .map_graph import CONTINENTS, get_continent


@dataclass
class ContinentBonus:
    """A fully controlled continent and what it is worth."""

    id: str
    name: str
    bonus: int


@dataclass
class ReinforcementBreakdown:
    """Reinforcements split by source, for display."""

    territory_bonus: int
    continent_bonus: int
    controlled_continents: List[ContinentBonus] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.territory_bonus + self.continent_bonus


def calculate_territory_bonus(game: GameState, player_id: str) -> int:
    territory_count = len(game.player_territories(player_id))
    return max(MIN_TERRITORY_BONUS, territory_count // TERRITORIES_PER_BONUS_ARMY)


def player_controls_continent(game: GameState, player_id: str, continent_id: str) -> bool:
    """Check whether a player owns every territory of a continent."""
    continent = get_continent(continent_id)
    if continent is None:
        return False

    for territory_id in continent.territory_ids:
        territory = game.get_territory_state(territory_id)
        if territory is None or territory.occupied_by != player_id:
            return False
    return True


def controlled_continents(game: GameState, player_id: str) -> List[ContinentBonus]:
    return [
        ContinentBonus(id=c.id, name=c.name, bonus=c.bonus_armies)
        for c in CONTINENTS
        if player_controls_continent(game, player_id, c.id)
    ]


def calculate_continent_bonus(game: GameState, player_id: str) -> int:
    return sum(c.bonus for c in controlled_continents(game, player_id))


def calculate_reinforcements(game: GameState, player_id: str) -> int:
    """Total reinforcement armies for a player's next turn."""
    return calculate_territory_bonus(game, player_id) + calculate_continent_bonus(
        game, player_id
    )


def reinforcement_breakdown(game: GameState, player_id: str) -> ReinforcementBreakdown:
    """Reinforcements with the controlled continents listed.

    Args:
        game: Current game state
        player_id: Player to compute for

    Returns:
        ReinforcementBreakdown (total = territory_bonus + continent_bonus)
    """
    continents = controlled_continents(game, player_id)
    return ReinforcementBreakdown(
        territory_bonus=calculate_territory_bonus(game, player_id),
        continent_bonus=sum(c.bonus for c in continents),
        controlled_continents=continents,
    )
