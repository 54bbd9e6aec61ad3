"""Player and per-turn bookkeeping models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .card import Card


class ArmyColor(str, Enum):
    """Army colors, assigned to players in join order."""

    RED = "RED"
    BLUE = "BLUE"
    GREEN = "GREEN"
    YELLOW = "YELLOW"
    BLACK = "BLACK"
    PURPLE = "PURPLE"


# Join order -> color
ARMY_COLORS = list(ArmyColor)


@dataclass
class Player:
    """A participant in a game.

    Eliminated players stay in the roster (and in the turn order) so that
    their id keeps resolving, but they own no territories and hold no cards.
    """

    id: str  # "player-1" .. "player-6"
    name: str
    color: ArmyColor
    is_eliminated: bool = False
    cards: List[Card] = field(default_factory=list)

    def __post_init__(self):
        """Validate player data after initialization."""
        if not self.id:
            raise ValueError("Player id cannot be empty")
        if not self.name:
            raise ValueError("Player name cannot be empty")
        if not isinstance(self.color, ArmyColor):
            self.color = ArmyColor(self.color)


@dataclass
class TurnState:
    """Bookkeeping for the player whose turn it is."""

    player_id: str
    reinforcements_remaining: int = 0
    conquered_territory_this_turn: bool = False  # Card eligibility

    def __post_init__(self):
        if self.reinforcements_remaining < 0:
            raise ValueError(
                f"Invalid reinforcements_remaining: {self.reinforcements_remaining} (must be >= 0)"
            )
