"""Game state container."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from ..utils import GameRNG
from .card import Card
from .player import Player, TurnState
from .territory import TerritoryState


class GamePhase(str, Enum):
    """Game phases. The values are a serialization contract."""

    SETUP = "SETUP"  # Waiting for players
    REINFORCE = "REINFORCE"  # Placing reinforcement armies
    ATTACK = "ATTACK"
    FORTIFY = "FORTIFY"  # End-of-turn army relocation
    GAME_OVER = "GAME_OVER"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class GameState:
    """Aggregate root for one game.

    The GameState holds players, territory ownership, the remaining deck,
    the current turn bookkeeping and the RNG used for dice and shuffles.
    Engine operations mutate it in place after validating the request in
    full, so a failed operation leaves it untouched.
    """

    game_id: str
    phase: GamePhase = GamePhase.SETUP
    players: List[Player] = field(default_factory=list)
    turn_order: List[str] = field(default_factory=list)  # Player IDs, fixed after start
    current_player_index: int = 0
    territories: List[TerritoryState] = field(default_factory=list)
    deck: List[Card] = field(default_factory=list)  # Remaining cards, top first
    current_turn: Optional[TurnState] = None
    winner: Optional[str] = None  # Player ID of winner
    created_at: datetime = field(default_factory=utc_now)
    last_modified: datetime = field(default_factory=utc_now)
    seed: Optional[int] = None  # RNG seed (None = system entropy)
    rng: Optional[GameRNG] = None

    def __post_init__(self):
        """Initialize RNG if not provided."""
        if self.rng is None:
            self.rng = GameRNG(self.seed)
        if not isinstance(self.phase, GamePhase):
            self.phase = GamePhase(self.phase)
        if self.turn_order and not (0 <= self.current_player_index < len(self.turn_order)):
            raise ValueError(
                f"Invalid current_player_index: {self.current_player_index} "
                f"(must be 0-{len(self.turn_order) - 1})"
            )
        if self.winner is not None and self.winner not in {p.id for p in self.players}:
            raise ValueError(f"Invalid winner: {self.winner} (not a player in this game)")

    @property
    def current_player_id(self) -> Optional[str]:
        if not (0 <= self.current_player_index < len(self.turn_order)):
            return None
        return self.turn_order[self.current_player_index]

    def current_player(self) -> Optional[Player]:
        """Player whose turn it is, or None if the turn order is empty."""
        player_id = self.current_player_id
        if player_id is None:
            return None
        return self.get_player(player_id)

    def get_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def get_territory_state(self, territory_id: str) -> Optional[TerritoryState]:
        return next((t for t in self.territories if t.territory_id == territory_id), None)

    def player_territories(self, player_id: str) -> List[TerritoryState]:
        """All territory states occupied by a player."""
        return [t for t in self.territories if t.occupied_by == player_id]

    def active_players(self) -> List[Player]:
        """Players that have not been eliminated."""
        return [p for p in self.players if not p.is_eliminated]

    def touch(self) -> None:
        """Record a modification."""
        self.last_modified = utc_now()
