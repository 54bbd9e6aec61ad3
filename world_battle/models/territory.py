"""Territory and continent data models."""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Territory:
    """A static map region.

    Territories never change during a game; runtime ownership and army
    counts live in TerritoryState.
    """

    id: str  # e.g. "alaska"
    name: str  # e.g. "Alaska"
    continent_id: str
    adjacent_territories: Tuple[str, ...]


@dataclass(frozen=True)
class Continent:
    """A group of territories that grants bonus armies when fully held."""

    id: str
    name: str
    bonus_armies: int
    territory_ids: Tuple[str, ...]


@dataclass
class TerritoryState:
    """Runtime ownership of a territory."""

    territory_id: str
    occupied_by: Optional[str]  # Player ID or None (unoccupied)
    armies: int

    def __post_init__(self):
        """Validate territory state after initialization."""
        if not self.territory_id:
            raise ValueError("territory_id cannot be empty")
        if self.armies < 0:
            raise ValueError(f"Invalid armies: {self.armies} (must be >= 0)")
