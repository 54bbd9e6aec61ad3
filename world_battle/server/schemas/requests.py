"""Pydantic request schemas for player actions.

Field names match the JSON bodies clients send (camelCase, with `from` and
`to` for territory moves).
"""

from pydantic import BaseModel, ConfigDict, Field

from ...models.placement import ArmyPlacement


class PlayerActionRequest(BaseModel):
    """Action that only needs to know who is acting (end phase, end turn)."""

    playerId: str = Field(description="Acting player ID, e.g. 'player-1'")  # noqa: N815


class TradeCardsRequest(PlayerActionRequest):
    """Trade a set of cards for reinforcements."""

    cardIds: list[str] = Field(description="IDs of the cards to trade in")  # noqa: N815


class PlacementModel(BaseModel):
    """Armies to place on one territory."""

    territoryId: str  # noqa: N815
    armies: int

    def to_placement(self) -> ArmyPlacement:
        return ArmyPlacement(territory_id=self.territoryId, armies=self.armies)


class PlaceReinforcementsRequest(PlayerActionRequest):
    """Place a batch of reinforcement armies."""

    placements: list[PlacementModel] = Field(default_factory=list)


class AttackRequest(PlayerActionRequest):
    """Attack (single roll or auto) from one territory into an adjacent one."""

    model_config = ConfigDict(populate_by_name=True)

    from_territory: str = Field(alias="from", description="Attacking territory ID")
    to_territory: str = Field(alias="to", description="Defending territory ID")


class MoveArmiesRequest(AttackRequest):
    """Move extra armies into a just-conquered territory."""

    armies: int = Field(description="Armies to move (0 is allowed)")


class FortifyRequest(AttackRequest):
    """Move armies between connected owned territories."""

    armies: int = Field(description="Armies to move (at least 1)")
