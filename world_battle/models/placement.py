"""Reinforcement placement model."""

from dataclasses import dataclass


@dataclass
class ArmyPlacement:
    """Armies a player wants to put on one territory during REINFORCE.

    Unlike the other models this one is not validated on construction:
    the turn state machine checks every placement of a batch against the
    game state and reports failures as rule violations.
    """

    territory_id: str
    armies: int
