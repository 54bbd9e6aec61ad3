"""Pydantic response schemas for the host layer."""

from typing import Literal

from pydantic import BaseModel, Field

from ...engine.battle import AttackResult, BattleRoll
from ...engine.errors import GameRuleError
from ...engine.turn_machine import ReinforcementInfo as ReinforcementInfoData
from ...models.game import GameState


class GameInfo(BaseModel):
    """Lobby summary of one game."""

    gameId: str  # noqa: N815
    gameCode: str  # noqa: N815
    creatorName: str  # noqa: N815
    playerCount: int  # noqa: N815
    maxPlayers: int  # noqa: N815
    status: Literal["waiting", "in-progress", "finished"]
    phase: str
    currentPlayerName: str | None = None  # noqa: N815
    winner: str | None = None  # Winner's display name


class ContinentBonusModel(BaseModel):
    id: str
    name: str
    bonus: int


class ReinforcementInfo(BaseModel):
    """Reinforcement breakdown and card options for the current player."""

    territoryBonus: int  # noqa: N815
    continentBonus: int  # noqa: N815
    total: int
    reinforcementsRemaining: int  # noqa: N815
    controlledContinents: list[ContinentBonusModel] = Field(  # noqa: N815
        default_factory=list
    )
    canTradeCards: bool = False  # noqa: N815
    mustTradeCards: bool = False  # noqa: N815
    possibleCardSets: list[list[str]] = Field(default_factory=list)  # noqa: N815

    @classmethod
    def from_info(cls, info: ReinforcementInfoData) -> "ReinforcementInfo":
        return cls(
            territoryBonus=info.territory_bonus,
            continentBonus=info.continent_bonus,
            total=info.total,
            reinforcementsRemaining=info.reinforcements_remaining,
            controlledContinents=[
                ContinentBonusModel(id=c.id, name=c.name, bonus=c.bonus)
                for c in info.controlled_continents
            ],
            canTradeCards=info.can_trade_cards,
            mustTradeCards=info.must_trade_cards,
            possibleCardSets=info.possible_card_sets,
        )


class BattleRollModel(BaseModel):
    """One exchange of dice."""

    attackerDice: list[int]  # noqa: N815
    defenderDice: list[int]  # noqa: N815
    attackerLosses: int  # noqa: N815
    defenderLosses: int  # noqa: N815
    attackerArmiesRemaining: int  # noqa: N815
    defenderArmiesRemaining: int  # noqa: N815
    territoryConquered: bool  # noqa: N815

    @classmethod
    def from_roll(cls, roll: BattleRoll) -> "BattleRollModel":
        return cls(
            attackerDice=roll.attacker_dice,
            defenderDice=roll.defender_dice,
            attackerLosses=roll.attacker_losses,
            defenderLosses=roll.defender_losses,
            attackerArmiesRemaining=roll.attacker_armies_remaining,
            defenderArmiesRemaining=roll.defender_armies_remaining,
            territoryConquered=roll.territory_conquered,
        )


class AttackResponse(BaseModel):
    """Outcome of an attack or auto-attack."""

    fromTerritory: str  # noqa: N815
    toTerritory: str  # noqa: N815
    rolls: list[BattleRollModel]
    territoryConquered: bool  # noqa: N815
    attackerLosses: int  # noqa: N815
    defenderLosses: int  # noqa: N815
    eliminatedPlayers: list[str] = Field(default_factory=list)  # noqa: N815
    phase: str
    winner: str | None = None

    @classmethod
    def from_result(cls, result: AttackResult, game: GameState) -> "AttackResponse":
        return cls(
            fromTerritory=result.from_territory,
            toTerritory=result.to_territory,
            rolls=[BattleRollModel.from_roll(r) for r in result.rolls],
            territoryConquered=result.territory_conquered,
            attackerLosses=result.attacker_losses,
            defenderLosses=result.defender_losses,
            eliminatedPlayers=result.eliminated_players,
            phase=game.phase.value,
            winner=game.winner,
        )


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    category: str

    @classmethod
    def from_error(cls, exc: GameRuleError) -> "ErrorResponse":
        return cls(error=exc.message, code=exc.code.value, category=exc.category.value)
