"""Game engine components."""

from .battle import AttackResult, BattleRoll
from .cards import TradeInResult
from .errors import ErrorCategory, ErrorCode, GameRuleError
from .initializer import create_game
from .reinforcements import ReinforcementBreakdown, calculate_reinforcements
from .turn_machine import ReinforcementInfo, TurnStateMachine

__all__ = [
    "AttackResult",
    "BattleRoll",
    "ErrorCategory",
    "ErrorCode",
    "GameRuleError",
    "ReinforcementBreakdown",
    "ReinforcementInfo",
    "TradeInResult",
    "TurnStateMachine",
    "calculate_reinforcements",
    "create_game",
]
