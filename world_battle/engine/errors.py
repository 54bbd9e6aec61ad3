"""Rule violations raised by the engine and the host layer.

Every failure is terminal for the request that caused it: the caller fixes
the request and tries again. Nothing here is retried internally.
"""

from enum import Enum


class ErrorCategory(Enum):
    """Broad classification of a rule violation."""

    IDENTITY = "identity"  # Something referenced does not exist
    AUTHORIZATION = "authorization"  # Wrong actor
    STATE = "state"  # Wrong moment for the request
    RULE = "rule"  # Request breaks a game rule


class ErrorCode(Enum):
    """Specific reason a request was rejected."""

    GAME_NOT_FOUND = "game_not_found"
    GAME_EXISTS = "game_exists"
    PLAYER_NOT_FOUND = "player_not_found"
    TERRITORY_NOT_FOUND = "territory_not_found"
    CARD_NOT_FOUND = "card_not_found"

    NOT_YOUR_TURN = "not_your_turn"
    NOT_CREATOR = "not_creator"

    INVALID_PHASE = "invalid_phase"
    REINFORCEMENTS_REMAINING = "reinforcements_remaining"
    MUST_TRADE_CARDS = "must_trade_cards"
    GAME_ALREADY_STARTED = "game_already_started"
    GAME_FULL = "game_full"
    NO_ACTIVE_TURN = "no_active_turn"

    INVALID_PLAYER_COUNT = "invalid_player_count"
    DUPLICATE_NAME = "duplicate_name"
    INVALID_PLAYER_NAME = "invalid_player_name"
    INSUFFICIENT_CARDS = "insufficient_cards"
    INVALID_CARD_SET = "invalid_card_set"
    INSUFFICIENT_ARMIES = "insufficient_armies"
    NOT_ADJACENT = "not_adjacent"
    SELF_ATTACK = "self_attack"
    NOT_OWNER = "not_owner"
    MIXED_OWNERSHIP = "mixed_ownership"
    NOT_CONNECTED = "not_connected"
    INVALID_ARMY_COUNT = "invalid_army_count"
    NOT_ENOUGH_REINFORCEMENTS = "not_enough_reinforcements"
    INVALID_MOVE = "invalid_move"

    @property
    def category(self) -> ErrorCategory:
        return _CATEGORIES.get(self, ErrorCategory.RULE)


_CATEGORIES = {
    ErrorCode.GAME_NOT_FOUND: ErrorCategory.IDENTITY,
    ErrorCode.GAME_EXISTS: ErrorCategory.IDENTITY,
    ErrorCode.PLAYER_NOT_FOUND: ErrorCategory.IDENTITY,
    ErrorCode.TERRITORY_NOT_FOUND: ErrorCategory.IDENTITY,
    ErrorCode.CARD_NOT_FOUND: ErrorCategory.IDENTITY,
    ErrorCode.NOT_YOUR_TURN: ErrorCategory.AUTHORIZATION,
    ErrorCode.NOT_CREATOR: ErrorCategory.AUTHORIZATION,
    ErrorCode.INVALID_PHASE: ErrorCategory.STATE,
    ErrorCode.REINFORCEMENTS_REMAINING: ErrorCategory.STATE,
    ErrorCode.MUST_TRADE_CARDS: ErrorCategory.STATE,
    ErrorCode.GAME_ALREADY_STARTED: ErrorCategory.STATE,
    ErrorCode.GAME_FULL: ErrorCategory.STATE,
    ErrorCode.NO_ACTIVE_TURN: ErrorCategory.STATE,
}


class GameRuleError(Exception):
    """Raised when a request violates a game rule, with classification."""

    def __init__(self, code: ErrorCode, message: str):
        """Initialize rule error.

        Args:
            code: Specific reason for the rejection
            message: Human-readable error message
        """
        self.code = code
        self.message = message
        super().__init__(message)

    @property
    def category(self) -> ErrorCategory:
        return self.code.category

    def __repr__(self) -> str:
        return f"GameRuleError({self.code.name}, {self.message!r})"
