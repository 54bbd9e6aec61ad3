"""Card trade-ins.

Players trade sets of 3+ cards for reinforcement armies during their
REINFORCE phase. A set is valid when every card has the same type or
when it holds at least one card of each type. The payout depends only
on the size of the set (see armies_for_card_count); there is no
escalating global trade counter.
"""

from dataclasses import dataclass
from itertools import combinations
from typing import Dict, List, Optional, Sequence

from ..models.card import Card, CardType, armies_for_card_count, is_valid_card_set
from ..models.player import Player
from ..utils import MANDATORY_TRADE_HAND_SIZE, MAX_SUGGESTED_SET_SIZE, MIN_TRADE_SET_SIZE
from .errors import ErrorCode, GameRuleError


@dataclass
class TradeInResult:
    """Outcome of a successful trade-in.

    Attributes:
        armies_awarded: Reinforcement armies earned
        cards_traded: Cards removed from the hand, in request order
        remaining_cards: Hand after the trade
    """

    armies_awarded: int
    cards_traded: List[Card]
    remaining_cards: List[Card]


def must_trade_in(player: Player) -> bool:
    """A hand of 5+ cards must be traded before leaving REINFORCE."""
    return len(player.cards) >= MANDATORY_TRADE_HAND_SIZE


def can_trade_in(player: Player) -> bool:
    return len(player.cards) >= MIN_TRADE_SET_SIZE


def trade_in_cards(player: Player, card_ids: Sequence[str]) -> TradeInResult:
    """Validate and price a trade-in.

    The player is not modified; the caller installs `remaining_cards` as
    the new hand once the whole operation is known to succeed.

    Args:
        player: Player trading in cards
        card_ids: IDs of the cards to trade (3 or more)

    Returns:
        TradeInResult with the awarded armies and the remaining hand

    Raises:
        GameRuleError: INSUFFICIENT_CARDS, CARD_NOT_FOUND or INVALID_CARD_SET
    """
    if len(card_ids) < MIN_TRADE_SET_SIZE:
        raise GameRuleError(
            ErrorCode.INSUFFICIENT_CARDS,
            f"Must trade in at least {MIN_TRADE_SET_SIZE} cards, got {len(card_ids)}",
        )
    if len(set(card_ids)) != len(card_ids):
        raise GameRuleError(ErrorCode.INVALID_CARD_SET, "Each card can only be traded once")

    hand = {card.id: card for card in player.cards}
    cards_to_trade = []
    for card_id in card_ids:
        card = hand.get(card_id)
        if card is None:
            raise GameRuleError(
                ErrorCode.CARD_NOT_FOUND, f"Card {card_id} not found in player's hand"
            )
        cards_to_trade.append(card)

    if not is_valid_card_set(cards_to_trade):
        raise GameRuleError(
            ErrorCode.INVALID_CARD_SET,
            "Invalid card set: must be all same type or one of each type",
        )

    traded_ids = set(card_ids)
    return TradeInResult(
        armies_awarded=armies_for_card_count(len(cards_to_trade)),
        cards_traded=cards_to_trade,
        remaining_cards=[c for c in player.cards if c.id not in traded_ids],
    )


def possible_trade_sets(player: Player) -> List[List[str]]:
    """All valid sets of 3, 4 or 5 cards in the player's hand.

    Used for UI hints. Sets are listed by size, then in hand order.
    """
    valid_sets = []
    max_size = min(len(player.cards), MAX_SUGGESTED_SET_SIZE)
    for size in range(MIN_TRADE_SET_SIZE, max_size + 1):
        for combo in combinations(player.cards, size):
            if is_valid_card_set(combo):
                valid_sets.append([card.id for card in combo])
    return valid_sets


def recommended_trade_set(player: Player) -> Optional[List[str]]:
    """Smallest valid set, so the player keeps as many cards as possible."""
    sets = possible_trade_sets(player)
    if not sets:
        return None
    return min(sets, key=len)


def hand_breakdown(player: Player) -> Dict[str, int]:
    """Card counts for a hand: total plus one entry per type."""
    breakdown = {"total": len(player.cards)}
    for card_type in CardType:
        breakdown[card_type.value.lower()] = sum(1 for c in player.cards if c.type == card_type)
    return breakdown
