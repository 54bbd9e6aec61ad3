"""Card data model and card-set rules."""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from ..utils.constants import MIN_TRADE_SET_SIZE


class CardType(str, Enum):
    """Card symbols (classic style)."""

    INFANTRY = "INFANTRY"
    CAVALRY = "CAVALRY"
    ARTILLERY = "ARTILLERY"


@dataclass
class Card:
    """A single tradeable card.

    Every card in the standard deck is tied to the territory it was
    created for, but the link is informational only.
    """

    id: str  # "card-1" .. "card-42"
    type: CardType
    territory_id: Optional[str] = None

    def __post_init__(self):
        """Validate card data after initialization."""
        if not self.id:
            raise ValueError("Card id cannot be empty")
        if not isinstance(self.type, CardType):
            self.type = CardType(self.type)


def armies_for_card_count(card_count: int) -> int:
    """Armies awarded for trading in a set of the given size.

    Formula: 2 + 2 * card_count (3 -> 8, 4 -> 10, 5 -> 12, ...).
    Sets smaller than the minimum are worth nothing.

    Args:
        card_count: Number of cards in the set

    Returns:
        Armies awarded
    """
    if card_count < MIN_TRADE_SET_SIZE:
        return 0
    return 2 + 2 * card_count


def is_valid_card_set(cards: Iterable[Card]) -> bool:
    """Check whether a group of cards can be traded in.

    Valid sets have at least 3 cards and are either all the same type
    or contain at least one card of each type.
    """
    cards = list(cards)
    if len(cards) < MIN_TRADE_SET_SIZE:
        return False

    counts = Counter(card.type for card in cards)
    all_same_type = len(counts) == 1
    one_of_each = all(counts[card_type] >= 1 for card_type in CardType)
    return all_same_type or one_of_each
