"""Card deck management.

The deck is a plain list of cards with the top card first. Functions here
never mutate their input lists; they return new ones.
"""

from collections import Counter
from typing import Dict, List, Optional, Tuple

from ..models.card import Card, CardType
from ..utils import GameRNG
from .map_graph import TERRITORIES

# Card types are dealt in this cycle over the map order
CARD_TYPE_CYCLE = (CardType.INFANTRY, CardType.CAVALRY, CardType.ARTILLERY)


def create_deck(rng: GameRNG) -> List[Card]:
    """Create a shuffled deck with one card per territory.

    Card types cycle INFANTRY -> CAVALRY -> ARTILLERY over the territory
    index, giving 14 cards of each type.

    Args:
        rng: Random source for the shuffle

    Returns:
        Shuffled list of 42 cards
    """
    cards = [
        Card(
            id=f"card-{index + 1}",
            type=CARD_TYPE_CYCLE[index % len(CARD_TYPE_CYCLE)],
            territory_id=territory.id,
        )
        for index, territory in enumerate(TERRITORIES)
    ]
    return rng.shuffled(cards)


def draw_card(deck: List[Card]) -> Tuple[Optional[Card], List[Card]]:
    """Draw the top card.

    Args:
        deck: Current deck

    Returns:
        Tuple of (drawn card or None if the deck is empty, remaining deck)
    """
    if not deck:
        return None, []
    return deck[0], list(deck[1:])


def draw_cards(deck: List[Card], count: int) -> Tuple[List[Card], List[Card]]:
    """Draw up to `count` cards from the top of the deck.

    Stops early when the deck runs out.
    """
    drawn: List[Card] = []
    remaining = list(deck)
    for _ in range(count):
        card, remaining = draw_card(remaining)
        if card is None:
            break
        drawn.append(card)
    return drawn, remaining


def return_cards_to_deck(deck: List[Card], cards: List[Card], rng: GameRNG) -> List[Card]:
    """Put cards back into the deck and reshuffle it.

    Args:
        deck: Current deck
        cards: Cards to return
        rng: Random source for the reshuffle

    Returns:
        New shuffled deck containing both
    """
    return rng.shuffled(list(deck) + list(cards))


def card_type_counts(cards: List[Card]) -> Dict[CardType, int]:
    """Count cards of each type (every type present, possibly zero)."""
    counts = Counter(card.type for card in cards)
    return {card_type: counts.get(card_type, 0) for card_type in CardType}
