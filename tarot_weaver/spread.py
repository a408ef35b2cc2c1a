"""Spread generator: deal cards from the deck into a category's positions."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .models import Card, DrawnCard, SpreadCard, SpreadCategory
from .utils.rng import RandomSource, fresh_random, partial_shuffle

REVERSAL_PROBABILITY = 0.5


def draw_spread(
    category: SpreadCategory,
    deck: Sequence[Card],
    rng: Optional[RandomSource] = None,
) -> Tuple[DrawnCard, ...]:
    """Draw one card per position of `category`, without replacement.

    The i-th card lands on the i-th position label. Orientation is an
    independent coin flip per card.
    """
    if len(deck) < category.size:
        raise ValueError(
            f"Spread {category.id} needs {category.size} cards but the deck only has {len(deck)}"
        )
    if rng is None:
        rng = fresh_random()

    picked = partial_shuffle(deck, category.size, rng)
    return tuple(
        DrawnCard(card=card, position=position, is_reversed=rng.random() < REVERSAL_PROBABILITY)
        for card, position in zip(picked, category.positions)
    )


def spread_payload(spread: Sequence[DrawnCard]) -> List[SpreadCard]:
    """Wire form of a drawn spread, as the reading endpoint expects it back."""
    return [d.as_payload() for d in spread]
