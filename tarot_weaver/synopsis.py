from typing import Sequence, Union

from .models import DrawnCard, SpreadCard


def _card_line(index: int, card: SpreadCard) -> str:
    label = f"{index}. {card.position}: {card.name} ({card.orientation})"
    return f"{label}. Essence: {card.meaning}. Keywords: {', '.join(card.keywords)}"


def summarize(spread: Sequence[Union[DrawnCard, SpreadCard]]) -> str:
    """
    Render a spread as one line per card for the reading prompt.
    Only the meaning matching the card's orientation is included.
    """
    cards = [c.as_payload() if isinstance(c, DrawnCard) else c for c in spread]
    return "\n".join(_card_line(i, c) for i, c in enumerate(cards, start=1))
