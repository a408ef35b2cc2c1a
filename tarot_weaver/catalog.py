"""KKRT deck + spread template catalogs.

- Loads the deck from tarot_weaver/data/kkrt_deck.json
- Loads spread categories from tarot_weaver/data/spreads.json
- Provides: get_cards(), get_card(card_id), get_categories(), get_category(category_id)

Both catalogs are read once on first use and never mutated afterwards.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from .models import Card, SpreadCategory


DATA_DIR = Path(__file__).resolve().parent / "data"
DECK_PATH = DATA_DIR / "kkrt_deck.json"
SPREADS_PATH = DATA_DIR / "spreads.json"


class CatalogError(RuntimeError):
    pass


def _load_json(path: Path) -> Dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise CatalogError(f"Catalog data file not found at: {path}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogError(f"Catalog data in {path} must be a JSON object, got {type(data).__name__}")
    return data


def _load_deck() -> Tuple[Card, ...]:
    data = _load_json(DECK_PATH)
    if not isinstance(data.get("cards"), list) or not data["cards"]:
        raise CatalogError("Deck data must contain a non-empty 'cards' list.")
    try:
        return tuple(Card.model_validate(c) for c in data["cards"])
    except ValidationError as e:
        raise CatalogError(f"Invalid card record in {DECK_PATH}: {e}") from e


def _load_categories() -> Tuple[SpreadCategory, ...]:
    data = _load_json(SPREADS_PATH)
    if not isinstance(data.get("categories"), list) or not data["categories"]:
        raise CatalogError("Spread data must contain a non-empty 'categories' list.")
    try:
        return tuple(SpreadCategory.model_validate(c) for c in data["categories"])
    except ValidationError as e:
        raise CatalogError(f"Invalid spread category in {SPREADS_PATH}: {e}") from e


_DECK_CACHE: Optional[Tuple[Card, ...]] = None
_CATEGORY_CACHE: Optional[Tuple[SpreadCategory, ...]] = None


def get_cards() -> Tuple[Card, ...]:
    global _DECK_CACHE
    if _DECK_CACHE is None:
        _DECK_CACHE = _load_deck()
    return _DECK_CACHE


def get_card(card_id: str) -> Card:
    for c in get_cards():
        if c.id == card_id:
            return c
    raise CatalogError(f"Unknown card id: {card_id}")


def get_categories() -> Tuple[SpreadCategory, ...]:
    global _CATEGORY_CACHE
    if _CATEGORY_CACHE is None:
        _CATEGORY_CACHE = _load_categories()
    return _CATEGORY_CACHE


def find_category(category_id: str) -> Optional[SpreadCategory]:
    for c in get_categories():
        if c.id == category_id:
            return c
    return None


def get_category(category_id: str) -> SpreadCategory:
    category = find_category(category_id)
    if category is None:
        raise CatalogError(f"Unknown spread category: {category_id}")
    return category


def validate_catalogs() -> None:
    cards = get_cards()
    ids = [c.id for c in cards]
    if len(ids) != len(set(ids)):
        raise CatalogError("Duplicate card ids detected.")

    categories = get_categories()
    cat_ids = [c.id for c in categories]
    if len(cat_ids) != len(set(cat_ids)):
        raise CatalogError("Duplicate spread category ids detected.")

    for c in categories:
        if c.size > len(cards):
            raise CatalogError(
                f"Spread {c.id} needs {c.size} cards but the deck only has {len(cards)}"
            )
