import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from tarot_weaver import catalog
from tarot_weaver.catalog import (
    CatalogError,
    find_category,
    get_card,
    get_cards,
    get_categories,
    get_category,
    validate_catalogs,
)

DATA_DIR = Path(__file__).resolve().parents[1] / "tarot_weaver" / "data"


def test_deck_json_has_majors_and_aces():
    data = json.loads((DATA_DIR / "kkrt_deck.json").read_text(encoding="utf-8"))
    arcana = [c["arcana"] for c in data["cards"]]
    assert arcana.count("major") == 22
    assert arcana.count("minor") == 4


def test_card_ids_unique():
    ids = [c.id for c in get_cards()]
    assert len(ids) == len(set(ids))


def test_every_card_has_both_meanings():
    for c in get_cards():
        assert c.upright and c.reversed, c.id
        assert c.upright != c.reversed, c.id
        assert c.keywords, c.id


def test_past_present_future_positions():
    category = get_category("past-present-future")
    assert category.positions == ["Past", "Present", "Future"]
    assert category.size == 3


def test_every_spread_fits_the_deck():
    validate_catalogs()
    deck_size = len(get_cards())
    assert all(c.size <= deck_size for c in get_categories())


def test_unknown_lookups():
    assert find_category("does-not-exist") is None
    with pytest.raises(CatalogError):
        get_category("does-not-exist")
    with pytest.raises(CatalogError):
        get_card("major-99-nobody")


def test_catalogs_are_cached_and_immutable():
    assert get_cards() is get_cards()
    assert get_categories() is get_categories()
    with pytest.raises(ValidationError):
        get_card("major-00-fool").name = "Someone Else"


def _card(i):
    return {
        "id": f"card-{i}",
        "name": f"Card {i}",
        "arcana": "major",
        "keywords": ["test"],
        "upright": "steady",
        "reversed": "shaken",
    }


def _category(cat_id, positions):
    return {
        "id": cat_id,
        "label": cat_id.title(),
        "description": "A test spread.",
        "prompt": "Read plainly.",
        "positions": positions,
    }


@pytest.fixture
def catalog_files(tmp_path, monkeypatch):
    """Point both catalogs at scratch files and drop anything already cached."""
    deck_path = tmp_path / "deck.json"
    spreads_path = tmp_path / "spreads.json"
    monkeypatch.setattr(catalog, "DECK_PATH", deck_path)
    monkeypatch.setattr(catalog, "SPREADS_PATH", spreads_path)
    monkeypatch.setattr(catalog, "_DECK_CACHE", None)
    monkeypatch.setattr(catalog, "_CATEGORY_CACHE", None)

    def write(deck=None, spreads=None):
        if deck is not None:
            deck_path.write_text(json.dumps(deck), encoding="utf-8")
        if spreads is not None:
            spreads_path.write_text(json.dumps(spreads), encoding="utf-8")

    return deck_path, spreads_path, write


class TestBrokenCatalogs:
    """Every broken data file surfaces as CatalogError, never a raw parse error."""

    def test_missing_deck_file(self, catalog_files):
        with pytest.raises(CatalogError, match="not found"):
            get_cards()

    def test_invalid_json(self, catalog_files):
        deck_path, _, _ = catalog_files
        deck_path.write_text("{\"cards\": [", encoding="utf-8")
        with pytest.raises(CatalogError, match="Invalid JSON"):
            get_cards()

    def test_top_level_list_is_rejected(self, catalog_files):
        _, _, write = catalog_files
        write(deck=[_card(1)], spreads=[_category("one", ["Only"])])
        with pytest.raises(CatalogError, match="JSON object"):
            get_cards()
        with pytest.raises(CatalogError, match="JSON object"):
            get_categories()

    def test_empty_card_list(self, catalog_files):
        _, _, write = catalog_files
        write(deck={"cards": []})
        with pytest.raises(CatalogError, match="non-empty"):
            get_cards()

    def test_invalid_card_record(self, catalog_files):
        _, _, write = catalog_files
        bad = _card(1)
        bad["arcana"] = "lesser"
        write(deck={"cards": [bad]})
        with pytest.raises(CatalogError, match="Invalid card record"):
            get_cards()

    def test_empty_positions(self, catalog_files):
        _, _, write = catalog_files
        write(spreads={"categories": [_category("blank", [])]})
        with pytest.raises(CatalogError, match="Invalid spread category"):
            get_categories()

    def test_duplicate_card_ids(self, catalog_files):
        _, _, write = catalog_files
        write(
            deck={"cards": [_card(1), _card(1), _card(2)]},
            spreads={"categories": [_category("one", ["Only"])]},
        )
        with pytest.raises(CatalogError, match="Duplicate card ids"):
            validate_catalogs()

    def test_duplicate_category_ids(self, catalog_files):
        _, _, write = catalog_files
        write(
            deck={"cards": [_card(1), _card(2)]},
            spreads={"categories": [_category("one", ["Only"]), _category("one", ["Again"])]},
        )
        with pytest.raises(CatalogError, match="Duplicate spread category ids"):
            validate_catalogs()

    def test_deck_smaller_than_spread(self, catalog_files):
        _, _, write = catalog_files
        write(
            deck={"cards": [_card(1), _card(2)]},
            spreads={"categories": [_category("trio", ["Past", "Present", "Future"])]},
        )
        with pytest.raises(CatalogError, match="needs 3 cards but the deck only has 2"):
            validate_catalogs()

    def test_consistent_scratch_catalog_passes(self, catalog_files):
        _, _, write = catalog_files
        write(
            deck={"cards": [_card(i) for i in range(3)]},
            spreads={"categories": [_category("trio", ["Past", "Present", "Future"])]},
        )
        validate_catalogs()
        assert get_category("trio").size == 3
