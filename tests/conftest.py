"""Shared fixtures: a stub OpenAI client and catalog-backed spreads."""

import json
from types import SimpleNamespace

import pytest

from tarot_weaver.catalog import get_card, get_category
from tarot_weaver.models import DrawnCard


THREE_CARD_READING = {
    "headline": "H",
    "overview": "O",
    "cardInsights": [
        {"card": "The Fool", "position": "Past", "insight": "I1"},
        {"card": "The Tower", "position": "Present", "insight": "I2"},
        {"card": "The Sun", "position": "Future", "insight": "I3"},
    ],
    "integration": "Int",
    "affirmation": "Aff",
}


class StubCompletions:
    def __init__(self, content=None, error=None, choices=True):
        self.content = content
        self.error = error
        self.choices = choices
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if not self.choices:
            return SimpleNamespace(choices=[])
        message = SimpleNamespace(role="assistant", content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(index=0, message=message)])


class StubClient:
    """Quacks like AsyncOpenAI for chat.completions.create only."""

    def __init__(self, content=None, error=None, choices=True):
        self.completions = StubCompletions(content=content, error=error, choices=choices)
        self.chat = SimpleNamespace(completions=self.completions)

    @property
    def calls(self):
        return self.completions.calls


@pytest.fixture
def openai_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.delenv("TAROT_MODEL", raising=False)
    monkeypatch.delenv("TAROT_TEMPERATURE", raising=False)


@pytest.fixture
def no_openai_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


@pytest.fixture
def stub_client_factory():
    return StubClient


@pytest.fixture
def reading_json():
    return json.dumps(THREE_CARD_READING)


@pytest.fixture
def three_card_spread():
    """Fool upright, Tower reversed, Sun upright on past-present-future."""
    category = get_category("past-present-future")
    cards = [get_card("major-00-fool"), get_card("major-16-tower"), get_card("major-19-sun")]
    flags = [False, True, False]
    return tuple(
        DrawnCard(card=c, position=p, is_reversed=r)
        for c, p, r in zip(cards, category.positions, flags)
    )


@pytest.fixture
def three_card_request(three_card_spread):
    return {
        "categoryId": "past-present-future",
        "spread": [d.as_payload().model_dump(by_alias=True) for d in three_card_spread],
    }


@pytest.fixture
def expected_reading():
    return json.loads(json.dumps(THREE_CARD_READING))
