from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Literal

Arcana = Literal["major", "minor"]


class Card(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    arcana: Arcana
    keywords: List[str] = Field(default_factory=list)
    upright: str
    reversed: str


class SpreadCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    description: str
    prompt: str
    positions: List[str] = Field(..., min_length=1)

    @property
    def size(self) -> int:
        return len(self.positions)


class SpreadCard(BaseModel):
    """One drawn card as it travels over the wire."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    position: str
    is_reversed: bool = Field(..., alias="isReversed")
    keywords: List[str] = Field(default_factory=list)
    upright: str
    reversed: str

    @property
    def orientation(self) -> str:
        return "reversed" if self.is_reversed else "upright"

    @property
    def meaning(self) -> str:
        return self.reversed if self.is_reversed else self.upright


class DrawnCard(BaseModel):
    model_config = ConfigDict(frozen=True)

    card: Card
    position: str
    is_reversed: bool = False

    def as_payload(self) -> SpreadCard:
        return SpreadCard(
            name=self.card.name,
            position=self.position,
            is_reversed=self.is_reversed,
            keywords=list(self.card.keywords),
            upright=self.card.upright,
            reversed=self.card.reversed,
        )


class ReadingRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category_id: str = Field(..., alias="categoryId")
    spread: List[SpreadCard] = Field(..., min_length=1)


class CardInsight(BaseModel):
    model_config = ConfigDict(frozen=True)

    card: str
    position: str
    insight: str


class Reading(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    headline: str
    overview: str
    card_insights: List[CardInsight] = Field(..., alias="cardInsights")
    integration: str
    affirmation: str


class DrawRequest(BaseModel):
    seed: Optional[str] = Field(None, max_length=200, description="Optional seed for a reproducible draw")


class DrawResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category_id: str = Field(..., alias="categoryId")
    seed: Optional[str] = None
    spread: List[SpreadCard]


class ErrorResponse(BaseModel):
    error: str
