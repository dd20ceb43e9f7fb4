from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Literal

Arcana = Literal["major", "minor"]
Suit = Literal["cups", "pentacles", "swords", "wands"]
Orientation = Literal["upright", "reversed"]
Theme = Literal["relationship", "career", "health", "spiritual", "general"]
Tone = Literal["positive", "challenging", "balanced", "significant", "transformative"]
Mood = Literal[
    "Happy", "Calm", "Anxious", "Reflective",
    "Inspired", "Melancholic", "Confused", "Grateful",
]


class CardMeanings(BaseModel):
    model_config = ConfigDict(frozen=True)

    upright: str
    reversed: str


class Card(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    number: int = 0
    arcana: Arcana
    suit: Optional[Suit] = None
    keywords: List[str] = Field(default_factory=list)
    meanings: CardMeanings
    description: str = ""


class DrawnCard(Card):
    position: str
    position_name: str = ""
    orientation: Orientation = "upright"

    @property
    def is_reversed(self) -> bool:
        return self.orientation == "reversed"

    @property
    def is_major(self) -> bool:
        return self.arcana == "major"


class SpreadPosition(BaseModel):
    id: str
    name: str
    meaning: str = ""


class SpreadLayout(BaseModel):
    type: str
    card_count: int = Field(..., ge=1)


class SpreadDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    positions: List[SpreadPosition]
    layout: SpreadLayout


class CardInterpretation(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    position: str
    interpretation: str


class Interpretation(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: str
    summary: str
    introduction: str
    cards: List[CardInterpretation]
    card_interactions: str
    guidance: str
    reflection_questions: List[str]


class InterpretResult(BaseModel):
    interpretation: Optional[Interpretation] = None
    error: Optional[str] = None


class ReadingRecord(BaseModel):
    id: str
    user_id: str
    question: str
    spread_type: str
    reading_data: List[DrawnCard]
    interpretation: Optional[Interpretation] = None
    created_at: str


class JournalEntry(BaseModel):
    id: str
    user_id: str
    title: str
    content: str = ""
    mood: Optional[Mood] = None
    reading_id: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    created_at: str
    updated_at: str


# --- HTTP payloads ---

class DrawRequest(BaseModel):
    spread_id: str
    seed: Optional[str] = Field(None, description="Optional seed for deterministic shuffling")
    allow_reversed: bool = Field(True, description="Whether cards can be drawn reversed")


class DrawResponse(BaseModel):
    spread_id: str
    seed: str
    cards: List[DrawnCard]


class InterpretRequest(BaseModel):
    question: str = Field(..., min_length=1, max_length=2000)
    spread_id: str
    cards: List[DrawnCard] = Field(..., min_length=1)


class SaveReadingRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    question: str
    spread_id: str
    cards: List[DrawnCard]
    interpretation: Optional[Interpretation] = None


class ReadingListResponse(BaseModel):
    readings: List[ReadingRecord]
    count: int


class JournalCreateRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=200)
    content: str = ""
    mood: Optional[Mood] = None
    reading_id: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class JournalUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = None
    mood: Optional[Mood] = None
    reading_id: Optional[str] = None
    tags: Optional[List[str]] = None


class JournalListResponse(BaseModel):
    journals: List[JournalEntry]
    count: int
