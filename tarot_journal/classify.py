"""Theme and tone classification for a reading."""

from typing import List, Sequence, Tuple

from tarot_journal.models import DrawnCard, Theme, Tone

# Checked in order; the first theme with a matching keyword wins.
THEME_KEYWORDS: List[Tuple[Theme, Tuple[str, ...]]] = [
    ("relationship", ("love", "relationship")),
    ("career", ("career", "job", "work")),
    ("health", ("health", "wellness")),
    ("spiritual", ("spiritual", "growth")),
]


def classify_theme(question: str) -> Theme:
    q = (question or "").lower()
    for theme, keywords in THEME_KEYWORDS:
        if any(k in q for k in keywords):
            return theme
    return "general"


def classify_tone(cards: Sequence[DrawnCard]) -> Tone:
    total = len(cards)
    reversed_count = sum(1 for c in cards if c.is_reversed)
    major_count = sum(1 for c in cards if c.is_major)

    if reversed_count > total / 2:
        tone: Tone = "challenging"
    elif reversed_count == 0:
        tone = "positive"
    else:
        tone = "balanced"

    if major_count > total / 2:
        tone = "transformative" if tone == "challenging" else "significant"
    return tone


def classify(question: str, cards: Sequence[DrawnCard]) -> Tuple[Theme, Tone]:
    return classify_theme(question), classify_tone(cards)
