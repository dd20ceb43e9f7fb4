"""Rider-Waite-Smith deck (78 cards) and spread definitions.

- Loads deck JSON from tarot_journal/data/tarot_deck.json
- Loads spreads JSON from tarot_journal/data/spreads.json
- Provides: get_deck(), get_card(name), get_spreads(), get_spread(spread_id)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from tarot_journal.config import DATA_DIR
from tarot_journal.models import Card, DrawnCard, SpreadDefinition


DECK_PATH = DATA_DIR / "tarot_deck.json"
SPREADS_PATH = DATA_DIR / "spreads.json"

DECK_SIZE = 78
MAJOR_ARCANA_SIZE = 22


class DeckError(RuntimeError):
    pass


def _load_json(path: Path) -> Dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise DeckError(f"Data file not found at: {path}") from e

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise DeckError(f"Invalid JSON in {path}: {e}") from e


def _load_deck() -> List[Card]:
    data = _load_json(DECK_PATH)
    if "cards" not in data or not isinstance(data["cards"], list) or len(data["cards"]) != DECK_SIZE:
        raise DeckError(f"Deck data must contain exactly {DECK_SIZE} cards.")
    try:
        return [Card.model_validate(c) for c in data["cards"]]
    except ValidationError as e:
        raise DeckError(f"Invalid card in {DECK_PATH}: {e}") from e


def _load_spreads() -> List[SpreadDefinition]:
    data = _load_json(SPREADS_PATH)
    spreads = []
    for raw in data.get("spreads", []):
        try:
            spread = SpreadDefinition.model_validate(raw)
        except ValidationError as e:
            raise DeckError(f"Invalid spread {raw.get('id')!r}: {e}") from e
        if spread.layout.card_count != len(spread.positions):
            raise DeckError(
                f"Spread {spread.id} declares {spread.layout.card_count} cards "
                f"but has {len(spread.positions)} positions"
            )
        spreads.append(spread)
    return spreads


_DECK_CACHE: Optional[List[Card]] = None
_SPREADS_CACHE: Optional[List[SpreadDefinition]] = None


def get_deck() -> List[Card]:
    global _DECK_CACHE
    if _DECK_CACHE is None:
        _DECK_CACHE = _load_deck()
    return _DECK_CACHE


def get_cards() -> List[Card]:
    return list(get_deck())


def get_card(name: str) -> Card:
    for c in get_deck():
        if c.name == name:
            return c
    raise DeckError(f"Unknown card: {name}")


def get_spreads() -> List[SpreadDefinition]:
    global _SPREADS_CACHE
    if _SPREADS_CACHE is None:
        _SPREADS_CACHE = _load_spreads()
    return list(_SPREADS_CACHE)


def get_spread(spread_id: str) -> SpreadDefinition:
    for s in get_spreads():
        if s.id == spread_id:
            return s
    raise DeckError(f"Unknown spread id: {spread_id}")


def validate_deck() -> None:
    cards = get_deck()
    names = [c.name for c in cards]
    if len(names) != len(set(names)):
        raise DeckError("Duplicate card names detected.")

    majors = [c for c in cards if c.arcana == "major"]
    if len(majors) != MAJOR_ARCANA_SIZE:
        raise DeckError(f"Expected {MAJOR_ARCANA_SIZE} major arcana, found {len(majors)}")
    for c in cards:
        if c.arcana == "minor" and c.suit is None:
            raise DeckError(f"Minor arcana card {c.name} has no suit")
        if c.arcana == "major" and c.suit is not None:
            raise DeckError(f"Major arcana card {c.name} must not have a suit")


def drawn_card(card: Card, position_id: str, position_name: str = "", reversed_: bool = False) -> DrawnCard:
    """Place a deck card into a spread position."""
    return DrawnCard(
        **card.model_dump(),
        position=position_id,
        position_name=position_name,
        orientation="reversed" if reversed_ else "upright",
    )
