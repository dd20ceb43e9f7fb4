"""FastAPI routes for deck and spread reference data.

Endpoints:
- GET /deck
- GET /deck/cards/{name}
- GET /spreads
- GET /spreads/{spread_id}
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, HTTPException

from ..deck import DeckError, get_card, get_cards, get_spread, get_spreads

router = APIRouter(tags=["deck"])


@router.get("/deck")
def deck() -> Dict[str, Any]:
    cards = get_cards()
    return {
        "deck_id": "rws78",
        "card_count": len(cards),
        "cards": [c.model_dump() for c in cards],
    }


@router.get("/deck/cards/{name}")
def card(name: str) -> Dict[str, Any]:
    try:
        c = get_card(name)
    except DeckError:
        raise HTTPException(status_code=404, detail=f"Unknown card: {name}")
    return {"card": c.model_dump()}


@router.get("/spreads")
def spreads() -> Dict[str, Any]:
    return {"spreads": [s.model_dump() for s in get_spreads()]}


@router.get("/spreads/{spread_id}")
def spread(spread_id: str) -> Dict[str, Any]:
    try:
        s = get_spread(spread_id)
    except DeckError:
        raise HTTPException(status_code=404, detail=f"Unknown spread_id: {spread_id}")
    return {"spread": s.model_dump()}
