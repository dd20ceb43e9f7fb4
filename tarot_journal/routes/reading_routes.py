"""FastAPI routes for drawing, interpreting and saving readings."""

from __future__ import annotations

import logging
import secrets
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request

from ..deck import DeckError, get_cards, get_spread
from ..models import (
    DrawRequest,
    DrawResponse,
    Interpretation,
    InterpretRequest,
    ReadingListResponse,
    ReadingRecord,
    SaveReadingRequest,
    SpreadDefinition,
)
from ..service import InterpretationService
from ..storage.readings_db import delete_reading, get_reading, list_readings, save_reading
from ..utils.rng import draw_spread

log = logging.getLogger("tarot_journal.routes.reading")
router = APIRouter(tags=["reading"])


def get_interpreter(request: Request) -> InterpretationService:
    return request.app.state.interpreter


def _spread_or_400(spread_id: str) -> SpreadDefinition:
    try:
        return get_spread(spread_id)
    except DeckError:
        raise HTTPException(status_code=400, detail=f"Unknown spread_id: {spread_id}")


@router.post("/reading/draw", response_model=DrawResponse)
def draw(req: DrawRequest) -> DrawResponse:
    """Deal a card into every position of the spread."""
    spread = _spread_or_400(req.spread_id)
    seed = req.seed or secrets.token_urlsafe(16)
    cards = draw_spread(get_cards(), spread, seed=seed, allow_reversed=req.allow_reversed)
    return DrawResponse(spread_id=spread.id, seed=seed, cards=cards)


@router.post("/reading/interpret", response_model=Interpretation)
async def interpret(
    req: InterpretRequest,
    interpreter: InterpretationService = Depends(get_interpreter),
) -> Interpretation:
    spread = _spread_or_400(req.spread_id)
    result = await interpreter.interpret(req.question, spread, req.cards)
    if result.interpretation is None:
        raise HTTPException(status_code=502, detail=result.error)
    return result.interpretation


@router.post("/reading/session/reset")
def reset_session(interpreter: InterpretationService = Depends(get_interpreter)) -> Dict[str, Any]:
    interpreter.end_session()
    return {"ok": True}


@router.post("/reading", response_model=ReadingRecord, status_code=201)
def save(req: SaveReadingRequest) -> ReadingRecord:
    spread = _spread_or_400(req.spread_id)
    record = save_reading(
        user_id=req.user_id,
        question=req.question,
        spread_type=spread.id,
        reading_data=req.cards,
        interpretation=req.interpretation,
    )
    log.info("saved reading id=%s user=%s spread=%s", record.id, record.user_id, spread.id)
    return record


@router.get("/reading/{reading_id}", response_model=ReadingRecord)
def get_reading_by_id(reading_id: str) -> ReadingRecord:
    reading = get_reading(reading_id)
    if not reading:
        raise HTTPException(status_code=404, detail=f"Reading not found: {reading_id}")
    return reading


@router.delete("/reading/{reading_id}")
def delete_reading_by_id(reading_id: str) -> Dict[str, Any]:
    if not delete_reading(reading_id):
        raise HTTPException(status_code=404, detail=f"Reading not found: {reading_id}")
    return {"ok": True}


@router.get("/readings", response_model=ReadingListResponse)
def user_readings(user_id: str, limit: int = 10, page: int = 0) -> ReadingListResponse:
    try:
        readings, count = list_readings(user_id, limit=limit, page=page)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ReadingListResponse(readings=readings, count=count)
