"""FastAPI routes for journal entries."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query

from ..models import (
    JournalCreateRequest,
    JournalEntry,
    JournalListResponse,
    JournalUpdateRequest,
    Mood,
)
from ..storage.journal_db import (
    create_journal,
    delete_journal,
    get_journal,
    get_user_tags,
    list_journals,
    update_journal,
)

router = APIRouter(tags=["journal"])


@router.post("/journal", response_model=JournalEntry, status_code=201)
def create(req: JournalCreateRequest) -> JournalEntry:
    try:
        return create_journal(**req.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/journal/{journal_id}", response_model=JournalEntry)
def get_one(journal_id: str) -> JournalEntry:
    entry = get_journal(journal_id)
    if not entry:
        raise HTTPException(status_code=404, detail=f"Journal entry not found: {journal_id}")
    return entry


@router.patch("/journal/{journal_id}", response_model=JournalEntry)
def update(journal_id: str, req: JournalUpdateRequest) -> JournalEntry:
    try:
        entry = update_journal(journal_id, **req.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not entry:
        raise HTTPException(status_code=404, detail=f"Journal entry not found: {journal_id}")
    return entry


@router.delete("/journal/{journal_id}")
def delete(journal_id: str) -> Dict[str, Any]:
    if not delete_journal(journal_id):
        raise HTTPException(status_code=404, detail=f"Journal entry not found: {journal_id}")
    return {"ok": True}


@router.get("/journals", response_model=JournalListResponse)
def list_for_user(
    user_id: str,
    limit: int = 10,
    page: int = 0,
    search: Optional[str] = None,
    mood: Optional[Mood] = None,
    tags: Optional[List[str]] = Query(None),
    reading_id: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    sort_field: str = "created_at",
    sort_direction: str = "desc",
) -> JournalListResponse:
    filters = {
        "search": search,
        "mood": mood,
        "tags": tags,
        "reading_id": reading_id,
        "start_date": start_date,
        "end_date": end_date,
        "sort_field": sort_field,
        "sort_direction": sort_direction,
    }
    try:
        journals, count = list_journals(user_id, limit=limit, page=page, filters=filters)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return JournalListResponse(journals=journals, count=count)


@router.get("/journal-tags")
def tags_for_user(user_id: str) -> Dict[str, Any]:
    return {"tags": get_user_tags(user_id)}
