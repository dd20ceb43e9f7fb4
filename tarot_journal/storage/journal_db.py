"""SQLite storage for journal entries, optionally linked to a saved reading."""

import json
import sqlite3
import uuid
from typing import Any, Dict, List, Optional, Tuple

from tarot_journal.models import JournalEntry
from tarot_journal.storage.database import connect, utc_now

SORT_FIELDS = ("created_at", "updated_at", "title")
UPDATABLE_FIELDS = ("title", "content", "mood", "reading_id", "tags")


def _row_to_entry(row: sqlite3.Row) -> JournalEntry:
    entry = dict(row)
    entry["tags"] = json.loads(entry["tags"] or "[]")
    return JournalEntry(**entry)


def _normalize_tags(tags: Optional[List[str]]) -> List[str]:
    seen: List[str] = []
    for tag in tags or []:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def _check_reading(conn: sqlite3.Connection, reading_id: Optional[str]) -> None:
    if reading_id is None:
        return
    row = conn.execute("SELECT 1 FROM readings WHERE id = ?", (reading_id,)).fetchone()
    if row is None:
        raise ValueError(f"Reading not found: {reading_id}")


def create_journal(
    user_id: str,
    title: str,
    content: str = "",
    mood: Optional[str] = None,
    reading_id: Optional[str] = None,
    tags: Optional[List[str]] = None,
) -> JournalEntry:
    now = utc_now()
    entry = JournalEntry(
        id=str(uuid.uuid4()),
        user_id=user_id,
        title=title,
        content=content,
        mood=mood,
        reading_id=reading_id,
        tags=_normalize_tags(tags),
        created_at=now,
        updated_at=now,
    )

    conn = connect()
    try:
        _check_reading(conn, reading_id)
        with conn:
            conn.execute("""
                INSERT INTO journals (id, user_id, title, content, mood, reading_id, tags, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                entry.id, entry.user_id, entry.title, entry.content, entry.mood,
                entry.reading_id, json.dumps(entry.tags), entry.created_at, entry.updated_at,
            ))
    finally:
        conn.close()

    return entry


def get_journal(journal_id: str) -> Optional[JournalEntry]:
    conn = connect()
    try:
        row = conn.execute("SELECT * FROM journals WHERE id = ?", (journal_id,)).fetchone()
    finally:
        conn.close()
    return _row_to_entry(row) if row else None


def update_journal(journal_id: str, **changes: Any) -> Optional[JournalEntry]:
    """Apply `changes` to an entry and bump updated_at. Returns None if it does not exist."""
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

    current = get_journal(journal_id)
    if current is None:
        return None

    if "tags" in changes:
        changes["tags"] = _normalize_tags(changes["tags"])
    updated = current.model_copy(update={**changes, "updated_at": utc_now()})
    # Re-validate the merged entry (mood literal, title type)
    updated = JournalEntry.model_validate(updated.model_dump())

    conn = connect()
    try:
        if "reading_id" in changes:
            _check_reading(conn, updated.reading_id)
        with conn:
            conn.execute("""
                UPDATE journals
                SET title = ?, content = ?, mood = ?, reading_id = ?, tags = ?, updated_at = ?
                WHERE id = ?
            """, (
                updated.title, updated.content, updated.mood, updated.reading_id,
                json.dumps(updated.tags), updated.updated_at, journal_id,
            ))
    finally:
        conn.close()

    return updated


def delete_journal(journal_id: str) -> bool:
    conn = connect()
    try:
        with conn:
            cursor = conn.execute("DELETE FROM journals WHERE id = ?", (journal_id,))
    finally:
        conn.close()
    return cursor.rowcount > 0


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _filter_clause(user_id: str, filters: Dict[str, Any]) -> Tuple[str, List[Any]]:
    clauses = ["user_id = ?"]
    params: List[Any] = [user_id]

    search = (filters.get("search") or "").strip()
    if search:
        pattern = "%" + _escape_like(search) + "%"
        clauses.append("(title LIKE ? ESCAPE '\\' OR content LIKE ? ESCAPE '\\')")
        params += [pattern, pattern]
    if filters.get("mood"):
        clauses.append("mood = ?")
        params.append(filters["mood"])
    if filters.get("reading_id"):
        clauses.append("reading_id = ?")
        params.append(filters["reading_id"])
    for tag in _normalize_tags(filters.get("tags")):
        clauses.append("EXISTS (SELECT 1 FROM json_each(journals.tags) WHERE json_each.value = ?)")
        params.append(tag)
    if filters.get("start_date"):
        clauses.append("substr(created_at, 1, 10) >= ?")
        params.append(filters["start_date"])
    if filters.get("end_date"):
        clauses.append("substr(created_at, 1, 10) <= ?")
        params.append(filters["end_date"])

    return " AND ".join(clauses), params


def list_journals(
    user_id: str,
    limit: int = 10,
    page: int = 0,
    filters: Optional[Dict[str, Any]] = None,
) -> Tuple[List[JournalEntry], int]:
    """One page of a user's journal entries matching `filters`, plus the matching total.

    Supported filters: search, mood, tags (all required), reading_id,
    start_date / end_date (YYYY-MM-DD, inclusive), sort_field, sort_direction.
    """
    if limit < 1 or page < 0:
        raise ValueError("limit must be >= 1 and page >= 0")
    filters = filters or {}

    sort_field = filters.get("sort_field") or "created_at"
    if sort_field not in SORT_FIELDS:
        raise ValueError(f"sort_field must be one of {', '.join(SORT_FIELDS)}")
    direction = "ASC" if (filters.get("sort_direction") or "desc").lower() == "asc" else "DESC"

    where, params = _filter_clause(user_id, filters)
    conn = connect()
    try:
        total = conn.execute(f"SELECT COUNT(*) FROM journals WHERE {where}", params).fetchone()[0]
        rows = conn.execute(
            f"SELECT * FROM journals WHERE {where} ORDER BY {sort_field} {direction}, rowid {direction} LIMIT ? OFFSET ?",
            params + [limit, page * limit],
        ).fetchall()
    finally:
        conn.close()

    return [_row_to_entry(r) for r in rows], total


def get_user_tags(user_id: str) -> List[str]:
    conn = connect()
    try:
        rows = conn.execute("""
            SELECT DISTINCT json_each.value FROM journals, json_each(journals.tags)
            WHERE journals.user_id = ?
            ORDER BY json_each.value
        """, (user_id,)).fetchall()
    finally:
        conn.close()
    return [r[0] for r in rows]
