"""SQLite storage for completed readings and their interpretations."""

import json
import sqlite3
import uuid
from typing import List, Optional, Sequence, Tuple

from tarot_journal.models import DrawnCard, Interpretation, ReadingRecord
from tarot_journal.storage.database import connect, utc_now


def _row_to_record(row: sqlite3.Row) -> ReadingRecord:
    interpretation = row["interpretation"]
    return ReadingRecord(
        id=row["id"],
        user_id=row["user_id"],
        question=row["question"],
        spread_type=row["spread_type"],
        reading_data=json.loads(row["reading_data"]),
        interpretation=Interpretation.model_validate_json(interpretation) if interpretation else None,
        created_at=row["created_at"],
    )


def save_reading(
    user_id: str,
    question: str,
    spread_type: str,
    reading_data: Sequence[DrawnCard],
    interpretation: Optional[Interpretation] = None,
) -> ReadingRecord:
    """Persist a reading; the interpretation is stored verbatim as JSON."""
    if not user_id:
        raise ValueError("user_id is required")

    record = ReadingRecord(
        id=str(uuid.uuid4()),
        user_id=user_id,
        question=question,
        spread_type=spread_type,
        reading_data=list(reading_data),
        interpretation=interpretation,
        created_at=utc_now(),
    )

    conn = connect()
    try:
        with conn:
            conn.execute("""
                INSERT INTO readings (id, user_id, question, spread_type, reading_data, interpretation, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, (
                record.id,
                record.user_id,
                record.question,
                record.spread_type,
                json.dumps([c.model_dump() for c in record.reading_data]),
                interpretation.model_dump_json() if interpretation else None,
                record.created_at,
            ))
    finally:
        conn.close()

    return record


def get_reading(reading_id: str) -> Optional[ReadingRecord]:
    """Retrieve a reading by ID."""
    conn = connect()
    try:
        row = conn.execute("SELECT * FROM readings WHERE id = ?", (reading_id,)).fetchone()
    finally:
        conn.close()
    return _row_to_record(row) if row else None


def list_readings(user_id: str, limit: int = 10, page: int = 0) -> Tuple[List[ReadingRecord], int]:
    """One page of a user's readings, newest first, plus the user's total count."""
    if limit < 1 or page < 0:
        raise ValueError("limit must be >= 1 and page >= 0")

    conn = connect()
    try:
        total = conn.execute("SELECT COUNT(*) FROM readings WHERE user_id = ?", (user_id,)).fetchone()[0]
        rows = conn.execute("""
            SELECT * FROM readings WHERE user_id = ?
            ORDER BY created_at DESC, rowid DESC LIMIT ? OFFSET ?
        """, (user_id, limit, page * limit)).fetchall()
    finally:
        conn.close()

    return [_row_to_record(r) for r in rows], total


def delete_reading(reading_id: str) -> bool:
    """Delete a reading; linked journal entries keep their text but lose the link."""
    conn = connect()
    try:
        with conn:
            cursor = conn.execute("DELETE FROM readings WHERE id = ?", (reading_id,))
    finally:
        conn.close()
    return cursor.rowcount > 0
