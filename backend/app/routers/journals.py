# journals router — write, list, edit and delete journal entries
# every entry belongs to the authenticated user; sentiment is classified on save

import hashlib
import logging
import re
from datetime import tzinfo
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.dependencies import get_clock, get_current_user, get_timezone
from app.models.journal import (
    JournalCreate,
    JournalEntryResponse,
    JournalMood,
    JournalStats,
    JournalUpdate,
)
from app.services.db import Database, get_db
from app.services.emotion_classifier import classify_text
from app.services.journal_stats import journal_stats
from app.services.mood_engine import Clock

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/journals", tags=["journals"])


def _doc_to_entry(doc: dict) -> JournalEntryResponse:
    """convert a mongodb journal document to the response model"""
    text = doc.get("text", "")
    return JournalEntryResponse(
        id=doc.get("journal_id", str(doc.get("_id", ""))),
        text=text,
        mood=doc.get("mood") or "okay",
        sentiment=doc.get("sentiment") or classify_text(text),
        pinned=bool(doc.get("pinned", False)),
        createdAt=doc.get("created_at", 0),
        updatedAt=doc.get("updated_at", doc.get("created_at", 0)),
        wordCount=doc.get("word_count", len(text.split())),
    )


async def _find_own(journal_id: str, user_id: str, db: Database) -> dict:
    journal = await db.journals.find_one({"journal_id": journal_id, "user_id": user_id})
    if not journal:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Journal entry not found",
        )
    return journal


@router.post("", response_model=JournalEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_journal(
    body: JournalCreate,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """save a new entry. without a mood tag the text's sentiment is used."""
    now = clock()
    sentiment = classify_text(body.text)

    # journal_id is an md5 of user + text + timestamp
    raw = f"{current_user['id']}:{body.text}:{now}"
    journal_id = hashlib.md5(raw.encode()).hexdigest()[:12]

    doc = {
        "journal_id": journal_id,
        "user_id": current_user["id"],
        "text": body.text,
        "mood": body.mood or sentiment,
        "sentiment": sentiment,
        "pinned": False,
        "word_count": len(body.text.split()),
        "created_at": now,
        "updated_at": now,
    }
    await db.journals.insert_one(doc)

    logger.info(f"Journal saved: {journal_id} by user {current_user['id']}")
    return _doc_to_entry(doc)


@router.get("", response_model=list[JournalEntryResponse])
async def list_journals(
    mood: Optional[JournalMood] = Query(None, description="match the mood tag or the sentiment"),
    q: Optional[str] = Query(None, max_length=200, description="case-insensitive text search"),
    limit: int = Query(50, ge=1, le=200),
    skip: int = Query(0, ge=0),
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """the user's entries, pinned first, then newest first"""
    query: dict = {"user_id": current_user["id"]}
    if mood:
        query["$or"] = [{"mood": mood}, {"sentiment": mood}]
    if q and q.strip():
        query["text"] = {"$regex": re.escape(q.strip()), "$options": "i"}

    cursor = db.journals.find(query).sort([("pinned", -1), ("created_at", -1)]).skip(skip).limit(limit)
    return [_doc_to_entry(doc) async for doc in cursor]


@router.get("/stats", response_model=JournalStats)
async def get_journal_stats(
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
    clock: Clock = Depends(get_clock),
    tz: tzinfo = Depends(get_timezone),
):
    """entry totals and the night streak (consecutive days up to today)"""
    cursor = db.journals.find(
        {"user_id": current_user["id"]},
        {"created_at": 1, "sentiment": 1, "pinned": 1},
    )
    entries = [doc async for doc in cursor]
    return journal_stats(entries, now_ms=clock(), tz=tz)


@router.patch("/{journal_id}", response_model=JournalEntryResponse)
async def edit_journal(
    journal_id: str,
    body: JournalUpdate,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """edit text, mood or pin state. new text is re-classified."""
    await _find_own(journal_id, current_user["id"], db)

    update_fields: dict = {"updated_at": clock()}
    if body.text is not None:
        update_fields["text"] = body.text
        update_fields["sentiment"] = classify_text(body.text)
        update_fields["word_count"] = len(body.text.split())
    if body.mood is not None:
        update_fields["mood"] = body.mood
    if body.pinned is not None:
        update_fields["pinned"] = body.pinned

    await db.journals.update_one(
        {"journal_id": journal_id, "user_id": current_user["id"]},
        {"$set": update_fields},
    )

    updated = await db.journals.find_one({"journal_id": journal_id, "user_id": current_user["id"]})
    logger.info(f"Journal edited: {journal_id} by user {current_user['id']}")
    return _doc_to_entry(updated)


@router.delete("/{journal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_journal(
    journal_id: str,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """delete one of the user's entries"""
    await _find_own(journal_id, current_user["id"], db)
    await db.journals.delete_one({"journal_id": journal_id, "user_id": current_user["id"]})
    logger.info(f"Journal deleted: {journal_id} by user {current_user['id']}")
