from fastapi import APIRouter, Depends, HTTPException
from typing import Optional
from datetime import date
from app.schemas.daily_note import DailyNoteCreate
from app.dependencies.auth import require_permission
from app.services.daily_notes import to_view
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def author_of(session):
    profile = session.context.profile
    if profile:
        return f"{profile.first_name} {profile.last_name}"
    identity = session.context.identity
    return identity.email if identity else None


# -------- Get all daily notes --------
@router.get("")
async def get_daily_notes(
    student: Optional[str] = None,
    program: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    q: Optional[str] = None,
    session=Depends(require_permission("notes")),
):
    store = session.daily_notes
    await store.refresh()
    if store.error:
        raise HTTPException(status_code=502, detail=store.error)

    notes = store.notes
    if student:
        notes = store.by_student(student, notes)
    if program:
        notes = store.by_program(program, notes)
    if start or end:
        notes = store.by_date_range(start or date.min, end or date.max, notes)
    if q:
        notes = store.search(q, notes)

    return store.views(notes)


# -------- Get single daily note --------
@router.get("/{note_id}")
async def get_daily_note(note_id: int, session=Depends(require_permission("notes"))):
    store = session.daily_notes
    note = store.get(note_id)
    if note is None:
        await store.refresh()
        note = store.get(note_id)
    if note is None:
        raise HTTPException(status_code=404, detail="Daily note not found")
    return to_view(note)


# -------- Create daily note --------
@router.post("")
async def create_daily_note(payload: DailyNoteCreate, session=Depends(require_permission("notes"))):
    if not payload.author_name:
        payload = payload.model_copy(update={"author_name": author_of(session)})

    result = await session.daily_notes.add(payload)
    if not result["success"]:
        raise HTTPException(status_code=502, detail=result["error"])
    return to_view(result["data"])


# -------- Edit daily note --------
@router.put("/{note_id}")
async def update_daily_note(note_id: int, payload: DailyNoteCreate, session=Depends(require_permission("notes"))):
    if not payload.author_name:
        payload = payload.model_copy(update={"author_name": author_of(session)})

    result = await session.daily_notes.update(note_id, payload)
    if not result["success"]:
        status = 404 if result["error"] == "Daily note not found" else 502
        raise HTTPException(status_code=status, detail=result["error"])
    return to_view(result["data"])


# -------- Delete daily note --------
@router.delete("/{note_id}")
async def delete_daily_note(note_id: int, session=Depends(require_permission("notes"))):
    result = await session.daily_notes.delete(note_id)
    if not result["success"]:
        # The cached list was already reloaded; the caller refetches to see it
        raise HTTPException(status_code=502, detail=f"Error deleting note: {result['error']}")

    return {
        "message": "Daily note deleted successfully",
        "notes": session.daily_notes.views(),
    }
