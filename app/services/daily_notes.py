import logging
from datetime import date

from app.schemas.daily_note import DailyNote, DailyNoteCreate, DailyNoteView
from app.services.note_interpreter import encode, interpret, summarize
from app.utils.errors import error_message

logger = logging.getLogger(__name__)


def to_view(note: DailyNote) -> DailyNoteView:
    structured = interpret(note.notes, fallback_category=note.category)
    return DailyNoteView(
        **note.model_dump(),
        note=structured,
        preview=summarize(structured),
    )


def to_row(data: DailyNoteCreate) -> dict:
    return {
        "student_name": data.student_name,
        "program_name": data.program_name,
        "author_name": data.author_name,
        "notes": encode(data.note),
        "tags": data.note.tags,
    }


class DailyNotesStore:
    """
    Cached daily_notes list for one portal session.

    Mutations report {"success": bool, "error": str} instead of raising so
    the caller decides how to surface a failure.
    """

    def __init__(self, client):
        self.client = client
        self.notes = []
        self.loading = False
        self.error = None

    # -------- Fetch all daily notes --------
    async def refresh(self):
        try:
            self.loading = True
            response = await self.client \
                .table("daily_notes") \
                .select("*") \
                .order("created_at", desc=True) \
                .execute()
            self.notes = [DailyNote.model_validate(row) for row in response.data or []]
            self.error = None
        except Exception as e:
            logger.error(f"Failed to fetch daily notes: {error_message(e)}")
            self.error = error_message(e) or "Failed to fetch daily notes"
        finally:
            self.loading = False
        return self.notes

    # -------- Add daily note --------
    async def add(self, data: DailyNoteCreate):
        try:
            response = await self.client.table("daily_notes").insert(to_row(data)).execute()
            note = DailyNote.model_validate(response.data[0])
        except Exception as e:
            logger.error(f"Failed to add daily note: {error_message(e)}")
            self.error = error_message(e) or "Failed to add daily note"
            return {"success": False, "error": self.error}

        self.notes.insert(0, note)
        return {"success": True, "data": note}

    # -------- Update daily note --------
    async def update(self, note_id: int, data: DailyNoteCreate):
        try:
            response = await self.client.table("daily_notes").update(to_row(data)).eq("id", note_id).execute()
            if not response.data:
                return {"success": False, "error": "Daily note not found"}
            note = DailyNote.model_validate(response.data[0])
        except Exception as e:
            logger.error(f"Failed to update daily note {note_id}: {error_message(e)}")
            self.error = error_message(e) or "Failed to update daily note"
            return {"success": False, "error": self.error}

        self.notes = [note if n.id == note_id else n for n in self.notes]
        return {"success": True, "data": note}

    # -------- Delete daily note --------
    async def delete(self, note_id: int):
        try:
            await self.client.table("daily_notes").delete().eq("id", note_id).execute()
            result = {"success": True}
        except Exception as e:
            logger.error(f"Failed to delete daily note {note_id}: {error_message(e)}")
            self.error = error_message(e) or "Failed to delete daily note"
            result = {"success": False, "error": self.error}

        # The list is reloaded whether or not the delete went through
        await self.refresh()
        return result

    def get(self, note_id: int):
        return next((n for n in self.notes if n.id == note_id), None)

    def by_student(self, student_name: str, notes=None):
        return [n for n in self._pick(notes) if n.student_name == student_name]

    def by_program(self, program_name: str, notes=None):
        return [n for n in self._pick(notes) if n.program_name == program_name]

    def by_date_range(self, start: date, end: date, notes=None):
        return [
            n for n in self._pick(notes)
            if n.created_at is not None and start <= n.created_at.date() <= end
        ]

    def search(self, term: str, notes=None):
        term = term.lower()
        return [
            n for n in self._pick(notes)
            if term in n.student_name.lower()
            or term in (n.author_name or "").lower()
            or term in summarize(interpret(n.notes, n.category)).lower()
        ]

    def views(self, notes=None):
        return [to_view(n) for n in self._pick(notes)]

    def _pick(self, notes):
        return self.notes if notes is None else notes
