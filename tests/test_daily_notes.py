"""
Unit tests for the daily notes store
"""
import json
from datetime import date

import pytest
from postgrest.exceptions import APIError

from app.schemas.daily_note import DailyNoteCreate, StructuredNote
from app.services.daily_notes import DailyNotesStore


@pytest.fixture
def note_rows():
    return [
        {
            "id": 1,
            "student_name": "Emma Rodriguez",
            "program_name": "Brighter Future Academy",
            "author_name": "Dr. Sarah Johnson",
            "created_at": "2024-01-15T10:30:00+00:00",
            "notes": json.dumps({"category": "behavior", "generalNotes": "Helped a peer with their assignment."}),
            "tags": ["positive behavior"],
        },
        {
            "id": 2,
            "student_name": "Michael Chen",
            "program_name": "First Steps",
            "author_name": "Ms. Emily Smith",
            "created_at": "2024-01-16T14:15:00+00:00",
            "notes": "Completed fine motor exercises with minimal assistance.",
            "tags": [],
            "category": "academic",
        },
        {
            "id": 3,
            "student_name": "Emma Rodriguez",
            "program_name": "Brighter Future Academy",
            "author_name": "Ms. Lisa Brown",
            "created_at": "2024-01-17T09:20:00+00:00",
            "notes": None,
            "tags": None,
        },
    ]


@pytest.fixture
def store(client, db, note_rows):
    db.tables["daily_notes"] = note_rows
    return DailyNotesStore(client)


class TestRefresh:
    @pytest.mark.asyncio
    async def test_newest_first(self, store):
        notes = await store.refresh()
        assert [n.id for n in notes] == [3, 2, 1]
        assert store.error is None
        assert store.loading is False

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_list(self, store, db):
        await store.refresh()
        db.errors[("daily_notes", "select")] = APIError({"code": "500", "message": "boom"})

        await store.refresh()

        assert store.error == "boom"
        assert len(store.notes) == 3


class TestViews:
    @pytest.mark.asyncio
    async def test_structured_and_legacy_rows(self, store):
        await store.refresh()
        views = {v.id: v for v in store.views()}

        assert views[1].note.category == "behavior"
        assert views[1].preview == "Helped a peer with their assignment."
        assert views[2].note.category == "academic"
        assert views[2].note.general_notes == "Completed fine motor exercises with minimal assistance."
        assert views[3].note.general_notes == ""
        assert views[3].preview == "No notes recorded."


class TestMutations:
    """Test add/update/delete results"""

    @pytest.mark.asyncio
    async def test_add_encodes_payload(self, store, db):
        await store.refresh()
        payload = DailyNoteCreate(
            student_name="Isabella Garcia",
            program_name="Individual Therapy",
            author_name="Dr. Michael Wilson",
            note=StructuredNote(category="therapy", general_notes="Clear progress with /r/ sounds.", tags=["speech therapy"]),
        )

        result = await store.add(payload)

        assert result["success"] is True
        stored = db.tables["daily_notes"][-1]
        assert json.loads(stored["notes"])["generalNotes"] == "Clear progress with /r/ sounds."
        assert stored["tags"] == ["speech therapy"]
        assert store.notes[0].student_name == "Isabella Garcia"

    @pytest.mark.asyncio
    async def test_add_failure(self, store, db):
        db.errors[("daily_notes", "insert")] = APIError({"code": "23502", "message": "null value in column"})

        result = await store.add(DailyNoteCreate(student_name="A", program_name="B"))

        assert result == {"success": False, "error": "null value in column"}

    @pytest.mark.asyncio
    async def test_update_missing_note(self, store):
        result = await store.update(999, DailyNoteCreate(student_name="A", program_name="B"))
        assert result == {"success": False, "error": "Daily note not found"}

    @pytest.mark.asyncio
    async def test_update_replaces_cached_note(self, store):
        await store.refresh()

        result = await store.update(2, DailyNoteCreate(
            student_name="Michael Chen",
            program_name="First Steps",
            note=StructuredNote(category="academic", academic_progress="Traced letters accurately."),
        ))

        assert result["success"] is True
        assert store.get(2).notes == result["data"].notes

    @pytest.mark.asyncio
    async def test_delete_refreshes(self, store, db):
        await store.refresh()

        result = await store.delete(1)

        assert result == {"success": True}
        assert [n.id for n in store.notes] == [3, 2]

    @pytest.mark.asyncio
    async def test_failed_delete_still_refreshes(self, store, db):
        await store.refresh()
        db.tables["daily_notes"].pop()
        db.errors[("daily_notes", "delete")] = APIError({"code": "42501", "message": "permission denied"})

        result = await store.delete(1)

        assert result == {"success": False, "error": "permission denied"}
        assert [n.id for n in store.notes] == [2, 1]


class TestFilters:
    @pytest.mark.asyncio
    async def test_by_student_and_program(self, store):
        await store.refresh()
        assert [n.id for n in store.by_student("Emma Rodriguez")] == [3, 1]
        assert [n.id for n in store.by_program("First Steps")] == [2]

    @pytest.mark.asyncio
    async def test_filters_chain(self, store):
        await store.refresh()
        emma = store.by_student("Emma Rodriguez")
        assert [n.id for n in store.by_date_range(date(2024, 1, 15), date(2024, 1, 16), emma)] == [1]

    @pytest.mark.asyncio
    async def test_search(self, store):
        await store.refresh()
        assert [n.id for n in store.search("fine motor")] == [2]
        assert [n.id for n in store.search("lisa")] == [3]
