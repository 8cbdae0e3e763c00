import logging

from app.services.announcements import fetch_announcements
from app.services.permissions import KNOWN_PERMISSIONS
from app.services.programs import fetch_programs

logger = logging.getLogger(__name__)


async def _rows(client, table, order, desc=False):
    response = await client.table(table).select("*").order(order, desc=desc).execute()
    return response.data or []


async def _count(client, table):
    response = await client.table(table).select("id", count="exact").execute()
    return response.count or 0


async def dashboard_view(session):
    client = session.context.client
    announcements = await fetch_announcements(client, active_only=True)
    return {
        "students": await _count(client, "students"),
        "programs": await _count(client, "programs"),
        "waiting_list": await _count(client, "waiting_list"),
        "announcements": [a.model_dump() for a in announcements[:5]],
    }


async def students_view(session):
    return {"students": await _rows(session.context.client, "students", "name")}


async def attendance_view(session):
    return {"attendance": await _rows(session.context.client, "attendance", "date", desc=True)}


async def waiting_list_view(session):
    return {"waiting_list": await _rows(session.context.client, "waiting_list", "created_at", desc=True)}


async def forms_view(session):
    return {"forms": await _rows(session.context.client, "intake_forms", "created_at", desc=True)}


async def daily_notes_view(session):
    await session.daily_notes.refresh()
    return {
        "notes": [v.model_dump() for v in session.daily_notes.views()],
        "error": session.daily_notes.error,
    }


async def calendar_view(session):
    response = await session.context.client \
        .table("events") \
        .select("*") \
        .order("date") \
        .order("start_time") \
        .execute()
    return {"events": response.data or []}


async def announcements_view(session):
    announcements = await fetch_announcements(session.context.client)
    return {"announcements": [a.model_dump() for a in announcements]}


async def programs_view(session):
    return {
        "programs": [p.model_dump() for p in await fetch_programs(session.context.client)],
        "classes": [c.model_dump() for c in session.classes.items],
        "teachers": [t.model_dump() for t in session.teachers.items],
    }


async def settings_view(session):
    context = session.context
    return {
        "profile": context.profile.model_dump() if context.profile else None,
        "permissions": context.permissions,
        "available_permissions": KNOWN_PERMISSIONS,
    }


async def test_view(session):
    # Connectivity check against the users table
    try:
        await session.context.client.table("users").select("id").limit(1).execute()
    except Exception as e:
        logger.warning(f"Database test failed: {str(e)}")
        return {"status": "error", "message": str(e)}
    return {"status": "connected"}


VIEWS = {
    "dashboard": dashboard_view,
    "students": students_view,
    "attendance": attendance_view,
    "waitinglist": waiting_list_view,
    "forms": forms_view,
    "dailynotes": daily_notes_view,
    "calendar": calendar_view,
    "announcements": announcements_view,
    "programs": programs_view,
    "settings": settings_view,
    "test": test_view,
}
