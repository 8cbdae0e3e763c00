from fastapi import APIRouter, Depends, HTTPException
from datetime import datetime, timezone
from app.schemas.announcement import Announcement, AnnouncementCreate
from app.dependencies.auth import portal_session, require_permission
from app.services.announcements import fetch_announcements

router = APIRouter()

# -------- Get announcements (most recent activity first) --------
@router.get("")
async def get_announcements(active_only: bool = False, session=Depends(portal_session)):
    return await fetch_announcements(session.context.client, active_only=active_only)

# -------- Create announcement --------
@router.post("")
async def create_announcement(announcement: AnnouncementCreate, session=Depends(require_permission("messages"))):
    supabase = session.context.client
    context = session.context

    payload = announcement.model_dump()
    payload["author_id"] = context.identity.id if context.identity else None
    payload["author_name"] = (
        f"{context.profile.first_name} {context.profile.last_name}" if context.profile else None
    )

    response = await supabase.table("announcements").insert(payload).execute()
    return Announcement.model_validate(response.data[0])

# -------- Edit announcement --------
@router.put("/{announcement_id}")
async def update_announcement(announcement_id: int, announcement: AnnouncementCreate, session=Depends(require_permission("messages"))):
    supabase = session.context.client

    existing = await supabase.table("announcements").select("edit_count").eq("id", announcement_id).execute()
    if not existing.data:
        raise HTTPException(status_code=404, detail="Announcement not found")

    payload = announcement.model_dump()
    payload["edited_at"] = datetime.now(timezone.utc).isoformat()
    payload["edit_count"] = (existing.data[0].get("edit_count") or 0) + 1

    response = await supabase.table("announcements").update(payload).eq("id", announcement_id).execute()
    return Announcement.model_validate(response.data[0])

# -------- Delete announcement --------
@router.delete("/{announcement_id}")
async def delete_announcement(announcement_id: int, session=Depends(require_permission("messages"))):
    supabase = session.context.client

    existing = await supabase.table("announcements").select("id").eq("id", announcement_id).execute()
    if not existing.data:
        raise HTTPException(status_code=404, detail="Announcement not found")

    await supabase.table("announcements").delete().eq("id", announcement_id).execute()
    return {"message": "Announcement deleted successfully"}
