from app.schemas.announcement import Announcement


def last_activity(announcement: Announcement):
    return announcement.edited_at or announcement.created_at


def sort_by_activity(announcements):
    # Most recently created or edited first; undated rows last
    dated = [a for a in announcements if last_activity(a) is not None]
    undated = [a for a in announcements if last_activity(a) is None]
    return sorted(dated, key=last_activity, reverse=True) + undated


async def fetch_announcements(client, active_only=False):
    query = client.table("announcements").select("*")
    if active_only:
        query = query.eq("is_active", True)
    response = await query.order("created_at", desc=True).execute()
    return sort_by_activity([Announcement.model_validate(row) for row in response.data or []])
