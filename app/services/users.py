import logging

from app.schemas.auth import UserProfile
from app.schemas.user import UserCreate
from app.services.permissions import KNOWN_PERMISSIONS
from app.utils.errors import error_message

logger = logging.getLogger(__name__)


def to_profile(row) -> UserProfile:
    return UserProfile.model_validate({**row, "permissions": row.get("permissions") or []})


def unknown_permissions(permissions):
    return [p for p in permissions if p not in KNOWN_PERMISSIONS]


async def fetch_users(client):
    response = await client.table("users").select("*").order("first_name").execute()
    return [to_profile(row) for row in response.data or []]


async def save_user(client, data: UserCreate) -> UserProfile:
    """
    Create a staff account, or overwrite the one already holding its email.

    A teacher saved with both program_id and class_id is also set as that
    class's teacher. A failed assignment is logged and does not undo the save.

    Returns:
        The stored users row as a UserProfile
    """
    response = await client \
        .table("users") \
        .upsert(data.model_dump(), on_conflict="email") \
        .execute()
    user = to_profile(response.data[0])

    if user.role == "teacher" and user.program_id and user.class_id:
        try:
            await client \
                .table("classes") \
                .update({"teacher_id": user.id}) \
                .eq("id", user.class_id) \
                .eq("program_id", user.program_id) \
                .execute()
        except Exception as e:
            logger.error(f"Failed to assign {user.email} to class {user.class_id}: {error_message(e)}")

    return user
