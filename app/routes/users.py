from fastapi import APIRouter, HTTPException, Depends
from datetime import datetime, timezone
from app.schemas.user import UserCreate, UserUpdate, PermissionsUpdate
from app.dependencies.auth import require_permission
from app.services.permissions import KNOWN_PERMISSIONS
from app.services.users import fetch_users, save_user, to_profile, unknown_permissions
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def check_permissions(permissions):
    unknown = unknown_permissions(permissions)
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown permissions: {', '.join(unknown)}")


async def update_user_row(session, user_id: int, payload: dict):
    supabase = session.context.client
    payload["updated_at"] = datetime.now(timezone.utc).isoformat()

    response = await supabase.table("users").update(payload).eq("id", user_id).execute()
    if not response.data:
        raise HTTPException(status_code=404, detail="User not found")

    # Role or name changes show up in the class assignment pickers
    await session.teachers.refresh()
    return to_profile(response.data[0])


# -------- Get all users --------
@router.get("")
async def get_all_users(session=Depends(require_permission("user_management"))):
    return await fetch_users(session.context.client)

# -------- Permission catalogue --------
@router.get("/permissions")
async def get_permission_catalogue(session=Depends(require_permission("user_management"))):
    return [{"id": key, "name": name} for key, name in KNOWN_PERMISSIONS.items()]

# -------- Get single user --------
@router.get("/{user_id}")
async def get_user_by_id(user_id: int, session=Depends(require_permission("user_management"))):
    supabase = session.context.client
    response = await supabase.table("users").select("*").eq("id", user_id).execute()
    if not response.data:
        raise HTTPException(status_code=404, detail="User not found")
    return to_profile(response.data[0])

# -------- Create user --------
@router.post("")
async def create_user(user: UserCreate, session=Depends(require_permission("user_management"))):
    check_permissions(user.permissions)

    created = await save_user(session.context.client, user)
    logger.info(f"Saved user {created.email} with role {created.role}")

    await session.teachers.refresh()
    if created.class_id:
        await session.classes.refresh()
    return created

# -------- Edit user --------
@router.put("/{user_id}")
async def update_user(user_id: int, user: UserUpdate, session=Depends(require_permission("user_management"))):
    return await update_user_row(session, user_id, user.model_dump(exclude_unset=True))

# -------- Edit user permissions --------
@router.put("/{user_id}/permissions")
async def update_user_permissions(user_id: int, payload: PermissionsUpdate, session=Depends(require_permission("user_management"))):
    check_permissions(payload.permissions)
    return await update_user_row(session, user_id, {"permissions": payload.permissions})

# -------- Delete user --------
@router.delete("/{user_id}")
async def delete_user(user_id: int, session=Depends(require_permission("user_management"))):
    supabase = session.context.client

    existing_user = await supabase.table("users").select("id").eq("id", user_id).execute()
    if not existing_user.data:
        raise HTTPException(status_code=404, detail="User not found")

    await supabase.table("users").delete().eq("id", user_id).execute()
    await session.teachers.refresh()
    return {"message": "User deleted successfully"}
