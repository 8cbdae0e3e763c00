from fastapi import APIRouter, Depends, HTTPException
from app.schemas.program import ClassCreate, ClassUpdate
from app.dependencies.auth import require_permission
from app.services.programs import fetch_programs

router = APIRouter()

# -------- Programs --------
@router.get("")
async def get_programs(session=Depends(require_permission("programs"))):
    return await fetch_programs(session.context.client)

# -------- Classes (cached per session, see /refresh) --------
@router.get("/classes")
async def get_classes(session=Depends(require_permission("programs"))):
    if not session.classes.items:
        await session.classes.refresh()
    return session.classes.items

@router.get("/{program_id}/classes")
async def get_program_classes(program_id: int, session=Depends(require_permission("programs"))):
    if not session.classes.items:
        await session.classes.refresh()
    return session.classes.by_program(program_id)

# -------- Add, edit and delete classes --------
def class_result(result):
    if not result["success"]:
        status = 404 if result["error"] == "Class not found" else 502
        raise HTTPException(status_code=status, detail=result["error"])
    return result

@router.post("/classes")
async def create_class(payload: ClassCreate, session=Depends(require_permission("programs"))):
    return class_result(await session.classes.add(payload))["data"]

@router.put("/classes/{class_id}")
async def update_class(class_id: str, payload: ClassUpdate, session=Depends(require_permission("programs"))):
    return class_result(await session.classes.update(class_id, payload))["data"]

@router.delete("/classes/{class_id}")
async def delete_class(class_id: str, session=Depends(require_permission("programs"))):
    class_result(await session.classes.delete(class_id))
    return {"message": "Class deleted successfully", "classes": session.classes.items}

# -------- Teachers --------
@router.get("/teachers")
async def get_teachers(session=Depends(require_permission("programs"))):
    if not session.teachers.items:
        await session.teachers.refresh()
    return session.teachers.items

# -------- Reload class and teacher assignments --------
@router.post("/refresh")
async def refresh_assignments(session=Depends(require_permission("programs"))):
    await session.classes.refresh()
    await session.teachers.refresh()
    return {
        "classes": session.classes.items,
        "teachers": session.teachers.items,
        "errors": [e for e in (session.classes.error, session.teachers.error) if e],
    }
