from fastapi import APIRouter, HTTPException, Depends
from typing import Optional
from app.schemas.student import Student, StudentCreate
from app.dependencies.auth import require_permission

router = APIRouter()

# Get all students
@router.get("")
async def get_all_students(program_id: Optional[int] = None, session=Depends(require_permission("students"))):
    supabase = session.context.client

    query = supabase.table("students").select("*")
    if program_id is not None:
        query = query.eq("program_id", program_id)
    response = await query.order("name").execute()
    return [Student.model_validate(row) for row in response.data or []]

# Get single student by id
@router.get("/{student_id}")
async def get_student_by_id(student_id: int, session=Depends(require_permission("students"))):
    supabase = session.context.client
    response = await supabase.table("students").select("*").eq("id", student_id).execute()
    if not response.data:
        raise HTTPException(status_code=404, detail="Student not found")
    return Student.model_validate(response.data[0])

# Create student
@router.post("")
async def create_student(student: StudentCreate, session=Depends(require_permission("students"))):
    supabase = session.context.client

    response = await supabase.table("students").insert(student.model_dump(mode="json")).execute()
    return Student.model_validate(response.data[0])

# Edit student
@router.put("/{student_id}")
async def update_student(student_id: int, student: StudentCreate, session=Depends(require_permission("students"))):
    supabase = session.context.client

    response = await supabase.table("students").update(student.model_dump(mode="json")).eq("id", student_id).execute()
    if not response.data:
        raise HTTPException(status_code=404, detail="Student not found")
    return Student.model_validate(response.data[0])

# Delete student
@router.delete("/{student_id}")
async def delete_student(student_id: int, session=Depends(require_permission("students"))):
    supabase = session.context.client

    existing_student = await supabase.table("students").select("id").eq("id", student_id).execute()
    if not existing_student.data:
        raise HTTPException(status_code=404, detail="Student not found")

    await supabase.table("students").delete().eq("id", student_id).execute()
    return {"message": "Student deleted successfully"}
