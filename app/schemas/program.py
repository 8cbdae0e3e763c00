from pydantic import BaseModel, ConfigDict
from typing import Optional

# --- Programs ---
class Program(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    max_capacity: int = 0
    status: str = "active"

# --- Classes (assigned to a program and a teacher) ---
class ClassGroup(BaseModel):
    # Class ids come back as uuid strings or plain numbers depending on the table
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    name: str
    program_id: int
    teacher_id: Optional[int] = None
    description: Optional[str] = None
    max_students: int = 0
    status: str = "active"

class ClassCreate(BaseModel):
    name: str
    program_id: int
    teacher_id: Optional[int] = None
    description: Optional[str] = None
    max_students: int = 0
    status: str = "active"

class ClassUpdate(BaseModel):
    name: Optional[str] = None
    program_id: Optional[int] = None
    teacher_id: Optional[int] = None
    description: Optional[str] = None
    max_students: Optional[int] = None
    status: Optional[str] = None

# --- Teachers (users with role "teacher") ---
class Teacher(BaseModel):
    id: int
    first_name: str
    last_name: str
