from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime
# --- Students ---
class Student(BaseModel):
    id: Optional[int] = None
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    program_id: Optional[int] = None
    status: str = "active"
    enrollment_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class StudentCreate(BaseModel):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    program_id: Optional[int] = None
    status: str = "active"
    enrollment_date: Optional[date] = None
    notes: Optional[str] = None
