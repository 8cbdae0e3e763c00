from pydantic import BaseModel, Field
from typing import Optional, List

# --- Staff accounts (public.users) ---
class UserCreate(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    role: str
    department: Optional[str] = None
    status: str = "active"
    picture_url: Optional[str] = None
    permissions: List[str] = Field(default_factory=list)
    # Teachers created with both are assigned to that class
    program_id: Optional[int] = None
    class_id: Optional[str] = None

class UserUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    department: Optional[str] = None
    status: Optional[str] = None
    picture_url: Optional[str] = None
    program_id: Optional[int] = None
    class_id: Optional[str] = None

class PermissionsUpdate(BaseModel):
    permissions: List[str]
