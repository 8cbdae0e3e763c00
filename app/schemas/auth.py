from pydantic import BaseModel, Field
from typing import Optional, List

# --- Identity (auth.users, owned by Supabase) ---
class Identity(BaseModel):
    id: str
    email: Optional[str] = None

# --- Profiles (public.users, looked up by email) ---
class UserProfile(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    role: str
    department: Optional[str] = None
    status: str
    picture_url: Optional[str] = None
    permissions: List[str] = Field(default_factory=list)
    program_id: Optional[int] = None
    class_id: Optional[str] = None

    class Config:
        extra = "ignore"

class Credentials(BaseModel):
    email: str
    password: str
