from pydantic import BaseModel
from typing import Literal, Optional
from datetime import datetime

# --- Announcements ---
class Announcement(BaseModel):
    id: int
    title: str
    content: str
    priority: Literal["low", "medium", "high"] = "medium"
    target_audience: Literal["all", "students", "parents", "staff"] = "all"
    author_id: Optional[str] = None
    author_name: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    edited_at: Optional[datetime] = None
    edit_count: int = 0

class AnnouncementCreate(BaseModel):
    title: str
    content: str
    priority: Literal["low", "medium", "high"] = "medium"
    target_audience: Literal["all", "students", "parents", "staff"] = "all"
    is_active: bool = True
