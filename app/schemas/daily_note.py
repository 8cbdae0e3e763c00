from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime

# --- Structured note payload (stored as JSON text in daily_notes.notes) ---
class StructuredNote(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    category: str = "other"
    overall_mood: str = "neutral"
    general_notes: str = ""
    behavior_notes: str = ""
    academic_progress: str = ""
    social_interaction: str = ""
    activities_participated: str = ""
    achievements_successes: str = ""
    concerns_challenges: str = ""
    priority: str = "medium"
    parent_contacted: bool = False
    parent_contact_notes: str = ""
    follow_up_needed: bool = False
    follow_up_assignee: str = ""
    tags: List[str] = Field(default_factory=list)

# --- Daily notes (daily_notes rows) ---
class DailyNote(BaseModel):
    id: int
    student_name: str
    program_name: str
    author_name: Optional[str] = None
    created_at: Optional[datetime] = None
    notes: Optional[str] = ""
    tags: Optional[List[str]] = Field(default_factory=list)
    # Older rows carry the category outside the payload
    category: Optional[str] = None

    class Config:
        extra = "ignore"

class DailyNoteCreate(BaseModel):
    student_name: str
    program_name: str
    author_name: Optional[str] = None
    note: StructuredNote = Field(default_factory=StructuredNote)

class DailyNoteView(DailyNote):
    note: StructuredNote
    preview: str
